import pytest

from ats.models import ActivityLog, Application, ScoringEvent
from ats.jobs.score import enqueue_application_scoring, score_application
from ats.errors import AppendOnlyViolation
from ats.services.scoring import job_scoring_config, score_and_persist_application, tenant_scoring_config
from ats.services.tenant_settings import load_scoring_settings, update_scoring_settings
from ats.tenancy.store import TenantScopedStore


def test_score_and_persist_records_event(seed, db):
    store = TenantScopedStore(db.session, seed.globex.id)
    result = score_and_persist_application(store, seed.globex, seed.globex_app.id, actor_id=seed.bob.id)

    # cv + cover letter + linkedin + location + 5 skills, no mode nudge
    assert result.score == 100
    assert result.tier == "A"

    row = db.session.get(Application, seed.globex_app.id)
    assert row.match_score == 100
    assert row.match_reason == result.reason

    events = ScoringEvent.query.all()
    assert len(events) == 1
    ev = events[0]
    assert ev.tenant_id == seed.globex.id
    assert ev.application_id == seed.globex_app.id
    assert ev.engine == "heuristic-v1"
    assert ev.mode == "balanced"
    assert ev.config_snapshot["plan"] == "free"
    assert ev.config_snapshot["nlp"]["enabled"] is False
    assert ev.input_summary["skills"]["matchedSkillNames"] == ["Python", "SQL"]
    assert ev.interview_focus == ["Walk through concrete examples covering the required skills."]

    log = ActivityLog.query.one()
    assert (log.tenant_id, log.action, log.actor_id) == (seed.globex.id, "application.scored", seed.bob.id)


def test_tenant_hiring_mode_feeds_the_evaluator(seed, db):
    seed.acme_job.required_skills = []
    seed.acme_app.linkedin_url = None
    db.session.commit()
    store = TenantScopedStore(db.session, seed.acme.id)
    result = score_and_persist_application(store, seed.acme, seed.acme_app.id)
    # 50 + 15 + 10 + 10 = 85 under volume -> 45 + 40 * 1.05 = 87
    assert result.score == 87
    assert ScoringEvent.query.one().mode == "volume"


def test_job_hint_wins_over_tenant_mode(seed, db):
    seed.acme_job.hiring_mode = "executive"
    db.session.commit()
    store = TenantScopedStore(db.session, seed.acme.id)
    result = score_and_persist_application(store, seed.acme, seed.acme_app.id)
    # 105 -> 40 + 65 * 0.85 = 95.25
    assert result.score == 95


def test_other_tenants_application_is_not_scored(seed, db):
    store = TenantScopedStore(db.session, seed.acme.id)
    assert score_and_persist_application(store, seed.acme, seed.globex_app.id) is None
    assert ScoringEvent.query.count() == 0
    assert db.session.get(Application, seed.globex_app.id).match_score is None


def test_scoring_events_are_appended(seed, db):
    store = TenantScopedStore(db.session, seed.globex.id)
    score_and_persist_application(store, seed.globex, seed.globex_app.id)
    score_and_persist_application(store, seed.globex, seed.globex_app.id)
    assert ScoringEvent.query.filter_by(application_id=seed.globex_app.id).count() == 2


def test_background_entrypoint_runs_inline_without_redis(app, seed, db):
    app.config['SCORING_ASYNC'] = True
    out = enqueue_application_scoring(seed.globex.id, seed.globex_app.id)
    assert out["score"] == 100
    assert out["interviewFocus"]
    assert score_application("no-such-tenant", seed.globex_app.id) is None


def test_scoring_settings_roundtrip(seed, db):
    view = load_scoring_settings(seed.acme)
    assert view["plan"] == "pro"
    assert view["hiringMode"] == "volume"

    view = update_scoring_settings(seed.acme, hiring_mode="hybrid",
                                   overrides={"weights": {"education": "n/a"}, "nlp": {"enableNlp": True}})
    assert view["hiringMode"] == "hybrid"
    assert view["config"]["weights"]["education"] == 10
    assert view["config"]["nlp"]["enabled"] is True
    assert tenant_scoring_config(seed.acme).mode == "hybrid"

    # malformed JSON on the tenant row degrades to defaults
    seed.globex.scoring_config = ["not", "an", "object"]
    db.session.commit()
    assert load_scoring_settings(seed.globex)["config"]["weights"]["core_competencies"] == 30


def test_job_overrides_feed_the_thresholds(seed, db):
    # globex app scores 100; a job-level tierA above that drops it to B
    seed.globex.scoring_config = {"thresholds": {"tierA": 95}}
    seed.globex_job.scoring_overrides = {"thresholds": {"tierA": 101}}
    db.session.commit()
    assert job_scoring_config(seed.globex, seed.globex_job).thresholds.tier_a == 101

    store = TenantScopedStore(db.session, seed.globex.id)
    result = score_and_persist_application(store, seed.globex, seed.globex_app.id)
    assert (result.score, result.tier) == (100, "B")
    assert ScoringEvent.query.one().config_snapshot["thresholds"]["tier_a"] == 101


def test_scoring_events_cannot_be_changed(seed, db):
    store = TenantScopedStore(db.session, seed.globex.id)
    score_and_persist_application(store, seed.globex, seed.globex_app.id)

    with pytest.raises(AppendOnlyViolation):
        store.scoring_events.update_many({"score": 1})
    with pytest.raises(AppendOnlyViolation):
        store.scoring_events.delete_many()
    with pytest.raises(AppendOnlyViolation):
        store.unscoped(ScoringEvent).delete_many()

    assert [e.score for e in ScoringEvent.query.all()] == [100]
