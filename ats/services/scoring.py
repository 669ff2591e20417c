from flask import current_app

from ..scoring.config import merge_scoring_config
from ..scoring.evaluator import ENGINE, ENGINE_VERSION, evaluate, signals_from_records


def tenant_scoring_config(tenant):
    return merge_scoring_config(
        mode=tenant.hiring_mode,
        plan=tenant.plan,
        tenant_config=tenant.scoring_config,
    )


def job_scoring_config(tenant, job):
    """Tenant config with the job's own overrides merged on top."""
    return merge_scoring_config(
        mode=tenant.hiring_mode,
        plan=tenant.plan,
        tenant_config=tenant.scoring_config,
        job_overrides=job.scoring_overrides,
    )


def _skill_set(values):
    if not isinstance(values, (list, tuple)):
        return {}
    out = {}
    for v in values:
        if isinstance(v, str) and v.strip():
            out.setdefault(v.strip().lower(), v.strip())
    return out


def build_input_summary(job, application, candidate, signals):
    """Audit summary of what the scorer looked at (stored on the ScoringEvent)."""
    job_skills = _skill_set(job.required_skills)
    cand_skills = _skill_set(candidate.skills if candidate is not None else None)
    matched = [job_skills[k] for k in job_skills if k in cand_skills]
    return {
        "hasCv": signals.has_cv,
        "hasCoverLetter": signals.has_cover_letter,
        "hasLinkedIn": signals.has_linkedin,
        "hiringMode": signals.hiring_mode,
        "jobRequiredSkills": list(signals.required_skills),
        "source": application.source,
        "skills": {
            "jobSkillCount": len(job_skills),
            "candidateSkillCount": len(cand_skills),
            "matchedSkillCount": len(matched),
            "matchedSkillNames": matched,
        },
    }


def score_and_persist_application(store, tenant, application_id, actor_id=None):
    """Score one application of ``tenant`` and record the outcome.

    Writes match_score/match_reason on the application, appends a ScoringEvent and an
    activity log entry, then commits. Returns the ScoringResult, or None when the
    application does not exist in this tenant.
    """
    application = store.applications.get(application_id)
    if application is None:
        current_app.logger.warning('Application %s not found for scoring in tenant %s',
                                   application_id, store.tenant_id)
        return None

    job = store.jobs.get(application.job_id)
    if job is None:
        current_app.logger.warning('Job %s of application %s missing in tenant %s',
                                   application.job_id, application_id, store.tenant_id)
        return None
    candidate = store.candidates.get(application.candidate_id)
    config = job_scoring_config(tenant, job)
    signals = signals_from_records(job, application, candidate, tenant_hiring_mode=tenant.hiring_mode)
    result = evaluate(config, signals)

    engine = current_app.config.get('SCORING_ENGINE', ENGINE)
    engine_version = current_app.config.get('SCORING_ENGINE_VERSION', ENGINE_VERSION)

    store.applications.update_many(
        {"match_score": result.score, "match_reason": result.reason},
        id=application.id,
    )
    store.scoring_events.create(
        application_id=application.id,
        job_id=job.id,
        engine=engine,
        engine_version=engine_version,
        mode=signals.hiring_mode,
        score=result.score,
        tier=result.tier,
        reason=result.reason,
        interview_focus=list(result.interview_focus),
        config_snapshot=config.to_dict(),
        input_summary=build_input_summary(job, application, candidate, signals),
    )
    store.activity_logs.create(
        actor_id=actor_id,
        action="application.scored",
        entity_type="application",
        entity_id=str(application.id),
        meta={"score": result.score, "tier": result.tier, "engine": engine},
    )
    store.commit()
    current_app.logger.info('Scored application %s (tenant %s): %s/%s',
                            application.id, store.tenant_id, result.score, result.tier)
    return result
