"""Rule-table scorer for a single application.

This is a fixed heuristic: it looks at which submission fields are present, whether
the locations line up and how many skills the job lists. No CV content is parsed.
"""
import math
from dataclasses import dataclass, field
from typing import List, Optional

ENGINE = "heuristic-v1"
ENGINE_VERSION = "v1"

BASELINE = 50
CV_BONUS = 15
COVER_LETTER_BONUS = 10
LINKEDIN_BONUS = 5
LOCATION_BONUS = 10
POINTS_PER_SKILL = 3
SKILLS_CAP = 15


@dataclass(frozen=True)
class ApplicationSignals:
    has_cv: bool = False
    has_cover_letter: bool = False
    has_linkedin: bool = False
    job_location: str = ""
    candidate_location: str = ""
    required_skills: tuple = ()
    hiring_mode: str = "balanced"


@dataclass(frozen=True)
class ScoringResult:
    score: int
    tier: str
    reason: str
    interview_focus: List[str] = field(default_factory=list)

    def to_dict(self):
        return {
            "score": self.score,
            "tier": self.tier,
            "reason": self.reason,
            "interviewFocus": list(self.interview_focus),
        }


def _text(value):
    if value is None:
        return ""
    return str(value).strip().lower()


def _present(value):
    if isinstance(value, str):
        return bool(value.strip())
    return bool(value)


def resolve_hiring_mode(*hints):
    """First non-blank hint wins (job, then tenant); ``balanced`` otherwise."""
    for hint in hints:
        v = _text(hint)
        if v:
            return v
    return "balanced"


def clamp_score(value):
    try:
        value = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(value):
        return 0
    # half-up so 82.5 -> 83
    return int(min(100, max(0, math.floor(value + 0.5))))


def tier_for(score, thresholds):
    # applied in order; ordering of the thresholds themselves is not validated
    if score >= thresholds.tier_a:
        return "A"
    if score >= thresholds.tier_b:
        return "B"
    if score >= thresholds.tier_c:
        return "C"
    return "D"


def _apply_mode(score, mode):
    if mode == "executive":
        # stricter: pull everything toward 40
        return 40 + (score - 40) * 0.85
    if mode == "volume":
        return 45 + (score - 45) * 1.05
    return score


def evaluate(config, signals):
    """Score one application against a merged ScoringConfig."""
    job_location = _text(signals.job_location)
    candidate_location = _text(signals.candidate_location)
    skills = list(signals.required_skills or ())
    location_known = bool(job_location and candidate_location)
    location_match = location_known and job_location in candidate_location

    score = BASELINE
    if signals.has_cv:
        score += CV_BONUS
    if signals.has_cover_letter:
        score += COVER_LETTER_BONUS
    if signals.has_linkedin:
        score += LINKEDIN_BONUS
    if location_match:
        score += LOCATION_BONUS
    if skills:
        score += min(SKILLS_CAP, len(skills) * POINTS_PER_SKILL)

    final = clamp_score(_apply_mode(score, _text(signals.hiring_mode)))
    tier = tier_for(final, config.thresholds)

    reasons = [
        "CV provided." if signals.has_cv else "No CV provided.",
        "Cover letter provided." if signals.has_cover_letter else "No cover letter provided.",
    ]
    if signals.has_linkedin:
        reasons.append("LinkedIn profile provided.")
    if skills:
        reasons.append(f"Role has {len(skills)} listed required skill(s).")
    if location_known:
        if location_match:
            reasons.append("Candidate location appears to match role location.")
        else:
            reasons.append("Candidate location does not clearly match role location.")

    focus = []
    if not signals.has_cv:
        focus.append("Request a CV or detailed career history.")
    if not signals.has_cover_letter:
        focus.append("Probe candidate motivation and context for applying.")
    if skills:
        focus.append("Walk through concrete examples covering the required skills.")

    return ScoringResult(score=final, tier=tier, reason=" ".join(reasons), interview_focus=focus)


def signals_from_records(job, application, candidate=None, tenant_hiring_mode: Optional[str] = None):
    """Build scoring signals from ORM rows (or anything with the same attributes)."""
    cand_cv = getattr(candidate, "cv_url", None) if candidate is not None else None
    cand_location = getattr(candidate, "location", None) if candidate is not None else None
    cand_linkedin = getattr(candidate, "linkedin_url", None) if candidate is not None else None
    skills = getattr(job, "required_skills", None)
    if not isinstance(skills, (list, tuple)):
        skills = ()
    return ApplicationSignals(
        has_cv=_present(application.cv_url) or _present(cand_cv),
        has_cover_letter=_present(application.cover_letter),
        has_linkedin=_present(application.linkedin_url) or _present(cand_linkedin),
        job_location=job.location or "",
        candidate_location=application.location or cand_location or "",
        required_skills=tuple(skills),
        hiring_mode=resolve_hiring_mode(getattr(job, "hiring_mode", None), tenant_hiring_mode),
    )
