"""Scoring configuration: hiring-mode base profiles, tenant overrides and plan gating.

``merge_scoring_config`` never raises. Tenant overrides arrive as loosely typed JSON
(whatever the settings screen saved), so every field is read as optional and falls
back to the base profile when it is missing or has the wrong type.
"""
import json
import logging
import math
from collections.abc import Mapping
from dataclasses import asdict, dataclass, replace

log = logging.getLogger(__name__)

HIRING_MODES = ("exec", "volume", "hybrid")
PLANS = ("free", "pro", "enterprise")
PLAN_ALIASES = {"trial_pro": "pro"}

MAX_WEIGHT = 100
MAX_NLP_BOOST = 30


@dataclass(frozen=True)
class CategoryWeights:
    core_competencies: float
    experience_quality: float
    education: float
    achievements: float
    cultural_fit: float

    def total(self):
        return (self.core_competencies + self.experience_quality + self.education
                + self.achievements + self.cultural_fit)


@dataclass(frozen=True)
class Thresholds:
    tier_a: float  # >= tier_a -> A
    tier_b: float
    tier_c: float  # below tier_c -> D


@dataclass(frozen=True)
class SkillsPolicy:
    must_have_match_percent: float
    missing_must_have_is_red_flag: bool


@dataclass(frozen=True)
class BiasPolicy:
    anonymize_for_scoring: bool
    downweight_education: bool


@dataclass(frozen=True)
class NlpPolicy:
    enabled: bool
    max_boost: float  # 0-30


@dataclass(frozen=True)
class ScoringConfig:
    mode: str
    plan: str
    weights: CategoryWeights
    thresholds: Thresholds
    skills: SkillsPolicy
    bias: BiasPolicy
    nlp: NlpPolicy
    normalized_weights: CategoryWeights

    def to_dict(self):
        return asdict(self)


_DEFAULT_THRESHOLDS = Thresholds(tier_a=80, tier_b=65, tier_c=50)
_DEFAULT_BIAS = BiasPolicy(anonymize_for_scoring=True, downweight_education=True)

BASE_PROFILES = {
    # exec search: competency, experience and achievements dominate
    "exec": dict(
        weights=CategoryWeights(30, 25, 15, 20, 10),
        thresholds=_DEFAULT_THRESHOLDS,
        skills=SkillsPolicy(must_have_match_percent=75, missing_must_have_is_red_flag=True),
        bias=_DEFAULT_BIAS,
        nlp=NlpPolicy(enabled=False, max_boost=15),
    ),
    # high volume: skills and experience quality carry more weight
    "volume": dict(
        weights=CategoryWeights(40, 30, 10, 10, 10),
        thresholds=_DEFAULT_THRESHOLDS,
        skills=SkillsPolicy(must_have_match_percent=60, missing_must_have_is_red_flag=False),
        bias=_DEFAULT_BIAS,
        nlp=NlpPolicy(enabled=False, max_boost=20),
    ),
    "hybrid": dict(
        weights=CategoryWeights(35, 25, 10, 15, 15),
        thresholds=_DEFAULT_THRESHOLDS,
        skills=SkillsPolicy(must_have_match_percent=70, missing_must_have_is_red_flag=True),
        bias=_DEFAULT_BIAS,
        nlp=NlpPolicy(enabled=False, max_boost=15),
    ),
}


def _number(value):
    # bool is an int subclass but never a valid numeric override
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        finite = math.isfinite(value)
    except OverflowError:
        # ints past float range (JSON allows arbitrarily long literals)
        return None
    return value if finite else None


def _weight(value):
    n = _number(value)
    if n is None or n < 0:
        return None
    return min(n, MAX_WEIGHT)


def _boost(value):
    n = _number(value)
    if n is None:
        return None
    return min(max(n, 0), MAX_NLP_BOOST)


def _flag(value):
    return value if isinstance(value, bool) else None


# (attribute, json key, coercer); json keys follow the settings screen payload
_WEIGHT_FIELDS = (
    ("core_competencies", "coreCompetencies", _weight),
    ("experience_quality", "experienceQuality", _weight),
    ("education", "education", _weight),
    ("achievements", "achievements", _weight),
    ("cultural_fit", "culturalFit", _weight),
)
_THRESHOLD_FIELDS = (
    ("tier_a", "tierA", _number),
    ("tier_b", "tierB", _number),
    ("tier_c", "tierC", _number),
)
_SKILLS_FIELDS = (
    ("must_have_match_percent", "mustHaveSkillMatchPercent", _number),
    ("missing_must_have_is_red_flag", "treatMissingMustHaveAsRedFlag", _flag),
)
_BIAS_FIELDS = (
    ("anonymize_for_scoring", "anonymizeForScoring", _flag),
    ("downweight_education", "downweightEducation", _flag),
)
_NLP_FIELDS = (
    ("enabled", "enableNlp", _flag),
    ("max_boost", "nlpWeightBoost", _boost),
)

_MISSING = object()


def normalize_mode(raw):
    v = raw.strip().lower() if isinstance(raw, str) else ""
    return v if v in HIRING_MODES else "exec"


def normalize_plan(raw):
    v = raw.strip().lower() if isinstance(raw, str) else ""
    v = PLAN_ALIASES.get(v, v)
    return v if v in PLANS else "free"


def coerce_overrides(value):
    """Turn whatever the tenant row holds into a mapping (possibly empty)."""
    if isinstance(value, (str, bytes)):
        try:
            value = json.loads(value)
        except (ValueError, RecursionError):
            log.debug("scoring overrides are not valid JSON, ignoring")
            return {}
    if not isinstance(value, Mapping):
        return {}
    return value


def _pick(raw, key, attr):
    if key in raw:
        return raw[key]
    if attr in raw:
        return raw[attr]
    return _MISSING


def _merge_section(base, raw, fields):
    if not isinstance(raw, Mapping):
        return base
    changes = {}
    for attr, key, coerce in fields:
        value = _pick(raw, key, attr)
        if value is _MISSING:
            continue
        coerced = coerce(value)
        if coerced is None:
            log.debug("dropping scoring override %s=%r", key, value)
            continue
        changes[attr] = coerced
    return replace(base, **changes) if changes else base


def _merge_layers(base, layers, section, fields):
    # later layers win field by field
    for overrides in layers:
        base = _merge_section(base, overrides.get(section), fields)
    return base


def normalize_weights(weights):
    total = weights.total()
    divisor = total if total > 0 else 1
    return CategoryWeights(
        core_competencies=weights.core_competencies / divisor,
        experience_quality=weights.experience_quality / divisor,
        education=weights.education / divisor,
        achievements=weights.achievements / divisor,
        cultural_fit=weights.cultural_fit / divisor,
    )


def merge_scoring_config(mode=None, plan=None, tenant_config=None, job_overrides=None):
    """Merge a hiring-mode profile, plan gating, tenant overrides and job overrides.

    Args:
        mode: ``exec``, ``volume`` or ``hybrid``; anything else means ``exec``.
        plan: ``free``, ``pro`` or ``enterprise``; anything else means ``free``.
        tenant_config: sparse overrides (mapping or JSON text), may be malformed.
        job_overrides: same shape as ``tenant_config``, applied on top of it.

    Returns:
        ScoringConfig with raw merged weights and their normalized vector.
    """
    mode = normalize_mode(mode)
    plan = normalize_plan(plan)
    base = BASE_PROFILES[mode]
    layers = (coerce_overrides(tenant_config), coerce_overrides(job_overrides))

    weights = _merge_layers(base["weights"], layers, "weights", _WEIGHT_FIELDS)
    thresholds = _merge_layers(base["thresholds"], layers, "thresholds", _THRESHOLD_FIELDS)
    skills = _merge_layers(base["skills"], layers, "skills", _SKILLS_FIELDS)
    bias = _merge_layers(base["bias"], layers, "bias", _BIAS_FIELDS)

    # plan gate: free never gets NLP augmentation
    if plan == "free":
        nlp = replace(base["nlp"], enabled=False)
    else:
        nlp = _merge_layers(base["nlp"], layers, "nlp", _NLP_FIELDS)

    return ScoringConfig(
        mode=mode,
        plan=plan,
        weights=weights,
        thresholds=thresholds,
        skills=skills,
        bias=bias,
        nlp=nlp,
        normalized_weights=normalize_weights(weights),
    )
