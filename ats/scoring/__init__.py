from .config import ScoringConfig, merge_scoring_config
from .evaluator import ApplicationSignals, ScoringResult, evaluate, signals_from_records
