# staffrota/solver - Greedy rotation engine
from .availability import Availability, resolve_availability
from .engine import reshuffle, solve_day
from .filler import RotationFiller
from .history import History
from .overrides import apply_forced_assignments
from .scoring import CandidateScore, detect_rule_breaks, rank_candidates, score_breakdown
from .validation import ValidationResult, Violation, validate_day

__all__ = [
    "solve_day",
    "reshuffle",
    "History",
    "Availability",
    "resolve_availability",
    "apply_forced_assignments",
    "RotationFiller",
    "CandidateScore",
    "rank_candidates",
    "score_breakdown",
    "detect_rule_breaks",
    "validate_day",
    "ValidationResult",
    "Violation",
]
