"""
Candidate Scoring
=================
Ranks the available pool for one station from each person's history.
Lower scores are better; every term is additive so the breakdown explains
the choice.
"""
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from staffrota.models.constraints import SolverConfig
from staffrota.models.station import Station
from staffrota.solver.history import History

# Rule names reported by detect_rule_breaks
CONSECUTIVE_REPEAT = "consecutive_repeat"
SCARCE_REPEAT = "scarce_repeat"


@dataclass
class CandidateScore:
    """Score of one candidate for one station."""
    person: str
    score: float
    breakdown: Dict[str, float] = field(default_factory=dict)

    @property
    def rule_penalty(self) -> float:
        """Score without the random tie-break."""
        return self.score - self.breakdown.get("jitter", 0.0)


def score_breakdown(
    station: Station,
    past: Sequence[Station],
    config: SolverConfig,
) -> Dict[str, float]:
    """
    Deterministic score terms for a candidate with history ``past``.

    Only non-zero terms are returned.
    """
    w = config.weights
    last = past[-1] if past else None
    second_last = past[-2] if len(past) > 1 else None
    has_done_scarce = config.scarce_station in past

    terms: Dict[str, float] = {}
    if last == station:
        terms["consecutive_repeat"] = w.consecutive_repeat
    if second_last == station:
        terms["short_gap"] = w.short_gap
    if station == config.scarce_station and has_done_scarce:
        terms["scarce_repeat"] = w.scarce_repeat
    if station != config.catch_all_station and last == config.catch_all_station:
        terms["escape_bonus"] = -w.escape_bonus
    if station != config.scarce_station and not has_done_scarce:
        terms["conservation"] = w.conservation

    times_done = sum(1 for s in past if s == station)
    if times_done:
        terms["variety"] = times_done * w.variety
    return terms


def rank_candidates(
    station: Station,
    pool: Sequence[str],
    history: History,
    config: SolverConfig,
    rng: random.Random,
    before: Optional[int] = None,
) -> List[CandidateScore]:
    """
    Rank every pool member for ``station``, best first.

    Jitter is drawn once per candidate in pool order. The sort is stable,
    so exact ties keep pool order.

    Args:
        station: Station being filled
        pool: Available slot ids
        history: Run history
        config: Solver configuration (weights, scarce and catch-all stations)
        rng: Source of the tie-break term
        before: Only history before this rotation position is considered

    Returns:
        Candidates sorted by ascending score
    """
    ranked = []
    for person in pool:
        terms = score_breakdown(station, history.stations(person, before), config)
        terms["jitter"] = rng.random() * config.weights.jitter
        ranked.append(CandidateScore(person=person, score=sum(terms.values()), breakdown=terms))
    ranked.sort(key=lambda c: c.score)
    return ranked


def pick_candidate(
    station: Station,
    pool: Sequence[str],
    history: History,
    config: SolverConfig,
    rng: random.Random,
    before: Optional[int] = None,
) -> Optional[CandidateScore]:
    """Best candidate for ``station``, or None for an empty pool."""
    ranked = rank_candidates(station, pool, history, config, rng, before)
    return ranked[0] if ranked else None


def detect_rule_breaks(
    station: Station,
    past: Sequence[Station],
    config: SolverConfig,
) -> List[str]:
    """Hard rules broken by placing someone with history ``past`` at ``station``."""
    if station.is_pseudo:
        return []
    breaks = []
    if past and past[-1] == station:
        breaks.append(CONSECUTIVE_REPEAT)
    if station == config.scarce_station and station in past:
        breaks.append(SCARCE_REPEAT)
    return breaks
