"""Tests for history tracking and candidate scoring."""
import random

from staffrota.models.constraints import ScoringWeights, SolverConfig
from staffrota.models.station import Station
from staffrota.solver.history import History
from staffrota.solver.scoring import (
    CONSECUTIVE_REPEAT,
    SCARCE_REPEAT,
    detect_rule_breaks,
    pick_candidate,
    rank_candidates,
    score_breakdown,
)

T, G, P, M = Station.TICKET, Station.GREETER, Station.PLANETARIUM, Station.MUSEUM


def make_history(entries):
    """History from slot id -> stations, recorded at positions 0..n-1."""
    history = History(entries)
    for person, stations in entries.items():
        for i, station in enumerate(stations):
            history.record(person, i, station)
    return history


class TestHistory:
    """Tests for the History accumulator."""

    def test_record_appends_per_rotation(self):
        history = History(["B1"])
        history.record("B1", 0, T)
        history.record("B1", 1, G)
        assert history.stations("B1") == [T, G]
        assert history.last("B1") == G

    def test_record_same_rotation_replaces(self):
        """A pin overriding a side task leaves one entry for the rotation."""
        history = History(["B1"])
        history.record("B1", 0, T)
        assert history.record("B1", 1, Station.SIDE_TASK) is True
        assert history.record("B1", 1, G) is True
        assert history.record("B1", 1, G) is False
        assert history.stations("B1") == [T, G]

    def test_before_filters_current_rotation(self):
        history = make_history({"B1": [T, M, G]})
        assert history.stations("B1", before=2) == [T, M]
        assert history.last("B1", before=2) == M
        assert history.last("B1", before=0) is None

    def test_prior_history_is_seeded_first(self):
        history = History(["B1", "B2"], prior={"B1": [P, M]})
        history.record("B1", 0, T)
        assert history.stations("B1") == [P, M, T]
        assert history.stations("B1", before=0) == [P, M]
        assert history.has_done("B1", P)
        assert history.stations("B2") == []

    def test_count_and_snapshot(self):
        history = make_history({"B1": [T, G, T], "B2": [M]})
        assert history.count("B1", T) == 2
        assert history.count("B1", P) == 0
        assert history.recorded_at("B1", 1) == G
        assert history.snapshot() == {"B1": [T, G, T], "B2": [M]}
        assert len(history) == 2


class TestScoreBreakdown:
    """Tests for the individual score terms."""

    def test_fresh_candidate(self, default_config):
        assert score_breakdown(T, [], default_config) == {"conservation": 2_000}
        assert score_breakdown(P, [], default_config) == {}

    def test_consecutive_repeat(self, default_config):
        terms = score_breakdown(T, [T], default_config)
        assert terms["consecutive_repeat"] == 5_000_000
        assert terms["variety"] == 1_000
        assert terms["conservation"] == 2_000

    def test_short_gap(self, default_config):
        terms = score_breakdown(T, [T, G], default_config)
        assert terms["short_gap"] == 200_000
        assert "consecutive_repeat" not in terms

    def test_escape_bonus(self, default_config):
        terms = score_breakdown(G, [M], default_config)
        assert terms["escape_bonus"] == -1_000_000
        assert "escape_bonus" not in score_breakdown(M, [M], default_config)

    def test_scarce_exhaustion(self, default_config):
        terms = score_breakdown(P, [P, M], default_config)
        assert terms["scarce_repeat"] == 10_000_000
        assert terms["short_gap"] == 200_000
        assert terms["escape_bonus"] == -1_000_000
        assert terms["variety"] == 1_000
        assert "conservation" not in terms

    def test_scarce_veteran_has_no_conservation_penalty(self, default_config):
        assert "conservation" not in score_breakdown(T, [P], default_config)

    def test_side_task_counts_as_last_station(self, default_config):
        """Coming back from a side task is not a back-to-back repeat."""
        terms = score_breakdown(T, [T, Station.SIDE_TASK], default_config)
        assert "consecutive_repeat" not in terms
        assert terms["short_gap"] == default_config.weights.short_gap
        assert detect_rule_breaks(T, [T, Station.SIDE_TASK], default_config) == []

    def test_variety_scales_with_count(self, default_config):
        terms = score_breakdown(G, [G, T, G, T], default_config)
        assert terms["variety"] == 2_000


class TestRankCandidates:
    """Tests for ranking and selection."""

    def test_repeat_candidate_ranked_last(self, default_config):
        history = make_history({"B1": [T], "B2": [G]})
        ranked = rank_candidates(T, ["B1", "B2"], history, default_config, random.Random(0))
        assert [c.person for c in ranked] == ["B2", "B1"]
        assert ranked[1].breakdown["consecutive_repeat"] == 5_000_000

    def test_museum_escapee_preferred(self, default_config):
        history = make_history({"B1": [G], "B2": [M], "B3": [P]})
        best = pick_candidate(T, ["B1", "B2", "B3"], history, default_config, random.Random(3))
        assert best.person == "B2"

    def test_scarce_rookie_preferred(self, default_config):
        history = make_history({"B1": [P, T], "B2": [G, T]})
        best = pick_candidate(P, ["B1", "B2"], history, default_config, random.Random(0))
        assert best.person == "B2"

    def test_conservation_saves_rookies_for_scarce(self, default_config):
        """A scarce-station veteran is picked for Greeter over a rookie."""
        history = make_history({"B1": [T], "B2": [P]})
        best = pick_candidate(G, ["B1", "B2"], history, default_config, random.Random(0))
        assert best.person == "B2"

    def test_ties_keep_pool_order_without_jitter(self, no_jitter_config):
        history = History(["B1", "B2", "B3"])
        ranked = rank_candidates(G, ["B3", "B1", "B2"], history, no_jitter_config, random.Random(0))
        assert [c.person for c in ranked] == ["B3", "B1", "B2"]

    def test_jitter_is_bounded(self, default_config):
        history = History(["B1"])
        for seed in range(20):
            ranked = rank_candidates(P, ["B1"], history, default_config, random.Random(seed))
            assert 0 <= ranked[0].breakdown["jitter"] < default_config.weights.jitter
            assert ranked[0].rule_penalty == 0

    def test_same_seed_same_ranking(self, default_config):
        history = History([f"B{i}" for i in range(1, 7)])
        pool = [f"B{i}" for i in range(1, 7)]
        a = rank_candidates(G, pool, history, default_config, random.Random(42))
        b = rank_candidates(G, pool, history, default_config, random.Random(42))
        assert [(c.person, c.score) for c in a] == [(c.person, c.score) for c in b]

    def test_empty_pool(self, default_config):
        assert pick_candidate(T, [], History(), default_config, random.Random(0)) is None

    def test_before_ignores_current_rotation(self, default_config):
        history = make_history({"B1": [T, G]})
        terms = rank_candidates(G, ["B1"], history, default_config, random.Random(0), before=1)[0].breakdown
        assert "consecutive_repeat" not in terms

    def test_custom_weights(self):
        cfg = SolverConfig(weights=ScoringWeights(consecutive_repeat=7, jitter=0))
        history = make_history({"B1": [T]})
        ranked = rank_candidates(T, ["B1"], history, cfg, random.Random(0))
        assert ranked[0].breakdown["consecutive_repeat"] == 7


class TestDetectRuleBreaks:
    """Tests for hard-rule detection."""

    def test_no_breaks(self, default_config):
        assert detect_rule_breaks(T, [G, M], default_config) == []

    def test_consecutive(self, default_config):
        assert detect_rule_breaks(G, [T, G], default_config) == [CONSECUTIVE_REPEAT]

    def test_scarce(self, default_config):
        assert detect_rule_breaks(P, [P, M], default_config) == [SCARCE_REPEAT]
        assert detect_rule_breaks(P, [M, P], default_config) == [CONSECUTIVE_REPEAT, SCARCE_REPEAT]

    def test_pseudo_stations_never_break(self, default_config):
        assert detect_rule_breaks(Station.SIDE_TASK, [Station.SIDE_TASK], default_config) == []
