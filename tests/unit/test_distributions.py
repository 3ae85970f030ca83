"""
Unit tests for weighted_choice.

Covers:
- Value selection by cumulative probability (strict comparison)
- Fallback to the last entry when probabilities under-sum
- Exactly one random draw per call
- Empty distribution raises InvalidArgument
"""

import pytest

from ev_station_sim.errors import InvalidArgument
from ev_station_sim.utils.distributions import DemandDistributionItem, weighted_choice
from ev_station_sim.utils.seeded_random import SeededRandom

HALF_HALF = [(0, 0.5), (10, 0.5)]


class TestWeightedChoiceSelection:
    def test_low_draw_selects_first(self, scripted_random):
        assert weighted_choice(HALF_HALF, scripted_random([0.3])) == 0

    def test_high_draw_selects_second(self, scripted_random):
        assert weighted_choice(HALF_HALF, scripted_random([0.7])) == 10

    def test_draw_on_boundary_goes_to_next_entry(self, scripted_random):
        # running sum must strictly exceed the draw
        assert weighted_choice(HALF_HALF, scripted_random([0.5])) == 10

    def test_zero_draw_selects_first_nonzero_entry(self, scripted_random):
        dist = [(1, 0.0), (2, 0.4), (3, 0.6)]
        assert weighted_choice(dist, scripted_random([0.0])) == 2

    def test_accepts_distribution_items(self, scripted_random):
        dist = [DemandDistributionItem(5, 0.2), DemandDistributionItem(50, 0.8)]
        assert weighted_choice(dist, scripted_random([0.25])) == 50

    def test_duplicate_values_allowed(self, scripted_random):
        dist = [(7, 0.3), (7, 0.3), (8, 0.4)]
        assert weighted_choice(dist, scripted_random([0.5])) == 7


class TestWeightedChoiceFallback:
    def test_under_summing_falls_back_to_last(self, scripted_random):
        dist = [(1, 0.2), (2, 0.2)]
        assert weighted_choice(dist, scripted_random([0.9])) == 2

    def test_single_entry_always_returned(self, scripted_random):
        assert weighted_choice([(42, 0.0)], scripted_random([0.99])) == 42


class TestWeightedChoiceDraws:
    def test_exactly_one_draw_on_early_hit(self, scripted_random):
        rng = scripted_random([0.1, 0.9])
        weighted_choice(HALF_HALF, rng)
        assert rng.calls == 1

    def test_exactly_one_draw_on_fallback(self, scripted_random):
        rng = scripted_random([0.99, 0.1])
        weighted_choice([(1, 0.1)], rng)
        assert rng.calls == 1

    def test_advances_seeded_stream_by_one(self):
        a = SeededRandom(12345)
        b = SeededRandom(12345)
        weighted_choice(HALF_HALF, a)
        b.next()
        assert a.state == b.state


class TestWeightedChoiceErrors:
    def test_empty_distribution_raises(self, scripted_random):
        with pytest.raises(InvalidArgument, match="empty"):
            weighted_choice([], scripted_random([0.5]))

    def test_empty_distribution_draws_nothing(self, scripted_random):
        rng = scripted_random([0.5])
        with pytest.raises(InvalidArgument):
            weighted_choice([], rng)
        assert rng.calls == 0
