"""
Helpers for sampling from discrete probability distributions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple, Union

from ev_station_sim.errors import InvalidArgument
from ev_station_sim.utils.seeded_random import SeededRandom


@dataclass(frozen=True)
class DemandDistributionItem:
    """One entry of a discrete distribution: a value and its probability."""
    value: float
    probability: float


DistributionEntry = Union[DemandDistributionItem, Tuple[float, float]]


def _unpack(entry: DistributionEntry) -> Tuple[float, float]:
    if isinstance(entry, DemandDistributionItem):
        return entry.value, entry.probability
    value, probability = entry
    return value, probability


def weighted_choice(
    distribution: Sequence[DistributionEntry],
    random_generator: SeededRandom
) -> float:
    """
    Select a value from an ordered ``(value, probability)`` distribution.

    Exactly one float is drawn from ``random_generator`` per call. The first
    entry whose running probability sum strictly exceeds the draw wins; if
    the probabilities under-sum (or float drift leaves the draw uncovered)
    the last entry is returned.

    Raises:
        InvalidArgument: if the distribution is empty.
    """
    if not distribution:
        raise InvalidArgument("Distribution cannot be empty")

    draw = random_generator.next()
    cumulative = 0.0

    for entry in distribution:
        value, probability = _unpack(entry)
        cumulative += probability
        if draw < cumulative:
            return value

    return _unpack(distribution[-1])[0]
