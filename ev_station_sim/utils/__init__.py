"""utils – seeded random stream, weighted choice and run output directories."""

from .seeded_random import SeededRandom, MODULUS, MULTIPLIER
from .distributions import DemandDistributionItem, weighted_choice
from .run_directory import RunDirectory

__all__ = [
    "SeededRandom", "MODULUS", "MULTIPLIER",
    "DemandDistributionItem", "weighted_choice",
    "RunDirectory",
]
