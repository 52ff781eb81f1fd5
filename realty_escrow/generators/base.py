"""Seeded Faker access shared by the ledger generators."""

from __future__ import annotations

from abc import ABC

from faker import Faker


class BaseGenerator(ABC):
    """Own a Faker instance, seeded when a seed is given.

    Two generators built with the same seed produce the same sequence of
    values.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    """

    locale = "en_US"

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self.fake = Faker(self.locale)
        if seed is not None:
            self.fake.seed_instance(seed)

    def reset(self) -> None:
        """Forget issued unique values and rewind a seeded sequence."""
        self.fake.unique.clear()
        if self.seed is not None:
            self.fake.seed_instance(self.seed)
