"""Signer account model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Signer:
    """An externally owned account able to send transactions."""

    address: str
    label: str = ""

    def __str__(self) -> str:
        return self.address
