"""Signer account generator."""

from __future__ import annotations

from typing import Iterator

from realty_escrow.addresses import ZERO_ADDRESS
from realty_escrow.generators.base import BaseGenerator
from realty_escrow.models.ledger import Signer

ADDRESS_TEMPLATE = "0x" + "^" * 40


class SignerGenerator(BaseGenerator):
    """Generate signer accounts with unique hex addresses."""

    def generate(self, label: str = "") -> Signer:
        """Generate a single signer.

        Parameters
        ----------
        label : str
            Human-readable name kept alongside the address.

        Returns
        -------
        Signer
            Signer with a lower-case address never issued before by this
            generator.
        """
        address = self.fake.unique.hexify(text=ADDRESS_TEMPLATE)
        while address == ZERO_ADDRESS:
            address = self.fake.unique.hexify(text=ADDRESS_TEMPLATE)
        return Signer(address=address, label=label)

    def generate_batch(self, count: int) -> Iterator[Signer]:
        """Yield ``count`` signers labelled ``signer-0``, ``signer-1``, ..."""
        for i in range(count):
            yield self.generate(label=f"signer-{i}")
