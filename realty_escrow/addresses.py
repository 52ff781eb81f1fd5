"""Account address helpers."""

import re
from typing import Any

from realty_escrow.exceptions import InvalidAddressError

ZERO_ADDRESS = "0x" + "0" * 40

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def is_address(value: Any) -> bool:
    """Return True if value is a well-formed ``0x`` address string."""
    return isinstance(value, str) and bool(_ADDRESS_RE.match(value))


def to_address(value: Any) -> str:
    """Normalize an address, signer or contract to a lower-case address.

    Anything carrying an ``address`` attribute (signers, deployed
    contracts) is accepted in place of the raw string.
    """
    raw = getattr(value, "address", value)
    if not is_address(raw):
        raise InvalidAddressError(f"Invalid address: {value!r}")
    return raw.lower()
