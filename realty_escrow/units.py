"""Fixed-point currency helpers.

Amounts on the ledger are integers in base units, where one ether is
``10**18`` base units.  Conversions go through ``Decimal`` so that
``parse_ether(0.02)`` yields exactly ``20_000_000_000_000_000``.
"""

from decimal import Decimal, InvalidOperation

from realty_escrow.exceptions import InvalidValueError

ETHER_DECIMALS = 18
MAX_UINT256 = 2**256 - 1


def parse_units(value: str | int | float | Decimal, decimals: int = ETHER_DECIMALS) -> int:
    """Convert a display amount to integer base units.

    Parameters
    ----------
    value : str | int | float | Decimal
        Display amount, e.g. ``0.02`` or ``"0.001"``.  Floats are converted
        through their shortest ``str`` form.
    decimals : int
        Number of decimal places in one display unit.

    Returns
    -------
    int
        Amount in base units.
    """
    if isinstance(value, bool):
        raise InvalidValueError(f"Invalid amount: {value!r}")
    try:
        amount = Decimal(str(value))
    except InvalidOperation as e:
        raise InvalidValueError(f"Invalid amount: {value!r}") from e

    if not amount.is_finite():
        raise InvalidValueError(f"Invalid amount: {value!r}")

    scaled = amount.scaleb(decimals)
    if scaled != scaled.to_integral_value():
        raise InvalidValueError(f"Amount {value!r} has more than {decimals} decimal places")
    return int(scaled)


def parse_ether(value: str | int | float | Decimal) -> int:
    """Convert an ether amount to base units."""
    return parse_units(value, ETHER_DECIMALS)


def format_units(amount: int, decimals: int = ETHER_DECIMALS) -> str:
    """Convert integer base units to a display string (``"0.02"``)."""
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidValueError(f"Invalid base-unit amount: {amount!r}")
    text = format(Decimal(amount).scaleb(-decimals), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_ether(amount: int) -> str:
    """Convert base units to an ether display string."""
    return format_units(amount, ETHER_DECIMALS)


def require_uint(value: int, name: str) -> int:
    """Validate an unsigned 256-bit integer argument."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidValueError(f"{name} must be an integer, got {value!r}")
    if value < 0 or value > MAX_UINT256:
        raise InvalidValueError(f"{name} out of range: {value}")
    return value
