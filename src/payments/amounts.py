"""Conversion of major-unit prices to the integer minor units the gateway expects."""

from decimal import ROUND_HALF_UP, Decimal


def to_minor_units(amount) -> int:
    """Return ``amount * 100`` rounded half-up to an integer.

    The amount goes through ``str`` so binary float noise (``19.999``) does
    not bias the rounding.
    """
    if amount is None:
        return 0
    value = Decimal(str(amount)) * 100
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
