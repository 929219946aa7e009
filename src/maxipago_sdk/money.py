"""Amount formatting for the processor's decimal money fields."""

from decimal import Decimal

DEFAULT_CURRENCY = "BRL"


def format_amount(money: int) -> str:
    """Render an amount in minor units as a two-place decimal string.

    >>> format_amount(1000)
    '10.00'
    """
    if isinstance(money, bool) or not isinstance(money, int):
        raise TypeError("money amount must be an integer in minor units")
    return str((Decimal(money) / 100).quantize(Decimal("0.01")))
