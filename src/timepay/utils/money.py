from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")


def to_money(amount) -> Decimal:
    """Round to currency minor units"""
    return Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)
