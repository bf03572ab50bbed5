# app/shared/utils/money.py
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

CENT = Decimal("0.01")


def to_money(value: Union[Decimal, int, float, str]) -> Decimal:
    """Redondear a dos decimales (medio hacia arriba)"""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)
