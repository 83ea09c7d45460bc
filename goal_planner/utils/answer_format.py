from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Number = Union[int, float, Decimal]

INFINITY_MARK = "∞"


def round_half_up(value: Number, places: int = 0) -> Decimal:
    """Half-up rounding; infinities pass through unrounded."""
    d = Decimal(str(value))
    if not d.is_finite():
        return d
    q = Decimal(1).scaleb(-places)
    return d.quantize(q, rounding=ROUND_HALF_UP)


def group_indian(n: int) -> str:
    """12345678 -> '1,23,45,678' (last three digits, then pairs)."""
    digits = str(abs(n))
    if len(digits) <= 3:
        grouped = digits
    else:
        head, tail = digits[:-3], digits[-3:]
        pairs = []
        while len(head) > 2:
            pairs.insert(0, head[-2:])
            head = head[:-2]
        if head:
            pairs.insert(0, head)
        grouped = ",".join(pairs + [tail])
    return ("-" if n < 0 else "") + grouped


def format_currency(value: Number, symbol: str = "₹") -> str:
    d = round_half_up(value)
    if not d.is_finite():
        text = ("-" if d.is_signed() else "") + INFINITY_MARK
    else:
        text = group_indian(int(d))
    if text.startswith("-"):
        return f"-{symbol}{text[1:]}"
    return f"{symbol}{text}"


def format_pct(ratio: Number, places: int = 1) -> str:
    """0.4741 -> '47.4%'"""
    d = round_half_up(Decimal(str(ratio)) * 100, places)
    if not d.is_finite():
        return f"{'-' if d.is_signed() else ''}{INFINITY_MARK}%"
    return f"{d}%"
