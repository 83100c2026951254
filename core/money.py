# core/money.py
# Гроші рахуємо в Decimal, щоб округлення було однаковим завжди.

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")


def to_decimal(x: float | int | str | Decimal) -> Decimal:
    """float -> Decimal через str, без двійкового хвоста (0.1 -> '0.1')."""
    if isinstance(x, Decimal):
        return x
    return Decimal(str(x))


def money(x: float | int | str | Decimal) -> Decimal:
    """Round half away from zero to 2 decimal places."""
    r = to_decimal(x).quantize(CENT, rounding=ROUND_HALF_UP)
    # -0.00 -> 0.00
    return r.copy_abs() if r.is_zero() else r


def to_cents(x: Decimal) -> int:
    return int(money(x) * 100)


def from_cents(cents: int) -> Decimal:
    return money(Decimal(cents) / 100)


def fmt_usd(x: Decimal | float) -> str:
    return f"${money(x):,.2f}"
