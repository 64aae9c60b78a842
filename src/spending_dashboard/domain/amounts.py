from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

_CENTS = Decimal("0.01")
# Largest magnitude kept is just under 10**16; bigger values are treated as unparseable.
_MAX_ADJUSTED_EXPONENT = 15


def parse_amount(raw: str | None) -> Decimal | None:
    """Parse an export amount such as ``"$1,200.50"`` or ``"-$3"``.

    Every ``$`` and ``,`` is removed before parsing. Returns ``None`` when what
    is left is not a finite number.
    """
    if not raw:
        return None
    cleaned = raw.replace("$", "").replace(",", "").strip()
    # Decimal() accepts digit separators; the export never uses them.
    if not cleaned or "_" in cleaned:
        return None
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return None
    if not value.is_finite() or value.adjusted() > _MAX_ADJUSTED_EXPONENT:
        return None
    return value


def flip_display_sign(raw: str) -> str:
    if raw.startswith("-"):
        return raw[1:]
    if raw.startswith("$-"):
        return "$" + raw[2:]
    return "-" + raw


def sum_amounts(raw_amounts: Iterable[str]) -> Decimal:
    total = Decimal(0)
    for raw in raw_amounts:
        value = parse_amount(raw)
        if value is not None:
            total += value
    return total


def format_currency(value: Decimal) -> str:
    """Render as ``$`` followed by the signed value, e.g. ``$-12.50``."""
    rounded = value.quantize(_CENTS, rounding=ROUND_HALF_UP)
    if rounded == 0:
        rounded = abs(rounded)
    return f"${rounded}"
