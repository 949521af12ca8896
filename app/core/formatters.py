"""
Price and date formatting shared by listings, notifications and news.
Prices are shown in Indian Rupees with the Indian numbering system (12,34,567).
"""

import re
from datetime import datetime, timezone
from decimal import Context, Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Union

PRICE_ON_REQUEST = "Price on request"

# Leading number of free text, so "45 Lakh" reads as 45
_LEADING_NUMBER = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)")


def leading_number(text: str) -> Optional[Decimal]:
    match = _LEADING_NUMBER.match(text)
    return Decimal(match.group(0).strip()) if match else None


def _group_indian(integer_part: str) -> str:
    """Group digits as 3 then 2s from the right: 70000000 -> 7,00,00,000"""
    if len(integer_part) <= 3:
        return integer_part
    formatted = integer_part[-3:]
    remaining = integer_part[:-3]
    while remaining:
        formatted = f"{remaining[-2:]},{formatted}"
        remaining = remaining[:-2]
    return formatted


def format_price_inr(amount: Union[int, float, str, None], show_decimals: bool = False) -> str:
    """Format an amount as Indian Rupees, e.g. 1500000 -> ₹15,00,000"""
    if amount is None or amount == "":
        return PRICE_ON_REQUEST
    try:
        value = leading_number(amount.replace(",", "")) if isinstance(amount, str) else Decimal(str(amount))
    except (InvalidOperation, ValueError):
        return PRICE_ON_REQUEST
    if value is None or not value.is_finite() or value < 0:
        return PRICE_ON_REQUEST

    quantum = Decimal("0.01") if show_decimals else Decimal("1")
    context = Context(prec=max(value.adjusted(), 0) + 4)
    text = str(value.quantize(quantum, rounding=ROUND_HALF_UP, context=context))
    integer_part, _, decimal_part = text.partition(".")

    formatted = _group_indian(integer_part)
    if show_decimals and decimal_part:
        formatted += "." + decimal_part
    return f"₹{formatted}"


def format_currency_inr(amount: float) -> str:
    return format_price_inr(amount, False)


def parse_price(price_string: Optional[str]) -> float:
    """Parse a price typed with or without currency symbols. Returns 0 when nothing numeric remains."""
    if not price_string:
        return 0.0
    value = leading_number(re.sub(r"[^\d.]", "", str(price_string)))
    return float(value) if value is not None else 0.0


def parse_timestamp(value: Union[str, datetime, None]) -> Optional[datetime]:
    """Parse a Postgres/ISO timestamp into an aware datetime (UTC when no offset is given)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def format_relative_date(date_string: Union[str, datetime, None], now: Optional[datetime] = None) -> str:
    """Relative label used on news cards: 'Just now', '5h ago', '3d ago', else 'Jan 5'"""
    date = parse_timestamp(date_string)
    if date is None:
        return ""
    now = now or datetime.now(timezone.utc)
    diff_hours = int((now - date).total_seconds() // 3600)
    diff_days = diff_hours // 24

    if diff_hours < 1:
        return "Just now"
    if diff_hours < 24:
        return f"{diff_hours}h ago"
    if diff_days < 7:
        return f"{diff_days}d ago"
    return f"{date:%b} {date.day}"


def parse_home_id(value: Union[str, int, None]) -> Optional[int]:
    """homes.id is a bigint; the client passes it around as a string"""
    if value is None:
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None
