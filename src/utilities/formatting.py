import re
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

RUPEE = "₹"


def format_invoice_number(invoice_number: Optional[int]) -> str:
    """Zero-pad to four digits; unsaved invoices show as 'draft'."""
    if invoice_number is None:
        return "draft"
    return f"{int(invoice_number):04d}"


def group_indian(whole: int) -> str:
    """Group digits the Indian way: 1234567 -> 12,34,567."""
    digits = str(abs(whole))
    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        pairs = []
        while len(head) > 2:
            pairs.insert(0, head[-2:])
            head = head[:-2]
        if head:
            pairs.insert(0, head)
        digits = ",".join(pairs + [tail])
    return f"-{digits}" if whole < 0 else digits


def format_amount(amount: Union[int, float, Decimal, None]) -> str:
    whole = int(Decimal(str(amount or 0)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return group_indian(whole)


def format_currency(amount: Union[int, float, Decimal, None]) -> str:
    return f"{RUPEE}{format_amount(amount)}"


def _as_date(value: Union[date, datetime, str]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00")).date()


def format_display_date(value: Union[date, datetime, str, None]) -> str:
    """18 Oct 2026"""
    if not value:
        return ""
    return _as_date(value).strftime("%d %b %Y")


def format_share_date(value: Union[date, datetime, str, None]) -> str:
    """18/10/2026"""
    if not value:
        return ""
    return _as_date(value).strftime("%d/%m/%Y")


def format_vehicle_number(value: str) -> str:
    """
    Format a registration number as 'MH 12 AB 1234'.

    Non-alphanumerics are dropped, letters upper-cased and spaces inserted
    after the 2nd, 4th and 6th characters; the result is capped at 13 chars.
    """
    raw = re.sub(r"[^A-Z0-9]", "", (value or "").upper())
    groups = [raw[0:2], raw[2:4], raw[4:6], raw[6:]]
    return " ".join(g for g in groups if g)[:13]
