import math
from typing import Any, Iterable, Mapping, Union

Number = Union[int, float]


def clamp_amount(value: Any) -> float:
    """
    Normalise a raw numeric entry before it reaches the invoice.

    None, blanks, unparsable text, NaN, infinities and negatives all become 0.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number) or number < 0:
        return 0.0
    return number


def _charge_amount(charge: Any) -> float:
    if isinstance(charge, Mapping):
        return charge.get("amount") or 0
    return getattr(charge, "amount", 0) or 0


def compute_total(fare_amount: Number, driver_allowance: Number, additional_charges: Iterable[Any] = ()) -> float:
    """Base fare + driver allowance + every additional charge."""
    return (fare_amount or 0) + (driver_allowance or 0) + sum(_charge_amount(c) for c in additional_charges or ())
