"""
Upgrades older invoice and draft shapes to the current one.

Records written by earlier versions of the form can carry:
- stops stored as plain strings instead of {id, location, city} objects
- trip types spelled "oneway" / "roundtrip", or no trip type at all
  (only the two-valued journey_type)
- null money fields and null lists
- a separate toll_amount instead of a "Toll" entry in additional_charges

Everything that reads a stored record or a stored draft passes it through
here once, so the rest of the code only ever sees the canonical shape.
"""
import logging
from typing import Any, Dict, List, Optional

from core.invoices.model.chargetype import ChargeType
from core.invoices.model.triptype import JourneyType, TripType
from core.invoices.service.farecalculator import clamp_amount
from utilities.uniqueidgenerator import UniqueIdGenerator

logger = logging.getLogger(__name__)

LEGACY_TRIP_TYPES = {
    "oneway": TripType.ONE_WAY,
    "one_way": TripType.ONE_WAY,
    "roundtrip": TripType.ROUND_TRIP,
    "round_trip": TripType.ROUND_TRIP,
    "two-way": TripType.ROUND_TRIP,
}

INVOICE_FIELDS = (
    "id", "invoice_number", "invoice_date", "journey_date", "return_date",
    "customer_name", "customer_phone", "driver_name", "driver_phone",
    "pickup_location", "pickup_city", "destination", "drop_city", "stops",
    "trip_type", "journey_type", "cab_type", "vehicle_model", "cab_number",
    "starting_km", "closing_km", "total_km", "total_hours",
    "fare_amount", "toll_amount", "driver_allowance", "additional_charges",
    "total_amount", "payment_mode", "created_at", "updated_at",
)

MONEY_FIELDS = ("fare_amount", "toll_amount", "driver_allowance", "total_amount")


def normalize_trip_type(value: Any, journey_type: Any = None) -> TripType:
    if isinstance(value, TripType):
        return value
    if value:
        key = str(value).strip().lower()
        if key in LEGACY_TRIP_TYPES:
            return LEGACY_TRIP_TYPES[key]
        try:
            return TripType(key)
        except ValueError:
            logger.warning(f"Unknown trip type {value!r}, falling back to journey type")
    if journey_type and str(journey_type).strip().lower() == JourneyType.TWO_WAY.value:
        return TripType.ROUND_TRIP
    return TripType.ONE_WAY


def _as_mapping(item: Any) -> Any:
    return item.model_dump() if hasattr(item, "model_dump") else item


def normalize_stops(stops: Optional[List[Any]]) -> List[Any]:
    if stops is None:
        return []
    if not isinstance(stops, (list, tuple)):
        # Not a list at all: left for validation to reject
        return stops

    normalized = []
    for stop in stops:
        if isinstance(stop, str):
            normalized.append({"id": UniqueIdGenerator.generate_stop_id(), "location": stop, "city": ""})
            continue
        stop = _as_mapping(stop)
        if not isinstance(stop, dict):
            normalized.append(stop)
            continue
        normalized.append({
            "id": stop.get("id") or UniqueIdGenerator.generate_stop_id(),
            "location": stop.get("location") or "",
            "city": stop.get("city") or "",
        })
    return normalized


def normalize_charges(charges: Optional[List[Any]]) -> List[Any]:
    if charges is None:
        return []
    if not isinstance(charges, (list, tuple)):
        return charges

    normalized = []
    for charge in charges:
        charge = _as_mapping(charge)
        if not isinstance(charge, dict):
            normalized.append(charge)
            continue
        normalized.append({
            "type": charge.get("type") or "Other",
            "amount": clamp_amount(charge.get("amount")),
        })
    return normalized


def normalize_invoice_record(record: Any) -> Dict[str, Any]:
    """Return the canonical dict form of a stored invoice (ORM row or mapping)."""
    if isinstance(record, dict):
        data = dict(record)
    else:
        data = {field: getattr(record, field, None) for field in INVOICE_FIELDS}

    trip_type = normalize_trip_type(data.get("trip_type"), data.get("journey_type"))
    data["trip_type"] = trip_type
    data["journey_type"] = JourneyType.for_trip(trip_type)
    data["stops"] = normalize_stops(data.get("stops"))
    data["additional_charges"] = normalize_charges(data.get("additional_charges"))
    for field in MONEY_FIELDS:
        data[field] = clamp_amount(data.get(field))
    return data


def charges_with_legacy_toll(record: Dict[str, Any]) -> List[Any]:
    """Charges for the edit form, with an old record's toll_amount folded in as a Toll line."""
    charges = normalize_charges(record.get("additional_charges"))
    toll = clamp_amount(record.get("toll_amount"))
    if toll > 0 and isinstance(charges, list):
        charges = charges + [{"type": ChargeType.TOLL.value, "amount": toll}]
    return charges
