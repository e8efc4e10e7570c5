from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, List

from core.invoices.dto.invoiceparts import AdditionalCharge, Stop
from core.invoices.model.paymentmode import PaymentMode
from core.invoices.model.triptype import JourneyType, TripType
from core.invoices.service.farecalculator import clamp_amount
from core.invoices.service.legacy import (
    charges_with_legacy_toll, normalize_charges, normalize_stops, normalize_trip_type,
)

# Plain inputs, persisted in the draft under their record names
TEXT_FIELDS = (
    "invoice_date", "journey_date", "return_date",
    "customer_name", "customer_phone", "driver_name", "driver_phone",
    "pickup_location", "pickup_city", "destination", "drop_city",
    "journey_type", "cab_type", "cab_number", "payment_mode",
)

# Numeric sub-state, persisted in the draft under the form's camelCase keys
NUMERIC_FIELDS = ("base_fare", "driver_allowance", "total_km", "total_hours", "starting_km", "closing_km")


class InvoiceDraft(BaseModel):
    """In-progress invoice form state, as saved to and restored from the draft slot."""

    invoice_date: str = ""
    journey_date: str = ""
    return_date: str = ""
    customer_name: str = ""
    customer_phone: str = ""
    driver_name: str = ""
    driver_phone: str = ""
    pickup_location: str = ""
    pickup_city: str = ""
    destination: str = ""
    drop_city: str = ""
    journey_type: str = JourneyType.ONE_WAY.value
    cab_type: str = ""
    cab_number: str = ""
    payment_mode: str = PaymentMode.CASH.value

    stops: List[Stop] = Field(default_factory=list)
    additional_charges: List[AdditionalCharge] = Field(default_factory=list, alias="additionalCharges")
    base_fare: float = Field(0, alias="baseFare")
    trip_type: TripType = Field(TripType.ONE_WAY, alias="tripType")
    total_km: float = Field(0, alias="totalKm")
    total_hours: float = Field(0, alias="totalHours")
    vehicle_model: str = Field("", alias="vehicleModel")
    starting_km: float = Field(0, alias="startingKm")
    closing_km: float = Field(0, alias="closingKm")
    driver_allowance: float = Field(0, alias="driverAllowance")

    class Config:
        populate_by_name = True
        validate_assignment = True

    @field_validator(*TEXT_FIELDS, "vehicle_model", mode="before")
    @classmethod
    def _blank_for_none(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator(*NUMERIC_FIELDS, mode="before")
    @classmethod
    def _clamp(cls, value: Any) -> float:
        return clamp_amount(value)

    @field_validator("stops", mode="before")
    @classmethod
    def _upgrade_stops(cls, value: Any) -> List[Dict[str, str]]:
        return normalize_stops(value)

    @field_validator("additional_charges", mode="before")
    @classmethod
    def _upgrade_charges(cls, value: Any) -> List[Dict[str, Any]]:
        return normalize_charges(value)

    @field_validator("trip_type", mode="before")
    @classmethod
    def _upgrade_trip_type(cls, value: Any) -> TripType:
        return normalize_trip_type(value)

    def to_storage(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_invoice(cls, record: Dict[str, Any]) -> "InvoiceDraft":
        """Pre-populate the form from a normalised stored invoice."""
        text = {field: record.get(field) for field in TEXT_FIELDS}
        for field in ("invoice_date", "journey_date", "return_date"):
            if text[field] is not None and hasattr(text[field], "isoformat"):
                text[field] = text[field].isoformat()
        for field in ("journey_type", "payment_mode"):
            text[field] = getattr(text[field], "value", text[field])
        return cls(
            **text,
            stops=record.get("stops"),
            additional_charges=charges_with_legacy_toll(record),
            base_fare=record.get("fare_amount"),
            trip_type=record.get("trip_type"),
            total_km=record.get("total_km"),
            total_hours=record.get("total_hours"),
            vehicle_model=record.get("vehicle_model"),
            starting_km=record.get("starting_km"),
            closing_km=record.get("closing_km"),
            driver_allowance=record.get("driver_allowance"),
        )
