from pydantic import BaseModel, Field
from datetime import date
from typing import List, Optional

from core.invoices.dto.invoiceparts import AdditionalCharge, Stop
from core.invoices.model.paymentmode import PaymentMode
from core.invoices.model.triptype import JourneyType, TripType


class InvoiceCreate(BaseModel):
    invoice_date: date = Field(..., description="Billing date")
    journey_date: date = Field(..., description="Date the trip starts")
    return_date: Optional[date] = Field(None, description="Return date for round trips")

    customer_name: str = Field(..., min_length=1, description="Name of the customer")
    customer_phone: str = Field(..., pattern=r"^\d{10}$", description="10-digit mobile number")
    driver_name: Optional[str] = Field(None, description="Driver name")
    driver_phone: Optional[str] = Field(None, description="Driver mobile number")

    pickup_location: str = Field(..., min_length=1, description="Pickup area")
    pickup_city: Optional[str] = Field(None, description="Pickup city")
    destination: str = Field(..., min_length=1, description="Drop area")
    drop_city: Optional[str] = Field(None, description="Drop city")
    stops: List[Stop] = Field(default_factory=list, description="Intermediate stops in route order")

    trip_type: TripType = Field(TripType.ONE_WAY, description="Trip classification")
    journey_type: JourneyType = Field(JourneyType.ONE_WAY, description="Legacy journey classification")

    cab_type: Optional[str] = Field(None, description="sedan, suv, innova, crysta, traveller, ...")
    vehicle_model: Optional[str] = Field(None, description="Vehicle make and model")
    cab_number: Optional[str] = Field(None, description="Registration number, e.g. MH 12 AB 1234")
    starting_km: Optional[float] = Field(None, ge=0, description="Odometer at start")
    closing_km: Optional[float] = Field(None, ge=0, description="Odometer at close")
    total_km: Optional[float] = Field(None, ge=0, description="Kilometres used on a local trip")
    total_hours: Optional[float] = Field(None, ge=0, description="Hours used on a local trip")

    fare_amount: float = Field(..., ge=0, description="Base fare")
    toll_amount: float = Field(0, ge=0, description="Legacy toll amount")
    driver_allowance: float = Field(0, ge=0, description="Driver allowance")
    additional_charges: List[AdditionalCharge] = Field(default_factory=list, description="Extra charges")
    total_amount: float = Field(..., ge=0, description="Derived total")

    payment_mode: PaymentMode = Field(..., description="cash, upi or bank")

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "invoice_date": "2026-10-18",
                "journey_date": "2026-10-18",
                "customer_name": "Asha Patil",
                "customer_phone": "9876543210",
                "pickup_location": "Airport",
                "pickup_city": "Mumbai",
                "destination": "College Road",
                "drop_city": "Nashik",
                "stops": [{"id": "5c1d", "location": "Lonavala", "city": "Pune"}],
                "trip_type": "one-way",
                "journey_type": "one-way",
                "cab_type": "innova",
                "cab_number": "MH 15 AB 1234",
                "fare_amount": 4500,
                "driver_allowance": 300,
                "additional_charges": [{"type": "Toll", "amount": 250}],
                "total_amount": 5050,
                "payment_mode": "upi"
            }
        }
