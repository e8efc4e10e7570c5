from pydantic import BaseModel
from datetime import date, datetime
from typing import List, Optional

from core.invoices.dto.invoiceparts import AdditionalCharge, Stop
from core.invoices.model.triptype import JourneyType, TripType


class InvoiceResponse(BaseModel):
    id: str
    invoice_number: int
    invoice_date: date
    journey_date: date
    return_date: Optional[date] = None
    customer_name: str
    customer_phone: str
    driver_name: Optional[str] = None
    driver_phone: Optional[str] = None
    pickup_location: str
    pickup_city: Optional[str] = None
    destination: str
    drop_city: Optional[str] = None
    stops: List[Stop] = []
    trip_type: TripType
    journey_type: JourneyType
    cab_type: Optional[str] = None
    vehicle_model: Optional[str] = None
    cab_number: Optional[str] = None
    starting_km: Optional[float] = None
    closing_km: Optional[float] = None
    total_km: Optional[float] = None
    total_hours: Optional[float] = None
    fare_amount: float
    toll_amount: float = 0
    driver_allowance: float = 0
    additional_charges: List[AdditionalCharge] = []
    total_amount: float
    payment_mode: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True  # Allows ORM mode for SQLAlchemy objects
