from pydantic import BaseModel, Field
from typing import Any, Dict, Optional

from core.invoices.model.chargetype import ChargeType


class FieldsUpdateRequest(BaseModel):
    fields: Dict[str, Any] = Field(..., description="Form field name -> new value")


class TripTypeRequest(BaseModel):
    trip_type: str = Field(..., description="one-way, round-trip or local")


class StopUpdateRequest(BaseModel):
    field: str = Field(..., description="location or city")
    value: Optional[str] = Field("", description="New value")


class ChargeCreateRequest(BaseModel):
    type: str = Field(ChargeType.WAITING.value, description="Charge label from the fixed vocabulary")


class ChargeUpdateRequest(BaseModel):
    field: str = Field(..., description="type or amount")
    value: Any = Field(None, description="New value")
