from pydantic import BaseModel, Field

from utilities.uniqueidgenerator import UniqueIdGenerator


class Stop(BaseModel):
    id: str = Field(default_factory=UniqueIdGenerator.generate_stop_id, description="Stable identifier of the stop")
    location: str = Field("", description="Area or landmark")
    city: str = Field("", description="City of the stop")

    def is_blank(self) -> bool:
        return not self.location.strip()


class AdditionalCharge(BaseModel):
    type: str = Field(..., description="Charge label, e.g. Toll or Parking")
    amount: float = Field(0, ge=0, description="Charge amount")
