from enum import Enum

class TripType(str, Enum):
    ONE_WAY = "one-way"
    ROUND_TRIP = "round-trip"
    LOCAL = "local"

    @property
    def is_local(self) -> bool:
        return self is TripType.LOCAL

    @property
    def label(self) -> str:
        return {
            TripType.ONE_WAY: "One Way",
            TripType.ROUND_TRIP: "Round Trip",
            TripType.LOCAL: "Local",
        }[self]


class JourneyType(str, Enum):
    """Older records only knew one-way and two-way journeys."""
    ONE_WAY = "one-way"
    TWO_WAY = "two-way"

    @classmethod
    def for_trip(cls, trip_type: TripType) -> "JourneyType":
        return cls.TWO_WAY if trip_type == TripType.ROUND_TRIP else cls.ONE_WAY
