from enum import Enum

class ChargeType(str, Enum):
    WAITING = "Waiting Charge"
    FOOD = "Food Cost"
    TOLL = "Toll"
    PARKING = "Parking"
    NIGHT = "Night Charge"
    EXTRA_KM = "Extra KM"
    OTHER = "Other"


class CabType(str, Enum):
    SEDAN = "sedan"
    SUV = "suv"
    INNOVA = "innova"
    CRYSTA = "crysta"
    TRAVELLER = "traveller"
