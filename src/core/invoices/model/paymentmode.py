from enum import Enum

class PaymentMode(str, Enum):
    CASH = "cash"
    UPI = "upi"
    BANK = "bank"
