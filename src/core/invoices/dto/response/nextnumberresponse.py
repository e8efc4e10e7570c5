from pydantic import BaseModel

class NextInvoiceNumberResponse(BaseModel):
    next_invoice_number: int
    display: str
