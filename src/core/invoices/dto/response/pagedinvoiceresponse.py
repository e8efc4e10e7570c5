from pydantic import BaseModel
from typing import List
from core.invoices.dto.response.invoiceresponse import InvoiceResponse

class PaginatedInvoicesResponse(BaseModel):
    invoices: List[InvoiceResponse]
    total: int
    page: int
    size: int
    has_next: bool
    has_prev: bool
