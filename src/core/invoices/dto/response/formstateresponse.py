from pydantic import BaseModel

from core.invoices.dto.request.invoicedraft import InvoiceDraft


class FormStateResponse(BaseModel):
    draft: InvoiceDraft
    total_amount: float
    editing: bool = False
