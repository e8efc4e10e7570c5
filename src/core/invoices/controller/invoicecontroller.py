import logging
from functools import lru_cache
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from core.documents.dto.response.documenttree import DocumentTree
from core.documents.service.exportpipeline import ExportPipeline
from core.documents.service.pdfencoder import encode_png
from core.invoices.dto.request.invoicedraft import InvoiceDraft
from core.invoices.dto.response.formstateresponse import FormStateResponse
from core.invoices.dto.response.invoiceresponse import InvoiceResponse
from core.invoices.dto.response.nextnumberresponse import NextInvoiceNumberResponse
from core.invoices.dto.response.pagedinvoiceresponse import PaginatedInvoicesResponse
from core.invoices.service.draftstore import DraftStore, get_draft_store
from core.invoices.service.formcontroller import InvoiceFormController
from core.invoices.service.invoiceservice import InvoiceService
from core.sharing.dto.response.shareresponse import ShareResult
from routes import validate_token
from utilities.dbconfig import get_db
from utilities.formatting import format_invoice_number

logger = logging.getLogger(__name__)

invoice_routes = APIRouter()


@lru_cache
def get_export_pipeline() -> ExportPipeline:
    return ExportPipeline()


def _submit(controller: InvoiceFormController, draft: InvoiceDraft) -> InvoiceResponse:
    controller.load_state(draft)
    return InvoiceService.to_response(controller.submit())


@invoice_routes.post("/", response_model=InvoiceResponse, status_code=201)
def create_invoice(
    draft: InvoiceDraft,
    token: dict = Depends(validate_token),
    db: Session = Depends(get_db),
    draft_store: DraftStore = Depends(get_draft_store)
):
    controller = InvoiceFormController(InvoiceService(db), draft_store)
    controller.initialize()
    return _submit(controller, draft)


@invoice_routes.get("/all", response_model=List[InvoiceResponse])
def get_all_invoices(
    q: Optional[str] = Query(None, description="Invoice number, customer name or phone"),
    token: dict = Depends(validate_token),
    db: Session = Depends(get_db)
):
    return InvoiceService(db).get_all_invoices(q)


@invoice_routes.get("/all/{page}/{size}", response_model=PaginatedInvoicesResponse)
def get_all_invoices_paginated(
    page: int = Path(..., ge=0, description="Zero-based page index"),
    size: int = Path(..., ge=1, description="Invoices per page"),
    q: Optional[str] = Query(None),
    token: dict = Depends(validate_token),
    db: Session = Depends(get_db)
):
    invoice_service = InvoiceService(db)
    result = invoice_service.get_all_invoices_paginated(page, size, q)

    return PaginatedInvoicesResponse(
        invoices=result["invoices"],
        total=result["total"],
        page=result["page"],
        size=result["size"],
        has_next=result["has_next"],
        has_prev=result["has_prev"]
    )


@invoice_routes.get("/next-number", response_model=NextInvoiceNumberResponse)
def get_next_invoice_number(token: dict = Depends(validate_token), db: Session = Depends(get_db)):
    next_number = InvoiceService(db).get_next_invoice_number()
    return NextInvoiceNumberResponse(next_invoice_number=next_number, display=format_invoice_number(next_number))


@invoice_routes.get("/{invoice_id}", response_model=InvoiceResponse)
def get_invoice_by_id(invoice_id: str, token: dict = Depends(validate_token), db: Session = Depends(get_db)):
    invoice_service = InvoiceService(db)
    return invoice_service.to_response(invoice_service.get_invoice_by_id(invoice_id))


@invoice_routes.get("/{invoice_id}/form", response_model=FormStateResponse)
def get_invoice_form(
    invoice_id: str,
    token: dict = Depends(validate_token),
    db: Session = Depends(get_db),
    draft_store: DraftStore = Depends(get_draft_store)
):
    """Form state pre-populated from a stored invoice, for the edit screen."""
    invoice_service = InvoiceService(db)
    controller = InvoiceFormController(invoice_service, draft_store)
    controller.initialize(invoice_service.get_invoice_by_id(invoice_id))
    return FormStateResponse(draft=controller.state, total_amount=controller.total, editing=True)


@invoice_routes.put("/{invoice_id}", response_model=InvoiceResponse)
def update_invoice(
    invoice_id: str,
    draft: InvoiceDraft,
    token: dict = Depends(validate_token),
    db: Session = Depends(get_db),
    draft_store: DraftStore = Depends(get_draft_store)
):
    invoice_service = InvoiceService(db)
    controller = InvoiceFormController(invoice_service, draft_store)
    controller.initialize(invoice_service.get_invoice_by_id(invoice_id))
    return _submit(controller, draft)


@invoice_routes.delete("/{invoice_id}")
def delete_invoice(invoice_id: str, token: dict = Depends(validate_token), db: Session = Depends(get_db)):
    InvoiceService(db).delete_invoice(invoice_id)
    return {"message": "Invoice deleted successfully", "id": invoice_id}


# -----------------------------
#   DOCUMENTS
# -----------------------------
@invoice_routes.get("/{invoice_id}/document", response_model=DocumentTree)
def get_invoice_document(
    invoice_id: str,
    token: dict = Depends(validate_token),
    db: Session = Depends(get_db),
    pipeline: ExportPipeline = Depends(get_export_pipeline)
):
    invoice_service = InvoiceService(db)
    return pipeline.render(invoice_service.to_response(invoice_service.get_invoice_by_id(invoice_id)))


@invoice_routes.get("/{invoice_id}/preview")
def get_invoice_preview(
    invoice_id: str,
    token: dict = Depends(validate_token),
    db: Session = Depends(get_db),
    pipeline: ExportPipeline = Depends(get_export_pipeline)
):
    invoice_service = InvoiceService(db)
    invoice = invoice_service.to_response(invoice_service.get_invoice_by_id(invoice_id))
    return Response(content=encode_png(pipeline.preview(invoice)), media_type="image/png")


@invoice_routes.get("/{invoice_id}/pdf")
def download_invoice_pdf(
    invoice_id: str,
    token: dict = Depends(validate_token),
    db: Session = Depends(get_db),
    pipeline: ExportPipeline = Depends(get_export_pipeline)
):
    invoice_service = InvoiceService(db)
    invoice = invoice_service.to_response(invoice_service.get_invoice_by_id(invoice_id))
    return pipeline.download(pipeline.to_pdf(invoice))


@invoice_routes.post("/{invoice_id}/share", response_model=ShareResult)
def share_invoice(
    invoice_id: str,
    token: dict = Depends(validate_token),
    db: Session = Depends(get_db),
    pipeline: ExportPipeline = Depends(get_export_pipeline)
):
    invoice_service = InvoiceService(db)
    invoice = invoice_service.to_response(invoice_service.get_invoice_by_id(invoice_id))
    return pipeline.share(invoice)
