from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.invoices.dto.request.formupdates import (
    ChargeCreateRequest, ChargeUpdateRequest, FieldsUpdateRequest, StopUpdateRequest, TripTypeRequest,
)
from core.invoices.dto.request.invoicedraft import InvoiceDraft
from core.invoices.dto.response.formstateresponse import FormStateResponse
from core.invoices.dto.response.invoiceresponse import InvoiceResponse
from core.invoices.service.draftstore import DraftStore, get_draft_store
from core.invoices.service.formcontroller import InvoiceFormController
from core.invoices.service.invoiceservice import InvoiceService
from routes import validate_token
from utilities.dbconfig import get_db

draft_routes = APIRouter()


def get_form_controller(
    token: dict = Depends(validate_token),
    db: Session = Depends(get_db),
    draft_store: DraftStore = Depends(get_draft_store)
) -> InvoiceFormController:
    """A controller restored from the saved draft, or a blank form."""
    controller = InvoiceFormController(InvoiceService(db), draft_store)
    controller.initialize()
    return controller


def _state(controller: InvoiceFormController) -> FormStateResponse:
    return FormStateResponse(draft=controller.state, total_amount=controller.total, editing=controller.is_editing)


@draft_routes.get("/", response_model=FormStateResponse)
def get_draft(controller: InvoiceFormController = Depends(get_form_controller)):
    return _state(controller)


@draft_routes.put("/", response_model=FormStateResponse)
def replace_draft(draft: InvoiceDraft, controller: InvoiceFormController = Depends(get_form_controller)):
    controller.load_state(draft)
    return _state(controller)


@draft_routes.delete("/", response_model=FormStateResponse)
def discard_draft(controller: InvoiceFormController = Depends(get_form_controller)):
    controller.draft_store.clear()
    controller.state = InvoiceDraft(invoice_date=date.today().isoformat())
    return _state(controller)


@draft_routes.put("/fields", response_model=FormStateResponse)
def update_fields(request: FieldsUpdateRequest, controller: InvoiceFormController = Depends(get_form_controller)):
    for name, value in request.fields.items():
        controller.set_field(name, value)
    return _state(controller)


@draft_routes.put("/trip-type", response_model=FormStateResponse)
def update_trip_type(request: TripTypeRequest, controller: InvoiceFormController = Depends(get_form_controller)):
    controller.set_trip_type(request.trip_type)
    return _state(controller)


# -----------------------------
#   STOPS
# -----------------------------
@draft_routes.post("/stops", response_model=FormStateResponse)
def add_stop(controller: InvoiceFormController = Depends(get_form_controller)):
    controller.add_stop()
    return _state(controller)


@draft_routes.patch("/stops/{index}", response_model=FormStateResponse)
def update_stop(index: int, request: StopUpdateRequest, controller: InvoiceFormController = Depends(get_form_controller)):
    controller.update_stop(index, request.field, request.value)
    return _state(controller)


@draft_routes.delete("/stops/{index}", response_model=FormStateResponse)
def remove_stop(index: int, controller: InvoiceFormController = Depends(get_form_controller)):
    controller.remove_stop(index)
    return _state(controller)


# -----------------------------
#   ADDITIONAL CHARGES
# -----------------------------
@draft_routes.post("/charges", response_model=FormStateResponse)
def add_charge(request: Optional[ChargeCreateRequest] = None, controller: InvoiceFormController = Depends(get_form_controller)):
    request = request or ChargeCreateRequest()
    controller.add_charge(request.type)
    return _state(controller)


@draft_routes.patch("/charges/{index}", response_model=FormStateResponse)
def update_charge(index: int, request: ChargeUpdateRequest, controller: InvoiceFormController = Depends(get_form_controller)):
    controller.update_charge(index, request.field, request.value)
    return _state(controller)


@draft_routes.delete("/charges/{index}", response_model=FormStateResponse)
def remove_charge(index: int, controller: InvoiceFormController = Depends(get_form_controller)):
    controller.remove_charge(index)
    return _state(controller)


@draft_routes.post("/submit", response_model=InvoiceResponse, status_code=201)
def submit_draft(controller: InvoiceFormController = Depends(get_form_controller)):
    """Create an invoice from the saved draft; the draft is cleared only on success."""
    return InvoiceService.to_response(controller.submit())
