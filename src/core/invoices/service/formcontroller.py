"""
State holder behind the invoice form.

One controller owns the mutable state of one invoice being created or
edited. Every mutation goes through a method here so that the total is
always re-derived from the current fields and, for new invoices, the whole
form is written to the draft slot once per change.
"""
import logging
import threading
from contextlib import contextmanager
from datetime import date
from typing import Dict, Optional, Set

from pydantic import ValidationError

from core.exceptions.InvoiceException import DraftStateException, SubmissionInProgressException
from core.invoices.dto.invoiceparts import AdditionalCharge, Stop
from core.invoices.dto.request.invoicecreate import InvoiceCreate
from core.invoices.dto.request.invoicedraft import NUMERIC_FIELDS, TEXT_FIELDS, InvoiceDraft
from core.invoices.model.Invoice import Invoice
from core.invoices.model.chargetype import ChargeType
from core.invoices.model.paymentmode import PaymentMode
from core.invoices.model.triptype import JourneyType, TripType
from core.invoices.service.draftstore import DraftStore
from core.invoices.service.farecalculator import clamp_amount, compute_total
from core.invoices.service.invoiceservice import InvoiceService
from core.invoices.service.legacy import normalize_invoice_record
from utilities.exceptions import FormValidationError
from utilities.formatting import format_vehicle_number
from utilities.phone_utils import LOCAL_PHONE_LENGTH, digits_only, is_valid_local_phone

logger = logging.getLogger(__name__)

PHONE_FIELDS = ("customer_phone", "driver_phone")
STOP_FIELDS = ("location", "city")

# Submissions in flight across every controller in this process
_submitting: Set[str] = set()
_submitting_lock = threading.Lock()


@contextmanager
def submission_guard(key: str):
    """Refuse a second submit for the same draft slot or invoice until the first settles."""
    with _submitting_lock:
        if key in _submitting:
            raise SubmissionInProgressException()
        _submitting.add(key)
    try:
        yield
    finally:
        with _submitting_lock:
            _submitting.discard(key)


def _parse_date(value: str) -> Optional[date]:
    if not value:
        return None
    return date.fromisoformat(value)


class InvoiceFormController:
    def __init__(self, invoice_service: InvoiceService, draft_store: DraftStore):
        self.invoice_service = invoice_service
        self.draft_store = draft_store
        self.state = InvoiceDraft(invoice_date=date.today().isoformat())
        self.editing_id: Optional[str] = None

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    @property
    def submission_key(self) -> str:
        if self.is_editing:
            return f"invoice:{self.editing_id}"
        return f"draft:{self.draft_store.key}"

    @property
    def is_submitting(self) -> bool:
        return self.submission_key in _submitting

    @property
    def total(self) -> float:
        return compute_total(self.state.base_fare, self.state.driver_allowance, self.state.additional_charges)

    # -----------------------------
    #   LIFECYCLE
    # -----------------------------
    def initialize(self, existing_invoice: Optional[Invoice] = None) -> InvoiceDraft:
        """Pre-populate from an existing invoice, or restore the saved draft."""
        if existing_invoice is not None:
            self.editing_id = existing_invoice.id
            self.state = InvoiceDraft.from_invoice(normalize_invoice_record(existing_invoice))
            return self.state

        self.editing_id = None
        draft = self.draft_store.load()
        if draft is not None:
            logger.info("Restored invoice form from saved draft")
            self.state = draft
        return self.state

    def load_state(self, draft: InvoiceDraft) -> InvoiceDraft:
        """Adopt a complete form state posted by the client."""
        self.state = draft.model_copy(deep=True)
        self._autosave()
        return self.state

    def _autosave(self) -> None:
        # The draft slot belongs to new invoices only
        if self.is_editing:
            return
        self.draft_store.save(self.state)

    # -----------------------------
    #   PLAIN FIELDS
    # -----------------------------
    def set_field(self, name: str, value) -> InvoiceDraft:
        if name in PHONE_FIELDS:
            value = digits_only(str(value or ""))[:LOCAL_PHONE_LENGTH]
        elif name == "cab_number":
            value = format_vehicle_number(str(value or ""))
        elif name in NUMERIC_FIELDS:
            value = clamp_amount(value)
        elif name not in TEXT_FIELDS and name != "vehicle_model":
            raise DraftStateException(f"Unknown form field: {name}")

        setattr(self.state, name, value)
        self._autosave()
        return self.state

    def set_trip_type(self, kind: str) -> InvoiceDraft:
        """Switch trip type; values of fields hidden by the switch are kept."""
        try:
            trip_type = TripType(kind)
        except ValueError:
            raise DraftStateException(f"Unknown trip type: {kind}")

        self.state.trip_type = trip_type
        self.state.journey_type = JourneyType.for_trip(trip_type).value
        self._autosave()
        return self.state

    # -----------------------------
    #   STOPS
    # -----------------------------
    def _check_index(self, items: list, index: int, label: str) -> None:
        if index < 0 or index >= len(items):
            raise DraftStateException(f"No {label} at position {index}")

    def add_stop(self) -> Stop:
        stop = Stop()
        self.state.stops.append(stop)
        self._autosave()
        return stop

    def remove_stop(self, index: int) -> InvoiceDraft:
        self._check_index(self.state.stops, index, "stop")
        del self.state.stops[index]
        self._autosave()
        return self.state

    def update_stop(self, index: int, field: str, value: str) -> Stop:
        self._check_index(self.state.stops, index, "stop")
        if field not in STOP_FIELDS:
            raise DraftStateException(f"Stops have no field named {field}")
        stop = self.state.stops[index]
        setattr(stop, field, value or "")
        self._autosave()
        return stop

    # -----------------------------
    #   ADDITIONAL CHARGES
    # -----------------------------
    def _charge_type(self, value: str) -> str:
        try:
            return ChargeType(value).value
        except ValueError:
            raise DraftStateException(f"Unknown charge type: {value}")

    def add_charge(self, charge_type: str = ChargeType.WAITING.value) -> AdditionalCharge:
        charge = AdditionalCharge(type=self._charge_type(charge_type), amount=0)
        self.state.additional_charges.append(charge)
        self._autosave()
        return charge

    def remove_charge(self, index: int) -> InvoiceDraft:
        self._check_index(self.state.additional_charges, index, "charge")
        del self.state.additional_charges[index]
        self._autosave()
        return self.state

    def update_charge(self, index: int, field: str, value) -> AdditionalCharge:
        self._check_index(self.state.additional_charges, index, "charge")
        charge = self.state.additional_charges[index]
        if field == "type":
            charge.type = self._charge_type(value)
        elif field == "amount":
            charge.amount = clamp_amount(value)
        else:
            raise DraftStateException(f"Charges have no field named {field}")
        self._autosave()
        return charge

    # -----------------------------
    #   SUBMISSION
    # -----------------------------
    def validate(self) -> Dict[str, str]:
        state = self.state
        errors = {}

        if not state.customer_name.strip():
            errors["customer_name"] = "Customer name is required"
        if not state.customer_phone:
            errors["customer_phone"] = "Customer phone is required"
        elif not is_valid_local_phone(state.customer_phone):
            errors["customer_phone"] = "Customer phone must be exactly 10 digits"
        if not state.pickup_location.strip():
            errors["pickup_location"] = "Pickup location is required"
        if not state.destination.strip():
            errors["destination"] = "Drop location is required"

        for field, label in (("invoice_date", "Invoice date"), ("journey_date", "Journey date")):
            if not getattr(state, field):
                errors[field] = f"{label} is required"
                continue
            try:
                _parse_date(getattr(state, field))
            except ValueError:
                errors[field] = f"{label} must be a YYYY-MM-DD date"
        if state.return_date:
            try:
                _parse_date(state.return_date)
            except ValueError:
                errors["return_date"] = "Return date must be a YYYY-MM-DD date"

        if not state.payment_mode:
            errors["payment_mode"] = "Payment mode is required"
        elif state.payment_mode not in {mode.value for mode in PaymentMode}:
            errors["payment_mode"] = "Payment mode must be cash, upi or bank"

        return errors

    def build_submission(self) -> InvoiceCreate:
        errors = self.validate()
        if errors:
            raise FormValidationError(errors)

        state = self.state
        is_local = state.trip_type.is_local
        stops = [] if is_local else [stop for stop in state.stops if not stop.is_blank()]
        charges = [charge for charge in state.additional_charges if charge.amount > 0]

        try:
            return InvoiceCreate(
                invoice_date=_parse_date(state.invoice_date),
                journey_date=_parse_date(state.journey_date),
                return_date=_parse_date(state.return_date),
                customer_name=state.customer_name.strip(),
                customer_phone=state.customer_phone,
                driver_name=state.driver_name or None,
                driver_phone=state.driver_phone or None,
                pickup_location=state.pickup_location.strip(),
                pickup_city=state.pickup_city or None,
                destination=state.destination.strip(),
                drop_city=state.drop_city or None,
                stops=stops,
                trip_type=state.trip_type,
                journey_type=JourneyType.for_trip(state.trip_type),
                cab_type=state.cab_type or None,
                vehicle_model=state.vehicle_model or None,
                cab_number=state.cab_number or None,
                starting_km=state.starting_km or None,
                closing_km=state.closing_km or None,
                total_km=state.total_km if is_local else None,
                total_hours=state.total_hours if is_local else None,
                fare_amount=state.base_fare,
                toll_amount=0,
                driver_allowance=state.driver_allowance,
                additional_charges=charges,
                total_amount=compute_total(state.base_fare, state.driver_allowance, charges),
                payment_mode=PaymentMode(state.payment_mode),
            )
        except ValidationError as e:
            raise FormValidationError({
                ".".join(str(part) for part in error["loc"]): error["msg"] for error in e.errors()
            })

    def submit(self) -> Invoice:
        """Create or overwrite the invoice; the draft survives any failure."""
        with submission_guard(self.submission_key):
            try:
                invoice_data = self.build_submission()
                if self.is_editing:
                    invoice = self.invoice_service.update_invoice(self.editing_id, invoice_data)
                else:
                    invoice = self.invoice_service.create_invoice(invoice_data)
                    self.draft_store.clear()
                return invoice
            except Exception as e:
                logger.error(f"Error submitting invoice: {str(e)}")
                raise
