import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from sqlalchemy import desc, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions.InvoiceException import InvoiceNotFoundException
from core.invoices.dto.request.invoicecreate import InvoiceCreate
from core.invoices.dto.response.invoiceresponse import InvoiceResponse
from core.invoices.model.Invoice import Invoice
from core.invoices.service.legacy import normalize_invoice_record
from utilities.exceptions import DatabaseValidationError
from utilities.formatting import format_invoice_number

logger = logging.getLogger(__name__)


def search_invoices(invoices: List[InvoiceResponse], query: Optional[str]) -> List[InvoiceResponse]:
    """Dashboard search over invoice number, customer name and customer phone."""
    if not query or not query.strip():
        return list(invoices)
    needle = query.strip().lower()
    return [
        invoice for invoice in invoices
        if needle in str(invoice.invoice_number)
        or needle in invoice.customer_name.lower()
        or needle in invoice.customer_phone
    ]


class InvoiceService:
    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def to_response(invoice: Invoice) -> InvoiceResponse:
        return InvoiceResponse.model_validate(normalize_invoice_record(invoice))

    def _payload(self, invoice_data: InvoiceCreate) -> Dict:
        data = invoice_data.model_dump(mode="json")
        # Date columns want date objects, not their JSON spelling
        for field in ("invoice_date", "journey_date", "return_date"):
            data[field] = getattr(invoice_data, field)
        return data

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.error(f"Integrity error while trying to {action}: {e}")
            raise DatabaseValidationError("Invoice number already exists, please retry", "invoice_number")
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error while trying to {action}: {e}")
            raise

    def get_max_invoice_number(self) -> int:
        return self.db.query(func.max(Invoice.invoice_number)).scalar() or 0

    def get_next_invoice_number(self) -> int:
        # Read-then-write: two concurrent creates can compute the same number.
        # The unique index turns the loser into a DatabaseValidationError.
        return self.get_max_invoice_number() + 1

    def create_invoice(self, invoice_data: InvoiceCreate) -> Invoice:
        db_invoice = Invoice(**self._payload(invoice_data))
        db_invoice.invoice_number = self.get_next_invoice_number()
        self.db.add(db_invoice)
        self._commit("create invoice")
        self.db.refresh(db_invoice)
        logger.info(f"Created invoice #{format_invoice_number(db_invoice.invoice_number)} ({db_invoice.id})")
        return db_invoice

    def get_invoice_by_id(self, invoice_id: str) -> Invoice:
        invoice = self.db.query(Invoice).filter(Invoice.id == invoice_id).first()
        if not invoice:
            raise InvoiceNotFoundException(f"Invoice not found with id: {invoice_id}")
        return invoice

    def _ordered(self):
        return self.db.query(Invoice).order_by(desc(Invoice.created_at), desc(Invoice.invoice_number))

    def get_all_invoices(self, search: Optional[str] = None) -> List[InvoiceResponse]:
        invoices = [self.to_response(invoice) for invoice in self._ordered().all()]
        return search_invoices(invoices, search)

    def get_all_invoices_paginated(self, page: int, size: int, search: Optional[str] = None) -> dict:
        invoices = self.get_all_invoices(search)
        total = len(invoices)

        return {
            "invoices": invoices[page * size:(page + 1) * size],
            "total": total,
            "page": page,
            "size": size,
            "has_next": (page + 1) * size < total,
            "has_prev": page > 0
        }

    def update_invoice(self, invoice_id: str, invoice_data: InvoiceCreate) -> Invoice:
        invoice = self.get_invoice_by_id(invoice_id)

        # Full overwrite: every writable column takes the submitted value
        for key, value in self._payload(invoice_data).items():
            setattr(invoice, key, value)
        invoice.updated_at = datetime.now(timezone.utc)

        self._commit(f"update invoice {invoice_id}")
        self.db.refresh(invoice)
        logger.info(f"Updated invoice #{format_invoice_number(invoice.invoice_number)} ({invoice.id})")
        return invoice

    def delete_invoice(self, invoice_id: str) -> None:
        invoice = self.get_invoice_by_id(invoice_id)
        self.db.delete(invoice)
        self._commit(f"delete invoice {invoice_id}")
        logger.info(f"Deleted invoice {invoice_id}")
