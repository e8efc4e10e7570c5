"""
render -> rasterize -> encode, plus the download and share paths.

The rasterizer and encoder are injected so the filename rules, the data
mapping and the share fallback decision can be exercised without Pillow
doing any real drawing.
"""
import logging
import re
import threading
from contextlib import contextmanager
from typing import Callable, Optional, Set

from fastapi.responses import Response
from pydantic import BaseModel

from config import settings
from core.documents.dto.response.documenttree import DocumentTree
from core.documents.service.pdfencoder import encode_pdf
from core.documents.service.rasterizer import DocumentRasterizer
from core.documents.service.renderer import Branding, render, summary_line
from core.exceptions.DocumentException import DocumentExportException, ExportInProgressException
from core.invoices.dto.response.invoiceresponse import InvoiceResponse
from core.sharing.dto.response.shareresponse import ShareResult
from core.sharing.service.whatsapp_service import (
    WhatsAppService, build_web_share_url, compose_share_caption, compose_share_message,
)
from utilities.formatting import format_invoice_number
from utilities.phone_utils import normalize_indian_phone

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"

_in_flight: Set[str] = set()
_in_flight_lock = threading.Lock()


class ExportedDocument(BaseModel):
    content: bytes
    filename: str
    media_type: str = PDF_MEDIA_TYPE


def sanitize_customer_name(customer_name: str, max_length: int = None) -> str:
    """Drop anything but letters, digits and whitespace; each whitespace char becomes '_'."""
    max_length = max_length or settings.FILENAME_MAX_LENGTH
    cleaned = re.sub(r"[^A-Za-z0-9\s]", "", customer_name or "")
    return re.sub(r"\s", "_", cleaned)[:max_length]


def build_filename(customer_name: str, invoice_number: Optional[int]) -> str:
    return f"{sanitize_customer_name(customer_name)}_invoice_{format_invoice_number(invoice_number)}.pdf"


@contextmanager
def export_guard(invoice: InvoiceResponse):
    """Refuse a second export of the same invoice until the first settles."""
    key = invoice.id
    with _in_flight_lock:
        if key in _in_flight:
            raise ExportInProgressException(format_invoice_number(invoice.invoice_number))
        _in_flight.add(key)
    try:
        yield
    finally:
        with _in_flight_lock:
            _in_flight.discard(key)


class ExportPipeline:
    def __init__(
        self,
        rasterizer: DocumentRasterizer = None,
        encoder: Callable = encode_pdf,
        whatsapp: WhatsAppService = None,
        branding: Branding = None,
    ):
        self.rasterizer = rasterizer or DocumentRasterizer()
        self.encoder = encoder
        self.whatsapp = whatsapp or WhatsAppService()
        self.branding = branding or Branding.from_settings()

    def render(self, invoice: InvoiceResponse) -> DocumentTree:
        return render(invoice, self.branding)

    def preview(self, invoice: InvoiceResponse):
        return self.rasterizer.rasterize(self.render(invoice))

    def _build_pdf(self, invoice: InvoiceResponse) -> ExportedDocument:
        filename = build_filename(invoice.customer_name, invoice.invoice_number)
        try:
            image = self.rasterizer.rasterize(self.render(invoice))
            content = self.encoder(image)
        except Exception as e:
            logger.error(f"Error generating PDF for invoice {invoice.id}: {str(e)}")
            raise DocumentExportException() from e

        logger.info(f"Generated {filename} ({len(content)} bytes): {summary_line(invoice)}")
        return ExportedDocument(content=content, filename=filename)

    def to_pdf(self, invoice: InvoiceResponse) -> ExportedDocument:
        with export_guard(invoice):
            return self._build_pdf(invoice)

    def share(self, invoice: InvoiceResponse) -> ShareResult:
        """Export and share as one operation; the invoice stays locked until the share settles."""
        with export_guard(invoice):
            return self.share_or_download(self._build_pdf(invoice), invoice)

    @staticmethod
    def download(document: ExportedDocument) -> Response:
        return Response(
            content=document.content,
            media_type=document.media_type,
            headers={"Content-Disposition": f'attachment; filename="{document.filename}"'},
        )

    def share_or_download(self, document: ExportedDocument, invoice: InvoiceResponse) -> ShareResult:
        recipient = normalize_indian_phone(invoice.customer_phone)

        if self.whatsapp.is_configured:
            shared = self.whatsapp.share_document(
                invoice.customer_phone, document.content, document.filename, compose_share_caption(invoice)
            )
            if shared:
                return ShareResult(
                    shared_directly=True,
                    filename=document.filename,
                    recipient=recipient,
                    message=f"Invoice sent to {invoice.customer_name} on WhatsApp.",
                )
            logger.warning(f"Direct share failed for invoice {invoice.id}, falling back to download")

        return ShareResult(
            shared_directly=False,
            filename=document.filename,
            recipient=recipient,
            message=(
                f"✅ PDF downloaded!\n\nWhatsApp is opening with {invoice.customer_name}'s chat.\n\n"
                f"Please click the 📎 attach button in WhatsApp and select the downloaded PDF."
            ),
            whatsapp_url=build_web_share_url(invoice.customer_phone, compose_share_message(invoice)),
            download_url=f"/api/v1/invoice/{invoice.id}/pdf",
        )
