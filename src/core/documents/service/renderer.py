"""
Maps an invoice to the printable document structure.

Pure: no I/O, and the same invoice with the same branding always yields
the same tree. Optional data that is missing is simply left out.
"""
from typing import List

from pydantic import BaseModel

from config import settings
from core.documents.dto.response.documenttree import DocumentBlock, DocumentRow, DocumentTree, RouteNode
from core.invoices.dto.response.invoiceresponse import InvoiceResponse
from core.invoices.model.chargetype import CabType
from core.invoices.model.triptype import TripType
from utilities.formatting import format_amount, format_currency, format_display_date, format_invoice_number


class Branding(BaseModel):
    name: str
    tagline: str
    address: str
    phone: str
    email: str
    footer_lines: List[str]

    @classmethod
    def from_settings(cls) -> "Branding":
        return cls(
            name=settings.BUSINESS_NAME,
            tagline=settings.BUSINESS_TAGLINE,
            address=settings.BUSINESS_ADDRESS,
            phone=settings.BUSINESS_PHONE,
            email=settings.BUSINESS_EMAIL,
            footer_lines=settings.FOOTER_LINES,
        )


CAB_LABELS = {CabType.SUV.value: "SUV"}


def cab_label(cab_type: str) -> str:
    key = cab_type.strip().lower()
    return CAB_LABELS.get(key, cab_type.strip().title())


def _number(value: float) -> str:
    return f"{value:g}"


def _rows(*pairs) -> List[DocumentRow]:
    return [DocumentRow(label=label, value=str(value)) for label, value in pairs if value]


def _header(invoice: InvoiceResponse, branding: Branding) -> DocumentBlock:
    return DocumentBlock(
        kind="header",
        title=branding.name,
        lines=[branding.tagline, branding.address, branding.phone, branding.email],
        rows=_rows(
            ("Invoice #", f"#{format_invoice_number(invoice.invoice_number)}"),
            ("Date", format_display_date(invoice.invoice_date)),
        ),
    )


def _journey(invoice: InvoiceResponse) -> DocumentBlock:
    odometer = None
    if invoice.starting_km and invoice.closing_km:
        odometer = f"{_number(invoice.starting_km)} - {_number(invoice.closing_km)} km"

    return DocumentBlock(
        kind="journey",
        title="Journey Details",
        rows=_rows(
            ("Date", format_display_date(invoice.journey_date)),
            ("Return", format_display_date(invoice.return_date)),
            ("Type", invoice.trip_type.label),
            ("Vehicle", cab_label(invoice.cab_type) if invoice.cab_type else None),
            ("Model", invoice.vehicle_model),
            ("Cab No", (invoice.cab_number or "").upper()),
            ("Driver", invoice.driver_name),
            ("Driver Phone", invoice.driver_phone),
            ("Odometer", odometer),
        ),
    )


def _route(invoice: InvoiceResponse) -> DocumentBlock:
    nodes = [RouteNode(kind="pickup", location=invoice.pickup_location, city=invoice.pickup_city or None)]
    nodes += [
        RouteNode(kind="stop", location=stop.location, city=stop.city or None)
        for stop in invoice.stops if not stop.is_blank()
    ]
    nodes.append(RouteNode(kind="drop", location=invoice.destination, city=invoice.drop_city or None))
    return DocumentBlock(kind="route", title="Route", nodes=nodes)


def _usage(invoice: InvoiceResponse) -> DocumentBlock:
    return DocumentBlock(
        kind="usage",
        title="Local Usage",
        rows=[
            DocumentRow(label="Pickup", value=invoice.pickup_location),
            DocumentRow(label="Total KM", value=f"{_number(invoice.total_km or 0)} km"),
            DocumentRow(label="Total Hours", value=f"{_number(invoice.total_hours or 0)} hrs"),
        ],
    )


def _charges(invoice: InvoiceResponse) -> DocumentBlock:
    rows = [DocumentRow(label="Base Fare", value=format_currency(invoice.fare_amount), emphasis=True)]
    if invoice.driver_allowance > 0:
        rows.append(DocumentRow(label="Driver Allowance", value=format_currency(invoice.driver_allowance)))
    rows += [
        DocumentRow(label=charge.type, value=format_currency(charge.amount))
        for charge in invoice.additional_charges
    ]
    if invoice.toll_amount > 0:
        rows.append(DocumentRow(label="Toll / Parking", value=format_currency(invoice.toll_amount)))
    return DocumentBlock(kind="charges", title="Charges", rows=rows)


def render(invoice: InvoiceResponse, branding: Branding = None) -> DocumentTree:
    branding = branding or Branding.from_settings()

    trip_block = _usage(invoice) if invoice.trip_type == TripType.LOCAL else _route(invoice)

    blocks = [
        _header(invoice, branding),
        DocumentBlock(
            kind="billed_to",
            title="Billed To",
            lines=[line for line in (invoice.customer_name, invoice.customer_phone) if line],
        ),
        _journey(invoice),
        trip_block,
        _charges(invoice),
        DocumentBlock(
            kind="total",
            rows=[DocumentRow(label="Total Amount", value=format_currency(invoice.total_amount), emphasis=True)],
            lines=[f"Payment Mode: {invoice.payment_mode.upper()}"],
        ),
        DocumentBlock(kind="signature", lines=[f"For {branding.name}", "Authorized Signatory"]),
        DocumentBlock(kind="footer", lines=list(branding.footer_lines)),
    ]

    return DocumentTree(
        invoice_id=invoice.id,
        invoice_number=format_invoice_number(invoice.invoice_number),
        blocks=blocks,
    )


def summary_line(invoice: InvoiceResponse) -> str:
    """Short one-line description used in export logs."""
    return f"{invoice.pickup_location} → {invoice.destination} · ₹{format_amount(invoice.total_amount)}"
