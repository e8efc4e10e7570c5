import logging
from datetime import date
from typing import Dict, Iterable, Optional

from sqlalchemy.orm import Session

from core.analytics.dto.response.invoicestats import InvoiceStats
from core.invoices.dto.response.invoiceresponse import InvoiceResponse
from core.invoices.service.invoiceservice import InvoiceService

logger = logging.getLogger(__name__)

ROUTE_ARROW = "→"


def route_key(invoice: InvoiceResponse) -> str:
    return f"{invoice.pickup_city or invoice.pickup_location} {ROUTE_ARROW} {invoice.drop_city or invoice.destination}"


def short_route(route: str) -> str:
    """Destination part of a route key, or the key itself when it has none."""
    _, arrow, destination = route.partition(ROUTE_ARROW)
    return destination.strip() if arrow and destination.strip() else route


def aggregate(invoices: Iterable[InvoiceResponse], today: Optional[date] = None) -> InvoiceStats:
    """Totals, current-month revenue and the most frequent route, in one pass."""
    today = today or date.today()

    total_revenue = 0.0
    monthly_revenue = 0.0
    total_trips = 0
    route_counts: Dict[str, int] = {}

    for invoice in invoices:
        amount = invoice.total_amount or 0
        total_revenue += amount
        total_trips += 1

        if invoice.invoice_date.month == today.month and invoice.invoice_date.year == today.year:
            monthly_revenue += amount

        route = route_key(invoice)
        route_counts[route] = route_counts.get(route, 0) + 1

    # Strict comparison keeps the first route seen on ties
    top_route, max_count = "-", 0
    for route, count in route_counts.items():
        if count > max_count:
            top_route, max_count = route, count

    return InvoiceStats(
        total_revenue=total_revenue,
        monthly_revenue=monthly_revenue,
        total_trips=total_trips,
        top_route=short_route(top_route),
        top_route_full=top_route,
        month_label=today.strftime("%B %Y"),
    )


class AnalyticsService:
    def __init__(self, db: Session):
        self.invoice_service = InvoiceService(db)

    def get_stats(self, today: Optional[date] = None) -> InvoiceStats:
        invoices = self.invoice_service.get_all_invoices()
        stats = aggregate(invoices, today)
        logger.debug(f"Aggregated {stats.total_trips} invoices, top route {stats.top_route_full}")
        return stats
