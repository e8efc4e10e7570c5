"""Unit tests for the analytics aggregator."""

from datetime import date

from conftest import make_invoice
from core.analytics.service.analyticsservice import aggregate, route_key, short_route

TODAY = date(2026, 10, 18)


def test_revenue_totals() -> None:
    """Test that monthly revenue only counts the current month."""
    invoices = [
        make_invoice(total_amount=1000, invoice_date=date(2026, 10, 2)),
        make_invoice(total_amount=2000, invoice_date=date(2026, 9, 30)),
    ]

    stats = aggregate(invoices, today=TODAY)

    assert stats.total_revenue == 3000
    assert stats.monthly_revenue == 1000
    assert stats.total_trips == 2
    assert stats.month_label == "October 2026"


def test_same_month_last_year_is_excluded() -> None:
    """Test that month matching also checks the year."""
    stats = aggregate([make_invoice(total_amount=500, invoice_date=date(2025, 10, 18))], today=TODAY)

    assert stats.monthly_revenue == 0


def test_top_route() -> None:
    """Test that the most frequent route wins and shows its destination."""
    invoices = [
        make_invoice(pickup_city="A", drop_city="B"),
        make_invoice(pickup_city="A", drop_city="B"),
        make_invoice(pickup_city="A", drop_city="C"),
    ]

    stats = aggregate(invoices, today=TODAY)

    assert stats.top_route == "B"
    assert stats.top_route_full == "A → B"


def test_tie_keeps_first_route() -> None:
    """Test that ties resolve to the first route seen."""
    invoices = [
        make_invoice(pickup_city="A", drop_city="C"),
        make_invoice(pickup_city="A", drop_city="B"),
    ]

    assert aggregate(invoices, today=TODAY).top_route == "C"


def test_route_key_falls_back_to_locations() -> None:
    """Test that missing cities use the location names."""
    invoice = make_invoice(pickup_city=None, drop_city="", pickup_location="Airport", destination="Station")

    assert route_key(invoice) == "Airport → Station"
    assert short_route("no arrow") == "no arrow"


def test_empty_collection() -> None:
    """Test that no invoices yields zeros and a dash."""
    stats = aggregate([], today=TODAY)

    assert stats.total_revenue == 0
    assert stats.total_trips == 0
    assert stats.top_route == "-"
