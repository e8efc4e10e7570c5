"""Unit tests for the invoice repository on SQLite."""

from datetime import date

import pytest
from sqlalchemy.orm import Session

from conftest import make_invoice
from core.exceptions.InvoiceException import InvoiceNotFoundException
from core.invoices.dto.request.invoicecreate import InvoiceCreate
from core.invoices.model.Invoice import Invoice
from core.invoices.model.triptype import TripType
from core.invoices.service.invoiceservice import InvoiceService, search_invoices
from utilities.exceptions import DatabaseValidationError


def invoice_data(**overrides) -> InvoiceCreate:
    data = {
        "invoice_date": date(2026, 10, 18),
        "journey_date": date(2026, 10, 18),
        "customer_name": "Asha Patil",
        "customer_phone": "9876543210",
        "pickup_location": "Airport",
        "destination": "College Road",
        "stops": [{"id": "s1", "location": "Lonavala", "city": "Pune"}],
        "fare_amount": 4500,
        "driver_allowance": 300,
        "additional_charges": [{"type": "Toll", "amount": 250}],
        "total_amount": 5050,
        "payment_mode": "upi",
    }
    data.update(overrides)
    return InvoiceCreate(**data)


@pytest.fixture
def service(db_session: Session) -> InvoiceService:
    """Repository bound to the in-memory database."""
    return InvoiceService(db_session)


def test_numbers_are_sequential(service: InvoiceService) -> None:
    """Test that invoice numbers count up from one."""
    assert service.get_max_invoice_number() == 0

    first = service.create_invoice(invoice_data())
    second = service.create_invoice(invoice_data(customer_name="Ravi"))

    assert (first.invoice_number, second.invoice_number) == (1, 2)
    assert service.get_next_invoice_number() == 3


def test_created_record_round_trips(service: InvoiceService) -> None:
    """Test that stored fields come back in the response shape."""
    created = service.create_invoice(invoice_data())

    response = service.to_response(service.get_invoice_by_id(created.id))

    assert response.customer_name == "Asha Patil"
    assert response.stops[0].location == "Lonavala"
    assert response.additional_charges[0].amount == 250
    assert response.trip_type is TripType.ONE_WAY
    assert response.total_amount == 5050
    assert response.created_at is not None


def test_missing_invoice(service: InvoiceService) -> None:
    """Test that an unknown id raises a 404 exception."""
    with pytest.raises(InvoiceNotFoundException):
        service.get_invoice_by_id("nope")


def test_update_overwrites_every_field(service: InvoiceService) -> None:
    """Test that an update replaces the record and keeps its number."""
    created = service.create_invoice(invoice_data())

    updated = service.update_invoice(created.id, invoice_data(customer_name="Ravi", stops=[], total_amount=4800,
                                                              additional_charges=[]))

    assert updated.invoice_number == created.invoice_number
    assert updated.customer_name == "Ravi"
    assert updated.stops == []
    assert updated.total_amount == 4800


def test_delete(service: InvoiceService) -> None:
    """Test that a deleted invoice is gone."""
    created = service.create_invoice(invoice_data())

    service.delete_invoice(created.id)

    with pytest.raises(InvoiceNotFoundException):
        service.get_invoice_by_id(created.id)


def test_duplicate_number_is_reported(service: InvoiceService, db_session: Session) -> None:
    """Test that a number collision surfaces as a validation error."""
    service.create_invoice(invoice_data())
    clash = Invoice(**service._payload(invoice_data()))
    clash.invoice_number = 1
    db_session.add(clash)

    with pytest.raises(DatabaseValidationError) as exc_info:
        service._commit("create invoice")

    assert exc_info.value.field == "invoice_number"


def test_listing_is_newest_first_and_paginated(service: InvoiceService) -> None:
    """Test ordering, paging flags and search."""
    for name in ("Asha", "Ravi", "Meera"):
        service.create_invoice(invoice_data(customer_name=name))

    everything = service.get_all_invoices()
    page = service.get_all_invoices_paginated(0, 2)

    assert [i.invoice_number for i in everything] == [3, 2, 1]
    assert page["total"] == 3
    assert len(page["invoices"]) == 2
    assert page["has_next"] is True
    assert page["has_prev"] is False
    assert [i.customer_name for i in service.get_all_invoices("ravi")] == ["Ravi"]


def test_legacy_rows_are_normalised(service: InvoiceService, db_session: Session) -> None:
    """Test that an old-shaped row reads back in the current shape."""
    row = Invoice(**service._payload(invoice_data()))
    row.invoice_number = 9
    row.trip_type = "roundtrip"
    row.stops = ["Igatpuri"]
    db_session.add(row)
    db_session.commit()

    response = service.to_response(row)

    assert response.trip_type is TripType.ROUND_TRIP
    assert response.stops[0].location == "Igatpuri"
    assert response.stops[0].id


def test_search_matches_number_name_and_phone() -> None:
    """Test the dashboard search rules."""
    invoices = [
        make_invoice(id="1", invoice_number=12, customer_name="Asha Patil", customer_phone="9876543210"),
        make_invoice(id="2", invoice_number=7, customer_name="Ravi", customer_phone="9988776655"),
    ]

    assert [i.id for i in search_invoices(invoices, "12")] == ["1"]
    assert [i.id for i in search_invoices(invoices, "PATIL")] == ["1"]
    assert [i.id for i in search_invoices(invoices, "99887")] == ["2"]
    assert len(search_invoices(invoices, "  ")) == 2
