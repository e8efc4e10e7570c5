"""Unit tests for the document renderer."""

from conftest import make_invoice
from core.documents.service.renderer import Branding, cab_label, render

BRANDING = Branding(
    name="Global Tours & Travels",
    tagline="TOURS & TRAVELS",
    address="Nashik",
    phone="+91 98815 98109",
    email="hello@example.com",
    footer_lines=["Thank you!"],
)


def kinds(tree) -> list:
    return [block.kind for block in tree.blocks]


def test_outstation_trip_has_route_block() -> None:
    """Test block order for a one-way trip."""
    tree = render(make_invoice(), BRANDING)

    assert kinds(tree) == [
        "header", "billed_to", "journey", "route", "charges", "total", "signature", "footer",
    ]
    assert tree.invoice_number == "0007"


def test_empty_stops_render_straight_route() -> None:
    """Test that no stops gives pickup then drop."""
    route = render(make_invoice(stops=[]), BRANDING).block("route")

    assert [node.kind for node in route.nodes] == ["pickup", "drop"]
    assert route.nodes[0].city == "Mumbai"


def test_stops_are_drawn_in_order() -> None:
    """Test that stops sit between pickup and drop, blanks skipped."""
    invoice = make_invoice(stops=[
        {"id": "1", "location": "Lonavala", "city": "Pune"},
        {"id": "2", "location": "", "city": ""},
        {"id": "3", "location": "Igatpuri", "city": ""},
    ])

    route = render(invoice, BRANDING).block("route")

    assert [node.location for node in route.nodes] == ["Airport", "Lonavala", "Igatpuri", "College Road"]
    assert route.nodes[2].city is None


def test_local_trip_has_usage_block() -> None:
    """Test that local trips show km and hours instead of a route."""
    tree = render(make_invoice(trip_type="local", total_km=80, total_hours=8), BRANDING)

    assert tree.block("route") is None
    usage = {row.label: row.value for row in tree.block("usage").rows}
    assert usage["Total KM"] == "80 km"
    assert usage["Total Hours"] == "8 hrs"


def test_missing_optional_fields_are_omitted() -> None:
    """Test that no driver, vehicle or return date leaves no rows behind."""
    tree = render(make_invoice(), BRANDING)

    labels = [row.label for row in tree.block("journey").rows]
    assert labels == ["Date", "Type"]


def test_optional_fields_when_present() -> None:
    """Test that vehicle and driver details appear when set."""
    invoice = make_invoice(cab_type="suv", vehicle_model="Innova Crysta", cab_number="mh 15 ab 1234",
                           driver_name="Sunil", starting_km=1000, closing_km=1250)

    rows = {row.label: row.value for row in render(invoice, BRANDING).block("journey").rows}

    assert rows["Vehicle"] == "SUV"
    assert rows["Cab No"] == "MH 15 AB 1234"
    assert rows["Driver"] == "Sunil"
    assert rows["Odometer"] == "1000 - 1250 km"
    assert "Driver Phone" not in rows


def test_charges_table() -> None:
    """Test base fare, allowance, charges and legacy toll rows."""
    invoice = make_invoice(toll_amount=120, additional_charges=[{"type": "Parking", "amount": 150}])

    rows = [(row.label, row.value) for row in render(invoice, BRANDING).block("charges").rows]

    assert rows == [
        ("Base Fare", "₹4,500"),
        ("Driver Allowance", "₹300"),
        ("Parking", "₹150"),
        ("Toll / Parking", "₹120"),
    ]


def test_zero_allowance_is_hidden() -> None:
    """Test that a zero driver allowance is not printed."""
    rows = [row.label for row in render(make_invoice(driver_allowance=0), BRANDING).block("charges").rows]

    assert "Driver Allowance" not in rows


def test_total_and_branding() -> None:
    """Test the total, payment mode and business details."""
    tree = render(make_invoice(), BRANDING)

    assert tree.block("total").rows[0].value == "₹5,050"
    assert tree.block("total").lines == ["Payment Mode: UPI"]
    assert tree.block("header").title == "Global Tours & Travels"
    assert tree.block("footer").lines == ["Thank you!"]


def test_render_is_deterministic() -> None:
    """Test that the same invoice renders identically."""
    invoice = make_invoice()

    assert render(invoice, BRANDING) == render(invoice, BRANDING)


def test_cab_labels() -> None:
    """Test vocabulary labels and free-text fallback."""
    assert cab_label("suv") == "SUV"
    assert cab_label("innova") == "Innova"
    assert cab_label("tempo traveller") == "Tempo Traveller"
