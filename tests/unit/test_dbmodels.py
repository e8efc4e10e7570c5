"""Unit tests for the table registry used at startup."""

from sqlalchemy import create_engine, inspect

from utilities.dbconfig import Base
from utilities.dbmodels import TABLE_NAMES, missing_tables


def test_invoices_registered() -> None:
    """Test that the invoice table is known to the metadata."""
    assert "invoices" in TABLE_NAMES


def test_missing_tables() -> None:
    """Test that only tables absent from the database are reported."""
    engine = create_engine("sqlite://")

    assert missing_tables(inspect(engine)) == ["invoices"]

    Base.metadata.create_all(bind=engine)

    assert missing_tables(inspect(engine)) == []
    engine.dispose()
