"""Registers the invoice store's tables on `Base.metadata`.

Alembic's env.py and the application startup import this module so that
autogenerate and the missing-table check see the same set of tables.
"""
from utilities.dbconfig import Base
from core.invoices.model.Invoice import Invoice  # noqa: F401

TABLE_NAMES = tuple(Base.metadata.tables)


def missing_tables(inspector) -> list:
    """Names of registered tables the connected database does not have yet."""
    return [name for name in TABLE_NAMES if not inspector.has_table(name)]
