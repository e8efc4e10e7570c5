from sqlalchemy import Date, DateTime, Integer, JSON, Numeric, String
from sqlalchemy.sql import func
from sqlalchemy.orm import Mapped, mapped_column
from utilities.dbconfig import Base
from utilities.uniqueidgenerator import UniqueIdGenerator
from datetime import date, datetime
from typing import Any, Dict, List, Optional


Money = Numeric(10, 2, asdecimal=False)


class Invoice(Base):
    __tablename__ = "invoices"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=UniqueIdGenerator.generate_invoice_id)
    invoice_number: Mapped[int] = mapped_column(Integer, nullable=False, unique=True, index=True)

    invoice_date: Mapped[date] = mapped_column(Date, nullable=False)
    journey_date: Mapped[date] = mapped_column(Date, nullable=False)
    return_date: Mapped[Optional[date]] = mapped_column(Date)

    customer_name: Mapped[str] = mapped_column(String, nullable=False)
    customer_phone: Mapped[str] = mapped_column(String(15), nullable=False)
    driver_name: Mapped[Optional[str]] = mapped_column(String)
    driver_phone: Mapped[Optional[str]] = mapped_column(String(15))

    pickup_location: Mapped[str] = mapped_column(String, nullable=False)
    pickup_city: Mapped[Optional[str]] = mapped_column(String)
    destination: Mapped[str] = mapped_column(String, nullable=False)
    drop_city: Mapped[Optional[str]] = mapped_column(String)
    # Route order is significant; stored as [{"id", "location", "city"}, ...]
    stops: Mapped[List[Any]] = mapped_column(JSON, nullable=False, default=list)

    # Plain strings so older spellings still load; normalised on read
    trip_type: Mapped[Optional[str]] = mapped_column(String(20))
    journey_type: Mapped[Optional[str]] = mapped_column(String(20))

    cab_type: Mapped[Optional[str]] = mapped_column(String(30))
    vehicle_model: Mapped[Optional[str]] = mapped_column(String)
    cab_number: Mapped[Optional[str]] = mapped_column(String(20))
    starting_km: Mapped[Optional[float]] = mapped_column(Money)
    closing_km: Mapped[Optional[float]] = mapped_column(Money)
    total_km: Mapped[Optional[float]] = mapped_column(Money)
    total_hours: Mapped[Optional[float]] = mapped_column(Money)

    fare_amount: Mapped[float] = mapped_column(Money, nullable=False, default=0)
    toll_amount: Mapped[Optional[float]] = mapped_column(Money, default=0)
    driver_allowance: Mapped[Optional[float]] = mapped_column(Money, default=0)
    additional_charges: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    total_amount: Mapped[float] = mapped_column(Money, nullable=False, default=0)

    payment_mode: Mapped[str] = mapped_column(String(10), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Invoice(id={self.id}, invoice_number={self.invoice_number}, total_amount={self.total_amount})>"
