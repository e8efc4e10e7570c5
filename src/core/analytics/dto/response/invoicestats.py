from pydantic import BaseModel


class InvoiceStats(BaseModel):
    total_revenue: float = 0
    monthly_revenue: float = 0
    total_trips: int = 0
    top_route: str = "-"
    top_route_full: str = "-"
    month_label: str = ""
