from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.analytics.dto.response.invoicestats import InvoiceStats
from core.analytics.service.analyticsservice import AnalyticsService
from routes import validate_token
from utilities.dbconfig import get_db

analytics_routes = APIRouter()


@analytics_routes.get("/", response_model=InvoiceStats)
def get_invoice_stats(token: dict = Depends(validate_token), db: Session = Depends(get_db)):
    """Revenue, trip count and most popular route across every invoice."""
    return AnalyticsService(db).get_stats()
