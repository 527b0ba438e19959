"""
Dashboard and Reports API Routes
"""

from fastapi import APIRouter, Depends, Query
from datetime import date

from dental_clinic.infrastructure.database import get_db
from dental_clinic.core.permissions import require_password_changed, require_permissions, Permissions
from dental_clinic.domain.reports.service import DashboardService, ReportService
from dental_clinic.api.reports.schemas import DashboardMetricsResponse, FinancialReportResponse

dashboard_router = APIRouter()
router = APIRouter()


@dashboard_router.get("/metrics", response_model=DashboardMetricsResponse)
def get_dashboard_metrics(
    db = Depends(get_db),
    current_user = Depends(require_password_changed)
):
    """Headline numbers and latest activity for the dashboard"""
    return DashboardService(db).get_metrics()


@router.get("/financial", response_model=FinancialReportResponse)
def get_financial_report(
    date_from: date = Query(...),
    date_to: date = Query(...),
    db = Depends(get_db),
    current_user = Depends(require_permissions([Permissions.REPORTS_READ]))
):
    """Paid revenue and expenses between two dates (inclusive)"""
    return ReportService(db).financial_report(date_from, date_to)
