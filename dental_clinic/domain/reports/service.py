"""
Reports Service Layer

Dashboard metrics and the financial report. Revenue figures only count
paid transactions; the dashboard's pending total is what is still owed.
"""

from typing import Dict, Any, Optional
from datetime import date, datetime, timedelta
from collections import OrderedDict

from dental_clinic.core.exceptions import ValidationError
from dental_clinic.domain.appointments.repository import AppointmentRepository
from dental_clinic.domain.catalog.models import TransactionCategory
from dental_clinic.domain.finance.models import TransactionStatus
from dental_clinic.domain.finance.repository import TransactionRepository

ACTIVE_PATIENT_WINDOW_DAYS = 183
RECENT_ITEMS = 5


def month_bounds(today: date) -> tuple:
    start = datetime(today.year, today.month, 1)
    if today.month == 12:
        end = datetime(today.year + 1, 1, 1)
    else:
        end = datetime(today.year, today.month + 1, 1)
    return start, end


class DashboardService:
    def __init__(self, db):
        self.db = db
        self.appointment_repo = AppointmentRepository(db)
        self.transaction_repo = TransactionRepository(db)

    def get_metrics(self, today: Optional[date] = None) -> Dict[str, Any]:
        today = today or date.today()
        month_start, month_end = month_bounds(today)

        return {
            "today_appointments": self.appointment_repo.count_for_date(today),
            "pending_payments": self.transaction_repo.sum_by_status(TransactionStatus.PENDING),
            "monthly_revenue": self.transaction_repo.sum_paid(
                TransactionCategory.INCOME, month_start, month_end
            ),
            "active_patients": self.appointment_repo.count_distinct_patients_since(
                today - timedelta(days=ACTIVE_PATIENT_WINDOW_DAYS)
            ),
            "recent_appointments": self.appointment_repo.get_recent(RECENT_ITEMS),
            "recent_transactions": self.transaction_repo.get_recent(RECENT_ITEMS),
        }


class ReportService:
    def __init__(self, db):
        self.db = db
        self.transaction_repo = TransactionRepository(db)

    def financial_report(self, date_from: date, date_to: date) -> Dict[str, Any]:
        """Paid totals between two dates, both inclusive"""
        if date_from > date_to:
            raise ValidationError("date_from must not be after date_to")

        start = datetime.combine(date_from, datetime.min.time())
        end = datetime.combine(date_to + timedelta(days=1), datetime.min.time())

        total_revenue = 0.0
        total_expenses = 0.0
        by_type: "OrderedDict[str, Dict[str, Any]]" = OrderedDict()
        daily: "OrderedDict[str, float]" = OrderedDict()

        for transaction, transaction_type in self.transaction_repo.get_paid_with_types(start, end):
            amount = float(transaction.amount)
            if transaction_type.category == TransactionCategory.INCOME:
                total_revenue += amount
                day = transaction.transaction_date.date().isoformat()
                daily[day] = daily.get(day, 0.0) + amount
            else:
                total_expenses += amount

            entry = by_type.setdefault(transaction_type.name, {
                "type": transaction_type.name,
                "category": transaction_type.category.value,
                "amount": 0.0,
                "count": 0,
            })
            entry["amount"] += amount
            entry["count"] += 1

        return {
            "date_from": date_from,
            "date_to": date_to,
            "total_revenue": round(total_revenue, 2),
            "total_expenses": round(total_expenses, 2),
            "net_profit": round(total_revenue - total_expenses, 2),
            "transactions_by_type": list(by_type.values()),
            "daily_revenue": [
                {"date": day, "amount": round(amount, 2)} for day, amount in daily.items()
            ],
        }
