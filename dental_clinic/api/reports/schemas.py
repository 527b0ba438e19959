from pydantic import BaseModel
from typing import List
from datetime import date

from dental_clinic.api.appointments.schemas import AppointmentResponse
from dental_clinic.api.transactions.schemas import TransactionResponse


class DashboardMetricsResponse(BaseModel):
    today_appointments: int
    pending_payments: float
    monthly_revenue: float
    active_patients: int
    recent_appointments: List[AppointmentResponse]
    recent_transactions: List[TransactionResponse]


class TransactionTypeTotal(BaseModel):
    type: str
    category: str
    amount: float
    count: int


class DailyRevenue(BaseModel):
    date: str
    amount: float


class FinancialReportResponse(BaseModel):
    date_from: date
    date_to: date
    total_revenue: float
    total_expenses: float
    net_profit: float
    transactions_by_type: List[TransactionTypeTotal]
    daily_revenue: List[DailyRevenue]
