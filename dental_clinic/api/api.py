from fastapi import APIRouter
from dental_clinic.core.exceptions import ERROR_RESPONSES
from dental_clinic.api.auth import routes as auth
from dental_clinic.api.users import routes as users
from dental_clinic.api.doctors import routes as doctors
from dental_clinic.api.patients import routes as patients
from dental_clinic.api.catalog import routes as catalog
from dental_clinic.api.appointments import routes as appointments
from dental_clinic.api.procedures import routes as procedures
from dental_clinic.api.transactions import routes as transactions
from dental_clinic.api.reports import routes as reports

api_router = APIRouter(responses=ERROR_RESPONSES)
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(users.config_router, prefix="/user-type-configs", tags=["user-type-configs"])
api_router.include_router(doctors.router, prefix="/doctors", tags=["doctors"])
api_router.include_router(patients.router, prefix="/patients", tags=["patients"])
api_router.include_router(catalog.consultation_types_router, prefix="/consultation-types", tags=["consultation-types"])
api_router.include_router(catalog.procedure_types_router, prefix="/procedure-types", tags=["procedure-types"])
api_router.include_router(catalog.transaction_types_router, prefix="/transaction-types", tags=["transaction-types"])
api_router.include_router(appointments.router, prefix="/appointments", tags=["appointments"])
api_router.include_router(procedures.router, prefix="/procedures", tags=["procedures"])
api_router.include_router(transactions.router, prefix="/transactions", tags=["transactions"])
api_router.include_router(reports.dashboard_router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
