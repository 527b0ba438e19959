import os

# Settings are read at import time; keep hashing fast and the engine in memory
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from datetime import date, timedelta
from typing import Callable, Dict, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from dental_clinic.main import app
from dental_clinic.infrastructure.database import get_db, init_db, Base
from dental_clinic.infrastructure.seed import seed_user_type_configs
from dental_clinic.core.security import create_access_token
from dental_clinic.domain.users.models import User, UserType
from dental_clinic.domain.users.service import UserService
from dental_clinic.domain.patients.models import Patient
from dental_clinic.domain.patients.service import PatientService
from dental_clinic.domain.catalog.models import (
    ConsultationType, ProcedureType, TransactionType, TransactionCategory
)
from dental_clinic.domain.catalog.service import (
    ConsultationTypeService, ProcedureTypeService, TransactionTypeService
)


# Test database: one shared in-memory SQLite connection
test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestSessionLocal = sessionmaker(
    bind=test_engine,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
)

DEFAULT_PASSWORD = "password123"


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    init_db(bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Create a test client with database dependency override."""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def user_type_configs(db_session: Session):
    """Default permission configs for every user type."""
    seed_user_type_configs(db_session)


@pytest.fixture(scope="function")
def make_user(db_session: Session, user_type_configs) -> Callable[..., User]:
    """Factory for staff accounts."""

    def _make_user(
        email: str,
        user_type: UserType = UserType.EMPLOYEE,
        password: str = DEFAULT_PASSWORD,
        must_change_password: bool = False,
        **extra
    ) -> User:
        data = {
            "email": email,
            "password": password,
            "first_name": extra.pop("first_name", "Test"),
            "last_name": extra.pop("last_name", "User"),
            "user_type": user_type,
        }
        data.update(extra)
        return UserService(db_session).create_user(data, must_change_password=must_change_password)

    return _make_user


@pytest.fixture(scope="function")
def admin_user(make_user) -> User:
    return make_user("admin@clinic.pt", UserType.ADMIN, first_name="Ana", last_name="Admin")


@pytest.fixture(scope="function")
def employee_user(make_user) -> User:
    return make_user("rececao@clinic.pt", UserType.EMPLOYEE, first_name="Rita", last_name="Santos")


@pytest.fixture(scope="function")
def doctor_user(make_user) -> User:
    """Doctor with no schedule of their own: clinic hours, every day."""
    return make_user("dentista@clinic.pt", UserType.DOCTOR, first_name="Joao", last_name="Silva")


def auth_headers(user: User) -> Dict[str, str]:
    """Bearer header for a user."""
    return {"Authorization": f"Bearer {create_access_token(str(user.id))}"}


@pytest.fixture(scope="function")
def headers_for() -> Callable[[User], Dict[str, str]]:
    return auth_headers


@pytest.fixture(scope="function")
def admin_headers(admin_user: User) -> Dict[str, str]:
    return auth_headers(admin_user)


@pytest.fixture(scope="function")
def employee_headers(employee_user: User) -> Dict[str, str]:
    return auth_headers(employee_user)


@pytest.fixture(scope="function")
def doctor_headers(doctor_user: User) -> Dict[str, str]:
    return auth_headers(doctor_user)


@pytest.fixture(scope="function")
def patient(db_session: Session) -> Patient:
    return PatientService(db_session).create_patient({
        "name": "Maria Costa",
        "di": "12345678",
        "nif": "234567890",
        "phone": "912345678",
        "email": "maria.costa@mail.pt",
    })


@pytest.fixture(scope="function")
def other_patient(db_session: Session) -> Patient:
    return PatientService(db_session).create_patient({
        "name": "Pedro Nunes",
        "di": "87654321",
        "phone": "936543210",
    })


@pytest.fixture(scope="function")
def consultation_type(db_session: Session) -> ConsultationType:
    return ConsultationTypeService(db_session).create({
        "name": "Consulta de Rotina",
        "price": 50,
        "is_active": True,
    })


@pytest.fixture(scope="function")
def procedure_type(db_session: Session) -> ProcedureType:
    return ProcedureTypeService(db_session).create({
        "name": "Limpeza",
        "price": 80,
        "category": "Higiene",
        "is_active": True,
    })


@pytest.fixture(scope="function")
def income_type(db_session: Session) -> TransactionType:
    return TransactionTypeService(db_session).create({
        "name": "Pagamento de Procedimento",
        "category": TransactionCategory.INCOME,
        "is_active": True,
    })


@pytest.fixture(scope="function")
def expense_type(db_session: Session) -> TransactionType:
    return TransactionTypeService(db_session).create({
        "name": "Material Odontológico",
        "category": TransactionCategory.EXPENSE,
        "is_active": True,
    })


@pytest.fixture(scope="function")
def booking_date() -> date:
    """A date a week ahead; doctors without working days work every day."""
    return date.today() + timedelta(days=7)


@pytest.fixture(scope="function")
def appointment_payload(patient, doctor_user, consultation_type, booking_date) -> dict:
    return {
        "patient_id": str(patient.id),
        "doctor_id": str(doctor_user.id),
        "consultation_type_id": str(consultation_type.id),
        "date": booking_date.isoformat(),
        "time": "10:00",
    }


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "auth: mark test as authentication related"
    )
    config.addinivalue_line(
        "markers", "patients: mark test as patient management related"
    )
    config.addinivalue_line(
        "markers", "appointments: mark test as scheduling related"
    )
    config.addinivalue_line(
        "markers", "finance: mark test as transactions or reports related"
    )
    config.addinivalue_line(
        "markers", "users: mark test as staff or permission management related"
    )
    config.addinivalue_line(
        "markers", "catalog: mark test as catalogue type related"
    )
