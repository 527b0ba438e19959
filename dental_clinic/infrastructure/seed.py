"""
Default data created on startup.

Every step checks for existing rows first, so running it on each boot is
safe.
"""

from loguru import logger

from dental_clinic.core.config import settings
from dental_clinic.core.permissions import Permissions
from dental_clinic.domain.catalog.models import TransactionType, TransactionCategory
from dental_clinic.domain.users.models import UserType
from dental_clinic.domain.users.repository import UserRepository, UserTypeConfigRepository
from dental_clinic.domain.users.service import UserService

DOCTOR_PERMISSIONS = [
    Permissions.PATIENTS_READ,
    Permissions.PATIENTS_WRITE,
    Permissions.APPOINTMENTS_READ,
    Permissions.APPOINTMENTS_WRITE,
    Permissions.PROCEDURES_READ,
    Permissions.PROCEDURES_WRITE,
    Permissions.TRANSACTIONS_READ,
]

EMPLOYEE_PERMISSIONS = [
    Permissions.PATIENTS_READ,
    Permissions.PATIENTS_WRITE,
    Permissions.APPOINTMENTS_READ,
    Permissions.APPOINTMENTS_WRITE,
    Permissions.TRANSACTIONS_READ,
]

DEFAULT_USER_TYPE_CONFIGS = [
    {
        "name": "Médico",
        "user_type": UserType.DOCTOR,
        "description": "Acesso a consultas e procedimentos",
        "granted": DOCTOR_PERMISSIONS,
    },
    {
        "name": "Funcionário",
        "user_type": UserType.EMPLOYEE,
        "description": "Acesso a agendamentos e pacientes",
        "granted": EMPLOYEE_PERMISSIONS,
    },
]

DEFAULT_TRANSACTION_TYPES = [
    ("Pagamento de Procedimento", TransactionCategory.INCOME, "Pagamento referente a procedimento realizado"),
    ("Pagamento de Tratamento", TransactionCategory.INCOME, "Pagamento referente a tratamento completo"),
    ("Desconto", TransactionCategory.EXPENSE, "Desconto aplicado ao paciente"),
    ("Estorno", TransactionCategory.EXPENSE, "Estorno de pagamento"),
    ("Material Odontológico", TransactionCategory.EXPENSE, "Compra de materiais odontológicos"),
    ("Equipamento", TransactionCategory.EXPENSE, "Compra ou manutenção de equipamentos"),
    ("Aluguel", TransactionCategory.EXPENSE, "Pagamento de aluguel do consultório"),
    ("Salário", TransactionCategory.EXPENSE, "Pagamento de salários"),
]


def permission_map(granted) -> dict:
    granted = set(granted)
    return {perm: perm in granted for perm in Permissions.all()}


def seed_user_type_configs(db) -> int:
    repo = UserTypeConfigRepository(db)
    created = 0
    for config in DEFAULT_USER_TYPE_CONFIGS:
        if repo.get_by_name(config["name"]):
            continue
        repo.create({
            "name": config["name"],
            "user_type": config["user_type"],
            "description": config["description"],
            "permissions": permission_map(config["granted"]),
            "is_active": True,
        })
        created += 1
    return created


def seed_transaction_types(db) -> int:
    types = [
        (settings.CONSULTATION_TRANSACTION_TYPE_NAME, TransactionCategory.INCOME,
         "Pagamento referente a consulta realizada"),
    ] + DEFAULT_TRANSACTION_TYPES

    created = 0
    for name, category, description in types:
        if db.query(TransactionType).filter(TransactionType.name == name).first():
            continue
        db.add(TransactionType(name=name, category=category, description=description, is_active=True))
        created += 1
    db.commit()
    return created


def seed_first_admin(db) -> bool:
    """Bootstrap admin with a temporary password, only while no admin exists"""
    if UserRepository(db).count_admins() > 0:
        return False
    UserService(db).create_user({
        "email": settings.FIRST_ADMIN_EMAIL,
        "password": settings.FIRST_ADMIN_PASSWORD,
        "first_name": settings.FIRST_ADMIN_FIRST_NAME,
        "last_name": settings.FIRST_ADMIN_LAST_NAME,
        "user_type": UserType.ADMIN,
    }, must_change_password=True)
    logger.warning(f"Created first admin {settings.FIRST_ADMIN_EMAIL}; change its password on first login")
    return True


def seed_defaults(db) -> None:
    configs = seed_user_type_configs(db)
    types = seed_transaction_types(db)
    admin = seed_first_admin(db)
    logger.info(f"Seed complete: {configs} user type configs, {types} transaction types, admin created: {admin}")
