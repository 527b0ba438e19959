from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from dental_clinic.core.config import settings

is_sqlite = settings.DATABASE_URL.lower().startswith("sqlite")

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=settings.DEBUG,
    connect_args={"check_same_thread": False} if is_sqlite else {}
)
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False
)

# Base model
Base = declarative_base()


def get_db():
    """Dependency to get database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def import_models():
    """Import every model module so Base.metadata knows all tables"""
    from dental_clinic.domain.users import models as users_models  # noqa: F401
    from dental_clinic.domain.patients import models as patients_models  # noqa: F401
    from dental_clinic.domain.catalog import models as catalog_models  # noqa: F401
    from dental_clinic.domain.appointments import models as appointments_models  # noqa: F401
    from dental_clinic.domain.procedures import models as procedures_models  # noqa: F401
    from dental_clinic.domain.finance import models as finance_models  # noqa: F401


def init_db(bind=None):
    """Initialize database tables"""
    import_models()
    Base.metadata.create_all(bind=bind or engine)


def close_db():
    """Close database connections"""
    engine.dispose()
