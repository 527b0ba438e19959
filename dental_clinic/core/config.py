from typing import List, Union
from pydantic import AnyHttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    PROJECT_NAME: str = "Dental Clinic Management"
    API_PREFIX: str = "/api"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS
    BACKEND_CORS_ORIGINS: List[AnyHttpUrl] = []

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    # Database
    DATABASE_URL: str = "sqlite:///./dental_clinic.db"

    @field_validator("DATABASE_URL")
    @classmethod
    def normalize_database_url(cls, v: str) -> str:
        # Managed Postgres providers still hand out the legacy scheme
        if v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v

    # JWT
    SECRET_KEY: str = "change-me-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    PASSWORD_RESET_TOKEN_EXPIRE_MINUTES: int = 10
    BCRYPT_ROUNDS: int = 12

    # Links sent by e-mail point at the SPA
    FRONTEND_URL: str = "http://localhost:5173"

    # Scheduling
    CLINIC_OPENING_TIME: str = "09:00"
    CLINIC_CLOSING_TIME: str = "17:00"
    SLOT_DURATION_MINUTES: int = 30

    # Billing
    CONSULTATION_TRANSACTION_TYPE_NAME: str = "Pagamento de Consulta"

    # Bootstrap admin, created on first start when no admin exists
    FIRST_ADMIN_EMAIL: str = "admin@dentalclinic.pt"
    FIRST_ADMIN_PASSWORD: str = "admin12345"
    FIRST_ADMIN_FIRST_NAME: str = "Admin"
    FIRST_ADMIN_LAST_NAME: str = "Clinic"

    model_config = SettingsConfigDict(case_sensitive=True, env_file=".env", extra='ignore')

settings = Settings()
