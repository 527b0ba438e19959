from datetime import datetime, timedelta
from typing import Optional, Dict, Any
import jwt
from passlib.context import CryptContext
from dental_clinic.core.config import settings

# Password hashing
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)

ACCESS_TOKEN = "access"
PASSWORD_RESET_TOKEN = "password_reset"


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Verify a password against its hash"""
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Malformed hash stored for the user
        return False


def get_password_hash(password: str) -> str:
    """Generate password hash"""
    return pwd_context.hash(password)


def _create_token(subject: str, data: Dict[str, Any], token_type: str, expires_delta: timedelta) -> str:
    to_encode = data.copy()
    now = datetime.utcnow()
    to_encode.update({
        "exp": now + expires_delta,
        "iat": now,
        "sub": subject,
        "token_type": token_type
    })
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_access_token(subject: str, data: Optional[Dict[str, Any]] = None) -> str:
    """Create JWT access token"""
    return _create_token(
        subject,
        data or {},
        ACCESS_TOKEN,
        timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )


def create_password_reset_token(subject: str, email: str) -> str:
    """Create a short-lived JWT used by the forgot-password flow"""
    return _create_token(
        subject,
        {"email": email},
        PASSWORD_RESET_TOKEN,
        timedelta(minutes=settings.PASSWORD_RESET_TOKEN_EXPIRE_MINUTES),
    )


def decode_token(token: str) -> Optional[Dict[str, Any]]:
    """Decode and validate JWT token"""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        return payload
    except jwt.PyJWTError:
        return None


def verify_token(token: str, token_type: str = ACCESS_TOKEN) -> Optional[Dict[str, Any]]:
    """Verify token and check token type"""
    payload = decode_token(token)
    if not payload:
        return None

    if payload.get("token_type") != token_type:
        return None

    return payload
