from datetime import datetime, timedelta, timezone
from typing import Optional, Dict
import jwt
from passlib.context import CryptContext
from app.config import settings

# Configuration - use centralized settings
SECRET_KEY = settings.SECRET_KEY
ALGORITHM = settings.ALGORITHM
ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


class TokenError(Exception):
    """Raised when a token cannot be decoded; ``expired`` tells the two cases apart."""

    def __init__(self, message: str, expired: bool = False):
        super().__init__(message)
        self.expired = expired


def create_access_token(
    user_id: int,
    tenant_id: Optional[int] = None,
    role_id: Optional[int] = None,
    is_super_admin: bool = False,
    custom_claims: Optional[Dict] = None,
    expires_delta: Optional[timedelta] = None
) -> str:
    to_encode = {
        "user_id": user_id,
        "tenant_id": tenant_id,
        "role_id": role_id,
        "is_super_admin": is_super_admin,
        "token_type": "access",
    }

    if custom_claims:
        to_encode.update(custom_claims)

    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire, "iat": now})

    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def verify_token(token: str) -> Dict:
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])

    except jwt.ExpiredSignatureError as e:
        raise TokenError("Token expired", expired=True) from e

    except jwt.InvalidTokenError as e:
        raise TokenError("Invalid token") from e


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Stored value is not a recognisable hash
        return False
