from datetime import datetime, timedelta, timezone
from typing import Callable

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession

from movingco.core.config import settings
from movingco.core.enums import UserRole
from movingco.core.exceptions import AuthenticationError, PermissionDeniedError
from movingco.db.session import get_db
from movingco.models.user import User
from movingco.repositories.users import UserRepository

JWT_ALGORITHM = "HS256"

bearer_scheme = HTTPBearer(auto_error=False)

pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
    argon2__rounds=settings.PASSWORD_HASH_ROUNDS,
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


def create_access_token(user_id: int, email: str, user_type: UserRole, expires_minutes: int | None = None) -> str:
    expires = expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES
    expire_dt = datetime.now(timezone.utc) + timedelta(minutes=expires)
    to_encode = {
        "sub": str(user_id),
        "email": email,
        "user_type": str(user_type),
        "exp": expire_dt,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except JWTError:
        raise AuthenticationError("Invalid or expired token. Please login again.")
    if payload.get("sub") is None:
        raise AuthenticationError("Invalid or expired token. Please login again.")
    return payload


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise AuthenticationError("No token provided. Please login to access this resource.")

    payload = decode_access_token(credentials.credentials)
    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise AuthenticationError("Invalid or expired token. Please login again.")

    user = await UserRepository(db).get(user_id)
    if not user:
        raise AuthenticationError("User no longer exists")
    if not user.is_active:
        raise PermissionDeniedError("User account is inactive")
    return user


def require_roles(*roles: UserRole) -> Callable:
    allowed = frozenset(roles)

    async def dependency(user: User = Depends(get_current_user)) -> User:
        if user.user_type not in allowed:
            raise PermissionDeniedError(
                f"User role '{user.user_type}' is not authorized to access this resource"
            )
        return user

    return dependency


require_admin = require_roles(UserRole.ADMIN)
