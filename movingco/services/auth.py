import logging

from movingco.core.enums import UserRole
from movingco.core.exceptions import AuthenticationError, ConflictError
from movingco.core.security import create_access_token, hash_password, verify_password
from movingco.models.user import User
from movingco.repositories.users import UserRepository
from movingco.schemas.auth import LoginIn, RegisterIn

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, users: UserRepository):
        self.users = users

    def issue_token(self, user: User) -> str:
        return create_access_token(user.id, user.email, user.user_type)

    async def login(self, payload: LoginIn) -> tuple[User, str]:
        user = await self.users.get_by_email(payload.email)
        if not user:
            logger.info(f"Failed login for unknown email {payload.email}")
            raise AuthenticationError("Invalid email or password")

        if not user.is_active:
            raise AuthenticationError("Account is inactive. Please contact support.")

        if user.user_type != payload.user_type:
            logger.info(f"Failed login for user {user.id}: user type mismatch")
            raise AuthenticationError("Invalid user type selected")

        if not verify_password(payload.password, user.password_hash):
            logger.info(f"Failed login for user {user.id}: bad password")
            raise AuthenticationError("Invalid email or password")

        await self.users.touch_last_login(user)
        return user, self.issue_token(user)

    async def register(self, payload: RegisterIn) -> tuple[User, str]:
        if await self.users.exists_by_email(payload.email):
            raise ConflictError("Email already registered")

        fields = payload.model_dump(exclude={"password"})
        if fields.get("state"):
            fields["state"] = fields["state"].upper()
        user = await self.users.create(
            **fields,
            password_hash=hash_password(payload.password),
            user_type=UserRole.CUSTOMER,
            is_active=True,
        )
        logger.info(f"Registered customer {user.id}")
        return user, self.issue_token(user)

    async def create_admin(self, email: str, password: str, first_name: str = "", last_name: str = "") -> User:
        if await self.users.exists_by_email(email):
            raise ConflictError("Email already registered")
        return await self.users.create(
            email=email,
            password_hash=hash_password(password),
            first_name=first_name or None,
            last_name=last_name or None,
            user_type=UserRole.ADMIN,
            is_active=True,
        )
