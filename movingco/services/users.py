from movingco.core.auth_utils import check_not_found
from movingco.core.enums import UserRole
from movingco.core.exceptions import ConflictError
from movingco.models.user import User
from movingco.repositories.users import UserRepository
from movingco.schemas.base import Page
from movingco.schemas.user import UserUpdate


class UserService:
    def __init__(self, repo: UserRepository):
        self.repo = repo

    async def list_users(self, **options) -> Page:
        return await self.repo.list(**options)

    async def list_admins(self) -> list:
        return await self.repo.list_by_type(UserRole.ADMIN)

    async def get_user(self, user_id: int) -> User:
        user = await self.repo.get(user_id)
        check_not_found(user, "User")
        return user

    async def update_user(self, user_id: int, payload: UserUpdate) -> User:
        user = await self.get_user(user_id)
        # UserUpdate carries no password or user_type field, so neither can change here.
        data = payload.model_dump(exclude_unset=True, exclude_none=True)
        if data.get("state"):
            data["state"] = data["state"].upper()
        if data.get("email") and data["email"].lower() != user.email:
            if await self.repo.exists_by_email(data["email"]):
                raise ConflictError("Email already exists")
        return await self.repo.update(user, data)

    async def deactivate_user(self, user_id: int) -> User:
        user = await self.get_user(user_id)
        return await self.repo.update(user, {"is_active": False})

    async def user_stats(self) -> dict:
        total = await self.repo.count()
        active = await self.repo.count(is_active=True)
        admins = await self.repo.count(user_type=UserRole.ADMIN, is_active=True)
        customers = await self.repo.count(user_type=UserRole.CUSTOMER, is_active=True)
        return {
            "total_users": total,
            "active_users": active,
            "inactive_users": total - active,
            "admin_count": admins,
            "customer_count": customers,
        }
