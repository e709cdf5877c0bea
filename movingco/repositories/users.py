from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from movingco.core.enums import UserRole
from movingco.core.metrics import track_db_operation
from movingco.models.base import utcnow
from movingco.models.user import User
from movingco.schemas.base import Page

USER_SORT_FIELDS = {"created_at", "email", "last_name", "first_name"}


class UserRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, user_id: int) -> Optional[User]:
        res = await self.db.execute(select(User).where(User.id == user_id))
        return res.scalars().first()

    async def get_by_email(self, email: str) -> Optional[User]:
        res = await self.db.execute(select(User).where(User.email == email.lower()))
        return res.scalars().first()

    async def exists_by_email(self, email: str) -> bool:
        return await self.get_by_email(email) is not None

    @track_db_operation("create", "users")
    async def create(self, **fields) -> User:
        fields["email"] = fields["email"].lower()
        user = User(**fields)
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        return user

    @track_db_operation("update", "users")
    async def update(self, user: User, data: dict) -> User:
        if "email" in data and data["email"]:
            data["email"] = data["email"].lower()
        for field, value in data.items():
            setattr(user, field, value)
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def touch_last_login(self, user: User) -> None:
        user.last_login_at = utcnow()
        self.db.add(user)
        await self.db.commit()

    async def list(
        self,
        page: int = 1,
        limit: int = 10,
        sort_by: str = "created_at",
        order: str = "desc",
        user_type: Optional[UserRole] = None,
    ) -> Page:
        q = select(User).where(User.is_active.is_(True))
        if user_type:
            q = q.where(User.user_type == user_type)

        total = await self.db.scalar(select(func.count()).select_from(q.subquery()))

        column = getattr(User, sort_by if sort_by in USER_SORT_FIELDS else "created_at")
        q = q.order_by(column.asc() if order == "asc" else column.desc(), User.id)
        q = q.limit(limit).offset((page - 1) * limit)
        res = await self.db.execute(q)
        return Page(res.scalars().all(), total or 0, page, limit)

    async def list_by_type(self, user_type: UserRole) -> List[User]:
        res = await self.db.execute(
            select(User)
            .where(User.user_type == user_type, User.is_active.is_(True))
            .order_by(User.first_name, User.last_name)
        )
        return res.scalars().all()

    async def count(self, **filters) -> int:
        q = select(func.count(User.id))
        for field, value in filters.items():
            q = q.where(getattr(User, field) == value)
        return await self.db.scalar(q) or 0
