from typing import Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from movingco.core.metrics import track_db_operation
from movingco.models.service import Service
from movingco.schemas.base import Page

SERVICE_SORT_FIELDS = {"created_at", "updated_at", "title"}


class ServiceRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, service_id: int) -> Optional[Service]:
        res = await self.db.execute(select(Service).where(Service.id == service_id))
        return res.scalars().first()

    async def list(
        self,
        page: int = 1,
        limit: int = 10,
        sort_by: str = "created_at",
        order: str = "desc",
        active_only: bool = True,
    ) -> Page:
        q = select(Service)
        if active_only:
            q = q.where(Service.is_active.is_(True))

        total = await self.db.scalar(select(func.count()).select_from(q.subquery()))

        column = getattr(Service, sort_by if sort_by in SERVICE_SORT_FIELDS else "created_at")
        q = q.order_by(column.asc() if order == "asc" else column.desc(), Service.id)
        q = q.limit(limit).offset((page - 1) * limit)
        res = await self.db.execute(q)
        return Page(res.scalars().all(), total or 0, page, limit)

    @track_db_operation("create", "services")
    async def create(self, **fields) -> Service:
        service = Service(**fields)
        self.db.add(service)
        await self.db.commit()
        await self.db.refresh(service)
        return service

    @track_db_operation("update", "services")
    async def update(self, service: Service, data: dict) -> Service:
        for field, value in data.items():
            setattr(service, field, value)
        self.db.add(service)
        await self.db.commit()
        await self.db.refresh(service)
        return service

    async def count(self, **filters) -> int:
        q = select(func.count(Service.id))
        for field, value in filters.items():
            q = q.where(getattr(Service, field) == value)
        return await self.db.scalar(q) or 0
