from typing import Iterable, Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from movingco.core.metrics import track_db_operation
from movingco.models.service_area import ServiceArea


class ServiceAreaRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> list:
        res = await self.db.execute(select(ServiceArea).order_by(ServiceArea.state_name))
        return res.scalars().all()

    async def list_active(self) -> list:
        res = await self.db.execute(
            select(ServiceArea).where(ServiceArea.is_active.is_(True)).order_by(ServiceArea.state_name)
        )
        return res.scalars().all()

    async def get_by_code(self, state_code: str) -> Optional[ServiceArea]:
        res = await self.db.execute(
            select(ServiceArea).where(ServiceArea.state_code == state_code.upper())
        )
        return res.scalars().first()

    async def find_by_codes(self, state_codes: Iterable[str]) -> list:
        codes = {code.upper() for code in state_codes}
        res = await self.db.execute(select(ServiceArea).where(ServiceArea.state_code.in_(codes)))
        return res.scalars().all()

    async def count(self) -> int:
        return await self.db.scalar(select(func.count(ServiceArea.id))) or 0

    @track_db_operation("create", "service_areas")
    async def create(self, **fields) -> ServiceArea:
        area = ServiceArea(**fields)
        self.db.add(area)
        await self.db.commit()
        await self.db.refresh(area)
        return area

    @track_db_operation("bulk_create", "service_areas")
    async def create_many(self, rows: Iterable[dict]) -> list:
        areas = [ServiceArea(**row) for row in rows]
        self.db.add_all(areas)
        await self.db.commit()
        return await self.list_all()

    @track_db_operation("update", "service_areas")
    async def update(self, area: ServiceArea, data: dict) -> ServiceArea:
        for field, value in data.items():
            setattr(area, field, value)
        self.db.add(area)
        await self.db.commit()
        await self.db.refresh(area)
        return area

    @track_db_operation("delete", "service_areas")
    async def delete(self, area: ServiceArea) -> None:
        await self.db.delete(area)
        await self.db.commit()
