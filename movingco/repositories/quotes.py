from typing import Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from movingco.core.enums import QuoteStatus
from movingco.core.metrics import track_db_operation
from movingco.models.quote import Quote
from movingco.schemas.base import Page


class QuoteRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    def _base_query(self):
        return select(Quote).options(selectinload(Quote.user), selectinload(Quote.service))

    async def get(self, quote_id: int) -> Optional[Quote]:
        res = await self.db.execute(
            self._base_query()
            .where(Quote.id == quote_id)
            .execution_options(populate_existing=True)
        )
        return res.scalars().first()

    async def list(
        self,
        page: int = 1,
        limit: int = 10,
        sort_by: str = "created_at",
        order: str = "desc",
        status: Optional[QuoteStatus] = None,
        user_id: Optional[int] = None,
    ) -> Page:
        filters = []
        if status:
            filters.append(Quote.status == status)
        if user_id is not None:
            filters.append(Quote.user_id == user_id)

        total = await self.db.scalar(select(func.count(Quote.id)).where(*filters))

        column = getattr(Quote, sort_by)
        q = (
            self._base_query()
            .where(*filters)
            .order_by(column.asc() if order == "asc" else column.desc(), Quote.id.desc())
            .limit(limit)
            .offset((page - 1) * limit)
        )
        res = await self.db.execute(q)
        return Page(res.scalars().all(), total or 0, page, limit)

    @track_db_operation("create", "quotes")
    async def create(self, **fields) -> Quote:
        quote = Quote(**fields)
        self.db.add(quote)
        await self.db.commit()
        return await self.get(quote.id)

    @track_db_operation("update", "quotes")
    async def update(self, quote: Quote, data: dict) -> Quote:
        for field, value in data.items():
            setattr(quote, field, value)
        self.db.add(quote)
        await self.db.commit()
        return await self.get(quote.id)

    @track_db_operation("delete", "quotes")
    async def delete(self, quote: Quote) -> None:
        await self.db.delete(quote)
        await self.db.commit()

    async def count_by_status(self) -> dict:
        res = await self.db.execute(
            select(Quote.status, func.count(Quote.id)).group_by(Quote.status)
        )
        return {QuoteStatus(status): count for status, count in res.all()}
