# Import every model so Base.metadata knows all tables before create_all or mapper configuration.
from movingco.models.base import Base  # noqa: F401
from movingco.models.user import User  # noqa: F401
from movingco.models.service import Service  # noqa: F401
from movingco.models.service_area import ServiceArea  # noqa: F401
from movingco.models.quote import Quote  # noqa: F401
from movingco.models.audit import Audit  # noqa: F401


async def create_tables() -> None:
    from movingco.db.session import get_engine

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
