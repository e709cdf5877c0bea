import logging
from typing import List

from movingco.core.exceptions import ConflictError, NotFoundError, ValidationError
from movingco.core.metrics import admission_rejections
from movingco.models.service_area import ServiceArea
from movingco.repositories.service_areas import ServiceAreaRepository
from movingco.schemas.service_area import ServiceAreaCreate, ServiceAreaUpdate

logger = logging.getLogger(__name__)

# Continental US: the 48 contiguous states, seeded inactive.
CONTINENTAL_STATES = (
    ("AL", "Alabama"), ("AZ", "Arizona"), ("AR", "Arkansas"), ("CA", "California"),
    ("CO", "Colorado"), ("CT", "Connecticut"), ("DE", "Delaware"), ("FL", "Florida"),
    ("GA", "Georgia"), ("ID", "Idaho"), ("IL", "Illinois"), ("IN", "Indiana"),
    ("IA", "Iowa"), ("KS", "Kansas"), ("KY", "Kentucky"), ("LA", "Louisiana"),
    ("ME", "Maine"), ("MD", "Maryland"), ("MA", "Massachusetts"), ("MI", "Michigan"),
    ("MN", "Minnesota"), ("MS", "Mississippi"), ("MO", "Missouri"), ("MT", "Montana"),
    ("NE", "Nebraska"), ("NV", "Nevada"), ("NH", "New Hampshire"), ("NJ", "New Jersey"),
    ("NM", "New Mexico"), ("NY", "New York"), ("NC", "North Carolina"), ("ND", "North Dakota"),
    ("OH", "Ohio"), ("OK", "Oklahoma"), ("OR", "Oregon"), ("PA", "Pennsylvania"),
    ("RI", "Rhode Island"), ("SC", "South Carolina"), ("SD", "South Dakota"), ("TN", "Tennessee"),
    ("TX", "Texas"), ("UT", "Utah"), ("VT", "Vermont"), ("VA", "Virginia"),
    ("WA", "Washington"), ("WV", "West Virginia"), ("WI", "Wisconsin"), ("WY", "Wyoming"),
)


class ServiceAreaService:
    """Which states the company operates in, and the admission check built on it."""

    def __init__(self, repo: ServiceAreaRepository):
        self.repo = repo

    async def list_all(self) -> list:
        return await self.repo.list_all()

    async def list_active(self) -> list:
        return await self.repo.list_active()

    async def get(self, state_code: str) -> ServiceArea:
        area = await self.repo.get_by_code(state_code)
        if not area:
            raise NotFoundError("Service area not found")
        return area

    async def create(self, payload: ServiceAreaCreate) -> ServiceArea:
        if await self.repo.get_by_code(payload.state_code):
            raise ConflictError("Service area for this state already exists")
        return await self.repo.create(**payload.model_dump())

    async def update(self, state_code: str, payload: ServiceAreaUpdate) -> ServiceArea:
        area = await self.get(state_code)
        return await self.repo.update(area, payload.model_dump(exclude_unset=True, exclude_none=True))

    async def toggle(self, state_code: str) -> ServiceArea:
        area = await self.get(state_code)
        area = await self.repo.update(area, {"is_active": not area.is_active})
        logger.info(f"Service area {area.state_code} {'activated' if area.is_active else 'deactivated'}")
        return area

    async def delete(self, state_code: str) -> None:
        area = await self.get(state_code)
        await self.repo.delete(area)

    async def initialize_states(self) -> list:
        existing = await self.repo.count()
        if existing > 0:
            raise ConflictError("States already initialized")
        areas = await self.repo.create_many(
            {"state_code": code, "state_name": name, "is_active": False}
            for code, name in CONTINENTAL_STATES
        )
        logger.info(f"Initialized {len(areas)} service areas")
        return areas

    async def unserviced_states(self, *state_codes: str) -> List[str]:
        requested = []
        for code in state_codes:
            code = code.upper()
            if code not in requested:
                requested.append(code)
        active = {area.state_code for area in await self.repo.find_by_codes(requested) if area.is_active}
        return [code for code in requested if code not in active]

    async def ensure_serviceable(self, *state_codes: str) -> None:
        unserviced = await self.unserviced_states(*state_codes)
        if unserviced:
            for code in unserviced:
                admission_rejections.labels(state=code).inc()
            logger.info(f"Rejected request for unserviced states: {', '.join(unserviced)}")
            raise ValidationError(
                f"We do not currently provide service in: {', '.join(unserviced)}"
            )
