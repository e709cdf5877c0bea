from movingco.core.auth_utils import check_not_found
from movingco.models.service import Service
from movingco.repositories.catalog import ServiceRepository
from movingco.schemas.base import Page
from movingco.schemas.service import ServiceCreate, ServiceUpdate


class CatalogService:
    def __init__(self, repo: ServiceRepository):
        self.repo = repo

    async def list_services(self, **options) -> Page:
        return await self.repo.list(active_only=True, **options)

    async def get_service(self, service_id: int) -> Service:
        service = await self.repo.get(service_id)
        check_not_found(service, "Service")
        return service

    async def create_service(self, payload: ServiceCreate) -> Service:
        return await self.repo.create(**payload.model_dump())

    async def update_service(self, service_id: int, payload: ServiceUpdate) -> Service:
        service = await self.get_service(service_id)
        return await self.repo.update(service, payload.model_dump(exclude_unset=True, exclude_none=True))

    async def delete_service(self, service_id: int) -> Service:
        """Soft delete: the row stays so existing quotes keep their reference."""
        service = await self.get_service(service_id)
        return await self.repo.update(service, {"is_active": False})
