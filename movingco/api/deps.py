"""Per-request construction of repositories and services over the request's session."""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from movingco.core.config import settings
from movingco.db.session import get_db
from movingco.repositories.catalog import ServiceRepository
from movingco.repositories.quotes import QuoteRepository
from movingco.repositories.service_areas import ServiceAreaRepository
from movingco.repositories.users import UserRepository
from movingco.services.auth import AuthService
from movingco.services.catalog import CatalogService
from movingco.services.quotes import QuoteService
from movingco.services.service_areas import ServiceAreaService
from movingco.services.users import UserService


def get_service_area_service(db: AsyncSession = Depends(get_db)) -> ServiceAreaService:
    return ServiceAreaService(ServiceAreaRepository(db))


def get_quote_service(
    db: AsyncSession = Depends(get_db),
    service_areas: ServiceAreaService = Depends(get_service_area_service),
) -> QuoteService:
    return QuoteService(
        QuoteRepository(db),
        ServiceRepository(db),
        service_areas,
        enforce_service_areas=settings.ENFORCE_SERVICE_AREAS,
        strict_transitions=settings.ENFORCE_QUOTE_TRANSITIONS,
    )


def get_catalog_service(db: AsyncSession = Depends(get_db)) -> CatalogService:
    return CatalogService(ServiceRepository(db))


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(UserRepository(db))


def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(UserRepository(db))
