"""Authentication and authorization utilities"""
from typing import Optional

from movingco.core.enums import UserRole
from movingco.core.exceptions import NotFoundError, PermissionDeniedError


def is_admin(current_user) -> bool:
    return current_user.user_type == UserRole.ADMIN


def check_ownership(item, current_user, resource_name: str = "Resource") -> None:

    if not is_admin(current_user) and item.user_id != current_user.id:
        raise PermissionDeniedError(f"Forbidden: You can only access your own {resource_name.lower()}s")


def check_not_found(item, resource_name: str = "Resource", resource_id: Optional[object] = None) -> None:

    if not item:
        if resource_id is not None:
            raise NotFoundError(f"{resource_name} with id {resource_id} not found")
        raise NotFoundError(f"{resource_name} not found")
