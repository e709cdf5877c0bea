"""Audit trail for mutating operations"""
import logging
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from movingco.core.enums import AuditAction
from movingco.core.metrics import audit_logs_created
from movingco.models.audit import Audit
from movingco.utils.hashing import payload_hash

logger = logging.getLogger(__name__)


async def log_audit(
    db: AsyncSession,
    user_id: int,
    action: AuditAction,
    payload: Optional[Any] = None
) -> None:
    """Record who did what, keyed by a hash of the request payload.

    Audit failures are logged and rolled back; they never fail the caller's request.
    """
    try:
        audit_record = Audit(
            user_id=int(user_id),
            action=str(action),
            payload_hash=payload_hash(payload),
        )
        db.add(audit_record)
        await db.commit()
        audit_logs_created.labels(action=str(action)).inc()

    except Exception as e:
        logger.error(f"Audit logging failed for action {action}: {e}", exc_info=True)
        await db.rollback()
