"""Audit trail for reads and writes on domain entities.

Every call stores an `AuditEntry` row and mirrors it as a structured
`audit_event {json}` log line for log shippers.
"""

import json
import logging
from typing import Optional

from sqlmodel import Session

from . import models
from .repositories import AuditRepository

_LOGGER = logging.getLogger("portfolio_api.audit")


class AuditLogger:
    """Record READ/CREATE/UPDATE/DELETE actions for compliance."""

    def __init__(self, session: Session, request_id: Optional[str] = None):
        self.repo = AuditRepository(session)
        self.request_id = request_id

    def log_read(self, entity_type: str, entity_id: int) -> models.AuditEntry:
        return self._record("READ", entity_type, entity_id, None)

    def log_create(self, entity_type: str, entity_id: int, detail: Optional[str] = None) -> models.AuditEntry:
        return self._record("CREATE", entity_type, entity_id, detail)

    def log_update(self, entity_type: str, entity_id: int, detail: Optional[str] = None) -> models.AuditEntry:
        return self._record("UPDATE", entity_type, entity_id, detail)

    def log_delete(self, entity_type: str, entity_id: int, detail: Optional[str] = None) -> models.AuditEntry:
        return self._record("DELETE", entity_type, entity_id, detail)

    def _record(self, action: str, entity_type: str, entity_id: int, detail: Optional[str]) -> models.AuditEntry:
        entry = self.repo.create(models.AuditEntry(
            entity_type=entity_type,
            entity_id=entity_id,
            action=action,
            detail=detail,
            request_id=self.request_id,
        ))
        _LOGGER.info(
            "audit_event %s",
            json.dumps(
                {
                    "action": action,
                    "entity_type": entity_type,
                    "entity_id": entity_id,
                    "detail": detail,
                    "request_id": self.request_id,
                    "timestamp": entry.timestamp.isoformat(),
                },
                ensure_ascii=True,
            ),
        )
        return entry
