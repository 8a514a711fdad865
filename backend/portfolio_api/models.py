"""SQLModel data models.

This module defines the service's database tables using SQLModel.
The owning user of a portfolio is stored as a plain integer reference;
user records live in another service.
"""

from enum import Enum
from typing import Optional
from sqlmodel import SQLModel, Field
from datetime import datetime, timezone


# SQLite INTEGER (and BIGINT elsewhere) is a signed 64-bit value
MIN_ID = -(2 ** 63)
MAX_ID = 2 ** 63 - 1


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def id_in_range(value: int) -> bool:
    return MIN_ID <= value <= MAX_ID


class RiskProfile(str, Enum):
    """Risk classification attached to a portfolio."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class Portfolio(SQLModel, table=True):
    """A named record of a user's holdings.

    Fields:
    - `name`: display name, never blank
    - `user_id`: id of the owning user
    - `risk_profile`: one of `RiskProfile`
    - `updated_at`: stays `None` until the first update
    """
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False)
    user_id: int = Field(index=True, nullable=False)
    risk_profile: RiskProfile = Field(default=RiskProfile.MEDIUM)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None


class AuditEntry(SQLModel, table=True):
    """One audit trail record for a read or write on an entity."""
    id: Optional[int] = Field(default=None, primary_key=True)
    entity_type: str = Field(index=True)
    entity_id: int = Field(index=True)
    action: str
    detail: Optional[str] = None
    request_id: Optional[str] = None
    timestamp: datetime = Field(default_factory=utcnow)
