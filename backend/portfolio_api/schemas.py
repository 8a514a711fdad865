"""Pydantic request/response schemas used by the API.

Schemas keep API input/output shapes stable. Field names are snake_case
in Python and camelCase on the wire; requests accept either form.
"""

from datetime import datetime
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .models import RiskProfile

T = TypeVar("T")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PortfolioCreateRequest(CamelModel):
    """Payload for creating or updating a portfolio.

    Only the type of each field is checked here; business rules such as
    a non-blank name live in `validation.ValidationFramework`.
    """
    name: str
    user_id: int
    risk_profile: Optional[RiskProfile] = None


class PortfolioOut(CamelModel):
    """Portfolio as returned to API clients."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    name: str
    user_id: int
    risk_profile: RiskProfile
    created_at: datetime
    updated_at: Optional[datetime] = None


class ErrorBody(CamelModel):
    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


class ResponseMetadata(CamelModel):
    timestamp: datetime
    request_id: str


class ApiResponse(CamelModel, Generic[T]):
    """Uniform response envelope; exactly one of `data`/`error` is set."""
    success: bool
    data: Optional[T] = None
    error: Optional[ErrorBody] = None
    metadata: ResponseMetadata


class PortfolioResponse(ApiResponse[PortfolioOut]):
    pass


class PortfolioListResponse(ApiResponse[List[PortfolioOut]]):
    pass
