"""Business-rule validation for portfolio requests."""

from .models import MAX_ID
from .schemas import PortfolioCreateRequest

MAX_NAME_LENGTH = 100


class ValidationFramework:
    """Check a request against the portfolio rules.

    `validate` raises `ValueError` with a readable message on the first
    failing rule; callers translate it into an API error.
    """

    def validate(self, request: PortfolioCreateRequest) -> None:
        name = request.name
        if not name or not isinstance(name, str) or not name.strip():
            raise ValueError("Name is required")
        if len(name.strip()) > MAX_NAME_LENGTH:
            raise ValueError(f"Name must be at most {MAX_NAME_LENGTH} characters")
        if request.user_id is None or request.user_id <= 0:
            raise ValueError("userId must be a positive integer")
        if request.user_id > MAX_ID:
            raise ValueError(f"userId must be at most {MAX_ID}")
        if request.risk_profile is None:
            raise ValueError("riskProfile is required")
