"""Business logic services used by HTTP controllers.

`PortfolioService` coordinates the repository, the validation rules and
the audit trail. Each write and its audit row are committed together in
a single `repository.transaction()`. Collaborators are passed in so
controllers can wire them to a request session and tests can substitute
mocks.
"""

import logging
from typing import List

from . import models
from .audit import AuditLogger
from .errors import ApiException, ErrorCodes, ResourceNotFoundException
from .repositories import PortfolioRepository
from .schemas import PortfolioCreateRequest, PortfolioOut
from .validation import ValidationFramework

logger = logging.getLogger("portfolio_api.service")

ENTITY = "Portfolio"


class PortfolioService:
    """CRUD operations on portfolios with validation and auditing."""
    def __init__(self, repository: PortfolioRepository, validator: ValidationFramework, audit_logger: AuditLogger):
        self.repository = repository
        self.validator = validator
        self.audit_logger = audit_logger

    def find_by_id(self, portfolio_id: int) -> PortfolioOut:
        """Return the portfolio with `portfolio_id`.

        Raises `ResourceNotFoundException` when no such row exists. A
        successful lookup is audited as a read.
        """
        logger.debug("Service: Finding portfolio with id: %s", portfolio_id)
        portfolio = self.repository.find_by_id(portfolio_id)
        if portfolio is None:
            logger.warning("Portfolio not found: %s", portfolio_id)
            raise self._not_found(portfolio_id)
        with self.repository.transaction():
            self.audit_logger.log_read(ENTITY, portfolio_id)
            return self._to_dto(portfolio)

    def create(self, request: PortfolioCreateRequest) -> PortfolioOut:
        """Validate `request`, persist a new portfolio and audit the creation."""
        logger.info("Service: Creating new portfolio for user: %s", request.user_id)
        try:
            self.validator.validate(request)
        except ValueError as e:
            logger.error("Validation failed for portfolio creation: %s", e)
            raise ApiException(
                ErrorCodes.VALIDATION_FAILED,
                f"Portfolio creation validation failed: {e}",
            )
        portfolio = models.Portfolio(
            name=request.name.strip(),
            user_id=request.user_id,
            risk_profile=request.risk_profile,
        )
        with self.repository.transaction():
            saved = self.repository.save(portfolio)
            self.audit_logger.log_create(ENTITY, saved.id, "Created by user")
            dto = self._to_dto(saved)
        logger.info("Successfully created portfolio id=%s user_id=%s", dto.id, request.user_id)
        return dto

    def update(self, portfolio_id: int, request: PortfolioCreateRequest) -> PortfolioOut:
        """Replace name and risk profile of an existing portfolio.

        The owning user is fixed at creation and is not changed here.
        """
        logger.info("Service: Updating portfolio with id: %s", portfolio_id)
        portfolio = self.repository.find_by_id(portfolio_id)
        if portfolio is None:
            logger.warning("Portfolio not found: %s", portfolio_id)
            raise self._not_found(portfolio_id)
        try:
            self.validator.validate(request)
        except ValueError as e:
            logger.error("Validation failed for portfolio update: %s", e)
            raise ApiException(
                ErrorCodes.VALIDATION_FAILED,
                f"Portfolio update validation failed: {e}",
            )
        portfolio.name = request.name.strip()
        portfolio.risk_profile = request.risk_profile
        with self.repository.transaction():
            updated = self.repository.save(portfolio)
            self.audit_logger.log_update(ENTITY, portfolio_id, "Updated via API")
            dto = self._to_dto(updated)
        logger.info("Successfully updated portfolio: %s", portfolio_id)
        return dto

    def delete(self, portfolio_id: int) -> None:
        logger.info("Service: Deleting portfolio with id: %s", portfolio_id)
        if not self.repository.exists_by_id(portfolio_id):
            logger.warning("Portfolio not found: %s", portfolio_id)
            raise self._not_found(portfolio_id)
        with self.repository.transaction():
            self.repository.delete_by_id(portfolio_id)
            self.audit_logger.log_delete(ENTITY, portfolio_id, "Deleted via API")
        logger.info("Successfully deleted portfolio: %s", portfolio_id)

    def find_by_user_id(self, user_id: int) -> List[PortfolioOut]:
        """Return every portfolio owned by `user_id` (possibly none)."""
        logger.debug("Service: Finding portfolios for user: %s", user_id)
        portfolios = self.repository.find_by_user_id(user_id)
        logger.info("Found %s portfolios for user: %s", len(portfolios), user_id)
        return [self._to_dto(p) for p in portfolios]

    @staticmethod
    def _not_found(portfolio_id: int) -> ResourceNotFoundException:
        return ResourceNotFoundException(
            ErrorCodes.RESOURCE_NOT_FOUND,
            f"Portfolio not found with id: {portfolio_id}",
            {"portfolioId": portfolio_id},
        )

    @staticmethod
    def _to_dto(portfolio: models.Portfolio) -> PortfolioOut:
        return PortfolioOut.model_validate(portfolio)
