"""Repository classes encapsulating database operations.

Each repository is small and focused on a single table. Repositories
return SQLModel objects and only flush their changes; the service
commits once per operation through `PortfolioRepository.transaction`
so a data change and its audit row land together.
"""

from contextlib import contextmanager
from typing import List, Optional
from sqlmodel import Session, select
from . import models


class PortfolioRepository:
    """CRUD operations for `Portfolio` objects."""
    def __init__(self, session: Session):
        self.session = session

    @contextmanager
    def transaction(self):
        """Commit everything flushed inside the block, or roll it all back."""
        try:
            yield self.session
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    def find_by_id(self, portfolio_id: int) -> Optional[models.Portfolio]:
        """Return a `Portfolio` by primary key or `None` if not found.

        Ids outside the database integer range cannot exist and return `None`.
        """
        if not models.id_in_range(portfolio_id):
            return None
        return self.session.get(models.Portfolio, portfolio_id)

    def save(self, portfolio: models.Portfolio) -> models.Portfolio:
        """Insert or update `portfolio` and return the managed instance.

        Rows that already have an id get their `updated_at` stamped.
        """
        if portfolio.id is not None:
            portfolio.updated_at = models.utcnow()
        self.session.add(portfolio)
        self.session.flush()
        self.session.refresh(portfolio)
        return portfolio

    def exists_by_id(self, portfolio_id: int) -> bool:
        if not models.id_in_range(portfolio_id):
            return False
        stmt = select(models.Portfolio.id).where(models.Portfolio.id == portfolio_id)
        return self.session.exec(stmt).first() is not None

    def delete_by_id(self, portfolio_id: int) -> None:
        """Delete the row with `portfolio_id`; a missing row is a no-op."""
        portfolio = self.find_by_id(portfolio_id)
        if portfolio is None:
            return
        self.session.delete(portfolio)
        self.session.flush()

    def find_by_user_id(self, user_id: int) -> List[models.Portfolio]:
        """Return all portfolios owned by `user_id`, oldest first."""
        if not models.id_in_range(user_id):
            return []
        stmt = select(models.Portfolio).where(models.Portfolio.user_id == user_id).order_by(models.Portfolio.id)
        return list(self.session.exec(stmt).all())


class AuditRepository:
    """Append-only storage for `AuditEntry` rows."""
    def __init__(self, session: Session):
        self.session = session

    def create(self, entry: models.AuditEntry) -> models.AuditEntry:
        self.session.add(entry)
        self.session.flush()
        self.session.refresh(entry)
        return entry

    def list_for_entity(self, entity_type: str, entity_id: int) -> List[models.AuditEntry]:
        """List audit rows for one entity in the order they were written."""
        stmt = select(models.AuditEntry).where(
            models.AuditEntry.entity_type == entity_type,
            models.AuditEntry.entity_id == entity_id
        ).order_by(models.AuditEntry.id)
        return list(self.session.exec(stmt).all())
