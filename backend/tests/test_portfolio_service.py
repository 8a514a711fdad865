from unittest.mock import MagicMock, ANY

import pytest

from portfolio_api import models
from portfolio_api.errors import ApiException, ErrorCodes, ResourceNotFoundException
from portfolio_api.schemas import PortfolioCreateRequest
from portfolio_api.services import PortfolioService


@pytest.fixture
def repository():
    return MagicMock()


@pytest.fixture
def validator():
    return MagicMock()


@pytest.fixture
def audit_logger():
    return MagicMock()


@pytest.fixture
def service(repository, validator, audit_logger):
    return PortfolioService(repository, validator, audit_logger)


def _portfolio(pid=1, name="Test Portfolio", user_id=100, risk=models.RiskProfile.MEDIUM):
    return models.Portfolio(id=pid, name=name, user_id=user_id, risk_profile=risk)


def test_find_by_id_when_exists_returns_portfolio(service, repository, audit_logger):
    repository.find_by_id.return_value = _portfolio()

    result = service.find_by_id(1)

    assert result is not None
    assert result.id == 1
    assert result.name == "Test Portfolio"
    assert result.user_id == 100
    repository.find_by_id.assert_called_once_with(1)
    audit_logger.log_read.assert_called_once_with("Portfolio", 1)


def test_find_by_id_when_missing_raises_not_found(service, repository, audit_logger):
    repository.find_by_id.return_value = None

    with pytest.raises(ResourceNotFoundException) as exc:
        service.find_by_id(999)

    assert exc.value.error_code == ErrorCodes.RESOURCE_NOT_FOUND
    assert exc.value.status_code == 404
    repository.find_by_id.assert_called_once_with(999)
    repository.save.assert_not_called()
    repository.delete_by_id.assert_not_called()
    audit_logger.log_read.assert_not_called()


def test_create_with_valid_request_persists_once(service, repository, validator, audit_logger):
    request = PortfolioCreateRequest(name="New Portfolio", user_id=100, risk_profile=models.RiskProfile.MEDIUM)
    repository.save.return_value = _portfolio(name="New Portfolio")

    result = service.create(request)

    assert result.id == 1
    assert result.name == "New Portfolio"
    validator.validate.assert_called_once_with(request)
    repository.save.assert_called_once()
    repository.transaction.assert_called_once_with()
    saved = repository.save.call_args.args[0]
    assert saved.id is None
    assert saved.user_id == 100
    audit_logger.log_create.assert_called_once_with("Portfolio", 1, ANY)


def test_create_with_invalid_request_never_persists(service, repository, validator, audit_logger):
    request = PortfolioCreateRequest(name="", user_id=100)
    validator.validate.side_effect = ValueError("Name is required")

    with pytest.raises(ApiException) as exc:
        service.create(request)

    assert exc.value.error_code == ErrorCodes.VALIDATION_FAILED
    assert exc.value.status_code == 400
    assert "Name is required" in exc.value.message
    validator.validate.assert_called_once_with(request)
    repository.save.assert_not_called()
    audit_logger.log_create.assert_not_called()


def test_update_changes_name_and_risk_but_not_owner(service, repository, audit_logger):
    existing = _portfolio(risk=models.RiskProfile.LOW)
    repository.find_by_id.return_value = existing
    repository.save.side_effect = lambda p: p
    request = PortfolioCreateRequest(name="Renamed", user_id=555, risk_profile=models.RiskProfile.HIGH)

    result = service.update(1, request)

    assert result.name == "Renamed"
    assert result.risk_profile == models.RiskProfile.HIGH
    assert result.user_id == 100
    repository.save.assert_called_once_with(existing)
    audit_logger.log_update.assert_called_once_with("Portfolio", 1, ANY)


def test_update_when_missing_raises_not_found(service, repository, validator):
    repository.find_by_id.return_value = None
    request = PortfolioCreateRequest(name="Renamed", user_id=100, risk_profile=models.RiskProfile.HIGH)

    with pytest.raises(ResourceNotFoundException):
        service.update(999, request)

    validator.validate.assert_not_called()
    repository.save.assert_not_called()


def test_update_with_invalid_request_raises_validation_error(service, repository, validator):
    repository.find_by_id.return_value = _portfolio()
    validator.validate.side_effect = ValueError("Name is required")

    with pytest.raises(ApiException) as exc:
        service.update(1, PortfolioCreateRequest(name=" ", user_id=100))

    assert exc.value.error_code == ErrorCodes.VALIDATION_FAILED
    repository.save.assert_not_called()


def test_delete_when_exists_deletes_and_audits_once(service, repository, audit_logger):
    repository.exists_by_id.return_value = True

    service.delete(1)

    repository.delete_by_id.assert_called_once_with(1)
    audit_logger.log_delete.assert_called_once_with("Portfolio", 1, ANY)


def test_delete_when_missing_raises_and_never_deletes(service, repository, audit_logger):
    repository.exists_by_id.return_value = False

    with pytest.raises(ResourceNotFoundException):
        service.delete(999)

    repository.delete_by_id.assert_not_called()
    audit_logger.log_delete.assert_not_called()


def test_find_by_user_id_maps_every_row(service, repository):
    repository.find_by_user_id.return_value = [_portfolio(1, "A"), _portfolio(2, "B")]

    result = service.find_by_user_id(100)

    assert [p.name for p in result] == ["A", "B"]
    repository.find_by_user_id.assert_called_once_with(100)
