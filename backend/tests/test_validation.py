import pytest

from portfolio_api.models import MAX_ID, RiskProfile
from portfolio_api.schemas import PortfolioCreateRequest
from portfolio_api.validation import MAX_NAME_LENGTH, ValidationFramework

validator = ValidationFramework()


def test_valid_request_passes():
    validator.validate(PortfolioCreateRequest(name="Retirement", user_id=1, risk_profile=RiskProfile.LOW))


@pytest.mark.parametrize("name", ["", "   "])
def test_blank_name_rejected(name):
    with pytest.raises(ValueError, match="Name is required"):
        validator.validate(PortfolioCreateRequest(name=name, user_id=1, risk_profile=RiskProfile.LOW))


def test_long_name_rejected():
    req = PortfolioCreateRequest(name="x" * (MAX_NAME_LENGTH + 1), user_id=1, risk_profile=RiskProfile.LOW)
    with pytest.raises(ValueError):
        validator.validate(req)


def test_non_positive_user_and_missing_risk_rejected():
    with pytest.raises(ValueError, match="userId"):
        validator.validate(PortfolioCreateRequest(name="A", user_id=0, risk_profile=RiskProfile.LOW))
    with pytest.raises(ValueError, match="riskProfile"):
        validator.validate(PortfolioCreateRequest(name="A", user_id=1))


def test_camel_case_payload_accepted():
    req = PortfolioCreateRequest.model_validate({"name": "A", "userId": 3, "riskProfile": "HIGH"})
    assert req.user_id == 3
    assert req.risk_profile is RiskProfile.HIGH


def test_user_id_beyond_integer_range_rejected():
    req = PortfolioCreateRequest(name="A", user_id=MAX_ID + 1, risk_profile=RiskProfile.LOW)
    with pytest.raises(ValueError, match="userId must be at most"):
        validator.validate(req)
