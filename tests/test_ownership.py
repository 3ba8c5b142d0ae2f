import pytest

from daily_diet.core.exceptions import MissingCredentialError, NotFoundError, NotOwnerError
from daily_diet.services.ownership import Decision, authorize, enforce

pytestmark = pytest.mark.unit

OWNER = "6f1c2f44-3a0e-4c38-9d3b-2b8f3f3f9a10"
STRANGER = "0b7e4d1a-8c57-4f62-a1b2-5d9e0c3f7e21"


@pytest.mark.parametrize(
    "session_id, owner_id, expected",
    [
        (None, OWNER, Decision.REJECT_MISSING_CREDENTIAL),
        ("", OWNER, Decision.REJECT_MISSING_CREDENTIAL),
        (None, None, Decision.REJECT_MISSING_CREDENTIAL),
        (OWNER, None, Decision.REJECT_NOT_FOUND),
        (STRANGER, OWNER, Decision.REJECT_NOT_OWNER),
        (OWNER, OWNER, Decision.PERMIT),
    ],
)
def test_authorize(session_id, owner_id, expected):
    assert authorize(session_id, owner_id) is expected


def test_enforce_permits_silently():
    enforce(Decision.PERMIT, "meal-1")


def test_enforce_missing_credential():
    with pytest.raises(MissingCredentialError) as exc_info:
        enforce(Decision.REJECT_MISSING_CREDENTIAL, "meal-1")
    assert exc_info.value.http_status == 401


def test_enforce_not_owner():
    with pytest.raises(NotOwnerError) as exc_info:
        enforce(Decision.REJECT_NOT_OWNER, "meal-1")
    assert exc_info.value.to_dict()["details"] == {"meal_id": "meal-1"}


def test_enforce_hides_missing_meals_by_default():
    with pytest.raises(NotOwnerError):
        enforce(Decision.REJECT_NOT_FOUND, "meal-1")


def test_enforce_can_report_missing_meals():
    with pytest.raises(NotFoundError):
        enforce(Decision.REJECT_NOT_FOUND, "meal-1", hide_missing=False)
