from __future__ import annotations

import enum
import logging

from ..core.exceptions import MissingCredentialError, NotFoundError, NotOwnerError

logger = logging.getLogger("uvicorn")


class Decision(str, enum.Enum):
    PERMIT = "permit"
    REJECT_MISSING_CREDENTIAL = "reject_missing_credential"
    REJECT_NOT_OWNER = "reject_not_owner"
    REJECT_NOT_FOUND = "reject_not_found"


def authorize(session_id: str | None, resource_owner_id: str | None) -> Decision:
    """Decide whether ``session_id`` may touch a meal owned by ``resource_owner_id``.

    A ``None`` owner means the meal does not exist.
    """
    if not session_id:
        return Decision.REJECT_MISSING_CREDENTIAL
    if resource_owner_id is None:
        return Decision.REJECT_NOT_FOUND
    if resource_owner_id != session_id:
        return Decision.REJECT_NOT_OWNER
    return Decision.PERMIT


def enforce(decision: Decision, meal_id: str, *, hide_missing: bool = True) -> None:
    """Raise the error matching a rejection.

    With ``hide_missing`` a missing meal is reported the same way as a meal
    owned by someone else, so mutations never reveal which ids exist.
    """
    if decision is Decision.PERMIT:
        return
    logger.warning("Rejected access to meal %s: %s", meal_id, decision.value)
    if decision is Decision.REJECT_MISSING_CREDENTIAL:
        raise MissingCredentialError("Unauthorized")
    if decision is Decision.REJECT_NOT_FOUND and not hide_missing:
        raise NotFoundError("Meal not found", details={"meal_id": meal_id})
    raise NotOwnerError("Unauthorized", details={"meal_id": meal_id})
