from fastapi import Response, Security
from fastapi.security import APIKeyCookie

from ..services import sessions
from ..services.sessions import SessionIdentity
from .config import get_settings
from .exceptions import MissingCredentialError


_session_cookie = APIKeyCookie(name=get_settings().session_cookie_name, auto_error=False)


def resolve_session(credential: str | None = Security(_session_cookie)) -> SessionIdentity:
    return sessions.resolve(credential)


def require_session(credential: str | None = Security(_session_cookie)) -> str:
    if not sessions.is_well_formed(credential):
        raise MissingCredentialError("Unauthorized")
    return credential


def issue_session_cookie(response: Response, identity: SessionIdentity) -> None:
    if not identity.is_new:
        return
    settings = get_settings()
    response.set_cookie(
        key=settings.session_cookie_name,
        value=identity.session_id,
        max_age=settings.session_cookie_max_age,
        path="/",
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )
