"""Session identity: resolve-or-mint, then register lazily on first write.

A session token is self-asserted. A well-formed token is trusted as-is and is
not looked up; it only gets a ``sessions`` row when its first meal is written.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

from sqlalchemy.orm import Session

from ..models.meal import ClientSession

logger = logging.getLogger("uvicorn")


@dataclass(frozen=True)
class SessionIdentity:
    session_id: str
    is_new: bool = False


def is_well_formed(token: str | None) -> bool:
    if not token:
        return False
    try:
        parsed = uuid.UUID(token)
    except ValueError:
        return False
    # only the canonical lowercase hyphenated form; braces, urn: and bare hex are rejected
    return str(parsed) == token


def mint_session_id() -> str:
    return str(uuid.uuid4())


def resolve(credential: str | None) -> SessionIdentity:
    """Map an inbound credential to a session identity. Never fails."""
    if is_well_formed(credential):
        return SessionIdentity(session_id=credential)
    session_id = mint_session_id()
    logger.info("Minted new session %s", session_id)
    return SessionIdentity(session_id=session_id, is_new=True)


def register(db: Session, identity: SessionIdentity) -> ClientSession:
    """Persist the session row if missing and flush it ahead of dependent rows.

    Runs inside the caller's transaction; nothing is committed here.
    """
    record = db.get(ClientSession, identity.session_id)
    if record is None:
        record = ClientSession(id=identity.session_id)
        db.add(record)
        db.flush()
        logger.info("Registered session %s", identity.session_id)
    return record
