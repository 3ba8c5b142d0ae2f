import uuid

import pytest

from daily_diet.models.meal import ClientSession
from daily_diet.services.sessions import SessionIdentity, is_well_formed, register, resolve

pytestmark = pytest.mark.unit


class TestResolve:

    def test_missing_credential_mints_a_new_session(self):
        identity = resolve(None)

        assert identity.is_new is True
        assert uuid.UUID(identity.session_id).version == 4

    def test_each_mint_is_unique(self):
        assert resolve(None).session_id != resolve(None).session_id

    @pytest.mark.parametrize(
        "credential",
        [
            "",
            "not-a-uuid",
            "1234",
            "urn:uuid:6f1c2f44-3a0e-4c38-9d3b-2b8f3f3f9a10",
            "{6f1c2f44-3a0e-4c38-9d3b-2b8f3f3f9a10}",
            "6f1c2f443a0e4c389d3b2b8f3f3f9a10",
            "6F1C2F44-3A0E-4C38-9D3B-2B8F3F3F9A10",
        ],
    )
    def test_malformed_credential_is_replaced(self, credential):
        identity = resolve(credential)

        assert identity.is_new is True
        assert identity.session_id != credential

    def test_unknown_but_well_formed_token_is_trusted_verbatim(self):
        token = str(uuid.uuid4())

        identity = resolve(token)

        assert identity == SessionIdentity(session_id=token, is_new=False)

    def test_is_well_formed(self):
        assert is_well_formed(str(uuid.uuid4()))
        assert not is_well_formed(None)
        assert not is_well_formed("session")


class TestRegister:

    def test_registers_unknown_session_once(self, db_session):
        identity = resolve(None)

        first = register(db_session, identity)
        second = register(db_session, identity)
        db_session.commit()

        assert first is second
        assert db_session.query(ClientSession).count() == 1
        assert db_session.get(ClientSession, identity.session_id).created_at is not None

    def test_registers_self_asserted_token(self, db_session):
        identity = resolve(str(uuid.uuid4()))

        register(db_session, identity)
        db_session.commit()

        assert db_session.get(ClientSession, identity.session_id) is not None


def test_minted_tokens_fit_the_session_column():
    identity = resolve("urn:uuid:6f1c2f44-3a0e-4c38-9d3b-2b8f3f3f9a10")

    assert identity.is_new is True
    assert len(identity.session_id) == 36
