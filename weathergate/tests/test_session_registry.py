from __future__ import annotations

import json
from pathlib import Path

import pytest

from weathergate.application.services.session_registry import SessionRegistry
from weathergate.application.services.user_directory import UserDirectory
from weathergate.domain.users.entities import Session
from weathergate.domain.users.exceptions import (
    InconsistentStateError,
    UnknownSessionError,
)
from weathergate.infrastructure.repositories.users.json_user_repository import (
    JsonSessionRepository,
    open_session_store,
)
from weathergate.shared.errors import TokenGenerationError


def test_created_session_resolves_to_its_user(
    directory: UserDirectory, registry: SessionRegistry
) -> None:
    alice = directory.create_user("alice", "pw1")
    directory.create_user("bob", "pw2")

    session = registry.create_session("alice")

    assert session.username == "alice"
    assert registry.get_user_by_token(session.token) == alice


def test_session_is_persisted(
    directory: UserDirectory, registry: SessionRegistry, sessions_file: Path
) -> None:
    directory.create_user("alice", "pw1")

    session = registry.create_session("alice")

    on_disk = json.loads(sessions_file.read_text(encoding="utf-8"))
    assert on_disk[session.token] == {"token": session.token, "username": "alice"}


@pytest.mark.parametrize("token", ["", None, "never-issued"])
def test_unknown_or_empty_token_is_rejected(registry: SessionRegistry, token: str | None) -> None:
    with pytest.raises(UnknownSessionError):
        registry.get_user_by_token(token)


def test_issuing_many_sessions_yields_distinct_tokens(
    directory: UserDirectory, registry: SessionRegistry
) -> None:
    directory.create_user("alice", "pw1")

    tokens = {registry.create_session("alice").token for _ in range(50)}

    assert len(tokens) == 50
    assert registry.count() == 50


def test_token_collision_is_retried(directory: UserDirectory, sessions_file: Path) -> None:
    directory.create_user("alice", "pw1")
    tokens = iter(["same", "same", "fresh"])
    registry = SessionRegistry(
        sessions=JsonSessionRepository(open_session_store(sessions_file)),
        directory=directory,
        token_factory=lambda: next(tokens),
    )

    first = registry.create_session("alice")
    second = registry.create_session("alice")

    assert (first.token, second.token) == ("same", "fresh")


def test_dangling_session_raises_inconsistent_state(
    directory: UserDirectory, sessions_file: Path
) -> None:
    sessions = JsonSessionRepository(open_session_store(sessions_file))
    sessions.add(Session(token="orphan-token", username="ghost"))
    registry = SessionRegistry(sessions=sessions, directory=directory)

    with pytest.raises(InconsistentStateError):
        registry.get_user_by_token("orphan-token")


def test_create_session_for_unknown_user_is_refused(registry: SessionRegistry) -> None:
    with pytest.raises(InconsistentStateError):
        registry.create_session("ghost")


def test_lookup_has_no_side_effects(
    directory: UserDirectory, registry: SessionRegistry, sessions_file: Path
) -> None:
    directory.create_user("alice", "pw1")
    session = registry.create_session("alice")
    before = sessions_file.read_bytes()

    for _ in range(3):
        registry.get_user_by_token(session.token)

    assert sessions_file.read_bytes() == before
    assert registry.count() == 1


def test_revoke_removes_session(directory: UserDirectory, registry: SessionRegistry) -> None:
    directory.create_user("alice", "pw1")
    session = registry.create_session("alice")

    assert registry.revoke(session.token) is True
    assert registry.revoke(session.token) is False
    assert registry.revoke("") is False
    with pytest.raises(UnknownSessionError):
        registry.get_user_by_token(session.token)


def test_exhausted_token_attempts_raise_typed_error(
    directory: UserDirectory, sessions_file: Path
) -> None:
    directory.create_user("alice", "pw1")
    registry = SessionRegistry(
        sessions=JsonSessionRepository(open_session_store(sessions_file)),
        directory=directory,
        token_factory=lambda: "same",
    )
    registry.create_session("alice")

    with pytest.raises(TokenGenerationError) as exc_info:
        registry.create_session("alice")

    assert exc_info.value.code == "token_generation_failed"
    assert exc_info.value.status == 503
    assert registry.count() == 1
