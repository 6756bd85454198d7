from __future__ import annotations

import json
import threading
from dataclasses import asdict
from pathlib import Path

import pytest

from weathergate.domain.users.entities import User
from weathergate.infrastructure.repositories.users.json_user_repository import (
    open_session_store,
    open_user_store,
)
from weathergate.infrastructure.storage import JsonFileStore
from weathergate.shared.errors import StorageIOError


def _user(name: str) -> User:
    return User(username=name, password_hash=f"hash-{name}")


def test_open_creates_missing_file_with_initial_value(users_file: Path) -> None:
    store = JsonFileStore.open(
        users_file,
        encode=asdict,
        decode=lambda raw: User(**raw),
        initial={"root": _user("root")},
    )

    assert users_file.exists()
    assert json.loads(users_file.read_text(encoding="utf-8")) == {
        "root": {"username": "root", "password_hash": "hash-root"}
    }
    assert store.get("root") == _user("root")


def test_open_without_initial_creates_empty_mapping(users_file: Path) -> None:
    store = open_user_store(users_file)

    assert json.loads(users_file.read_text(encoding="utf-8")) == {}
    assert len(store) == 0


def test_load_save_reload_is_identity(users_file: Path) -> None:
    store = open_user_store(users_file)
    store.save({"alice": _user("alice"), "bob": _user("bob")})

    reopened = open_user_store(users_file)
    loaded = reopened.load()
    reopened.save(loaded)

    assert open_user_store(users_file).load() == loaded
    assert loaded == {"alice": _user("alice"), "bob": _user("bob")}


def test_transaction_commits_on_clean_exit(users_file: Path) -> None:
    store = open_user_store(users_file)

    with store.transaction() as users:
        users["alice"] = _user("alice")

    assert store.get("alice") == _user("alice")
    assert "alice" in json.loads(users_file.read_text(encoding="utf-8"))


def test_transaction_discards_changes_on_error(users_file: Path) -> None:
    store = open_user_store(users_file)
    store.save({"alice": _user("alice")})

    with pytest.raises(RuntimeError):
        with store.transaction() as users:
            users["bob"] = _user("bob")
            raise RuntimeError("boom")

    assert store.get("bob") is None
    assert set(json.loads(users_file.read_text(encoding="utf-8"))) == {"alice"}


def test_failed_write_keeps_previous_snapshot(
    users_file: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    store = open_user_store(users_file)
    store.save({"alice": _user("alice")})

    def _fail(*_args, **_kwargs):
        raise OSError("disk full")

    monkeypatch.setattr("weathergate.infrastructure.storage.write_json_atomic", _fail)

    with pytest.raises(StorageIOError):
        with store.transaction() as users:
            users["bob"] = _user("bob")

    assert store.snapshot() == {"alice": _user("alice")}


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[]",
        '{"alice": "not-an-object"}',
        '{"alice": {"username": "alice"}}',
        '{"alice": {"username": "", "password_hash": "x"}}',
    ],
)
def test_corrupt_backing_file_raises_storage_error(users_file: Path, content: str) -> None:
    users_file.parent.mkdir(parents=True, exist_ok=True)
    users_file.write_text(content, encoding="utf-8")

    with pytest.raises(StorageIOError) as exc_info:
        open_user_store(users_file)

    assert exc_info.value.path == str(users_file)


def test_no_temp_file_left_behind(users_file: Path) -> None:
    store = open_user_store(users_file)
    store.save({"alice": _user("alice")})

    assert sorted(p.name for p in users_file.parent.iterdir()) == ["users.json"]


def test_concurrent_transactions_do_not_lose_updates(users_file: Path) -> None:
    store = open_user_store(users_file)
    start = threading.Barrier(8)

    def _writer(index: int) -> None:
        start.wait()
        for n in range(5):
            with store.transaction() as users:
                name = f"user{index}-{n}"
                users[name] = _user(name)

    threads = [threading.Thread(target=_writer, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(store) == 40
    assert len(open_user_store(users_file).load()) == 40


def test_non_utf8_backing_file_raises_storage_error(users_file: Path) -> None:
    users_file.parent.mkdir(parents=True, exist_ok=True)
    users_file.write_bytes(b'{"a": "\xff\xfe"}')

    with pytest.raises(StorageIOError) as exc_info:
        open_user_store(users_file)

    assert exc_info.value.reason == "not valid UTF-8"


def test_user_stored_under_another_login_is_rejected(users_file: Path) -> None:
    users_file.parent.mkdir(parents=True, exist_ok=True)
    users_file.write_text(
        json.dumps(
            {
                "bob": {"username": "alice", "password_hash": "x"},
                "alice": {"username": "alice", "password_hash": "y"},
            }
        ),
        encoding="utf-8",
    )

    with pytest.raises(StorageIOError) as exc_info:
        open_user_store(users_file)

    assert "'bob'" in exc_info.value.reason


def test_session_stored_under_another_token_is_rejected(sessions_file: Path) -> None:
    sessions_file.parent.mkdir(parents=True, exist_ok=True)
    sessions_file.write_text(
        json.dumps({"tok-a": {"token": "tok-b", "username": "alice"}}), encoding="utf-8"
    )

    with pytest.raises(StorageIOError):
        open_session_store(sessions_file)
