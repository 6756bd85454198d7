# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""JSON file backed key-value store."""

from __future__ import annotations

import json
import threading
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generic, TypeVar

from weathergate.domain.exceptions import InvariantViolation
from weathergate.shared.errors import StorageIOError
from weathergate.shared.logging import logger
from weathergate.utils.fs import read_json, write_json_atomic

T = TypeVar("T")

Encoder = Callable[[T], dict[str, Any]]
Decoder = Callable[[Mapping[str, Any]], T]
KeyOf = Callable[[T], str]


class JsonFileStore(Generic[T]):  # noqa: UP046
    """Mapping of string keys to records, persisted as one JSON object per file.

    Every mutation rewrites the whole file through an atomic rename while the
    store lock is held. Readers use the last snapshot that reached disk.
    """

    def __init__(
        self,
        path: Path,
        *,
        encode: Encoder[T],
        decode: Decoder[T],
        key_of: KeyOf[T] | None = None,
    ) -> None:
        self._path = Path(path)
        self._encode = encode
        self._decode = decode
        self._key_of = key_of
        self._lock = threading.Lock()
        self._data: dict[str, T] = {}

    @classmethod
    def open(
        cls,
        path: Path,
        *,
        encode: Encoder[T],
        decode: Decoder[T],
        key_of: KeyOf[T] | None = None,
        initial: Mapping[str, T] | None = None,
    ) -> JsonFileStore[T]:
        store = cls(path, encode=encode, decode=decode, key_of=key_of)
        if store.path.exists():
            store._data = store.load()
        else:
            store.create(initial or {})
        return store

    @property
    def path(self) -> Path:
        return self._path

    def create(self, initial: Mapping[str, T]) -> None:
        logger.info(f"storage.create: path={self._path} records={len(initial)}")
        with self._lock:
            self._write(dict(initial))

    def load(self) -> dict[str, T]:
        try:
            raw = read_json(self._path)
        except OSError as exc:
            raise StorageIOError(str(self._path), f"unreadable: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise StorageIOError(str(self._path), f"corrupt JSON: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise StorageIOError(str(self._path), "not valid UTF-8") from exc

        if not isinstance(raw, dict):
            raise StorageIOError(str(self._path), "top-level value is not an object")

        records: dict[str, T] = {}
        for key, value in raw.items():
            if not isinstance(value, dict):
                raise StorageIOError(str(self._path), f"record {key!r} is not an object")
            try:
                records[key] = self._decode(value)
            except (InvariantViolation, KeyError, TypeError, ValueError) as exc:
                raise StorageIOError(str(self._path), f"record {key!r} is invalid: {exc}") from exc
            if self._key_of is not None and self._key_of(records[key]) != key:
                raise StorageIOError(
                    str(self._path), f"record {key!r} is stored under a foreign key"
                )

        logger.debug(f"storage.load: path={self._path} records={len(records)}")
        return records

    def save(self, mapping: Mapping[str, T]) -> None:
        with self._lock:
            self._write(dict(mapping))

    def snapshot(self) -> dict[str, T]:
        return dict(self._data)

    def get(self, key: str) -> T | None:
        return self._data.get(key)

    def __len__(self) -> int:
        return len(self._data)

    @contextmanager
    def transaction(self) -> Iterator[dict[str, T]]:
        """Serialized read-modify-write over a private copy of the mapping.

        The copy is persisted and published only when the block exits cleanly.
        """
        with self._lock:
            working = dict(self._data)
            yield working
            self._write(working)

    def _write(self, mapping: dict[str, T]) -> None:
        payload = {key: self._encode(record) for key, record in mapping.items()}
        try:
            write_json_atomic(self._path, payload)
        except (OSError, TypeError, ValueError) as exc:
            raise StorageIOError(str(self._path), f"write failed: {exc}") from exc
        self._data = mapping
        logger.debug(f"storage.save: path={self._path} records={len(mapping)}")


__all__ = ["JsonFileStore"]
