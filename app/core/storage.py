"""JSON file storage: load, seed demo users, and write-through under a single writer lock."""

import contextlib
import json
import logging
import os
import tempfile
import threading
from collections.abc import Callable
from datetime import UTC, datetime
from functools import lru_cache
from pathlib import Path
from typing import Any, Protocol, TypeVar

from pydantic import ValidationError as SchemaValidationError

from app.core.config import get_settings
from app.core.errors import StorageError
from app.core.security import hash_password
from app.models import DataDocument, User

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Demo accounts guaranteed to exist after seeding (preferred ids 1 and 2).
DEMO_USERS: tuple[dict[str, Any], ...] = (
    {
        "id": 1,
        "username": "stationUser",
        "password": "5678",
        "role": "station",
        "name": "Station User",
    },
    {
        "id": 2,
        "username": "companyAdmin",
        "password": "1234",
        "role": "company",
        "name": "Company Admin",
    },
)


class DocumentStore(Protocol):
    """What the auth and complaint services need from persistence."""

    def snapshot(self) -> DataDocument: ...

    def mutate(self, fn: Callable[[DataDocument], T]) -> T: ...


class JsonFileStore:
    """
    Holds the committed DataDocument in memory and persists it wholesale on every change.

    Writers are serialized by one lock; each mutation works on a deep copy, writes it
    atomically (temp file + os.replace), and only then becomes the committed document.
    Readers copy the committed document without taking the lock.
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        *,
        seed_demo_users: bool = True,
        bcrypt_rounds: int | None = None,
    ) -> None:
        self.path = Path(path)
        self._bcrypt_rounds = bcrypt_rounds
        self._lock = threading.Lock()
        document, needs_write = self._load()
        if seed_demo_users and seed_missing_demo_users(document, bcrypt_rounds):
            needs_write = True
        if needs_write:
            self._write(document)
        self._document = document

    def snapshot(self) -> DataDocument:
        """Deep copy of the last committed document."""
        return self._document.model_copy(deep=True)

    def mutate(self, fn: Callable[[DataDocument], T]) -> T:
        """
        Apply fn to a working copy and persist it. Raises StorageError if the write fails.

        Exceptions from fn abort the mutation with nothing written. If fn leaves the
        document unchanged no write happens.
        """
        with self._lock:
            working = self._document.model_copy(deep=True)
            result = fn(working)
            if working != self._document:
                self._write(working)
                self._document = working
            return result

    def is_available(self) -> bool:
        """True if the data file can be (re)written."""
        directory = self.path.parent
        if self.path.exists():
            return os.access(self.path, os.R_OK) and os.access(directory, os.W_OK)
        return directory.is_dir() and os.access(directory, os.W_OK)

    def _load(self) -> tuple[DataDocument, bool]:
        """Read DATA_FILE. Missing starts empty; unusable content is moved aside first."""
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.info("Data file %s not found; starting from empty defaults", self.path)
            return DataDocument(), True
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            return self._set_aside(f"could not be read ({e})")

        if not isinstance(raw, dict):
            return self._set_aside("does not hold a JSON object")

        for key in ("users", "complaints"):
            if raw.get(key) is None:
                raw[key] = []
        upgraded = self._upgrade_legacy_users(raw["users"])
        try:
            document = DataDocument.model_validate(raw)
        except SchemaValidationError as e:
            return self._set_aside(f"has invalid records ({e.error_count()} errors)")
        return document, upgraded

    def _set_aside(self, reason: str) -> tuple[DataDocument, bool]:
        """
        Rename an unusable data file to <name>.corrupt-<timestamp> and start from empty defaults.

        Raises StorageError if the file cannot be moved, so its contents are never overwritten.
        """
        stamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S%f")
        backup = self.path.with_name(f"{self.path.name}.corrupt-{stamp}")
        try:
            os.replace(self.path, backup)
        except OSError as e:
            logger.error("Data file %s %s and could not be moved aside: %s", self.path, reason, e)
            raise StorageError(f"Data file {self.path} is unusable", cause=e) from e
        logger.warning(
            "Data file %s %s; moved to %s and starting from empty defaults",
            self.path,
            reason,
            backup,
        )
        return DataDocument(), True

    def _upgrade_legacy_users(self, users: Any) -> bool:
        """Replace plaintext 'password' fields with bcrypt 'password_hash'. Returns True if any changed."""
        if not isinstance(users, list):
            return False
        changed = False
        for user in users:
            if not isinstance(user, dict) or "password" not in user:
                continue
            password = user.pop("password")
            if "password_hash" not in user and password is not None:
                user["password_hash"] = hash_password(str(password), self._bcrypt_rounds)
            changed = True
        if changed:
            logger.info("Upgraded plaintext passwords in %s to bcrypt hashes", self.path)
        return changed

    def _write(self, document: DataDocument) -> None:
        """Write the whole document to a temp file beside DATA_FILE, then rename over it."""
        payload = json.dumps(document.model_dump(mode="json"), indent=2, ensure_ascii=False)
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=directory
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(payload + "\n")
                    fh.flush()
                    os.fsync(fh.fileno())
                os.replace(tmp_name, self.path)
            except BaseException:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            logger.error("Failed to write data file %s: %s", self.path, e)
            raise StorageError(f"Could not write data file {self.path}", cause=e) from e


def seed_missing_demo_users(document: DataDocument, bcrypt_rounds: int | None = None) -> bool:
    """
    Add any demo account whose username is absent. Idempotent.

    Preferred ids are kept when free; otherwise the next id above the current maximum.
    Returns True if a user was added.
    """
    added = False
    for demo in DEMO_USERS:
        if document.find_user_by_username(demo["username"]) is not None:
            continue
        user_id = demo["id"]
        if document.find_user(user_id) is not None:
            user_id = max(u.id for u in document.users) + 1
        document.users.append(
            User(
                id=user_id,
                username=demo["username"],
                password_hash=hash_password(demo["password"], bcrypt_rounds),
                role=demo["role"],
                name=demo["name"],
            )
        )
        logger.info("Seeded demo user %s (role=%s, id=%s)", demo["username"], demo["role"], user_id)
        added = True
    return added


@lru_cache
def get_store() -> JsonFileStore:
    """Dependency returning the process-wide store built from settings."""
    settings = get_settings()
    return JsonFileStore(
        settings.DATA_FILE,
        seed_demo_users=settings.SEED_DEMO_USERS,
        bcrypt_rounds=settings.BCRYPT_ROUNDS,
    )
