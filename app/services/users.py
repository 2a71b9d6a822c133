"""Credential store: user records kept in a JSON array file."""

import logging
import threading
from pathlib import Path

from app.core.errors import ConflictError
from app.models.user import Role, User
from app.services.jsonfile import read_json, write_json_atomic

logger = logging.getLogger(__name__)


class UserStore:
    """
    JSON-file backed user records.

    The file is read once at construction; a missing file means no users yet.
    Every add rewrites the whole file.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._lock = threading.Lock()
        self._users: list[User] = []
        raw = read_json(path)
        if raw is not None:
            self._users = [User.model_validate(entry) for entry in raw]
            logger.info("Loaded %s user(s) from %s", len(self._users), path)

    def get_by_username(self, username: str) -> User | None:
        for user in self._users:
            if user.username == username:
                return user
        return None

    def list_users(self) -> list[User]:
        return sorted(self._users, key=lambda u: u.id)

    def has_admin(self) -> bool:
        return any(u.role == "admin" for u in self._users)

    def add(self, username: str, email: str, password_hash: str, role: Role = "user") -> User:
        """Create and persist a user. Raises ConflictError if the username is taken."""
        with self._lock:
            if self.get_by_username(username) is not None:
                raise ConflictError(f"User '{username}' already exists")
            next_id = max((u.id for u in self._users), default=0) + 1
            user = User(
                id=next_id,
                username=username,
                email=email,
                password_hash=password_hash,
                role=role,
            )
            users = [*self._users, user]
            self._save(users)
            self._users = users
        logger.info("Created user '%s' with role '%s'", username, role)
        return user

    def _save(self, users: list[User]) -> None:
        write_json_atomic(
            self.path,
            [u.model_dump(mode="json", by_alias=True) for u in users],
        )
