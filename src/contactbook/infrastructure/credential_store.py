"""Credential persistence: JSON file (survives restarts) and in-memory."""

import json
import logging
import os
from pathlib import Path

from contactbook.domain import Credential, UserProfile

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"


class FileCredentialStore:
    """Stores {"token": ..., "user": {...}} in one JSON file.

    Writes go through a temp file and rename so token and user change together.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> Credential | None:
        if not self.path.exists():
            return None
        try:
            obj = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable credential file %s: %s", self.path, e)
            return None
        token = obj.get(TOKEN_KEY) if isinstance(obj, dict) else None
        user = obj.get(USER_KEY) if isinstance(obj, dict) else None
        # Both keys must be present, as in the login check at startup.
        if not token or not isinstance(user, dict):
            return None
        try:
            return Credential(
                token=str(token),
                user=UserProfile(
                    id=str(user["id"]) if user.get("id") is not None else None,
                    name=str(user.get("name") or ""),
                    email=user.get("email"),
                ),
            )
        except ValueError as e:
            logger.warning("Ignoring invalid credential in %s: %s", self.path, e)
            return None

    def save(self, credential: Credential) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        obj = {
            TOKEN_KEY: credential.token,
            USER_KEY: {
                "id": credential.user.id,
                "name": credential.user.name,
                "email": credential.user.email,
            },
        }
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(obj), encoding="utf-8")
        os.chmod(tmp, 0o600)
        os.replace(tmp, self.path)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class InMemoryCredentialStore:
    def __init__(self, credential: Credential | None = None) -> None:
        self._credential = credential

    def load(self) -> Credential | None:
        return self._credential

    def save(self, credential: Credential) -> None:
        self._credential = credential

    def clear(self) -> None:
        self._credential = None
