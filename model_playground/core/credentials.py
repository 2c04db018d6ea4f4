"""Provider API key storage."""

from __future__ import annotations

import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from model_playground.utils.log import get_logger

logger = get_logger()


class CredentialDocument(BaseModel):
    """On-disk credential document."""

    credentials: Dict[str, str] = Field(default_factory=dict)


def mask_credential(value: Optional[str]) -> str:
    """Render a secret for display without revealing it."""
    if not value:
        return "not set"
    if len(value) <= 8:
        return "***"
    return f"{value[:4]}…{value[-2:]}"


class CredentialStore(ABC):
    """Key-value store holding one secret per provider id.

    Blank secrets are never persisted: ``set`` trims the value and ignores it
    when nothing is left.
    """

    def get(self, provider_id: str) -> Optional[str]:
        if not provider_id:
            return None
        return self._read(provider_id)

    def set(self, provider_id: str, value: str) -> bool:
        """Persist ``value`` for ``provider_id``; returns False when rejected as blank."""
        secret = (value or "").strip()
        if not provider_id or not secret:
            logger.debug(
                "[credentials] Ignoring blank credential",
                extra={"provider": provider_id},
            )
            return False
        self._write(provider_id, secret)
        logger.info("[credentials] Stored credential", extra={"provider": provider_id})
        return True

    def has(self, provider_id: str) -> bool:
        return self.get(provider_id) is not None

    @abstractmethod
    def _read(self, provider_id: str) -> Optional[str]:
        """Return the stored secret or None."""

    @abstractmethod
    def _write(self, provider_id: str, secret: str) -> None:
        """Overwrite the stored secret."""


class MemoryCredentialStore(CredentialStore):
    """Process-local store."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._secrets: Dict[str, str] = {}
        for provider_id, value in (initial or {}).items():
            self.set(provider_id, value)

    def _read(self, provider_id: str) -> Optional[str]:
        return self._secrets.get(provider_id)

    def _write(self, provider_id: str, secret: str) -> None:
        self._secrets[provider_id] = secret


class JsonFileCredentialStore(CredentialStore):
    """Durable store backed by a JSON file with owner-only permissions.

    The file is read on every lookup so values written by another process,
    or before a restart, are always visible. Entries that are not non-empty
    strings are skipped rather than discarding the whole document, and a file
    that is not JSON at all is moved aside before the first write.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    @property
    def backup_path(self) -> Path:
        return self.path.with_name(self.path.name + ".corrupt")

    def _read_payload(self) -> Optional[Dict[str, Any]]:
        """Return the raw credential mapping, or None when the file is unreadable."""
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as exc:
            logger.warning(
                "[credentials] Failed to load credential file: %s: %s",
                type(exc).__name__,
                exc,
                extra={"path": str(self.path)},
            )
            return None
        if isinstance(payload, dict) and "credentials" in payload:
            payload = payload["credentials"]
        if not isinstance(payload, dict):
            logger.warning(
                "[credentials] Credential file does not hold a mapping",
                extra={"path": str(self.path)},
            )
            return None
        return payload

    def _load(self) -> CredentialDocument:
        if not self.path.exists():
            return CredentialDocument()
        payload = self._read_payload() or {}
        credentials: Dict[str, str] = {}
        for provider_id, secret in payload.items():
            if isinstance(secret, str) and secret.strip():
                credentials[str(provider_id)] = secret
            else:
                logger.warning(
                    "[credentials] Skipping invalid credential entry",
                    extra={"path": str(self.path), "provider": provider_id},
                )
        return CredentialDocument(credentials=credentials)

    def _read(self, provider_id: str) -> Optional[str]:
        return self._load().credentials.get(provider_id)

    def _write(self, provider_id: str, secret: str) -> None:
        if self.path.exists() and self._read_payload() is None:
            os.replace(self.path, self.backup_path)
            logger.warning(
                "[credentials] Moved unreadable credential file aside",
                extra={"path": str(self.path), "backup": str(self.backup_path)},
            )
        document = self._load()
        document.credentials[provider_id] = secret
        self._write_atomic(document.model_dump_json(indent=2))

    def _write_atomic(self, serialized: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_path = tempfile.mkstemp(dir=str(self.path.parent), prefix=".credentials_", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(serialized)
            os.replace(temp_path, self.path)
        finally:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
        try:
            self.path.chmod(0o600)
        except OSError:
            logger.debug("[credentials] Failed to set strict permissions", extra={"path": str(self.path)})
