"""Conversation state: transcript, active selection and request status.

All transitions happen on the event loop thread. The only suspension point is
the gateway call inside ``submit``; while it is pending the status is
``in_flight`` and further submissions are ignored.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Dict, List, Literal, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from model_playground.core.credentials import CredentialStore
from model_playground.core.gateway import GatewayDispatcher
from model_playground.core.provider_registry import (
    ProviderDescriptor,
    list_providers,
)
from model_playground.core.providers.base import GatewayResult
from model_playground.utils.log import get_logger

logger = get_logger()


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class RequestStatus(str, Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"


_id_lock = threading.Lock()
_last_turn_id = 0


def next_turn_id() -> int:
    """Nanosecond timestamp, bumped so that ids strictly increase."""
    global _last_turn_id
    with _id_lock:
        candidate = time.time_ns()
        if candidate <= _last_turn_id:
            candidate = _last_turn_id + 1
        _last_turn_id = candidate
        return candidate


class Turn(BaseModel):
    """One message in the transcript."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    id: int = Field(default_factory=next_turn_id)
    role: Role
    content: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    provider_id: Optional[str] = None
    model_id: Optional[str] = None

    @model_validator(mode="after")
    def _check_role_fields(self) -> "Turn":
        if self.role == Role.USER:
            if self.provider_id is not None or self.model_id is not None:
                raise ValueError("User turns do not record a provider or model.")
            if not self.content:
                raise ValueError("User turns must have content.")
        elif self.provider_id is None or self.model_id is None:
            raise ValueError("Assistant turns must record provider and model.")
        return self

    @classmethod
    def user(cls, content: str) -> "Turn":
        return cls(role=Role.USER, content=content)

    @classmethod
    def assistant(cls, content: str, *, provider_id: str, model_id: str) -> "Turn":
        return cls(role=Role.ASSISTANT, content=content, provider_id=provider_id, model_id=model_id)


@dataclass(frozen=True)
class Selection:
    provider_id: str
    model_id: str


@dataclass(frozen=True)
class Notification:
    """A user-visible message, shown as a toast by the UI."""

    title: str
    description: str
    variant: Literal["default", "destructive"] = "default"


Notifier = Callable[[Notification], None]


class ConversationError(Exception):
    """Base class for rejected conversation operations."""


class MissingCredentialError(ConversationError):
    def __init__(self, provider_id: str) -> None:
        super().__init__(f"Please configure your {provider_id} API key first.")
        self.provider_id = provider_id


class UnknownProviderError(ConversationError, ValueError):
    def __init__(self, provider_id: str) -> None:
        super().__init__(f"Unknown provider '{provider_id}'.")
        self.provider_id = provider_id


class UnknownModelError(ConversationError, ValueError):
    def __init__(self, provider_id: str, model_id: str) -> None:
        super().__init__(f"Provider '{provider_id}' does not offer model '{model_id}'.")
        self.provider_id = provider_id
        self.model_id = model_id


def _ignore(_: Notification) -> None:
    return None


class Conversation:
    """Owns the transcript, the (provider, model) selection and the request status."""

    def __init__(
        self,
        credentials: CredentialStore,
        dispatcher: Optional[GatewayDispatcher] = None,
        *,
        providers: Optional[Sequence[ProviderDescriptor]] = None,
        provider_id: Optional[str] = None,
        model_id: Optional[str] = None,
        notifier: Optional[Notifier] = None,
    ) -> None:
        self._providers: Tuple[ProviderDescriptor, ...] = tuple(
            list_providers() if providers is None else providers
        )
        if not self._providers:
            raise ValueError("At least one provider is required.")
        self._by_id: Dict[str, ProviderDescriptor] = {provider.id: provider for provider in self._providers}
        self._credentials = credentials
        self._dispatcher = dispatcher or GatewayDispatcher()
        self._notify: Notifier = notifier or _ignore
        self._transcript: List[Turn] = []
        self._status = RequestStatus.IDLE

        provider = self._find(provider_id) if provider_id else None
        if provider is None:
            if provider_id:
                logger.warning(
                    "[conversation] Unknown initial provider; using first provider",
                    extra={"provider": provider_id},
                )
            provider = self._providers[0]
        model = model_id if model_id and provider.offers(model_id) else provider.default_model
        self._selection = Selection(provider.id, model)

    @property
    def providers(self) -> Tuple[ProviderDescriptor, ...]:
        return self._providers

    @property
    def transcript(self) -> Tuple[Turn, ...]:
        return tuple(self._transcript)

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def status(self) -> RequestStatus:
        return self._status

    @property
    def is_busy(self) -> bool:
        return self._status == RequestStatus.IN_FLIGHT

    @property
    def active_provider(self) -> ProviderDescriptor:
        return self._by_id[self._selection.provider_id]

    def _find(self, provider_id: str) -> Optional[ProviderDescriptor]:
        return self._by_id.get(provider_id)

    def has_credential(self) -> bool:
        return self._credentials.has(self._selection.provider_id)

    def change_provider(self, provider_id: str) -> Selection:
        """Switch provider, keeping the model only if the new provider offers it."""
        provider = self._find(provider_id)
        if provider is None:
            raise UnknownProviderError(provider_id)
        model_id = self._selection.model_id
        if not provider.offers(model_id):
            model_id = provider.default_model
        self._selection = Selection(provider.id, model_id)
        logger.debug(
            "[conversation] Provider changed",
            extra={"provider": provider.id, "model": model_id},
        )
        return self._selection

    def change_model(self, model_id: str) -> Selection:
        provider = self.active_provider
        if not provider.offers(model_id):
            raise UnknownModelError(provider.id, model_id)
        self._selection = Selection(provider.id, model_id)
        logger.debug(
            "[conversation] Model changed",
            extra={"provider": provider.id, "model": model_id},
        )
        return self._selection

    async def submit(self, text: str) -> Optional[GatewayResult]:
        """Send one user message.

        Returns None when the input is blank or a request is already pending.
        Raises MissingCredentialError, before any state change, when the active
        provider has no stored key.
        """
        message = (text or "").strip()
        if not message:
            logger.debug("[conversation] Ignoring empty submission")
            return None
        if self._status == RequestStatus.IN_FLIGHT:
            logger.debug("[conversation] Ignoring submission while a request is in flight")
            return None

        # Captured now so a late response is attributed to the selection it was sent with.
        selection = self._selection
        credential = self._credentials.get(selection.provider_id)
        if credential is None:
            raise MissingCredentialError(selection.provider_id)

        self._transcript.append(Turn.user(message))
        self._status = RequestStatus.IN_FLIGHT
        logger.info(
            "[conversation] Submitting message",
            extra={
                "provider": selection.provider_id,
                "model": selection.model_id,
                "message_length": len(message),
            },
        )
        try:
            result = await self._dispatcher.send(
                selection.provider_id, selection.model_id, message, credential
            )
            if result.is_error:
                self._notify(
                    Notification(
                        title="Error",
                        description=result.detail or "Failed to send message",
                        variant="destructive",
                    )
                )
            else:
                self._transcript.append(
                    Turn.assistant(
                        result.content,
                        provider_id=selection.provider_id,
                        model_id=selection.model_id,
                    )
                )
            return result
        finally:
            self._status = RequestStatus.IDLE

    def clear(self) -> None:
        """Empty the transcript; a pending request is left to finish."""
        self._transcript = []
        logger.debug("[conversation] Transcript cleared", extra={"status": self._status.value})
        self._notify(Notification(title="Chat Cleared", description="All messages have been removed."))
