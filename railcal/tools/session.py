"""Session capability consulted before a date click reaches the network."""

import logging
from typing import Optional, Protocol

from railcal.config import settings

logger = logging.getLogger(__name__)


class SessionProvider(Protocol):
    def has_active_session(self) -> bool: ...


class TokenSession:
    """Session backed by an opaque token; only its presence matters."""

    def __init__(self, token: Optional[str] = None) -> None:
        self._token = token

    @classmethod
    def from_settings(cls) -> "TokenSession":
        return cls(settings.session.token)

    @property
    def token(self) -> Optional[str]:
        return self._token

    def set_token(self, token: str) -> None:
        self._token = token
        logger.info("Session token set")

    def clear(self) -> None:
        self._token = None
        logger.info("Session token cleared")

    def has_active_session(self) -> bool:
        return bool(self._token and self._token.strip())
