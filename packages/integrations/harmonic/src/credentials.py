"""API key storage for the Harmonic client."""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from packages.core.src.errors import PreconditionError

logger = structlog.get_logger()

PREVIEW_MIN_LENGTH = 8


@dataclass(frozen=True)
class Credential:
    """An opaque Harmonic API key.

    The raw value is kept out of ``repr()``; use ``preview`` for logs.
    """

    value: str = field(repr=False)

    @property
    def preview(self) -> str:
        """Short prefix that is safe to log.

        Keys of eight characters or fewer are fully masked.
        """
        if len(self.value) > PREVIEW_MIN_LENGTH:
            return f"{self.value[:4]}..."
        return "****"


class CredentialStore:
    """Single slot holding the API key for the lifetime of the process.

    Unset until ``set()`` is called; later calls replace the key and the
    most recent value wins. Nothing is persisted.
    """

    def __init__(self) -> None:
        self._credential: Credential | None = None
        self._logger = logger.bind(component="credential_store")

    def set(self, key: str) -> None:
        """Store (or replace) the API key. The format is not validated."""
        replaced = self._credential is not None
        self._credential = Credential(key)
        self._logger.info(
            "api_key_set",
            key_preview=self._credential.preview,
            replaced=replaced,
        )

    def is_set(self) -> bool:
        return self._credential is not None

    def current(self) -> Credential:
        """Return the stored credential.

        Raises:
            PreconditionError: If no key has been set yet
        """
        if self._credential is None:
            raise PreconditionError("No credential configured")
        return self._credential
