"""Conversation key derivation."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

FINGERPRINT_LENGTH = 16


def fingerprint_key(system_instruction: str, metadata: Mapping[str, Any] | None = None) -> str:
    """Derive a stable key from a system instruction and its metadata.

    Metadata items are sorted by key, so two requests that differ only in the
    order of their metadata share a conversation.
    """
    items = sorted((metadata or {}).items())
    metadata_str = "|".join(f"{k}:{v}" for k, v in items)
    combined = f"{system_instruction}|{metadata_str}"
    digest = hashlib.sha256(combined.encode("utf-8")).hexdigest()
    return digest[:FINGERPRINT_LENGTH]


@dataclass(frozen=True)
class SubjectKey:
    """Key of a conversation about one work of one subject.

    For the philosophy domains the subject is the thinker and the secondary
    id is the work.
    """

    subject: str
    secondary: str

    def __str__(self) -> str:
        return f"{self.subject}|{self.secondary}"


def switched_secondary(subject: str, secondary: str) -> Callable[[object], bool]:
    """Match keys of ``subject`` that belong to any work other than ``secondary``."""

    def predicate(key: object) -> bool:
        return (
            isinstance(key, SubjectKey)
            and key.subject == subject
            and key.secondary != secondary
        )

    return predicate
