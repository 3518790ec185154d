# chatlite/navigation/models.py
"""
Data models for the navigation layer.
NavigationDecision is immutable (frozen dataclass); NavigationRecord is
filled in while a decision is applied, then passed to the audit logger.
No policy logic here — pure data containers.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from chatlite.core.enums import AttemptKind, NavigationAction


@dataclass(frozen=True)
class NavigationDecision:
    """
    Routing outcome for one navigation/open attempt.
    url is set for REDIRECT and OPEN_EXTERNALLY only.
    """
    action: NavigationAction
    url: Optional[str] = None

    def __post_init__(self) -> None:
        needs_url = self.action in (NavigationAction.REDIRECT, NavigationAction.OPEN_EXTERNALLY)
        if needs_url and not self.url:
            raise ValueError(f"{self.action.value} decision requires a url")
        if not needs_url and self.url is not None:
            raise ValueError(f"{self.action.value} decision carries no url")

    @classmethod
    def proceed(cls) -> "NavigationDecision":
        return cls(NavigationAction.CONTINUE)

    @classmethod
    def redirect(cls, url: str) -> "NavigationDecision":
        return cls(NavigationAction.REDIRECT, url)

    @classmethod
    def open_externally(cls, url: str) -> "NavigationDecision":
        return cls(NavigationAction.OPEN_EXTERNALLY, url)

    @classmethod
    def block(cls) -> "NavigationDecision":
        return cls(NavigationAction.BLOCK)

    @property
    def suppresses_default(self) -> bool:
        """Everything but CONTINUE cancels the embedding surface's default action."""
        return self.action != NavigationAction.CONTINUE


@dataclass
class NavigationRecord:
    """
    Audit record for a single applied decision.
    Never holds the raw URL — host and SHA256 only.
    """
    surface_id: str
    attempt: AttemptKind
    host: str
    url_hash: str                          # SHA256, always 64 chars
    action: NavigationAction = NavigationAction.BLOCK
    default_suppressed: bool = True
    registered: bool = True
    error: str = ""
    decided_at: str = ""
