# chatlite/navigation/enforcer.py
"""
NavigationEnforcer — the ONLY routing authority for an embedded surface.

Decision order (fixed):
  1. DomainPolicy.is_trusted(url)
       OPEN_NEW_TARGET    -> REDIRECT(url)   same surface, new window denied
       IN_PLACE_NAVIGATE  -> CONTINUE
  2. ExternalUrlGuard.is_safe_for_external_open(url)
       safe               -> OPEN_EXTERNALLY(url)
       otherwise          -> BLOCK

decide() is pure. apply() runs the side effects and reports whether the
surface may let its default action proceed; only CONTINUE does.
One instance per surface. Instances share no mutable state.

This module must NOT:
  - import Qt
  - open windows
  - show dialogs for blocked navigations
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Protocol

from chatlite.core.constants import CANONICAL_URL, PLACEHOLDER_URLS
from chatlite.core.enums import AttemptKind, NavigationAction
from chatlite.navigation.guard import DEFAULT_GUARD, ExternalOpener, ExternalUrlGuard
from chatlite.navigation.logger import log_decision
from chatlite.navigation.models import NavigationDecision, NavigationRecord
from chatlite.navigation.policy import DEFAULT_POLICY, DomainPolicy
from chatlite.navigation.urls import host_of
from chatlite.utils.hashing import hash_url

_log = logging.getLogger("chatlite.navigation.enforcer")


class NavigationSurface(Protocol):
    """What the enforcer needs from an embedded surface."""

    def load_url(self, url: str) -> None: ...


def _no_external_opener(url: str) -> None:
    _log.warning("no external opener configured; dropping hand-off")


class NavigationEnforcer:
    """
    Routing boundary for one embedded surface.
    Registered before the surface's first navigation; detached on teardown.
    """

    def __init__(
        self,
        surface_id: str,
        surface: NavigationSurface,
        policy: DomainPolicy = DEFAULT_POLICY,
        guard: ExternalUrlGuard = DEFAULT_GUARD,
        open_external: Optional[ExternalOpener] = None,
        canonical_url: str = CANONICAL_URL,
    ) -> None:
        if not policy.is_trusted(canonical_url):
            raise ValueError("canonical url must be trusted by the policy")
        self._surface_id = surface_id
        self._surface = surface
        self._policy = policy
        self._guard = guard
        self._open_external: Callable[[str], object] = open_external or _no_external_opener
        self._canonical_url = canonical_url
        self._active = True
        self._bootstrapped = False

    @property
    def surface_id(self) -> str:
        return self._surface_id

    @property
    def active(self) -> bool:
        return self._active

    # ------------------------------------------------------------------
    # Public entry points
    # ------------------------------------------------------------------

    def decide(self, kind: AttemptKind, url: str) -> NavigationDecision:
        """Pure routing decision. No side effects."""
        if self._policy.is_trusted(url):
            if kind == AttemptKind.OPEN_NEW_TARGET:
                return NavigationDecision.redirect(url)
            return NavigationDecision.proceed()

        if self._guard.is_safe_for_external_open(url):
            return NavigationDecision.open_externally(url)
        return NavigationDecision.block()

    def apply(self, kind: AttemptKind, url: str) -> bool:
        """
        Decide, run side effects, audit.
        Returns True only when the surface may proceed with its default action.
        Never raises — side-effect failures are recorded and the default stays
        suppressed.
        """
        record = NavigationRecord(
            surface_id=self._surface_id,
            attempt=kind,
            host=host_of(url) if isinstance(url, str) else "",
            url_hash=hash_url(url if isinstance(url, str) else ""),
        )

        try:
            if not self._active:
                record.registered = False
                record.error = "surface no longer registered"
                decision = NavigationDecision.block()
            else:
                decision = self.decide(kind, url)
            record.action = decision.action
            record.default_suppressed = decision.suppresses_default or kind == AttemptKind.OPEN_NEW_TARGET
            self._run_side_effect(decision)
        except Exception as exc:
            record.error = record.error or str(exc)
            _log.warning("navigation side effect failed on %s: %s", self._surface_id, exc)
        finally:
            record.decided_at = datetime.now(timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ')
            log_decision(record)

        return not record.default_suppressed

    def on_load_finished(self, current_url: str, ok: bool = True) -> bool:
        """
        One-shot bootstrap: the first successfully finished load of a
        placeholder page sends the surface to the canonical entry URL.
        Returns True if the surface was redirected.
        """
        if self._bootstrapped or not ok or not self._active:
            return False
        self._bootstrapped = True
        if current_url not in PLACEHOLDER_URLS:
            return False
        _log.info("bootstrapping %s to canonical url", self._surface_id)
        self._surface.load_url(self._canonical_url)
        return True

    def detach(self) -> None:
        """Surface torn down. Later apply() calls fail closed."""
        self._active = False

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _run_side_effect(self, decision: NavigationDecision) -> None:
        if decision.action == NavigationAction.REDIRECT:
            self._surface.load_url(decision.url)
        elif decision.action == NavigationAction.OPEN_EXTERNALLY:
            self._open_external(decision.url)
