# chatlite/navigation/registry.py
"""
SurfaceRegistry — one NavigationEnforcer per embedded surface, keyed by id.
Registration must happen before the surface's first navigation; the
returned handle unregisters on surface teardown so no enforcer outlives
its surface. Duplicate ids are a hard error. No fallback lookup.
"""
from __future__ import annotations

import logging
from typing import Optional

from chatlite.core.constants import CANONICAL_URL
from chatlite.core.exceptions import SurfaceRegistrationError
from chatlite.navigation.enforcer import NavigationEnforcer, NavigationSurface
from chatlite.navigation.guard import DEFAULT_GUARD, ExternalOpener, ExternalUrlGuard
from chatlite.navigation.policy import DEFAULT_POLICY, DomainPolicy

_log = logging.getLogger("chatlite.navigation.registry")


class EnforcerHandle:
    """Returned by register_enforcer(). unregister() is idempotent."""

    def __init__(self, registry: "SurfaceRegistry", enforcer: NavigationEnforcer) -> None:
        self._registry = registry
        self.enforcer = enforcer

    @property
    def surface_id(self) -> str:
        return self.enforcer.surface_id

    def unregister(self) -> None:
        self._registry.unregister(self.surface_id)


class SurfaceRegistry:

    def __init__(
        self,
        open_external: Optional[ExternalOpener] = None,
        policy: DomainPolicy = DEFAULT_POLICY,
        guard: ExternalUrlGuard = DEFAULT_GUARD,
        canonical_url: str = CANONICAL_URL,
    ) -> None:
        self._enforcers: dict[str, NavigationEnforcer] = {}
        self._open_external = open_external
        self._canonical_url = canonical_url
        self._policy = policy
        self._guard = guard

    def register_enforcer(
        self,
        surface_id: str,
        surface: NavigationSurface,
        policy: Optional[DomainPolicy] = None,
    ) -> EnforcerHandle:
        """Raises SurfaceRegistrationError if surface_id is already registered."""
        if surface_id in self._enforcers:
            raise SurfaceRegistrationError(f"surface already registered: {surface_id!r}")
        enforcer = NavigationEnforcer(
            surface_id,
            surface,
            policy=policy or self._policy,
            guard=self._guard,
            open_external=self._open_external,
            canonical_url=self._canonical_url,
        )
        self._enforcers[surface_id] = enforcer
        _log.debug("enforcer registered: %s", surface_id)
        return EnforcerHandle(self, enforcer)

    def unregister(self, surface_id: str) -> None:
        enforcer = self._enforcers.pop(surface_id, None)
        if enforcer is None:
            return
        enforcer.detach()
        _log.debug("enforcer unregistered: %s", surface_id)

    def lookup(self, surface_id: str) -> NavigationEnforcer:
        """Raises SurfaceRegistrationError if surface_id is unknown."""
        enforcer = self._enforcers.get(surface_id)
        if enforcer is None:
            raise SurfaceRegistrationError(f"unknown surface: {surface_id!r}")
        return enforcer

    def __contains__(self, surface_id: object) -> bool:
        return surface_id in self._enforcers

    def __len__(self) -> int:
        return len(self._enforcers)

    def surface_ids(self) -> list[str]:
        return list(self._enforcers)
