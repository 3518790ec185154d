# chatlite/navigation/policy.py
"""
DomainPolicy — is a URL inside the trusted origin set?

Security boundary. False positives are the attack surface, so:
  - encrypted transport only (https)
  - host must EQUAL a root, or end with "." + root (label boundary)
  - never substring containment: evilchatgpt.com is not chatgpt.com
Pure: no network, no state, no side effects.
"""
from __future__ import annotations

from typing import Iterable

from chatlite.core.constants import TRUSTED_ROOT_HOSTS, TRUSTED_SCHEME
from chatlite.core.exceptions import MalformedUrlError
from chatlite.navigation.urls import parse_absolute_url


class DomainPolicy:
    """
    Immutable after construction. One shared instance is safe across surfaces.
    """

    def __init__(
        self,
        roots: Iterable[str] = TRUSTED_ROOT_HOSTS,
        scheme: str = TRUSTED_SCHEME,
    ) -> None:
        normalized = frozenset(r.strip().lower().strip(".") for r in roots)
        if "" in normalized:
            raise ValueError("empty root host in trusted origin set")
        self._roots = normalized
        self._scheme = scheme.lower()

    @property
    def roots(self) -> frozenset[str]:
        return self._roots

    def is_trusted(self, url: str) -> bool:
        try:
            parsed = parse_absolute_url(url)
        except MalformedUrlError:
            return False
        if parsed.scheme != self._scheme:
            return False
        return any(_matches_root(parsed.host, root) for root in self._roots)


def _matches_root(host: str, root: str) -> bool:
    """Exact host, or a subdomain on the dot boundary."""
    return host == root or host.endswith("." + root)  # nosec suffix


DEFAULT_POLICY = DomainPolicy()


def is_trusted(url: str) -> bool:
    """Module-level shortcut against the built-in trusted origin set."""
    return DEFAULT_POLICY.is_trusted(url)
