# chatlite/navigation/guard.py
"""
ExternalUrlGuard — may this URL be handed to the OS default browser?
Scheme allow-list (http/https). Script and local-file schemes are a known
escape vector from sandboxed content and never pass.
"""
from __future__ import annotations

import logging
from typing import Callable, Iterable

from chatlite.core.constants import EXTERNAL_SCHEMES, RESERVED_TLDS
from chatlite.core.exceptions import MalformedUrlError
from chatlite.navigation.urls import host_of, parse_absolute_url

_log = logging.getLogger("chatlite.navigation.guard")

ExternalOpener = Callable[[str], object]


class ExternalUrlGuard:

    def __init__(
        self,
        schemes: Iterable[str] = EXTERNAL_SCHEMES,
        reserved_tlds: Iterable[str] = RESERVED_TLDS,
    ) -> None:
        self._schemes = frozenset(s.lower() for s in schemes)
        self._reserved_tlds = frozenset(t.lower() for t in reserved_tlds)

    def is_safe_for_external_open(self, url: str) -> bool:
        """
        True for http/https URLs with a real host. On top of the scheme check,
        hosts under the RFC 2606 reserved TLDs (example, invalid, test) are
        refused: they never resolve to a real site, so handing one to the
        system browser is always a dead end or a spoof.
        """
        try:
            parsed = parse_absolute_url(url)
        except MalformedUrlError:
            return False
        if parsed.scheme not in self._schemes:
            return False
        tld = parsed.host.rstrip(".").rsplit(".", 1)[-1]
        return tld not in self._reserved_tlds


DEFAULT_GUARD = ExternalUrlGuard()


def is_safe_for_external_open(url: str) -> bool:
    return DEFAULT_GUARD.is_safe_for_external_open(url)


def open_external_if_safe(
    url: str,
    opener: ExternalOpener,
    guard: ExternalUrlGuard = DEFAULT_GUARD,
) -> bool:
    """
    Hand url to opener only if the guard allows it.
    Returns True if opener was called.
    """
    if not guard.is_safe_for_external_open(url):
        _log.info("external open refused: host=%r", host_of(url))
        return False
    opener(url)
    return True
