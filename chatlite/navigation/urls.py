# chatlite/navigation/urls.py
"""
Single URL parsing entry point for the navigation layer.
Both predicates go through parse_absolute_url(); neither re-implements parsing.

Parser differentials are the classic bypass (urlsplit and Chromium disagree on
backslashes, for one), so anything ambiguous is rejected rather than guessed.
"""
from __future__ import annotations

import re
from typing import NamedTuple
from urllib.parse import urlsplit

from chatlite.core.exceptions import MalformedUrlError

_HOST_RE = re.compile(r"^[a-z0-9._:-]+$")


class ParsedUrl(NamedTuple):
    scheme: str   # lower-case, no trailing ':'
    host: str     # lower-case ASCII (IDNA), userinfo and port stripped


def parse_absolute_url(raw: object) -> ParsedUrl:
    """
    Parse raw into (scheme, host).

    Rejects (MalformedUrlError):
      - non-string input
      - whitespace, ASCII control characters or backslashes anywhere
      - no scheme, or no host (e.g. "not a url", "javascript:alert(1)")
      - anything urlsplit() itself refuses (bad IPv6 literal, bad port)
      - hosts that do not IDNA-encode to plain LDH labels
    """
    if not isinstance(raw, str):
        raise MalformedUrlError("not a string")
    if not raw:
        raise MalformedUrlError("empty")
    if "\\" in raw or any(ch.isspace() or ord(ch) < 0x20 or ord(ch) == 0x7F for ch in raw):
        raise MalformedUrlError("contains whitespace, control characters or backslashes")
    try:
        parts = urlsplit(raw)
        host = parts.hostname
        parts.port  # raises ValueError on a non-numeric or out-of-range port
    except ValueError as exc:
        raise MalformedUrlError(str(exc)) from exc
    if not parts.scheme:
        raise MalformedUrlError("missing scheme")
    if not host:
        raise MalformedUrlError("missing host")
    return ParsedUrl(scheme=parts.scheme.lower(), host=_ascii_host(host))


def _ascii_host(host: str) -> str:
    host = host.lower()
    if not host.isascii():
        try:
            host = host.encode("idna").decode("ascii")
        except UnicodeError as exc:
            raise MalformedUrlError(f"invalid international host: {exc}") from exc
    if not _HOST_RE.match(host):
        raise MalformedUrlError("invalid characters in host")
    return host


def host_of(raw: str) -> str:
    """Host for logging; empty string when unparsable."""
    try:
        return parse_absolute_url(raw).host
    except MalformedUrlError:
        return ""
