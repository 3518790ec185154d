# chatlite/utils/hashing.py
"""
Canonical hashing utilities.
url_hash: SHA256 of the raw URL — always 64 hex characters.
Never log raw URLs — query strings can carry session tokens — only their hash.
"""
import hashlib

from chatlite.core.constants import URL_HASH_LENGTH


def hash_url(url: str) -> str:
    """
    Compute SHA256 hash of a URL string (UTF-8, no normalisation).
    Returns 64-character hex string.
    """
    digest = hashlib.sha256(url.encode("utf-8", errors="surrogatepass")).hexdigest()
    assert len(digest) == URL_HASH_LENGTH, f"Hash length invariant violated: {len(digest)}"
    return digest
