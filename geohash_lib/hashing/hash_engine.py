"""
MD5 hash engine for canonical keys.

MD5 is fixed by the geohash algorithm for compatibility with every other
implementation; it is not used for security here and must not be
replaced, or destinations diverge from the published ones.
"""

import hashlib
import logging
from typing import Tuple

from geohash_lib.constants import DIGEST_HALF_LENGTH, DIGEST_HEX_LENGTH
from geohash_lib.exceptions import EngineInitError, InvalidInputError

logger = logging.getLogger(__name__)

ALGORITHM = "md5"


def _new_context():
    # usedforsecurity=False keeps MD5 usable on FIPS-restricted OpenSSL builds
    return hashlib.new(ALGORITHM, usedforsecurity=False)


class Md5HashEngine:
    """
    Stateless MD5 digester for canonical keys.

    A fresh hashlib context is created for every call, so a single
    instance can be shared between threads.

    Examples
    --------
    >>> engine = Md5HashEngine()
    >>> engine.digest_hex("2005-05-26-10458.68")
    'db9318c2259923d08b672cb305440f97'
    """

    def __init__(self):
        """
        Probe the runtime for MD5 support.

        Raises
        ------
        EngineInitError
            If hashlib cannot construct an MD5 context.
        """
        try:
            _new_context()
        except ValueError as e:
            logger.critical(f"MD5 unavailable in this runtime: {e}")
            raise EngineInitError(f"MD5 hashing primitive unavailable: {e}") from e

    def digest_hex(self, key: str) -> str:
        """Return the 32-char lowercase hex MD5 digest of the key's UTF-8 bytes."""
        context = _new_context()
        context.update(key.encode("utf-8"))
        return context.hexdigest()


def split_digest(digest: str) -> Tuple[str, str]:
    """
    Split a hex digest into its (high, low) 64-bit halves.

    The high half maps to latitude, the low half to longitude.
    """
    if len(digest) != DIGEST_HEX_LENGTH:
        raise InvalidInputError(
            f"Digest must be {DIGEST_HEX_LENGTH} hex chars, got {len(digest)}"
        )
    return digest[:DIGEST_HALF_LENGTH], digest[DIGEST_HALF_LENGTH:]


def hash_canonical_key(key: str) -> str:
    """Convenience wrapper: MD5 hex digest of a canonical key."""
    return Md5HashEngine().digest_hex(key)
