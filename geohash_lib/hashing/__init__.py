"""
Hash pipeline: canonical key -> MD5 digest -> fractional offsets -> destination.

Everything here is pure and synchronous; the only I/O in the package
lives in data_fetchers/.
"""

from .canonical_key import build_canonical_key, format_index_price
from .composer import compose_destination, truncate_toward_zero
from .fraction_decoder import decode_digest_half
from .geohasher import GeohashResult, compute_destination, geo_hash
from .hash_engine import Md5HashEngine, hash_canonical_key, split_digest

__all__ = [
    "build_canonical_key",
    "format_index_price",
    "Md5HashEngine",
    "hash_canonical_key",
    "split_digest",
    "decode_digest_half",
    "compose_destination",
    "truncate_toward_zero",
    "geo_hash",
    "compute_destination",
    "GeohashResult",
]
