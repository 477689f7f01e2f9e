"""
Content fingerprinting for snapshot deduplication.

Fingerprints are content addresses: identical canonical markup always maps to
the same fingerprint. Changing the algorithm invalidates every stored
fingerprint, so it is versioned and the version is pinned in each database.
"""

import hashlib

# Bump on any change to compute_fingerprint and migrate existing databases.
FINGERPRINT_VERSION = "sha224-hex-v1"


def compute_fingerprint(html: str) -> str:
    """
    Compute the SHA-224 fingerprint of canonical markup.

    Args:
        html: Canonical markup produced by the extractor

    Returns:
        Hex-encoded SHA-224 digest of the UTF-8 encoded markup
    """
    return hashlib.sha224(html.encode("utf-8")).hexdigest()
