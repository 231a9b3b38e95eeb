"""Deterministic content fingerprint for change detection."""

import hashlib
import json
from collections.abc import Mapping

HASH_PREFIX = "sha256:"


def canonical_json(fields: Mapping[str, str]) -> str:
    """Serialize with sorted keys and compact separators so key order never matters."""
    return json.dumps(dict(fields), sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def content_hash(fields: Mapping[str, str]) -> str:
    """
    Hash the descriptive fields of a record.
    Returns "sha256:" followed by the lowercase hex digest of the canonical JSON.
    Lone surrogates (valid in JSON input) are encoded as-is rather than rejected.
    """
    digest = hashlib.sha256(canonical_json(fields).encode("utf-8", "surrogatepass")).hexdigest()
    return f"{HASH_PREFIX}{digest}"
