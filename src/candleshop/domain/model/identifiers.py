"""Identifier helpers.

Documents are keyed by 24 hex characters, the same shape as a
document-database object id.  Either case is accepted on input; ids are
stored and compared in lowercase.  Guest identifiers are opaque UUID4
strings handed to the browser in a cookie.
"""

from __future__ import annotations

import re
import secrets
import uuid

_DOCUMENT_ID = re.compile(r"^[0-9a-f]{24}$", re.IGNORECASE)


def new_id() -> str:
    return secrets.token_hex(12)


def is_valid_id(value: object) -> bool:
    return isinstance(value, str) and bool(_DOCUMENT_ID.match(value))


def normalize_id(value: str) -> str:
    """Lowercase a well-formed document id; anything else is returned as is."""
    return value.lower() if is_valid_id(value) else value


def new_guest_id() -> str:
    return str(uuid.uuid4())
