"""Session codec — the session cookie wire format.

A session is any JSON-serializable value. On the wire it is the base64
text of its compact JSON form; the empty string stands for no session.
The codec is pure: reading and writing the cookie itself is the
``CookieJar``'s job, deciding *when* to write it is ``send()``'s.
"""

import base64
import binascii
import hashlib
import json
from typing import Any

from wren.errors import ParseError


def _serialize(session: Any) -> str:
    return json.dumps(session, separators=(",", ":"), ensure_ascii=False)


def encode_session(session: Any) -> str:
    """Encode *session* into a cookie-safe string.

    ``None`` encodes to ``""``.
    """
    if session is None:
        return ""
    return base64.b64encode(_serialize(session).encode("utf-8")).decode("ascii")


def decode_session(cookie: str | None) -> Any:
    """Decode a session cookie value produced by ``encode_session``.

    A missing or empty cookie yields a fresh empty dict.

    Raises:
        ParseError: If the value is not base64, not UTF-8, or not JSON.
    """
    if not cookie:
        return {}
    try:
        raw = base64.b64decode(cookie, validate=True)
        return json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, ValueError) as exc:
        msg = "Malformed session cookie"
        raise ParseError(msg) from exc


def fingerprint_session(session: Any) -> str:
    """Return a change-detection digest of *session*.

    Two sessions with the same serialized form always share a
    fingerprint. This is not a security control.
    """
    return hashlib.sha1(_serialize(session).encode("utf-8"), usedforsecurity=False).hexdigest()
