"""Cookie transport — parsing, signing, and Set-Cookie serialization.

The read side (``parse_cookies``) runs once per request when the
``Request`` is built. The write side queues ``SetCookie`` directives on
the ``ResponseStream``; they go out with the response headers.

Signed cookies carry a companion ``<name>.sig`` cookie holding an
``itsdangerous`` signature of ``<name>=<value>``. A missing or invalid
signature makes the cookie read as absent.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from itsdangerous import Signer

from wren.config import CookieOptions
from wren.errors import ConfigurationError

if TYPE_CHECKING:
    from wren.http.response import ResponseStream

_SIGNATURE_SUFFIX = ".sig"
_SIGNER_SALT = "wren.cookies"


def parse_cookies(header: str) -> dict[str, str]:
    """Parse a ``Cookie`` header value into a name-value dict.

    Returns an empty dict for empty or missing headers.
    """
    if not header:
        return {}
    cookies: dict[str, str] = {}
    for pair in header.split(";"):
        pair = pair.strip()
        if "=" in pair:
            key, _, value = pair.partition("=")
            cookies[key.strip()] = value.strip()
    return cookies


@dataclass(frozen=True, slots=True)
class SetCookie:
    """A ``Set-Cookie`` directive queued on a response."""

    name: str
    value: str
    max_age: int | None = None
    path: str | None = "/"
    domain: str | None = None
    secure: bool = False
    httponly: bool = True
    samesite: str | None = "lax"

    def to_header_value(self) -> str:
        """Serialize to a ``Set-Cookie`` header value string."""
        parts = [f"{self.name}={self.value}"]
        if self.max_age is not None:
            parts.append(f"Max-Age={self.max_age}")
        if self.path:
            parts.append(f"Path={self.path}")
        if self.domain:
            parts.append(f"Domain={self.domain}")
        if self.secure:
            parts.append("Secure")
        if self.httponly:
            parts.append("HttpOnly")
        if self.samesite:
            parts.append(f"SameSite={self.samesite}")
        return "; ".join(parts)


class CookieJar:
    """Read and write cookies for one request/response pair.

    Usage::

        jar = CookieJar(request.cookies, response, CookieOptions(keys=("k1",)))
        jar.set("theme", "dark", signed=True)
        jar.get("theme", signed=True)  # reads the incoming request only
    """

    __slots__ = ("_incoming", "_response", "_secure_connection", "_signer")

    def __init__(
        self,
        incoming: Mapping[str, str],
        response: ResponseStream,
        options: CookieOptions,
        *,
        secure_connection: bool = False,
    ) -> None:
        self._incoming = incoming
        self._response = response
        self._secure_connection = secure_connection or options.secure
        # itsdangerous signs with the last key and verifies with all of them
        self._signer: Signer | None = (
            Signer(list(reversed(options.keys)), salt=_SIGNER_SALT) if options.keys else None
        )

    def _require_signer(self) -> Signer:
        if self._signer is None:
            msg = "Signed cookies require CookieOptions.keys to be set."
            raise ConfigurationError(msg)
        return self._signer

    def get(self, name: str, *, signed: bool = False) -> str | None:
        """Return the incoming value of cookie *name*, or ``None``.

        With ``signed=True`` the value is only returned when its
        companion signature cookie verifies.
        """
        value = self._incoming.get(name)
        if value is None or not signed:
            return value

        signer = self._require_signer()
        signature = self._incoming.get(name + _SIGNATURE_SUFFIX)
        if signature is None:
            return None
        if not signer.verify_signature(f"{name}={value}", signature):
            return None
        return value

    def set(
        self,
        name: str,
        value: str,
        *,
        max_age: int | None = None,
        path: str | None = "/",
        domain: str | None = None,
        secure: bool = False,
        httponly: bool = True,
        samesite: str | None = "lax",
        signed: bool = False,
        overwrite: bool = False,
    ) -> None:
        """Queue a ``Set-Cookie`` directive on the response.

        Raises:
            ConfigurationError: If *secure* is requested over an
                unencrypted connection, or *signed* without keys.
            RuntimeError: If the response headers were already sent.
        """
        if self._response.headers_sent:
            msg = f"Cannot set cookie {name!r}: response headers already sent."
            raise RuntimeError(msg)
        if secure and not self._secure_connection:
            msg = "Cannot send secure cookie over unencrypted connection."
            raise ConfigurationError(msg)

        attrs = {
            "max_age": max_age,
            "path": path,
            "domain": domain,
            "secure": secure,
            "httponly": httponly,
            "samesite": samesite,
        }
        pending = [SetCookie(name, value, **attrs)]
        if signed:
            signature = self._require_signer().get_signature(f"{name}={value}").decode("ascii")
            pending.append(SetCookie(name + _SIGNATURE_SUFFIX, signature, **attrs))

        cookies = self._response.cookies
        if overwrite:
            names = {cookie.name for cookie in pending}
            cookies[:] = [cookie for cookie in cookies if cookie.name not in names]
        cookies.extend(pending)
