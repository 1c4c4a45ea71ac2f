"""Application configuration.

Every config type is a frozen dataclass — immutable after creation,
IDE-autocompletable, no string-key dict lookups. The app holds one
``AppConfig`` for its whole lifetime.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class CookieOptions:
    """Cookie transport options shared by every cookie the app reads or writes.

    ``keys`` signs and verifies cookie values. The first key signs new
    cookies; every key is accepted when verifying, so keys can be rotated
    by prepending a new one::

        CookieOptions(keys=("new-secret", "old-secret"))

    ``secure`` marks the connection as secure even when the ASGI scheme is
    plain ``http`` (e.g. behind a TLS-terminating proxy).
    """

    keys: tuple[str, ...] = ()
    secure: bool = False


@dataclass(frozen=True, slots=True)
class SessionCookieConfig:
    """Metadata for the session cookie.

    The session is stored entirely in this cookie. ``signed`` adds a
    companion ``<name>.sig`` cookie and requires ``CookieOptions.keys``.
    """

    name: str = "wren_session"
    max_age: int | None = 60 * 60 * 24 * 10  # 10 days
    path: str = "/"
    domain: str | None = None
    secure: bool = False
    httponly: bool = True
    samesite: str | None = "lax"
    signed: bool = False
    overwrite: bool = True


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(
            port=3500,
            cookies=CookieOptions(keys=("notasecret",)),
            session_cookie=SessionCookieConfig(name="APPSERVER", signed=True),
        )
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    log_level: str = "info"

    # Cookies
    cookies: CookieOptions = field(default_factory=CookieOptions)
    session_cookie: SessionCookieConfig = field(default_factory=SessionCookieConfig)

    # Limits
    max_body_size: int = 1024 * 1024  # 1 MiB
