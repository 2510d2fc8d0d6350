"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(cookie_domain="example.com", cookie_secure=True)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    log_level: str = "info"

    # Cookies emitted by the transport adapter
    cookie_path: str = "/"
    cookie_domain: str | None = None
    cookie_secure: bool = False
    cookie_httponly: bool = True
    cookie_samesite: str = "lax"

    # Sessions (read-only, signed cookie)
    secret_key: str = ""
    session_cookie: str = "stooge_session"
    session_max_age: int = 86400  # 24 hours

    # Limits
    max_content_length: int = 16 * 1024 * 1024  # 16 MB
