"""Read-only signed cookie sessions.

Session parameters are serialized as JSON and signed with
``itsdangerous``. The engine only ever reads them: ``SessionReader.load``
turns the session cookie of an incoming request into a mapping.
``dumps`` exists so application code can mint the cookie value itself
and attach it with a regular ``Cookie``.
"""

import logging
from collections.abc import Mapping
from typing import Any

from itsdangerous import BadSignature, URLSafeTimedSerializer

from stooge.config import AppConfig
from stooge.errors import ConfigurationError

logger = logging.getLogger("stooge.server")


class SessionReader:
    """Verify and decode the session cookie.

    Usage::

        reader = SessionReader(AppConfig(secret_key="s3cret"))
        session = reader.load(cookies)
    """

    __slots__ = ("_cookie_name", "_max_age", "_serializer")

    def __init__(self, config: AppConfig) -> None:
        if not config.secret_key:
            msg = "AppConfig.secret_key must not be empty to read sessions."
            raise ConfigurationError(msg)

        self._cookie_name = config.session_cookie
        self._max_age = config.session_max_age
        self._serializer = URLSafeTimedSerializer(config.secret_key)

    @property
    def cookie_name(self) -> str:
        return self._cookie_name

    def load(self, cookies: Mapping[str, str]) -> dict[str, Any]:
        """Return the session parameters carried by *cookies*.

        Missing, tampered, or expired cookies yield an empty dict.
        """
        cookie_value = cookies.get(self._cookie_name)
        if not cookie_value:
            return {}

        try:
            data = self._serializer.loads(cookie_value, max_age=self._max_age)
        except BadSignature:
            # SignatureExpired is a subclass
            logger.debug("Rejected session cookie %s", self._cookie_name)
            return {}

        if not isinstance(data, dict):
            return {}
        return data

    def dumps(self, data: Mapping[str, Any]) -> str:
        """Sign *data* into a session cookie value."""
        return self._serializer.dumps(dict(data))
