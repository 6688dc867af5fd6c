"""Defines the identity and configuration concepts shared by DataAPI clients."""

from typing import Any, Callable, Mapping, NamedTuple, Optional
from datetime import timedelta
import logging

from flask import Request
from flask.sessions import SessionMixin
from sqlalchemy.orm import Session as DBSession

DEFAULT_LOGIN_REDIRECT_URL = 'https://data.specialblend.ca/login'
DEFAULT_USERS_TABLE = 'users'

SESSION_COOKIE_NAME = 'data-api.sid'
"""Cookie name used by DataAPI. Every trusting service must use it as-is."""

SESSION_COLLECTION = 'mySessions'
PRODUCTION_DATABASE = 'datas'
DEVELOPMENT_DATABASE = 'devdatas'
DEFAULT_SESSION_MAX_AGE = 1000 * 60 * 60 * 24
"""Session lifetime in milliseconds (24 hours)."""

DBGetter = Callable[[Request], Optional[DBSession]]
SessionSaver = Callable[[SessionMixin], None]


class Identity(NamedTuple):
    """
    Sanitized view of a user record, attached to the current request.

    Only the fields below are ever copied out of the user record, so password
    hashes and tokens stored alongside them never reach request handlers or
    templates.
    """

    user_id: int
    """Primary key of the user record."""

    name: Optional[str] = None
    """Display name."""

    email: Optional[str] = None
    """The user's e-mail address."""

    is_admin: bool = False
    """Whether the user may pass the admin gate."""

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> 'Identity':
        """Project a user record onto an :class:`.Identity`."""
        return cls(
            user_id=record['id'],
            name=record.get('name'),
            email=record.get('email'),
            is_admin=record.get('is_admin') is True
        )

    def to_dict(self) -> dict:
        """Get a JSON-friendly representation of the identity."""
        return dict(self._asdict())


class AuthConfig(NamedTuple):
    """
    Configuration for the auth pipeline.

    Built once by :func:`dataapi_auth.auth.create_auth_middleware`; every gate
    closes over the same instance.
    """

    db_getter: DBGetter
    """Returns the database session for a request, or ``None``."""

    login_redirect_url: str = DEFAULT_LOGIN_REDIRECT_URL
    """Where browsers are sent when they are not logged in."""

    logger: logging.Logger = logging.getLogger('dataapi_auth')
    """Receives all resolver and gate messages."""

    users_table: str = DEFAULT_USERS_TABLE
    """Name of the table holding user records."""

    api_prefix: str = '/api'
    """Requests whose path starts with this prefix are API requests."""

    home_url: str = '/'
    """Where browsers are sent when they lack admin privileges."""

    user_id_key: str = 'userId'
    """Session key holding the user id, as written by DataAPI."""

    return_to_key: str = 'returnTo'
    """Session key DataAPI reads to send the user back after login."""

    session_saver: Optional[SessionSaver] = None
    """
    Persists the session immediately, for hosts whose session layer needs it.

    If ``None``, the session is saved by the host's session interface when
    the response is finalized.
    """


class CookieParameters(NamedTuple):
    """Cookie settings of the shared session."""

    max_age: int = DEFAULT_SESSION_MAX_AGE
    """Lifetime in milliseconds."""

    http_only: bool = True
    same_site: str = 'lax'
    secure: bool = False
    """Only ``True`` when the service is deployed behind HTTPS."""


class SessionParameters(NamedTuple):
    """
    Session settings that must be identical across every trusting service.

    The store itself is not created here; callers wire these values into
    their own session layer (see :func:`dataapi_auth.sessions.configure_app`).
    """

    name: str
    secret: str
    store_uri: str
    database_name: str
    collection: str
    cookie: CookieParameters
    resave: bool = False
    save_uninitialized: bool = False

    @property
    def lifetime(self) -> timedelta:
        """The cookie lifetime as a :class:`timedelta`."""
        return timedelta(milliseconds=self.cookie.max_age)
