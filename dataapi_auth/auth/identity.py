"""
Resolves the user behind the shared session.

DataAPI stores the id of the logged-in user in the session. Here we look that
user up in the shared users table and attach an :class:`.Identity` to the
request as ``flask.request.user``. Anything that goes wrong along the way
(no session, malformed id, no database, unknown user, query error) leaves the
request anonymous; nothing here ever rejects a request or raises.
"""

from typing import Optional

from flask import request, session
from flask.sessions import NullSession

from .. import users
from ..domain import AuthConfig, Identity


def has_session() -> bool:
    """Determine whether a session layer is installed for this request."""
    return not isinstance(session, NullSession)


def resolve_identity(config: AuthConfig) -> Optional[Identity]:
    """
    Resolve the identity of the user behind the current request.

    Parameters
    ----------
    config : :class:`.AuthConfig`

    Returns
    -------
    :class:`.Identity` or None
        ``None`` means the request is anonymous.

    """
    log = config.logger
    path = request.path

    raw_user_id = session.get(config.user_id_key) if has_session() else None
    if not raw_user_id:
        log.debug('attach_user: No session or user id found for %s', path)
        return None
    log.debug('attach_user: Session found with user id %s for %s',
              raw_user_id, path)

    user_id = users.parse_user_id(raw_user_id)
    if user_id is None:
        log.error('attach_user: Invalid user id format in session: %r',
                  raw_user_id)
        return None

    try:
        db = config.db_getter(request._get_current_object())
    except Exception as e:
        log.error('attach_user: Database accessor failed: %s', e)
        return None
    if db is None:
        log.error('attach_user: Database connection not available')
        return None

    result = users.find_user(db, config.users_table, user_id)
    if result.status == users.FAILED:
        log.error('attach_user: Error fetching user %s: %s', user_id,
                  result.error)
        return None
    if result.status == users.NOT_FOUND:
        log.error('attach_user: No user found for user id %s', user_id)
        return None

    identity = Identity.from_record(result.record)
    log.debug('attach_user: User found: %s (%s)', identity.name,
              identity.email)
    return identity


def attach_user(config: AuthConfig) -> None:
    """Resolve the current identity and publish it as ``request.user``."""
    request.user = resolve_identity(config)


def current_user() -> Optional[Identity]:
    """Get the identity published for the current request, if any."""
    user: Optional[Identity] = getattr(request, 'user', None)
    return user


def ensure_user(config: AuthConfig) -> Optional[Identity]:
    """Get the current identity, resolving it first if that has not run."""
    if not hasattr(request, 'user'):
        attach_user(config)
    return current_user()
