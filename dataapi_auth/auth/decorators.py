"""
Route decorators that enforce authentication and admin privileges.

Each function here takes the :class:`.AuthConfig` of the pipeline and returns
a decorator for Flask view functions. They are normally used through the
:class:`dataapi_auth.auth.Auth` extension, which builds all three from the
same configuration:

.. code-block:: python

   auth = create_auth_middleware(db_getter=lambda request: db.session)
   auth.init_app(app)


   @blueprint.route('/admin/devices')
   @auth.require_auth
   @auth.require_admin
   def admin_devices():
       ...


When a request is rejected, the response depends on who is asking. Requests
whose path starts with :attr:`.AuthConfig.api_prefix` get a JSON body of the
form ``{"status": "error", "message": "..."}`` with a 401 or 403 status.
Browsers are redirected instead: to the login page when they are not logged
in (after the requested URL is stored in the session, so that DataAPI can
send them back), and to the home page when they are logged in but not an
admin.

:func:`require_admin` only checks the identity attached by
:func:`.identity.attach_user`; it must always be stacked below
:func:`require_auth`.
"""

from typing import Any, Callable
from functools import wraps

from flask import Response, session

from . import callers
from .identity import attach_user, current_user, ensure_user, has_session
from ..domain import AuthConfig


def _login_redirect(config: AuthConfig) -> Response:
    """Record where the user wanted to go, then send them to log in."""
    log = config.logger
    try:
        session[config.return_to_key] = callers.requested_url()
    except Exception as e:
        log.error('require_auth: Failed to set %s on session: %s',
                  config.return_to_key, e)

    if config.session_saver is not None:
        try:
            config.session_saver(session._get_current_object())
        except Exception as e:
            log.error('require_auth: Error saving session: %s', e)
    return callers.redirect_to(config.login_redirect_url)


def require_auth(config: AuthConfig) -> Callable:
    """
    Generate a decorator that requires a logged-in user.

    The session must carry a user id, and that id must resolve to a user
    record. The record is loaded by :func:`.identity.attach_user`, which runs
    here if it has not already run for this request; a session pointing at a
    deleted user is therefore treated like an anonymous one.
    """
    log = config.logger

    def protector(func: Callable) -> Callable:
        """Decorator that rejects anonymous requests."""
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            """Check the session for a user id before calling the view."""
            path = callers.requested_url()
            api_request = callers.is_api_request(config.api_prefix)

            if not has_session():
                log.error('require_auth: No session on the request for %s. '
                          'Is a session interface installed before the auth '
                          'middleware?', path)
                if api_request:
                    return callers.unauthorized()
                return callers.redirect_to(config.login_redirect_url)

            user_id = session.get(config.user_id_key)
            if not user_id:
                log.info('require_auth: No user id for session. Path: %s',
                         path)
            elif ensure_user(config) is None:
                log.info('require_auth: User id %s does not resolve to a '
                         'user. Path: %s', user_id, path)
            else:
                return func(*args, **kwargs)

            if api_request:
                return callers.unauthorized()
            return _login_redirect(config)
        return wrapper
    return protector


def optional_auth(config: AuthConfig) -> Callable:
    """Generate a decorator that attaches the user, if any, and never blocks."""
    log = config.logger

    def protector(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            log.debug('optional_auth: Path: %s', callers.requested_url())
            attach_user(config)
            return func(*args, **kwargs)
        return wrapper
    return protector


def require_admin(config: AuthConfig) -> Callable:
    """Generate a decorator that requires the current user to be an admin."""
    log = config.logger

    def protector(func: Callable) -> Callable:
        """Decorator that rejects users without the admin flag."""
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            user = current_user()
            if user is not None and user.is_admin is True:
                return func(*args, **kwargs)

            log.info('require_admin: Admin access denied for %s',
                     user.user_id if user is not None else 'anonymous user')
            if callers.is_api_request(config.api_prefix):
                return callers.forbidden()
            return callers.redirect_to(config.home_url)
        return wrapper
    return protector
