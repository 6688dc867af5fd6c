"""Provides the request pipeline for services that trust DataAPI sessions."""

from typing import Any, Optional
import logging
import os

from flask import Flask

from . import callers, decorators, identity
from ..domain import AuthConfig, DBGetter
from ..exceptions import ConfigurationError


class Auth(object):
    """
    Attaches the DataAPI user to the request and provides route gates.

    Intended for use in a Flask application factory, for example:

    .. code-block:: python

       from flask import Flask
       from dataapi_auth.auth import create_auth_middleware
       from someapp import db, routes


       def create_web_app() -> Flask:
           app = Flask('someapp')
           app.config.from_pyfile('config.py')
           auth = create_auth_middleware(
               db_getter=lambda request: db.session
           )
           auth.init_app(app)  # Loads the user before each request.
           app.register_blueprint(routes.blueprint)
           return app

    Routes are then protected with :attr:`require_auth`,
    :attr:`optional_auth` and :attr:`require_admin`.

    Set env var or ``Flask.config`` ``DATAAPI_AUTH_DEBUG`` to get the
    resolver and gate messages at ``DEBUG`` level.
    """

    def __init__(self, config: AuthConfig,
                 app: Optional[Flask] = None) -> None:
        """
        Build the gates from ``config``.

        Parameters
        ----------
        config : :class:`.AuthConfig`
        app : :class:`Flask`

        """
        self.config = config
        self.require_auth = decorators.require_auth(config)
        self.optional_auth = decorators.optional_auth(config)
        self.require_admin = decorators.require_admin(config)
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        """
        Attach :meth:`.attach_user` to the Flask app.

        Parameters
        ----------
        app : :class:`Flask`

        """
        app.extensions['dataapi_auth'] = self
        app.before_request(self.attach_user)
        app.context_processor(self.inject_user)

        if app.config.get('DATAAPI_AUTH_DEBUG') \
                or os.getenv('DATAAPI_AUTH_DEBUG'):
            self.config.logger.setLevel(logging.DEBUG)
            self.config.logger.debug('DATAAPI_AUTH_DEBUG is set, auth debug '
                                     'messages are turned on')

    def attach_user(self) -> None:
        """Load the user behind the session, if any. Never blocks."""
        identity.attach_user(self.config)

    def inject_user(self) -> dict:
        """Make the current user available to templates as ``user``."""
        return {'user': identity.current_user()}


def create_auth_middleware(db_getter: Optional[DBGetter],
                           login_redirect_url: Optional[str] = None,
                           logger: Optional[logging.Logger] = None,
                           users_table: Optional[str] = None,
                           **options: Any) -> Auth:
    """
    Build the auth pipeline.

    Parameters
    ----------
    db_getter : function
        Gets the database session for a request:
        ``(request) -> sqlalchemy.orm.Session | None``. Required.
    login_redirect_url : str
        Where browsers are sent to log in (default: DataAPI's login page).
    logger : :class:`logging.Logger`
        Receives the pipeline's messages (default: the package logger, which
        is silent unless the application configures logging).
    users_table : str
        Name of the users table (default: ``users``).
    options
        Any other :class:`.AuthConfig` field, e.g. ``api_prefix``,
        ``home_url`` or ``session_saver``.

    Returns
    -------
    :class:`.Auth`

    Raises
    ------
    :class:`.ConfigurationError`
        If ``db_getter`` is missing or not callable, or an unknown option is
        passed.

    """
    if db_getter is None or not callable(db_getter):
        raise ConfigurationError('dataapi-auth: db_getter function is '
                                 'required')
    unknown = set(options) - set(AuthConfig._fields)
    if unknown:
        raise ConfigurationError(f'dataapi-auth: unknown options: '
                                 f'{", ".join(sorted(unknown))}')

    settings = dict(options, db_getter=db_getter)
    if login_redirect_url is not None:
        settings['login_redirect_url'] = login_redirect_url
    if logger is not None:
        settings['logger'] = logger
    if users_table is not None:
        settings['users_table'] = users_table
    return Auth(AuthConfig(**settings))
