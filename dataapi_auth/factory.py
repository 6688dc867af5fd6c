"""Application factory for an example service that trusts DataAPI sessions."""

from typing import Optional

from flask import Flask
from flask_sqlalchemy import SQLAlchemy

from . import config, routes, sessions, users
from .auth import create_auth_middleware

db = SQLAlchemy()


def create_web_app(config_overrides: Optional[dict] = None,
                   create_db: bool = False) -> Flask:
    """
    Initialize and configure the example application.

    Parameters
    ----------
    config_overrides : dict
        Applied on top of :mod:`dataapi_auth.config`.
    create_db : bool
        Create the users table if it does not exist. Only useful for local
        development and tests; in production the table belongs to DataAPI.

    """
    app = Flask('dataapi_auth')
    app.config.from_object(config)
    if config_overrides:
        app.config.update(config_overrides)

    sessions.configure_app(app, sessions.create_session_config(
        secret=app.config['SESSION_SECRET'],
        store_uri=app.config['SESSION_STORE_URI'],
        is_production=app.config['PRODUCTION'],
        max_age=app.config['SESSION_MAX_AGE']
    ))
    db.init_app(app)

    auth = create_auth_middleware(
        db_getter=lambda request: db.session,
        login_redirect_url=app.config['DATAAPI_LOGIN_URL'],
        users_table=app.config['AUTH_USERS_TABLE']
    )
    auth.init_app(app)
    app.register_blueprint(routes.create_blueprint(auth))

    if create_db:
        with app.app_context():
            users.users_table(app.config['AUTH_USERS_TABLE']) \
                .create(db.engine, checkfirst=True)
    return app
