"""
Authentication for services that share DataAPI sessions.

DataAPI is the identity service: it handles login and registration and
writes the id of the logged-in user into a session kept in a shared store.
Any other service that reads that same session (same cookie name, secret and
store) can recognize the user without checking credentials itself. This
package provides the pieces such a service needs:

- :func:`.sessions.create_session_config` builds the session settings that
  must match DataAPI, and :func:`.sessions.configure_app` applies them.
- :func:`.auth.create_auth_middleware` builds an :class:`.auth.Auth`
  extension that loads the user behind the session before each request and
  offers three route decorators: ``require_auth``, ``optional_auth`` and
  ``require_admin``.

The user is attached to the request as ``flask.request.user`` (an
:class:`.domain.Identity`, or ``None`` for anonymous requests) and exposed to
templates as ``user``.

Quick start
-----------

.. code-block:: python

   # yourapp/factory.py
   import os

   from flask import Flask
   from flask_sqlalchemy import SQLAlchemy
   from dataapi_auth import sessions
   from dataapi_auth.auth import create_auth_middleware

   db = SQLAlchemy()


   def create_web_app() -> Flask:
       app = Flask('foo')
       sessions.configure_app(app, sessions.create_session_config(
           secret=os.environ['SESSION_SECRET'],
           store_uri=os.environ['SESSION_STORE_URI'],
           is_production=os.environ.get('ENVIRONMENT') == 'production'
       ))
       db.init_app(app)
       auth = create_auth_middleware(db_getter=lambda request: db.session)
       auth.init_app(app)
       return app

See :mod:`dataapi_auth.factory` for a complete example.
"""

import logging

from .domain import Identity, AuthConfig, SessionParameters, \
    CookieParameters
from .exceptions import ConfigurationError

logging.getLogger(__name__).addHandler(logging.NullHandler())
