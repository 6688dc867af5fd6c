"""
Session settings shared with DataAPI.

DataAPI writes the session record at login; every other service only reads
it. That only works if all of them agree on the cookie name, the signing
secret, where the sessions are stored, and the cookie flags. Build those
settings with :func:`create_session_config` in each service, then wire them
into the host with :func:`configure_app`:

.. code-block:: python

   params = sessions.create_session_config(
       secret=os.environ['SESSION_SECRET'],
       store_uri=os.environ['SESSION_STORE_URI'],
       is_production=os.environ.get('ENVIRONMENT') == 'production'
   )
   sessions.configure_app(app, params)

"""

from typing import List
import logging

from flask import Flask

from .domain import SessionParameters, CookieParameters, \
    SESSION_COOKIE_NAME, SESSION_COLLECTION, PRODUCTION_DATABASE, \
    DEVELOPMENT_DATABASE, DEFAULT_SESSION_MAX_AGE
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def create_session_config(secret: str, store_uri: str,
                          is_production: bool = False,
                          max_age: int = DEFAULT_SESSION_MAX_AGE) \
        -> SessionParameters:
    """
    Build the session parameters that must match DataAPI.

    Parameters
    ----------
    secret : str
        Session signing secret. Must be the one DataAPI uses.
    store_uri : str
        Connection string of the session store.
    is_production : bool
        Selects the production session database and secure cookies.
    max_age : int
        Cookie lifetime in milliseconds (default: 24 hours).

    Returns
    -------
    :class:`.SessionParameters`

    Raises
    ------
    :class:`.ConfigurationError`
        If ``secret`` or ``store_uri`` is empty, or ``max_age`` is not a
        positive integer.

    """
    if not store_uri:
        raise ConfigurationError('store_uri is required for session config')
    if not secret:
        raise ConfigurationError('secret is required for session config')
    if isinstance(max_age, bool) or not isinstance(max_age, int) \
            or max_age <= 0:
        raise ConfigurationError(f'max_age must be a positive integer, '
                                 f'got {max_age!r}')

    return SessionParameters(
        name=SESSION_COOKIE_NAME,
        secret=secret,
        store_uri=store_uri,
        database_name=(PRODUCTION_DATABASE if is_production
                       else DEVELOPMENT_DATABASE),
        collection=SESSION_COLLECTION,
        cookie=CookieParameters(
            max_age=max_age,
            http_only=True,
            same_site='lax',
            secure=is_production
        )
    )


def configure_app(app: Flask, params: SessionParameters) -> None:
    """
    Apply shared session parameters to a Flask application.

    Sets Flask's own session cookie settings, plus the store locators
    (``SESSION_STORE_URI``, ``SESSION_DATABASE_NAME``, ``SESSION_COLLECTION``)
    for whatever session store the application installs.

    ``PERMANENT_SESSION_LIFETIME`` only applies to sessions marked
    ``session.permanent = True``; other Flask sessions end with the browser
    session. The application must set the flag (e.g. at login) for the
    shared lifetime to take effect.
    """
    app.config['SECRET_KEY'] = params.secret
    app.config['SESSION_COOKIE_NAME'] = params.name
    app.config['SESSION_COOKIE_HTTPONLY'] = params.cookie.http_only
    app.config['SESSION_COOKIE_SAMESITE'] = params.cookie.same_site.title()
    app.config['SESSION_COOKIE_SECURE'] = params.cookie.secure
    app.config['PERMANENT_SESSION_LIFETIME'] = params.lifetime
    app.config['SESSION_STORE_URI'] = params.store_uri
    app.config['SESSION_DATABASE_NAME'] = params.database_name
    app.config['SESSION_COLLECTION'] = params.collection
    logger.debug('Configured shared session %s (database %s)', params.name,
                 params.database_name)


def mismatched_fields(reference: SessionParameters,
                      candidate: SessionParameters) -> List[str]:
    """Get the names of the fields on which two sets of parameters differ."""
    fields = [name for name in SessionParameters._fields if name != 'cookie'
              and getattr(reference, name) != getattr(candidate, name)]
    fields += [f'cookie.{name}' for name in CookieParameters._fields
               if getattr(reference.cookie, name)
               != getattr(candidate.cookie, name)]
    return fields


def assert_shared(reference: SessionParameters,
                  candidate: SessionParameters) -> None:
    """
    Check that a service's session parameters match the reference ones.

    Raises
    ------
    :class:`.ConfigurationError`
        If any field differs. The message names the fields, not their values,
        so that secrets do not end up in logs.

    """
    fields = mismatched_fields(reference, candidate)
    if fields:
        raise ConfigurationError(f'Session parameters do not match: '
                                 f'{", ".join(fields)}')
