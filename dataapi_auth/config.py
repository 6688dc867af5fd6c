"""Flask configuration for a service that shares DataAPI sessions."""

import os

DATAAPI_LOGIN_URL = os.environ.get('DATAAPI_LOGIN_URL',
                                   'https://data.specialblend.ca/login')
SESSION_SECRET = os.environ.get('SESSION_SECRET', '')
SESSION_STORE_URI = os.environ.get('SESSION_STORE_URI', '')
SESSION_MAX_AGE = int(os.environ.get('SESSION_MAX_AGE', '86400000'))
"""Session cookie lifetime in milliseconds."""

ENVIRONMENT = os.environ.get('ENVIRONMENT', 'development')
PRODUCTION = ENVIRONMENT == 'production'

SQLALCHEMY_DATABASE_URI = os.environ.get('SQLALCHEMY_DATABASE_URI',
                                         'sqlite:///:memory:')
SQLALCHEMY_TRACK_MODIFICATIONS = False
AUTH_USERS_TABLE = os.environ.get('AUTH_USERS_TABLE', 'users')

DATAAPI_AUTH_DEBUG = os.environ.get('DATAAPI_AUTH_DEBUG', '0') == '1'
