"""Tests for :class:`dataapi_auth.auth.Auth`."""

from unittest import mock
import logging

import pytest
from flask import Flask, render_template_string, request, session

from ... import auth
from ...domain import AuthConfig, DEFAULT_LOGIN_REDIRECT_URL
from ...exceptions import ConfigurationError
from ...tests.util import temporary_db


def test_db_getter_required():
    """The pipeline cannot be built without a database accessor."""
    with pytest.raises(ConfigurationError):
        auth.create_auth_middleware(None)
    with pytest.raises(ConfigurationError):
        auth.create_auth_middleware('not a function')


def test_unknown_option():
    with pytest.raises(ConfigurationError) as e:
        auth.create_auth_middleware(lambda request: None, cookie='sid')
    assert 'cookie' in str(e.value)


def test_defaults():
    """Unset options fall back to their defaults."""
    inst = auth.create_auth_middleware(lambda request: None)
    assert isinstance(inst.config, AuthConfig)
    assert inst.config.login_redirect_url == DEFAULT_LOGIN_REDIRECT_URL
    assert inst.config.users_table == 'users'
    assert inst.config.logger is logging.getLogger('dataapi_auth')


def test_options():
    """Options end up in the configuration shared by all gates."""
    log = logging.getLogger('dataapi_auth.tests.options')
    saver = mock.MagicMock()
    inst = auth.create_auth_middleware(
        lambda request: None,
        login_redirect_url='https://auth.example.com/login',
        logger=log,
        users_table='accounts',
        api_prefix='/v2',
        session_saver=saver
    )
    assert inst.config.login_redirect_url == 'https://auth.example.com/login'
    assert inst.config.logger is log
    assert inst.config.users_table == 'accounts'
    assert inst.config.api_prefix == '/v2'
    assert inst.config.session_saver is saver


def test_init_app():
    """The resolver runs before each request."""
    app = Flask('test')
    inst = auth.create_auth_middleware(lambda request: None)
    inst.init_app(app)
    assert app.extensions['dataapi_auth'] is inst
    assert inst.attach_user in app.before_request_funcs[None]


def test_init_app_in_constructor():
    app = Flask('test')
    inst = auth.Auth(AuthConfig(db_getter=lambda request: None), app)
    assert app.extensions['dataapi_auth'] is inst


def test_debug_flag():
    """``DATAAPI_AUTH_DEBUG`` turns on debug messages."""
    log = logging.getLogger('dataapi_auth.tests.debug')
    log.setLevel(logging.WARNING)
    app = Flask('test')
    app.config['DATAAPI_AUTH_DEBUG'] = True
    auth.create_auth_middleware(lambda request: None, logger=log).init_app(app)
    assert log.level == logging.DEBUG


def test_user_is_attached_and_rendered():
    """Each request gets its user, visible to views and templates."""
    app = Flask('test')
    app.config['SECRET_KEY'] = 'foosecret'
    with temporary_db() as db:
        inst = auth.create_auth_middleware(lambda request: db)
        inst.init_app(app)

        @app.route('/hello')
        def hello():
            assert request.user.user_id == 1
            return render_template_string('Hello {{ user.name }}')

        @app.route('/login-as/<int:user_id>')
        def login_as(user_id):
            session['userId'] = str(user_id)
            return ''

        client = app.test_client()
        client.get('/login-as/1')
        response = client.get('/hello')
    assert response.status_code == 200
    assert response.get_data(as_text=True) == 'Hello Ada'


def test_inject_user_anonymous():
    app = Flask('test')
    inst = auth.create_auth_middleware(lambda request: None)
    with app.test_request_context('/'):
        assert inst.inject_user() == {'user': None}
