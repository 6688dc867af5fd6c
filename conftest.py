import pytest

from dataapi_auth.factory import create_web_app

TEST_CONFIG = {
    'TESTING': True,
    'SESSION_SECRET': 'foosecret',
    'SESSION_STORE_URI': 'mongodb://localhost:27017/sessions',
    'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
    'PRODUCTION': False,
}


@pytest.fixture()
def app():
    return create_web_app(dict(TEST_CONFIG), create_db=True)


@pytest.fixture()
def client(app):
    return app.test_client()
