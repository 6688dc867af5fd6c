"""Tests for :mod:`dataapi_auth.domain`."""

from unittest import TestCase
from datetime import timedelta

from .. import domain


class TestIdentity(TestCase):
    """Tests for :class:`.domain.Identity`."""

    def test_from_record(self):
        """Only allow-listed fields are copied from the record."""
        identity = domain.Identity.from_record({
            'id': 7,
            'name': 'Ada',
            'email': 'ada@example.com',
            'is_admin': True,
            'password': '$2b$10$hash',
            'resetToken': 'abc123'
        })
        self.assertEqual(identity, domain.Identity(7, 'Ada',
                                                   'ada@example.com', True))
        self.assertEqual(set(identity.to_dict()),
                         {'user_id', 'name', 'email', 'is_admin'})
        self.assertNotIn('$2b$10$hash', identity.to_dict().values())

    def test_admin_flag_missing(self):
        """A record without an admin flag yields a non-admin."""
        identity = domain.Identity.from_record({'id': 7, 'name': 'Ada'})
        self.assertIs(identity.is_admin, False)
        self.assertIsNone(identity.email)

    def test_admin_flag_not_true(self):
        """Only ``True`` itself grants admin."""
        for value in [None, False, 0, 1, 'true', 'yes', []]:
            identity = domain.Identity.from_record({'id': 7,
                                                    'is_admin': value})
            self.assertIs(identity.is_admin, False,
                          f'{value!r} does not grant admin')

    def test_to_dict(self):
        identity = domain.Identity(3, 'Cy', 'cy@example.com')
        self.assertEqual(identity.to_dict(), {
            'user_id': 3,
            'name': 'Cy',
            'email': 'cy@example.com',
            'is_admin': False
        })


class TestAuthConfig(TestCase):
    """Tests for :class:`.domain.AuthConfig`."""

    def test_defaults(self):
        """Only the database accessor is required."""
        config = domain.AuthConfig(db_getter=lambda request: None)
        self.assertEqual(config.login_redirect_url,
                         'https://data.specialblend.ca/login')
        self.assertEqual(config.users_table, 'users')
        self.assertEqual(config.api_prefix, '/api')
        self.assertEqual(config.home_url, '/')
        self.assertEqual(config.user_id_key, 'userId')
        self.assertEqual(config.return_to_key, 'returnTo')
        self.assertEqual(config.logger.name, 'dataapi_auth')
        self.assertIsNone(config.session_saver)

    def test_immutable(self):
        config = domain.AuthConfig(db_getter=lambda request: None)
        with self.assertRaises(AttributeError):
            config.users_table = 'people'


class TestSessionParameters(TestCase):
    """Tests for :class:`.domain.SessionParameters`."""

    def test_lifetime(self):
        """The cookie lifetime is available as a timedelta."""
        params = domain.SessionParameters(
            name='data-api.sid',
            secret='s',
            store_uri='m',
            database_name='devdatas',
            collection='mySessions',
            cookie=domain.CookieParameters()
        )
        self.assertEqual(params.lifetime, timedelta(hours=24))
        self.assertFalse(params.resave)
        self.assertFalse(params.save_uninitialized)
