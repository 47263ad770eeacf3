######################################################################
#
# File: test/test_config.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################

from unittest.mock import patch

from b2sdk.v2 import REALM_URLS, RawSimulator
from b2sdk.v2.exception import MissingAccountData

from b2service.b2http import B2Http
from b2service.config import B2Config, config_from_environment
from b2service.service import B2Service, service_from_environment

from .test_base import TestBase


class TestConfigFromEnvironment(TestBase):
    ENVIRON = {
        'B2_APPLICATION_KEY_ID': 'key-id',
        'B2_APPLICATION_KEY': 'secret',
    }

    def test_defaults(self):
        self.assertEqual(
            B2Config(
                account_id='key-id',
                application_key='secret',
                realm='production',
                timeout=B2Http.TIMEOUT,
                user_agent_append=None,
            ),
            config_from_environment(self.ENVIRON),
        )

    def test_all_settings(self):
        environ = dict(
            self.ENVIRON,
            B2_ENVIRONMENT='staging',
            B2_TIMEOUT='30.5',
            B2_USER_AGENT_APPEND='my-app/1.0',
        )
        config = config_from_environment(environ)
        self.assertEqual('staging', config.realm)
        self.assertEqual(30.5, config.timeout)
        self.assertEqual('my-app/1.0', config.user_agent_append)

    def test_missing_key_id(self):
        with self.assertRaisesRegexp(MissingAccountData, 'B2_APPLICATION_KEY_ID'):
            config_from_environment({'B2_APPLICATION_KEY': 'secret'})

    def test_missing_key(self):
        with self.assertRaisesRegexp(MissingAccountData, 'B2_APPLICATION_KEY(?!_ID)'):
            config_from_environment({'B2_APPLICATION_KEY_ID': 'key-id'})

    def test_bad_timeout(self):
        with self.assertRaises(ValueError):
            config_from_environment(dict(self.ENVIRON, B2_TIMEOUT='soon'))
        with self.assertRaises(ValueError):
            config_from_environment(dict(self.ENVIRON, B2_TIMEOUT='0'))

    def test_reads_os_environ(self):
        with patch.dict('os.environ', self.ENVIRON, clear=True):
            self.assertEqual('key-id', config_from_environment().account_id)


class TestServiceFromEnvironment(TestBase):
    def test_uses_settings(self):
        raw_api = RawSimulator()
        (account_id, master_key) = raw_api.create_account()
        environ = {
            'B2_APPLICATION_KEY_ID': account_id,
            'B2_APPLICATION_KEY': master_key,
            'B2_ENVIRONMENT': 'dev',
        }
        service = service_from_environment(environ, raw_api=raw_api)
        self.assertIsInstance(service, B2Service)
        self.assertEqual(REALM_URLS['dev'], service.client.realm_url)
        self.assertTrue(service.authorize())

    def test_timeout_reaches_http_layer(self):
        environ = {
            'B2_APPLICATION_KEY_ID': 'key-id',
            'B2_APPLICATION_KEY': 'secret',
            'B2_TIMEOUT': '12',
            'B2_USER_AGENT_APPEND': 'my-app',
        }
        service = service_from_environment(environ)
        b2_http = service.client.raw_api.b2_http
        self.assertEqual(12, b2_http.timeout)
        self.assertTrue(b2_http.user_agent.endswith(' my-app'))

    def test_realm_url(self):
        environ = {
            'B2_APPLICATION_KEY_ID': 'key-id',
            'B2_APPLICATION_KEY': 'secret',
            'B2_ENVIRONMENT': 'http://localhost:8180',
        }
        service = service_from_environment(environ)
        self.assertEqual('http://localhost:8180', service.client.realm_url)
