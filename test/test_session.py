######################################################################
#
# File: test/test_session.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################

from b2sdk.v2 import DEFAULT_MIN_PART_SIZE

from b2service.session import B2Session, SessionState

from .test_base import TestBase


class TestB2Session(TestBase):
    def setUp(self):
        self.session = B2Session()

    def _authorize(self, minimum_part_size=None, recommended_part_size=None):
        self.session.set_auth_data(
            'account-1', 'https://api.example.com', 'https://f001.example.com', 'token-1',
            minimum_part_size, recommended_part_size
        )

    def test_starts_unauthorized(self):
        self.assertEqual(SessionState.UNAUTHORIZED, self.session.state)
        self.assertFalse(self.session.is_authorized())
        self.assertEqual(B2Session.DEFAULT_MINIMUM_PART_SIZE, self.session.minimum_part_size)

    def test_authorized(self):
        self._authorize(5000000)
        self.assertEqual(SessionState.AUTHORIZED, self.session.state)
        self.assertTrue(self.session.is_authorized())
        self.assertEqual('https://f001.example.com', self.session.download_url)
        self.assertEqual(5000000, self.session.minimum_part_size)

    def test_default_part_sizes(self):
        self._authorize()
        self.assertEqual(DEFAULT_MIN_PART_SIZE, self.session.minimum_part_size)
        self.assertEqual(DEFAULT_MIN_PART_SIZE, self.session.recommended_part_size)

    def test_recommended_part_size(self):
        self._authorize(5000000, 100000000)
        self.assertEqual(5000000, self.session.minimum_part_size)
        self.assertEqual(100000000, self.session.recommended_part_size)

    def test_recommended_part_size_is_at_least_the_minimum(self):
        self._authorize(5000000, 1000)
        self.assertEqual(5000000, self.session.recommended_part_size)

    def test_needs_url_and_token(self):
        with self.assertRaises(ValueError):
            self.session.set_auth_data('account-1', 'https://api.example.com', None, None)
        self.assertEqual(SessionState.UNAUTHORIZED, self.session.state)

    def test_upload_ready(self):
        self._authorize()
        self.session.set_upload_data('bucket-1', 'https://upload.example.com/1', 'upload-token')
        self.assertEqual(SessionState.UPLOAD_READY, self.session.state)
        self.assertTrue(self.session.has_upload_data())
        self.assertTrue(self.session.has_upload_data('bucket-1'))
        self.assertFalse(self.session.has_upload_data('bucket-2'))

    def test_clear_upload_data(self):
        self._authorize()
        self.session.set_upload_data('bucket-1', 'https://upload.example.com/1', 'upload-token')
        self.session.clear_upload_data()
        self.assertEqual(SessionState.AUTHORIZED, self.session.state)
        self.assertIsNone(self.session.upload_url)

    def test_new_authorization_drops_upload_url(self):
        self._authorize()
        self.session.set_upload_data('bucket-1', 'https://upload.example.com/1', 'upload-token')
        self._authorize()
        self.assertEqual(SessionState.AUTHORIZED, self.session.state)
        self.assertFalse(self.session.has_upload_data('bucket-1'))

    def test_clear(self):
        self._authorize(5000000)
        self.session.set_upload_data('bucket-1', 'https://upload.example.com/1', 'upload-token')
        self.session.clear()
        self.assertEqual(SessionState.UNAUTHORIZED, self.session.state)
        self.assertIsNone(self.session.api_url)
        self.assertIsNone(self.session.auth_token)
        self.assertIsNone(self.session.upload_url)
        self.assertEqual(B2Session.DEFAULT_MINIMUM_PART_SIZE, self.session.minimum_part_size)
