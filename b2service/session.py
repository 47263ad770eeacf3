######################################################################
#
# File: b2service/session.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################

from enum import Enum, unique

from b2sdk.v2 import DEFAULT_MIN_PART_SIZE


@unique
class SessionState(Enum):
    UNAUTHORIZED = 'unauthorized'
    AUTHORIZED = 'authorized'
    UPLOAD_READY = 'upload_ready'


class B2Session:
    """
    What the service remembers between calls: the result of the last
    b2_authorize_account, and the upload URL that is reused for simple
    uploads until an upload fails.  Upload URLs belong to one bucket, so
    the bucket is remembered with them.

    The session is authorized when both the API URL and the account auth
    token are known.  The state is always derived from the fields, so it
    cannot disagree with them.
    """

    DEFAULT_MINIMUM_PART_SIZE = DEFAULT_MIN_PART_SIZE

    def __init__(self):
        self.clear()

    def clear(self):
        self.account_id = None
        self.api_url = None
        self.download_url = None
        self.auth_token = None
        self.minimum_part_size = self.DEFAULT_MINIMUM_PART_SIZE
        self.recommended_part_size = self.DEFAULT_MINIMUM_PART_SIZE
        self.clear_upload_data()

    def set_auth_data(
        self,
        account_id,
        api_url,
        download_url,
        auth_token,
        minimum_part_size=None,
        recommended_part_size=None,
    ):
        """
        Remembers a new authorization.

        :param minimum_part_size: the smallest part B2 accepts in a large file
        :param recommended_part_size: the part size B2 suggests, never less than
                                      minimum_part_size
        """
        if not api_url or not auth_token:
            raise ValueError('both api_url and auth_token are needed to authorize a session')
        self.account_id = account_id
        self.api_url = api_url
        self.download_url = download_url
        self.auth_token = auth_token
        self.minimum_part_size = minimum_part_size or self.DEFAULT_MINIMUM_PART_SIZE
        self.recommended_part_size = max(
            recommended_part_size or self.minimum_part_size, self.minimum_part_size
        )
        # upload URLs belong to the previous authorization
        self.clear_upload_data()

    def set_upload_data(self, bucket_id, upload_url, upload_auth_token):
        self.upload_bucket_id = bucket_id
        self.upload_url = upload_url
        self.upload_auth_token = upload_auth_token

    def clear_upload_data(self):
        self.upload_bucket_id = None
        self.upload_url = None
        self.upload_auth_token = None

    def is_authorized(self):
        return self.api_url is not None and self.auth_token is not None

    def has_upload_data(self, bucket_id=None):
        """
        Is there an upload URL to use?  When bucket_id is given, the URL
        must also be one for that bucket.
        """
        if self.upload_url is None or self.upload_auth_token is None:
            return False
        return bucket_id is None or bucket_id == self.upload_bucket_id

    @property
    def state(self):
        if not self.is_authorized():
            return SessionState.UNAUTHORIZED
        if self.has_upload_data():
            return SessionState.UPLOAD_READY
        return SessionState.AUTHORIZED

    def __repr__(self):
        return '<%s %s account_id=%s>' % (
            self.__class__.__name__, self.state.value, self.account_id
        )
