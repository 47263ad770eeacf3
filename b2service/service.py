######################################################################
#
# File: b2service/service.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################

import logging
import os

from b2sdk.v2 import b2_url_decode
from b2sdk.v2.exception import MaxFileSizeExceeded

from .client import CALL_ERRORS, B2Client, check_file_info, make_upload_source
from .config import config_from_environment
from .retry import retry_with_refresh
from .session import B2Session
from .utils import B2TraceMeta, disable_trace, limit_trace_arguments

logger = logging.getLogger(__name__)

FILE_ID_HEADER = 'x-bz-file-id'
FILE_INFO_HEADER_PREFIX = 'x-bz-info-'


class B2Service(metaclass=B2TraceMeta):
    """
    Bucket and file operations on one B2 account.

    The service authorizes itself the first time it needs to, and keeps
    the upload URL of the last simple upload for the next one.  When an
    upload fails, it gets a new upload URL and tries once more.

    None of the operations raise for failures reported by B2 or by the
    network: they return False (or, for all(), the files listed so far)
    instead, and the reason is logged.

    An expired auth token is not renewed automatically; call authorize()
    again to get a new one.

    A service instance is meant to be used by one caller at a time.
    """

    LIST_PAGE_SIZE = 1000

    # B2 does not accept large files bigger than this.
    MAX_LARGE_FILE_SIZE = 10 * 1000 * 1000 * 1000 * 1000  # 10TB

    def __init__(
        self,
        account_id,
        application_key,
        timeout=None,
        realm='production',
        raw_api=None,
        user_agent_append=None,
        api_config=None,
    ):
        """
        :param account_id: the account id or the application key id
        :param application_key: the secret that goes with account_id
        :param timeout: seconds to wait for each HTTP call, 1200 if not given
        :param realm: 'production', 'dev', 'staging', or the URL of a realm
        :param raw_api: a replacement for b2sdk's B2RawHTTPApi, like its RawSimulator
        :param user_agent_append: appended to the User-Agent of every request
        :param api_config: a b2sdk B2HttpApiConfig, to choose the requests session
        """
        self.client = B2Client(
            account_id,
            application_key,
            timeout=timeout,
            realm=realm,
            raw_api=raw_api,
            user_agent_append=user_agent_append,
            api_config=api_config,
        )
        self.session = B2Session()

    def __repr__(self):
        return '<%s %s %r>' % (self.__class__.__name__, self.client.account_id, self.session)

    def authorize(self):
        """
        Calls b2_authorize_account and remembers the result.

        :return: True if the account is now authorized
        """
        response = self.client.authorize_account()
        if not response.ok:
            logger.warning('authorization failed: %s', response.error)
            self.session.clear()
            return False
        # API v3 puts the storage URLs and part sizes under apiInfo.storageApi,
        # older versions put them at the top level.
        storage_api = (response.get('apiInfo') or {}).get('storageApi') or response.data
        api_url = storage_api.get('apiUrl')
        auth_token = response.get('authorizationToken')
        if not api_url or not auth_token:
            logger.warning('authorization response is missing apiUrl or authorizationToken')
            self.session.clear()
            return False
        self.session.set_auth_data(
            response.get('accountId'),
            api_url,
            storage_api.get('downloadUrl'),
            auth_token,
            storage_api.get('absoluteMinimumPartSize') or storage_api.get('minimumPartSize'),
            storage_api.get('recommendedPartSize'),
        )
        return True

    def ensure_authorized(self):
        """
        Authorizes the account unless that has already been done.

        :return: True if the account is authorized
        """
        if self.session.is_authorized():
            return True
        return self.authorize()

    @disable_trace
    def is_authorized(self):
        return self.session.is_authorized()

    def bucket_exists(self, bucket_id):
        return self._find_bucket(bucket_id) is not None

    def get_bucket_by_id(self, bucket_id):
        """
        :return: the bucket dict from b2_list_buckets, or False if there is no such bucket
        """
        bucket = self._find_bucket(bucket_id)
        if bucket is None:
            return False
        return bucket

    def _find_bucket(self, bucket_id):
        if not self.ensure_authorized():
            return None
        response = self.client.list_buckets(
            self.session.api_url, self.session.auth_token, self.session.account_id
        )
        if not response.ok:
            return None
        for bucket in response.get('buckets', []):
            if bucket.get('bucketId') == bucket_id:
                return bucket
        return None

    def get(self, bucket_name, file_name, private=False, metadata_only=False):
        """
        Downloads a file by name.

        :param private: send the account auth token, needed for private buckets
        :param metadata_only: only fetch the headers, with an HTTP HEAD
        :return: a dict with 'headers' (lower-case names) and 'content' (bytes,
                 empty when metadata_only), or False
        """
        if private or self.session.download_url is None:
            if not self.ensure_authorized():
                return False
        account_auth_token = self.session.auth_token if private else None
        response = self.client.download_file_by_name(
            self.session.download_url,
            bucket_name,
            file_name,
            account_auth_token,
            metadata_only=metadata_only,
        )
        if not response.ok:
            return False
        return {'headers': dict(response.headers), 'content': response.content}

    @limit_trace_arguments(skip=('file',))
    def insert(self, bucket_id, file, file_name, content_type=None, file_info=None):
        """
        Uploads a file with b2_upload_file.

        If the upload fails, a new upload URL is fetched and the upload
        is tried once more.

        :param file: bytes, a binary file-like object, or the path of a local file
        :param content_type: the MIME type, 'b2/x-auto' to let B2 pick one
        :param file_info: a dict of custom file info
        :return: the dict describing the new file version, or False
        """
        if not self.ensure_authorized():
            return False
        try:
            check_file_info(file_info or {})
            upload_source = make_upload_source(file)
        except CALL_ERRORS as e:
            logger.warning('cannot upload %s: %s', file_name, e)
            return False
        if not self.session.has_upload_data(bucket_id):
            if not self._refresh_upload_url(bucket_id).ok:
                return False

        def attempt():
            return self.client.upload_file(
                upload_source,
                self.session.upload_url,
                self.session.upload_auth_token,
                file_name,
                content_type=content_type,
                file_info=file_info,
            )

        response = retry_with_refresh(attempt, lambda: self._refresh_upload_url(bucket_id))
        if not response.ok:
            return False
        return dict(response.data)

    def _refresh_upload_url(self, bucket_id):
        self.session.clear_upload_data()
        response = self.client.get_upload_url(
            self.session.api_url, self.session.auth_token, bucket_id
        )
        if response.ok:
            self.session.set_upload_data(
                bucket_id, response.get('uploadUrl'), response.get('authorizationToken')
            )
        return response

    def insert_large(self, bucket_id, file_path, file_name, content_type=None, file_info=None):
        """
        Uploads a local file as a large file, in parts.

        The file must be big enough for two parts of the smallest part size
        B2 accepts (5MB in production).  Parts are of the size B2
        recommends, or smaller for files of less than two such parts.
        If anything goes wrong after the large file has been started, it
        is cancelled.

        :return: the dict describing the new file version, or False
        """
        if not self.ensure_authorized():
            return False
        minimum_part_size = self.session.minimum_part_size
        try:
            content_length = os.path.getsize(file_path)
        except OSError as e:
            logger.warning('cannot upload %s: %s', file_path, e)
            return False
        if content_length < minimum_part_size * 2:
            logger.warning(
                'cannot upload %s as a large file: %d bytes is less than two parts of %d bytes',
                file_path, content_length, minimum_part_size
            )
            return False
        if self.MAX_LARGE_FILE_SIZE < content_length:
            logger.warning(
                'cannot upload %s: %s', file_path,
                MaxFileSizeExceeded(content_length, self.MAX_LARGE_FILE_SIZE)
            )
            return False
        part_size = max(
            minimum_part_size, min(self.session.recommended_part_size, content_length // 2)
        )

        start = self.client.start_large_file(
            self.session.api_url,
            self.session.auth_token,
            bucket_id,
            file_name,
            content_type=content_type,
            file_info=file_info,
        )
        if not start.ok:
            return False
        file_id = start.get('fileId')

        try:
            part_url = self.client.get_upload_part_url(
                self.session.api_url, self.session.auth_token, file_id
            )
            part_url.raise_for_status()
            part_responses = self.client.upload_parts(
                part_url.get('uploadUrl'),
                part_url.get('authorizationToken'),
                file_path,
                part_size,
            )
            part_sha1_array = [response.get('contentSha1') for response in part_responses]
            finish = self.client.finish_large_file(
                self.session.api_url, self.session.auth_token, file_id, part_sha1_array
            )
            finish.raise_for_status()
        except Exception:
            logger.exception('upload of large file %s failed, cancelling it', file_id)
            self._cancel_large_file(file_id)
            return False
        return dict(finish.data)

    def _cancel_large_file(self, file_id):
        try:
            response = self.client.cancel_large_file(
                self.session.api_url, self.session.auth_token, file_id
            )
        except Exception:
            logger.exception('could not cancel large file %s', file_id)
            return
        if not response.ok:
            logger.warning('could not cancel large file %s: %s', file_id, response.error)

    def delete(self, bucket_name, file_name, private=False):
        """
        Deletes the newest version of a file.

        :return: True if a version was deleted
        """
        metadata = self.get(bucket_name, file_name, private=private, metadata_only=True)
        file_id = self._file_id_or_none(metadata)
        if file_id is None:
            return False
        return self._delete_file_version(file_id, file_name)

    def rename(
        self, bucket_name, bucket_id, file_name, target_bucket_id, new_file_name, private=False
    ):
        """
        Copies a file to a new name, then deletes the original version.

        This is not atomic: if the delete fails, or the process stops
        between the copy and the delete, both copies are left.  The content
        type and the file info of the original are kept.

        :param bucket_id: not used; the original is found by bucket_name
        :return: True if the copy was made and the original deleted
        """
        original = self.get(bucket_name, file_name, private=private)
        file_id = self._file_id_or_none(original)
        if file_id is None:
            return False
        headers = original['headers']
        file_info = dict(
            (name[len(FILE_INFO_HEADER_PREFIX):], b2_url_decode(value))
            for (name, value) in headers.items()
            if name.startswith(FILE_INFO_HEADER_PREFIX)
        )
        copy = self.insert(
            target_bucket_id,
            original['content'],
            new_file_name,
            content_type=headers.get('content-type'),
            file_info=file_info,
        )
        if not copy:
            return False
        return self._delete_file_version(file_id, file_name)

    def _file_id_or_none(self, file_dict):
        if not file_dict:
            return None
        file_id = file_dict['headers'].get(FILE_ID_HEADER)
        if not file_id:
            logger.warning('download response has no %s header', FILE_ID_HEADER)
            return None
        return file_id

    def _delete_file_version(self, file_id, file_name):
        if not self.ensure_authorized():
            return False
        response = self.client.delete_file_version(
            self.session.api_url, self.session.auth_token, file_id, file_name
        )
        return response.ok

    def all(self, bucket_id):
        """
        Lists all of the files in a bucket, one page of LIST_PAGE_SIZE at a time.

        If listing a page fails, the files listed before it are returned.

        :return: a list of file dicts from b2_list_file_names
        """
        files = []
        if not self.ensure_authorized():
            return files
        start_file_name = None
        while True:
            response = self.client.list_file_names(
                self.session.api_url,
                self.session.auth_token,
                bucket_id,
                start_file_name=start_file_name,
                max_file_count=self.LIST_PAGE_SIZE,
            )
            if not response.ok:
                logger.warning(
                    'listing of bucket %s stopped after %d files', bucket_id, len(files)
                )
                return files
            files.extend(response.get('files', []))
            start_file_name = response.get('nextFileName')
            if start_file_name is None:
                return files

    def exists(self, bucket_id, file_name):
        """
        Is there a file with exactly this name in the bucket?
        """
        if not self.ensure_authorized():
            return False
        response = self.client.list_file_names(
            self.session.api_url,
            self.session.auth_token,
            bucket_id,
            start_file_name=file_name,
            max_file_count=1,
        )
        if not response.ok:
            return False
        files = response.get('files', [])
        return len(files) != 0 and files[0].get('fileName') == file_name


def service_from_environment(environ=None, raw_api=None):
    """
    Makes a B2Service with the settings from environment variables:
    B2_APPLICATION_KEY_ID, B2_APPLICATION_KEY, and optionally
    B2_ENVIRONMENT, B2_TIMEOUT and B2_USER_AGENT_APPEND.

    :raises MissingAccountData: when the key id or the key is not set
    """
    config = config_from_environment(environ)
    return B2Service(
        config.account_id,
        config.application_key,
        timeout=config.timeout,
        realm=config.realm,
        raw_api=raw_api,
        user_agent_append=config.user_agent_append,
    )
