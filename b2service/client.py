######################################################################
#
# File: b2service/client.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################

import logging

import requests
from b2sdk.v2 import (
    REALM_URLS,
    AbstractUploadSource,
    B2HttpApiConfig,
    B2RawHTTPApi,
    RangeOfInputStream,
    UploadSourceBytes,
    UploadSourceLocalFile,
    choose_part_ranges,
    hex_sha1_of_stream,
)
from b2sdk.v2.exception import B2Error, ChecksumMismatch, InvalidUploadSource

from .b2http import B2Http
from .response import B2Response
from .version import USER_AGENT

logger = logging.getLogger(__name__)

# b2sdk does not translate everything into a B2Error, for example a
# connection dropping in the middle of a download body.
CALL_ERRORS = (B2Error, requests.RequestException, OSError, ValueError)


def make_upload_source(file):
    """
    Turns what the caller wants to upload into a b2sdk upload source.

    A file-like object is read here, once, so that an upload can be
    tried again without reading it a second time.

    :param file: bytes, the path of a local file, a binary file-like object
                 or an AbstractUploadSource
    :raises InvalidUploadSource: when file is none of those, or names no file
    """
    if isinstance(file, AbstractUploadSource):
        return file
    if isinstance(file, (bytes, bytearray)):
        return UploadSourceBytes(bytes(file))
    if isinstance(file, str):
        return UploadSourceLocalFile(file)
    if hasattr(file, 'read'):
        data = file.read()
        if not isinstance(data, bytes):
            raise InvalidUploadSource('stream must be opened in binary mode')
        return UploadSourceBytes(data)
    raise InvalidUploadSource('cannot upload a %s' % (type(file).__name__,))


def check_file_info(file_info):
    """
    B2 file info goes into HTTP headers, so names and values must be strings.

    :raises ValueError: for the first name or value that is not
    """
    for (name, value) in file_info.items():
        if not isinstance(name, str) or not isinstance(value, str):
            raise ValueError('file info must map strings to strings, not %r: %r' % (name, value))


class B2Client:
    """
    Makes the calls to B2 that the service needs, one method per B2 API,
    and reports each outcome as a B2Response instead of raising.

    The exception is upload_parts(), which uploads every part of a large
    file and raises on the first part that fails, so that the caller can
    cancel the large file.

    The URLs and tokens to use are passed in by the caller on every call;
    only the account credentials are kept here.
    """

    DEFAULT_CONTENT_TYPE = 'b2/x-auto'
    DOWNLOAD_CHUNK_SIZE = 1024 * 1024

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
        :param timeout: seconds to wait for each HTTP call
        :param realm: a name from REALM_URLS, or the URL of the realm itself
        :param raw_api: a replacement for B2RawHTTPApi, like b2sdk's RawSimulator
        :param user_agent_append: appended to the User-Agent header
        :param api_config: a b2sdk B2HttpApiConfig, which overrides user_agent_append
        """
        self.account_id = account_id
        self.application_key = application_key
        self.realm_url = REALM_URLS.get(realm, realm)
        if raw_api is None:
            if api_config is None:
                api_config = B2HttpApiConfig(
                    http_session_factory=requests.Session,
                    user_agent_append=' '.join(filter(None, [USER_AGENT, user_agent_append])),
                )
            raw_api = B2RawHTTPApi(B2Http(api_config, timeout=timeout))
        self.raw_api = raw_api

    def _call(self, api_name, fcn, *args, **kwargs):
        try:
            return B2Response.success(fcn(*args, **kwargs))
        except CALL_ERRORS as e:
            logger.debug('%s failed: %r', api_name, e)
            return B2Response.failure(e)

    def authorize_account(self):
        return self._call(
            'b2_authorize_account',
            self.raw_api.authorize_account,
            self.realm_url,
            self.account_id,
            self.application_key,
        )

    def list_buckets(self, api_url, account_auth_token, account_id):
        return self._call(
            'b2_list_buckets', self.raw_api.list_buckets, api_url, account_auth_token, account_id
        )

    def list_file_names(
        self, api_url, account_auth_token, bucket_id, start_file_name=None, max_file_count=None
    ):
        return self._call(
            'b2_list_file_names',
            self.raw_api.list_file_names,
            api_url,
            account_auth_token,
            bucket_id,
            start_file_name=start_file_name,
            max_file_count=max_file_count,
        )

    def download_file_by_name(
        self, download_url, bucket_name, file_name, account_auth_token=None, metadata_only=False
    ):
        """
        Downloads a file by its name.  The response has the headers, with
        lower-case names, and unless only the metadata was asked for, the
        whole body in `content`.

        With metadata_only, a HEAD request is made and the body is empty.
        """
        try:
            if metadata_only:
                headers = self.raw_api.get_file_info_by_name(
                    download_url, account_auth_token, bucket_name, file_name
                )
                content = b''
            else:
                url = self.raw_api.get_download_url_by_name(download_url, bucket_name, file_name)
                with self.raw_api.download_file_from_url(account_auth_token, url) as response:
                    headers = response.headers
                    content = b''.join(
                        response.iter_content(chunk_size=self.DOWNLOAD_CHUNK_SIZE)
                    )
        except CALL_ERRORS as e:
            logger.debug('b2_download_file_by_name failed: %r', e)
            return B2Response.failure(e)
        headers = dict((name.lower(), value) for (name, value) in headers.items())
        return B2Response.success(headers=headers, content=content)

    def get_upload_url(self, api_url, account_auth_token, bucket_id):
        return self._call(
            'b2_get_upload_url', self.raw_api.get_upload_url, api_url, account_auth_token,
            bucket_id
        )

    def upload_file(
        self,
        file,
        upload_url,
        upload_auth_token,
        file_name,
        content_type=None,
        file_info=None,
    ):
        """
        Uploads one file with b2_upload_file.

        :param file: bytes, a local path, a binary file-like object or an upload source
        """
        content_type = content_type or self.DEFAULT_CONTENT_TYPE
        file_info = file_info or {}

        def do_upload():
            upload_source = make_upload_source(file)
            check_file_info(file_info)
            with upload_source.open() as stream:
                return self.raw_api.upload_file(
                    upload_url,
                    upload_auth_token,
                    file_name,
                    upload_source.get_content_length(),
                    content_type,
                    upload_source.get_content_sha1(),
                    dict(file_info),
                    stream,
                )

        return self._call('b2_upload_file', do_upload)

    def start_large_file(
        self, api_url, account_auth_token, bucket_id, file_name, content_type=None, file_info=None
    ):
        def do_start():
            check_file_info(file_info or {})
            return self.raw_api.start_large_file(
                api_url,
                account_auth_token,
                bucket_id,
                file_name,
                content_type or self.DEFAULT_CONTENT_TYPE,
                dict(file_info or {}),
            )

        return self._call('b2_start_large_file', do_start)

    def get_upload_part_url(self, api_url, account_auth_token, file_id):
        return self._call(
            'b2_get_upload_part_url', self.raw_api.get_upload_part_url, api_url,
            account_auth_token, file_id
        )

    def upload_parts(self, upload_url, upload_auth_token, file_path, part_size):
        """
        Splits a local file into parts and uploads each of them with b2_upload_part.

        All of the parts except the last are the same size, at least
        part_size; the last one may be bigger.

        :return: one B2Response per part, in part number order
        :raises B2Error: as soon as one of the parts fails to upload
        """
        upload_source = UploadSourceLocalFile(file_path)
        content_length = upload_source.get_content_length()
        if content_length < part_size * 2:
            raise InvalidUploadSource(
                'large files need at least two parts of %d bytes: %s' % (part_size, file_path)
            )
        part_ranges = choose_part_ranges(content_length, part_size)

        responses = []
        with upload_source.open() as f:
            for part_number, (offset, length) in enumerate(part_ranges, 1):
                f.seek(offset)
                sha1_sum = hex_sha1_of_stream(f, length)
                f.seek(offset)
                response = self._call(
                    'b2_upload_part',
                    self.raw_api.upload_part,
                    upload_url,
                    upload_auth_token,
                    part_number,
                    length,
                    sha1_sum,
                    RangeOfInputStream(f, offset, length),
                )
                response.raise_for_status()
                if response.get('contentSha1') != sha1_sum:
                    raise ChecksumMismatch(
                        'sha1', expected=sha1_sum, actual=response.get('contentSha1')
                    )
                logger.debug('uploaded part %d of %d', part_number, len(part_ranges))
                responses.append(response)
        return responses

    def finish_large_file(self, api_url, account_auth_token, file_id, part_sha1_array):
        return self._call(
            'b2_finish_large_file', self.raw_api.finish_large_file, api_url, account_auth_token,
            file_id, part_sha1_array
        )

    def cancel_large_file(self, api_url, account_auth_token, file_id):
        return self._call(
            'b2_cancel_large_file', self.raw_api.cancel_large_file, api_url, account_auth_token,
            file_id
        )

    def delete_file_version(self, api_url, account_auth_token, file_id, file_name):
        return self._call(
            'b2_delete_file_version', self.raw_api.delete_file_version, api_url,
            account_auth_token, file_id, file_name
        )
