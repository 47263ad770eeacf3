######################################################################
#
# File: b2service/b2http.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################

import logging

import requests
from b2sdk import v2
from b2sdk.v2.exception import UnknownError

logger = logging.getLogger(__name__)


class B2Http(v2.B2Http):
    """
    The b2sdk wrapper for the requests module, making each call only once.

    b2sdk retries a call when B2 answers 429, 503 and the like.  The
    service decides for itself what to try again (only a simple upload,
    with a new upload URL), so here every call gets one try and its
    failure is raised to the caller.

    A 200 response with a body that is not JSON (a captive portal or a
    proxy error page) raises UnknownError, like any other response
    that cannot be understood.
    """

    # timeout for HTTP GET/POST requests
    TIMEOUT = 1200

    def __init__(self, api_config=None, timeout=None):
        """
        :param api_config: a B2HttpApiConfig; the default one uses requests.Session
        :param timeout: seconds to wait for each HTTP call
        """
        super().__init__(api_config or v2.B2HttpApiConfig(http_session_factory=requests.Session))
        if timeout is not None:
            self.TIMEOUT = timeout
            self.TIMEOUT_FOR_UPLOAD = timeout

    @property
    def timeout(self):
        return self.TIMEOUT

    def post_content_return_json(self, url, headers, data, **kwargs):
        kwargs['try_count'] = 1
        return self._json_or_error(
            url, super().post_content_return_json, url, headers, data, **kwargs
        )

    def post_json_return_json(self, url, headers, params, **kwargs):
        kwargs['try_count'] = 1
        return self._json_or_error(
            url, super().post_json_return_json, url, headers, params, **kwargs
        )

    def get_content(self, url, headers, **kwargs):
        kwargs['try_count'] = 1
        return super().get_content(url, headers, **kwargs)

    def head_content(self, url, headers, **kwargs):
        kwargs['try_count'] = 1
        return super().head_content(url, headers, **kwargs)

    def _json_or_error(self, url, fcn, *args, **kwargs):
        try:
            return fcn(*args, **kwargs)
        except ValueError as e:
            logger.debug('response from %s is not JSON: %s', url, e)
            raise UnknownError('response from %s is not JSON' % (url,))
