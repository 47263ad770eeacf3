######################################################################
#
# File: b2service/response.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################

from types import MappingProxyType

from b2sdk.v2.exception import UnknownError


class B2Response:
    """
    The outcome of one call to B2, as seen by the service layer.

    A successful response carries the decoded JSON fields in `data`, and,
    for downloads, the HTTP headers (with lower-cased names) and the raw
    body in `content`.  A failed response carries the exception that
    made the call fail, usually a B2Error.

    Responses are read-only.
    """

    __slots__ = ('_ok', '_data', '_headers', '_content', '_error')

    def __init__(self, ok, data=None, headers=None, content=None, error=None):
        self._ok = bool(ok)
        self._data = MappingProxyType(dict(data or {}))
        self._headers = None
        if headers is not None:
            self._headers = MappingProxyType({k.lower(): v for k, v in headers.items()})
        self._content = content
        self._error = error

    @classmethod
    def success(cls, data=None, headers=None, content=None):
        return cls(True, data=data, headers=headers, content=content)

    @classmethod
    def failure(cls, error):
        return cls(False, error=error)

    @property
    def ok(self):
        return self._ok

    @property
    def data(self):
        return self._data

    @property
    def headers(self):
        return self._headers

    @property
    def content(self):
        return self._content

    @property
    def error(self):
        return self._error

    def get(self, name, default=None):
        """
        Returns one named field of the response, like "fileId" or "uploadUrl".
        """
        return self._data.get(name, default)

    def raise_for_status(self):
        """
        Raises the error that made this call fail.  Does nothing on success.
        """
        if not self._ok:
            raise self._error or UnknownError('call to B2 failed')

    def __repr__(self):
        if self._ok:
            return '<B2Response ok %s>' % (sorted(self._data),)
        return '<B2Response failed %r>' % (self._error,)
