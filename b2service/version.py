######################################################################
#
# File: b2service/version.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################

from importlib.metadata import PackageNotFoundError, version

try:
    VERSION = version('b2service')
except PackageNotFoundError:
    VERSION = '0.0.0'

# appended to the User-Agent that b2sdk sends
USER_AGENT = 'b2service/%s' % (VERSION,)
