######################################################################
#
# File: b2service/utils.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################

from logfury.v1 import DefaultTraceMeta, disable_trace, limit_trace_arguments  # noqa: F401


class B2TraceMeta(DefaultTraceMeta):
    """
    Traces all public method calls at DEBUG level.
    """
