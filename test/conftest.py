######################################################################
#
# File: test/conftest.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################

import logging

import pytest


@pytest.fixture(autouse=True)
def debug_logging(caplog):
    """
    Captures the DEBUG records of the library, so that the tracing of
    public calls runs in every test.
    """
    caplog.set_level(logging.DEBUG, logger='b2service')
    yield caplog
