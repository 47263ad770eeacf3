######################################################################
#
# File: b2service/retry.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################

import logging

logger = logging.getLogger(__name__)


def retry_with_refresh(attempt, refresh, max_attempts=2):
    """
    Calls attempt() until it returns a successful B2Response, calling
    refresh() before each new try.

    Gives up when max_attempts tries have been made, or when refresh()
    itself fails.  In both cases the last failed response of attempt()
    is returned.

    :param attempt: a function returning a B2Response
    :param refresh: a function returning a B2Response, called between tries
    :param max_attempts: how many times attempt() may be called, at least 1
    :return: the B2Response of the last call to attempt()
    """
    response = attempt()
    for attempt_number in range(2, max_attempts + 1):
        if response.ok:
            break
        logger.debug('attempt %d failed with %r, refreshing', attempt_number - 1, response)
        refreshed = refresh()
        if not refreshed.ok:
            logger.debug('refresh failed with %r, giving up', refreshed)
            break
        response = attempt()
    return response
