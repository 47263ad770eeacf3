######################################################################
#
# File: b2service/config.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################

import collections
import os

from b2sdk.v2.exception import MissingAccountData

from .b2http import B2Http

B2_APPLICATION_KEY_ID_ENV_VAR = 'B2_APPLICATION_KEY_ID'
B2_APPLICATION_KEY_ENV_VAR = 'B2_APPLICATION_KEY'
B2_ENVIRONMENT_ENV_VAR = 'B2_ENVIRONMENT'
B2_TIMEOUT_ENV_VAR = 'B2_TIMEOUT'
B2_USER_AGENT_APPEND_ENV_VAR = 'B2_USER_AGENT_APPEND'

B2Config = collections.namedtuple(
    'B2Config', 'account_id application_key realm timeout user_agent_append'
)


def config_from_environment(environ=None):
    """
    Reads the settings of a service from environment variables.

    :param environ: the mapping to read, os.environ by default
    :raises MissingAccountData: when the key id or the key is not set
    :raises ValueError: when B2_TIMEOUT is not a number
    """
    if environ is None:
        environ = os.environ

    account_id = environ.get(B2_APPLICATION_KEY_ID_ENV_VAR)
    if not account_id:
        raise MissingAccountData(B2_APPLICATION_KEY_ID_ENV_VAR)
    application_key = environ.get(B2_APPLICATION_KEY_ENV_VAR)
    if not application_key:
        raise MissingAccountData(B2_APPLICATION_KEY_ENV_VAR)

    timeout = environ.get(B2_TIMEOUT_ENV_VAR)
    if timeout:
        timeout = float(timeout)
        if timeout <= 0:
            raise ValueError('%s must be positive, not %s' % (B2_TIMEOUT_ENV_VAR, timeout))
    else:
        timeout = B2Http.TIMEOUT

    return B2Config(
        account_id=account_id,
        application_key=application_key,
        realm=environ.get(B2_ENVIRONMENT_ENV_VAR) or 'production',
        timeout=timeout,
        user_agent_append=environ.get(B2_USER_AGENT_APPEND_ENV_VAR),
    )
