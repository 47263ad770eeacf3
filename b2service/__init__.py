######################################################################
#
# File: b2service/__init__.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################

# Set default logging handler to avoid "No handler found" warnings.
import logging  # noqa

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .version import VERSION  # noqa: E402

__version__ = VERSION
assert __version__  # PEP-0396

from b2sdk.v2.exception import B2Error  # noqa: E402

from .client import B2Client  # noqa: E402
from .response import B2Response  # noqa: E402
from .service import B2Service, service_from_environment  # noqa: E402
from .session import B2Session, SessionState  # noqa: E402

__all__ = [
    'B2Client',
    'B2Error',
    'B2Response',
    'B2Service',
    'B2Session',
    'SessionState',
    'service_from_environment',
]
