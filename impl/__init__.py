#
# voice-skill-sdk
#
# (C) 2020, Magenta Hypercube, Deutsche Telekom AG
#
# This file is distributed under the terms of the MIT license.
# For details see the file LICENSE in the top directory.
#
#

#
# Agus skill: handlers are registered on import, import order is priority order
#
from agus.skill import lambda_handler

from . import launch        # noqa: F401
from . import conversion    # noqa: F401
from . import builtin       # noqa: F401
from . import reflector     # noqa: F401
from . import errors        # noqa: F401

# AWS Lambda entry point: "impl.handler"
handler = lambda_handler
