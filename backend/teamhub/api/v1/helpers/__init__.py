"""
API v1 Helper Functions

Shared definitions used by the endpoint modules.
"""

from teamhub.api.v1.helpers.responses import (
    RESP_400,
    RESP_401,
    RESP_403,
    RESP_404,
    RESP_409,
    RESP_502,
    RESP_AUTH,
    RESP_AUTH_400,
    RESP_AUTH_400_404,
    RESP_AUTH_404,
)

__all__ = [
    "RESP_400",
    "RESP_401",
    "RESP_403",
    "RESP_404",
    "RESP_409",
    "RESP_502",
    "RESP_AUTH",
    "RESP_AUTH_400",
    "RESP_AUTH_400_404",
    "RESP_AUTH_404",
]
