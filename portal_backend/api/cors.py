"""
CORS handling for the portal frontend.

The portal calls this API cross-origin with custom credential headers.
Every preflight is answered 200 with an empty body; the allow headers
are still computed by Starlette's CORSMiddleware.

Dependencies: starlette
System role: Cross-origin request policy
"""

from starlette.datastructures import Headers
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import Response

ALLOWED_METHODS = ["GET", "POST", "OPTIONS"]

# Set by Starlette for the "OK" text body; meaningless on an empty response
_BODY_HEADERS = {"content-length", "content-type"}


class PreflightCORSMiddleware(CORSMiddleware):
    """CORSMiddleware whose preflight replies are always an empty 200."""

    def preflight_response(self, request_headers: Headers) -> Response:
        response = super().preflight_response(request_headers)
        headers = {
            key: value
            for key, value in response.headers.items()
            if key.lower() not in _BODY_HEADERS
        }
        return Response(status_code=200, headers=headers)
