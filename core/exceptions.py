from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework import status
import logging

logger = logging.getLogger("dbplay")


class NotFoundError(APIException):
    """A referenced submission, question or user does not exist."""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found."
    default_code = "not_found"


class MalformedPayloadError(APIException):
    """An activity event payload is missing an expected key or has the wrong type."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Malformed event payload."
    default_code = "malformed_payload"


class InvalidCursorError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid pagination cursor."
    default_code = "invalid_cursor"


def custom_exception_handler(exc, context):
    """
    Wrap DRF + Django exceptions into a consistent response format.

    Success responses (2xx) are not touched.
    Only errors come through here.
    """
    response = drf_exception_handler(exc, context)

    # If DRF handled it, wrap it
    if response is not None:
        return Response(
            {
                "success": False,
                "status_code": response.status_code,
                "errors": response.data,
            },
            status=response.status_code,
        )

    # Unhandled exceptions -> 500
    logger.exception("Unhandled API exception", exc_info=exc)

    return Response(
        {
            "success": False,
            "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR,
            "errors": {"detail": "Internal server error."},
        },
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
