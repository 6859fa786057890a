"""
DRF exception handler that renders framework errors (authentication,
permission, method, parse) in the same envelope the views return:

    {"statusCode": <int>, "message": <str>, "data": <errors or null>}
"""
import logging

from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def _flatten_detail(detail):
    if isinstance(detail, list) and detail:
        return _flatten_detail(detail[0])
    if isinstance(detail, dict):
        if 'detail' in detail:
            return str(detail['detail'])
        return "Validation error"
    return str(detail)


def envelope_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is None:
        # Unhandled errors propagate to Django's 500 handling
        return None

    detail = response.data
    message = _flatten_detail(detail)
    data = detail if isinstance(detail, dict) and 'detail' not in detail else None

    view = context.get('view')
    logger.warning(
        f"{response.status_code} from {view.__class__.__name__ if view else 'unknown view'}: {message}"
    )

    response.data = {
        "statusCode": response.status_code,
        "message": message,
        "data": data,
    }
    return response
