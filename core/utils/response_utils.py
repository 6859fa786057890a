"""
Response envelope helpers

Every JSON endpoint answers with the same wrapper the dashboard unwraps:

    {"statusCode": 200, "message": "...", "data": {...}}
"""
from rest_framework import status
from rest_framework.response import Response


def api_response(data=None, message="", status_code=status.HTTP_200_OK):
    return Response({
        "statusCode": status_code,
        "message": message,
        "data": data,
    }, status=status_code)


def error_response(message, status_code=status.HTTP_400_BAD_REQUEST, data=None):
    return api_response(data, message, status_code)
