"""
Flask glue shared by the blueprints
"""

from typing import Any, Dict

from flask import current_app, jsonify

from .log import get_logger
from .services import Services, build_services

EXTENSION_KEY = 'boardz'

STATUS_BY_ERROR = {
    'ValidationError': 400,
    'InvalidNameError': 400,
    'AuthenticationError': 401,
    'NotFoundError': 404,
    'UserNotFoundError': 404,
    'ConflictError': 409,
    'DuplicateNameError': 409,
    'EmptyPageError': 409,
    'UnknownComponentError': 409,
    'UpstreamError': 502,
}


def get_services() -> Services:
    """Services for the current app, built on first use"""
    services = current_app.extensions.get(EXTENSION_KEY)
    if services is None:
        services = build_services(logger=get_logger('boardz'))
        current_app.extensions[EXTENSION_KEY] = services
    return services


def result_response(result: Dict[str, Any], success_status: int = 200):
    """Turn an action result into a JSON response with a matching status code"""
    if result['success']:
        return jsonify(result), success_status
    return jsonify(result), STATUS_BY_ERROR.get(result.get('errorType'), 500)
