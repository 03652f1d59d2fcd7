"""
Uniform result wrapping for the public operations

Every public operation returns a plain dict:

    {'success': True, 'data': ...}
    {'success': False, 'error': '...', 'validationErrors': {...}, 'errorType': '...'}

errorType names the error class so HTTP handlers can pick a status code.

Nothing raises across this boundary.
"""

import logging
from typing import Any, Callable, Dict, Optional

from .errors import (
    OnboardingError,
    UpstreamError,
    ValidationError,
)

GENERIC_ERROR = 'Operation failed'


def ok(data: Any = None) -> Dict[str, Any]:
    return {'success': True, 'data': data}


def failure(error: str, validation_errors: Optional[Dict[str, str]] = None,
            error_type: Optional[str] = None) -> Dict[str, Any]:
    result = {'success': False, 'error': error}
    if validation_errors:
        result['validationErrors'] = validation_errors
    if error_type:
        result['errorType'] = error_type
    return result


def run_action(operation_name: str, operation: Callable[[], Any],
               logger: Optional[logging.Logger] = None) -> Dict[str, Any]:
    """
    Run operation and normalize its outcome into a result dict

    Args:
        operation_name: Name used in log records
        operation: Zero-argument callable doing the work
        logger: Where failures are reported

    Returns:
        Result dict (see module docstring)
    """
    logger = logger or logging.getLogger(__name__)

    try:
        return ok(operation())
    except ValidationError as e:
        logger.warning(f'{operation_name}: validation failed ({len(e.errors)} field errors)')
        return failure(e.message, e.errors, type(e).__name__)
    except UpstreamError:
        logger.error(f'{operation_name}: upstream failure', exc_info=True)
        return failure(GENERIC_ERROR, error_type='UpstreamError')
    except OnboardingError as e:
        logger.info(f'{operation_name}: {e.message}')
        return failure(e.message, e.errors, type(e).__name__)
    except Exception:
        logger.exception(f'{operation_name}: unexpected error')
        return failure(GENERIC_ERROR)
