"""
Onboarding Step Routes
JSON endpoints behind the multi-step onboarding form.
"""

from flask import Blueprint, request

from auth import current_user, user_required
from boardz import actions
from boardz.web import get_services, result_response

from . import steps

# Create Blueprint
onboarding_bp = Blueprint('onboarding', __name__, url_prefix='/onboarding')


def _submitted_values():
    """
    Answers from a JSON body or a classic form post

    Returns:
        (values, from_form) where from_form marks a form post
    """
    data = request.get_json(silent=True)
    if data is None:
        return request.form.to_dict(), True
    return data, False


@onboarding_bp.route('/<step>', methods=['GET'])
@user_required
def show_step(step):
    """
    Load one onboarding step

    Returns the step's components in page order, the page config, the
    user's saved answers and the previous/next routes.
    """
    result = actions.load_onboarding_step(get_services(), step, current_user()['email'])
    return result_response(result)


@onboarding_bp.route('/<step>', methods=['POST'])
@user_required
def submit_step(step):
    """
    Save one onboarding step

    The signed-in user's email always wins over any email in the body.
    Form posts may carry extra keys such as the submit button; those are
    ignored. JSON bodies must only name components.
    On success the response carries redirect_to for the following page.
    """
    values, from_form = _submitted_values()
    if isinstance(values, dict):
        values = {**values, 'email': current_user()['email']}

    result = actions.submit_onboarding_step(get_services(), step, values, ignore_unknown=from_form)
    if result['success']:
        result['redirect_to'] = steps.next_step_route(result['data']['step'])
    return result_response(result)
