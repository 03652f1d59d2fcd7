"""
Admin Routes
Manage custom components and page layouts, and review submitted profiles.
Every route requires an admin signed in with Google.
"""

from flask import Blueprint, request

from auth import admin_required
from boardz import actions
from boardz.web import get_services, result_response

admin_bp = Blueprint('admin', __name__, url_prefix='/admin')


def _json_body():
    return request.get_json(silent=True)


@admin_bp.route('/components', methods=['GET'])
@admin_required
def list_components():
    return result_response(actions.get_custom_components(get_services()))


@admin_bp.route('/components', methods=['POST'])
@admin_required
def create_component():
    """
    Create a custom component

    Expected JSON payload:
    {
        "name": "favorite_color",
        "label": "Favorite color",
        "type": "text",
        "required": false,
        "placeholder": "",
        "options": null
    }
    """
    return result_response(actions.create_custom_component(get_services(), _json_body()), 201)


@admin_bp.route('/components/<component_id>', methods=['PATCH'])
@admin_required
def update_component(component_id):
    return result_response(
        actions.update_custom_component(get_services(), component_id, _json_body() or {})
    )


@admin_bp.route('/components/<component_id>', methods=['DELETE'])
@admin_required
def delete_component(component_id):
    return result_response(actions.delete_custom_component(get_services(), component_id))


@admin_bp.route('/page-configs', methods=['GET'])
@admin_required
def list_page_configs():
    return result_response(actions.get_page_configs(get_services()))


@admin_bp.route('/page-configs/<int:page>', methods=['PUT'])
@admin_required
def update_page_config(page):
    """
    Replace the components shown on a page

    Expected JSON payload:
    {
        "components": ["aboutMe", "birthdate"]
    }
    """
    body = _json_body()
    components = body.get('components') if isinstance(body, dict) else None
    return result_response(actions.update_page_config(get_services(), page, components))


@admin_bp.route('/initialize-defaults', methods=['POST'])
@admin_required
def initialize_defaults():
    return result_response(actions.initialize_defaults(get_services()))


@admin_bp.route('/profiles', methods=['GET'])
@admin_required
def list_profiles():
    """All submitted profiles plus the union of their answer keys as table columns"""
    return result_response(actions.get_all_user_profiles(get_services()))
