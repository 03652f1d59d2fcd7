"""
Public operations

The only surface the HTTP routes talk to. Each function returns a result
dict from boardz.results and never raises.
"""

from typing import Any, Dict, List, Optional

from onboarding import steps

from . import config
from .errors import NotFoundError
from .results import ok, run_action
from .services import Services
from .services.onboarding import profile_columns


# ── Components ───────────────────────────────────────────────────────────


def get_custom_components(services: Services) -> Dict[str, Any]:
    return run_action(
        'get_custom_components',
        lambda: [component.to_dict() for component in services.registry.find_all()],
        services.logger
    )


def create_custom_component(services: Services, data: Dict[str, Any]) -> Dict[str, Any]:
    return run_action(
        'create_custom_component',
        lambda: services.registry.create(data).to_dict(),
        services.logger
    )


def update_custom_component(services: Services, component_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
    return run_action(
        'update_custom_component',
        lambda: services.registry.update(component_id, changes).to_dict(),
        services.logger
    )


def delete_custom_component(services: Services, component_id: str) -> Dict[str, Any]:
    return run_action(
        'delete_custom_component',
        lambda: services.registry.delete(component_id),
        services.logger
    )


# ── Page configs ─────────────────────────────────────────────────────────


def get_page_configs(services: Services) -> Dict[str, Any]:
    return run_action(
        'get_page_configs',
        lambda: [page_config.to_dict() for page_config in services.page_configs.get_all()],
        services.logger
    )


def update_page_config(services: Services, page: int, components: List[str]) -> Dict[str, Any]:
    return run_action(
        'update_page_config',
        lambda: services.page_configs.upsert(page, components).to_dict(),
        services.logger
    )


def initialize_defaults(services: Services) -> Dict[str, Any]:
    return run_action('initialize_defaults', services.page_configs.initialize_defaults, services.logger)


# ── Onboarding ───────────────────────────────────────────────────────────


def submit_onboarding_step(services: Services, step: Any, form_data: Dict[str, Any],
                           ignore_unknown: bool = False) -> Dict[str, Any]:
    return run_action(
        'submit_onboarding_step',
        lambda: services.onboarding.submit_step(step, form_data, ignore_unknown),
        services.logger
    )


def get_user_profile(services: Services, email: str) -> Dict[str, Any]:
    """
    Saved answers for pre-filling the onboarding forms

    Always succeeds; any failure degrades to an empty profile so the
    onboarding pages keep working.
    """
    result = run_action(
        'get_user_profile',
        lambda: services.onboarding.get_profile(email),
        services.logger
    )
    if not result['success']:
        services.logger.warning(f"Profile lookup failed, serving empty profile: {result['error']}")
        return ok({})
    return result


def get_all_user_profiles(services: Services) -> Dict[str, Any]:
    def load():
        profiles = services.onboarding.get_all_profiles()
        return {
            'profiles': [profile.to_dict() for profile in profiles],
            'columns': profile_columns(profiles),
        }

    return run_action('get_all_user_profiles', load, services.logger)


def load_onboarding_step(services: Services, step: Any, email: Optional[str]) -> Dict[str, Any]:
    """
    Everything a step page needs: its components, config, saved answers and navigation
    """
    def load():
        step_number = steps.parse_step(step)
        if step_number is None or not steps.is_valid_step(step_number):
            raise NotFoundError(f'Unknown onboarding step: {step}')

        page_config = services.page_configs.get_for_page(step_number)
        names = page_config.components if page_config else []
        by_name = {component.name: component for component in services.registry.find_all()}

        return {
            'step': step_number,
            'title': steps.step_title(step_number),
            'total_steps': config.TOTAL_STEPS,
            'page_config': page_config.to_dict() if page_config else None,
            'components': [by_name[name].to_dict() for name in names if name in by_name],
            'previous': steps.previous_step_route(step_number),
            'next': steps.next_step_route(step_number),
        }

    result = run_action('load_onboarding_step', load, services.logger)
    if result['success']:
        result['data']['profile'] = get_user_profile(services, email)['data'] if email else {}
    return result


# ── Auth ─────────────────────────────────────────────────────────────────


def _session_result(session: Dict[str, Any]) -> Dict[str, Any]:
    return {
        'user': session['user'].to_dict(),
        'access_token': session.get('access_token'),
        'redirect_to': session['redirect_to'],
    }


def sign_up_user(services: Services, email: Any, password: Any) -> Dict[str, Any]:
    return run_action(
        'sign_up_user',
        lambda: _session_result(services.auth.sign_up(email, password)),
        services.logger
    )


def sign_in_user(services: Services, email: Any, password: Any) -> Dict[str, Any]:
    return run_action(
        'sign_in_user',
        lambda: _session_result(services.auth.sign_in(email, password)),
        services.logger
    )


def get_current_user(services: Services, access_token: Optional[str]) -> Dict[str, Any]:
    def load():
        user = services.auth.get_current_user(access_token)
        return user.to_dict() if user else None

    return run_action('get_current_user', load, services.logger)
