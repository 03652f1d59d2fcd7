"""
Onboarding step navigation

The server keeps no record of which steps are done. The caller moves
forward after each successful save and lands on the success page after
the last step.
"""

from typing import Dict, Optional

from boardz import config


def get_step(step_id: int) -> Optional[Dict]:
    for step in config.ONBOARDING_STEPS:
        if step['id'] == step_id:
            return step
    return None


def step_title(step_id: int) -> str:
    step = get_step(step_id)
    return step['title'] if step else f'Step {step_id}'


def is_valid_step(step_id: int) -> bool:
    return config.FIRST_STEP <= step_id <= config.LAST_STEP


def requires_components(page: int) -> bool:
    return page in config.REQUIRED_COMPONENT_PAGES


def next_step(step_id: int) -> Optional[int]:
    """Step that follows step_id, or None once onboarding is complete"""
    if step_id >= config.LAST_STEP:
        return None
    return step_id + 1


def next_step_route(step_id: int) -> str:
    following = next_step(step_id)
    if following is None:
        return config.ROUTES['success']
    return f'/onboarding/{following}'


def previous_step_route(step_id: int) -> Optional[str]:
    if step_id > config.FIRST_STEP:
        return f'/onboarding/{step_id - 1}'
    return None


def parse_step(value) -> Optional[int]:
    """Accept an int or a numeric string; None for anything else"""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None
