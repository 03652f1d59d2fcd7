"""
Configuration for the Board the Z onboarding service
Environment settings plus the static onboarding step layout.
"""

import os

# Environment
APP_ENV = os.getenv('APP_ENV', 'development')
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
PORT = int(os.getenv('PORT', '8080'))

SUPABASE_URL = os.getenv('SUPABASE_URL')
SUPABASE_KEY = os.getenv('SUPABASE_KEY')

FLASK_SECRET_KEY = os.getenv('FLASK_SECRET_KEY')

GOOGLE_OAUTH_CLIENT_ID = os.getenv('GOOGLE_OAUTH_CLIENT_ID')
GOOGLE_OAUTH_CLIENT_SECRET = os.getenv('GOOGLE_OAUTH_CLIENT_SECRET')

# Admin users allowed through Google Sign-In
ADMIN_EMAILS = [
    email.strip().lower()
    for email in os.getenv('ADMIN_EMAILS', '').split(',')
    if email.strip()
]

# Component and page-config lists are cached this long (seconds)
CACHE_SECONDS = float(os.getenv('CACHE_SECONDS', '10'))

# Supabase tables
COMPONENTS_TABLE = 'custom_components'
PAGE_COMPONENTS_TABLE = 'page_components'
USERS_TABLE = 'users'
PROFILES_TABLE = 'user_profiles'

# Onboarding steps. Step 1 is authentication, later steps carry admin-defined components.
ONBOARDING_STEPS = [
    {
        'id': 1,
        'route': '/onboarding/1',
        'title': 'Authentication',
        'is_required': True,
        'allows_custom_components': False,
    },
    {
        'id': 2,
        'route': '/onboarding/2',
        'title': 'Tell us about yourself',
        'is_required': True,
        'allows_custom_components': True,
    },
    {
        'id': 3,
        'route': '/onboarding/3',
        'title': 'Personal Details',
        'is_required': True,
        'allows_custom_components': True,
    },
]

TOTAL_STEPS = len(ONBOARDING_STEPS)
FIRST_STEP = min(step['id'] for step in ONBOARDING_STEPS)
LAST_STEP = max(step['id'] for step in ONBOARDING_STEPS)

# Pages that must always carry at least one component
REQUIRED_COMPONENT_PAGES = [
    step['id'] for step in ONBOARDING_STEPS
    if step['allows_custom_components'] and step['is_required']
]

ROUTES = {
    'start': f'/onboarding/{FIRST_STEP}',
    'success': '/onboarding/success',
    'data_page': '/data',
    'auth_redirect': '/onboarding/2',
}

SPECIAL_COMPONENTS = {
    'address': 'address',
    'about_me': 'aboutMe',
    'birthdate': 'birthdate',
}

LENGTH_LIMITS = {
    'text': {'min': 1, 'max': 1000},
    'textarea': {'min': 1, 'max': 5000},
    'component_name': {'min': 2, 'max': 50},
    'label': {'max': 100},
    'placeholder': {'max': 200},
    'password': {'min': 6},
}
