"""
Authentication for the onboarding service

Administrators sign in with Google (Authlib) and must be listed in
ADMIN_EMAILS. Onboarding users sign in with email and password through
Supabase Auth; their identity is kept in the Flask session.
"""

from functools import wraps

from authlib.integrations.flask_client import OAuth
from flask import jsonify, redirect, request, session, url_for

from boardz import config


def init_oauth(app):
    """
    Initialize OAuth with the Flask app

    Args:
        app: Flask application instance

    Returns:
        (OAuth instance, Google client)
    """
    oauth = OAuth(app)

    google = oauth.register(
        name='google',
        client_id=config.GOOGLE_OAUTH_CLIENT_ID,
        client_secret=config.GOOGLE_OAUTH_CLIENT_SECRET,
        server_metadata_url='https://accounts.google.com/.well-known/openid-configuration',
        client_kwargs={
            'scope': 'openid email profile'
        }
    )

    return oauth, google


def check_authorized(email):
    """
    Check if an email may use the admin pages

    Args:
        email: Email address to check

    Returns:
        True if authorized, False otherwise
    """
    return bool(email) and email.lower() in config.ADMIN_EMAILS


def admin_required(f):
    """
    Decorator to require an authorized admin
    Redirects to Google Sign-In if not authenticated
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if 'admin' not in session:
            # Come back here after login
            session['next_url'] = request.url
            return redirect(url_for('auth.login'))

        if not check_authorized(session['admin'].get('email')):
            return redirect(url_for('auth.unauthorized'))

        return f(*args, **kwargs)

    return decorated_function


def current_user():
    """Signed-in onboarding user ({id, email}) or None"""
    return session.get('user')


def user_required(f):
    """Decorator for onboarding routes; answers 401 with the sign-in route when nobody is signed in"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if current_user() is None:
            return jsonify({
                'success': False,
                'error': 'Not signed in',
                'redirect_to': config.ROUTES['start'],
            }), 401
        return f(*args, **kwargs)

    return decorated_function
