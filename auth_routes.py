"""
Authentication Routes
Google OAuth for admins, email/password sign-in for onboarding users
"""

from flask import Blueprint, jsonify, redirect, render_template_string, request, session, url_for

from auth import check_authorized, current_user
from boardz import actions
from boardz.log import get_logger
from boardz.web import get_services, result_response

logger = get_logger(__name__)

# Create auth blueprint
auth_bp = Blueprint('auth', __name__, url_prefix='/auth')

# OAuth client will be injected by main.py
google = None

ERROR_PAGE = '''
<!DOCTYPE html>
<html>
<head><title>Authentication Error</title></head>
<body>
    <h1>Authentication Error</h1>
    <p>{{ error }}</p>
    <a href="{{ url_for('auth.login') }}">Try Again</a>
</body>
</html>
'''


def init_auth_routes(google_oauth):
    """
    Initialize auth routes with the Google OAuth client

    Args:
        google_oauth: Authlib Google OAuth client
    """
    global google
    google = google_oauth


def _credentials():
    data = request.get_json(silent=True)
    if data is None:
        data = request.form.to_dict()
    if not isinstance(data, dict):
        data = {}
    return data.get('email'), data.get('password')


def _start_session(result):
    """Remember the signed-in user when an auth action succeeded"""
    if result['success']:
        session['user'] = result['data']['user']
        session['access_token'] = result['data']['access_token']
    return result


# ── Admin (Google) ───────────────────────────────────────────────────────


@auth_bp.route('/login')
def login():
    """Redirect to Google Sign-In"""
    redirect_uri = url_for('auth.callback', _external=True)
    return google.authorize_redirect(redirect_uri)


@auth_bp.route('/callback')
def callback():
    """Handle OAuth callback from Google"""
    try:
        token = google.authorize_access_token()
    except Exception as e:
        logger.error(f'OAuth callback error: {str(e)}')
        return render_template_string(ERROR_PAGE, error=str(e)), 500

    user_info = token.get('userinfo')
    if not user_info:
        return render_template_string(
            ERROR_PAGE, error='Failed to retrieve user information from Google.'
        ), 400

    admin_email = user_info.get('email')
    if not check_authorized(admin_email):
        logger.warning(f'Admin sign-in refused for {admin_email}')
        session['unauthorized_email'] = admin_email
        return redirect(url_for('auth.unauthorized'))

    session['admin'] = {
        'email': admin_email,
        'name': user_info.get('name'),
    }

    # Back to where the admin was headed
    next_url = session.pop('next_url', url_for('admin.list_components'))
    return redirect(next_url)


@auth_bp.route('/logout')
def logout():
    """Log out the current admin"""
    session.pop('admin', None)
    return render_template_string('''
    <!DOCTYPE html>
    <html>
    <head><title>Logged Out</title></head>
    <body>
        <h1>Logged Out</h1>
        <p>You have been successfully logged out.</p>
    </body>
    </html>
    ''')


@auth_bp.route('/unauthorized')
def unauthorized():
    """Show unauthorized access page"""
    email = session.get('unauthorized_email', 'Unknown')
    return render_template_string('''
    <!DOCTYPE html>
    <html>
    <head><title>Unauthorized Access</title></head>
    <body>
        <h1>Unauthorized Access</h1>
        <p>The email address <code>{{ email }}</code> is not allowed to manage onboarding.</p>
        <a href="{{ url_for('auth.logout') }}">Sign Out</a>
    </body>
    </html>
    ''', email=email), 403


# ── Onboarding users (Supabase Auth) ─────────────────────────────────────


@auth_bp.route('/signup', methods=['POST'])
def signup():
    email, password = _credentials()
    result = _start_session(actions.sign_up_user(get_services(), email, password))
    return result_response(result, 201)


@auth_bp.route('/signin', methods=['POST'])
def signin():
    email, password = _credentials()
    result = _start_session(actions.sign_in_user(get_services(), email, password))
    return result_response(result)


@auth_bp.route('/signout', methods=['POST'])
def signout():
    session.pop('user', None)
    session.pop('access_token', None)
    return jsonify({'success': True, 'data': None})


@auth_bp.route('/me')
def me():
    """Current onboarding user, checked against Supabase when a token is held"""
    token = session.get('access_token')
    if token:
        return result_response(actions.get_current_user(get_services(), token))
    return jsonify({'success': True, 'data': current_user()})
