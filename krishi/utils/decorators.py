# Route guards
from functools import wraps

from flask import flash, redirect, url_for
from flask_login import current_user, login_required

DASHBOARDS = {
    'farmer': 'farmer.dashboard',
    'expert': 'expert.dashboard',
    'vendor': 'vendor.dashboard',
}


def dashboard_endpoint(role):
    return DASHBOARDS.get(role, 'main.index')


def role_required(role):
    """Only let users with ``role`` through.

    Anonymous users go to the login page (via ``login_required``); users
    with another role are sent back to their own dashboard.
    """
    def decorator(view):
        @wraps(view)
        @login_required
        def wrapped(*args, **kwargs):
            if current_user.role != role:
                flash('Access denied.', 'danger')
                return redirect(url_for(dashboard_endpoint(current_user.role)))
            return view(*args, **kwargs)
        return wrapped
    return decorator
