# Main Routes
from flask import Blueprint, redirect, url_for, render_template
from flask_login import current_user, login_required

from krishi.utils.decorators import DASHBOARDS, dashboard_endpoint

main_bp = Blueprint('main', __name__)


@main_bp.route('/')
def index():
    """Home page"""
    # Logged-in users with a known role go to their dashboard
    if current_user.is_authenticated and current_user.role in DASHBOARDS:
        return redirect(url_for(dashboard_endpoint(current_user.role)))
    return render_template('landing.html')


@main_bp.route('/dashboard')
@login_required
def dashboard():
    return redirect(url_for(dashboard_endpoint(current_user.role)))


def page_not_found(error):
    return render_template('not_found.html'), 404
