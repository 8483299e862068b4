# Authentication Routes
from datetime import datetime
from urllib.parse import urlsplit

from flask import Blueprint, render_template, request, flash, redirect, url_for, session, jsonify, make_response, current_app
from flask_login import login_user, logout_user, login_required, current_user
from sqlalchemy.exc import SQLAlchemyError

from krishi.forms import LoginForm, RegistrationForm
from krishi.models import db, User
from krishi.utils.decorators import dashboard_endpoint

auth_bp = Blueprint('auth', __name__)


def _safe_next(target):
    """Only allow relative redirects back into this site."""
    if not target:
        return None
    parts = urlsplit(target)
    if parts.scheme or parts.netloc or not target.startswith('/'):
        return None
    return target


# ==================== REGISTER ====================

@auth_bp.route('/register', methods=['GET', 'POST'])
def register():
    if current_user.is_authenticated:
        return redirect(url_for(dashboard_endpoint(current_user.role)))

    form = RegistrationForm()
    if form.validate_on_submit():
        user = User(
            email=form.email.data.strip().lower(),
            name=form.name.data.strip(),
            role=form.role.data,
            phone=form.phone.data or None,
            location=form.location.data or None,
        )
        user.expertise_list = form.expertise_areas()
        user.set_password(form.password.data)

        try:
            db.session.add(user)
            db.session.commit()
            current_app.logger.info('Registered %s as %s', user.email, user.role)
            flash('Registration successful! Please log in.', 'success')
            return redirect(url_for('auth.login'))
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception('Registration failed for %s', form.email.data)
            flash('An error occurred during registration. Please try again.', 'danger')

    return render_template('auth/register.html', form=form)


# ==================== LOGIN ====================

@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    if current_user.is_authenticated:
        return redirect(url_for(dashboard_endpoint(current_user.role)))

    form = LoginForm()
    if form.validate_on_submit():
        user = User.query.filter_by(email=form.email.data.strip().lower()).first()

        if user and user.check_password(form.password.data) and user.is_active:
            user.last_login = datetime.utcnow()
            db.session.commit()
            login_user(user, remember=form.remember.data)
            session['role'] = user.role
            flash(f'Welcome back, {user.name}!', 'success')
            next_page = _safe_next(request.args.get('next'))
            return redirect(next_page or url_for(dashboard_endpoint(user.role)))

        flash('Invalid email or password.', 'danger')

    return render_template('auth/login.html', form=form)


# ==================== LOGOUT ====================

@auth_bp.route('/logout')
@login_required
def logout():
    logout_user()
    session.clear()

    flash('You have been logged out successfully.', 'info')

    response = make_response(redirect(url_for('main.index')))
    response.headers['Cache-Control'] = 'no-cache, no-store, must-revalidate'
    response.headers['Pragma'] = 'no-cache'
    response.headers['Expires'] = '0'
    response.set_cookie('remember_token', '', expires=0)
    return response


@auth_bp.route('/whoami')
def whoami():
    if not current_user.is_authenticated:
        return jsonify({'authenticated': False})
    return jsonify({'authenticated': True, 'user': current_user.to_dict()})
