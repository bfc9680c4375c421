"""
Auth Routes

Credential checks go through the auth service; Flask-Login keeps the session
token in the signed cookie.
"""

from urllib.parse import urlsplit

from flask import render_template, request, redirect, url_for, flash, session
from flask_login import login_user, logout_user, current_user

from perfumery.auth import auth_bp
from perfumery.errors import PerfumeryError, ValidationError
from perfumery.services import auth as auth_service


def _safe_next(target):
    """Only follow same-site relative redirects."""
    if not target:
        return None
    parts = urlsplit(target)
    if parts.scheme or parts.netloc or not target.startswith('/') or target.startswith('//'):
        return None
    return target


@auth_bp.route('/register', methods=['GET', 'POST'])
def register():
    """User registration route. Public sign-ups always get the 'user' role."""
    if current_user.is_authenticated:
        return redirect(url_for('store.index'))

    if request.method == 'POST':
        password = request.form.get('password', '')
        confirm_password = request.form.get('confirm_password')
        try:
            if confirm_password is not None and password != confirm_password:
                raise ValidationError('Passwords do not match.')
            auth_service.register(request.form.get('username'), password,
                                  full_name=request.form.get('full_name'))
        except PerfumeryError as exc:
            return render_template('auth/register.html', error=exc.message,
                                   form=request.form), exc.status_code

        flash('Registration successful! Please login.', 'success')
        return redirect(url_for('auth.login'))

    return render_template('auth/register.html', error=None, form={})


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """User login route"""
    if current_user.is_authenticated:
        return redirect(url_for('store.index'))

    if request.method == 'POST':
        try:
            principal = auth_service.authenticate(request.form.get('username'),
                                                  request.form.get('password'))
        except PerfumeryError as exc:
            return render_template('auth/login.html', error=exc.message,
                                   form=request.form), exc.status_code

        # Drop whatever the cookie carried before, then bind the new token
        session.clear()
        principal = auth_service.open_session(principal)
        login_user(principal)
        flash(f'Welcome back, {principal.display_name}!', 'success')

        next_page = _safe_next(request.args.get('next'))
        return redirect(next_page or url_for('store.index'))

    return render_template('auth/login.html', error=None, form={})


@auth_bp.route('/logout')
def logout():
    """Destroy the server-side session and clear the cookie"""
    auth_service.logout(current_user)
    logout_user()
    session.clear()
    flash('You have been logged out successfully.', 'info')
    return redirect(url_for('auth.login'))
