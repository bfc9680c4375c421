"""
User Management Routes
"""

from flask import render_template, request, redirect, url_for, flash
from flask_login import current_user

from perfumery.errors import PerfumeryError
from perfumery.models import ROLES
from perfumery.services import auth as auth_service
from perfumery.services import users as user_service
from perfumery.users import users_bp


@users_bp.route('/users')
def list_users():
    users = user_service.list_users(current_user)
    return render_template('users/list.html', users=users, error=None)


@users_bp.route('/add-user', methods=['GET', 'POST'])
def add_user():
    """Admin form to create an account with an optional photo."""
    if request.method == 'POST':
        try:
            user = user_service.create_user(current_user, request.form,
                                            photo=request.files.get('photo'))
        except PerfumeryError as exc:
            return render_template('users/add_user.html', roles=ROLES, form=request.form,
                                   error=exc.message), exc.status_code
        flash(f'User "{user.username}" added.', 'success')
        return redirect(url_for('users.list_users'))

    return render_template('users/add_user.html', roles=ROLES, form={}, error=None)


@users_bp.route('/edit-user/<int:user_id>', methods=['GET', 'POST'])
def edit_user(user_id):
    """Edit an account. Owners edit themselves, admins edit anyone."""
    user_to_edit = user_service.get_user(user_id)

    if request.method == 'POST':
        try:
            user = user_service.update_user(current_user, user_id, request.form,
                                            photo=request.files.get('photo'))
        except PerfumeryError as exc:
            return render_template('users/edit_user.html', user_to_edit=user_to_edit,
                                   roles=ROLES, error=exc.message), exc.status_code

        principal = current_user._get_current_object()
        if principal.id == user.id:
            principal = auth_service.refresh_principal(principal, user)
        flash('Profile updated.', 'success')
        return redirect(url_for('users.list_users') if principal.is_admin
                        else url_for('store.profile'))

    return render_template('users/edit_user.html', user_to_edit=user_to_edit,
                           roles=ROLES, error=None)


@users_bp.route('/delete-user/<int:user_id>', methods=['POST'])
def delete_user(user_id):
    try:
        user_service.delete_user(current_user, user_id)
    except PerfumeryError as exc:
        users = user_service.list_users(current_user)
        return render_template('users/list.html', users=users,
                               error=exc.message), exc.status_code
    flash('User deleted.', 'info')
    return redirect(url_for('users.list_users'))
