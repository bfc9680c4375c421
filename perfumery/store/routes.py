"""
Store Routes
"""

from flask import render_template, current_app, send_from_directory
from flask_login import current_user

from perfumery.store import store_bp
from perfumery.services import catalog
from perfumery.services.users import get_user


@store_bp.route('/')
def index():
    """Landing page with the first few perfumes"""
    perfumes = catalog.list_perfumes(limit=current_app.config['LANDING_PAGE_SIZE'])
    return render_template('store/index.html', perfumes=perfumes)


@store_bp.route('/catalog', endpoint='catalog')
def catalog_page():
    """Full perfume list"""
    return render_template('store/catalog.html', perfumes=catalog.list_perfumes())


@store_bp.route('/cart')
def cart():
    # Cart is not implemented yet; always empty
    return render_template('store/cart.html', cart_items=[], total_amount=0)


@store_bp.route('/profile')
def profile():
    user_profile = get_user(current_user.id)
    return render_template('store/profile.html', user_profile=user_profile)


@store_bp.route('/uploads/<path:filename>')
def uploaded_photo(filename):
    return send_from_directory(current_app.config['UPLOAD_FOLDER'], filename)
