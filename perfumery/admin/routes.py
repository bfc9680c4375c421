"""
Admin Routes

Perfume CRUD plus list/add/edit/delete screens for the three reference
tables, which share one pair of templates.
"""

from flask import render_template, request, redirect, url_for, flash
from flask_login import current_user

from perfumery.admin import admin_bp
from perfumery.errors import PerfumeryError
from perfumery.models import Brand, Category, Supplier, GENDERS
from perfumery.services import catalog


# -----------------------------------------------------------------------------
# Perfumes
# -----------------------------------------------------------------------------

def _render_perfume_form(perfume=None, form=None, error=None, status=200):
    return render_template('admin/perfume_form.html',
                           perfume=perfume,
                           form=form or {},
                           brands=catalog.list_references(Brand),
                           categories=catalog.list_references(Category),
                           suppliers=catalog.list_references(Supplier),
                           genders=GENDERS,
                           error=error), status


@admin_bp.route('/add-perfume', methods=['GET', 'POST'])
def add_perfume():
    if request.method == 'POST':
        try:
            perfume = catalog.create_perfume(current_user, request.form)
        except PerfumeryError as exc:
            return _render_perfume_form(form=request.form, error=exc.message,
                                        status=exc.status_code)
        flash(f'Perfume "{perfume.name}" added.', 'success')
        return redirect(url_for('store.catalog'))

    return _render_perfume_form()


@admin_bp.route('/edit-perfume/<int:perfume_id>', methods=['GET', 'POST'])
def edit_perfume(perfume_id):
    perfume = catalog.get_perfume(perfume_id)

    if request.method == 'POST':
        try:
            perfume = catalog.update_perfume(current_user, perfume_id, request.form)
        except PerfumeryError as exc:
            return _render_perfume_form(perfume=perfume, form=request.form,
                                        error=exc.message, status=exc.status_code)
        flash(f'Changes saved for {perfume.name}.', 'success')
        return redirect(url_for('store.catalog'))

    return _render_perfume_form(perfume=perfume)


@admin_bp.route('/delete-perfume/<int:perfume_id>', methods=['POST'])
def delete_perfume(perfume_id):
    catalog.delete_perfume(current_user, perfume_id)
    flash('Perfume deleted.', 'info')
    return redirect(url_for('store.catalog'))


# -----------------------------------------------------------------------------
# Brands, categories, suppliers
# -----------------------------------------------------------------------------

REFERENCE_VIEWS = (
    # (kind, plural used in URLs and endpoints, model)
    ('brand', 'brands', Brand),
    ('category', 'categories', Category),
    ('supplier', 'suppliers', Supplier),
)


def _register_reference_views(kind, plural, model):
    list_endpoint = f'admin.list_{plural}'

    def render_list(error=None, status=200):
        return render_template('admin/reference_list.html',
                               kind=kind, plural=plural, model=model,
                               items=catalog.list_references(model),
                               error=error), status

    def render_form(item=None, form=None, error=None, status=200):
        return render_template('admin/reference_form.html',
                               kind=kind, plural=plural, model=model,
                               item=item, form=form or {}, error=error), status

    def list_view():
        return render_list()

    def add_view():
        if request.method == 'POST':
            try:
                item = catalog.create_reference(current_user, model, request.form)
            except PerfumeryError as exc:
                return render_form(form=request.form, error=exc.message, status=exc.status_code)
            flash(f'{kind.capitalize()} "{item.name}" added.', 'success')
            return redirect(url_for(list_endpoint))
        return render_form()

    def edit_view(item_id):
        item = catalog.get_reference(model, item_id)
        if request.method == 'POST':
            try:
                item = catalog.update_reference(current_user, model, item_id, request.form)
            except PerfumeryError as exc:
                return render_form(item=item, form=request.form, error=exc.message,
                                   status=exc.status_code)
            flash(f'{kind.capitalize()} "{item.name}" saved.', 'success')
            return redirect(url_for(list_endpoint))
        return render_form(item=item)

    def delete_view(item_id):
        try:
            catalog.delete_reference(current_user, model, item_id)
        except PerfumeryError as exc:
            return render_list(error=exc.message, status=exc.status_code)
        flash(f'{kind.capitalize()} deleted.', 'info')
        return redirect(url_for(list_endpoint))

    admin_bp.add_url_rule(f'/{plural}', f'list_{plural}', list_view)
    admin_bp.add_url_rule(f'/add-{kind}', f'add_{kind}', add_view, methods=['GET', 'POST'])
    admin_bp.add_url_rule(f'/edit-{kind}/<int:item_id>', f'edit_{kind}', edit_view,
                          methods=['GET', 'POST'])
    admin_bp.add_url_rule(f'/delete-{kind}/<int:item_id>', f'delete_{kind}', delete_view,
                          methods=['POST'])


for _kind, _plural, _model in REFERENCE_VIEWS:
    _register_reference_views(_kind, _plural, _model)
