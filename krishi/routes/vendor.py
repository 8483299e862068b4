# Vendor Module Routes
from flask import Blueprint, render_template, request, flash, redirect, url_for, abort, current_app
from flask_login import current_user

from krishi.forms import WarehouseForm
from krishi.stores import get_warehouse_store, StoreError, RecordNotFound, WAREHOUSES_TABLE
from krishi.utils.dashboard import warehouse_summary, filter_warehouses
from krishi.utils.decorators import role_required

vendor_bp = Blueprint('vendor', __name__)


def _own_warehouse_or_redirect(warehouse_id):
    """Return (warehouse, None) or (None, redirect response)."""
    try:
        warehouse = get_warehouse_store().get_warehouse(warehouse_id)
    except RecordNotFound:
        abort(404)

    if warehouse['vendor_id'] != str(current_user.id):
        flash('Access denied.', 'danger')
        return None, redirect(url_for('vendor.warehouses'))
    return warehouse, None


def _form_values(form):
    return {
        'name': form.name.data.strip(),
        'location': form.location.data.strip(),
        'capacity': form.capacity.data,
        'available': form.available.data,
    }


# ==================== DASHBOARD ====================

@vendor_bp.route('/dashboard')
@role_required('vendor')
def dashboard():
    warehouses = get_warehouse_store().warehouses_by_vendor(current_user.id)
    return render_template('vendor/dashboard.html',
                           summary=warehouse_summary(warehouses),
                           watch_tables=[WAREHOUSES_TABLE])


# ==================== WAREHOUSE MANAGEMENT ====================

@vendor_bp.route('/warehouses')
@role_required('vendor')
def warehouses():
    search = request.args.get('search', '', type=str)
    mine = get_warehouse_store().warehouses_by_vendor(current_user.id)

    return render_template('vendor/warehouses.html',
                           warehouses=filter_warehouses(mine, search),
                           total=len(mine),
                           search=search,
                           watch_tables=[WAREHOUSES_TABLE])


@vendor_bp.route('/warehouses/new', methods=['GET', 'POST'])
@role_required('vendor')
def add_warehouse():
    form = WarehouseForm()
    if form.validate_on_submit():
        try:
            warehouse = get_warehouse_store().add_warehouse(current_user, **_form_values(form))
        except StoreError as e:
            current_app.logger.exception('Could not add warehouse for vendor %s', current_user.id)
            flash(f'Could not save warehouse: {e}', 'danger')
        else:
            flash(f"Warehouse added successfully! {warehouse['name']} has been added to your warehouses.", 'success')
            return redirect(url_for('vendor.warehouses'))

    return render_template('vendor/warehouse_form.html', form=form, warehouse=None)


@vendor_bp.route('/warehouses/<warehouse_id>/edit', methods=['GET', 'POST'])
@role_required('vendor')
def edit_warehouse(warehouse_id):
    warehouse, denied = _own_warehouse_or_redirect(warehouse_id)
    if denied:
        return denied

    form = WarehouseForm(data=warehouse) if request.method == 'GET' else WarehouseForm()
    if form.validate_on_submit():
        try:
            get_warehouse_store().update_warehouse(warehouse_id, **_form_values(form))
        except StoreError as e:
            current_app.logger.exception('Could not update warehouse %s', warehouse_id)
            flash(f'Could not save warehouse: {e}', 'danger')
        else:
            flash('Warehouse updated successfully!', 'success')
            return redirect(url_for('vendor.warehouses'))

    return render_template('vendor/warehouse_form.html', form=form, warehouse=warehouse)


@vendor_bp.route('/warehouses/<warehouse_id>/delete', methods=['GET', 'POST'])
@role_required('vendor')
def delete_warehouse(warehouse_id):
    warehouse, denied = _own_warehouse_or_redirect(warehouse_id)
    if denied:
        return denied

    if request.method == 'GET':
        return render_template('vendor/delete_warehouse.html', warehouse=warehouse)

    try:
        deleted = get_warehouse_store().delete_warehouse(warehouse_id)
    except StoreError:
        current_app.logger.exception('Could not delete warehouse %s', warehouse_id)
        flash('An error occurred while deleting the warehouse.', 'danger')
    else:
        flash(f"Warehouse deleted. {deleted['name']} has been removed.", 'success')

    return redirect(url_for('vendor.warehouses'))
