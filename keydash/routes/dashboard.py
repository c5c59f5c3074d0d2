from __future__ import annotations

from flask import Blueprint, flash, redirect, render_template, request, url_for

from keydash.components.forms import CreateKeyForm, RenameKeyForm
from keydash.components.table import build_table, empty_message, sort_icon, toggle_visible
from keydash.utils.validators import normalize_sort_order, toggle_sort_order

CONFIRM_DIALOGS = ('regenerate', 'delete')


def create_dashboard_blueprint(*, make_service, logger):
    """Create the API key dashboard page routes with injected dependencies."""
    blueprint = Blueprint('dashboard', __name__)

    def _toast_service():
        return make_service(
            on_success=lambda message: flash(message, 'success'),
            on_error=lambda message: flash(message, 'error'),
        )

    def _sort_order() -> str:
        return normalize_sort_order(request.args.get('sort'))

    def _back(**state):
        return redirect(url_for('dashboard.index', sort=_sort_order(), **state))

    @blueprint.route('/')
    def home():
        return redirect(url_for('dashboard.index'))

    @blueprint.route('/dashboards')
    def index():
        """API keys overview page."""
        sort_order = _sort_order()
        reveal = request.args.getlist('reveal')
        edit_id = request.args.get('edit')
        dialog = request.args.get('dialog')
        confirm = request.args.get('confirm')

        service = _toast_service()
        service.fetch(sort_order)

        rename_form = None
        if edit_id is not None:
            editing = service.find(edit_id)
            if editing is None:
                edit_id = None
            else:
                rename_form = RenameKeyForm(formdata=None, name=editing.name)

        confirm_key = None
        if confirm in CONFIRM_DIALOGS:
            confirm_key = service.find(request.args.get('key', ''))
            if confirm_key is None:
                flash('API key not found', 'error')
                confirm = None
        else:
            confirm = None

        return render_template(
            'dashboard.html',
            rows=build_table(service.api_keys, reveal, edit_id),
            is_loading=service.is_loading,
            empty_message=empty_message(service.is_loading),
            sort_order=sort_order,
            next_sort_order=toggle_sort_order(sort_order),
            sort_icon=sort_icon(sort_order),
            reveal=reveal,
            toggle_visible=toggle_visible,
            create_form=CreateKeyForm(formdata=None) if dialog == 'create' else None,
            rename_form=rename_form,
            confirm=confirm,
            confirm_key=confirm_key,
        )

    @blueprint.route('/dashboards/keys', methods=['POST'])
    def create_key():
        """Submit the create dialog."""
        form = CreateKeyForm()
        if not form.validate_on_submit():
            logger.debug(f"Rejected create request: {form.errors}")
            flash(form.first_error(), 'error')
            return _back(dialog='create')

        _toast_service().create(form.name.data, form.max_usage.data)
        return _back(reveal=request.args.getlist('reveal'))

    @blueprint.route('/dashboards/keys/<key_id>/rename', methods=['POST'])
    def rename_key(key_id: str):
        """Submit the inline rename form; edit mode always ends here."""
        form = RenameKeyForm()
        if form.validate_on_submit():
            _toast_service().update(key_id, {'name': form.name.data.strip()})
        else:
            flash(form.first_error(), 'error')
        return _back(reveal=request.args.getlist('reveal'))

    @blueprint.route('/dashboards/keys/<key_id>/regenerate', methods=['POST'])
    def regenerate_key(key_id: str):
        _toast_service().regenerate(key_id)
        return _back(reveal=request.args.getlist('reveal'))

    @blueprint.route('/dashboards/keys/<key_id>/delete', methods=['POST'])
    def delete_key(key_id: str):
        _toast_service().delete(key_id)
        return _back(reveal=[v for v in request.args.getlist('reveal') if v != key_id])

    return blueprint
