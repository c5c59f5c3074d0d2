from __future__ import annotations

from flask import Blueprint, jsonify, request

from keydash.utils.validators import normalize_sort_order, parse_max_usage, sanitize_string, validate_key_name


def create_api_keys_blueprint(*, make_service, csrf=None, logger):
    """Create JSON API key routes with injected dependencies."""
    blueprint = Blueprint('api_keys', __name__)
    if csrf is not None:
        csrf.exempt(blueprint)

    def _service():
        errors: list[str] = []
        service = make_service(on_error=errors.append)
        return service, errors

    def _error(message: str, status: int):
        return jsonify({'error': message}), status

    def _load(service, errors, key_id: str):
        """Load one record and return (record, error response)."""
        key = service.get(key_id)
        if errors:
            return None, _error(errors[0], 500)
        if key is None:
            return None, _error('Key not found', 404)
        return key, None

    @blueprint.route('/api/keys', methods=['GET'])
    def list_api_keys():
        """List all API keys for the static user."""
        service, errors = _service()
        service.fetch(normalize_sort_order(request.args.get('sort')))
        if errors:
            return _error(errors[0], 500)
        return jsonify([key.to_dict() for key in service.api_keys])

    @blueprint.route('/api/keys', methods=['POST'])
    def create_api_key():
        """Create a new API key."""
        data = request.get_json(silent=True) or {}
        valid, message = validate_key_name(data.get('name'))
        if not valid:
            return _error(message, 400)
        max_usage, message = parse_max_usage(data.get('max_usage'))
        if max_usage is None:
            return _error(message, 400)

        service, errors = _service()
        key = service.create(sanitize_string(data['name'], max_length=100), max_usage)
        if key is None:
            return _error(errors[0], 500)
        return jsonify(key.to_dict()), 201

    @blueprint.route('/api/keys/<key_id>', methods=['PATCH'])
    def update_api_key(key_id: str):
        """Rename a key and/or change its usage limit."""
        data = request.get_json(silent=True) or {}
        updates = {}
        if 'name' in data:
            valid, message = validate_key_name(data['name'])
            if not valid:
                return _error(message, 400)
            updates['name'] = sanitize_string(data['name'], max_length=100)
        if 'max_usage' in data:
            max_usage, message = parse_max_usage(data['max_usage'])
            if max_usage is None:
                return _error(message, 400)
            updates['max_usage'] = max_usage
        if not updates:
            return _error('Nothing to update. Use: name, max_usage', 400)

        service, errors = _service()
        key, failure = _load(service, errors, key_id)
        if failure:
            return failure
        if not service.update(key.id, updates):
            return _error(errors[0], 500)
        return jsonify(key.to_dict())

    @blueprint.route('/api/keys/<key_id>/regenerate', methods=['POST'])
    def regenerate_api_key(key_id: str):
        """Replace the key value."""
        service, errors = _service()
        key, failure = _load(service, errors, key_id)
        if failure:
            return failure
        if not service.regenerate(key.id):
            return _error(errors[0], 500)
        logger.info(f"API key regenerated via API: {key.id}")
        return jsonify(key.to_dict())

    @blueprint.route('/api/keys/<key_id>', methods=['DELETE'])
    def delete_api_key(key_id: str):
        """Delete an API key."""
        service, errors = _service()
        key, failure = _load(service, errors, key_id)
        if failure:
            return failure
        if not service.delete(key.id):
            return _error(errors[0], 500)
        return jsonify({'success': True})

    return blueprint
