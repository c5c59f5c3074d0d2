from __future__ import annotations

import sys

from flask import Blueprint, jsonify

from keydash.errors import StoreError


def create_health_blueprint(*, get_repo, version: str):
    """Create health and version routes with injected dependencies."""
    blueprint = Blueprint('health', __name__)

    @blueprint.route('/health')
    def health_check():
        """Health check endpoint for container orchestration and monitoring."""
        repo = get_repo()
        health = {
            'status': 'healthy',
            'version': version,
            'checks': {},
        }

        try:
            repo.ping()
            health['checks']['store'] = {'status': 'ok', 'backend': repo.name}
        except StoreError as e:
            health['status'] = 'unhealthy'
            health['checks']['store'] = {'status': 'error', 'backend': repo.name, 'message': str(e)}

        status_code = 200 if health['status'] == 'healthy' else 503
        return jsonify(health), status_code

    @blueprint.route('/api/version')
    def get_version():
        """Get application version and build info."""
        return jsonify({
            'version': version,
            'python_version': sys.version.split()[0],
            'api_version': 'v1',
            'store_backend': get_repo().name,
        })

    return blueprint
