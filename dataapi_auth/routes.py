"""Example routes covering each gate, as a service trusting DataAPI would."""

from flask import Blueprint, jsonify, render_template_string

from .auth import Auth
from .auth.identity import current_user

DEVICES = [{'id': 'esp32-01', 'name': 'Greenhouse'},
           {'id': 'esp32-02', 'name': 'Garage'}]

GREETING = 'Hello {{ user.name if user else "guest" }}'


def create_blueprint(auth: Auth) -> Blueprint:
    """Build the example blueprint, protected by ``auth``."""
    blueprint = Blueprint('devices', __name__, url_prefix='')

    @blueprint.route('/', methods=['GET'])
    def home() -> str:
        """Public page."""
        return render_template_string(GREETING)

    @blueprint.route('/welcome', methods=['GET'])
    @auth.optional_auth
    def welcome() -> str:
        """Public page that greets known users by name."""
        return render_template_string(GREETING)

    @blueprint.route('/api/devices', methods=['GET'])
    @auth.require_auth
    def api_devices():
        """Devices visible to any logged-in user."""
        return jsonify(status='success', data=DEVICES)

    @blueprint.route('/devices', methods=['GET'])
    @auth.require_auth
    def devices() -> str:
        return render_template_string(
            '{{ user.name }}: {{ devices|length }} devices',
            devices=DEVICES
        )

    @blueprint.route('/api/admin/devices', methods=['GET'])
    @auth.require_auth
    @auth.require_admin
    def api_admin_devices():
        """Device administration, for admins only."""
        user = current_user()
        return jsonify(status='success', data=DEVICES,
                       admin=user.to_dict() if user else None)

    @blueprint.route('/admin/devices', methods=['GET'])
    @auth.require_auth
    @auth.require_admin
    def admin_devices() -> str:
        return render_template_string('Admin: {{ user.email }}')

    return blueprint
