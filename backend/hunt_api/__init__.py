import hmac

from flask import Flask, Response, current_app, g, jsonify, redirect, request
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager, UserMixin, current_user
from flask_cors import CORS
from flask_migrate import Migrate
from config import Config

db = SQLAlchemy()
login_manager = LoginManager()
# Identity comes from the Authorization header on every request
login_manager.session_protection = None
migrate = Migrate()

SECURITY_HEADERS = {
    'Content-Security-Policy': "default-src 'self'",
    'X-Content-Type-Options': 'nosniff',
    'X-XSS-Protection': '1; mode=block',
    'Strict-Transport-Security': 'max-age=63072000; includeSubDomains; preload',
}


class ApiClient(UserMixin):
    """The caller behind a valid API key. There are no per-user accounts."""
    id = 'api'


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    db.init_app(flask_app)
    login_manager.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, origins=flask_app.config.get('CORS_ORIGINS') or [])

    @login_manager.request_loader
    def load_api_client(req):
        expected = current_app.config.get('API_KEY')
        if not expected:
            return ApiClient()
        scheme, _, token = (req.headers.get('Authorization') or '').partition(' ')
        if scheme.lower() == 'bearer' and hmac.compare_digest(token.encode(), expected.encode()):
            return ApiClient()
        return None

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'success': False, 'message': 'Unauthorized'}), 401

    @flask_app.before_request
    def guard_request():
        if flask_app.config.get('FORCE_HTTPS') and not request.is_secure:
            return redirect(request.url.replace('http://', 'https://', 1), code=301)
        # Preflight requests carry no credentials
        if request.method == 'OPTIONS':
            return None
        # Resolve the caller from this request's header, never from an earlier request
        g.pop('_login_user', None)
        if not current_user.is_authenticated:
            return login_manager.unauthorized()
        return None

    @flask_app.after_request
    def add_security_headers(response):
        for name, value in SECURITY_HEADERS.items():
            response.headers[name] = value
        return response

    # Import and register blueprints here
    from hunt_api.api.hunt import hunt
    flask_app.register_blueprint(hunt)

    # Unknown paths and known paths with the wrong method both read as not found
    @flask_app.errorhandler(404)
    @flask_app.errorhandler(405)
    def not_found(_exc):
        return Response('Not found', status=404, mimetype='application/json')

    from hunt_api.cli import register_commands
    register_commands(flask_app)

    return flask_app
