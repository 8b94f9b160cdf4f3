import os
from flask import Flask, jsonify
from nutrito.extensions import db, bcrypt, migrate, jwt, limiter, cors
from nutrito.utils.error_handlers import register_error_handlers, register_jwt_handlers
from nutrito.utils.storage import document_store
from nutrito.commands import register_commands
from config import config

__version__ = '1.0.0'

def create_app(config_name=None):
    config_name = config_name or os.getenv('FLASK_CONFIG', 'default')
    config_class = config[config_name]

    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize extensions
    db.init_app(app)
    bcrypt.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    limiter.init_app(app)
    cors.init_app(
        app,
        origins=app.config['ALLOWED_ORIGINS'],
        supports_credentials=True,
        allow_headers=['Content-Type', 'Authorization'],
        methods=['GET', 'POST', 'PATCH', 'DELETE', 'OPTIONS']
    )

    document_store.init_app(app)

    # Initialize app with config
    config_class.init_app(app)

    # Importing the models registers them with SQLAlchemy
    from nutrito import models  # noqa: F401

    # Register blueprints
    from nutrito.api import api_bp
    app.register_blueprint(api_bp, url_prefix='/v1')

    # Register error handlers and commands
    register_error_handlers(app)
    register_jwt_handlers()
    register_commands(app)

    # JWT token blocklist checker
    @jwt.token_in_blocklist_loader
    def check_if_token_revoked(jwt_header, jwt_payload):
        from nutrito.models.system_models import RevokedToken
        return RevokedToken.is_revoked(jwt_payload['jti'])

    @app.route('/health')
    @limiter.exempt
    def health():
        return jsonify({'status': 'OK', 'service': 'nutrito-api', 'version': __version__}), 200

    @app.route('/')
    @limiter.exempt
    def index():
        return jsonify({
            'name': 'Nutrito API',
            'version': __version__,
            'api': '/v1',
            'health': '/health',
        }), 200

    return app
