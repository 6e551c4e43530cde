"""
Application factory module.
"""
import os
from typing import Optional, Dict, Any

from .config.env_manager import load_environment
# Env files must be loaded before the config classes read os.environ
load_environment()

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

from .models import db, migrate
from .utils.logger import configure_logging
from .config.config import get_config
from .services.entry_service import init_entry_service


def create_app(test_config: Optional[Dict[str, Any]] = None) -> Flask:
    """Application factory for creating a Flask app instance.

    Args:
        test_config: Optional configuration overrides, applied on top of
            the environment's configuration class.

    Returns:
        Configured Flask application instance.
    """
    app = Flask(__name__, instance_relative_config=True, static_folder='static', static_url_path='/')

    # Load config
    app.config.from_object(get_config())
    if test_config is not None:
        app.config.from_mapping(test_config)

    # Configure logging
    configure_logging(app)

    if app.config.get('PROXY_FIX'):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    if app.config.get('AUTO_CREATE_TABLES'):
        with app.app_context():
            db.create_all()

    init_entry_service(app, db)
    app.logger.info("Entry service initialized")

    cors_origins = app.config.get('CORS_ORIGINS') or []
    if isinstance(cors_origins, str):
        cors_origins = [origin.strip() for origin in cors_origins.split(',') if origin.strip()]
    app.logger.info(f"Configuring CORS with origins: {cors_origins}")
    CORS(app, resources={r"/api/*": {
        "origins": cors_origins,
        "methods": ["GET", "POST", "DELETE", "OPTIONS"],
        "allow_headers": ["Content-Type", "X-Requested-With"],
    }})

    @app.route('/health')
    def health_check():
        """Simple health check endpoint."""
        return {"status": "ok", "message": "App is running"}, 200

    @app.route('/api/health', methods=['GET'])
    def health():
        return {"status": "ok", "message": "Backend is healthy"}

    # Register blueprints
    from .api.entries import entries_bp
    app.register_blueprint(entries_bp, url_prefix='/api')

    from .commands import register_commands
    register_commands(app)

    @app.route('/', methods=['GET'])
    def index():
        """Serve static/index.html when present, otherwise describe the API."""
        if app.static_folder and os.path.exists(os.path.join(app.static_folder, 'index.html')):
            return app.send_static_file('index.html')
        return jsonify({
            "message": "Mood Journal API",
            "status": "running",
            "api_endpoints": {
                "health_check": "/health",
                "entries": "/api/entries",
                "generate_affirmation": "/api/generate-affirmation"
            }
        })

    # Shell context for Flask CLI
    @app.shell_context_processor
    def ctx():
        return {'app': app, 'db': db, 'entry_service': app.entry_service}

    return app
