from flask import Flask
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from farmtrack import __version__
from farmtrack.config import Config
from farmtrack.database.db import db
from farmtrack.routes.auth_routes import auth_bp
from farmtrack.routes.farm_routes import farm_bp
from farmtrack.routes.field_routes import field_bp
from farmtrack.routes.crop_routes import crop_bp
from farmtrack.routes.activity_routes import activity_bp
from farmtrack.routes.advisory_routes import advisory_bp
from farmtrack.routes.guards import register_jwt_handlers
from farmtrack.services.observability import setup_observability


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    jwt = JWTManager(app)
    register_jwt_handlers(jwt)

    db.init_app(app)
    # Browser client sends the session cookie cross-origin
    CORS(app, origins=app.config['CORS_ORIGINS'], supports_credentials=True)

    # ── Rate Limiting ──
    limiter = Limiter(
        get_remote_address,
        app=app,
        default_limits=[app.config['RATELIMIT_DEFAULT']],
        storage_uri=app.config['RATELIMIT_STORAGE_URI'],
    )
    # Stricter limit for auth endpoints
    limiter.limit(app.config['RATELIMIT_AUTH'])(auth_bp)
    app.logger.info("Rate limiting configured: %s general, %s auth",
                    app.config['RATELIMIT_DEFAULT'], app.config['RATELIMIT_AUTH'])

    # ── Observability & error boundary ──
    setup_observability(app)

    app.register_blueprint(auth_bp)
    app.register_blueprint(farm_bp)
    app.register_blueprint(field_bp)
    app.register_blueprint(crop_bp)
    app.register_blueprint(activity_bp)
    app.register_blueprint(advisory_bp)

    with app.app_context():
        db.create_all()

    @app.route('/')
    def index():
        return {"message": "Farmtrack API is running", "version": __version__}

    return app


if __name__ == '__main__':
    app = create_app()
    app.run(host='0.0.0.0', port=5000)
