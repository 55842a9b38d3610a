# budget_backend/app.py

import logging

from flask import Flask, jsonify
from flask_cors import CORS
from flask_jwt_extended import JWTManager

from . import db
from .assistant import assistant_bp
from .auth import auth_bp, register_jwt_handlers
from .config import DEFAULT_SECRET_KEY, load_config
from .entries import entries_bp

logger = logging.getLogger("budget-backend")


# ---------------- Flask App Factory ----------------
def create_app(overrides=None):
    app = Flask(__name__)

    # Configuration
    app.config.update(load_config())
    if overrides:
        app.config.update(overrides)

    logging.basicConfig(level=app.config["LOG_LEVEL"])
    if app.config["JWT_SECRET_KEY"] == DEFAULT_SECRET_KEY:
        logger.warning("SECRET_KEY is not set; using the development signing key")

    jwt = JWTManager(app)
    register_jwt_handlers(jwt)

    # CORS
    origins = [o.strip() for o in app.config["CORS_ORIGINS"].split(",") if o.strip()]
    CORS(app, resources={r"/*": {"origins": origins or "*"}})

    # Blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(entries_bp)
    app.register_blueprint(assistant_bp)

    # Initialize DB
    if app.config["INIT_DB"]:
        db.init_db(app.config["DATABASE_DSN"])
        logger.info("Database initialized")

    app.teardown_appcontext(db.close_db)

    # ---------------- Core Endpoints ----------------
    @app.route('/')
    def root():
        return "Budget Tracker API is running"

    @app.route('/health')
    def health():
        return jsonify({"status": "ok"})

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({"error": "Method not allowed"}), 405

    return app


# ---------------- Run ----------------
def main():
    app = create_app()
    port = app.config["PORT"]
    logger.info(f"Server listening on http://localhost:{port}")
    app.run(host="0.0.0.0", port=port)


if __name__ == '__main__':
    main()
