# budget_backend/auth.py

import logging
from datetime import timedelta

from flask import Blueprint, request, jsonify
from flask_jwt_extended import create_access_token, get_jwt, get_jwt_identity, jwt_required
from werkzeug.security import check_password_hash, generate_password_hash

from . import db

logger = logging.getLogger(__name__)

TOKEN_TTL = timedelta(hours=24)

auth_bp = Blueprint("auth", __name__, url_prefix="/api")


def read_credentials(data):
    """Return (username, password) or None when either is missing or blank; the username is kept as given"""
    if not isinstance(data, dict):
        return None
    username = data.get("username")
    password = data.get("password")
    if not isinstance(username, str) or not isinstance(password, str):
        return None
    if not username.strip() or not password:
        return None
    return username, password


def register_jwt_handlers(jwt):
    """Report every token problem as 401 with the API's error body."""

    @jwt.unauthorized_loader
    def missing_token(reason):
        return jsonify({"error": "Unauthorized"}), 401

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return jsonify({"error": "Invalid or expired token"}), 401

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return jsonify({"error": "Invalid or expired token"}), 401


@auth_bp.route("/register", methods=["POST"])
def register():
    creds = read_credentials(request.get_json(silent=True))
    if creds is None:
        return jsonify({"error": "Username and password are required"}), 400
    username, password = creds

    try:
        if db.find_user(username) is not None:
            return jsonify({"error": "Username already taken"}), 409
        user = db.create_user(username, generate_password_hash(password))
    except db.DuplicateUsername:
        return jsonify({"error": "Username already taken"}), 409
    except Exception:
        logger.exception("User registration failed")
        return jsonify({"error": "Server error"}), 500

    logger.info("Registered user %s", user.id)
    return jsonify({"message": "User registered", "user": user.public_dict()}), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    creds = read_credentials(request.get_json(silent=True))
    if creds is None:
        return jsonify({"error": "Username and password are required"}), 400
    username, password = creds

    try:
        user = db.find_user(username)
    except Exception:
        logger.exception("Login lookup failed")
        return jsonify({"error": "Server error"}), 500

    if user is None or not check_password_hash(user.password_hash, password):
        return jsonify({"error": "Invalid credentials"}), 401

    token = create_access_token(
        identity=str(user.id),
        additional_claims={"userId": user.id, "username": user.username},
        expires_delta=TOKEN_TTL,
    )
    return jsonify({"token": token, "user": user.public_dict()})


@auth_bp.route("/user", methods=["GET"])
@jwt_required()
def current_user():
    claims = get_jwt()
    return jsonify({"user": {"id": int(get_jwt_identity()), "username": claims.get("username")}})
