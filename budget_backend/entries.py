# budget_backend/entries.py

import logging
import math
from datetime import datetime

from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from . import db
from .models import ENTRY_TYPES, Entry

logger = logging.getLogger(__name__)

DATE_FORMATS = ["%Y-%m-%d", "%d-%m-%Y", "%Y/%m/%d", "%d/%m/%Y"]
# NUMERIC(12, 2) holds ten integer digits
MAX_AMOUNT = 10 ** 10

entries_bp = Blueprint("entries", __name__, url_prefix="/api/entries")


# ---------------- Helpers ----------------
def parse_date(s):
    """Try multiple date formats, then ISO datetimes such as 2025-09-05T04:00:00.000Z"""
    if not s or not isinstance(s, str):
        return None
    s = s.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(s.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def parse_amount(value):
    if isinstance(value, bool):
        return None
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(amount):
        return None
    amount = round(amount, 2)
    return amount if 0 < amount < MAX_AMOUNT else None


def normalize_entry(data):
    """Validate one entry payload; returns (Entry, None) or (None, reason)"""
    if not isinstance(data, dict):
        return None, "Entry must be an object"

    entry_type = str(data.get("type") or "").strip().upper()
    if entry_type not in ENTRY_TYPES:
        return None, "Type must be INCOME or EXPENSE"

    amount = parse_amount(data.get("amount"))
    if amount is None:
        return None, "Amount must be a positive number"

    date_val = parse_date(data.get("date"))
    if date_val is None:
        return None, "Invalid or missing date"

    desc = data.get("description")
    desc = "" if desc is None else str(desc)

    category = data.get("category")
    category = str(category).strip() if category else None

    return Entry(entry_type, amount, date_val, desc, category or None), None


# ---------------- Routes ----------------
@entries_bp.route("", methods=["GET"])
@jwt_required()
def list_entries():
    try:
        entries = db.fetch_entries()
    except Exception:
        logger.exception("Database query error")
        return jsonify({"error": "Server error"}), 500
    return jsonify([e.to_dict() for e in entries])


@entries_bp.route("", methods=["POST"])
@jwt_required()
def replace_entries():
    data = request.get_json(silent=True)
    items = data.get("entries") if isinstance(data, dict) else None
    if not isinstance(items, list):
        return jsonify({"error": "Entries should be an array"}), 400

    entries = []
    for i, item in enumerate(items):
        entry, error = normalize_entry(item)
        if error:
            return jsonify({"error": f"Entry {i}: {error}"}), 400
        entries.append(entry)

    try:
        count = db.replace_entries(entries)
    except Exception:
        logger.exception("Error updating entries")
        return jsonify({"error": "Server error"}), 500

    logger.info("Replaced entry store with %d entries", count)
    return jsonify({"message": "Entries updated"})
