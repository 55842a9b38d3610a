# budget_frontend/api_client.py

import logging
import os

import requests

logger = logging.getLogger(__name__)

API_BASE = os.environ.get("BUDGET_API_URL", "http://localhost:3001")
AI_ERROR_REPLY = "Error contacting AI"


class ApiError(Exception):
    """Request failed; `message` is safe to show to the user."""

    def __init__(self, message, status=None):
        super().__init__(message)
        self.message = message
        self.status = status


def safe_json(resp):
    try:
        return resp.json()
    except ValueError:
        return None


def api_request(method, path, token=None, json=None, timeout=10):
    headers = {}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    url = API_BASE.rstrip("/") + path
    return requests.request(method.upper(), url, headers=headers, json=json, timeout=timeout)


def _error_message(resp, fallback):
    payload = safe_json(resp) or {}
    if isinstance(payload, dict):
        return payload.get("error") or payload.get("message") or fallback
    return fallback


# ---------------- Authentication ----------------
def register(username, password):
    try:
        r = api_request("POST", "/api/register", json={"username": username, "password": password})
    except requests.RequestException:
        logger.exception("Register request failed")
        raise ApiError("Network error")
    if r.status_code != 201:
        raise ApiError(_error_message(r, "Registration failed"), r.status_code)
    return (safe_json(r) or {}).get("user")


def login(username, password):
    """Returns (token, user)"""
    try:
        r = api_request("POST", "/api/login", json={"username": username, "password": password})
    except requests.RequestException:
        logger.exception("Login request failed")
        raise ApiError("Network error")
    if r.status_code != 200:
        raise ApiError(_error_message(r, "Login failed"), r.status_code)
    payload = safe_json(r) or {}
    return payload.get("token"), payload.get("user")


def fetch_user(token):
    """Returns the user for `token`, or None when the token is rejected"""
    try:
        r = api_request("GET", "/api/user", token=token)
    except requests.RequestException:
        logger.exception("Failed to fetch user")
        return None
    if r.status_code != 200:
        return None
    return (safe_json(r) or {}).get("user")


# ---------------- Entries ----------------
def fetch_entries(token):
    try:
        r = api_request("GET", "/api/entries", token=token)
    except requests.RequestException:
        logger.exception("Failed to fetch entries")
        raise ApiError("Failed to fetch entries")
    if r.status_code != 200:
        logger.error("Failed to fetch entries: HTTP %s", r.status_code)
        raise ApiError("Failed to fetch entries", r.status_code)

    entries = safe_json(r) or []
    for entry in entries:
        entry["amount"] = float(entry.get("amount") or 0)
    return entries


def save_entries(token, entries):
    try:
        r = api_request("POST", "/api/entries", token=token, json={"entries": entries})
    except requests.RequestException:
        logger.exception("Error saving entries")
        raise ApiError("Failed to save entries")
    if r.status_code != 200:
        logger.error("Failed to save entries: HTTP %s", r.status_code)
        raise ApiError(_error_message(r, "Failed to save entries"), r.status_code)


# ---------------- AI Assistant ----------------
def ask_ai(token, prompt):
    """Never raises; upstream or network failures come back as a generic reply"""
    try:
        r = api_request("POST", "/api/ai", token=token, json={"prompt": prompt}, timeout=60)
    except requests.RequestException:
        logger.exception("AI fetch error")
        return AI_ERROR_REPLY
    if r.status_code != 200:
        logger.error("AI fetch error: HTTP %s", r.status_code)
        return AI_ERROR_REPLY
    return (safe_json(r) or {}).get("reply") or ""
