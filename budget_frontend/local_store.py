# budget_frontend/local_store.py
# Device-local state for the UI: session token and budget limits.
import json
import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_STATE = {"token": "", "income_limit": 0.0, "expense_limit": 0.0}


def state_file():
    state_dir = os.environ.get("BUDGET_STATE_DIR", os.path.join(os.path.expanduser("~"), ".budget_tracker"))
    return os.path.join(state_dir, "state.json")


def load_state():
    '''Load saved state, falling back to defaults for a missing or corrupted file'''
    path = state_file()
    data = dict(DEFAULT_STATE)
    if not os.path.exists(path):
        return data
    try:
        with open(path, 'r', encoding='utf-8') as f:
            saved = json.load(f)
    except (json.JSONDecodeError, OSError):
        logger.warning("Ignoring unreadable state file %s", path)
        return data

    if isinstance(saved, dict):
        for key in DEFAULT_STATE:
            if key in saved:
                data[key] = saved[key]
    return data


def save_state(data):
    path = state_file()
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=4)


def update_state(**changes):
    data = load_state()
    data.update({k: v for k, v in changes.items() if k in DEFAULT_STATE})
    save_state(data)
    return data


def parse_limit(value):
    try:
        limit = float(value)
    except (TypeError, ValueError):
        return 0.0
    return limit if limit > 0 else 0.0
