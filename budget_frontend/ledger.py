# budget_frontend/ledger.py
# Entry list edits happen here; the whole list is then saved with a full replace.

from datetime import date

ENTRY_TYPES = ["INCOME", "EXPENSE"]
MIN_USERNAME = 3
MIN_PASSWORD = 6


def empty_form():
    return {"type": "INCOME", "amount": "", "description": "", "date": "", "category": ""}


def validate_credentials(username, password):
    """Registration form checks; returns an error message or None"""
    if len((username or "").strip()) < MIN_USERNAME:
        return f"Username must be at least {MIN_USERNAME} characters"
    if len(password or "") < MIN_PASSWORD:
        return f"Password must be at least {MIN_PASSWORD} characters"
    return None


def validate_entry(form):
    """Returns (entry, None) for a valid form, else (None, message)"""
    try:
        amount = float(form.get("amount"))
    except (TypeError, ValueError):
        amount = None
    if amount is None or amount != amount or amount <= 0:
        return None, "Amount must be a positive number"

    description = (form.get("description") or "").strip()
    if not description:
        return None, "Description cannot be empty"

    entry_date = form.get("date")
    if not entry_date:
        return None, "Date is required"
    if isinstance(entry_date, date):
        entry_date = entry_date.isoformat()

    entry = {
        "type": form.get("type") if form.get("type") in ENTRY_TYPES else "INCOME",
        "amount": amount,
        "description": description,
        "date": entry_date,
    }
    category = (form.get("category") or "").strip()
    if category:
        entry["category"] = category
    return entry, None


def add_entry(entries, entry):
    return list(entries) + [entry]


def update_entry(entries, index, entry):
    if not 0 <= index < len(entries):
        raise IndexError(f"No entry at position {index}")
    updated = list(entries)
    updated[index] = entry
    return updated


def remove_entry(entries, index):
    if not 0 <= index < len(entries):
        raise IndexError(f"No entry at position {index}")
    updated = list(entries)
    del updated[index]
    return updated


def editing_after_remove(editing_index, removed_index):
    """Edit state once `removed_index` is deleted; None means viewing"""
    if editing_index is None or editing_index == removed_index:
        return None
    if editing_index > removed_index:
        return editing_index - 1
    return editing_index
