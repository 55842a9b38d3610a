from datetime import date

import pytest

from budget_frontend import ledger


def _form(**overrides):
    form = {"type": "EXPENSE", "amount": "12.50", "description": "lunch", "date": "2025-03-02", "category": ""}
    form.update(overrides)
    return form


def test_valid_form_becomes_entry():
    entry, error = ledger.validate_entry(_form(category=" Food "))

    assert error is None
    assert entry == {"type": "EXPENSE", "amount": 12.5, "description": "lunch", "date": "2025-03-02", "category": "Food"}


def test_date_objects_are_serialized():
    entry, _ = ledger.validate_entry(_form(date=date(2025, 3, 2)))

    assert entry["date"] == "2025-03-02"
    assert "category" not in entry


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"amount": ""}, "Amount must be a positive number"),
        ({"amount": "abc"}, "Amount must be a positive number"),
        ({"amount": 0}, "Amount must be a positive number"),
        ({"amount": -5}, "Amount must be a positive number"),
        ({"description": "   "}, "Description cannot be empty"),
        ({"date": ""}, "Date is required"),
        ({"date": None}, "Date is required"),
    ],
)
def test_invalid_forms(overrides, message):
    assert ledger.validate_entry(_form(**overrides)) == (None, message)


@pytest.mark.parametrize(
    "username, password, message",
    [
        ("ab", "secret123", "Username must be at least 3 characters"),
        ("  ab  ", "secret123", "Username must be at least 3 characters"),
        ("alice", "12345", "Password must be at least 6 characters"),
        ("alice", "123456", None),
    ],
)
def test_validate_credentials(username, password, message):
    assert ledger.validate_credentials(username, password) == message


def test_splices_return_new_lists():
    entries = [{"n": 1}, {"n": 2}, {"n": 3}]

    assert ledger.add_entry(entries, {"n": 4})[-1] == {"n": 4}
    assert ledger.update_entry(entries, 1, {"n": 20}) == [{"n": 1}, {"n": 20}, {"n": 3}]
    assert ledger.remove_entry(entries, 0) == [{"n": 2}, {"n": 3}]
    assert entries == [{"n": 1}, {"n": 2}, {"n": 3}]


def test_out_of_range_positions():
    with pytest.raises(IndexError):
        ledger.update_entry([], 0, {})
    with pytest.raises(IndexError):
        ledger.remove_entry([{"n": 1}], -1)


@pytest.mark.parametrize(
    "editing, removed, expected",
    [(None, 0, None), (2, 2, None), (3, 1, 2), (1, 3, 1)],
)
def test_editing_after_remove(editing, removed, expected):
    assert ledger.editing_after_remove(editing, removed) == expected
