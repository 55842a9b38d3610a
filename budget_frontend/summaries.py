# budget_frontend/summaries.py
"""
Derived views over the in-memory entry list: filtering, sorting, totals and
the monthly trend used by the charts.

All functions take the entry list as returned by the API (dicts with type,
amount, date, description and an optional category) and never mutate it.
"""

import pandas as pd

FILTER_TYPES = ["ALL", "INCOME", "EXPENSE"]

# sort key -> (column, ascending)
SORT_OPTIONS = {
    "date_desc": ("date", False),
    "date_asc": ("date", True),
    "amount_desc": ("amount", False),
    "amount_asc": ("amount", True),
}

SORT_LABELS = {
    "date_desc": "Date (Newest First)",
    "date_asc": "Date (Oldest First)",
    "amount_desc": "Amount (High to Low)",
    "amount_asc": "Amount (Low to High)",
}

COLUMNS = ["type", "amount", "category", "date", "description"]


def to_frame(entries):
    """
    Build a DataFrame with a `position` column holding each entry's index in
    the unfiltered list, so rows picked from a filtered view can be edited in
    place.
    """
    if not entries:
        df = pd.DataFrame(columns=COLUMNS + ["position"])
        df["amount"] = df["amount"].astype(float)
        return df

    df = pd.DataFrame(list(entries))
    for col in COLUMNS:
        if col not in df.columns:
            df[col] = None
    df = df[COLUMNS].copy()
    df["amount"] = pd.to_numeric(df["amount"], errors="coerce").fillna(0.0).astype(float)
    df["date"] = df["date"].astype(str)
    df["position"] = range(len(df))
    return df


def filter_and_sort(entries, filter_type="ALL", sort_by="date_desc"):
    df = to_frame(entries)

    if filter_type != "ALL":
        df = df[df["type"] == filter_type]

    if sort_by in SORT_OPTIONS and not df.empty:
        column, ascending = SORT_OPTIONS[sort_by]
        if column == "date":
            key = pd.to_datetime(df["date"], errors="coerce", utc=True, format="ISO8601")
            order = key.sort_values(ascending=ascending, kind="stable").index
            df = df.loc[order]
        else:
            df = df.sort_values(column, ascending=ascending, kind="stable")

    return df.reset_index(drop=True)


def totals(entries):
    """Returns (income, expense, balance) rounded to cents"""
    df = to_frame(entries)
    income = float(df.loc[df["type"] == "INCOME", "amount"].sum())
    expense = float(df.loc[df["type"] == "EXPENSE", "amount"].sum())
    return round(income, 2), round(expense, 2), round(income - expense, 2)


def monthly_trend(entries):
    """Per-month Income and Expense sums keyed by the first 7 characters of the date"""
    df = to_frame(entries)
    if df.empty:
        return pd.DataFrame(columns=["month", "Income", "Expense"])

    df["month"] = df["date"].str[:7]
    df["Income"] = df["amount"].where(df["type"] == "INCOME", 0.0)
    df["Expense"] = df["amount"].where(df["type"] == "EXPENSE", 0.0)

    monthly = df.groupby("month", sort=True)[["Income", "Expense"]].sum().reset_index()
    return monthly


def income_vs_expense(entries):
    income, expense, _ = totals(entries)
    return pd.DataFrame({"name": ["Income", "Expense"], "amount": [income, expense]})


def limit_warnings(entries, income_limit=0.0, expense_limit=0.0):
    """Advisory messages for totals above a non-zero limit"""
    income, expense, _ = totals(entries)
    warnings = []
    if income_limit and income > income_limit:
        warnings.append(f"Income ${income:,.2f} is above the income limit of ${income_limit:,.2f}")
    if expense_limit and expense > expense_limit:
        warnings.append(f"Expenses ${expense:,.2f} are above the expense limit of ${expense_limit:,.2f}")
    return warnings
