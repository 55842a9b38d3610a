from budget_frontend import summaries


def _entry(type_, amount, date="2025-01-01", description="x"):
    return {"type": type_, "amount": amount, "date": date, "description": description}


def test_balance_is_income_minus_expense():
    entries = [_entry("INCOME", 100), _entry("EXPENSE", 40)]

    assert summaries.totals(entries) == (100.0, 40.0, 60.0)


def test_totals_of_no_entries():
    assert summaries.totals([]) == (0.0, 0.0, 0.0)


def test_sort_amount_desc():
    entries = [_entry("INCOME", 5), _entry("INCOME", 20), _entry("EXPENSE", 1)]

    df = summaries.filter_and_sort(entries, "ALL", "amount_desc")

    assert df["amount"].tolist() == [20, 5, 1]
    assert df["position"].tolist() == [1, 0, 2]


def test_sort_amount_asc():
    entries = [_entry("INCOME", 5), _entry("INCOME", 20), _entry("EXPENSE", 1)]

    assert summaries.filter_and_sort(entries, "ALL", "amount_asc")["amount"].tolist() == [1, 5, 20]


def test_sort_by_date_uses_calendar_order():
    entries = [
        _entry("INCOME", 1, "2025-08-25"),
        _entry("INCOME", 2, "2025-09-05T04:00:00.000Z"),
        _entry("INCOME", 3, "2024-12-31"),
    ]

    newest = summaries.filter_and_sort(entries, "ALL", "date_desc")
    oldest = summaries.filter_and_sort(entries, "ALL", "date_asc")

    assert newest["amount"].tolist() == [2, 1, 3]
    assert oldest["amount"].tolist() == [3, 1, 2]


def test_equal_keys_keep_list_order():
    entries = [_entry("INCOME", 10, description="a"), _entry("INCOME", 10, description="b")]

    df = summaries.filter_and_sort(entries, "ALL", "amount_desc")

    assert df["description"].tolist() == ["a", "b"]


def test_filter_by_type_keeps_list_positions():
    entries = [_entry("INCOME", 1), _entry("EXPENSE", 2), _entry("EXPENSE", 3)]

    df = summaries.filter_and_sort(entries, "EXPENSE", "amount_asc")

    assert df["type"].unique().tolist() == ["EXPENSE"]
    assert df["position"].tolist() == [1, 2]


def test_filter_on_empty_list():
    assert summaries.filter_and_sort([], "INCOME", "date_desc").empty


def test_monthly_trend_groups_by_year_month():
    entries = [
        _entry("EXPENSE", 10, "2025-01-15"),
        _entry("EXPENSE", 15.5, "2025-01-20"),
        _entry("INCOME", 100, "2024-12-31"),
    ]

    monthly = summaries.monthly_trend(entries)

    assert monthly["month"].tolist() == ["2024-12", "2025-01"]
    jan = monthly.set_index("month").loc["2025-01"]
    assert jan["Expense"] == 25.5
    assert jan["Income"] == 0


def test_monthly_trend_empty():
    monthly = summaries.monthly_trend([])

    assert monthly.empty
    assert list(monthly.columns) == ["month", "Income", "Expense"]


def test_income_vs_expense_chart_data():
    df = summaries.income_vs_expense([_entry("INCOME", 100), _entry("EXPENSE", 40)])

    assert df.to_dict("records") == [{"name": "Income", "amount": 100.0}, {"name": "Expense", "amount": 40.0}]


def test_limit_warnings_are_advisory():
    entries = [_entry("INCOME", 100), _entry("EXPENSE", 40)]

    assert summaries.limit_warnings(entries, 0, 0) == []
    assert summaries.limit_warnings(entries, 500, 50) == []
    warnings = summaries.limit_warnings(entries, 50, 30)
    assert len(warnings) == 2
    assert "income limit" in warnings[0]
    assert "expense limit" in warnings[1]
