# budget_frontend/streamlit_app.py

import logging
from datetime import date

import plotly.express as px
import streamlit as st

from budget_frontend import api_client, ledger, local_store, summaries

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("budget-frontend")

COLORS = ["#0088FE", "#00C49F", "#FFBB28", "#FF8042", "#A28EFF", "#FF6B6B"]

# ---------------- Page config ----------------
st.set_page_config(page_title="Budget Tracker", layout="centered", page_icon="🚀")


# ---------------- Session State Management ----------------
def init_session_state():
    if "initialized" in st.session_state:
        return
    saved = local_store.load_state()
    st.session_state.initialized = True
    st.session_state.token = saved["token"] or None
    st.session_state.user = None
    st.session_state.entries = []
    st.session_state.income_limit = local_store.parse_limit(saved["income_limit"])
    st.session_state.expense_limit = local_store.parse_limit(saved["expense_limit"])
    st.session_state.editing_index = None
    st.session_state.form = ledger.empty_form()
    st.session_state.form_version = 0
    st.session_state.auth_error = ""
    st.session_state.auth_success = ""
    st.session_state.ai_response = ""


def reset_form():
    st.session_state.editing_index = None
    st.session_state.form = ledger.empty_form()
    st.session_state.form_version += 1


def logout():
    st.session_state.token = None
    st.session_state.user = None
    st.session_state.entries = []
    reset_form()
    local_store.update_state(token="")


def refresh_entries():
    try:
        st.session_state.entries = api_client.fetch_entries(st.session_state.token)
    except api_client.ApiError as e:
        logger.error(f"Failed to fetch entries: {e.message}")


def restore_session():
    """Validate a persisted token once per session"""
    if st.session_state.token and st.session_state.user is None:
        user = api_client.fetch_user(st.session_state.token)
        if user is None:
            logout()
            return
        st.session_state.user = user
        refresh_entries()


def persist_entries(updated):
    """Full replace on the server; the local list only changes once the save succeeds"""
    try:
        api_client.save_entries(st.session_state.token, updated)
    except api_client.ApiError as e:
        st.error(f"❌ {e.message}")
        return False
    st.session_state.entries = updated
    return True


# ---------------- Authentication ----------------
def handle_auth(username, password, is_register=False):
    st.session_state.auth_error = ""
    st.session_state.auth_success = ""

    if is_register:
        error = ledger.validate_credentials(username, password)
        if error:
            st.session_state.auth_error = error
            return False
        try:
            api_client.register(username.strip(), password)
        except api_client.ApiError as e:
            st.session_state.auth_error = e.message
            return False
        st.session_state.auth_success = "Registration successful! Please log in."
        return True

    try:
        token, user = api_client.login(username.strip(), password)
    except api_client.ApiError as e:
        st.session_state.auth_error = e.message
        return False
    st.session_state.token = token
    st.session_state.user = user
    local_store.update_state(token=token)
    refresh_entries()
    return True


def render_login():
    st.subheader("🔐 Login to Budget Tracker")
    auth_tab = st.radio("Action", ["Login", "Register"], horizontal=True, key="auth_tab")

    with st.form("auth_form", clear_on_submit=True):
        username = st.text_input("Username", key="username_input")
        password = st.text_input("Password", type="password", key="password_input")
        submitted = st.form_submit_button(auth_tab, use_container_width=True)

    if submitted:
        if handle_auth(username, password, auth_tab == "Register") and auth_tab == "Login":
            st.rerun()

    if st.session_state.auth_error:
        st.error(st.session_state.auth_error)
    if st.session_state.auth_success:
        st.success(st.session_state.auth_success)


# ---------------- Sidebar ----------------
def update_limits():
    st.session_state.income_limit = local_store.parse_limit(st.session_state.income_limit_input)
    st.session_state.expense_limit = local_store.parse_limit(st.session_state.expense_limit_input)
    local_store.update_state(
        income_limit=st.session_state.income_limit,
        expense_limit=st.session_state.expense_limit,
    )


def render_sidebar():
    with st.sidebar:
        st.title("🔐 Account")
        st.success(f"Logged in as **{st.session_state.user.get('username')}**")
        st.button("🚪 Logout", use_container_width=True, key="logout_btn", on_click=logout)

        st.markdown("---")
        st.header("📏 Budget Limits")
        st.number_input("Income Limit ($)", min_value=0.0, step=0.01, format="%.2f",
                        value=float(st.session_state.income_limit),
                        key="income_limit_input", on_change=update_limits)
        st.number_input("Expense Limit ($)", min_value=0.0, step=0.01, format="%.2f",
                        value=float(st.session_state.expense_limit),
                        key="expense_limit_input", on_change=update_limits)


# ---------------- Summary ----------------
def render_summary():
    entries = st.session_state.entries
    for warning in summaries.limit_warnings(entries, st.session_state.income_limit, st.session_state.expense_limit):
        st.warning(f"⚠️ {warning}")

    st.subheader("💰 Summary")
    income, expense, balance = summaries.totals(entries)
    col1, col2, col3 = st.columns(3)
    col1.metric("Income", f"${income:,.2f}")
    col2.metric("Expense", f"${expense:,.2f}")
    col3.metric("Balance", f"${balance:,.2f}")


# ---------------- Entry Form ----------------
def start_edit(position):
    entry = st.session_state.entries[position]
    st.session_state.editing_index = position
    st.session_state.form = {
        "type": entry.get("type", "INCOME"),
        "amount": entry.get("amount", ""),
        "description": entry.get("description", ""),
        "date": entry.get("date", ""),
        "category": entry.get("category") or "",
    }
    st.session_state.form_version += 1


def delete_entry(position):
    updated = ledger.remove_entry(st.session_state.entries, position)
    if persist_entries(updated):
        editing = ledger.editing_after_remove(st.session_state.editing_index, position)
        if editing is None:
            reset_form()
        else:
            st.session_state.editing_index = editing


def _form_date(value):
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return date.today()


def render_entry_form():
    editing = st.session_state.editing_index
    form = st.session_state.form
    st.subheader("✏️ Edit Entry" if editing is not None else "➕ Add New Entry")

    with st.form(f"entry_form_{st.session_state.form_version}"):
        col_a, col_b = st.columns(2)
        with col_a:
            t_type = st.selectbox("Type", ledger.ENTRY_TYPES,
                                  index=ledger.ENTRY_TYPES.index(form["type"]) if form["type"] in ledger.ENTRY_TYPES else 0)
            t_amount = st.number_input("Amount ($)", min_value=0.0, step=0.01, format="%.2f",
                                       value=float(form["amount"] or 0))
        with col_b:
            t_date = st.date_input("Date", value=_form_date(form["date"]))
            t_cat = st.text_input("Category (optional)", value=form.get("category", ""))
        t_desc = st.text_input("Description", value=form["description"])

        submitted = st.form_submit_button("Update Entry" if editing is not None else "Add Entry",
                                          use_container_width=True)

    if editing is not None:
        st.button("Cancel", key="cancel_edit", on_click=reset_form)

    if submitted:
        entry, error = ledger.validate_entry({
            "type": t_type, "amount": t_amount, "description": t_desc,
            "date": t_date, "category": t_cat,
        })
        if error:
            st.error(f"❌ {error}")
            return

        if editing is not None:
            updated = ledger.update_entry(st.session_state.entries, editing, entry)
        else:
            updated = ledger.add_entry(st.session_state.entries, entry)

        if persist_entries(updated):
            reset_form()
            st.rerun()


# ---------------- Entries List ----------------
def render_entries():
    st.subheader("📋 Entries")

    col1, col2 = st.columns(2)
    with col1:
        filter_type = st.selectbox("Filter by Type", summaries.FILTER_TYPES,
                                   format_func=str.title, key="filter_type")
    with col2:
        sort_by = st.selectbox("Sort by", list(summaries.SORT_OPTIONS),
                               format_func=summaries.SORT_LABELS.get, key="sort_by")

    df = summaries.filter_and_sort(st.session_state.entries, filter_type, sort_by)
    if df.empty:
        st.info("No entries to display.")
        return

    header = st.columns([2, 2, 4, 2, 1, 1])
    for col, title in zip(header, ["Type", "Amount", "Description", "Date", "", ""]):
        col.markdown(f"**{title}**")

    for row in df.itertuples(index=False):
        position = int(row.position)
        cols = st.columns([2, 2, 4, 2, 1, 1])
        cols[0].write(row.type)
        cols[1].write(f"${row.amount:,.2f}")
        cols[2].write(row.description)
        cols[3].write(row.date[:10])
        cols[4].button("✏️", key=f"edit_{position}", help="Edit", on_click=start_edit, args=(position,))
        cols[5].button("🗑️", key=f"delete_{position}", help="Delete", on_click=delete_entry, args=(position,))


# ---------------- Charts ----------------
def render_charts():
    entries = st.session_state.entries
    if not entries:
        return

    col1, col2 = st.columns(2)
    with col1:
        fig_pie = px.pie(summaries.income_vs_expense(entries), names="name", values="amount",
                         title="Income vs Expense", color_discrete_sequence=COLORS)
        st.plotly_chart(fig_pie, use_container_width=True)

    with col2:
        monthly = summaries.monthly_trend(entries)
        fig_bar = px.bar(monthly, x="month", y=["Income", "Expense"], barmode="group",
                         title="Monthly Income and Expenses",
                         color_discrete_map={"Income": "#00C49F", "Expense": "#FF8042"})
        fig_bar.update_layout(template="plotly_white")
        st.plotly_chart(fig_bar, use_container_width=True)


# ---------------- AI Assistant ----------------
def render_assistant():
    st.subheader("🤖 AI Budget Assistant")

    with st.form("ai_form", clear_on_submit=True):
        prompt = st.text_area("Ask your budget assistant for advice...", height=100)
        asked = st.form_submit_button("Ask AI")

    if asked:
        if not prompt.strip():
            st.warning("Please enter a question")
        else:
            with st.spinner("Thinking..."):
                st.session_state.ai_response = api_client.ask_ai(st.session_state.token, prompt)

    if st.session_state.ai_response:
        st.info(st.session_state.ai_response)


# ---------------- Main App ----------------
def main():
    init_session_state()
    restore_session()

    if not st.session_state.token or not st.session_state.user:
        st.title("🚀 Budget Tracker")
        render_login()
        return

    st.title(f"🚀 Budget Tracker - Welcome, {st.session_state.user.get('username')}")
    render_sidebar()
    render_summary()
    render_entry_form()
    render_entries()
    render_charts()
    render_assistant()


if __name__ == "__main__":
    main()
