# budget_backend/db.py
import logging
import os

import psycopg2
from psycopg2.errors import UniqueViolation
from psycopg2.extras import RealDictCursor
from flask import current_app, g

from .models import Entry, User

logger = logging.getLogger(__name__)

SQL_FILE = os.path.join(os.path.dirname(__file__), "init_db.sql")


class DuplicateUsername(Exception):
    """Raised when the users table rejects an already-taken username."""


def connect(dsn):
    return psycopg2.connect(dsn, cursor_factory=RealDictCursor)


def get_db():
    db = getattr(g, '_database', None)
    if db is None:
        db = g._database = connect(current_app.config["DATABASE_DSN"])
    return db


def close_db(exception=None):
    db = g.pop('_database', None)
    if db is not None:
        try:
            db.close()
        except psycopg2.Error:
            logger.exception("Error closing DB connection")


def query_db(query, args=(), one=False):
    with get_db().cursor() as cur:
        cur.execute(query, args)
        rv = cur.fetchall()
    return (rv[0] if rv else None) if one else rv


def execute_db(query, args=(), returning=False):
    conn = get_db()
    try:
        with conn.cursor() as cur:
            cur.execute(query, args)
            row = cur.fetchone() if returning else None
        conn.commit()
    except psycopg2.Error:
        conn.rollback()
        raise
    return row


def init_db(dsn):
    """
    Create the tables from init_db.sql shipped next to this module.
    The script uses IF NOT EXISTS, so running it at every startup is safe.
    """
    if not os.path.exists(SQL_FILE):
        raise FileNotFoundError(f"init_db.sql not found at expected path: {SQL_FILE}")

    with open(SQL_FILE, 'r', encoding='utf-8') as f:
        sql = f.read()

    conn = connect(dsn)
    try:
        with conn.cursor() as cur:
            cur.execute(sql)
        conn.commit()
    finally:
        conn.close()


# ---------------- Users ----------------
def find_user(username):
    row = query_db(
        "SELECT id, username, password, created_at FROM users WHERE username = %s",
        (username,), one=True
    )
    if row is None:
        return None
    return User(row["id"], row["username"], row["password"], row.get("created_at"))


def create_user(username, password_hash):
    try:
        row = execute_db(
            "INSERT INTO users (username, password) VALUES (%s, %s) RETURNING id, username",
            (username, password_hash), returning=True
        )
    except UniqueViolation as e:
        raise DuplicateUsername(username) from e
    return User(row["id"], row["username"], password_hash)


# ---------------- Entries ----------------
def fetch_entries():
    rows = query_db(
        "SELECT type, amount, category, date, description FROM entries ORDER BY date DESC"
    )
    return [Entry.from_row(r) for r in rows]


def replace_entries(entries):
    """Delete every stored entry and insert the given ones, committed together."""
    conn = get_db()
    try:
        with conn.cursor() as cur:
            cur.execute("DELETE FROM entries")
            if entries:
                cur.executemany(
                    "INSERT INTO entries (type, amount, category, date, description) VALUES (%s, %s, %s, %s, %s)",
                    [(e.type, e.amount, e.category, e.date, e.description) for e in entries]
                )
        conn.commit()
    except psycopg2.Error:
        conn.rollback()
        raise
    return len(entries)
