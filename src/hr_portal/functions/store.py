from __future__ import annotations

import json
from typing import Protocol

import mysql.connector

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone


class StoreError(Exception):
    """Raised when the functions database rejects a write."""


class FunctionStore(Protocol):
    def insert_invoice(self, row: dict) -> dict:
        raise NotImplementedError

    def insert_activity_log(self, row: dict) -> None:
        raise NotImplementedError

    def insert_site_attendance(self, row: dict) -> dict:
        raise NotImplementedError


class MySQLFunctionStore:
    def __init__(self, conn: DatabaseConnection):
        self._conn = conn

    def insert_invoice(self, row: dict) -> dict:
        try:
            with db_cursor(self._conn) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO invoices (enrollment_id, amount, currency, status, generated_at)
                    VALUES (%s, %s, %s, %s, %s)
                    """,
                    (row["enrollment_id"], row["amount"], row["currency"], row["status"], row["generated_at"]),
                )
                cur.execute(
                    "SELECT id, enrollment_id, amount, currency, status, generated_at FROM invoices WHERE id=%s",
                    (cur.lastrowid,),
                )
                saved = fetchone(cur)
        except mysql.connector.Error as e:
            raise StoreError(str(e)) from e
        saved = dict(saved or {})
        if "amount" in saved:
            saved["amount"] = float(saved["amount"])
        return saved

    def insert_activity_log(self, row: dict) -> None:
        try:
            with db_cursor(self._conn) as (_, cur):
                cur.execute(
                    "INSERT INTO user_activity_logs (user_id, activity_type, details) VALUES (%s, %s, %s)",
                    (row["user_id"], row["activity_type"], json.dumps(row.get("details") or {})),
                )
        except mysql.connector.Error as e:
            raise StoreError(str(e)) from e

    def insert_site_attendance(self, row: dict) -> dict:
        try:
            with db_cursor(self._conn) as (_, cur):
                cur.execute(
                    "INSERT INTO site_attendance (site_id, user_id, check_in_time) VALUES (%s, %s, %s)",
                    (row["site_id"], row["user_id"], row["check_in_time"]),
                )
                new_id = cur.lastrowid
        except mysql.connector.Error as e:
            raise StoreError(str(e)) from e
        return {"id": new_id, **row}
