from __future__ import annotations

import pytest

from hr_portal.database.bootstrap import iter_sql_statements, schema_statements
from hr_portal.database.connection import DBConfig


def test_schema_creates_function_tables():
    statements = schema_statements()

    assert len(statements) == 3
    assert all(s.startswith("CREATE TABLE IF NOT EXISTS") for s in statements)
    assert not any("USE " in s for s in statements)
    assert "site_attendance" in statements[-1]


def test_splitter_ignores_semicolons_in_quotes():
    sql = "INSERT INTO t VALUES ('a;b');\nINSERT INTO t VALUES (\"c;d\");  "

    assert list(iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('a;b')", 'INSERT INTO t VALUES ("c;d")']


def test_db_config_requires_host_and_name():
    with pytest.raises(ValueError, match="Missing database configuration"):
        DBConfig.from_dict({"host": "localhost"})

    cfg = DBConfig.from_dict({"host": "db", "database": "hr", "port": "3307"})
    assert (cfg.port, cfg.user, cfg.password) == (3307, "root", "")
