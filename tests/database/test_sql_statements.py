from pathlib import Path

from src.school_reports.school_reports.database.bootstrap import iter_sql_statements

DATABASE_DIR = Path(__file__).resolve().parents[2] / "database"


def test_split_ignores_semicolons_in_quotes_and_comments():
    sql = """
    -- comment; with a semicolon
    INSERT INTO t VALUES ('a;b', "c;d");
    SELECT 1;  -- trailing
    SELECT 'it''s';
    """

    stmts = list(iter_sql_statements(sql))

    assert stmts == [
        "INSERT INTO t VALUES ('a;b', \"c;d\")",
        "SELECT 1",
        "SELECT 'it''s'",
    ]


def test_statement_without_final_semicolon_is_kept():
    assert list(iter_sql_statements("SELECT 1; SELECT 2")) == ["SELECT 1", "SELECT 2"]


def test_schema_creates_every_table():
    sql = (DATABASE_DIR / "schema.sql").read_text(encoding="utf-8")
    creates = [s for s in iter_sql_statements(sql) if s.upper().startswith("CREATE TABLE")]

    names = {s.split()[5] for s in creates}

    assert names == {"students", "arrival_records", "fault_types", "incidents", "system_config"}
