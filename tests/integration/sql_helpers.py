"""Helpers for applying SQL migration files in integration tests."""

from __future__ import annotations

import re
from pathlib import Path

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

MIGRATIONS_DIR = Path(__file__).resolve().parents[2] / "migrations"

_DOLLAR_TAG = re.compile(r"\$[A-Za-z0-9_]*\$")


def split_sql_statements(sql: str) -> list[str]:
    """Split a script on top-level semicolons, keeping $$-quoted bodies intact."""
    statements: list[str] = []
    start = 0
    pos = 0
    open_tag: str | None = None

    while pos < len(sql):
        if sql[pos] == "$":
            match = _DOLLAR_TAG.match(sql, pos)
            if match:
                tag = match.group(0)
                if open_tag is None:
                    open_tag = tag
                elif tag == open_tag:
                    open_tag = None
                pos = match.end()
                continue
        if sql[pos] == ";" and open_tag is None:
            statements.append(sql[start:pos])
            start = pos + 1
        pos += 1

    statements.append(sql[start:])
    return [s for s in statements if _has_sql(s)]


def _has_sql(statement: str) -> bool:
    return any(
        line.strip() and not line.strip().startswith("--")
        for line in statement.splitlines()
    )


async def execute_sql_file(session: AsyncSession, path: Path) -> None:
    """Execute every statement of a SQL file in the session's transaction."""
    for statement in split_sql_statements(path.read_text()):
        await session.execute(text(statement))


async def apply_migrations(session: AsyncSession) -> None:
    """Apply migrations/*.sql in filename order."""
    for path in sorted(MIGRATIONS_DIR.glob("*.sql")):
        await execute_sql_file(session, path)
