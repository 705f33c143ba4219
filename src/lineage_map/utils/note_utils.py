"""Helpers for SQL embedded in table and field notes."""

import re
from typing import List

import sqlglot
from sqlglot.errors import SqlglotError


# ```<tag>\n ... ``` ; every fence is matched so that blocks pair up correctly
FENCED_BLOCK = re.compile(r'```[ \t]*([^\n`]*)\n(.*?)```', re.DOTALL)

# Untagged blocks are treated as SQL
SQL_TAGS = {"", "sql"}


def _is_sql(tag: str) -> bool:
    return tag.strip().lower() in SQL_TAGS


def extract_sql_blocks(note: str) -> List[str]:
    """Return the stripped bodies of ```sql (or untagged) fenced blocks in a note."""
    if not note:
        return []
    return [
        body.strip() for tag, body in FENCED_BLOCK.findall(note)
        if _is_sql(tag) and body.strip()
    ]


def strip_sql_blocks(note: str) -> str:
    """Return the note text with SQL blocks removed; blocks in other languages stay."""
    if not note:
        return ""
    return FENCED_BLOCK.sub(
        lambda match: "" if _is_sql(match.group(1)) else match.group(0),
        note
    ).strip()


def format_sql(sql: str, dialect: str = "trino") -> str:
    """
    Pretty-print SQL with sqlglot.
    
    Args:
        sql: SQL text to format
        dialect: SQL dialect used for parsing and output
        
    Returns:
        Formatted SQL, or the input unchanged when sqlglot cannot parse it
    """
    try:
        statements = sqlglot.transpile(sql, read=dialect, write=dialect, pretty=True)
    except SqlglotError:
        return sql
    return ";\n\n".join(statements) if statements else sql
