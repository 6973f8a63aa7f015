"""
Placeholder translation.

Statements in this codebase are written with the generic positional marker
"?". Drivers that want something else get a rewritten copy:

    to_numbered("SELECT * FROM t WHERE a = ? AND b = ?")
    -> "SELECT * FROM t WHERE a = $1 AND b = $2"      (asyncpg)

    to_format("SELECT * FROM t WHERE a = ? AND b LIKE 'x%'")
    -> "SELECT * FROM t WHERE a = %s AND b LIKE 'x%%'"  (aiomysql / PyMySQL)

Counting is strictly sequential: a "?" inside a string literal is a marker too.
"""

import itertools

MARKER = "?"


def count_markers(statement: str) -> int:
    return statement.count(MARKER)


def to_numbered(statement: str, prefix: str = "$") -> str:
    """Replace the Kth marker with prefix + K, starting at 1."""
    counter = itertools.count(1)
    return "".join(
        f"{prefix}{next(counter)}" if char == MARKER else char
        for char in statement
    )


def to_format(statement: str) -> str:
    """Rewrite markers as %s and escape literal percent signs."""
    return statement.replace("%", "%%").replace(MARKER, "%s")
