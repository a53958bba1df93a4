"""
=====================================
Positional placeholder utilities.
=====================================

Builders render positional ``?`` placeholders. This module locates them with
sqlglot's MySQL tokenizer, so a question mark inside a quoted literal or
identifier ('...', "...", `...`) or inside a comment (-- ..., # ..., /* ... */)
is never treated as a bind.

Functions:
- find_placeholders: Offsets of every ``?`` placeholder in a SQL string
- count_placeholders: Number of placeholders in a SQL string
- to_named_binds: Rewrite ``?`` into ``:p0, :p1, ...`` for sqlalchemy.text()

Usage:
    from querybuilder.placeholders import count_placeholders, to_named_binds

    count_placeholders("age > ? AND name = 'a?b'")   # 1
    count_placeholders("age > ? -- why?")            # 1
    to_named_binds("id = ?", [7])                    # ('id = :p0', {'p0': 7})
"""

from typing import Any, Dict, List, Sequence, Tuple

from sqlglot.dialects.mysql import MySQL
from sqlglot.errors import TokenError
from sqlglot.tokens import TokenType

BIND_PREFIX = 'p'

_DIALECT = MySQL()


def find_placeholders(sql: str) -> List[int]:
    """
    Find the offsets of positional placeholders in SQL text.

    Quoted sections follow MySQL escaping rules (doubled quotes and
    backslash escapes); comments are skipped entirely.

    Args:
        sql: SQL text or condition fragment

    Returns:
        Offsets of each ``?`` in left-to-right order

    Raises:
        ValueError: If the text cannot be tokenized (e.g. an unterminated quote)
    """
    try:
        tokens = _DIALECT.tokenize(sql)
    except TokenError as e:
        raise ValueError(f"Cannot tokenize SQL {sql!r}: {e}") from e

    return [
        token.start for token in tokens
        if token.token_type == TokenType.PLACEHOLDER and token.text == '?'
    ]


def count_placeholders(sql: str) -> int:
    """Count positional placeholders outside quoted sections and comments."""
    return len(find_placeholders(sql))


def to_named_binds(sql: str, params: Sequence[Any]) -> Tuple[str, Dict[str, Any]]:
    """
    Convert positional placeholders to SQLAlchemy named binds.

    Literal colons are escaped (``\\:``) so sqlalchemy.text() does not read
    them as bind names; text() restores them when compiling.

    Args:
        sql: SQL text with ``?`` placeholders
        params: Values in placeholder order

    Returns:
        Tuple of (rewritten SQL, bind dictionary)

    Raises:
        ValueError: If the placeholder count differs from len(params)
    """
    positions = find_placeholders(sql)
    if len(positions) != len(params):
        raise ValueError(
            f"SQL has {len(positions)} placeholder(s) but {len(params)} parameter(s) were given"
        )

    parts = []
    binds = {}
    last = 0
    for index, position in enumerate(positions):
        name = f"{BIND_PREFIX}{index}"
        parts.append(sql[last:position].replace(':', '\\:'))
        parts.append(f":{name}")
        binds[name] = params[index]
        last = position + 1
    parts.append(sql[last:].replace(':', '\\:'))

    return "".join(parts), binds
