"""
Parameterized query container and LIKE helpers.

Free text never enters SQL text. It is bound through psycopg2 named
placeholders (%(name)s); LIKE wildcards in user text are escaped with
backslash, PostgreSQL's default LIKE escape character.
"""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class ParameterizedQuery:
    """
    SQL query with parameters. Never string concatenation of user input.
    """
    sql: str
    params: Dict[str, Any] = field(default_factory=dict)
    label: str = ""  # Which phase this query serves, for logging

    def to_dict(self) -> Dict[str, Any]:
        return {
            'sql': self.sql[:200] + '...' if len(self.sql) > 200 else self.sql,
            'params': {k: str(v)[:50] for k, v in self.params.items()},
            'label': self.label,
        }


def escape_like(text: str) -> str:
    """Escape LIKE metacharacters so user text matches literally."""
    if not text:
        return ""
    return (
        text.replace("\\", "\\\\")
        .replace("%", "\\%")
        .replace("_", "\\_")
    )


def contains_pattern(text: str) -> str:
    """Build a %text% pattern for ILIKE substring matches."""
    return f"%{escape_like(text)}%"
