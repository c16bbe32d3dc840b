"""
Builder for partial ``UPDATE`` statements.

Used where only the fields supplied by the client should be written, e.g.
profile updates. Identifiers are validated and every value is a bound
parameter (``:p1``, ``:p2``, ...), so the result is safe to pass to
``sqlalchemy.text``.
"""

import re
from typing import Any

from sqlalchemy import text
from sqlalchemy.sql.expression import TextClause

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _check_identifier(name: str) -> str:
    if not _IDENTIFIER.match(name):
        raise ValueError(f"Invalid SQL identifier: {name!r}")
    return name


class UpdateBuilder:
    """
    Accumulate ``column = value`` pairs and produce one parameterized statement.

    Usage:
        sql, params = (
            UpdateBuilder("users")
            .set("name", "Bob")
            .where("id", 7)
            .returning("id", "name")
            .build()
        )
        # UPDATE users SET name = :p1 WHERE id = :p2 RETURNING id, name
        # {"p1": "Bob", "p2": 7}
    """

    def __init__(self, table: str):
        self.table = _check_identifier(table)
        self._assignments: list[str] = []
        self._filters: list[str] = []
        self._returning: list[str] = []
        self._params: dict[str, Any] = {}
        self._index = 1

    def _bind(self, value: Any) -> str:
        name = f"p{self._index}"
        self._params[name] = value
        self._index += 1
        return name

    def set(self, column: str, value: Any) -> "UpdateBuilder":
        column = _check_identifier(column)
        self._assignments.append(f"{column} = :{self._bind(value)}")
        return self

    def where(self, column: str, value: Any) -> "UpdateBuilder":
        column = _check_identifier(column)
        self._filters.append(f"{column} = :{self._bind(value)}")
        return self

    def returning(self, *columns: str) -> "UpdateBuilder":
        self._returning.extend(_check_identifier(c) for c in columns)
        return self

    @property
    def is_empty(self) -> bool:
        """True while no column has been set."""
        return not self._assignments

    @property
    def columns(self) -> list[str]:
        return [assignment.split(" = ", 1)[0] for assignment in self._assignments]

    def build(self) -> tuple[str, dict[str, Any]]:
        if self.is_empty:
            raise ValueError("UpdateBuilder needs at least one column to set")

        sql = f"UPDATE {self.table} SET {', '.join(self._assignments)}"
        if self._filters:
            sql += f" WHERE {' AND '.join(self._filters)}"
        if self._returning:
            sql += f" RETURNING {', '.join(self._returning)}"
        return sql, dict(self._params)

    def statement(self) -> tuple[TextClause, dict[str, Any]]:
        """Return the statement as a SQLAlchemy ``text`` clause plus its parameters."""
        sql, params = self.build()
        return text(sql), params
