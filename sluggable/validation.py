"""Declarative uniqueness rule for slug columns."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy import column, select, table
from sqlalchemy.engine import Connection
from sqlalchemy.orm import Session


@dataclass(frozen=True, slots=True)
class UniqueRule:
    """``column`` must be unique in ``table``, optionally ignoring one row by key."""

    table: str
    column: str
    ignore: Any = None
    ignore_column: str = "id"

    def __str__(self) -> str:
        rule = f"unique:{self.table},{self.column}"
        if self.ignore is not None:
            rule += f",{self.ignore},{self.ignore_column}"
        return rule

    def passes(self, bind: Session | Connection, value: Any) -> bool:
        """Return ``True`` when no other row already holds ``value``."""

        target = table(self.table, column(self.column), column(self.ignore_column))
        stmt = select(target.c[self.ignore_column]).where(target.c[self.column] == value)
        if self.ignore is not None:
            stmt = stmt.where(target.c[self.ignore_column] != self.ignore)
        return bind.execute(stmt.limit(1)).first() is None
