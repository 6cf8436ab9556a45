"""Lightweight stand-ins for documents, for tests that need no database."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta


@dataclass
class Mark:
    student_id: str
    date: date
    present: bool


@dataclass
class StudentStub:
    id: str
    name: str
    class_id: str
    school_id: str = "school-1"


def marks(student_id: str, start: date, pattern: str) -> list[Mark]:
    """Daily marks from a pattern like ``"PPAAA"`` (P present, A absent)."""
    return [
        Mark(student_id=student_id, date=start + timedelta(days=i), present=ch == "P")
        for i, ch in enumerate(pattern)
    ]


class FakeQuery:
    """Chainable stand-in for a Beanie find query."""

    def __init__(self, items):
        self.items = list(items)

    def sort(self, *args):
        return self

    async def to_list(self):
        return self.items


def fake_getter(documents: dict):
    """Async ``Document.get`` replacement looking up ``documents`` by id string."""

    async def get(oid):
        return documents.get(str(oid))

    return get
