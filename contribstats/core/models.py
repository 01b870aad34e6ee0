"""
Record types shared by sources, readers and the service

These dataclasses describe raw contributions and the typed projection of a
grouped MAX query.
"""

from dataclasses import dataclass, replace
from typing import Any


@dataclass
class Contribution:
    """A single team contribution, before any grouping"""

    team_name: str | None
    category: str | None
    value: int | float | None
    id: int | None = None

    def with_id(self, new_id: int) -> "Contribution":
        """Return a copy carrying the given id"""
        return replace(self, id=new_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "team_name": self.team_name,
            "category": self.category,
            "value": self.value,
        }

    @staticmethod
    def from_dict(record: dict[str, Any]) -> "Contribution":
        """
        Build a contribution from a loosely-typed record

        Accepts ``team_name``, ``teamName`` or ``team`` for the team field.
        Missing fields become None. Values are kept as read; grouping
        ignores the ones that are not numbers.

        Args:
            record: Dictionary read from a file or an API payload

        Returns:
            Contribution instance
        """
        team = record.get("team_name", record.get("teamName", record.get("team")))
        record_id = record.get("id")
        # Ids that are not plain integers are reassigned on save
        if isinstance(record_id, bool) or not isinstance(record_id, int):
            record_id = None
        return Contribution(
            team_name=team,
            category=record.get("category"),
            value=record.get("value"),
            id=record_id,
        )


@dataclass(frozen=True)
class CategoryMax:
    """Typed projection of a MAX-per-category row"""

    category: str | None
    max_value: int | None

    def __repr__(self) -> str:
        return f"CategoryMax({self.category}={self.max_value})"
