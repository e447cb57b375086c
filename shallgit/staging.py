"""The staging area: files added for, or removed from, the next commit."""

from __future__ import annotations

import json
from dataclasses import dataclass, field


@dataclass
class StagingArea:
    """Pending additions (file name to blob hash) and removals."""

    added: dict[str, str] = field(default_factory=dict)
    removed: list[str] = field(default_factory=list)

    def add(self, filename: str, sha1: str) -> None:
        """Stage ``filename`` with blob hash ``sha1``, replacing any earlier entry."""
        self.added[filename] = sha1

    def add_removed(self, filename: str) -> None:
        """Mark ``filename`` for removal in the next commit."""
        self.removed.append(filename)

    def unstage(self, filename: str) -> bool:
        """Drop ``filename`` from the additions; return whether it was staged."""
        return self.added.pop(filename, None) is not None

    def clear(self) -> None:
        self.added.clear()
        self.removed.clear()

    def is_empty(self) -> bool:
        return not self.added and not self.removed

    def to_json(self) -> str:
        return json.dumps(
            {"added": self.added, "removed": self.removed},
            sort_keys=True,
            ensure_ascii=False,
        )

    @classmethod
    def from_json(cls, text: str) -> StagingArea:
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("staging data must be an object")
        added = data.get("added", {})
        removed = data.get("removed", [])
        if not isinstance(added, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in added.items()
        ):
            raise ValueError("staged additions must map file names to hashes")
        if not isinstance(removed, list) or not all(isinstance(n, str) for n in removed):
            raise ValueError("staged removals must be a list of file names")
        return cls(added=dict(added), removed=list(removed))