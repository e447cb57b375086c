"""Commit objects: a snapshot of tracked files with a message and a parent."""

from __future__ import annotations

import json
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .utils import sha1_hex

_FIELDS = ("message", "blobs", "parent_hash", "datetime", "own_hash")


def current_datetime() -> str:
    """Return the local time formatted as ``YYYY-MM-DD HH:MM:SS``."""
    return time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())


@dataclass
class Commit:
    """A commit; a default instance is the empty commit with no hash."""

    message: str = ""
    blobs: dict[str, str] = field(default_factory=dict)
    parent_hash: str = ""
    datetime: str = ""
    own_hash: str = ""

    def calc_hash(self) -> str:
        """Hash the commit's content, leaving out its own hash."""
        content = {
            "message": self.message,
            "blobs": self.blobs,
            "parent_hash": self.parent_hash,
            "datetime": self.datetime,
            "own_hash": "",
        }
        serialized = json.dumps(content, sort_keys=True, ensure_ascii=False)
        return sha1_hex(serialized.encode("utf-8"))

    def global_log(self) -> str:
        """Return the log entry shown for this commit."""
        return f"====\nCommit {self.own_hash}\n{self.datetime}\n{self.message}\n\n"

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "blobs": dict(self.blobs),
            "parent_hash": self.parent_hash,
            "datetime": self.datetime,
            "own_hash": self.own_hash,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Commit:
        if not isinstance(data, Mapping):
            raise ValueError("commit data must be a mapping")
        missing = [name for name in _FIELDS if name not in data]
        if missing:
            raise ValueError(f"commit data lacks fields: {', '.join(missing)}")
        blobs = data["blobs"]
        if not isinstance(blobs, Mapping) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in blobs.items()
        ):
            raise ValueError("commit blobs must map file names to hashes")
        for name in ("message", "parent_hash", "datetime", "own_hash"):
            if not isinstance(data[name], str):
                raise ValueError(f"commit field {name!r} must be a string")
        return cls(
            message=data["message"],
            blobs=dict(blobs),
            parent_hash=data["parent_hash"],
            datetime=data["datetime"],
            own_hash=data["own_hash"],
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True, ensure_ascii=False)

    @classmethod
    def from_json(cls, text: str) -> Commit:
        return cls.from_dict(json.loads(text))


def create_commit(
    message: str,
    blobs: Mapping[str, str],
    parent_hash: str,
    timestamp: str | None = None,
) -> Commit:
    """Build a commit stamped with ``timestamp`` (default: now) and its hash."""
    commit = Commit(
        message=message,
        blobs=dict(blobs),
        parent_hash=parent_hash,
        datetime=current_datetime() if timestamp is None else timestamp,
    )
    commit.own_hash = commit.calc_hash()
    return commit