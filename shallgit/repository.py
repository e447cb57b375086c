"""The repository: blobs, commits, branches and the staging area on disk."""

from __future__ import annotations

import os
from collections.abc import Iterator, Sequence
from pathlib import Path

from .commit import Commit, create_commit
from .staging import StagingArea
from .utils import read_bytes, read_text, sha1_hex, write_bytes, write_text

REPO_DIR = ".shallgit"
_IGNORED_NAMES = frozenset({REPO_DIR, "Shallgit"})
_HEAD_FILE = "head.txt"


class ShallgitError(Exception):
    """Raised when a repository command cannot be carried out."""


class Repository:
    """A shallgit repository rooted at a working directory."""

    def __init__(self, working_dir: str | os.PathLike | None = None) -> None:
        self.working_dir = Path.cwd() if working_dir is None else Path(working_dir)
        self.stage = self._load_stage()

    # ----- locations -------------------------------------------------------

    @property
    def repo_dir(self) -> Path:
        return self.working_dir / REPO_DIR

    @property
    def _blobs_dir(self) -> Path:
        return self.repo_dir / "blobs"

    @property
    def _commits_dir(self) -> Path:
        return self.repo_dir / "commits"

    @property
    def _branches_dir(self) -> Path:
        return self.repo_dir / "branches"

    @property
    def _stage_file(self) -> Path:
        return self.repo_dir / "staging" / "stage.txt"

    @property
    def _global_log_file(self) -> Path:
        return self.repo_dir / "global-log" / "gl.txt"

    def _branch_file(self, branch_name: str) -> Path:
        return self._branches_dir / f"{branch_name}.txt"

    def _commit_file(self, commit_hash: str) -> Path:
        return self._commits_dir / f"{commit_hash}.txt"

    def _blob_file(self, blob_hash: str) -> Path:
        return self._blobs_dir / f"{blob_hash}.txt"

    @property
    def head(self) -> str:
        """Name of the current branch."""
        return read_text(self._branches_dir / _HEAD_FILE)

    def _set_head(self, branch_name: str) -> None:
        write_text(self._branches_dir / _HEAD_FILE, branch_name, True)

    def _require_repo(self) -> None:
        if not self.repo_dir.is_dir():
            raise ShallgitError("Not in an initialized shallgit directory.")

    def _working_files(self) -> Iterator[str]:
        """Names of the regular files in the working directory, sorted."""
        for entry in sorted(self.working_dir.iterdir()):
            if (
                entry.is_file()
                and entry.name not in _IGNORED_NAMES
                and entry.suffix != REPO_DIR
            ):
                yield entry.name

    # ----- persistence -----------------------------------------------------

    def _load_stage(self) -> StagingArea:
        if self._stage_file.is_file():
            return StagingArea.from_json(read_text(self._stage_file))
        return StagingArea()

    def save_stage(self) -> None:
        """Write the staging area to disk."""
        write_text(self._stage_file, self.stage.to_json(), True)

    def save_commit(self, commit: Commit) -> None:
        """Store ``commit`` under its own hash."""
        write_text(self._commit_file(commit.own_hash), commit.to_json(), True)

    def load_commit(self, commit_hash: str) -> Commit:
        """Load a commit by hash; an empty commit if there is none."""
        if not commit_hash:
            return Commit()
        path = self._commit_file(commit_hash)
        if not path.is_file():
            return Commit()
        return Commit.from_json(read_text(path))

    def current_commit(self) -> Commit:
        """The commit the current branch points at."""
        return self.load_commit(read_text(self._branch_file(self.head)))

    def _record(self, commit: Commit) -> None:
        self.save_commit(commit)
        write_text(self._global_log_file, commit.global_log(), False)

    # ----- commands --------------------------------------------------------

    def init(self) -> str:
        """Create an empty repository with an initial commit on ``master``."""
        if self.repo_dir.exists():
            raise ShallgitError(
                f"A shallgit repository already exists in {self.repo_dir.resolve()}"
            )
        for directory in (
            self._blobs_dir,
            self._commits_dir,
            self._branches_dir,
            self._stage_file.parent,
            self._global_log_file.parent,
        ):
            directory.mkdir(parents=True, exist_ok=True)
        write_text(self._global_log_file, "", True)

        initial = create_commit("initial commit", {}, "")
        self._record(initial)
        write_text(self._branch_file("master"), initial.own_hash, True)
        self._set_head("master")

        self.stage = StagingArea()
        self.save_stage()
        return f"Initialized an empty shallgit repository in {self.repo_dir.resolve()}"

    def add(self, file_name: str) -> None:
        """Stage a file, or every file in the working directory for ``"."``."""
        self._require_repo()
        if file_name == ".":
            for name in self._working_files():
                self.add(name)
            return
        path = self.working_dir / file_name
        if not path.exists():
            raise ShallgitError("File does not exist.")
        contents = read_bytes(path)
        blob_hash = sha1_hex(contents)
        blob_path = self._blob_file(blob_hash)
        if not blob_path.exists():
            write_bytes(blob_path, contents)
        self.stage.add(file_name, blob_hash)
        self.save_stage()

    def commit(self, message: str) -> Commit:
        """Record the staged changes as a new commit on the current branch."""
        self._require_repo()
        if self.stage.is_empty():
            raise ShallgitError("No changes added to the commit.")
        if not message:
            raise ShallgitError("Please enter commit msg.")
        current = self.current_commit()
        blobs = dict(current.blobs)
        blobs.update(self.stage.added)
        for name in self.stage.removed:
            blobs.pop(name, None)

        new_commit = create_commit(message, blobs, current.own_hash)
        self._record(new_commit)
        write_text(self._branch_file(self.head), new_commit.own_hash, True)

        self.stage.clear()
        self.save_stage()
        return new_commit

    def rm(self, file_name: str) -> None:
        """Unstage a file, and if it is tracked, delete it and mark it removed."""
        self._require_repo()
        is_staged = file_name in self.stage.added
        is_tracked = file_name in self.current_commit().blobs
        if is_tracked:
            (self.working_dir / file_name).unlink(missing_ok=True)
            self.stage.add_removed(file_name)
            self.stage.unstage(file_name)
        elif is_staged:
            self.stage.unstage(file_name)
        else:
            raise ShallgitError("No reason to remove the file")
        self.save_stage()

    def log(self) -> str:
        """History of the current branch, newest commit first."""
        self._require_repo()
        return "".join(
            self.load_commit(commit_hash).global_log()
            for commit_hash in self.ancestors(self.current_commit())
        )

    def global_log(self) -> str:
        """Every commit ever made, in the order they were made."""
        self._require_repo()
        return read_text(self._global_log_file)

    def find(self, message: str) -> list[str]:
        """Hashes of all commits whose message equals ``message``."""
        self._require_repo()
        found = []
        for path in sorted(self._commits_dir.iterdir()):
            commit = Commit.from_json(read_text(path))
            if commit.message == message:
                found.append(commit.own_hash)
        if not found:
            raise ShallgitError("Found no commit")
        return found

    def status(self) -> str:
        """Branches, staged files and removed files, as text."""
        self._require_repo()
        current = self.head
        branches = sorted(
            path.stem
            for path in self._branches_dir.iterdir()
            if path.name != _HEAD_FILE and path.suffix == ".txt"
        )
        lines = ["=== Branches ==="]
        lines.extend(f"*{name}" if name == current else name for name in branches)
        lines.append("")
        lines.append("=== Staged Files ===")
        lines.extend(sorted(self.stage.added))
        lines.append("")
        lines.append("=== Removed Files ===")
        lines.extend(sorted(self.stage.removed))
        lines.append("")
        lines.append("=== Modifications Not Staged For Commit ===")
        lines.append("")
        lines.append("=== Untracked Files ===")
        return "\n".join(lines) + "\n"

    def checkout(self, args: Sequence[str]) -> None:
        """Check out a branch, ``[commit, "--", file]`` or ``["--", file]``."""
        self._require_repo()
        args = list(args)
        if len(args) == 1:
            self._checkout_branch(args[0])
        elif len(args) == 3 and args[1] == "--":
            commit = self.load_commit(args[0])
            if not commit.own_hash:
                raise ShallgitError("No commit with that id exists.")
            self.checkout_file(commit, args[2])
        elif len(args) == 2 and args[0] == "--":
            self.checkout_file(self.current_commit(), args[1])
        else:
            raise ShallgitError("incorrect operands")

    def _checkout_branch(self, branch_name: str) -> None:
        branch_path = self._branch_file(branch_name)
        if branch_name == "head" or not branch_path.is_file():
            raise ShallgitError("No such branch exists.")
        commit = self.load_commit(read_text(branch_path))
        self._restore(commit)
        self._set_head(branch_name)

    def _restore(self, commit: Commit) -> None:
        """Make the working directory hold exactly the files of ``commit``."""
        for name in commit.blobs:
            self.checkout_file(commit, name)
        for name in list(self._working_files()):
            if name not in commit.blobs:
                (self.working_dir / name).unlink()

    def checkout_file(self, commit: Commit, file_name: str) -> None:
        """Write the version of ``file_name`` stored in ``commit``."""
        try:
            blob_hash = commit.blobs[file_name]
        except KeyError:
            raise ShallgitError("File does not exist in that commit.") from None
        write_bytes(self.working_dir / file_name, read_bytes(self._blob_file(blob_hash)))

    def branch(self, branch_name: str) -> None:
        """Create a branch pointing at the current commit."""
        self._require_repo()
        branch_path = self._branch_file(branch_name)
        if branch_name == "head" or branch_path.exists():
            raise ShallgitError("a branch with that name is already exists")
        write_text(branch_path, read_text(self._branch_file(self.head)), True)

    def remove_branch(self, branch_name: str) -> str:
        """Delete a branch pointer; the current branch cannot be removed."""
        self._require_repo()
        if branch_name == self.head:
            raise ShallgitError("Cannot remove the current branch.")
        branch_path = self._branch_file(branch_name)
        if branch_name == "head" or not branch_path.is_file():
            raise ShallgitError("a branch with that name does not exist.")
        branch_path.unlink()
        return f"branch:{branch_name} removed"

    def reset(self, commit_id: str) -> str:
        """Restore the files of a commit and move the current branch to it."""
        self._require_repo()
        commit = self.load_commit(commit_id)
        if not commit.own_hash:
            raise ShallgitError("NO commit with that id.")
        self._restore(commit)
        write_text(self._branch_file(self.head), commit_id, True)
        return f"reset to commit {commit_id}"

    def ancestors(self, commit: Commit) -> list[str]:
        """Hashes of ``commit`` and all its ancestors, nearest first."""
        lineage = []
        commit_hash = commit.own_hash
        while commit_hash and commit_hash not in lineage:
            lineage.append(commit_hash)
            commit_hash = self.load_commit(commit_hash).parent_hash
        return lineage

    def find_split_point(self, current: Commit, other: Commit) -> Commit:
        """The nearest common ancestor, or an empty commit if there is none."""
        other_ancestors = set(self.ancestors(other))
        for commit_hash in self.ancestors(current):
            if commit_hash in other_ancestors:
                return self.load_commit(commit_hash)
        return Commit()

    def merge(self, branch_name: str) -> str:
        """Check whether ``branch_name`` merges into the current branch."""
        self._require_repo()
        current_branch = self.head
        if current_branch == branch_name:
            raise ShallgitError("Cannot merge a branch with itself.")
        branch_path = self._branch_file(branch_name)
        if branch_name == "head" or not branch_path.is_file():
            raise ShallgitError("A branch with that name does not exist.")

        current = self.current_commit()
        other = self.load_commit(read_text(branch_path))
        split = self.find_split_point(current, other)
        if not split.own_hash:
            return "Already up-to-date."
        if split.own_hash == other.own_hash:
            self._set_head(branch_name)
            return "Current branch fast-forwarded."

        if not self.stage.is_empty():
            raise ShallgitError("You have uncommitted changes.")
        for name in self._working_files():
            if name not in current.blobs and name not in other.blobs:
                raise ShallgitError(
                    "There is an untracked file in the way; "
                    "delete it, or add and commit it first."
                )

        for name, current_blob in current.blobs.items():
            branch_blob = other.blobs.get(name, "")
            split_blob = split.blobs.get(name, "")
            if current_blob not in (branch_blob, split_blob) and branch_blob != split_blob:
                self.handle_conflict(name, current_blob, branch_blob)
                return "Encountered a merge conflict."

        return f"Merged {branch_name} into {current_branch}."

    def _blob_contents(self, blob_hash: str) -> bytes:
        return read_bytes(self._blob_file(blob_hash)) if blob_hash else b""

    def handle_conflict(self, file_name: str, current_blob: str, branch_blob: str) -> None:
        """Write both versions of a file between conflict markers and stage it."""
        data = (
            b"<<<<<<< head\n"
            + self._blob_contents(current_blob)
            + b"=======\n"
            + self._blob_contents(branch_blob)
            + b">>>>>>>\n"
        )
        write_bytes(self.working_dir / file_name, data)
        blob_hash = sha1_hex(data)
        if not self._blob_file(blob_hash).exists():
            write_bytes(self._blob_file(blob_hash), data)
        self.stage.add(file_name, blob_hash)
        self.save_stage()