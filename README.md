# shallgit

shallgit is a small version control system for a single directory. It keeps
its history in a `.shallgit` directory next to your files:

- file contents are stored as blobs named by the SHA-1 of their bytes;
- a commit records a message, a local timestamp, its parent's hash and a
  map from file name to blob hash, and is stored as JSON under its own hash;
- a branch is a file holding the hash of the commit it points at, and the
  current branch's name is kept in `branches/head.txt`;
- the staging area (files added and files marked for removal) is kept in
  `staging/stage.txt`;
- every commit made is appended to a global log.

Only regular files directly in the working directory are tracked;
subdirectories are not. A file named `Shallgit` is ignored.

## Installation

```
pip install .
```

This installs the `shallgit` command.

## Usage

Run every command from the directory you want to track.

```
shallgit init                             # create .shallgit with an initial commit on "master"
shallgit add notes.txt                    # stage a file ("." stages every file in the directory)
shallgit commit "first notes"             # record the staged changes on the current branch
shallgit rm notes.txt                     # unstage a file; if tracked, delete it and stage its removal
shallgit log                              # history of the current branch, newest first
shallgit global-log                       # every commit made, oldest first
shallgit find "first notes"               # ids of all commits with exactly that message
shallgit status                           # branches (current one starred), staged and removed files
shallgit branch feature                   # create a branch at the current commit
shallgit checkout feature                 # switch to a branch and make the directory match it
shallgit checkout <commit> -- notes.txt   # restore one file as it was in a commit
shallgit checkout -- notes.txt            # restore one file from the current commit
shallgit rm-branch feature                # delete a branch (not the current one)
shallgit reset <commit>                   # restore a commit's files and move the current branch to it
shallgit merge feature                    # check a branch against the current one (see below)
```

Checking out a branch or resetting writes every file of the target commit and
deletes the other files in the working directory.

All messages, including errors, are printed to standard output and the
command exits with status 0. A command given the wrong number of operands
prints `Incorrect Operands`; an unknown command prints
`No command with that name exists.`; running without a command prints
`Please enter a command.`

## Using it from Python

The same operations are methods of `shallgit.repository.Repository`:

```python
from pathlib import Path
from shallgit.repository import Repository

repo = Repository(Path("."))
print(repo.init())
repo.add("notes.txt")
commit = repo.commit("first notes")
print(commit.own_hash)
print(repo.log(), end="")
```

`init`, `remove_branch`, `reset` and `merge` return the message the command
prints; `log`, `global_log` and `status` return text; `find` returns a list
of commit hashes; `commit` returns the new `shallgit.commit.Commit`. Failures
are raised as `shallgit.repository.ShallgitError`, whose message is what the
command line prints.

The building blocks are available too: `shallgit.commit.Commit` and
`create_commit`, `shallgit.staging.StagingArea`, and the file and hashing
helpers in `shallgit.utils`.

## What it does not do

- `merge` does not combine files or create a merge commit. If the two
  branches share no history it reports `Already up-to-date.`; if the other
  branch is an ancestor of the current one it makes that branch the current
  branch without touching any file and reports `Current branch
  fast-forwarded.`; otherwise it refuses when there are staged changes or an
  untracked file in the way, and on the first conflicting file it writes both
  versions between conflict markers, stages the result and reports
  `Encountered a merge conflict.` When there is no conflict it only reports
  `Merged <branch> into <current>.`
- `status` prints the `Modifications Not Staged For Commit` and
  `Untracked Files` headings but lists nothing under them.
- There is no diff, no remote repositories and no support for
  subdirectories.

## Running the tests

```
pip install .[test]
pytest
```