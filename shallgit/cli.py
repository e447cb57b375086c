"""Command-line entry point for shallgit."""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence

from .repository import Repository, ShallgitError

_INCORRECT_OPERANDS = "Incorrect Operands"


def _print_text(text: str) -> None:
    print(text, end="")


def _print_lines(lines: Sequence[str]) -> None:
    for line in lines:
        print(line)


def _print_line(text: str) -> None:
    print(text)


def _ignore(_result: object) -> None:
    return None


# command name -> (operand count, action, output handler)
_COMMANDS: dict[
    str, tuple[int, Callable[[Repository, list[str]], object], Callable[[object], None]]
] = {
    "init": (0, lambda repo, ops: repo.init(), _print_line),
    "add": (1, lambda repo, ops: repo.add(ops[0]), _ignore),
    "commit": (1, lambda repo, ops: repo.commit(ops[0]), _ignore),
    "rm": (1, lambda repo, ops: repo.rm(ops[0]), _ignore),
    "log": (0, lambda repo, ops: repo.log(), _print_text),
    "global-log": (0, lambda repo, ops: repo.global_log(), _print_text),
    "find": (1, lambda repo, ops: repo.find(ops[0]), _print_lines),
    "status": (0, lambda repo, ops: repo.status(), _print_text),
    "branch": (1, lambda repo, ops: repo.branch(ops[0]), _ignore),
    "rm-branch": (1, lambda repo, ops: repo.remove_branch(ops[0]), _print_line),
    "reset": (1, lambda repo, ops: repo.reset(ops[0]), _print_line),
    "merge": (1, lambda repo, ops: repo.merge(ops[0]), _print_line),
}


def _checkout_operands(operands: list[str]) -> list[str] | None:
    """Return the arguments for a checkout, or None if they are malformed."""
    if len(operands) == 1:
        return operands
    if len(operands) == 2 and operands[0] == "--":
        return operands
    if len(operands) == 3 and operands[1] == "--":
        return operands
    return None


def main(argv: Sequence[str] | None = None) -> int:
    """Run one shallgit command; messages go to standard output."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print("Please enter a command.")
        return 0

    command, operands = args[0], args[1:]
    try:
        if command == "checkout":
            checkout_args = _checkout_operands(operands)
            if checkout_args is None:
                print(_INCORRECT_OPERANDS)
                return 0
            Repository().checkout(checkout_args)
            return 0

        spec = _COMMANDS.get(command)
        if spec is None:
            print("No command with that name exists.")
            return 0
        arity, action, output = spec
        if len(operands) != arity:
            print(_INCORRECT_OPERANDS)
            return 0
        output(action(Repository(), operands))
    except ShallgitError as error:
        print(error)
    return 0


if __name__ == "__main__":
    sys.exit(main())