import pytest

from shallgit.cli import main
from shallgit.repository import Repository


@pytest.fixture
def repo_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main(["init"]) == 0
    return tmp_path


def _out(capsys):
    return capsys.readouterr().out


def test_no_command(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main([]) == 0
    assert _out(capsys) == "Please enter a command.\n"


def test_unknown_command(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    main(["frobnicate"])
    assert _out(capsys) == "No command with that name exists.\n"


def test_init_with_extra_operand(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    main(["init", "extra"])
    assert _out(capsys) == "Incorrect Operands\n"
    assert not (tmp_path / ".shallgit").exists()


def test_init_creates_repository(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    main(["init"])
    out = _out(capsys)
    assert out.startswith("Initialized an empty shallgit repository in")
    assert (tmp_path / ".shallgit" / "branches" / "master.txt").is_file()


def test_init_twice_reports_existing(repo_dir, capsys):
    _out(capsys)
    main(["init"])
    assert _out(capsys).startswith("A shallgit repository already exists in")


def test_add_missing_file(repo_dir, capsys):
    _out(capsys)
    main(["add", "missing.txt"])
    assert _out(capsys) == "File does not exist.\n"


def test_commit_without_changes(repo_dir, capsys):
    _out(capsys)
    main(["commit", "nothing"])
    assert _out(capsys) == "No changes added to the commit.\n"


def test_add_commit_log(repo_dir, capsys):
    (repo_dir / "a.txt").write_text("one")
    main(["add", "a.txt"])
    main(["commit", "first change"])
    _out(capsys)
    main(["log"])
    out = _out(capsys)
    assert "first change" in out
    assert "initial commit" in out
    assert out.index("first change") < out.index("initial commit")
    head = Repository(repo_dir).current_commit()
    assert f"Commit {head.own_hash}" in out


def test_find_prints_hash(repo_dir, capsys):
    (repo_dir / "a.txt").write_text("one")
    main(["add", "a.txt"])
    main(["commit", "findable"])
    _out(capsys)
    main(["find", "findable"])
    expected = Repository(repo_dir).current_commit().own_hash
    assert _out(capsys) == expected + "\n"


def test_find_nothing(repo_dir, capsys):
    _out(capsys)
    main(["find", "no such message"])
    assert _out(capsys) == "Found no commit\n"


def test_status_marks_current_branch(repo_dir, capsys):
    main(["branch", "dev"])
    (repo_dir / "a.txt").write_text("one")
    main(["add", "a.txt"])
    _out(capsys)
    main(["status"])
    out = _out(capsys)
    assert out.startswith("=== Branches ===\n")
    assert "*master\n" in out
    assert "\ndev\n" in out
    staged = out.split("=== Staged Files ===\n")[1]
    assert staged.startswith("a.txt\n")


def test_checkout_file_from_head(repo_dir, capsys):
    (repo_dir / "a.txt").write_text("one")
    main(["add", "a.txt"])
    main(["commit", "c1"])
    (repo_dir / "a.txt").write_text("two")
    assert main(["checkout", "--", "a.txt"]) == 0
    assert (repo_dir / "a.txt").read_text() == "one"


def test_checkout_file_from_commit(repo_dir, capsys):
    (repo_dir / "a.txt").write_text("one")
    main(["add", "a.txt"])
    main(["commit", "c1"])
    first = Repository(repo_dir).current_commit().own_hash
    (repo_dir / "a.txt").write_text("two")
    main(["add", "a.txt"])
    main(["commit", "c2"])
    main(["checkout", first, "--", "a.txt"])
    assert (repo_dir / "a.txt").read_text() == "one"


def test_checkout_bad_operands(repo_dir, capsys):
    _out(capsys)
    main(["checkout", "a", "b"])
    assert _out(capsys) == "Incorrect Operands\n"


def test_checkout_unknown_branch(repo_dir, capsys):
    _out(capsys)
    main(["checkout", "nowhere"])
    assert _out(capsys) == "No such branch exists.\n"


def test_branch_and_remove(repo_dir, capsys):
    main(["branch", "dev"])
    assert (repo_dir / ".shallgit" / "branches" / "dev.txt").is_file()
    _out(capsys)
    main(["rm-branch", "dev"])
    assert _out(capsys) == "branch:dev removed\n"
    assert not (repo_dir / ".shallgit" / "branches" / "dev.txt").exists()


def test_remove_current_branch(repo_dir, capsys):
    _out(capsys)
    main(["rm-branch", "master"])
    assert _out(capsys) == "Cannot remove the current branch.\n"


def test_reset_restores_files(repo_dir, capsys):
    (repo_dir / "a.txt").write_text("one")
    main(["add", "a.txt"])
    main(["commit", "c1"])
    first = Repository(repo_dir).current_commit().own_hash
    (repo_dir / "b.txt").write_text("bee")
    main(["add", "b.txt"])
    main(["commit", "c2"])
    _out(capsys)
    main(["reset", first])
    assert _out(capsys) == f"reset to commit {first}\n"
    assert not (repo_dir / "b.txt").exists()
    assert Repository(repo_dir).current_commit().own_hash == first


def test_merge_with_itself(repo_dir, capsys):
    _out(capsys)
    main(["merge", "master"])
    assert _out(capsys) == "Cannot merge a branch with itself.\n"


def test_rm_untracked_file(repo_dir, capsys):
    (repo_dir / "loose.txt").write_text("x")
    _out(capsys)
    main(["rm", "loose.txt"])
    assert _out(capsys) == "No reason to remove the file\n"
    assert (repo_dir / "loose.txt").exists()