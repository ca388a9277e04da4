"""Tests for the user management CLI."""

import pytest

from app.cli.user import main


def test_create_and_list(capsys):
    main(["create", "alice", "--password", "s3cret"])
    main(["create", "bob", "-p", "hunter2"])
    main(["list"])

    out = capsys.readouterr().out
    assert "User 'alice' created successfully" in out
    assert "alice" in out.splitlines()[-2]
    assert "bob" in out.splitlines()[-1]


def test_create_duplicate_fails(capsys):
    main(["create", "alice", "-p", "one"])

    with pytest.raises(SystemExit) as exc_info:
        main(["create", "alice", "-p", "two"])

    assert exc_info.value.code == 1
    assert "already exists" in capsys.readouterr().out


def test_reset_unknown_user_fails(capsys):
    main(["init-db"])

    with pytest.raises(SystemExit) as exc_info:
        main(["reset-password", "ghost", "-p", "x"])

    assert exc_info.value.code == 1
    assert "not found" in capsys.readouterr().out


def test_reset_password(capsys):
    main(["create", "alice", "-p", "old"])
    main(["reset-password", "alice", "-p", "new"])

    assert "Password reset for 'alice'" in capsys.readouterr().out


def test_list_empty(capsys):
    main(["list"])

    assert "No users found" in capsys.readouterr().out


def test_command_required():
    with pytest.raises(SystemExit):
        main([])
