"""Tests for env, export and the system information builtins."""

import re

import pytest

from engine.commands.system import CLEAR_SCREEN, DF_TABLE, PS_TABLE
from engine.registry import registry
from tests.fixtures.sessions import create_session, run


class TestEnv:
    def test_lists_variables(self, session):
        assert run(session, "env").split("\n") == [
            "HOME=/home/user",
            "USER=user",
            "PATH=/usr/bin:/usr/local/bin",
            "PWD=/home/user",
        ]

    def test_export_without_arguments_lists_variables(self, session):
        assert run(session, "export") == run(session, "env")


class TestExport:
    def test_sets_variable(self, session):
        assert run(session, "export EDITOR=vim") == ""
        assert session.environment.get("EDITOR") == "vim"

    def test_overwrites_variable(self, session):
        run(session, "export USER=root")
        assert run(session, "whoami") == "root"

    def test_value_may_contain_equals(self, session):
        run(session, "export OPTS=a=b")
        assert session.environment.get("OPTS") == "a=b"

    @pytest.mark.parametrize("assignment", ["FOO", "FOO=", "=bar", "1FOO=bar", "F-O=bar"])
    def test_invalid_assignments(self, session, assignment):
        before = session.environment.as_dict()
        assert run(session, f"export {assignment}") == (
            f"export: '{assignment}': not a valid identifier"
        )
        assert session.environment.as_dict() == before


class TestSystemInfo:
    def test_whoami(self, session):
        assert run(session, "whoami") == "user"

    def test_date_format(self, session):
        assert re.fullmatch(
            r"[A-Z][a-z]{2} [A-Z][a-z]{2} \d{2} \d{2}:\d{2}:\d{2} UTC \d{4}",
            run(session, "date"),
        )

    def test_clear(self, session):
        assert run(session, "clear") == CLEAR_SCREEN

    def test_ps_and_df_are_fixed_tables(self, session):
        assert run(session, "ps") == PS_TABLE
        assert run(session, "df") == DF_TABLE

    def test_history_includes_itself(self, session):
        assert run(session, "pwd", "ls", "history") == (
            "    1  pwd\n    2  ls\n    3  history"
        )


class TestHelpAndMan:
    def test_help_lists_every_command(self, session):
        output = run(session, "help")
        assert output.startswith("Linux Command Reference")
        assert output.endswith("Type 'man <command>' for detailed help on any command.")
        for name in registry.names():
            assert name in output

    def test_help_groups_by_category(self, session):
        output = run(session, "help")
        headings = [line for line in output.split("\n") if line.endswith(":")]
        assert headings == [
            "NAVIGATION:",
            "FILES:",
            "TEXT:",
            "SEARCH:",
            "ENVIRONMENT:",
            "SYSTEM:",
        ]

    def test_man_page(self, session):
        output = run(session, "man ls")
        assert output.startswith("NAME\n    ls - list directory contents")
        assert "SYNOPSIS\n    ls [-a] [-l] [FILE]" in output
        assert "DESCRIPTION" in output

    def test_man_without_argument(self, session):
        assert run(session, "man") == "What manual page do you want?"

    def test_man_unknown_command(self, session):
        assert run(session, "man frob") == "No manual entry for frob"


class TestDuWhich:
    def test_du_totals_bytes_post_order(self, session):
        assert run(session, "du documents") == "161\tdocuments"

    def test_du_nested(self, session):
        lines = run(session, "du projects").split("\n")
        assert lines == ["45\tprojects/game", "45\tprojects"]

    def test_du_summary(self, session):
        assert run(session, "du -s projects") == "45\tprojects"

    def test_du_defaults_to_cwd(self, session):
        assert run(session, "du").split("\n")[-1].endswith("\t.")

    def test_du_file(self, session):
        assert run(session, "du documents/readme.txt") == "82\tdocuments/readme.txt"

    def test_du_missing(self, session):
        assert run(session, "du nope") == "du: cannot access 'nope': No such file or directory"

    def test_which_known_command(self, session):
        assert run(session, "which ls") == "/usr/bin/ls"

    def test_which_unknown_command(self, session):
        assert run(session, "which frob") == "which: no frob in (/usr/bin:/usr/local/bin)"

    def test_which_uses_session_path(self):
        session = create_session(path="/opt/bin")
        assert run(session, "which frob") == "which: no frob in (/opt/bin)"
