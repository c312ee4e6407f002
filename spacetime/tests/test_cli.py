"""
Tests for the command-line interface.
"""

import json

import pytest

from ..cli import main


class TestDemoCommand:
    """Tests for `spacetime demo`."""

    def test_prints_turns(self, capsys):
        """Each resolved turn gets a header and the final summary line."""
        main(["demo", "--turns", "2", "--seed", "3"])
        out = capsys.readouterr().out

        assert "Starter scenario, seed 3" in out
        assert "=== Turn 1 ===" in out
        assert "=== Turn 2 ===" in out
        assert "Turn 3:" in out

    def test_json_snapshot(self, capsys):
        """--json prints the final snapshot."""
        main(["demo", "--turns", "2", "--seed", "3", "--json"])
        snapshot = json.loads(capsys.readouterr().out)

        assert snapshot["turn"] == 3
        assert len(snapshot["colonies"]) == 3

    def test_same_seed_same_output(self, capsys):
        """The demo is reproducible."""
        main(["demo", "--turns", "3", "--seed", "9", "--json"])
        first = capsys.readouterr().out
        main(["demo", "--turns", "3", "--seed", "9", "--json"])
        assert capsys.readouterr().out == first

    def test_rejects_zero_turns(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["demo", "--turns", "0"])
        assert exc_info.value.code == 1
        assert "--turns must be at least 1" in capsys.readouterr().out


def test_no_command_prints_help(capsys):
    """Without a subcommand the help is shown and the exit code is 1."""
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 1
    assert "usage: spacetime" in capsys.readouterr().out
