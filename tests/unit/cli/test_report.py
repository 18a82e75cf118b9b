"""
Unit tests for tradelens.cli commands.

Tests cover:
- report command over a CSV export (all time, capital override, direction and status filters)
- JSON output
- Error handling for malformed rows and missing files
- --config file handling
- ranges command and --version
"""

import json

import pytest
from click.testing import CliRunner

from tradelens import __version__
from tradelens.cli.main import main
from tradelens.system import LoggerFactory

JOURNAL_CSV = """Trade Title,Date,Direction,Security,Session,Model,PnL,Win
EU breakout,2025-03-10 14:30,Long,EURUSD,NY,Breakout,10,Yes
GU fade,2025-03-11 09:15,Short,GBPUSD,LO,Fade,-4,No
"""


@pytest.fixture
def cli_runner():
    """Fixture providing Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Run from an empty directory so no system.yaml is picked up."""
    monkeypatch.delenv("TRADELENS_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    LoggerFactory.reset()


@pytest.fixture
def journal_file(tmp_path):
    """Fixture providing a two-trade journal export."""
    path = tmp_path / "journal.csv"
    path.write_text(JOURNAL_CSV, encoding="utf-8")
    return path


class TestReportCommand:
    """Test the report command."""

    def test_all_time_report(self, cli_runner, journal_file):
        """Report over the whole file prints summary and breakdowns."""
        result = cli_runner.invoke(main, ["report", "--file", str(journal_file), "--range", "all"])

        assert result.exit_code == 0, result.output
        assert "All Time" in result.output
        assert "$106.00" in result.output
        assert "Breakout" in result.output
        assert "New York" in result.output

    def test_capital_override(self, cli_runner, journal_file):
        """--capital replaces the configured starting capital."""
        result = cli_runner.invoke(main, ["report", "-f", str(journal_file), "-r", "all", "-c", "1000"])

        assert result.exit_code == 0, result.output
        assert "$1,006.00" in result.output

    def test_direction_filter(self, cli_runner, journal_file):
        """--direction keeps only matching trades."""
        result = cli_runner.invoke(
            main, ["report", "-f", str(journal_file), "-r", "all", "--direction", "short"]
        )

        assert result.exit_code == 0, result.output
        assert "Fade" in result.output
        assert "Breakout" not in result.output

    def test_default_range_with_old_trades(self, cli_runner, journal_file):
        """The default 7-day window excludes old trades."""
        result = cli_runner.invoke(main, ["report", "-f", str(journal_file)])

        assert result.exit_code == 0, result.output
        assert "No trades in the selected range." in result.output

    def test_status_filter(self, cli_runner, tmp_path):
        """--status keeps only trades in that state."""
        trades = tmp_path / "status.csv"
        trades.write_text(
            "id,entry_date,direction,strategy,status,pnl,is_winner\n"
            "t1,2025-03-10 14:30,LONG,Breakout,closed,10,true\n"
            "t2,2025-03-11 09:15,SHORT,Fade,open,,\n"
        )

        result = cli_runner.invoke(main, ["report", "-f", str(trades), "-r", "all", "--status", "closed"])

        assert result.exit_code == 0, result.output
        assert "Breakout" in result.output
        assert "Fade" not in result.output

    def test_json_output(self, cli_runner, journal_file, tmp_path):
        """--json writes the report file."""
        output = tmp_path / "out" / "report.json"

        result = cli_runner.invoke(
            main, ["report", "-f", str(journal_file), "-r", "all", "-d", "session", "--json", str(output)]
        )

        assert result.exit_code == 0, result.output
        data = json.loads(output.read_text())
        assert data["summary"]["total_trades"] == 2
        assert list(data["breakdowns"]) == ["session"]

    def test_strategy_names_file(self, cli_runner, tmp_path):
        """--strategies maps ids in the export to display names."""
        trades = tmp_path / "ids.csv"
        trades.write_text("id,entry_date,direction,strategy,pnl,is_winner\nt1,2025-03-10 14:30,LONG,s-1,5,true\n")
        names = tmp_path / "names.csv"
        names.write_text("id,name\ns-1,London Sweep\n")

        result = cli_runner.invoke(
            main, ["report", "-f", str(trades), "-r", "all", "--strategies", str(names)]
        )

        assert result.exit_code == 0, result.output
        assert "London Sweep" in result.output

    def test_malformed_row_fails(self, cli_runner, tmp_path):
        """Bad rows abort with exit code 1 and the row number."""
        bad = tmp_path / "bad.csv"
        bad.write_text("Date,Direction,PnL\n2025-03-10,Long,abc\n")

        result = cli_runner.invoke(main, ["report", "-f", str(bad), "-r", "all"])

        assert result.exit_code == 1
        assert "Report failed" in result.output
        assert "Row 2" in result.output

    def test_missing_file(self, cli_runner, tmp_path):
        """Click rejects a file that does not exist."""
        result = cli_runner.invoke(main, ["report", "-f", str(tmp_path / "nope.csv")])

        assert result.exit_code == 2
        assert "does not exist" in result.output

    def test_config_file(self, cli_runner, journal_file, tmp_path):
        """--config supplies defaults for range, capital and dimensions."""
        config = tmp_path / "system.yaml"
        config.write_text(
            """
analytics:
  starting_capital: 500
  default_time_range: all
  dimensions: [direction]
"""
        )

        result = cli_runner.invoke(main, ["report", "-f", str(journal_file), "--config", str(config)])

        assert result.exit_code == 0, result.output
        assert "$506.00" in result.output
        assert "Long vs Short" in result.output
        assert "Strategy Performance" not in result.output

    def test_options_override_config_file(self, cli_runner, journal_file, tmp_path):
        """--capital and --dimension take precedence over system.yaml."""
        config = tmp_path / "system.yaml"
        config.write_text("analytics:\n  starting_capital: 500\n  dimensions: [direction]\n")

        result = cli_runner.invoke(
            main,
            ["report", "-f", str(journal_file), "-r", "all", "--config", str(config), "-c", "50", "-d", "session"],
        )

        assert result.exit_code == 0, result.output
        assert "$56.00" in result.output
        assert "Session Performance" in result.output
        assert "Long vs Short" not in result.output


class TestOtherCommands:
    """Test ranges command and version option."""

    def test_ranges(self, cli_runner):
        """All range tokens are listed."""
        result = cli_runner.invoke(main, ["ranges"])

        assert result.exit_code == 0
        for token in ["today", "yesterday", "3days", "7days", "30days", "60days", "all"]:
            assert token in result.output

    def test_version(self, cli_runner):
        """--version prints the package version."""
        result = cli_runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output
