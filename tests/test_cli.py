"""Tests for the command-line interface."""

import csv
import json

import pytest
from click.testing import CliRunner

from pygnss_obs import __version__
from pygnss_obs.cli import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestParseCommand:
    """Test 'pygnss-obs parse'."""

    def test_summary(self, runner, write_rinex, v3_lines):
        """Test the default summary output."""
        path = write_rinex(v3_lines)
        result = runner.invoke(cli, ["parse", str(path)], obj={})

        assert result.exit_code == 0
        assert "RINEX Version:     3" in result.output
        assert "Epochs:            2" in result.output
        assert "C1C L1C L2W C2W" in result.output

    def test_csv_to_file(self, runner, write_rinex, v3_lines, tmp_path):
        path = write_rinex(v3_lines)
        out = tmp_path / "out" / "algo.csv"
        result = runner.invoke(
            cli, ["parse", str(path), "--format", "csv", "--output", str(out)], obj={}
        )

        assert result.exit_code == 0
        assert "Wrote 4 rows" in result.output
        with open(out, newline="") as f:
            rows = list(csv.reader(f))
        assert rows[0] == ["time", "event_flag", "satellite", "C1C", "L1C"]
        assert rows[1] == [
            "2024-01-15T00:00:00.0000000", "0", "G03", "21000000.123", "110355000.456",
        ]
        assert len(rows) == 5

    def test_csv_to_stdout(self, runner, write_rinex, v2_lines):
        path = write_rinex(v2_lines)
        result = runner.invoke(cli, ["parse", str(path), "-f", "csv"], obj={})

        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines[0] == "time,event_flag,satellite,L1,L2"
        assert "G12" in lines[3]

    def test_json_to_file(self, runner, write_rinex, v2_lines, tmp_path):
        path = write_rinex(v2_lines)
        out = tmp_path / "algo.json"
        result = runner.invoke(
            cli, ["parse", str(path), "-f", "json", "-o", str(out)], obj={}
        )

        assert result.exit_code == 0
        data = json.loads(out.read_text())
        assert data["rinex_version"] == "2"
        assert data["obs_types"] == ["L1", "L2", "C1", "P2"]
        assert len(data["epochs"]) == 2
        assert data["epochs"][0]["measurements"]["G07"] == [115000000.0, 89000000.0]

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["parse", str(tmp_path / "nope.24o")], obj={})

        assert result.exit_code == 1
        assert "Error [FileNotFound]" in result.output

    def test_parse_error_kind_reported(self, runner, write_rinex, v3_lines):
        path = write_rinex(v3_lines[:6])
        result = runner.invoke(cli, ["parse", str(path)], obj={})

        assert result.exit_code == 1
        assert "Error [NoEpochs]" in result.output

    def test_invalid_format(self, runner, write_rinex, v3_lines):
        path = write_rinex(v3_lines)
        result = runner.invoke(cli, ["parse", str(path), "-f", "xml"], obj={})
        assert result.exit_code != 0


class TestHeaderCommand:
    """Test 'pygnss-obs header'."""

    def test_header(self, runner, write_rinex, v3_lines):
        path = write_rinex(v3_lines)
        result = runner.invoke(cli, ["header", str(path)], obj={})

        assert result.exit_code == 0
        assert "RINEX version: 3.04" in result.output
        assert "Obs types (4): C1C L1C L2W C2W" in result.output
        assert "Skipped systems: R" in result.output

    def test_header_without_data(self, runner, write_rinex, v2_lines):
        """The header command does not need epochs."""
        path = write_rinex(v2_lines[:5])
        result = runner.invoke(cli, ["header", str(path)], obj={})

        assert result.exit_code == 0
        assert "Obs types (4): L1 L2 C1 P2" in result.output

    def test_header_error(self, runner, write_rinex, v3_lines):
        path = write_rinex(v3_lines[:3])
        result = runner.invoke(cli, ["header", str(path)], obj={})

        assert result.exit_code == 1
        assert "Error [MissingHeader]" in result.output

    def test_header_missing_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["header", str(tmp_path / "nope.24o")], obj={})

        assert result.exit_code == 1
        assert "Error [FileNotFound]" in result.output

    def test_header_undecodable_file(self, runner, tmp_path, v3_lines):
        """Strict decoding failures are reported with the reader's error kind."""
        config = tmp_path / "settings.yaml"
        config.write_text("parser:\n  encoding_errors: strict\n")
        lines = list(v3_lines)
        lines[1] = "ALG\xe9"
        path = tmp_path / "latin.rnx"
        path.write_bytes(("\n".join(lines) + "\n").encode("latin-1"))
        result = runner.invoke(
            cli, ["--config", str(config), "header", str(path)], obj={}
        )

        assert result.exit_code == 1
        assert "Error [FileNotFound]: Cannot decode" in result.output


class TestGlobalOptions:
    """Test group-level options."""

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_config_file(self, runner, write_rinex, v2_lines, tmp_path):
        config = tmp_path / "settings.yaml"
        config.write_text("parser:\n  year_pivot: 20\n")
        path = write_rinex(v2_lines)
        out = tmp_path / "algo.json"
        result = runner.invoke(
            cli,
            ["--config", str(config), "parse", str(path), "-f", "json", "-o", str(out)],
            obj={},
        )

        assert result.exit_code == 0
        data = json.loads(out.read_text())
        assert data["epochs"][0]["time"].startswith("1924-01-15")

    def test_invalid_config_file(self, runner, write_rinex, v2_lines, tmp_path):
        config = tmp_path / "settings.yaml"
        config.write_text("logging:\n  level: LOUD\n")
        result = runner.invoke(
            cli, ["--config", str(config), "parse", str(write_rinex(v2_lines))], obj={}
        )
        assert result.exit_code != 0
        assert "Invalid configuration" in result.output

