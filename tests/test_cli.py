"""Smoke tests for the command-line entry point."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from range_remap.cli import main


class TestCli:
    """Test running the CLI against almanac files."""

    def test_reports_lowest_locations(
        self, almanac_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main([str(almanac_file)]) == 0

        out = capsys.readouterr().out
        assert "Lowest location for individual seeds: 35" in out
        assert "Lowest location for seed ranges: 46" in out

    def test_brute_force_agrees(
        self, almanac_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main([str(almanac_file), "--brute-force"]) == 0

        assert "Lowest location for seed ranges: 46" in capsys.readouterr().out

    def test_trace(self, almanac_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([str(almanac_file), "--trace", "79"]) == 0

        assert "Trace: seed 79 -> soil 81 -> fertilizer 81" in capsys.readouterr().out

    def test_custom_terminal(self, almanac_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test stopping the chain at an intermediate label."""
        assert main([str(almanac_file), "--terminal", "soil"]) == 0

        assert "Lowest soil for individual seeds: 13" in capsys.readouterr().out

    def test_export_table(self, almanac_file: Path, tmp_path: Path) -> None:
        output_dir = tmp_path / "out"
        argv = [str(almanac_file), "--export-table", str(output_dir), "--output-format", "csv-gzip"]

        assert main(argv) == 0

        written = pd.read_csv(output_dir / "seed-to-location.csv.gz")
        assert not written.empty
        assert written["source_start"].is_monotonic_increasing

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main([str(tmp_path / "missing.txt")])

        assert excinfo.value.code == 2

    def test_malformed_almanac(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.txt"
        path.write_text("seeds: 1 2\n\nnot a header\n1 2 3\n")

        with pytest.raises(SystemExit) as excinfo:
            main([str(path)])

        assert excinfo.value.code == 2

    def test_broken_chain(self, tmp_path: Path) -> None:
        """Test that a chain without a route to the terminal label exits non-zero."""
        path = tmp_path / "short.txt"
        path.write_text("seeds: 1 2\n\nseed-to-soil map:\n5 1 1\n")

        assert main([str(path)]) == 1

    def test_odd_seed_count_skips_ranges(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "odd.txt"
        path.write_text("seeds: 1 2 3\n\nseed-to-location map:\n5 1 1\n")

        assert main([str(path)]) == 0

        out = capsys.readouterr().out
        assert "Lowest location for individual seeds: 2" in out
        assert "seed ranges" not in out

    def test_entry_past_u64_limit(self, tmp_path: Path) -> None:
        """Test that an entry overflowing unsigned 64-bit values is reported as a usage error."""
        path = tmp_path / "huge.txt"
        path.write_text("seeds: 1 2\n\nseed-to-location map:\n0 18446744073709551606 10\n")

        with pytest.raises(SystemExit) as excinfo:
            main([str(path), "--export-table", str(tmp_path / "out")])

        assert excinfo.value.code == 2

    def test_export_at_u64_limit(self, tmp_path: Path) -> None:
        path = tmp_path / "edge.txt"
        path.write_text("seeds: 1 2\n\nseed-to-location map:\n0 18446744073709551605 10\n")
        output_dir = tmp_path / "out"
        argv = [str(path), "--export-table", str(output_dir), "--output-format", "csv-gzip"]

        assert main(argv) == 0

        written = pd.read_csv(output_dir / "seed-to-location.csv.gz", dtype=str)
        assert written["source_end"].tolist() == ["18446744073709551615"]

    @pytest.mark.parametrize(
        "name,payload",
        [
            ("latin1.txt", b"seeds: 1 2\n\xff\xfe\n"),
            ("corrupt.txt.gz", b"this is not gzip data"),
        ],
    )
    def test_unreadable_almanac(self, tmp_path: Path, name: str, payload: bytes) -> None:
        """Test that undecodable or corrupt files are reported as usage errors."""
        path = tmp_path / name
        path.write_bytes(payload)

        with pytest.raises(SystemExit) as excinfo:
            main([str(path)])

        assert excinfo.value.code == 2
