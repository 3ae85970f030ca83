"""
Integration tests for the command line entry point.
"""

import glob
import os

import pandas as pd
import pytest

import main


class TestMain:
    def test_short_run(self, capsys):
        assert main.main(["--chargepoints", "3", "--ticks", "96", "--quiet"]) == 0
        out = capsys.readouterr().out
        assert "SIMULATION SUMMARY" in out
        assert "EV STATION SIMULATION" not in out
        assert "Busiest day:" in out

    def test_header_printed(self, capsys):
        main.main(["--chargepoints", "2", "--ticks", "8", "--arrival-multiplier", "150"])
        out = capsys.readouterr().out
        assert "Station: 2 chargepoints x 11.0 kW" in out
        assert "150% arrivals" in out

    def test_output_dir(self, tmp_path, capsys):
        assert main.main([
            "--chargepoints", "2", "--ticks", "192", "--seed", "7",
            "--quiet", "--output-dir", str(tmp_path),
        ]) == 0
        runs = os.listdir(tmp_path)
        assert len(runs) == 1
        run_root = tmp_path / runs[0]
        assert runs[0].endswith("2cp-seed-7")
        assert (run_root / "metadata.json").exists()
        assert len(glob.glob(str(run_root / "data" / "*_summary.json"))) == 1
        assert (run_root / "reports" / "daily_peak_power.csv").exists()
        assert (run_root / "reports" / "hourly_profile.csv").exists()
        assert (run_root / "reports" / "daily_energy.csv").exists()
        exemplary = pd.read_csv(run_root / "reports" / "exemplary_day.csv")
        assert exemplary["hour"].tolist() == list(range(24))

    @pytest.mark.parametrize("argv", [
        ["--chargepoints", "0"],
        ["--chargepoints", "101"],
        ["--power", "0.5"],
        ["--arrival-multiplier", "10"],
        ["--consumption", "60"],
        ["--ticks", "0"],
    ])
    def test_out_of_range_arguments(self, argv, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main.main(argv)
        assert exc_info.value.code == 2

    def test_verbose_defaults_to_half_a_day(self, capsys):
        main.main(["--chargepoints", "1", "--verbose", "--quiet"])
        out = capsys.readouterr().out
        assert "Ticks: 48" in out
        assert "[TICK 47][SIM]" in out
        assert "[TICK 48]" not in out


class TestValidation:
    def test_run_validation(self, capsys):
        assert main.run_validation() == 0
        out = capsys.readouterr().out
        assert "[VALIDATION] Results:" in out
        assert "reference range [77-121 kW]" in out
        assert "--- End of validation ---" in out
