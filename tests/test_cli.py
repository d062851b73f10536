"""
CLI and settings tests, driven through main(argv).
"""

import argparse
import json

from almanac.cli import main
from almanac.config import Settings


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings.from_env({})
        assert settings == Settings()

    def test_env(self) -> None:
        settings = Settings.from_env({
            "ALMANAC_SOURCE": "soil",
            "ALMANAC_DESTINATION": "water",
            "ALMANAC_STRICT": "Yes",
            "NO_COLOR": "",
        })
        assert settings.source == "soil"
        assert settings.destination == "water"
        assert settings.strict_overlaps
        assert not settings.color

    def test_args_override_env(self) -> None:
        args = argparse.Namespace(source="light", destination=None, strict=False, no_color=False, verbose=True)
        settings = Settings.from_args(args, {"ALMANAC_SOURCE": "soil", "ALMANAC_DESTINATION": "water"})
        assert settings.source == "light"
        assert settings.destination == "water"
        assert settings.verbose


class TestCommands:
    def test_lowest_json(self, example_file, capsys) -> None:
        assert main(["--json", "lowest", str(example_file)]) == 0
        out = json.loads(capsys.readouterr().out)
        assert [(r["mode"], r["value"]) for r in out] == [("scalar", 35), ("ranges", 46)]

    def test_lowest_text(self, example_file, capsys) -> None:
        assert main(["--no-color", "lowest", str(example_file), "--mode", "ranges"]) == 0
        out = capsys.readouterr().out
        assert "Minimal location with ranges: 46" in out

    def test_trace_json(self, example_file, capsys) -> None:
        assert main(["--json", "trace", str(example_file), "79"]) == 0
        steps = json.loads(capsys.readouterr().out)
        assert steps[-1] == {"stage": "humidity-to-location", "before": 78, "after": 82}

    def test_map_json(self, example_file, capsys) -> None:
        assert main(["--json", "--from", "seed", "--to", "soil", "map", str(example_file), "90", "15"]) == 0
        assert json.loads(capsys.readouterr().out) == [[92, 100], [50, 52], [100, 105]]

    def test_stages_text(self, example_file, capsys) -> None:
        assert main(["--no-color", "stages", str(example_file)]) == 0
        out = capsys.readouterr().out
        assert "8 spaces, 7 stages" in out
        assert "seed-to-soil: 2 segments" in out

    def test_missing_file(self, tmp_path, capsys) -> None:
        assert main(["--no-color", "lowest", str(tmp_path / "nope.txt")]) == 1
        assert "File not found" in capsys.readouterr().out

    def test_malformed_file(self, tmp_path, capsys) -> None:
        path = tmp_path / "bad.txt"
        path.write_text("seeds: 1 2\n\nseed-to-soil map:\n1 2\n")
        assert main(["--no-color", "lowest", str(path)]) == 1
        assert "Line 4" in capsys.readouterr().out

    def test_map_start_out_of_domain(self, example_file, capsys) -> None:
        assert main(["--json", "--no-color", "map", str(example_file), "5000000000", "10"]) == 1
        assert "exceeds domain maximum" in capsys.readouterr().out

    def test_map_length_past_domain(self, example_file, capsys) -> None:
        assert main(["--no-color", "map", str(example_file), "4294967290", "100"]) == 1
        assert "runs past domain maximum" in capsys.readouterr().out

    def test_trace_negative_value(self, example_file, capsys) -> None:
        assert main(["--no-color", "trace", str(example_file), "-5"]) == 1
        assert "non-negative integer" in capsys.readouterr().out

    def test_strict_refuses_duplicate_start(self, tmp_path, capsys) -> None:
        path = tmp_path / "dup.txt"
        path.write_text("seeds: 10 2\n\nseed-to-soil map:\n100 10 5\n900 10 3\n")
        assert main(["--no-color", "lowest", str(path)]) == 0
        capsys.readouterr()
        assert main(["--no-color", "--strict", "lowest", str(path)]) == 1
        assert "share source_start" in capsys.readouterr().out

    def test_no_command(self, capsys) -> None:
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out
