"""
    test_cli
    ~~~~~~~~
    Test the snapshot entry point of `mortality_gen`.
"""
import json

import pandas as pd
import pytest

from mortality_gen import cli
from mortality_gen.profiles import COUNTRIES


def test_main_writes_locked_snapshot(tmp_path, capsys):
    cli.main(["--out", str(tmp_path), "--top", "3"])

    manifest = json.loads((tmp_path / "dataset_manifest.json").read_text())
    n = len(COUNTRIES) * 14
    assert manifest["row_counts"] == {"mortality": n, "causes": n * 7, "age_groups": n * 6}
    for name, digest in manifest["file_hashes_sha256"].items():
        assert cli.file_hash(tmp_path / name) == digest

    frame = pd.read_csv(tmp_path / "mortality.csv")
    assert list(frame.columns[:4]) == ["country", "country_code", "region", "year"]
    assert frame["year"].min() == 2010

    out = capsys.readouterr().out
    assert "Life Expectancy" in out
    assert "LOCKED" in out


def test_main_zero_investment(tmp_path, capsys):
    cli.main(["--out", str(tmp_path), "--investment", "0"])
    assert "ROI n/a" in capsys.readouterr().out


def test_log_level_choices(tmp_path, capsys):
    with pytest.raises(SystemExit):
        cli.main(["--out", str(tmp_path), "--log-level", "LOUD"])
    assert "invalid choice" in capsys.readouterr().err
    assert cli.build_parser().parse_args(["--log-level", "debug"]).log_level == "DEBUG"
