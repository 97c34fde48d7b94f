"""Tests for the motifloop command line interface."""

import numpy as np
import pandas as pd
import pyBigWig
import pytest
import yaml
from click.testing import CliRunner

from motifloop.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def inputs(tmp_path):
    motif_file = tmp_path / "motifs.bed"
    motif_file.write_text(
        "chr1\t100\t119\tm1\t5.0\t+\n"
        "chr1\t900\t919\tm2\t3.0\t-\n"
        "chr1\t50000\t50019\tm3\t1.0\t+\n"
    )

    signal_file = tmp_path / "signal.bw"
    values = np.random.default_rng(4).random(60000)
    bw = pyBigWig.open(str(signal_file), "w")
    bw.addHeader([("chr1", 60000)])
    bw.addEntries("chr1", 0, values=values.tolist(), span=1, step=1)
    bw.close()

    loops_file = tmp_path / "loops.bedpe"
    loops_file.write_text("chr1\t0\t200\tchr1\t800\t1000\n")

    return motif_file, signal_file, loops_file


class TestCLI:
    def test_info(self, runner):
        result = runner.invoke(main, ["info"])
        assert result.exit_code == 0
        assert "motifloop" in result.output

    def test_init_config(self, runner, tmp_path):
        path = tmp_path / "config.yaml"
        result = runner.invoke(main, ["init-config", str(path)])
        assert result.exit_code == 0
        assert yaml.safe_load(path.read_text())["pairs"]["max_dist"] == 1_000_000

    def test_init_config_json(self, runner, tmp_path):
        path = tmp_path / "config.json"
        result = runner.invoke(main, ["init-config", str(path), "--format", "json"])
        assert result.exit_code == 0
        assert path.read_text().lstrip().startswith("{")

    def test_predict(self, runner, inputs, tmp_path):
        motif_file, signal_file, _ = inputs
        output = tmp_path / "out" / "loops.tsv"
        result = runner.invoke(main, [
            "predict", str(motif_file), str(signal_file), str(output),
            "--max-dist", "2000", "--window", "100", "--no-cutoff",
        ])
        assert result.exit_code == 0, result.output

        table = pd.read_csv(output, sep="\t")
        assert len(table) == 1
        assert table.loc[0, "distance"] == 800
        assert table.loc[0, "strand_orientation"] == "convergent"

    def test_predict_with_config_file(self, runner, inputs, tmp_path):
        motif_file, signal_file, _ = inputs
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.safe_dump({
            "pairs": {"max_dist": 2000},
            "signal": {"window": 100},
            "prediction": {"cutoff": None},
        }))
        output = tmp_path / "loops.tsv"
        result = runner.invoke(main, [
            "-c", str(config_file), "predict", str(motif_file), str(signal_file), str(output),
        ])
        assert result.exit_code == 0, result.output
        assert len(pd.read_csv(output, sep="\t")) == 1

    def test_predict_invalid_option(self, runner, inputs, tmp_path):
        motif_file, signal_file, _ = inputs
        result = runner.invoke(main, [
            "predict", str(motif_file), str(signal_file), str(tmp_path / "x.tsv"),
            "--max-dist", "0",
        ])
        assert result.exit_code == 1
        assert "max_dist" in result.output

    @pytest.mark.parametrize("config_data, fragment", [
        ({"output_dir": "results"}, "output_dir"),
        ({"signal": {"n_workers": None}}, "n_workers"),
        ({"pairs": [1, 2]}, "pairs"),
    ])
    def test_predict_bad_config_file(self, runner, inputs, tmp_path, config_data, fragment):
        motif_file, signal_file, _ = inputs
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.safe_dump(config_data))
        result = runner.invoke(main, [
            "-c", str(config_file), "predict", str(motif_file), str(signal_file),
            str(tmp_path / "x.tsv"),
        ])
        assert result.exit_code == 1
        assert fragment in result.output
        assert "Traceback" not in result.output

    def test_label(self, runner, inputs, tmp_path):
        motif_file, signal_file, loops_file = inputs
        output = tmp_path / "training.tsv"
        result = runner.invoke(main, [
            "label", str(motif_file), str(signal_file), str(loops_file), str(output),
            "--max-dist", "2000", "--window", "100",
        ])
        assert result.exit_code == 0, result.output
        assert pd.read_csv(output, sep="\t")["label"].tolist() == [True]
