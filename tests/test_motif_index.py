"""Tests for motif validation, sorting and loading."""

import math

import pandas as pd
import pytest

from motifloop.exceptions import InvalidMotifError
from motifloop.motifs import (Motif, MotifIndex, chrom_sort_key,
                              load_known_loops, load_motifs)
from tests.conftest import make_motif


class TestValidation:
    def test_start_not_before_end_rejected(self):
        with pytest.raises(InvalidMotifError):
            MotifIndex([Motif("chr1", 100, 100, "+", 1.0)])

    def test_negative_start_rejected(self):
        with pytest.raises(InvalidMotifError):
            MotifIndex([Motif("chr1", -5, 10, "+", 1.0)])

    @pytest.mark.parametrize("strand", [".", "*", "", "plus"])
    def test_unknown_strand_rejected(self, strand):
        with pytest.raises(InvalidMotifError):
            MotifIndex([Motif("chr1", 0, 10, strand, 1.0)])

    def test_negative_score_rejected(self):
        with pytest.raises(InvalidMotifError):
            MotifIndex([Motif("chr1", 0, 10, "+", -0.1)])

    def test_nan_score_rejected(self):
        with pytest.raises(InvalidMotifError):
            MotifIndex([Motif("chr1", 0, 10, "+", math.nan)])

    def test_error_carries_record(self):
        bad = Motif("chr1", 10, 5, "+", 1.0)
        with pytest.raises(InvalidMotifError) as excinfo:
            MotifIndex([bad])
        assert excinfo.value.record == bad


class TestOrdering:
    def test_sorted_by_start_per_chromosome(self):
        index = MotifIndex([
            make_motif(500), make_motif(100), make_motif(300, chrom="chr2"), make_motif(200),
        ])
        assert index.starts("chr1") == [100, 200, 500]
        assert index.starts("chr2") == [300]
        assert len(index) == 4

    def test_ties_broken_by_end_then_input_order(self):
        a = Motif("chr1", 100, 130, "+", 1.0, name="a")
        b = Motif("chr1", 100, 120, "+", 1.0, name="b")
        c = Motif("chr1", 100, 120, "-", 1.0, name="c")
        index = MotifIndex([a, b, c])
        assert [m.name for m in index["chr1"]] == ["b", "c", "a"]

    def test_positions_assigned(self):
        index = MotifIndex([make_motif(300), make_motif(100)])
        assert [m.index for m in index["chr1"]] == [0, 1]
        assert index["chr1"][1].start == 300

    def test_natural_chromosome_order(self):
        index = MotifIndex([
            make_motif(1, chrom="chrX"),
            make_motif(1, chrom="chr10"),
            make_motif(1, chrom="chr2"),
            make_motif(1, chrom="chr1"),
        ])
        assert index.chromosomes() == ["chr1", "chr2", "chr10", "chrX"]

    def test_chrom_sort_key_handles_unplaced(self):
        chroms = ["chrUn_gl000220", "chr1", "chrM", "chr1_random", "scaffold_7"]
        ordered = sorted(chroms, key=chrom_sort_key)
        assert ordered[0] == "chr1"
        assert ordered[1] == "chr1_random"

    def test_missing_chromosome_is_empty(self, scenario_index):
        assert list(scenario_index["chr9"]) == []
        assert "chr9" not in scenario_index

    def test_min_score_filter(self):
        index = MotifIndex([make_motif(1, score=2.0), make_motif(50, score=6.0)], min_score=5.0)
        assert [m.score for m in index] == [6.0]


class TestLoading:
    def test_load_headerless_bed6(self, tmp_path):
        bed = tmp_path / "motifs.bed"
        bed.write_text(
            "chr1\t900\t919\tm2\t3.0\t-\n"
            "chr1\t100\t119\tm1\t5.0\t+\n"
        )
        index = load_motifs(bed)
        assert index.starts("chr1") == [100, 900]
        assert index["chr1"][0].name == "m1"
        assert index["chr1"][1].strand == "-"

    def test_load_dataframe_with_custom_score_column(self):
        df = pd.DataFrame({
            "chrom": ["chr1", "chr1"],
            "start": [10, 40],
            "end": [29, 59],
            "strand": ["+", "-"],
            "neg_log10_p": [6.5, 7.0],
        })
        index = load_motifs(df, score_column="neg_log10_p")
        assert [m.score for m in index] == [6.5, 7.0]

    def test_too_few_columns(self, tmp_path):
        bed = tmp_path / "motifs.bed"
        bed.write_text("chr1\t100\t119\n")
        with pytest.raises(InvalidMotifError):
            load_motifs(bed)

    def test_bad_strand_in_file(self, tmp_path):
        bed = tmp_path / "motifs.bed"
        bed.write_text("chr1\t100\t119\tm1\t5.0\t.\n")
        with pytest.raises(InvalidMotifError):
            load_motifs(bed)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_motifs(tmp_path / "absent.bed")

    def test_load_known_loops_bedpe(self, tmp_path):
        bedpe = tmp_path / "loops.bedpe"
        bedpe.write_text(
            "chr1\t0\t5000\tchr1\t40000\t45000\t12\n"
            "chr2\t100\t200\tchr3\t300\t400\t3\n"
        )
        loops = load_known_loops(bedpe)
        assert len(loops) == 2
        assert loops[0].start2 == 40000
        assert loops[0].is_intra_chromosomal
        assert not loops[1].is_intra_chromosomal

    def test_load_known_loops_juicer_header(self, tmp_path):
        bedpe = tmp_path / "loops.txt"
        bedpe.write_text(
            "chr1\tx1\tx2\tchr2\ty1\ty2\n"
            "chr1\t0\t5000\tchr1\t40000\t45000\n"
        )
        loops = load_known_loops(bedpe)
        assert (loops[0].start1, loops[0].end1) == (0, 5000)
        assert (loops[0].start2, loops[0].end2) == (40000, 45000)
