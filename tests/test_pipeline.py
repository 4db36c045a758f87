import numpy as np
import pytest

from pixel_segmenter.edges import expected_edge_count
from pixel_segmenter.errors import InvalidInput, InvalidParameter
from pixel_segmenter.grid import Grid
from pixel_segmenter.pipeline import GraphSegmenter, SegmenterConfig, segment


def _groups(result):
    return sorted(sorted(cells) for cells in result.segment_map().values())


def _random_grid(seed=0, shape=(8, 9, 3)):
    rng = np.random.default_rng(seed)
    return Grid.from_array(rng.integers(0, 256, size=shape))


def test_row_of_four_splits_into_two_pairs():
    result = segment([[0, 1, 6, 7]], scale=2)
    assert [(e.weight, e.first, e.second) for e in result.processed_edges] == [
        (1.0, (0, 0), (0, 1)),
        (1.0, (0, 2), (0, 3)),
        (5.0, (0, 1), (0, 2)),
    ]
    assert _groups(result) == [[(0, 0), (0, 1)], [(0, 2), (0, 3)]]
    assert result.stats.merges == 2
    assert result.stats.rejections_by_reason == {"rejected_threshold": 1}
    root = result.representative_of(0, 0)
    assert result.forest.internal_difference_of(root) == 1.0


@pytest.mark.parametrize("scale", [0.001, 1, 500])
def test_identical_samples_form_one_segment(scale):
    result = segment([[(9, 9, 9), (9, 9, 9)], [(9, 9, 9), (9, 9, 9)]], scale=scale)
    assert len(result.all_segments()) == 1
    assert result.stats.segment_count == 1


def test_distant_samples_stay_singletons():
    result = segment([[0, 100], [200, 300]], scale=10)
    assert len(result.all_segments()) == 4
    assert result.stats.merges == 0


def test_single_cell_grid_is_one_trivial_segment():
    result = segment([[(1, 2, 3)]], scale=5)
    assert result.processed_edges == []
    assert result.all_segments() == {0}
    assert result.label_array().tolist() == [[0]]


@pytest.mark.parametrize("scale", [0, -1, float("nan"), float("inf"), "big", None])
def test_bad_scale_is_rejected_before_weighing(scale):
    calls = []

    def weighter(a, b):
        calls.append((a, b))
        return 0.0

    segmenter = GraphSegmenter(SegmenterConfig(scale=scale, use_tqdm=False), weighter)
    with pytest.raises(InvalidParameter):
        segmenter.segment(Grid.from_rows([[0, 1], [2, 3]]))
    assert calls == []


@pytest.mark.parametrize("rows", [[[1, 2], [3]], [1, 2, 3], [[1, 2], 3], [5]])
def test_malformed_rows_are_rejected(rows):
    with pytest.raises(InvalidInput):
        segment(rows, scale=1)


def test_segment_count_never_increases():
    config = SegmenterConfig(scale=300, use_tqdm=False, track_history=True)
    result = GraphSegmenter(config).segment(_random_grid())
    history = result.history
    assert len(history) == result.stats.edge_count
    assert all(later <= earlier for earlier, later in zip(history, history[1:]))
    assert history[-1] == result.stats.segment_count
    assert result.stats.segment_count == result.stats.total_cells - result.stats.merges


def test_processed_edges_are_sorted_and_complete():
    result = segment(_random_grid(shape=(6, 5, 3)), scale=100)
    weights = [edge.weight for edge in result.processed_edges]
    assert weights == sorted(weights)
    assert len(result.processed_edges) == expected_edge_count(6, 5)
    assert result.stats.edge_count == expected_edge_count(6, 5)


def test_find_is_idempotent_after_segmentation():
    result = segment(_random_grid(), scale=200)
    forest = result.forest
    for index in range(result.grid.size):
        assert forest.find(forest.find(index)) == forest.find(index)


def test_segmentation_is_deterministic():
    first = segment(_random_grid(seed=3), scale=250)
    second = segment(_random_grid(seed=3), scale=250)
    assert np.array_equal(first.label_array(), second.label_array())
    assert _groups(first) == _groups(second)


def test_larger_scale_gives_fewer_segments():
    grid = _random_grid(seed=7)
    fine = segment(grid, scale=10)
    coarse = segment(grid, scale=5000)
    assert len(coarse.all_segments()) <= len(fine.all_segments())


def test_label_array_numbers_segments_by_first_appearance():
    result = segment([[0, 0, 90, 90]], scale=1)
    assert result.label_array().tolist() == [[0, 0, 1, 1]]


def test_dataframes_describe_every_cell_and_segment():
    result = segment([[0, 0, 90, 90], [0, 0, 90, 90]], scale=1)
    cells = result.to_dataframe()
    assert list(cells.columns) == ["row", "col", "segment_id", "label"]
    assert len(cells) == 8

    summary = result.segment_summary()
    assert summary["size"].tolist() == [4, 4]
    assert summary["internal_difference"].tolist() == [0.0, 0.0]
    assert summary.loc[1, ["min_row", "max_row", "min_col", "max_col"]].tolist() == [0, 1, 2, 3]


def test_verbose_run_reports_progress(capsys):
    config = SegmenterConfig(scale=1, use_tqdm=False, verbose=True)
    GraphSegmenter(config).segment(Grid.from_rows([[0, 0]]))
    output = capsys.readouterr().out
    assert "Merging segments" in output
    assert "Segments found: 1" in output
    assert "Built 1 of 1 expected edges" in output


def test_all_segments_matches_distinct_representatives():
    result = segment([[0, 0, 90, 90], [0, 0, 90, 90]], scale=1)
    representatives = {
        result.representative_of(row, col) for row in range(2) for col in range(4)
    }
    assert result.all_segments() == representatives
    assert len(representatives) == 2
