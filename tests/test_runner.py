"""
End-to-end tests for the batch runner and its configuration.
"""
import pytest

from factorylights.errors import (
    InconsistentSystemError,
    NoButtonsError,
    ParseError,
    ScalabilityLimitError,
)
from factorylights.runner import (
    DEFAULT_CONFIG,
    FIELDNAMES,
    load_config,
    make_batches,
    make_search,
    read_report,
    run,
)
from factorylights.search import BruteForceSearch, GrayCodeSearch, VectorizedSearch


@pytest.fixture
def cfg(tmp_path, example_input):
    path = tmp_path / "input.txt"
    path.write_text(example_input, encoding="utf-8")
    c = dict(DEFAULT_CONFIG)
    c.update(
        {
            "input": str(path),
            "output": str(tmp_path / "out" / "output_part_one.txt"),
            "report": str(tmp_path / "out" / "machines.csv"),
            "batch_size": 1,
            "verbose": False,
        }
    )
    return c


def test_load_config_defaults():
    assert load_config() == DEFAULT_CONFIG


def test_load_config_merges_factory_section(tmp_path):
    path = tmp_path / "factory.yaml"
    path.write_text(
        "factory:\n  search: vectorized\n  max_nullity: null\n  workers: 3\n",
        encoding="utf-8",
    )
    cfg = load_config(path)
    assert cfg["search"] == "vectorized"
    assert cfg["max_nullity"] is None
    assert cfg["workers"] == 3
    assert cfg["batch_size"] == DEFAULT_CONFIG["batch_size"]


def test_load_config_rejects_unknown_keys(tmp_path):
    path = tmp_path / "factory.yaml"
    path.write_text("factory:\n  serach: gray_code\n", encoding="utf-8")
    with pytest.raises(ValueError, match="serach"):
        load_config(path)


def test_make_search_by_name():
    assert isinstance(make_search("brute_force"), BruteForceSearch)
    assert isinstance(make_search("Gray_Code"), GrayCodeSearch)
    search = make_search("vectorized", {"max_nullity": 5, "chunk_size": 8})
    assert isinstance(search, VectorizedSearch)
    assert search.max_nullity == 5
    assert search.chunk_size == 8
    with pytest.raises(ValueError):
        make_search("simulated_annealing")


def test_make_batches_covers_every_machine():
    batches = list(make_batches(list(range(7)), 3))
    assert [(b["idx_lo"], b["idx_hi"]) for b in batches] == [(0, 3), (3, 6), (6, 7)]
    assert batches[-1]["machines"] == [6]


def test_run_writes_total_and_report(cfg):
    total, rows = run(cfg)
    assert total == 7
    with open(cfg["output"], encoding="utf-8") as f:
        assert f.read() == "7"
    report = read_report(cfg["report"])
    assert [r["machine_id"] for r in report] == [0, 1, 2]
    assert [r["presses"] for r in report] == [2, 3, 2]
    assert set(report[0]) == set(FIELDNAMES)
    assert [r["presses"] for r in rows] == [2, 3, 2]


def test_run_in_process_pool_matches_sequential(cfg):
    cfg["workers"] = 2
    total, rows = run(cfg)
    assert total == 7
    assert [r["machine_id"] for r in rows] == [0, 1, 2]


def test_run_verbose_prints_progress(cfg, capsys):
    cfg["verbose"] = True
    run(cfg)
    out = capsys.readouterr().out
    assert "[solve] 3 machines" in out
    assert "[progress] 3/3 batches" in out


def test_parse_error_aborts_before_output(cfg, tmp_path):
    bad = tmp_path / "bad.txt"
    bad.write_text("[#] (0)\n[#] (0\n", encoding="utf-8")
    cfg["input"] = str(bad)
    with pytest.raises(ParseError):
        run(cfg)
    assert not (tmp_path / "out" / "output_part_one.txt").exists()


def test_unsolvable_machine_aborts_run(cfg, tmp_path):
    bad = tmp_path / "bad.txt"
    bad.write_text("[..] (0)\n[#]\n", encoding="utf-8")
    cfg["input"] = str(bad)
    with pytest.raises(NoButtonsError):
        run(cfg)


def test_max_nullity_from_config(cfg, tmp_path):
    wide = tmp_path / "wide.txt"
    wide.write_text("[#] (0) (0) (0) (0)\n", encoding="utf-8")
    cfg["input"] = str(wide)
    cfg["max_nullity"] = 2
    with pytest.raises(ScalabilityLimitError):
        run(cfg)


def _write_input(cfg, tmp_path, text):
    path = tmp_path / "pool_input.txt"
    path.write_text(text, encoding="utf-8")
    cfg["input"] = str(path)
    cfg["workers"] = 2
    cfg["batch_size"] = 1


def test_pool_keeps_no_buttons_error(cfg, tmp_path):
    """A worker's NoButtonsError reaches the caller as itself."""
    _write_input(cfg, tmp_path, "[..] (0)\n[#]\n")
    with pytest.raises(NoButtonsError):
        run(cfg)


def test_pool_keeps_inconsistent_system_error(cfg, tmp_path):
    _write_input(cfg, tmp_path, "[#.] (0)\n[#.] (0,1)\n")
    with pytest.raises(InconsistentSystemError) as excinfo:
        run(cfg)
    assert excinfo.value.row == 1
    assert str(excinfo.value) == (
        "Inconsistent linear system (reduced row 1 is 0 = 1)."
    )


def test_pool_keeps_scalability_limit_error(cfg, tmp_path):
    _write_input(cfg, tmp_path, "[#] (0)\n[#] (0) (0) (0) (0)\n")
    cfg["max_nullity"] = 2
    with pytest.raises(ScalabilityLimitError) as excinfo:
        run(cfg)
    assert excinfo.value.nullity == 3
    assert excinfo.value.limit == 2
