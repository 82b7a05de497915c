import random

import pytest

from tsp_evo.data import hash_file, load_checkpoint, load_costs, save_checkpoint
from tsp_evo.evolutionary import EvolutionConfig, EvolutionarySearch

TINY = """NAME: tiny
TYPE: TSP
DIMENSION: 3
EDGE_WEIGHT_TYPE: EUC_2D
NODE_COORD_SECTION
1 0 0
2 3 4
3 0 8
EOF
"""


def test_load_costs_from_tsplib(tmp_path):
    path = tmp_path / "tiny.tsp"
    path.write_text(TINY)
    costs = load_costs(path)
    assert costs.size == 3
    assert list(costs.rows()) == [[0, 5, 8], [5, 0, 5], [8, 5, 0]]


def test_checkpoint_detects_changed_source(tmp_path):
    path = tmp_path / "tiny.tsp"
    path.write_text(TINY)
    costs = load_costs(path)
    search = EvolutionarySearch(EvolutionConfig(number_of_cities=3), costs=costs, rng=random.Random(0))
    search.run(1)
    ckpt = tmp_path / "ckpt" / "state.json"
    save_checkpoint(search, ckpt, source=path)
    assert load_checkpoint(ckpt).history == search.history

    before = hash_file(path)
    path.write_text(TINY.replace("3 0 8", "3 0 9"))
    assert hash_file(path) != before
    with pytest.raises(RuntimeError):
        load_checkpoint(ckpt)


def test_missing_checkpoint(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_checkpoint(tmp_path / "nope.json")


ASYMMETRIC = "\n".join(
    [
        "NAME: skew",
        "TYPE: ATSP",
        "DIMENSION: 3",
        "EDGE_WEIGHT_TYPE: EXPLICIT",
        "EDGE_WEIGHT_FORMAT: FULL_MATRIX",
        "EDGE_WEIGHT_SECTION",
        "0 5 9",
        "6 0 4",
        "9 4 0",
        "EOF",
        "",
    ]
)


def test_load_costs_rejects_asymmetric_problem(tmp_path):
    path = tmp_path / "skew.atsp"
    path.write_text(ASYMMETRIC)
    with pytest.raises(ValueError):
        load_costs(path)
