import random

import pytest

from tsp_evo.codec import random_population, traversing_order
from tsp_evo.costs import CostMatrix
from tsp_evo.evaluation import (
    genotype_cost,
    improvement_percent,
    population_costs,
    tour_cost,
)


def test_two_city_round_trip():
    costs = CostMatrix([[0, 7], [7, 0]])
    assert tour_cost(costs, [0, 1]) == 14


def test_rotation_and_reversal_invariance():
    rng = random.Random(4)
    costs = CostMatrix.random(9, rng)
    tour = list(range(9))
    rng.shuffle(tour)
    base = tour_cost(costs, tour)
    for k in range(len(tour)):
        assert tour_cost(costs, tour[k:] + tour[:k]) == base
    assert tour_cost(costs, tour[::-1]) == base


def test_out_of_range_city_raises():
    costs = CostMatrix([[0, 7], [7, 0]])
    with pytest.raises(IndexError):
        tour_cost(costs, [0, 2])


def test_genotype_cost_decodes_first():
    costs = CostMatrix([[0, 1, 5], [1, 0, 2], [5, 2, 0]])
    genotype = [2, 0, 1]
    assert traversing_order(genotype) == [1, 2, 0]
    assert genotype_cost(costs, genotype) == 2 + 5 + 1


def test_population_costs_match_single_evaluation():
    rng = random.Random(8)
    costs = CostMatrix.random(12, rng)
    population = random_population(12, rng)
    assert population_costs(costs, population) == [genotype_cost(costs, g) for g in population]
    assert population_costs(costs, []) == []


def test_population_costs_ragged_decodes():
    costs = CostMatrix.random(4, random.Random(2))
    population = [[0, 1, 2, 3], [3, 3, 2, 0]]
    expected = [genotype_cost(costs, g, upper_bound=2) for g in population]
    assert population_costs(costs, population, upper_bound=2) == expected


def test_improvement_percent():
    assert improvement_percent([200, 150, 100]) == 50.0
    assert improvement_percent([300, 200]) == 33.33
    assert improvement_percent([120]) == 0.0


def test_improvement_percent_degenerate():
    assert improvement_percent([0, 0]) == 0.0
    with pytest.raises(ValueError):
        improvement_percent([])
