from typing import List, Optional, Sequence

import torch

from .codec import UPPER_BOUND, traversing_order
from .costs import CostMatrix


def tour_cost(costs: CostMatrix, tour: Sequence[int]) -> int:
    total = 0
    n = len(tour)
    for i in range(n):
        total += costs.cost(tour[i], tour[(i + 1) % n])
    return total


def genotype_cost(costs: CostMatrix, genotype: Sequence[int], upper_bound: int = UPPER_BOUND) -> int:
    return tour_cost(costs, traversing_order(genotype, upper_bound))


def _tour_costs_torch(dist: torch.Tensor, tours: List[List[int]]) -> List[int]:
    idx = torch.tensor(tours, device=dist.device, dtype=torch.long)
    n = dist.shape[0]
    if idx.numel() and (idx.min() < 0 or idx.max() >= n):
        raise IndexError(f"Tour visits a city outside [0, {n}).")
    a = idx
    b = idx.roll(-1, dims=1)
    return dist[a, b].sum(dim=1).tolist()


def population_costs(
    costs: CostMatrix,
    genotypes: Sequence[Sequence[int]],
    upper_bound: int = UPPER_BOUND,
    device: Optional[torch.device] = None,
) -> List[int]:
    """Tour cost of every genotype, evaluated as one batch where possible."""
    if not genotypes:
        return []
    tours = [traversing_order(g, upper_bound) for g in genotypes]
    lengths = {len(t) for t in tours}
    if len(lengths) != 1 or 0 in lengths:
        # Ragged decodes cannot be stacked.
        return [tour_cost(costs, t) for t in tours]
    dist = torch.as_tensor(costs.values.copy(), dtype=torch.long, device=device)
    return [int(c) for c in _tour_costs_torch(dist, tours)]


def improvement_percent(history: Sequence[float]) -> float:
    """Relative drop from the worst to the best recorded cost, in percent."""
    if not history:
        raise ValueError("Cost history is empty.")
    worst = max(history)
    if worst == 0:
        return 0.0
    return round(100 * (worst - min(history)) / float(worst), 2)
