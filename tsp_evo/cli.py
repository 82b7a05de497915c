import argparse
import random
import time
from pathlib import Path

from tsp_evo.costs import CostMatrix
from tsp_evo.data import load_checkpoint, load_costs, save_checkpoint
from tsp_evo.evolutionary import EvolutionConfig, EvolutionarySearch
from tsp_evo.operators import ConfigurationError, CrossStrategy


def log(msg: str) -> None:
    ts = time.strftime("%H:%M:%S")
    print(f"[{ts}] {msg}", flush=True)


def present_costs(costs: CostMatrix) -> None:
    for row in costs.rows():
        print(row)


def present_best(search: EvolutionarySearch) -> None:
    order, cost = search.best_order()
    log(f"lowest traversing cost: {cost} {order}")


def present_results(search: EvolutionarySearch) -> None:
    log(f"lowest cost changes: {list(search.history)}")
    log(f"{search.improvement():.2f}% better result")


def build_search(args) -> EvolutionarySearch:
    if args.resume and args.checkpoint and Path(args.checkpoint).exists():
        log(f"resuming from {args.checkpoint}")
        return load_checkpoint(Path(args.checkpoint))
    costs = None
    n = args.cities
    if args.tsplib:
        log(f"loading costs from {args.tsplib}")
        costs = load_costs(Path(args.tsplib))
        n = costs.size
    cfg = EvolutionConfig(
        number_of_cities=n,
        mutation_rate=args.mutation_rate,
        generations_count=args.generations,
        cross_strategy=args.strategy,
        present_costs=args.present_costs,
        random_seed=args.seed,
    )
    return EvolutionarySearch(cfg, costs=costs, rng=random.Random(args.seed))


def run(args) -> None:
    t0 = time.perf_counter()
    search = build_search(args)
    if search.cfg.present_costs:
        present_costs(search.costs)
    log(f"starting generation {search.generation} ({search.cfg.number_of_cities} cities)")
    present_best(search)
    search.run(args.generations)
    log(f"finished {search.generation} generations in {time.perf_counter() - t0:.2f}s")
    present_best(search)
    present_results(search)
    if args.checkpoint:
        save_checkpoint(search, Path(args.checkpoint), Path(args.tsplib) if args.tsplib else None)
        log(f"checkpoint saved to {args.checkpoint}")


def build_parser() -> argparse.ArgumentParser:
    defaults = EvolutionConfig()
    parser = argparse.ArgumentParser(description="Evolutionary TSP solver")
    parser.add_argument("-n", "--cities", type=int, default=defaults.number_of_cities)
    parser.add_argument("-m", "--mutation-rate", type=float, default=defaults.mutation_rate)
    parser.add_argument("-g", "--generations", type=int, default=defaults.generations_count)
    parser.add_argument(
        "-s",
        "--strategy",
        default=defaults.cross_strategy,
        choices=[s.value for s in CrossStrategy],
    )
    parser.add_argument("-c", "--present-costs", action="store_true", help="Print the cost matrix")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--tsplib", default=None, help="TSPLIB problem to take costs from")
    parser.add_argument("--checkpoint", default=None, help="JSON checkpoint path")
    parser.add_argument("--resume", action="store_true", help="Resume from --checkpoint if present")
    parser.set_defaults(func=run)
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.func(args)
    except ConfigurationError as exc:
        parser.error(str(exc))


if __name__ == "__main__":
    main()
