import hashlib
import json
from pathlib import Path
from typing import Dict, Optional

import tsplib95

from .costs import CostMatrix
from .evolutionary import EvolutionarySearch


def hash_file(path: Path, chunk_size: int = 65536) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        while True:
            data = f.read(chunk_size)
            if not data:
                break
            h.update(data)
    return h.hexdigest()


def load_costs(path: Path) -> CostMatrix:
    """Integer cost matrix of a TSPLIB problem, nodes taken in sorted order."""
    problem = tsplib95.load(path)
    return CostMatrix.from_graph(problem.get_graph())


def save_checkpoint(search: EvolutionarySearch, path: Path, source: Optional[Path] = None) -> None:
    state = search.to_state()
    if source is not None:
        state["source"] = {"path": str(source), "hash": hash_file(source)}
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(state, indent=2))


def load_state(path: Path) -> Optional[Dict]:
    if not path.exists():
        return None
    return json.loads(path.read_text())


def load_checkpoint(path: Path) -> EvolutionarySearch:
    state = load_state(path)
    if state is None:
        raise FileNotFoundError(f"No checkpoint at {path}.")
    source = state.get("source")
    if source:
        src = Path(source["path"])
        if src.exists() and hash_file(src) != source["hash"]:
            raise RuntimeError(f"{src} changed since checkpoint {path} was written.")
    return EvolutionarySearch.from_state(state)
