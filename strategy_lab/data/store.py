"""
Named collection of saved strategy snapshots.
"""

from typing import Iterable, Optional

from pydantic import TypeAdapter

from strategy_lab.data.models import StrategySnapshot


_library_adapter = TypeAdapter(list[StrategySnapshot])


def save_snapshot(
    library: Iterable[StrategySnapshot],
    snapshot: StrategySnapshot,
) -> list[StrategySnapshot]:
    """Insert `snapshot`, replacing any saved strategy with the same (trimmed) name."""
    name = snapshot.name.strip()
    if not name:
        raise ValueError("Snapshot name must not be blank")
    snapshot = snapshot.model_copy(update={"name": name})

    library = list(library)
    for i, existing in enumerate(library):
        if existing.name == name:
            return library[:i] + [snapshot] + library[i + 1:]
    return library + [snapshot]


def find_snapshot(library: Iterable[StrategySnapshot], name: str) -> StrategySnapshot:
    """Saved strategy by name. Raises KeyError if absent."""
    found: Optional[StrategySnapshot] = next((s for s in library if s.name == name), None)
    if found is None:
        raise KeyError(name)
    return found


def delete_snapshot(
    library: Iterable[StrategySnapshot],
    name: str,
) -> list[StrategySnapshot]:
    return [s for s in library if s.name != name]


def load_library(raw: str) -> list[StrategySnapshot]:
    """Parse a JSON array of snapshots."""
    return _library_adapter.validate_json(raw)


def dump_library(library: Iterable[StrategySnapshot]) -> str:
    return _library_adapter.dump_json(list(library), indent=2).decode("utf-8")
