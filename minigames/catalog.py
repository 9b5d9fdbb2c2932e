from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from minigames.models import GameModule

logger = logging.getLogger(__name__)


class CatalogLoadError(RuntimeError):
    pass


def load_game_module(path: Path) -> GameModule:
    """Read one published game (JSON, as exported by the authoring tool)."""

    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise CatalogLoadError(f"Game file not found: {path}") from e

    try:
        return GameModule.model_validate_json(raw)
    except ValidationError as e:
        raise CatalogLoadError(f"Invalid game file {path}: {e}") from e


@dataclass(frozen=True, slots=True)
class GameCatalog:
    """Games keyed by id. Lookups by title are case-insensitive."""

    by_id: dict[str, GameModule]

    def get(self, game_id: str) -> GameModule | None:
        return self.by_id.get(game_id)

    def find_by_title(self, title: str) -> GameModule | None:
        key = title.strip().casefold()
        return next((g for g in self.by_id.values() if g.title.strip().casefold() == key), None)

    def public(self) -> list[GameModule]:
        return sorted((g for g in self.by_id.values() if g.is_public), key=lambda g: g.title.casefold())

    def by_category(self, category: str) -> list[GameModule]:
        key = category.strip().casefold()
        return [g for g in self.by_id.values() if g.category.strip().casefold() == key]


def load_catalog(root: Path) -> GameCatalog:
    """Load every `*.json` game under `root`, in stable (sorted) file order."""

    if not root.is_dir():
        raise CatalogLoadError(f"Catalog directory not found: {root}")

    by_id: dict[str, GameModule] = {}
    for path in sorted(root.glob("*.json")):
        game = load_game_module(path)
        if game.id in by_id:
            raise CatalogLoadError(f"Duplicate game id: {game.id} ({path.name})")
        by_id[game.id] = game

    logger.info("Loaded %s games from %s", len(by_id), root)
    return GameCatalog(by_id=by_id)
