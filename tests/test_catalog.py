from __future__ import annotations

import json
from pathlib import Path

import pytest

from minigames.catalog import CatalogLoadError, load_catalog, load_game_module
from minigames.models import UnitKind
from minigames.session.stages import resolve_stages


def test_bundled_games_load(games_dir: Path) -> None:
    catalog = load_catalog(games_dir)
    assert set(catalog.by_id) == {"animal-words", "capitals-quiz", "science-mix"}

    quiz = catalog.get("capitals-quiz")
    assert quiz is not None
    assert quiz.settings.time_limit_seconds == 60
    assert quiz.settings.randomize_order is True
    assert quiz.definition().kind == UnitKind.quiz


def test_public_listing_and_lookups(games_dir: Path) -> None:
    catalog = load_catalog(games_dir)
    assert [g.id for g in catalog.public()] == ["capitals-quiz", "science-mix"]
    assert catalog.find_by_title("  european CAPITALS ") is catalog.get("capitals-quiz")
    assert [g.id for g in catalog.by_category("science")] == ["science-mix"]
    assert catalog.get("missing") is None


def test_bundled_mixed_game_resolves_three_stages(games_dir: Path) -> None:
    game = load_game_module(games_dir / "science-mix.json")
    plan = resolve_stages(game.definition())
    assert plan.mixed
    assert [s.kind for s in plan.stages] == [UnitKind.true_false, UnitKind.cloze, UnitKind.sequence]
    assert [s.title for s in plan.stages] == ["Facts", "Fill in", "Order the planets"]


def test_missing_and_invalid_files(tmp_path: Path) -> None:
    with pytest.raises(CatalogLoadError, match="not found"):
        load_game_module(tmp_path / "nope.json")

    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"id": "x"}), encoding="utf-8")
    with pytest.raises(CatalogLoadError, match="Invalid game file"):
        load_game_module(bad)

    with pytest.raises(CatalogLoadError, match="Catalog directory not found"):
        load_catalog(tmp_path / "nowhere")


def test_duplicate_ids_are_rejected(tmp_path: Path) -> None:
    game = {"id": "same", "title": "A", "gameType": "QUIZ", "data": {}}
    (tmp_path / "a.json").write_text(json.dumps(game), encoding="utf-8")
    (tmp_path / "b.json").write_text(json.dumps({**game, "title": "B"}), encoding="utf-8")

    with pytest.raises(CatalogLoadError, match="Duplicate game id: same"):
        load_catalog(tmp_path)
