from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from minigames.models import GameDefinition, Stage, UnitKind, parse_unit_kind

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ResolvedStage:
    """One playable slot in a session.

    `kind` is None when the stage cannot be played (unknown tag, malformed entry,
    nested Mixed); `reason` then says why.
    """

    id: str
    title: str
    kind: UnitKind | None
    data: Any
    reason: str | None = None


@dataclass(frozen=True, slots=True)
class StagePlan:
    stages: tuple[ResolvedStage, ...]
    mixed: bool


def _stage_entries(data: Any) -> list[Any]:
    # Mixed data is stored as {"stages": [...]}; a bare list is accepted too.
    if isinstance(data, dict):
        data = data.get("stages")
    if isinstance(data, list):
        return data
    logger.warning("Mixed game has no stage list; nothing to play")
    return []


def _resolve_entry(idx: int, raw: Any) -> ResolvedStage:
    fallback_id = f"stage-{idx + 1}"
    try:
        stage = Stage.model_validate(raw)
    except ValidationError as e:
        logger.warning("Malformed stage #%s: %s", idx + 1, e)
        return ResolvedStage(id=fallback_id, title="", kind=None, data=None, reason="Malformed stage")

    kind = parse_unit_kind(stage.kind)
    if kind is None:
        return ResolvedStage(stage.id, stage.title, None, stage.data, reason=f"Unsupported stage kind: {stage.kind}")
    if kind == UnitKind.mixed:
        logger.warning("Nested Mixed stage %r rejected", stage.id)
        return ResolvedStage(stage.id, stage.title, None, stage.data, reason="Mixed stages cannot be nested")
    return ResolvedStage(stage.id, stage.title, kind, stage.data)


def resolve_stages(definition: GameDefinition) -> StagePlan:
    """Turn a definition into the ordered stages a session plays.

    Single-unit games become one synthetic stage; Mixed games use their stage list.
    """

    kind = definition.kind
    if kind == UnitKind.mixed:
        entries = _stage_entries(definition.data)
        return StagePlan(stages=tuple(_resolve_entry(i, raw) for i, raw in enumerate(entries)), mixed=True)

    reason = None if kind is not None else f"Unsupported game type: {definition.type}"
    only = ResolvedStage(id="main", title="", kind=kind, data=definition.data, reason=reason)
    return StagePlan(stages=(only,), mixed=False)
