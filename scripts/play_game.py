"""Play a published game in the terminal.

Usage:
    uv run python scripts/play_game.py --list
    uv run python scripts/play_game.py capitals-quiz
    uv run python scripts/play_game.py games/science-mix.json --record

A game is either a path to a JSON file or an id (or title) from the catalog
directory (MINIGAMES_CATALOG_DIR, `games/` by default).

`--record` increments the play counter in Redis (MINIGAMES_REDIS_URL) when the
session finishes. Type `quit` at any prompt to leave.
"""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path

from minigames.catalog import CatalogLoadError, load_catalog, load_game_module
from minigames.config import configure_logging, get_catalog_dir, load_env
from minigames.models import GameModule
from minigames.scheduler import AsyncioScheduler
from minigames.session import GameSession, SessionStatus
from minigames.units.cloze import ClozeView
from minigames.units.flashcard import FlashcardView
from minigames.units.matching import MatchingView
from minigames.units.quiz import QuizView
from minigames.units.scramble import ScrambleView
from minigames.units.sequence import SequenceView
from minigames.units.true_false import TrueFalseView


def _render(session: GameSession) -> str:
    view = session.view()
    unit = view.unit
    lines: list[str] = []
    if view.stage_count > 1:
        lines.append(f"-- Stage {view.stage_index + 1}/{view.stage_count}: {view.stage_title} --")
    if view.time_remaining is not None:
        lines.append(f"[time left: {view.time_remaining // 60}:{view.time_remaining % 60:02d}]")

    if isinstance(unit, QuizView):
        lines.append(f"Q{unit.index + 1}/{unit.count}: {unit.question}  (score {unit.score})")
        lines.extend(f"  {i + 1}. {opt}" for i, opt in enumerate(unit.options))
        if unit.selected is not None:
            mark = "correct" if unit.selected == unit.correct_answer else f"wrong, answer: {unit.correct_answer}"
            lines.append(f"  -> {mark}. Enter to continue.")
    elif isinstance(unit, MatchingView):
        left = [c for c in unit.left if c.pair_id not in unit.matched]
        right = [c for c in unit.right if c.pair_id not in unit.matched]
        lines.append(f"Match left to right (mistakes: {unit.mistakes}); enter e.g. '1 2'")
        lines.extend(f"  L{i + 1}. {c.text}" for i, c in enumerate(left))
        lines.extend(f"  R{i + 1}. {c.text}" for i, c in enumerate(right))
    elif isinstance(unit, TrueFalseView):
        lines.append(f"{unit.index + 1}/{unit.count}: {unit.statement}  [t/f]")
    elif isinstance(unit, FlashcardView):
        side = "back" if unit.flipped else "front"
        lines.append(f"Card {unit.index + 1}/{unit.count} ({side}): {unit.text}  [f]lip [n]ext [p]rev")
    elif isinstance(unit, SequenceView):
        lines.append(unit.instruction)
        for i, item in enumerate(unit.items):
            mark = ""
            if unit.checked:
                mark = " ok" if unit.correct[i] else " x"
            lines.append(f"  {i + 1}. {item.text}{mark}")
        lines.append("  'u N' / 'd N' to move, 'c' to check" + (", 'r' to retry" if unit.checked else ""))
    elif isinstance(unit, ClozeView):
        text = "".join(f"[{seg.blank_index + 1}]" if seg.is_blank else seg.text for seg in unit.segments)
        lines.append(text)
        lines.append("  'N answer' to fill blank N, 'c' to check")
    elif isinstance(unit, ScrambleView):
        lines.append(f"Unscramble: {unit.scrambled.upper()}" + (f"  (hint: {unit.hint})" if unit.hint else ""))
        if unit.feedback == "wrong":
            lines.append("  Not quite, try again.")
    return "\n".join(lines)


def _to_move(session: GameSession, line: str) -> tuple[str, dict[str, object]] | None:
    unit = session.view().unit
    parts = line.split()
    if isinstance(unit, QuizView):
        if unit.selected is not None:
            return "next", {}
        if line.isdigit() and 0 < int(line) <= len(unit.options):
            return "answer", {"option": unit.options[int(line) - 1]}
    elif isinstance(unit, MatchingView):
        left = [c for c in unit.left if c.pair_id not in unit.matched]
        right = [c for c in unit.right if c.pair_id not in unit.matched]
        if len(parts) == 2 and all(p.isdigit() for p in parts):
            li, ri = int(parts[0]) - 1, int(parts[1]) - 1
            if 0 <= li < len(left) and 0 <= ri < len(right):
                session.submit("select_left", {"pair_id": left[li].pair_id})
                return "select_right", {"pair_id": right[ri].pair_id}
    elif isinstance(unit, TrueFalseView):
        if line.lower() in {"t", "f"}:
            return "guess", {"value": line.lower() == "t"}
    elif isinstance(unit, FlashcardView):
        return {"f": ("flip", {}), "n": ("next", {}), "p": ("prev", {})}.get(line.lower())
    elif isinstance(unit, SequenceView):
        if line.lower() == "c":
            return "check", {}
        if line.lower() == "r":
            return "retry", {}
        if len(parts) == 2 and parts[0] in {"u", "d"} and parts[1].isdigit():
            return "move", {"index": int(parts[1]) - 1, "direction": "up" if parts[0] == "u" else "down"}
    elif isinstance(unit, ClozeView):
        if line.lower() == "c":
            return "check", {}
        if len(parts) >= 2 and parts[0].isdigit():
            return "fill", {"index": int(parts[0]) - 1, "text": " ".join(parts[1:])}
    elif isinstance(unit, ScrambleView):
        return "answer", {"text": line}
    return None


async def play(session: GameSession) -> None:
    session.start()
    while session.status == SessionStatus.running:
        print(_render(session))
        line = (await asyncio.to_thread(input, "> ")).strip()
        if session.status != SessionStatus.running:
            break
        if line.lower() == "quit":
            session.close()
            return

        move = _to_move(session, line)
        if move is None:
            print("?")
            continue
        result = session.submit(*move)
        if result.advance_after is not None:
            print(_render(session))
            # Let the scheduled auto-advance run.
            await asyncio.sleep(result.advance_after + 0.05)

    outcome = session.outcome
    if outcome is None:
        return
    print("Time is up!" if outcome.timed_out else "Well done!")
    print(f"Score: {outcome.score} / {outcome.total}")
    if outcome.celebrate:
        print("*** Great result! ***")


def resolve_game(ref: str, catalog_dir: Path) -> GameModule:
    """Load `ref` as a JSON path, or look it up by id or title in `catalog_dir`."""

    path = Path(ref)
    if path.suffix == ".json" or path.is_file():
        return load_game_module(path)

    catalog = load_catalog(catalog_dir)
    game = catalog.get(ref) or catalog.find_by_title(ref)
    if game is None:
        raise CatalogLoadError(f"No game {ref!r} in {catalog_dir}")
    return game


def _list_games(catalog_dir: Path) -> None:
    for game in load_catalog(catalog_dir).public():
        print(f"{game.id:<20} {game.title} ({game.game_type})")


async def _main(args: argparse.Namespace, game: GameModule) -> None:
    on_finish = None
    if args.record:
        from minigames.infra.redis_client import create_redis
        from minigames.play_counter import PlayCounter, make_play_recorder

        on_finish = make_play_recorder(counter=PlayCounter(r=create_redis()), game_id=game.id)

    print(f"{game.title}: {game.description}" if game.description else game.title)
    session = GameSession(game.definition(), game.settings, scheduler=AsyncioScheduler(), on_finish=on_finish)
    await play(session)


def main() -> None:
    parser = argparse.ArgumentParser(description="Play a mini-game in the terminal")
    parser.add_argument("game", nargs="?", help="Game id, title or path to a game JSON file")
    parser.add_argument("--list", action="store_true", help="List the public games in the catalog")
    parser.add_argument("--record", action="store_true", help="Record the finished play in Redis")
    args = parser.parse_args()

    load_env()
    configure_logging()
    catalog_dir = get_catalog_dir()
    try:
        if args.list:
            _list_games(catalog_dir)
            return
        if not args.game:
            parser.error("a game id or path is required")
        game = resolve_game(args.game, catalog_dir)
    except CatalogLoadError as e:
        parser.exit(1, f"{e}\n")
    asyncio.run(_main(args, game))


if __name__ == "__main__":
    main()
