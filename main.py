#!/usr/bin/env python3
"""
hexforage - Entry Point
═══════════════════════════════════════════════════════════════════════════

Uruchamia skryptowe demo: bot chodzi po świecie, przechwytuje kolory,
zjada je do hotbara i odkłada. Pokazuje całą powierzchnię komend
silnika na deterministycznej sesji.

Użycie:
    python main.py                      # Domyślny seed
    python main.py --seed 12345         # Konkretny seed
    python main.py --seconds 60         # Dłuższa sesja
    python main.py --config my.yaml     # Nadpisanie defaults
    python main.py --verbose            # Szczegółowy output
    python main.py --template flower    # Aktywny szablon budowli

Wynik:
    - Wypisuje przebieg sesji na konsolę
    - Zapisuje pełny log do output/session_{seed}.json
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

# Dodaj katalog projektu do path
sys.path.insert(0, str(Path(__file__).parent))

from hexforage.core.config_loader import ConfigLoader
from hexforage.core.hex_coord import HexCoord
from hexforage.core.rng import GameRNG
from hexforage.events.event_logger import EventType
from hexforage.platform.integration import get_integration
from hexforage.simulation.commands import CommandType, GameCommand
from hexforage.simulation.engine import GameEngine
from hexforage.simulation.session import GameSession


# ═══════════════════════════════════════════════════════════════════════════
# BOT
# ═══════════════════════════════════════════════════════════════════════════

def nearest_colored(session: GameSession, rng: GameRNG) -> Optional[HexCoord]:
    """
    Najbliższe kolorowe pole (inne niż pole protagonisty).

    Przy remisie losuje spośród najbliższych (osobny RNG bota,
    nie rusza sekwencji rzutów przechwycenia).
    """
    state = session.engine.state
    candidates = [
        cell.coord for cell in state.grid.get_colored_cells()
        if cell.coord != state.protagonist
    ]
    if not candidates:
        return None
    best = min(state.protagonist.distance(c) for c in candidates)
    nearest = sorted((c for c in candidates if state.protagonist.distance(c) == best), key=lambda c: c.axial)
    return rng.choice(nearest)


def walk_until_arrived(session: GameSession, max_ticks: int) -> None:
    """Tickuje, dopóki trwa auto-ruch (maksymalnie max_ticks)."""
    for _ in range(max_ticks):
        if not session.is_running or not session.engine.is_auto_moving:
            return
        session.advance(1)


def drop_carried_color(session: GameSession) -> None:
    """Odkłada przenoszony kolor - w razie potrzeby schodzi na puste pole."""
    state = session.engine.state
    if state.grid.is_colored(state.protagonist):
        for direction, neighbor in enumerate(state.protagonist.neighbors()):
            if state.grid.is_empty(neighbor):
                session.execute(GameCommand(CommandType.STEP, direction=direction))
                session.advance(1)
                break
    session.execute(GameCommand(CommandType.PRESS_ACTION))


def run_autoplay(
    session: GameSession,
    total_ticks: int,
    idle_ticks: int = 3,
    verbose: bool = False,
) -> None:
    """
    Skryptowa rozgrywka do total_ticks ticków (lub końca licznika).

    Na zmianę: przechwycenie z rzutem (start/end action) i zjedzenie
    do hotbara (press action). Pełny hotbar jest opróżniany na puste
    pola przez exchange_slot.
    """
    engine = session.engine
    bot_rng = GameRNG(engine.seed + 1)
    hold = engine.params.capture_hold_duration_ticks
    idle_ticks = max(1, idle_ticks)
    round_no = 0

    while session.is_running and engine.tick < total_ticks:
        round_no += 1

        if engine.state.is_carrying:
            drop_carried_color(session)
            session.advance(idle_ticks)
            continue

        if all(slot is not None for slot in engine.hotbar):
            # Oddaj kolor z wybranego slotu na puste pole przed sobą
            if engine.state.grid.is_empty(engine.focus):
                session.execute(GameCommand(CommandType.EXCHANGE_SLOT, index=round_no % 6))
            else:
                session.execute(GameCommand(CommandType.MOVE_FOCUS_DIRECTION, direction=round_no % 6))
            session.advance(idle_ticks)
            continue

        target = nearest_colored(session, bot_rng)
        if target is None:
            session.advance(idle_ticks)
            continue

        session.execute(GameCommand(CommandType.MOVE_TO, q=target.q, r=target.r))
        walk_until_arrived(session, max_ticks=engine.params.grid_radius * 8 + 8)

        if engine.focus != target:
            session.advance(idle_ticks)
            continue

        if round_no % 2 == 0:
            session.execute(GameCommand(CommandType.START_ACTION))
            session.advance(hold + 1)
            session.execute(GameCommand(CommandType.END_ACTION))
        else:
            session.execute(GameCommand(CommandType.PRESS_ACTION))

        if verbose:
            state = engine.state
            print(
                f"  tick {state.tick:5d} | @({state.protagonist.q:3d},{state.protagonist.r:3d}) "
                f"| hotbar {list(state.hotbar)} | carry {state.carried_color}"
            )

        session.advance(idle_ticks)


# ═══════════════════════════════════════════════════════════════════════════
# MAIN
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Główna funkcja."""
    parser = argparse.ArgumentParser(
        description="hexforage - autoplay demo",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Ziarno losowości (domyślnie: z defaults.yaml)"
    )
    parser.add_argument(
        "--seconds",
        type=int,
        default=None,
        help="Długość demo w sekundach gry (domyślnie: z defaults.yaml)"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Dodatkowy plik YAML nadpisujący defaults"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Szczegółowy output"
    )
    parser.add_argument(
        "--template",
        type=str,
        default=None,
        help="ID szablonu budowli aktywnego w trakcie demo (patrz data/templates.yaml)"
    )
    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Nie zapisuj logu do pliku"
    )

    args = parser.parse_args()

    # Załaduj konfigurację
    loader = ConfigLoader()
    config = loader.load_session_config(user_config=args.config)
    autoplay = loader.load_merged(args.config).get("autoplay", {})

    params = config.params
    seed = params.seed if args.seed is None else args.seed
    seconds = args.seconds if args.seconds is not None else autoplay.get("seconds", 30)
    idle_ticks = autoplay.get("idle_ticks_between_actions", 3)

    print("=" * 60)
    print("HEXFORAGE - AUTOPLAY")
    print("=" * 60)
    print(f"Seed: {seed}")
    print(f"Siatka: promień {params.grid_radius} ({params.world_cell_count} pól)")
    print(f"Platforma: {config.platform}")
    print()

    engine = GameEngine(
        params,
        seed=seed,
        max_history=config.max_history,
        max_events=config.max_events,
    )
    if args.template is not None and args.template not in engine.templates:
        print(f"Unknown template: {args.template}. Available: {engine.templates.ids()}")
        return 1
    session = GameSession(engine, get_integration(config.platform), language=config.language)

    start_total = engine.total_color_count()
    print(f"Kolorowe pola na starcie: {engine.state.grid.total_colored()}")
    print()
    print("-" * 60)
    print("START SESJI...")
    print("-" * 60)

    session.start()
    if args.template is not None:
        session.execute(GameCommand(CommandType.ACTIVATE_TEMPLATE, template_id=args.template))
    run_autoplay(session, seconds * params.game_tick_rate, idle_ticks, args.verbose)
    summary = session.stop()

    # Wyniki
    print()
    print("=" * 60)
    print("WYNIKI")
    print("=" * 60)
    print(f"Czas gry: {summary['tick'] / params.game_tick_rate:.1f}s ({summary['tick']} ticks)")
    print(f"Pozostały licznik: {summary['remaining_seconds']}s")
    print(f"Hotbar: {summary['hotbar']}")
    print(f"Kolorowe pola: {summary['colored_cells']}")
    print(f"Jednostki koloru: {summary['total_color_count']} (start: {start_total})")

    successes = len(engine.logger.get_events_by_type(EventType.CAPTURE_SUCCESS))
    failures = len(engine.logger.get_events_by_type(EventType.CAPTURE_FAILURE))
    print(f"Przechwycenia: {successes} udane, {failures} nieudane")

    progress = engine.template_progress()
    if progress is not None:
        name = engine.templates.get(progress["template_id"]).display_name(config.language)
        print(f"Szablon {name}: {progress['filled']}/{progress['total']} pól"
              f"{' (ukończony)' if progress['completed_at_tick'] is not None else ''}")

    # Zapisz log
    if not args.no_save:
        output_path = f"output/session_{seed}.json"
        engine.save_log(output_path)
        print()
        print(f"📄 Log zapisany: {output_path}")

    # Verbose: pokaż statystyki
    if args.verbose:
        print()
        print("-" * 60)
        print("STATYSTYKI ZDARZEŃ")
        print("-" * 60)

        for event_type in EventType:
            count = len(engine.logger.get_events_by_type(event_type))
            if count > 0:
                print(f"  {event_type.name}: {count}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
