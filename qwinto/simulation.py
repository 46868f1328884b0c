#!/usr/bin/env python3
"""
Qwinto Random Playouts: drive games with uniformly random legal moves.

Exercises the full orchestration protocol (roller, chance and
simultaneous nodes) and prints the spread of final scores.

Usage: python -m qwinto.simulation [--games N] [--seed S] [--players P]
"""
import argparse
import logging
import random
import statistics

from qwinto.config import configure_logging, get_settings
from qwinto.engine import (
    ChanceTurn,
    PlayerTurn,
    QwintoGame,
    QwintoState,
    SimultaneousTurn,
    TerminalTurn,
    load_game,
)
from qwinto.engine.events import count_misses, count_skips

logger = logging.getLogger(__name__)


def play_random_game(game: QwintoGame, rng: random.Random) -> QwintoState:
    """Play one game to the end with random legal actions and sampled rolls."""
    state = game.new_initial_state()
    while True:
        turn = state.whose_turn()
        if isinstance(turn, TerminalTurn):
            return state
        if isinstance(turn, ChanceTurn):
            state.apply_action(state.sample_chance_outcome(rng))
        elif isinstance(turn, SimultaneousTurn):
            state.apply_actions([
                rng.choice(state.legal_actions(p)) for p in range(state.num_players)
            ])
        elif isinstance(turn, PlayerTurn):
            state.apply_action(rng.choice(state.legal_actions(turn.player)))


def run_playouts(game: QwintoGame, num_games: int, seed: int = 0) -> list[QwintoState]:
    """Final states of num_games random games, reproducible from seed."""
    rng = random.Random(seed)
    finals = []
    for i in range(num_games):
        state = play_random_game(game, rng)
        logger.debug("Game %d finished after %d decisions", i, len(state.history))
        finals.append(state)
    return finals


def main(argv: list[str] | None = None) -> None:
    settings = get_settings()
    configure_logging(settings)

    parser = argparse.ArgumentParser(description="Qwinto random playouts")
    parser.add_argument("--games", type=int, default=100,
                        help="Number of games to play (default: 100)")
    parser.add_argument("--seed", type=int, default=0,
                        help="Random seed (default: 0)")
    parser.add_argument("--players", type=int, default=None,
                        help="Number of players (default: QWINTO_PLAYERS or 1)")
    args = parser.parse_args(argv)

    params = settings.game_parameters()
    if args.players is not None:
        params["players"] = args.players
    game = load_game("qwinto", params)

    finals = run_playouts(game, args.games, args.seed)
    print(f"{game!r}: {args.games} random games")
    for player in range(game.num_players()):
        values = [state.returns()[player] for state in finals]
        misses = statistics.mean(count_misses(state.history, player) for state in finals)
        skips = statistics.mean(count_skips(state.history, player) for state in finals)
        stdev = statistics.stdev(values) if len(values) >= 2 else 0.0
        print(f"  P{player}  avg={statistics.mean(values):6.1f}  stdev={stdev:5.1f}  "
              f"min={min(values):6.1f}  max={max(values):6.1f}  "
              f"misses={misses:4.1f}  skips={skips:4.1f}")


if __name__ == "__main__":
    main()
