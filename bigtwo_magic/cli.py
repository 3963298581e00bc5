#!/usr/bin/env python3
"""
Terminal front-end for Big Two Magic.

    bigtwo-magic play [--seed N]
    bigtwo-magic simulate [--runs N] [--seed N] [--detailed]
"""

import argparse
import logging
import shlex
import sys

from .engine.game import GameState, GameConfig, GameSnapshot, Phase
from .engine.intents import (
    SelectToggle, Play, Pass, Redraw, ChooseMagic, BuyShopItem, LeaveShop, Restart
)
from .engine.magic import MagicOption
from .engine.shop import SHOP_ITEMS
from .simulator import Simulator

MAGIC_MENU = list(MagicOption)

HELP = """Commands:
  s <i>            toggle selection of hand card i
  p [i j ...]      play the given cards (or the current selection)
  pass             skip and draw up to hand size
  redraw           use Discard/Redraw (when available)
  buy <id>         buy shop item
  done             leave the shop
  magic <n> [i]    choose magic option n (card i for Suit Change / Card Multiplier)
  restart          start over
  help, quit"""


def render(snap: GameSnapshot) -> str:
    lines = [
        f"Level {snap.level}  Target:{snap.target:g}  Score:{snap.score:.1f}  Gold:{snap.gold:.0f}  "
        f"Chain:{snap.chain_count}(x{snap.chain_multiplier:.2f})  "
        f"Deck:{snap.deck_size}  Hand:{snap.hand_size}  Discard:{snap.discard_size}",
    ]
    hand = "  ".join(
        f"{'*' if i in snap.selected else ' '}{i}:{card}" for i, card in enumerate(snap.hand)
    )
    lines.append(f"Hand: {hand}")

    if snap.phase == Phase.SHOPPING:
        lines.append(f"SHOP (gold {snap.gold:.0f}):")
        for item in SHOP_ITEMS:
            mark = " " if item.cost <= snap.gold else "x"
            lines.append(f"  {mark} {item.item_id}. {item.name} - {item.cost} gold ({item.description})")
        lines.append("  'done' to continue")
    elif snap.phase == Phase.CHOOSING_MAGIC:
        lines.append("Choose magic:")
        for n, option in enumerate(MAGIC_MENU, start=1):
            lines.append(f"  {n}. {option.title} - {option.description}")
    elif snap.phase == Phase.PLAYING and snap.discard_redraw_available:
        lines.append("REDRAW available")
    elif snap.phase == Phase.FAILED:
        lines.append("You failed. Type 'restart' to play again.")
    elif snap.phase == Phase.FINISHED:
        lines.append("You cleared all levels! Type 'restart' to play again.")

    lines.append("Log:")
    lines.extend(f"  {msg}" for msg in snap.log)
    return "\n".join(lines)


def parse_command(line: str):
    """Turn a command line into an intent. Returns None for unknown input."""
    parts = shlex.split(line)
    if not parts:
        return None
    cmd, args = parts[0].lower(), parts[1:]
    try:
        numbers = [int(a) for a in args]
    except ValueError:
        return None

    if cmd == "s" and len(numbers) == 1:
        return SelectToggle(numbers[0])
    if cmd in ("p", "play"):
        return Play(tuple(numbers) if numbers else None)
    if cmd == "pass":
        return Pass()
    if cmd == "redraw":
        return Redraw()
    if cmd == "buy" and len(numbers) == 1:
        return BuyShopItem(numbers[0])
    if cmd in ("done", "leave"):
        return LeaveShop()
    if cmd == "magic" and 1 <= len(numbers) <= 2 and 1 <= numbers[0] <= len(MAGIC_MENU):
        card_index = numbers[1] if len(numbers) == 2 else None
        return ChooseMagic(MAGIC_MENU[numbers[0] - 1], card_index)
    if cmd == "restart":
        return Restart()
    return None


def play_interactive(seed: int = None) -> None:
    game = GameState(GameConfig(seed=seed))
    print(HELP)

    while True:
        print()
        print(render(game.snapshot()))
        try:
            line = input("> ")
        except EOFError:
            break
        if line.strip().lower() in ("quit", "exit", "q"):
            break
        if line.strip().lower() == "help":
            print(HELP)
            continue

        intent = parse_command(line)
        if intent is None:
            print("Unknown command. Type 'help'.")
            continue
        game.apply(intent)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Big Two Magic - solitaire card scoring game")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show engine debug logs")
    sub = parser.add_subparsers(dest="command")

    play_parser = sub.add_parser("play", help="Play in the terminal")
    play_parser.add_argument("--seed", type=int, help="Seed for the shuffle")

    sim_parser = sub.add_parser("simulate", help="Run automated games")
    sim_parser.add_argument("--runs", type=int, default=100, help="Number of runs")
    sim_parser.add_argument("--seed", type=int, help="Base seed for the batch")
    sim_parser.add_argument("--detailed", action="store_true", help="Run one game with detailed output")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command == "simulate":
        sim = Simulator()
        if args.detailed:
            print(sim.run(seed=args.seed, verbose=True))
        else:
            print(sim.run_batch(runs=args.runs, seed=args.seed))
        return 0

    play_interactive(seed=getattr(args, "seed", None))
    return 0


if __name__ == "__main__":
    sys.exit(main())
