"""
Main API for Big Two Magic simulation.
Drives the engine with a strategy for Monte Carlo style runs.
"""

import logging
import random
from collections import Counter
from dataclasses import dataclass, field
from typing import Optional

from .engine.game import GameState, GameConfig, Phase
from .engine.strategy import BasicStrategy

logger = logging.getLogger(__name__)

MAX_TURNS = 500


@dataclass
class RunSummary:
    """Summary of a simulation run."""
    victory: bool
    level_reached: int
    final_score: float
    final_gold: float
    plays: int
    best_chain: int
    hand_counts: dict[str, int]
    purchases: list[str] = field(default_factory=list)
    magic_chosen: list[str] = field(default_factory=list)
    seed: Optional[int] = None

    def __str__(self):
        result = "VICTORY!" if self.victory else "DEFEAT"
        lines = [
            f"{'='*50}",
            f"  {result} - Level {self.level_reached}",
            f"{'='*50}",
            f"  Score: {self.final_score:.1f}",
            f"  Gold left: {self.final_gold:.1f}",
            f"  Plays: {self.plays} (best chain {self.best_chain})",
            f"  Purchases: {', '.join(self.purchases) if self.purchases else 'None'}",
            f"  Magic: {', '.join(self.magic_chosen) if self.magic_chosen else 'None'}",
        ]
        if self.hand_counts:
            counts = ", ".join(f"{k}:{v}" for k, v in sorted(self.hand_counts.items(), key=lambda x: -x[1]))
            lines.append(f"  Hands: {counts}")
        lines.append(f"{'='*50}")
        return "\n".join(lines)

    def to_dict(self):
        return {
            "victory": self.victory,
            "level_reached": self.level_reached,
            "final_score": self.final_score,
            "final_gold": self.final_gold,
            "plays": self.plays,
            "best_chain": self.best_chain,
            "hand_counts": self.hand_counts,
            "purchases": self.purchases,
            "magic_chosen": self.magic_chosen,
            "seed": self.seed,
        }


@dataclass
class BatchResult:
    """Results from multiple simulation runs."""
    runs: int
    wins: int
    win_rate: float
    avg_level: float
    avg_score: float
    avg_plays: float
    level_distribution: dict[int, int]

    def __str__(self):
        lines = [
            f"{'='*50}",
            f"  BATCH RESULTS ({self.runs} runs)",
            f"{'='*50}",
            f"  Win rate: {self.wins}/{self.runs} ({self.win_rate:.1f}%)",
            f"  Avg level reached: {self.avg_level:.2f}",
            f"  Avg final score: {self.avg_score:.1f}",
            f"  Avg plays: {self.avg_plays:.1f}",
            "",
            "  Level distribution:",
        ]

        for level in sorted(self.level_distribution.keys()):
            count = self.level_distribution[level]
            pct = count / self.runs * 100
            bar = "█" * int(pct / 2)
            lines.append(f"    Level {level}: {count:>3} ({pct:>5.1f}%) {bar}")

        lines.append(f"{'='*50}")
        return "\n".join(lines)

    def to_dict(self):
        return {
            "runs": self.runs,
            "wins": self.wins,
            "win_rate": self.win_rate,
            "avg_level": self.avg_level,
            "avg_score": self.avg_score,
            "avg_plays": self.avg_plays,
            "level_distribution": self.level_distribution,
        }


def simulate_run(game: GameState, strategy: BasicStrategy = None,
                 max_turns: int = MAX_TURNS) -> GameState:
    """Play a game to completion with a strategy. Returns the same game."""
    strategy = strategy or BasicStrategy()

    for _ in range(max_turns):
        if game.is_over:
            break

        if game.phase == Phase.PLAYING:
            if strategy.should_redraw(game):
                game.redraw()
                continue
            indices = strategy.select_cards_to_play(game)
            if indices:
                game.play(indices)
            else:
                game.pass_turn()

        elif game.phase == Phase.SHOPPING:
            item_id = strategy.select_purchase(game)
            if item_id is None or not game.buy(item_id):
                game.leave_shop()

        elif game.phase == Phase.CHOOSING_MAGIC:
            option, card_index = strategy.select_magic(game)
            game.choose_magic(option, card_index)
    else:
        logger.warning("Run stopped after %d turns in phase %s", max_turns, game.phase.name)

    return game


class Simulator:
    """
    Usage:
        sim = Simulator()
        result = sim.run(seed=7)
        print(result)

        batch = sim.run_batch(runs=100)
        print(batch)
    """

    def __init__(self, strategy: BasicStrategy = None, config: GameConfig = None):
        self.strategy = strategy or BasicStrategy()
        self.config = config or GameConfig()

    def run(self, seed: int = None, verbose: bool = False) -> RunSummary:
        config = GameConfig(
            hand_size=self.config.hand_size,
            level_targets=dict(self.config.level_targets),
            log_capacity=self.config.log_capacity,
            seed=seed,
        )
        game = simulate_run(GameState(config), self.strategy)

        if verbose:
            for event in game.log.events:
                print(f"  [L{event.level}] {event.message}")

        plays = game.log.events_of("play")
        chains = [e.data.get("chain_count", 1) for e in game.log.events_of("chain")]
        return RunSummary(
            victory=game.phase == Phase.FINISHED,
            level_reached=min(game.level, game.config.max_level),
            final_score=game.score,
            final_gold=game.gold,
            plays=len(plays),
            best_chain=max(chains, default=1 if plays else 0),
            hand_counts=dict(Counter(e.data["hand_type"] for e in plays)),
            purchases=[e.data["item"] for e in game.log.events_of("purchase")],
            magic_chosen=[e.data["option"] for e in game.log.events_of("magic")],
            seed=seed,
        )

    def run_batch(self, runs: int = 100, seed: int = None) -> BatchResult:
        """Run many games; a base seed makes the whole batch reproducible."""
        seeder = random.Random(seed)
        summaries = [self.run(seed=seeder.randrange(2**32)) for _ in range(runs)]

        wins = sum(1 for s in summaries if s.victory)
        distribution = Counter(s.level_reached for s in summaries)
        return BatchResult(
            runs=runs,
            wins=wins,
            win_rate=wins / runs * 100 if runs else 0.0,
            avg_level=sum(s.level_reached for s in summaries) / runs if runs else 0.0,
            avg_score=sum(s.final_score for s in summaries) / runs if runs else 0.0,
            avg_plays=sum(s.plays for s in summaries) / runs if runs else 0.0,
            level_distribution=dict(distribution),
        )
