#!/usr/bin/env python3
"""Play one AI tier against another and report the outcome."""

import argparse
import json
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from tqdm.auto import tqdm

from pulimeka.ai import SearchConfig
from pulimeka.core import Difficulty
from pulimeka.evaluation import evaluate_tiers


def build_search_config(
    cfg: Dict[str, Any],
    placement_depth: Optional[int] = None,
    movement_depth: Optional[int] = None,
) -> SearchConfig:
    """Merge the ``search`` block of a config file with command-line depth overrides."""
    search_cfg = dict(cfg.get("search") or {})
    if placement_depth is not None:
        search_cfg["placement_depth"] = placement_depth
    if movement_depth is not None:
        search_cfg["movement_depth"] = movement_depth
    return SearchConfig(**search_cfg)


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", type=str, default="configs/evaluate.yaml")
    parser.add_argument("--tiger", choices=[d.value for d in Difficulty])
    parser.add_argument("--goat", choices=[d.value for d in Difficulty])
    parser.add_argument("--episodes", type=int)
    parser.add_argument("--max-ply", type=int)
    parser.add_argument("--seed", type=int)
    parser.add_argument("--placement-depth", type=int)
    parser.add_argument("--movement-depth", type=int)
    args = parser.parse_args()

    cfg = {}
    if args.config:
        cfg_path = Path(args.config)
        if cfg_path.exists():
            cfg = yaml.safe_load(cfg_path.read_text()) or {}
    tiger = args.tiger if args.tiger is not None else cfg.get("tiger_difficulty", "medium")
    goat = args.goat if args.goat is not None else cfg.get("goat_difficulty", "medium")
    episodes = args.episodes if args.episodes is not None else cfg.get("episodes", 10)
    max_ply = args.max_ply if args.max_ply is not None else cfg.get("max_ply", 300)
    seed = args.seed if args.seed is not None else cfg.get("seed")
    search = build_search_config(cfg, args.placement_depth, args.movement_depth)

    result = evaluate_tiers(
        Difficulty(tiger),
        Difficulty(goat),
        episodes=episodes,
        max_ply=max_ply,
        seed=seed,
        search_config=search,
        progress=lambda it: tqdm(it, desc=f"{tiger} tiger vs {goat} goat"),
    )
    print(
        json.dumps(
            {
                "tiger": tiger,
                "goat": goat,
                "games": result.games_played,
                "tiger_wins": result.tiger_wins,
                "goat_wins": result.goat_wins,
                "draws": result.draws,
                "tiger_winrate": result.winrate_tiger(),
                "goat_winrate": result.winrate_goat(),
                "average_length": result.average_length,
            },
            indent=2,
        )
    )


if __name__ == "__main__":
    main()
