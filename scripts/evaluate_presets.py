#!/usr/bin/env python3
"""Pit two AI settings against each other and report the match statistics."""

import argparse
import json
import logging

import numpy as np
from tqdm.auto import tqdm

from reversi.game import evaluate_policies
from reversi.players import Policy, RandomPolicy, SearchPolicy


def build_policy(kind: str, depth: int, seed: int) -> Policy:
    if kind == "random":
        return RandomPolicy(np.random.default_rng(seed))
    return SearchPolicy.from_settings(depth, kind)


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--episodes", type=int, default=4)
    parser.add_argument("--board-size", type=int, default=8)
    parser.add_argument("--policy-a", choices=["strong", "balanced", "weak", "random"], default="weak")
    parser.add_argument("--policy-b", choices=["strong", "balanced", "weak", "random"], default="strong")
    parser.add_argument("--depth-a", type=int, default=1)
    parser.add_argument("--depth-b", type=int, default=3)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--log-level", type=str, default="WARNING")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="[%(asctime)s] %(name)s: %(message)s", datefmt="%H:%M:%S")

    policy_a = build_policy(args.policy_a, args.depth_a, args.seed)
    policy_b = build_policy(args.policy_b, args.depth_b, args.seed + 1)

    result = evaluate_policies(
        policy_a,
        policy_b,
        episodes=args.episodes,
        board_size=args.board_size,
        progress=lambda it: tqdm(it, desc="Games"),
    )

    output = {
        "policy_a": repr(policy_a),
        "policy_b": repr(policy_b),
        **result.as_dict(),
    }
    print(json.dumps(output, indent=2))


if __name__ == "__main__":
    main()
