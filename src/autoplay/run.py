# src/autoplay/run.py
from __future__ import annotations

import argparse
import csv
import logging
import os
from typing import Tuple

from tilesnake.config import Difficulty, GameMode
from tilesnake.scores import JsonScoreStore

from autoplay.env import SnakeEnv
from autoplay.policies import POLICIES

MAX_STEPS = 10_000


# --------------------------
# Episode loop
# --------------------------
def run_episode(env: SnakeEnv, policy: str, epsilon: float) -> Tuple[int, float, int]:
    """
    Play one session to the end with a scripted policy.

    Returns:
        steps: number of moves taken
        total: total return (sum of rewards)
        score: final game score
    """
    try:
        choose = POLICIES[policy]
    except KeyError:
        raise ValueError(f"Unknown policy: {policy}") from None

    obs = env.reset()
    total = 0.0
    steps = 0
    info = {"score": 0}

    while True:
        obs, r, done, info = env.step(choose(obs, env, epsilon))
        total += r
        steps += 1
        if done or steps >= MAX_STEPS:
            break

    return steps, total, info.get("score", 0)


def run_episodes(env: SnakeEnv, policy: str, episodes: int, epsilon: float, out_csv: str) -> list:
    rows = [("ep", "steps", "return", "score")]
    print(f"Running {episodes} episode(s) with policy={policy} ε={epsilon}")
    print("ep,steps,return,score")

    for ep in range(1, episodes + 1):
        steps, ret, score = run_episode(env, policy, epsilon)
        print(f"{ep},{steps},{ret:.3f},{score}")
        rows.append((ep, steps, float(f"{ret:.6f}"), score))

    with open(out_csv, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerows(rows)

    print(f"\nSaved results → {out_csv}")
    return rows


# --------------------------
# Main
# --------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tilesnake-autoplay",
        description="Play snake sessions headlessly with a scripted policy.",
    )
    parser.add_argument("--episodes", type=int, default=50)
    parser.add_argument("--policy", type=str, default="greedy", choices=sorted(POLICIES))
    parser.add_argument(
        "--epsilon",
        type=float,
        default=0.1,
        help="epsilon for eps-greedy (ignored otherwise)",
    )
    parser.add_argument(
        "--mode",
        type=GameMode,
        default=GameMode.CLASSIC,
        choices=list(GameMode),
        metavar="{" + ",".join(m.value for m in GameMode) + "}",
    )
    parser.add_argument(
        "--difficulty",
        type=Difficulty,
        default=Difficulty.MEDIUM,
        choices=list(Difficulty),
        metavar="{" + ",".join(d.value for d in Difficulty) + "}",
    )
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument(
        "--outdir",
        type=str,
        default="data/runs",
        help="CSV results are saved here",
    )
    parser.add_argument(
        "--scores",
        type=str,
        default=None,
        help="Optional JSON high-score file to update with new bests",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="log game events at INFO")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.episodes < 1:
        raise SystemExit("--episodes must be at least 1")

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    os.makedirs(args.outdir, exist_ok=True)
    out_csv = os.path.join(args.outdir, f"autoplay_{args.policy}.csv")

    store = JsonScoreStore(args.scores) if args.scores else None
    env = SnakeEnv(
        mode=args.mode,
        difficulty=args.difficulty,
        seed_value=args.seed,
        score_store=store,
    )
    try:
        run_episodes(env, args.policy, args.episodes, args.epsilon, out_csv)
    finally:
        env.close()

    if store is not None:
        best = store.best_score(args.mode, args.difficulty)
        print(f"Best {args.mode.value}/{args.difficulty.value} score: {best}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
