# src/autoplay/policies/greedy.py
from typing import List, Tuple

import numpy as np  # type: ignore

from tilesnake.geometry import Direction
from autoplay.env import ACTION_OF, left_of, right_of


def best_move_toward_food(hx: int, hy: int, fx: int, fy: int) -> List[Direction]:
    """
    Preference ordering of headings: those that shrink the Manhattan distance
    to the food first, then the rest. Collisions are not checked here.
    """
    prefs = []
    if fx < hx:
        prefs.append(Direction.LEFT)
    elif fx > hx:
        prefs.append(Direction.RIGHT)
    if fy < hy:
        prefs.append(Direction.UP)
    elif fy > hy:
        prefs.append(Direction.DOWN)
    for d in Direction:
        if d not in prefs:
            prefs.append(d)
    return prefs


def decode_obs(obs: np.ndarray, board_size: int) -> Tuple[int, int, int, int, Direction, bool, bool, bool]:
    """
    Inverse of env.observe() for the fields a scripted policy needs:
    grid coordinates of head and food, the heading, and the three danger flags.
    """
    hx_n, hy_n, fx_n, fy_n, dx, dy, dan_f, dan_l, dan_r = obs.tolist()
    denom = max(board_size - 1, 1)
    return (
        int(round(hx_n * denom)), int(round(hy_n * denom)),
        int(round(fx_n * denom)), int(round(fy_n * denom)),
        Direction((int(dx), int(dy))),
        bool(dan_f), bool(dan_l), bool(dan_r),
    )


def policy_greedy(obs: np.ndarray, env, epsilon: float = 0.0) -> int:
    """
    Greedy on food distance with simple safety:
    - prefer actions that reduce Manhattan distance
    - avoid any move flagged dangerous if possible
    - if all preferred moves dangerous, choose any safe move
    - if all moves look dangerous, fall back to random
    """
    hx, hy, fx, fy, heading, dan_f, dan_l, dan_r = decode_obs(obs, env.board_size)

    # Only forward/left/right carry a danger flag; reversing is ignored by the
    # engine (it would just continue forward), so treat it as unsafe.
    danger = {d: True for d in Direction}
    danger[heading] = dan_f
    danger[left_of(heading)] = dan_l
    danger[right_of(heading)] = dan_r

    for d in best_move_toward_food(hx, hy, fx, fy):
        if not danger[d]:
            return ACTION_OF[d]

    return int(env.np_random.integers(env.action_space_n))
