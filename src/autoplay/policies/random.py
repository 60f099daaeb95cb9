# src/autoplay/policies/random.py
import numpy as np  # type: ignore


def policy_random(obs: np.ndarray, env, epsilon: float = 0.0) -> int:
    """
    Random policy: pick a uniformly random action from the env's generator.
    Reversals are simply ignored by the engine, so some picks are no-ops.
    """
    return int(env.np_random.integers(env.action_space_n))
