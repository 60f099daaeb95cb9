# src/autoplay/policies/__init__.py
"""Scripted policies for the headless autoplay environment."""

from autoplay.policies.random import policy_random
from autoplay.policies.greedy import policy_greedy
from autoplay.policies.eps_greedy import policy_eps_greedy

POLICIES = {
    "random": policy_random,
    "greedy": policy_greedy,
    "eps-greedy": policy_eps_greedy,
}

__all__ = ["POLICIES", "policy_random", "policy_greedy", "policy_eps_greedy"]
