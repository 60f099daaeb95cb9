"""Headless autoplay: a Gym-like environment over GameSession plus scripted policies."""
