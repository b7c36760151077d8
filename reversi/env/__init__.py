"""gymnasium environment wrapper."""

from .gym_env import ReversiEnv

__all__ = ["ReversiEnv"]
