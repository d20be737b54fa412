"""SQLAlchemy models package."""

from .reward import Reward  # noqa: F401

__all__ = ["Reward"]
