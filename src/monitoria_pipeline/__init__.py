"""Monitoria pipeline: attendance streaks and quota distribution."""

__version__ = "0.1.0"
