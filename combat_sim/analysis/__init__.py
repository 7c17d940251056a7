"""Observers for tracing battles round by round."""

from .round_logger import RoundLogger

__all__ = ["RoundLogger"]
