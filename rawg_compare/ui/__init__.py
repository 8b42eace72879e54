"""Console user interface for the RAWG comparison client."""

from .app import CompareApp, LoopState

__all__ = ["CompareApp", "LoopState"]
