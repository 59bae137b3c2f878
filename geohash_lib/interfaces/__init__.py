"""
Core value types shared by the hash pipeline, the fetcher and the CLI.
"""

from .coordinate import Coordinate

__all__ = ["Coordinate"]
