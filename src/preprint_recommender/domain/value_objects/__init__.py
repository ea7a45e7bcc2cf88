"""Value objects for the preprint recommender domain."""

from .date_window import DateWindow
from .match import MatchResult, SeedMatchGroup

__all__ = ["DateWindow", "MatchResult", "SeedMatchGroup"]
