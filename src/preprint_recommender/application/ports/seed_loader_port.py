"""Port interface for loading seed papers."""

from abc import ABC, abstractmethod
from pathlib import Path

from preprint_recommender.domain.entities import SeedPaper


class SeedLoaderPort(ABC):
    """Abstract interface for reading the user's seed papers."""

    @abstractmethod
    async def load(self, folder: str | Path) -> list[SeedPaper]:
        """Load every valid seed paper found in ``folder``.

        Malformed entries are skipped; only the valid subset is returned,
        in no particular order.

        Raises:
            SeedFolderError: If the folder does not exist or is not a directory.
        """
        pass
