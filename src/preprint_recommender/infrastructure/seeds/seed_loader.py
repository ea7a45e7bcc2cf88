"""Seed folder loader.

Every regular file in the seed folder is expected to hold one JSON object
with ``title`` and ``abstract`` and, optionally, a precomputed
``embedding``. Files are read concurrently in the default executor.
"""

import asyncio
import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from preprint_recommender.application.ports.seed_loader_port import SeedLoaderPort
from preprint_recommender.domain.entities import SeedPaper
from preprint_recommender.shared.exceptions import SeedFolderError
from preprint_recommender.shared.utils.logger import get_logger

logger = get_logger(__name__)


class SeedFolderLoader(SeedLoaderPort):
    """Loader for a folder of JSON seed paper files.

    A stored embedding that is empty, or whose length differs from
    ``embedding_dimension``, is dropped so the seed gets embedded again.
    """

    def __init__(
        self, encoding: str = "utf-8", embedding_dimension: int | None = None
    ):
        self.encoding = encoding
        self.embedding_dimension = embedding_dimension

    async def load(self, folder: str | Path) -> list[SeedPaper]:
        """Load all valid seed papers from a folder.

        Args:
            folder: Directory containing the seed files

        Returns:
            Seed papers parsed from the valid files

        Raises:
            SeedFolderError: If the folder is missing or not a directory
        """
        folder_path = Path(folder)
        if not folder_path.exists():
            raise SeedFolderError(f"Seed folder not found: {folder_path}")
        if not folder_path.is_dir():
            raise SeedFolderError(f"Seed folder is not a directory: {folder_path}")

        files = sorted(path for path in folder_path.iterdir() if path.is_file())
        loop = asyncio.get_running_loop()
        results = await asyncio.gather(
            *(loop.run_in_executor(None, self._load_file, path) for path in files)
        )

        seeds = [seed for seed in results if seed is not None]
        logger.info(
            "seed_folder_loaded",
            folder=str(folder_path),
            files=len(files),
            loaded=len(seeds),
            skipped=len(files) - len(seeds),
        )
        return seeds

    def _load_file(self, file_path: Path) -> SeedPaper | None:
        """Read and parse one seed file, returning None if it is invalid."""
        try:
            data: Any = json.loads(file_path.read_text(encoding=self.encoding))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("seed_file_unreadable", path=str(file_path), error=str(e))
            return None

        if not isinstance(data, dict):
            logger.warning(
                "seed_file_skipped", path=str(file_path), reason="not a JSON object"
            )
            return None

        embedding = data.get("embedding")
        if isinstance(embedding, list) and not self._fits_dimension(embedding):
            logger.warning(
                "seed_embedding_discarded",
                path=str(file_path),
                length=len(embedding),
                expected=self.embedding_dimension,
            )
            embedding = None

        try:
            return SeedPaper(
                title=data.get("title") or "",
                abstract=data.get("abstract") or "",
                embedding=embedding,
                source_path=str(file_path),
            )
        except ValidationError as e:
            logger.warning(
                "seed_file_skipped",
                path=str(file_path),
                reason="missing or invalid fields",
                error=str(e),
            )
            return None

    def _fits_dimension(self, embedding: list[Any]) -> bool:
        if not embedding:
            return False
        if self.embedding_dimension is None:
            return True
        return len(embedding) == self.embedding_dimension
