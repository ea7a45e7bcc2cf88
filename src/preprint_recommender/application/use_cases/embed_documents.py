"""Embed documents use case.

Wraps the embedding backend with bounded, fixed-cooldown retries on
rate-limit signals. Every other backend failure propagates immediately.
"""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from preprint_recommender.application.ports.embedding_service_port import (
    EmbeddingServicePort,
)
from preprint_recommender.domain.entities import EmbeddableDocument
from preprint_recommender.shared.exceptions import (
    EmbeddingRetriesExhaustedError,
    RateLimitedError,
)
from preprint_recommender.shared.utils.logger import get_logger

logger = get_logger(__name__)

DocumentT = TypeVar("DocumentT", bound=EmbeddableDocument)

ProgressCallback = Callable[[int, int], None]


class EmbedDocumentsUseCase:
    """Use case for generating embeddings one document at a time."""

    def __init__(
        self,
        embedding_service: EmbeddingServicePort,
        max_retries: int = 5,
        cooldown_seconds: float = 60.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """Initialize the use case.

        Args:
            embedding_service: Backend producing embedding vectors
            max_retries: Total attempts per document while rate limited
            cooldown_seconds: Pause after each rate-limited attempt
            sleep: Coroutine used for the cooldown
        """
        if max_retries < 1:
            raise ValueError(f"max_retries must be >= 1, got {max_retries}")
        self.embedding_service = embedding_service
        self.max_retries = max_retries
        self.cooldown_seconds = cooldown_seconds
        self._sleep = sleep

    async def embed(self, document: DocumentT) -> DocumentT:
        """Embed a single document.

        The input is left untouched; a copy carrying the vector is returned.

        Args:
            document: Preprint or seed paper without an embedding

        Returns:
            The embedded copy of ``document``

        Raises:
            EmbeddingRetriesExhaustedError: If all attempts were rate limited
            EmbeddingServiceError: On any other backend failure
        """
        text = document.embedding_text
        logger.debug("generating_embedding", title=document.title)

        retrying = AsyncRetrying(
            retry=retry_if_exception_type(RateLimitedError),
            stop=stop_after_attempt(self.max_retries),
            wait=wait_fixed(self.cooldown_seconds),
            sleep=self._sleep,
            before_sleep=self._log_rate_limited,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    vector = await self.embedding_service.embed_text(text)
        except RetryError as e:
            logger.error(
                "embedding_retries_exhausted",
                title=document.title,
                attempts=self.max_retries,
            )
            raise EmbeddingRetriesExhaustedError(
                title=document.title, attempts=self.max_retries
            ) from e.last_attempt.exception()

        logger.debug(
            "embedding_generated", title=document.title, dimension=len(vector)
        )
        return document.with_embedding(vector)

    async def embed_all(
        self,
        documents: Sequence[DocumentT],
        progress: ProgressCallback | None = None,
    ) -> list[DocumentT]:
        """Embed documents sequentially, preserving their order.

        Documents that already carry an embedding are returned as they are.

        Args:
            documents: Documents to embed
            progress: Optional callback receiving (completed, total)

        Returns:
            Embedded documents in input order
        """
        embedded: list[DocumentT] = []
        reused = 0

        for index, document in enumerate(documents, start=1):
            if document.has_embedding:
                embedded.append(document)
                reused += 1
            else:
                embedded.append(await self.embed(document))
            if progress:
                progress(index, len(documents))

        logger.info(
            "documents_embedded",
            total=len(documents),
            generated=len(documents) - reused,
            reused=reused,
            model=self.embedding_service.get_model_name(),
        )
        return embedded

    def _log_rate_limited(self, retry_state: RetryCallState) -> None:
        """Log each rate-limited attempt before cooling down."""
        error = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            "embedding_rate_limited",
            attempt=retry_state.attempt_number,
            max_retries=self.max_retries,
            cooldown_seconds=self.cooldown_seconds,
            error=str(error),
        )
