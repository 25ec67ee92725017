"""Retrieval engine - indexing, similarity search and provider lifecycle."""

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Iterable

from editrag.application.dto import SuggestionContext
from editrag.application.ports import Chunker, DocumentHandle, EmbeddingProvider, VectorIndex
from editrag.application.services.context_summarizer import summarize_context
from editrag.application.services.query_builder import build_search_query, truncate_query
from editrag.domain.entities import Chunk, EnhancedContext, RelevantChunk
from editrag.domain.exceptions import ProviderAuthenticationError, ProviderError
from editrag.domain.value_objects import EngineState, RetrievalConfig

logger = logging.getLogger(__name__)

QUERY_TOP_K = 5
LOCAL_SCHEME = "file"

ProviderFactory = Callable[[RetrievalConfig], EmbeddingProvider | Awaitable[EmbeddingProvider]]
ChunkerFactory = Callable[[int, int], Chunker]
IndexFactory = Callable[[], VectorIndex]


class RetrievalEngine:
    """Indexes open documents and retrieves chunks similar to the edit context.

    The embedding provider is built asynchronously. ``is_available()`` turns
    true as soon as initialization starts, ``is_ready()`` only once the
    provider exists. ``index_documents`` and ``query`` wait for an in-flight
    initialization instead of running without a provider.

    Each provider (re)initialization bumps a generation counter. Work started
    under an older generation never writes into the index of a newer one.
    Configuration updates are not serialized against indexing, so an update
    can clear the index while ``index_documents`` awaits embeddings. That call
    then returns 0 and drops its embeddings rather than adding vectors from
    the old embedding space to the cleared index, where they would be ranked
    against queries embedded by the new provider.
    """

    def __init__(
        self,
        config: RetrievalConfig,
        provider_factory: ProviderFactory,
        chunker_factory: ChunkerFactory,
        index_factory: IndexFactory,
    ) -> None:
        self._config = config
        self._provider_factory = provider_factory
        self._chunker_factory = chunker_factory
        self._index_factory = index_factory
        self._chunker = chunker_factory(config.chunk_size, config.chunk_overlap)
        self._index = index_factory()
        self._provider: EmbeddingProvider | None = None
        self._state = EngineState.DISABLED
        self._generation = 0
        self._init_task: asyncio.Task[None] | None = None
        self._last_error: Exception | None = None
        if config.enabled:
            self._begin_initialization()

    # --- lifecycle ---

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def last_error(self) -> Exception | None:
        """Most recent provider or initialization failure, for diagnostics."""
        return self._last_error

    @property
    def indexed_chunk_count(self) -> int:
        return len(self._index)

    def is_available(self) -> bool:
        """Enabled and either ready or still initializing."""
        return self._config.enabled and self._state in (
            EngineState.INITIALIZING,
            EngineState.READY,
        )

    def is_ready(self) -> bool:
        return self._state == EngineState.READY

    def get_config(self) -> RetrievalConfig:
        return self._config

    def _begin_initialization(self) -> None:
        self._generation += 1
        self._state = EngineState.INITIALIZING
        self._provider = None
        self._last_error = None
        self._index = self._index_factory()
        self._init_task = None
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Started on first use from inside a running loop.
            return
        self._init_task = loop.create_task(self._initialize(self._generation, self._config))

    async def _initialize(self, generation: int, config: RetrievalConfig) -> None:
        logger.info("Initializing embedding provider (generation %d)", generation)
        try:
            provider = self._provider_factory(config)
            if inspect.isawaitable(provider):
                provider = await provider
        except Exception as e:
            if generation != self._generation:
                return
            self._state = EngineState.FAILED
            self._last_error = e
            logger.error("Failed to initialize embedding provider: %s", e, exc_info=e)
            return

        if generation != self._generation:
            logger.debug("Discarding provider from superseded generation %d", generation)
            return
        self._provider = provider
        self._state = EngineState.READY
        logger.info("Retrieval engine ready (generation %d)", generation)

    async def wait_until_initialized(self) -> EngineState:
        """Await any in-flight initialization and return the resulting state."""
        loop = asyncio.get_running_loop()
        while self._state == EngineState.INITIALIZING:
            task = self._init_task
            # A task bound to another loop never completes here.
            if task is None or task.get_loop() is not loop:
                task = loop.create_task(self._initialize(self._generation, self._config))
                self._init_task = task
            await asyncio.shield(task)
        return self._state

    def _disable(self) -> None:
        self._generation += 1
        self._state = EngineState.DISABLED
        self._provider = None
        self._init_task = None
        self._index = self._index_factory()
        logger.info("Retrieval engine disabled")

    def update_config(self, **changes) -> RetrievalConfig:
        """Validate and apply a partial update. Raises ConfigurationError, changing nothing."""
        previous = self._config
        candidate = previous.merged(**changes)

        chunker = None
        if (candidate.chunk_size, candidate.chunk_overlap) != (
            previous.chunk_size,
            previous.chunk_overlap,
        ):
            chunker = self._chunker_factory(candidate.chunk_size, candidate.chunk_overlap)

        self._config = candidate
        if chunker is not None:
            self._chunker = chunker
            logger.info(
                "Chunker updated: size=%d overlap=%d",
                candidate.chunk_size,
                candidate.chunk_overlap,
            )

        if not candidate.enabled:
            if previous.enabled:
                self._disable()
        elif not previous.enabled or candidate.provider_identity != previous.provider_identity:
            logger.info("Embedding provider settings changed; clearing index")
            self._begin_initialization()
        return candidate

    def _record_provider_error(self, error: ProviderError, operation: str, generation: int) -> None:
        if generation != self._generation:
            return
        self._last_error = error
        if isinstance(error, ProviderAuthenticationError):
            self._state = EngineState.FAILED
            self._provider = None
            logger.error("Embedding provider rejected credentials during %s: %s", operation, error)
        else:
            logger.warning("Embedding provider failed during %s: %s", operation, error)

    # --- indexing ---

    def _collect_chunks(
        self,
        documents: Iterable[DocumentHandle],
        config: RetrievalConfig,
        chunker: Chunker,
    ) -> list[Chunk]:
        selected: list[tuple[DocumentHandle, str]] = []
        for doc in documents:
            if len(selected) >= config.max_source_documents:
                break
            if doc.scheme != LOCAL_SCHEME:
                continue
            try:
                text = doc.get_text()
            except Exception as e:
                logger.warning("Skipping unreadable document %s: %s", doc.path, e)
                continue
            if not text or not text.strip():
                continue
            selected.append((doc, text))

        chunks: list[Chunk] = []
        for doc, text in selected:
            try:
                pieces = [p for p in chunker.split(text) if p.strip()]
            except Exception as e:
                logger.warning("Skipping document %s that failed to chunk: %s", doc.path, e)
                continue
            chunks.extend(
                Chunk(
                    content=piece,
                    source_id=doc.path,
                    sequence_index=i,
                    language=doc.language_id,
                )
                for i, piece in enumerate(pieces)
            )
        return chunks

    async def index_documents(self, documents: Iterable[DocumentHandle]) -> int:
        """Chunk, embed and index documents. Returns the number of chunks added."""
        if not self._config.enabled:
            logger.debug("Skipping indexing - retrieval disabled")
            return 0
        if await self.wait_until_initialized() != EngineState.READY:
            logger.debug("Skipping indexing - engine state is %s", self._state)
            return 0

        config = self._config
        provider = self._provider
        generation = self._generation
        chunks = self._collect_chunks(documents, config, self._chunker)
        if not chunks:
            logger.debug("No document chunks to index")
            return 0

        logger.info("Embedding %d chunks", len(chunks))
        try:
            vectors = await provider.embed_batch([c.content for c in chunks])
            if len(vectors) != len(chunks):
                raise ProviderError(
                    f"Provider returned {len(vectors)} vectors for {len(chunks)} chunks"
                )
        except ProviderError as e:
            self._record_provider_error(e, "indexing", generation)
            return 0

        if generation != self._generation:
            logger.warning(
                "Embedding settings changed during indexing; discarding %d chunks",
                len(chunks),
            )
            return 0

        # Remove and add without yielding, so queries never see a partial update.
        if self._config.replace_existing_sources:
            removed = self._index.remove_sources({c.source_id for c in chunks})
            if removed:
                logger.debug("Replaced %d stale chunks", removed)
        self._index.add(list(zip(vectors, chunks)))
        logger.info("Indexed %d chunks from %d documents", len(chunks), len({c.source_id for c in chunks}))
        return len(chunks)

    # --- retrieval ---

    async def query(
        self,
        context: SuggestionContext | None = None,
        query_text: str | None = None,
    ) -> EnhancedContext | None:
        """Retrieve chunks similar to ``query_text`` or to a query built from ``context``.

        Returns None when retrieval is disabled, not ready, the query is
        empty, or the provider fails.
        """
        if not self._config.enabled:
            return None
        if await self.wait_until_initialized() != EngineState.READY:
            return None

        context = context or SuggestionContext()
        search_query = truncate_query(query_text) if query_text else build_search_query(context)
        if not search_query:
            logger.debug("No search query could be built from context")
            return None

        config = self._config
        provider = self._provider
        generation = self._generation
        try:
            vector = await provider.embed_one(search_query)
        except ProviderError as e:
            self._record_provider_error(e, "query", generation)
            return None
        if generation != self._generation:
            return None

        results = self._index.query(vector, QUERY_TOP_K)
        relevant = tuple(
            RelevantChunk(content=chunk.content, source_id=chunk.source_id, similarity=score)
            for chunk, score in results
            if score >= config.similarity_threshold
        )
        related = tuple(dict.fromkeys(c.source_id for c in relevant))
        summary = summarize_context(
            context.current_document,
            len(context.diagnostics),
            relevant,
        )
        logger.debug(
            "Query matched %d of %d candidates above threshold %.2f",
            len(relevant),
            len(results),
            config.similarity_threshold,
        )
        return EnhancedContext(
            relevant_chunks=relevant,
            related_sources=related,
            summary=summary,
        )
