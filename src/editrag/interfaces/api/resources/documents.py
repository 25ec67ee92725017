"""Document indexing API resource."""

from typing import Any

import falcon
import falcon.asgi

from editrag.application.dto import SourceDocument
from editrag.application.services.retrieval_engine import RetrievalEngine


def _parse_document(item: Any) -> SourceDocument:
    if not isinstance(item, dict):
        raise ValueError("Each document must be an object")
    path = item.get("path")
    text = item.get("text")
    if not isinstance(path, str) or not path:
        raise ValueError("Document path is required")
    if not isinstance(text, str):
        raise ValueError(f"Document text is required for {path}")
    return SourceDocument(
        path=path,
        text=text,
        language_id=str(item.get("language_id") or "plaintext"),
        scheme=str(item.get("scheme") or "file"),
    )


class DocumentsResource:
    """POST /v1/documents - index a batch of open documents."""

    def __init__(self, engine: RetrievalEngine) -> None:
        self._engine = engine

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Chunk, embed and index documents."""
        try:
            body = await req.get_media()
            items = body.get("documents")
            if not isinstance(items, list):
                raise ValueError("documents must be a list")
            documents = [_parse_document(item) for item in items]
        except (falcon.MediaNotFoundError, falcon.MediaMalformedError, AttributeError):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid request body"}
            return
        except ValueError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        indexed = await self._engine.index_documents(documents)
        resp.media = {
            "indexed_chunks": indexed,
            "total_chunks": self._engine.indexed_chunk_count,
        }
        resp.status = falcon.HTTP_200
