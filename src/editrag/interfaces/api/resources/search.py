"""Search API resource."""

from typing import Any

import falcon
import falcon.asgi

from editrag.application.dto import Diagnostic, SuggestionContext
from editrag.application.services.retrieval_engine import RetrievalEngine


def _optional_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string")
    return value


def _parse_context(data: Any) -> SuggestionContext:
    if data is None:
        return SuggestionContext()
    if not isinstance(data, dict):
        raise ValueError("context must be an object")
    diagnostics = []
    for d in data.get("diagnostics") or []:
        if isinstance(d, str):
            diagnostics.append(Diagnostic(message=d))
        elif isinstance(d, dict) and isinstance(d.get("message"), str):
            diagnostics.append(Diagnostic(message=d["message"], severity=d.get("severity")))
        else:
            raise ValueError("diagnostics must be strings or objects with a message")
    return SuggestionContext(
        current_document=_optional_str(data, "current_document"),
        user_input=_optional_str(data, "user_input"),
        selection_line=_optional_str(data, "selection_line"),
        syntax_node_label=_optional_str(data, "syntax_node_label"),
        diagnostics=diagnostics,
    )


class SearchResource:
    """POST /v1/search - retrieve chunks relevant to the edit context."""

    def __init__(self, engine: RetrievalEngine) -> None:
        self._engine = engine

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Execute similarity search."""
        try:
            body = await req.get_media()
            query = _optional_str(body, "query")
            context = _parse_context(body.get("context"))
        except (falcon.MediaNotFoundError, falcon.MediaMalformedError, AttributeError):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid request body"}
            return
        except ValueError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        result = await self._engine.query(context, query)
        resp.media = {"result": result.to_dict() if result else None}
        resp.status = falcon.HTTP_200
