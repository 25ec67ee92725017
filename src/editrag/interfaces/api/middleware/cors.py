"""CORS middleware for browser-based editor clients."""

import falcon.asgi

_ALLOWED_METHODS = "GET, POST, PATCH, OPTIONS"


class CORSMiddleware:
    """Echo allowed origins and answer OPTIONS preflight requests.

    ``"*"`` in ``origins`` allows any origin. With no origins configured the
    middleware adds no headers.
    """

    def __init__(self, origins: list[str]) -> None:
        self._origins = set(origins)

    def _allowed_origin(self, req: falcon.asgi.Request) -> str | None:
        origin = req.get_header("Origin")
        if not origin:
            return None
        if "*" in self._origins or origin in self._origins:
            return origin
        return None

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Short-circuit preflight requests."""
        if req.method == "OPTIONS":
            resp.status = falcon.HTTP_204
            resp.complete = True

    async def process_response(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, resource, req_succeeded
    ) -> None:
        origin = self._allowed_origin(req)
        if origin is None:
            return
        resp.set_header("Access-Control-Allow-Origin", origin)
        resp.set_header("Vary", "Origin")
        resp.set_header("Access-Control-Allow-Methods", _ALLOWED_METHODS)
        resp.set_header("Access-Control-Allow-Headers", "Content-Type")
        resp.set_header("Access-Control-Max-Age", "86400")
