"""Let HTML forms reach PUT, PATCH and DELETE routes.

Browsers can only submit GET and POST. A POST whose query string carries
``_method=PUT|PATCH|DELETE`` is dispatched as that method.
"""

from starlette.datastructures import QueryParams
from starlette.types import ASGIApp, Receive, Scope, Send

OVERRIDABLE_METHODS = frozenset({"PUT", "PATCH", "DELETE"})


class MethodOverrideMiddleware:
    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["method"] == "POST":
            query = QueryParams(scope.get("query_string", b""))
            override = query.get("_method", "").upper()
            if override in OVERRIDABLE_METHODS:
                scope = {**scope, "method": override}
        await self.app(scope, receive, send)
