"""In-memory GitHub REST API served through ``httpx.MockTransport``."""

from __future__ import annotations

import collections
import dataclasses
import json
import secrets
import typing as typ

import httpx

from ghrepo.transport import GitHubTransport, GitHubTransportConfig

BASE_URL = "https://api.example.test"
TOKEN = secrets.token_hex(8)

_NOT_FOUND = {"message": "Not Found"}


@dataclasses.dataclass(slots=True)
class RecordedRequest:
    """One request seen by :class:`FakeGitHub`."""

    method: str
    path: str
    params: dict[str, str]
    body: typ.Any
    headers: httpx.Headers


@dataclasses.dataclass(frozen=True, slots=True)
class _Reply:
    status: int
    payload: typ.Any
    next_url: str | None


class FakeGitHub:
    """Route table of canned GitHub responses.

    Responses are queued per ``(method, path, page)``. Each request consumes
    the head of its queue; the last reply stays in place and answers any
    further requests. Unrouted requests get ``404 Not Found``.
    """

    def __init__(self) -> None:
        """Start with no routes and no recorded requests."""
        self.requests: list[RecordedRequest] = []
        self._routes: dict[tuple[str, str, str | None], collections.deque[_Reply]] = (
            collections.defaultdict(collections.deque)
        )

    def add(  # noqa: PLR0913
        self,
        method: str,
        path: str,
        payload: typ.Any = None,
        *,
        status: int = 200,
        page: int | None = None,
        next_page: int | None = None,
    ) -> None:
        """Queue a reply for ``method path``.

        ``page`` matches requests carrying ``?page=N``. ``next_page`` adds a
        ``Link: rel="next"`` header pointing at the same path with that page.
        """
        next_url = None
        if next_page is not None:
            next_url = f"{BASE_URL}{path}?page={next_page}"
        key = (method.upper(), path, str(page) if page is not None else None)
        self._routes[key].append(_Reply(status, payload, next_url))

    def handle(self, request: httpx.Request) -> httpx.Response:
        """Answer ``request`` from the route table."""
        body = json.loads(request.content.decode("utf-8")) if request.content else None
        params = dict(request.url.params)
        self.requests.append(
            RecordedRequest(
                method=request.method,
                path=request.url.path,
                params=params,
                body=body,
                headers=request.headers,
            )
        )
        queue = self._routes.get((request.method, request.url.path, params.get("page")))
        if not queue:
            return httpx.Response(404, json=_NOT_FOUND)
        reply = queue.popleft() if len(queue) > 1 else queue[0]
        headers = {}
        if reply.next_url is not None:
            headers["Link"] = f'<{reply.next_url}>; rel="next"'
        if reply.payload is None:
            return httpx.Response(reply.status, headers=headers)
        return httpx.Response(reply.status, json=reply.payload, headers=headers)

    def calls(self, method: str, path: str) -> list[RecordedRequest]:
        """Return the recorded requests for ``method path``."""
        return [
            request
            for request in self.requests
            if request.method == method.upper() and request.path == path
        ]

    def transport(self, **config: typ.Any) -> GitHubTransport:
        """Return a transport wired to this fake.

        Keyword arguments override :class:`GitHubTransportConfig` fields; the
        authenticated login defaults to ``octo``.
        """
        config.setdefault("login", "octo")
        http_client = httpx.Client(
            transport=httpx.MockTransport(self.handle), base_url=BASE_URL
        )
        return GitHubTransport(
            GitHubTransportConfig(token=TOKEN, base_url=BASE_URL, **config),
            http_client=http_client,
        )
