"""Authenticated GitHub REST transport.

The transport owns the HTTP session, turns non-2xx responses into
:class:`GitHubAPIError`, decodes JSON bodies into msgspec records and extracts
the ``rel="next"`` locator from the ``Link`` header. It knows nothing about
repositories, binding or caching; those layers sit on top of it.
"""

from __future__ import annotations

import time
import typing as typ

import httpx
import msgspec

from ghrepo.paging.page import Page

from .config import GitHubTransportConfig
from .errors import GitHubAPIError, GitHubConfigError, GitHubResponseShapeError
from .observability import TransportEventLogger

if typ.TYPE_CHECKING:
    import collections.abc as cabc

_HTTP_ERROR_STATUS_THRESHOLD = 400

type QueryParams = cabc.Mapping[str, str | int | bool]


class _Identity(msgspec.Struct, kw_only=True, frozen=True):
    """Subset of ``GET /user`` needed to identify the token owner."""

    login: str


class GitHubTransport:
    """Synchronous GitHub REST transport over :class:`httpx.Client`."""

    def __init__(
        self,
        config: GitHubTransportConfig,
        *,
        http_client: httpx.Client | None = None,
        event_logger: TransportEventLogger | None = None,
    ) -> None:
        """Initialise the transport with the provided API configuration."""
        if not config.token.strip():
            raise GitHubConfigError.empty_token()

        self._config = config
        self._events = event_logger or TransportEventLogger()
        self._login = config.login
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(
            base_url=config.base_url,
            timeout=config.timeout_s,
            follow_redirects=True,
        )
        self._headers = {
            "Authorization": f"Bearer {config.token}",
            "User-Agent": config.user_agent,
            "Accept": "application/vnd.github+json",
        }

    @property
    def config(self) -> GitHubTransportConfig:
        """Return the configuration this transport was built with."""
        return self._config

    @property
    def authenticated_login(self) -> str:
        """Return the login of the token owner.

        Uses the configured login when present, otherwise asks ``GET /user``
        once and remembers the answer.
        """
        if self._login is None:
            self._login = self.fetch_one("/user", _Identity).login
        return self._login

    def close(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> typ.Self:
        """Return the transport for use in a ``with`` block."""
        return self

    def __exit__(self, *exc_info: object) -> None:
        """Close owned HTTP resources on exit."""
        self.close()

    def fetch_one[T](self, path: str, record_type: type[T]) -> T:
        """GET ``path`` and decode the body into ``record_type``."""
        response = self._request("GET", path)
        return self._decode(response, record_type)

    def fetch_page[T](
        self,
        path: str,
        record_type: type[T],
        locator: str | None = None,
        *,
        params: QueryParams | None = None,
    ) -> Page[T]:
        """GET one page of a list endpoint.

        Without a ``locator`` the first page of ``path`` is requested with the
        configured ``per_page``. With a locator the URL advertised by the
        previous page is requested verbatim, since it already carries the
        query string GitHub expects.
        """
        if locator is None:
            query: dict[str, str | int | bool] = {"per_page": self._config.page_size}
            query.update(params or {})
            response = self._request("GET", path, params=query)
        else:
            response = self._request("GET", locator)

        items = self._decode(response, list[record_type])  # type: ignore[valid-type]
        next_locator = _next_link(response)
        self._events.log_page_fetched(
            str(response.request.url), len(items), has_next=next_locator is not None
        )
        return Page(items=tuple(items), next_locator=next_locator)

    def fetch_all[T](
        self,
        path: str,
        record_type: type[T],
        *,
        params: QueryParams | None = None,
    ) -> list[T]:
        """Follow every page of ``path`` and return all records in order."""
        records: list[T] = []
        page = self.fetch_page(path, record_type, params=params)
        records.extend(page.items)
        while page.next_locator is not None:
            page = self.fetch_page(path, record_type, page.next_locator)
            records.extend(page.items)
        return records

    @typ.overload
    def send(
        self,
        path: str,
        method: str,
        body: cabc.Mapping[str, object] | None = ...,
        *,
        record_type: None = ...,
        params: QueryParams | None = ...,
    ) -> None: ...

    @typ.overload
    def send[T](
        self,
        path: str,
        method: str,
        body: cabc.Mapping[str, object] | None = ...,
        *,
        record_type: type[T],
        params: QueryParams | None = ...,
    ) -> T: ...

    def send[T](
        self,
        path: str,
        method: str,
        body: cabc.Mapping[str, object] | None = None,
        *,
        record_type: type[T] | None = None,
        params: QueryParams | None = None,
    ) -> T | None:
        """Issue a write request and optionally decode the response.

        ``body`` is serialised as JSON when given. When ``record_type`` is
        ``None`` the response body is ignored, which suits the many endpoints
        that answer ``204 No Content``.
        """
        response = self._request(method, path, params=params, json=body)
        if record_type is None:
            return None
        return self._decode(response, record_type)

    def _request(
        self,
        method: str,
        url: str,
        *,
        params: QueryParams | None = None,
        json: cabc.Mapping[str, object] | None = None,
    ) -> httpx.Response:
        started = time.monotonic()
        content = msgspec.json.encode(json) if json is not None else None
        headers = dict(self._headers)
        if content is not None:
            headers["Content-Type"] = "application/json"
        try:
            response = self._client.request(
                method,
                url,
                params=dict(params) if params else None,
                content=content,
                headers=headers,
            )
        except httpx.HTTPError as exc:
            error = GitHubAPIError.network_error(method, url, exc)
            self._events.log_request_failed(method, url, error)
            raise error from exc

        if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
            error = GitHubAPIError.http_error(
                method, url, response.status_code, response.text
            )
            self._events.log_request_failed(method, url, error)
            raise error

        self._events.log_request_completed(
            method, url, response.status_code, time.monotonic() - started
        )
        return response

    @staticmethod
    def _decode[T](response: httpx.Response, record_type: type[T]) -> T:
        try:
            return msgspec.json.decode(response.content, type=record_type)
        except msgspec.DecodeError as exc:
            raise GitHubResponseShapeError.undecodable(
                str(response.request.url), str(exc)
            ) from exc


def _next_link(response: httpx.Response) -> str | None:
    """Return the ``rel="next"`` URL from the ``Link`` header, if any."""
    next_link = response.links.get("next")
    if not next_link:
        return None
    url = next_link.get("url")
    return url or None
