"""Async HTTP client for the design API."""

from typing import Any

import httpx
import structlog

from designdesk.errors import AccessDeniedError, ApiError, AuthenticationError, NotFoundError, UserError, ValidationError

logger = structlog.get_logger(__name__)

# (field name, filename, content, mime type)
UploadPart = tuple[str, str, bytes, str]


def error_from_response(response: httpx.Response) -> UserError:
    """Map a non-OK response to the matching UserError subclass."""
    message = _server_message(response) or f"{response.request.method} {response.request.url.path} failed"
    status_code = response.status_code

    if status_code == 400:
        return ValidationError(message)
    if status_code == 401:
        return AuthenticationError(message)
    if status_code == 403:
        return AccessDeniedError(message)
    if status_code == 404:
        return NotFoundError(message)
    return ApiError(message, status_code=status_code)


def _server_message(response: httpx.Response) -> str | None:
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict):
        for key in ("error", "message"):
            if isinstance(data.get(key), str) and data[key]:
                return str(data[key])
    return None


def unwrap(data: Any, key: str | None = None) -> Any:
    """Extract the payload from an API envelope.

    Some endpoints reply ``{"success": false, "error": ...}`` with a 200
    status; those are raised as ApiError. When ``key`` is given and present
    in the envelope, its value is returned, otherwise the whole body.
    """
    if isinstance(data, dict):
        if data.get("success") is False:
            raise ApiError(str(data.get("error") or "Request was not successful"), status_code=200)
        if key is not None and key in data:
            return data[key]
    return data


class ApiClient:
    """Thin wrapper around httpx.AsyncClient with error mapping and JSON decoding."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._http = httpx.AsyncClient(base_url=base_url, timeout=timeout, headers=headers, transport=transport)

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        data: dict[str, str] | None = None,
        files: list[tuple[str, tuple[str, bytes, str]]] | None = None,
        headers: dict[str, str] | None = None,
        content: bytes | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body (None when empty)."""
        request = self._http.build_request(
            method, path, params=params, json=json, data=data, files=files, headers=headers, content=content
        )
        return await self._send(request)

    async def _send(self, request: httpx.Request) -> Any:
        method, path = request.method, request.url.path
        try:
            response = await self._http.send(request)
        except httpx.HTTPError as e:
            logger.warning("api_request_failed", method=method, path=path, error=str(e))
            raise ApiError(f"Request failed: {e}") from e

        if response.is_error:
            error = error_from_response(response)
            logger.debug("api_error_response", method=method, path=path, status_code=response.status_code, error=str(error))
            raise error

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(f"Invalid JSON in response from {path}", status_code=response.status_code) from e

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Any = None) -> Any:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, json: Any = None) -> Any:
        return await self.request("PUT", path, json=json)

    async def patch(self, path: str, json: Any = None) -> Any:
        return await self.request("PATCH", path, json=json)

    async def delete(self, path: str, json: Any = None) -> Any:
        return await self.request("DELETE", path, json=json)

    async def upload(self, path: str, parts: list[UploadPart], fields: dict[str, str] | None = None) -> Any:
        """POST a multipart form with file parts and plain fields."""
        files = [(name, (filename, content, mime_type)) for name, filename, content, mime_type in parts]
        return await self.request("POST", path, data=fields, files=files)

    async def put_bytes(self, url: str, content: bytes, mime_type: str, token: str | None = None) -> Any:
        """PUT raw bytes to an absolute URL, e.g. a direct-to-blob upload target.

        The API bearer token is never sent to the upload target; only the
        ticket's own token is, when there is one.
        """
        request = self._http.build_request("PUT", url, content=content, headers={"Content-Type": mime_type})
        if token:
            request.headers["Authorization"] = f"Bearer {token}"
        else:
            request.headers.pop("Authorization", None)
        return await self._send(request)

    async def aclose(self) -> None:
        await self._http.aclose()
