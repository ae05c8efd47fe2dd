"""Minimal JSON-over-HTTP client for the messenger API gateway."""

from __future__ import annotations

import json
from typing import Any, Mapping

import requests

DEFAULT_TIMEOUT = 5.0


class GatewayError(Exception):
    """Raised when a call to the API gateway fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GatewayClient:
    """Sends JSON requests to the gateway and returns decoded JSON replies."""

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def post_json(self, path: str, payload: Any) -> Any:
        """POST ``payload`` as JSON to ``path`` and return the decoded reply."""
        try:
            body = json.dumps(payload, ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise GatewayError(f"не удалось сериализовать запрос: {exc}") from exc
        return self._send(
            "POST",
            self._url(path),
            data=body,
            headers={"Content-Type": "application/json"},
        )

    def get_json(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        """GET ``path`` with query ``params`` and return the decoded reply."""
        query = {
            key: str(value)
            for key, value in (params or {}).items()
            if value is not None
        }
        return self._send("GET", self._url(path), params=query or None)

    def _send(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise GatewayError(f"ошибка при выполнении запроса: {exc}") from exc
        with response:
            if response.status_code != 200:
                raise GatewayError(
                    f"API Gateway вернул статус {response.status_code}",
                    status_code=response.status_code,
                )
            try:
                return json.loads(response.content)
            except ValueError as exc:
                raise GatewayError(f"не удалось распарсить ответ: {exc}") from exc