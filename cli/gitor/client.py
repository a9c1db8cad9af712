"""HTTP client for the Gitor server API."""

import base64
from typing import Any

import httpx

from gitor.config import ClientConfig


class ApiError(Exception):
    """Raised when the server answers with anything but 200."""

    MESSAGES = {
        401: "Unauthorized",
        404: "Not found",
        500: "Internal server error",
    }

    def __init__(self, status_code: int, detail: str | None = None) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"[{status_code}] {detail or self.message}")

    @property
    def message(self) -> str:
        """Short human readable description of the failure."""
        return self.MESSAGES.get(self.status_code, "Unknown error")


def encode_token(token: str) -> str:
    """Encode a token for the Authorization header."""
    return base64.b64encode(token.encode("utf-8")).decode("ascii")


class GitorClient:
    """
    Thin wrapper around the four repository routes.

    Takes a ready httpx.Client whose base URL and Authorization header are
    already set; use from_config() to build one from the client config.
    """

    def __init__(self, http: httpx.Client):
        self._http = http

    @classmethod
    def from_config(cls, config: ClientConfig, timeout: float = 30.0) -> "GitorClient":
        http = httpx.Client(
            base_url=config.server_url,
            headers={"Authorization": encode_token(config.token)},
            timeout=timeout,
        )
        return cls(http)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "GitorClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _get(self, path: str, params: dict[str, str] | None = None) -> Any:
        response = self._http.get(path, params=params)
        if response.status_code != 200:
            try:
                detail = response.json().get("detail")
            except (ValueError, AttributeError):
                detail = response.text or None
            raise ApiError(response.status_code, detail)
        try:
            return response.json()
        except ValueError:
            raise ApiError(response.status_code, f"Response is not JSON: {response.text[:200]}")

    def list_repositories(self, search: str | None = None) -> list[str]:
        params = {"search": search} if search else None
        return self._get("/get_repositories", params) or []

    def get_repository(self, name: str) -> dict[str, Any]:
        return self._get("/get_repository", {"repoName": name})

    def new_repository(self, name: str) -> dict[str, Any]:
        return self._get("/new_repository", {"repoName": name})

    def delete_repository(self, name: str) -> str:
        return self._get("/delete_repository", {"repoName": name})
