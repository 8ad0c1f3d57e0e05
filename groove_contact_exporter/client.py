"""Groove GraphQL client: one POST per conversations page."""

import json
import sys
from pathlib import Path

import httpx

from .settings import ConfigurationError, get_settings

REQUEST_TIMEOUT = 30.0


class TransportError(Exception):
    """Request failed or the response body was unusable."""


class ApiError(Exception):
    """The API answered with a GraphQL `errors` payload."""

    def __init__(self, errors):
        self.errors = errors
        super().__init__(f"API Error: {errors}")


class GrooveClient:
    """Thin client for the Groove conversations GraphQL endpoint."""

    def __init__(self, save_dir: Path | None = None):
        self._settings = get_settings()
        if not self._settings.auth_token:
            raise ConfigurationError("AUTH_TOKEN is not set")
        self._client = httpx.Client(
            headers={
                "Authorization": f"Bearer {self._settings.auth_token}",
                "Content-Type": "application/json",
                "User-Agent": self._settings.user_agent,
                "Referer": self._settings.referer,
                "DNT": "1",
            },
            timeout=REQUEST_TIMEOUT,
        )
        self.requests = 0
        self.save_dir = Path(save_dir) if save_dir else None
        if self.save_dir is not None:
            self.save_dir.mkdir(parents=True, exist_ok=True)

    def _save(self, body: dict, page: int):
        """Write a parsed response to save_dir/response_<page>.json."""
        path = self.save_dir / f"response_{page}.json"
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(body, f, indent=2, ensure_ascii=False)
        except OSError as exc:
            sys.stderr.write(f"\033[2K\r[groove] Could not save {path}: {exc}\n")
            sys.stderr.flush()

    def send(self, payload: dict, page: int = 1) -> dict:
        """POST one request body and return the parsed response.

        Raises TransportError when nothing usable came back and ApiError when
        the body carries `errors`. Every JSON body, error bodies included, is
        saved under `page` when a save_dir is set.
        """
        try:
            resp = self._client.post(self._settings.api_url, json=payload)
        except httpx.HTTPError as exc:
            raise TransportError(f"{type(exc).__name__}: {exc}") from exc
        finally:
            self.requests += 1

        if not resp.content:
            raise TransportError("Empty response received")
        try:
            body = resp.json()
        except ValueError as exc:
            raise TransportError(f"Failed to parse JSON: {exc}") from exc

        if self.save_dir is not None:
            self._save(body, page)

        if not isinstance(body, dict):
            raise TransportError(f"Unexpected response body: {type(body).__name__}")
        if body.get("errors"):
            raise ApiError(body["errors"])
        if resp.status_code >= 400:
            raise TransportError(f"HTTP {resp.status_code}")
        return body

    def close(self):
        self._client.close()
