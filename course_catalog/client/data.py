"""Data-access client for the catalog API.

Mirrors what the browser client needs: calls return plain dicts, validation
failures come back as a list of messages for the form to render, and
anything the UI cannot recover from raises.
"""
import time
from typing import Callable, Iterator

import httpx
import structlog

from ..config import settings

logger = structlog.get_logger()


class ClientError(Exception):
    def __init__(self, response: httpx.Response, message: str | None = None):
        self.response = response
        self.status_code = response.status_code
        super().__init__(message or f"Unexpected response {response.status_code} for {response.request.method} {response.request.url}")

class AuthenticationFailed(ClientError):
    """401: the credentials were rejected."""

class ForbiddenError(ClientError):
    """403: the course belongs to someone else."""

class NotFound(ClientError):
    """404"""

class UnhandledResponse(ClientError):
    """Anything the UI should route to its generic error page."""


class CatalogClient:
    def __init__(self, base_url: str | None = None, http: httpx.Client | None = None, timeout: float = 10.0):
        # an injected client (e.g. fastapi's TestClient) carries its own base url
        self.http = http or httpx.Client(base_url=base_url or settings.API_BASE_URL, timeout=timeout)

    def close(self):
        self.http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def api(self, path: str, method: str = "GET", body: dict | None = None,
            credentials: tuple[str, str] | None = None) -> httpx.Response:
        headers = {"Content-Type": "application/json; charset=utf-8"}
        try:
            return self.http.request(method, path, json=body, headers=headers, auth=credentials)
        except httpx.RequestError as e:
            logger.error("api_request_failed", method=method, path=path, error=str(e))
            raise

    # --- users

    def get_user(self, email_address: str, password: str) -> dict | None:
        response = self.api("/users", credentials=(email_address, password))
        if response.status_code == 200:
            return response.json()
        if response.status_code == 401:
            return None
        raise UnhandledResponse(response)

    def create_user(self, user: dict) -> list[str]:
        response = self.api("/users", "POST", user)
        return self._errors_or_empty(response, expected=201)

    # --- courses

    def get_courses(self) -> list[dict]:
        response = self.api("/courses")
        if response.status_code == 200:
            return response.json()
        raise UnhandledResponse(response)

    def get_course(self, course_id: int) -> dict | None:
        response = self.api(f"/courses/{course_id}")
        if response.status_code == 200:
            return response.json()
        if response.status_code == 404:
            return None
        raise UnhandledResponse(response)

    def create_course(self, course: dict, email_address: str, password: str) -> list[str]:
        response = self.api("/courses", "POST", course, credentials=(email_address, password))
        return self._errors_or_empty(response, expected=201)

    def update_course(self, course_id: int, course: dict, email_address: str, password: str) -> list[str]:
        response = self.api(f"/courses/{course_id}", "PUT", course, credentials=(email_address, password))
        return self._errors_or_empty(response, expected=204)

    def delete_course(self, course_id: int, email_address: str, password: str) -> None:
        response = self.api(f"/courses/{course_id}", "DELETE", credentials=(email_address, password))
        if response.status_code != 204:
            self._raise_for(response)

    def _errors_or_empty(self, response: httpx.Response, expected: int) -> list[str]:
        if response.status_code == expected:
            return []
        if response.status_code == 400:
            return response.json().get("errors", [])
        self._raise_for(response)

    def _raise_for(self, response: httpx.Response):
        error_class = {
            401: AuthenticationFailed,
            403: ForbiddenError,
            404: NotFound,
        }.get(response.status_code, UnhandledResponse)
        raise error_class(response)


def is_owner(course: dict, user: dict | None) -> bool:
    """Whether ``user`` may see the update/delete controls for ``course``."""
    if not user:
        return False
    owner = course.get("User") or {}
    return owner.get("id") is not None and owner.get("id") == user.get("id")


def poll_courses(client: CatalogClient, interval: float | None = None, iterations: int | None = None,
                 sleep: Callable[[float], None] = time.sleep) -> Iterator[list[dict]]:
    """Yield the course list, refetching every ``interval`` seconds."""
    interval = settings.POLL_INTERVAL_SECONDS if interval is None else interval
    count = 0
    while iterations is None or count < iterations:
        if count:
            sleep(interval)
        yield client.get_courses()
        count += 1
