from typing import Any

import httpx
import pytest

from gitlab_api_cli.config import AppConfig
from gitlab_api_cli.services.gitlab_client import GitlabClient

BASE_URL = "https://gitlab.example.com"
API_URL = f"{BASE_URL}/api/v4"


class FakeGitlab:
    """Canned server for httpx.MockTransport; records every request."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.json: Any = {}
        self.text: str | None = None
        self.error: Exception | None = None

    def respond(self, status_code: int = 200, json: Any = None, text: str | None = None) -> None:
        self.status_code = status_code
        self.json = {} if json is None else json
        self.text = text

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.json)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def base_url() -> str:
    return BASE_URL


@pytest.fixture
def api_url() -> str:
    return API_URL


@pytest.fixture
def server() -> FakeGitlab:
    return FakeGitlab()


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(gitlab_url=BASE_URL, token="s3cret")


@pytest.fixture
def client(server: FakeGitlab, config: AppConfig):
    with GitlabClient(config, transport=httpx.MockTransport(server)) as client:
        yield client
