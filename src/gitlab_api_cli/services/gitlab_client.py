from __future__ import annotations

import logging
from collections.abc import Mapping
from http import HTTPStatus
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from gitlab_api_cli.config import AppConfig
from gitlab_api_cli.services.errors import (
    GitlabDecodeError,
    GitlabRequestBuildError,
    GitlabResponseError,
    GitlabTransportError,
)
from gitlab_api_cli.services.urls import Query, merge_query, resolve_template

logger = logging.getLogger(__name__)

T = TypeVar("T")

_JSON_METHODS = frozenset({"POST", "PUT"})


class GitlabClient:
    """Synchronous GitLab REST client.

    Holds the configuration and one pooled ``httpx.Client``; neither is
    mutated by requests, so a client may be shared between call sites.
    """

    def __init__(self, config: AppConfig, transport: httpx.BaseTransport | None = None):
        self.config = config
        self._http = httpx.Client(
            verify=not config.skip_cert_verify,
            timeout=config.timeout_s,
            transport=transport,
            follow_redirects=True,
        )

    def __enter__(self) -> GitlabClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def resource_url(
        self,
        template: str,
        params: Mapping[str, str | int] | None = None,
        query: Query | None = None,
        *,
        add: bool = False,
    ) -> str:
        """Resolve ``template`` against the API root and merge ``query``.

        ``add`` keeps repeated keys (``scope[]``), otherwise later values
        replace earlier ones.
        """
        url = self.config.api_url + resolve_template(template, params, strict=True)
        if query is None:
            return url
        try:
            return merge_query(url, query, mode="add" if add else "set")
        except httpx.InvalidURL as exc:
            raise GitlabRequestBuildError(f"Invalid URL '{url}': {exc}") from exc

    def request(
        self,
        method: str,
        url: str,
        body: bytes | None = None,
        *,
        timeout: float | None = None,
    ) -> bytes:
        method = method.upper()
        headers = {"PRIVATE-TOKEN": self.config.token or ""}
        if method in _JSON_METHODS:
            headers["Content-Type"] = "application/json"

        try:
            request = self._http.build_request(
                method,
                url,
                content=body,
                headers=headers,
                timeout=self._http.timeout if timeout is None else timeout,
            )
        except httpx.InvalidURL as exc:
            raise GitlabRequestBuildError(f"Cannot build {method} {url}: {exc}") from exc

        logger.debug("%s %s", method, url)
        try:
            response = self._http.send(request)
        except httpx.DecodingError as exc:
            logger.warning("%s %s sent an undecodable body: %s", method, url, exc)
            raise GitlabDecodeError(f"{method} {url} body could not be decoded: {exc}") from exc
        except httpx.RequestError as exc:
            # Transport failures plus redirect loops
            logger.warning("%s %s failed: %s", method, url, exc)
            raise GitlabTransportError(f"{method} {url} failed: {exc}") from exc

        logger.debug("%s %s -> %s", method, url, response.status_code)
        if response.status_code >= HTTPStatus.BAD_REQUEST:
            logger.warning("%s %s returned %s", method, url, response.status_code)
            raise GitlabResponseError(response.status_code, response.text)
        return response.content

    def request_json(
        self,
        method: str,
        template: str,
        response_type: type[T] | Any,
        *,
        params: Mapping[str, str | int] | None = None,
        query: Query | None = None,
        add_query: bool = False,
        payload: BaseModel | Mapping[str, Any] | None = None,
        timeout: float | None = None,
    ) -> T:
        """Resolve, send and decode in one go.

        ``response_type`` is anything pydantic can validate: a model class or
        a ``list[Model]``.
        """
        url = self.resource_url(template, params, query, add=add_query)
        data = self.request(method, url, encode_payload(payload), timeout=timeout)
        return decode(data, response_type)


def encode_payload(payload: BaseModel | Mapping[str, Any] | None) -> bytes | None:
    if payload is None:
        return None
    if isinstance(payload, BaseModel):
        return payload.model_dump_json(exclude_none=True).encode()
    return TypeAdapter(dict[str, Any]).dump_json(dict(payload))


def decode(data: bytes, response_type: type[T] | Any) -> T:
    try:
        return TypeAdapter(response_type).validate_json(data)
    except ValidationError as exc:
        raise GitlabDecodeError(f"Decode response error: {exc}") from exc
