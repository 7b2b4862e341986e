from __future__ import annotations

from http import HTTPStatus


class GitlabError(Exception):
    """Base client error."""


class GitlabRequestBuildError(GitlabError):
    """The request could not be constructed."""


class UnresolvedPlaceholderError(GitlabRequestBuildError):
    def __init__(self, path: str, tokens: list[str]):
        super().__init__(f"Unresolved placeholders {', '.join(tokens)} in '{path}'")
        self.path = path
        self.tokens = tokens


class GitlabTransportError(GitlabError):
    """Transport/network layer error."""


class GitlabResponseError(GitlabError):
    def __init__(self, status_code: int, body: str):
        super().__init__(f"GitLab response error: ({status_code}){body}")
        self.status_code = status_code
        self.body = body

    @property
    def is_not_found(self) -> bool:
        return self.status_code == HTTPStatus.NOT_FOUND


class GitlabDecodeError(GitlabError):
    """Response body is not the JSON shape we expected."""


def is_not_found(err: BaseException) -> bool:
    return isinstance(err, GitlabResponseError) and err.is_not_found
