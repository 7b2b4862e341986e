from datetime import datetime
from typing import Self

from pydantic import BaseModel, ConfigDict


class GitlabModel(BaseModel):
    # The API grows fields faster than we track them
    model_config = ConfigDict(extra="ignore")


class User(GitlabModel):
    id: int | None = None
    username: str | None = None
    name: str | None = None
    state: str | None = None
    avatar_url: str | None = None
    web_url: str | None = None


class Commit(GitlabModel):
    id: str | None = None
    short_id: str | None = None
    title: str | None = None
    message: str | None = None
    author_name: str | None = None
    author_email: str | None = None
    created_at: datetime | None = None


class Group(GitlabModel):
    id: int | None = None
    name: str | None = None
    path: str | None = None
    description: str | None = None
    visibility: str | None = None
    parent_id: int | None = None

    def __str__(self):
        return f"Group(id={self.id}, path={self.path})"


class HookFlags(GitlabModel):
    push_events: bool = False
    issues_events: bool = False
    merge_requests_events: bool = False
    tag_push_events: bool = False
    note_events: bool = False
    job_events: bool = False
    pipeline_events: bool = False
    wiki_events: bool = False
    enable_ssl_verification: bool = False

    @classmethod
    def defaults(cls) -> Self:
        return cls(push_events=True, enable_ssl_verification=True)


class Hook(HookFlags):
    id: int | None = None
    url: str | None = None
    created_at: datetime | None = None

    def __str__(self):
        return f"Hook(id={self.id}, url={self.url})"


class PipelineBrief(GitlabModel):
    """Shape returned by the pipeline listing and embedded in jobs."""

    id: int | None = None
    sha: str = ""
    ref: str = ""
    status: str = ""

    @property
    def finished(self) -> bool:
        return self.status not in ("", "running", "pending")

    def __str__(self):
        return f"Pipeline(id={self.id}, ref={self.ref}, status={self.status})"


class Pipeline(PipelineBrief):
    before_sha: str | None = None
    tag: bool = False
    user: User | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    started_at: datetime | None = None
    finished_at: datetime | None = None
    committed_at: datetime | None = None
    # seconds
    duration: int | None = None


class Job(GitlabModel):
    id: int | None = None
    name: str | None = None
    stage: str | None = None
    status: str | None = None
    ref: str | None = None
    tag: bool = False
    commit: Commit | None = None
    pipeline: PipelineBrief | None = None
    user: User | None = None
    created_at: datetime | None = None
    started_at: datetime | None = None
    finished_at: datetime | None = None

    def __str__(self):
        return f"Job(id={self.id}, name={self.name}, status={self.status})"
