from enum import StrEnum
from typing import Literal, Self

from pydantic import BaseModel, ConfigDict, Field

# Flattened query: ordered (key, value) pairs, keys may repeat
QueryPairs = list[tuple[str, str]]


class JobScope(StrEnum):
    CREATED = "created"
    PENDING = "pending"
    RUNNING = "running"
    FAILED = "failed"
    SUCCESS = "success"
    CANCELED = "canceled"
    SKIPPED = "skipped"
    MANUAL = "manual"


class PipelineScope(StrEnum):
    RUNNING = "running"
    PENDING = "pending"
    FINISHED = "finished"
    BRANCHES = "branches"
    TAGS = "tags"


class PipelineStatus(StrEnum):
    RUNNING = "running"
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"
    CANCELED = "canceled"
    SKIPPED = "skipped"


class PipelineOrderBy(StrEnum):
    ID = "id"
    STATUS = "status"
    REF = "ref"
    USER_ID = "user_id"


class Pagination(BaseModel):
    """Page controls shared by list operations.

    Zero means "let the server decide" and is left out of the query.
    Bounds are enforced on construction and on assignment, so an invalid
    bundle never gets as far as the wire.
    """

    model_config = ConfigDict(validate_assignment=True)

    page: int = Field(default=0, ge=0)
    per_page: int = Field(default=0, ge=0, le=100)

    def pagination_query(self) -> QueryPairs:
        query: QueryPairs = []
        if self.page > 0:
            query.append(("page", str(self.page)))
        if self.per_page > 0:
            query.append(("per_page", str(self.per_page)))
        return query


class ListJobsOpts(Pagination):
    scopes: set[JobScope] = Field(default_factory=set)

    def add_scope(self, *scopes: JobScope | str) -> Self:
        # Reassigning runs the field validation, so unknown scopes raise ValidationError
        self.scopes = self.scopes | set(scopes)
        return self

    def to_query(self) -> QueryPairs:
        # Declaration order keeps the query stable across runs
        query: QueryPairs = [
            ("scope[]", scope.value) for scope in JobScope if scope in self.scopes
        ]
        return query + self.pagination_query()


class ListPipelinesOpts(Pagination):
    scope: PipelineScope | None = None
    status: PipelineStatus | None = None
    ref: str | None = None
    yaml_errors: bool = False
    name: str | None = None
    username: str | None = None
    order_by: PipelineOrderBy | None = None
    sort: Literal["asc", "desc"] | None = None

    def to_query(self) -> QueryPairs:
        query: QueryPairs = []
        if self.scope:
            query.append(("scope", self.scope.value))
        if self.status:
            query.append(("status", self.status.value))
        if self.ref:
            query.append(("ref", self.ref))
        if self.yaml_errors:
            query.append(("yaml_errors", "true"))
        if self.name:
            query.append(("name", self.name))
        if self.username:
            query.append(("username", self.username))
        if self.order_by:
            query.append(("order_by", self.order_by.value))
        if self.sort:
            query.append(("sort", self.sort))
        return query + self.pagination_query()
