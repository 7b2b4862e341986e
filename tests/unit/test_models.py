from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from gitlab_api_cli.models.gitlab import Group, Hook, HookFlags, Job, Pipeline, PipelineBrief
from gitlab_api_cli.models.options import (
    JobScope,
    ListJobsOpts,
    ListPipelinesOpts,
    Pagination,
    PipelineStatus,
)


@pytest.mark.parametrize(
    ("status", "finished"),
    [
        ("", False),
        ("running", False),
        ("pending", False),
        ("success", True),
        ("failed", True),
        ("canceled", True),
    ],
)
def test_pipeline_finished(status, finished) -> None:
    assert Pipeline(status=status).finished is finished
    assert PipelineBrief(status=status).finished is finished


def test_pipeline_decodes_timestamps() -> None:
    pipeline = Pipeline.model_validate(
        {
            "id": 7,
            "sha": "abc",
            "ref": "main",
            "status": "success",
            "user": {"id": 1, "username": "root"},
            "created_at": "2016-08-11T11:28:34.085Z",
            "finished_at": None,
            "duration": 12,
        }
    )
    assert pipeline.created_at == datetime(2016, 8, 11, 11, 28, 34, 85000, tzinfo=timezone.utc)
    assert pipeline.finished_at is None
    assert pipeline.user.username == "root"
    assert pipeline.duration == 12


def test_job_embeds_pipeline_and_commit() -> None:
    job = Job.model_validate(
        {
            "id": 8,
            "name": "rspec",
            "status": "failed",
            "commit": {"id": "0ff3ae19", "short_id": "0ff3ae19", "title": "Test"},
            "pipeline": {"id": 6, "ref": "main", "sha": "0ff3ae19", "status": "pending"},
        }
    )
    assert job.pipeline.id == 6
    assert not job.pipeline.finished
    assert job.commit.title == "Test"


def test_group_serialises_visibility_under_its_own_key() -> None:
    group = Group(name="ws8000", path="ws8000", parent_id=35, visibility="internal")
    dumped = group.model_dump(exclude_none=True)
    assert dumped == {"name": "ws8000", "path": "ws8000", "parent_id": 35, "visibility": "internal"}


def test_default_hook_flags() -> None:
    flags = HookFlags.defaults()
    assert flags.push_events
    assert flags.enable_ssl_verification
    assert not flags.issues_events
    assert not flags.pipeline_events


def test_hook_carries_flags() -> None:
    hook = Hook.model_validate({"id": 1, "url": "http://example.com/hook", "push_events": True})
    assert hook.push_events
    assert not hook.job_events


@pytest.mark.parametrize("page", [-1, -100])
def test_negative_page_is_rejected(page) -> None:
    with pytest.raises(ValidationError):
        Pagination(page=page)


@pytest.mark.parametrize("per_page", [-1, 101, 1000])
def test_per_page_out_of_bounds_is_rejected(per_page) -> None:
    with pytest.raises(ValidationError):
        Pagination(per_page=per_page)


@pytest.mark.parametrize("per_page", [0, 1, 100])
def test_per_page_bounds_are_inclusive(per_page) -> None:
    assert Pagination(per_page=per_page).per_page == per_page


def test_pagination_is_checked_on_assignment() -> None:
    opts = ListPipelinesOpts()
    with pytest.raises(ValidationError):
        opts.per_page = 101


def test_zero_pagination_is_not_sent() -> None:
    assert Pagination().pagination_query() == []
    assert Pagination(page=2, per_page=50).pagination_query() == [("page", "2"), ("per_page", "50")]


@pytest.mark.parametrize(
    "kwargs",
    [{"scope": "everything"}, {"status": "done"}, {"order_by": "name"}, {"sort": "up"}],
)
def test_pipeline_filters_are_checked_against_allowed_values(kwargs) -> None:
    with pytest.raises(ValidationError):
        ListPipelinesOpts(**kwargs)


def test_pipeline_query() -> None:
    opts = ListPipelinesOpts(
        scope="branches",
        status=PipelineStatus.FAILED,
        ref="main",
        yaml_errors=True,
        name="nightly",
        username="root",
        order_by="user_id",
        sort="asc",
        page=1,
        per_page=20,
    )
    assert opts.to_query() == [
        ("scope", "branches"),
        ("status", "failed"),
        ("ref", "main"),
        ("yaml_errors", "true"),
        ("name", "nightly"),
        ("username", "root"),
        ("order_by", "user_id"),
        ("sort", "asc"),
        ("page", "1"),
        ("per_page", "20"),
    ]


def test_empty_pipeline_query() -> None:
    assert ListPipelinesOpts().to_query() == []


def test_job_scopes_are_repeated_in_a_stable_order() -> None:
    opts = ListJobsOpts(per_page=10).add_scope(JobScope.MANUAL, "failed", JobScope.FAILED)
    assert opts.to_query() == [
        ("scope[]", "failed"),
        ("scope[]", "manual"),
        ("per_page", "10"),
    ]


def test_unknown_job_scope_is_rejected() -> None:
    opts = ListJobsOpts().add_scope(JobScope.FAILED)
    with pytest.raises(ValidationError):
        opts.add_scope("sleeping")
    assert opts.scopes == {JobScope.FAILED}


def test_job_scopes_accept_plain_strings() -> None:
    opts = ListJobsOpts().add_scope("failed", JobScope.FAILED, "manual")
    assert opts.scopes == {JobScope.FAILED, JobScope.MANUAL}
    assert all(isinstance(scope, JobScope) for scope in opts.scopes)
