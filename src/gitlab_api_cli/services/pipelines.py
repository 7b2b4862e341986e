from gitlab_api_cli.models.gitlab import Pipeline, PipelineBrief
from gitlab_api_cli.models.options import ListPipelinesOpts
from gitlab_api_cli.services.gitlab_client import GitlabClient

PROJECT_URL = "/projects/:id"
PIPELINE_CREATION_URL = f"{PROJECT_URL}/pipeline"
PIPELINES_URL = f"{PROJECT_URL}/pipelines"
PIPELINE_URL = f"{PIPELINES_URL}/:pipeline_id"


def create_pipeline(
    client: GitlabClient, project_id: str | int, ref: str, *, timeout: float | None = None
) -> Pipeline:
    """Trigger a pipeline for ``ref`` (branch or tag)."""
    return client.request_json(
        "POST",
        PIPELINE_CREATION_URL,
        Pipeline,
        params={":id": project_id},
        query={"ref": ref},
        timeout=timeout,
    )


def list_pipelines(
    client: GitlabClient,
    project_id: str | int,
    opts: ListPipelinesOpts | None = None,
    *,
    timeout: float | None = None,
) -> list[PipelineBrief]:
    return client.request_json(
        "GET",
        PIPELINES_URL,
        list[PipelineBrief],
        params={":id": project_id},
        query=opts.to_query() if opts else None,
        timeout=timeout,
    )


def get_pipeline(
    client: GitlabClient,
    project_id: str | int,
    pipeline_id: int,
    *,
    timeout: float | None = None,
) -> Pipeline:
    return client.request_json(
        "GET",
        PIPELINE_URL,
        Pipeline,
        params={":id": project_id, ":pipeline_id": pipeline_id},
        timeout=timeout,
    )
