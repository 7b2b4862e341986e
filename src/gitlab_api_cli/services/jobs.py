from gitlab_api_cli.models.gitlab import Job
from gitlab_api_cli.models.options import ListJobsOpts
from gitlab_api_cli.services.gitlab_client import GitlabClient
from gitlab_api_cli.services.pipelines import PIPELINE_URL

PIPELINE_JOBS_URL = f"{PIPELINE_URL}/jobs"


def list_pipeline_jobs(
    client: GitlabClient,
    project_id: str | int,
    pipeline_id: int,
    opts: ListJobsOpts | None = None,
    *,
    timeout: float | None = None,
) -> list[Job]:
    """Jobs of one pipeline, optionally narrowed to a set of scopes."""
    return client.request_json(
        "GET",
        PIPELINE_JOBS_URL,
        list[Job],
        params={":id": project_id, ":pipeline_id": pipeline_id},
        query=opts.to_query() if opts else None,
        add_query=True,
        timeout=timeout,
    )
