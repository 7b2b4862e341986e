import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import typer
from pydantic import TypeAdapter, ValidationError

from gitlab_api_cli.config import AppConfig
from gitlab_api_cli.models.gitlab import Group, HookFlags
from gitlab_api_cli.models.options import (
    JobScope,
    ListJobsOpts,
    ListPipelinesOpts,
    PipelineOrderBy,
    PipelineScope,
    PipelineStatus,
)
from gitlab_api_cli.services import groups, hooks, jobs, pipelines
from gitlab_api_cli.services.errors import GitlabError
from gitlab_api_cli.services.gitlab_client import GitlabClient

app = typer.Typer(help="GitLab API CLI", no_args_is_help=True)
auth_app = typer.Typer(help="Authentication commands")
group_app = typer.Typer(help="Group commands")
hook_app = typer.Typer(help="Project hook commands")
pipeline_app = typer.Typer(help="Pipeline commands")
job_app = typer.Typer(help="Pipeline job commands")

app.add_typer(auth_app, name="auth")
app.add_typer(group_app, name="group")
app.add_typer(hook_app, name="hook")
app.add_typer(pipeline_app, name="pipeline")
app.add_typer(job_app, name="job")


def build_client(config: AppConfig) -> GitlabClient:
    return GitlabClient(config)


@contextmanager
def _client(ctx: typer.Context) -> Iterator[GitlabClient]:
    try:
        with build_client(ctx.obj) as client:
            yield client
    except (GitlabError, ValidationError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def _echo(value: Any) -> None:
    typer.echo(TypeAdapter(Any).dump_json(value, indent=2).decode())


@app.callback()
def main(
    ctx: typer.Context,
    url: str = typer.Option("https://gitlab.com", "--url", envvar="GITLAB_URL"),
    api_path: str = typer.Option("/api/v4", "--api-path", envvar="GITLAB_API_PATH"),
    token: str | None = typer.Option(None, "--token", envvar="GITLAB_TOKEN"),
    skip_cert_check: bool = typer.Option(
        False,
        "--skip-cert-check",
        envvar="GITLAB_SKIP_CERT_CHECK",
        help="Skip certificate checking for https, possibly exposing your system to MITM attack.",
    ),
    timeout: float = typer.Option(30.0, "--timeout", envvar="GITLAB_TIMEOUT"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    try:
        config = AppConfig(
            gitlab_url=url,
            api_path=api_path,
            token=token,
            skip_cert_verify=skip_cert_check,
            timeout_s=timeout,
            verbose=verbose,
        )
    except ValidationError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    if config.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = config


@auth_app.command("status")
def auth_status(ctx: typer.Context) -> None:
    config: AppConfig = ctx.obj
    typer.echo(f"Target GitLab: {config.api_url}")
    typer.echo(f"Token configured: {'yes' if config.token else 'no'}")
    if config.skip_cert_verify:
        typer.echo("Certificate verification is disabled")


@group_app.command("list")
def group_list(ctx: typer.Context) -> None:
    with _client(ctx) as client:
        _echo(groups.list_groups(client))


@group_app.command("search")
def group_search(ctx: typer.Context, name: str) -> None:
    with _client(ctx) as client:
        _echo(groups.search_groups(client, name))


@group_app.command("create")
def group_create(
    ctx: typer.Context,
    name: str,
    path: str | None = typer.Option(None, "--path", help="Defaults to the name"),
    parent_id: int | None = typer.Option(None, "--parent-id"),
    visibility: str | None = typer.Option(None, "--visibility"),
    description: str | None = typer.Option(None, "--description"),
) -> None:
    group = Group(
        name=name,
        path=path or name,
        parent_id=parent_id,
        visibility=visibility,
        description=description,
    )
    with _client(ctx) as client:
        _echo(groups.create_group(client, group))


@hook_app.command("list")
def hook_list(ctx: typer.Context, project: str) -> None:
    with _client(ctx) as client:
        _echo(hooks.list_project_hooks(client, project))


@hook_app.command("get")
def hook_get(ctx: typer.Context, project: str, hook_id: int) -> None:
    with _client(ctx) as client:
        _echo(hooks.get_project_hook(client, project, hook_id))


def _hook_flags(
    push: bool,
    issues: bool,
    merge_requests: bool,
    tag_push: bool,
    note: bool,
    job: bool,
    pipeline: bool,
    wiki: bool,
    ssl_verify: bool,
) -> HookFlags:
    return HookFlags(
        push_events=push,
        issues_events=issues,
        merge_requests_events=merge_requests,
        tag_push_events=tag_push,
        note_events=note,
        job_events=job,
        pipeline_events=pipeline,
        wiki_events=wiki,
        enable_ssl_verification=ssl_verify,
    )


@hook_app.command("add")
def hook_add(
    ctx: typer.Context,
    project: str,
    url: str,
    push: bool = typer.Option(True, "--push/--no-push"),
    issues: bool = typer.Option(False, "--issues/--no-issues"),
    merge_requests: bool = typer.Option(False, "--merge-requests/--no-merge-requests"),
    tag_push: bool = typer.Option(False, "--tag-push/--no-tag-push"),
    note: bool = typer.Option(False, "--note/--no-note"),
    job: bool = typer.Option(False, "--job/--no-job"),
    pipeline: bool = typer.Option(False, "--pipeline/--no-pipeline"),
    wiki: bool = typer.Option(False, "--wiki/--no-wiki"),
    ssl_verify: bool = typer.Option(True, "--ssl-verify/--no-ssl-verify"),
) -> None:
    flags = _hook_flags(push, issues, merge_requests, tag_push, note, job, pipeline, wiki, ssl_verify)
    with _client(ctx) as client:
        _echo(hooks.add_project_hook_with_flags(client, project, url, flags))


@hook_app.command("edit")
def hook_edit(
    ctx: typer.Context,
    project: str,
    hook_id: int,
    url: str,
    push: bool = typer.Option(True, "--push/--no-push"),
    issues: bool = typer.Option(False, "--issues/--no-issues"),
    merge_requests: bool = typer.Option(False, "--merge-requests/--no-merge-requests"),
    tag_push: bool = typer.Option(False, "--tag-push/--no-tag-push"),
    note: bool = typer.Option(False, "--note/--no-note"),
    job: bool = typer.Option(False, "--job/--no-job"),
    pipeline: bool = typer.Option(False, "--pipeline/--no-pipeline"),
    wiki: bool = typer.Option(False, "--wiki/--no-wiki"),
    ssl_verify: bool = typer.Option(True, "--ssl-verify/--no-ssl-verify"),
) -> None:
    flags = _hook_flags(push, issues, merge_requests, tag_push, note, job, pipeline, wiki, ssl_verify)
    with _client(ctx) as client:
        _echo(hooks.edit_project_hook_with_flags(client, project, hook_id, url, flags))


@hook_app.command("remove")
def hook_remove(ctx: typer.Context, project: str, hook_id: int) -> None:
    with _client(ctx) as client:
        hooks.remove_project_hook(client, project, hook_id)
    typer.echo(f"Removed hook {hook_id}")


@pipeline_app.command("create")
def pipeline_create(ctx: typer.Context, project: str, ref: str) -> None:
    with _client(ctx) as client:
        _echo(pipelines.create_pipeline(client, project, ref))


@pipeline_app.command("list")
def pipeline_list(
    ctx: typer.Context,
    project: str,
    scope: PipelineScope | None = typer.Option(None, "--scope"),
    status: PipelineStatus | None = typer.Option(None, "--status"),
    ref: str | None = typer.Option(None, "--ref"),
    yaml_errors: bool = typer.Option(False, "--yaml-errors"),
    name: str | None = typer.Option(None, "--name"),
    username: str | None = typer.Option(None, "--username"),
    order_by: PipelineOrderBy | None = typer.Option(None, "--order-by"),
    sort: str | None = typer.Option(None, "--sort", help="asc or desc"),
    page: int = typer.Option(0, "--page"),
    per_page: int = typer.Option(0, "--per-page"),
) -> None:
    with _client(ctx) as client:
        opts = ListPipelinesOpts(
            scope=scope,
            status=status,
            ref=ref,
            yaml_errors=yaml_errors,
            name=name,
            username=username,
            order_by=order_by,
            sort=sort,
            page=page,
            per_page=per_page,
        )
        _echo(pipelines.list_pipelines(client, project, opts))


@pipeline_app.command("get")
def pipeline_get(ctx: typer.Context, project: str, pipeline_id: int) -> None:
    with _client(ctx) as client:
        _echo(pipelines.get_pipeline(client, project, pipeline_id))


@job_app.command("list")
def job_list(
    ctx: typer.Context,
    project: str,
    pipeline_id: int,
    scope: list[JobScope] | None = typer.Option(None, "--scope"),
    page: int = typer.Option(0, "--page"),
    per_page: int = typer.Option(0, "--per-page"),
) -> None:
    with _client(ctx) as client:
        opts = ListJobsOpts(page=page, per_page=per_page).add_scope(*(scope or []))
        _echo(jobs.list_pipeline_jobs(client, project, pipeline_id, opts))


if __name__ == "__main__":
    app()
