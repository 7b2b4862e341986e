from gitlab_api_cli.models.gitlab import Hook, HookFlags
from gitlab_api_cli.services.gitlab_client import GitlabClient

PROJECT_HOOKS_URL = "/projects/:id/hooks"
PROJECT_HOOK_URL = "/projects/:id/hooks/:hook_id"


def list_project_hooks(
    client: GitlabClient, project_id: str | int, *, timeout: float | None = None
) -> list[Hook]:
    return client.request_json(
        "GET",
        PROJECT_HOOKS_URL,
        list[Hook],
        params={":id": project_id},
        timeout=timeout,
    )


def get_project_hook(
    client: GitlabClient,
    project_id: str | int,
    hook_id: str | int,
    *,
    timeout: float | None = None,
) -> Hook:
    return client.request_json(
        "GET",
        PROJECT_HOOK_URL,
        Hook,
        params={":id": project_id, ":hook_id": hook_id},
        timeout=timeout,
    )


def add_project_hook(
    client: GitlabClient,
    project_id: str | int,
    hook_url: str,
    push_events: bool = True,
    issues_events: bool = False,
    merge_requests_events: bool = False,
    *,
    timeout: float | None = None,
) -> Hook:
    """Add a hook triggered by push, issue and merge request events.

    Use add_project_hook_with_flags for the other event kinds.
    """
    return client.request_json(
        "POST",
        PROJECT_HOOKS_URL,
        Hook,
        params={":id": project_id},
        payload=_legacy_payload(hook_url, push_events, issues_events, merge_requests_events),
        timeout=timeout,
    )


def add_project_hook_with_flags(
    client: GitlabClient,
    project_id: str | int,
    hook_url: str,
    flags: HookFlags | None = None,
    *,
    timeout: float | None = None,
) -> Hook:
    return client.request_json(
        "POST",
        PROJECT_HOOKS_URL,
        Hook,
        params={":id": project_id},
        payload=_flags_payload(hook_url, flags),
        timeout=timeout,
    )


def edit_project_hook(
    client: GitlabClient,
    project_id: str | int,
    hook_id: str | int,
    hook_url: str,
    push_events: bool = True,
    issues_events: bool = False,
    merge_requests_events: bool = False,
    *,
    timeout: float | None = None,
) -> Hook:
    return client.request_json(
        "PUT",
        PROJECT_HOOK_URL,
        Hook,
        params={":id": project_id, ":hook_id": hook_id},
        payload=_legacy_payload(hook_url, push_events, issues_events, merge_requests_events),
        timeout=timeout,
    )


def edit_project_hook_with_flags(
    client: GitlabClient,
    project_id: str | int,
    hook_id: str | int,
    hook_url: str,
    flags: HookFlags | None = None,
    *,
    timeout: float | None = None,
) -> Hook:
    return client.request_json(
        "PUT",
        PROJECT_HOOK_URL,
        Hook,
        params={":id": project_id, ":hook_id": hook_id},
        payload=_flags_payload(hook_url, flags),
        timeout=timeout,
    )


def remove_project_hook(
    client: GitlabClient,
    project_id: str | int,
    hook_id: str | int,
    *,
    timeout: float | None = None,
) -> None:
    url = client.resource_url(PROJECT_HOOK_URL, {":id": project_id, ":hook_id": hook_id})
    client.request("DELETE", url, timeout=timeout)


def _legacy_payload(
    hook_url: str, push_events: bool, issues_events: bool, merge_requests_events: bool
) -> dict[str, str | bool]:
    return {
        "url": hook_url,
        "push_events": push_events,
        "issues_events": issues_events,
        "merge_requests_events": merge_requests_events,
    }


def _flags_payload(hook_url: str, flags: HookFlags | None) -> dict[str, str | bool]:
    if flags is None:
        flags = HookFlags.defaults()
    return {"url": hook_url, **flags.model_dump(include=set(HookFlags.model_fields))}
