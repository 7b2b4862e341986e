from gitlab_api_cli.models.gitlab import Group
from gitlab_api_cli.services.gitlab_client import GitlabClient

GROUPS_URL = "/groups"


def list_groups(client: GitlabClient, *, timeout: float | None = None) -> list[Group]:
    """Groups visible to the authenticated user."""
    return client.request_json("GET", GROUPS_URL, list[Group], timeout=timeout)


def search_groups(
    client: GitlabClient, search: str, *, timeout: float | None = None
) -> list[Group]:
    return client.request_json(
        "GET", GROUPS_URL, list[Group], query={"search": search}, timeout=timeout
    )


def create_group(
    client: GitlabClient, group: Group, *, timeout: float | None = None
) -> Group:
    """Create a group owned by the authenticated user.

    Subgroups are created by setting ``parent_id``::

        {"name": "ws8000", "path": "ws8000", "parent_id": 35, "visibility": "internal"}
    """
    return client.request_json(
        "POST", GROUPS_URL, Group, payload=group, timeout=timeout
    )
