import httpx
import pytest

from gitlab_api_cli.services.errors import UnresolvedPlaceholderError
from gitlab_api_cli.services.urls import merge_query, query_pairs, resolve_template


def test_every_occurrence_is_replaced() -> None:
    path = resolve_template("/a/:id/b/:id", {":id": "42"})
    assert path == "/a/42/b/42"


def test_unmapped_tokens_are_left_in_place() -> None:
    path = resolve_template("/projects/:id/hooks/:hook_id", {":id": "7"})
    assert path == "/projects/7/hooks/:hook_id"


def test_no_params_returns_template() -> None:
    assert resolve_template("/groups") == "/groups"
    assert resolve_template("/projects/:id", None) == "/projects/:id"


def test_strict_resolution_rejects_leftovers() -> None:
    with pytest.raises(UnresolvedPlaceholderError) as exc_info:
        resolve_template("/projects/:id/hooks/:hook_id", {":id": "7"}, strict=True)
    assert exc_info.value.tokens == [":hook_id"]


def test_strict_resolution_passes_when_complete() -> None:
    path = resolve_template(
        "/projects/:id/pipelines/:pipeline_id",
        {":id": 3, ":pipeline_id": 99},
        strict=True,
    )
    assert path == "/projects/3/pipelines/99"


def test_longer_keys_win_over_their_prefixes() -> None:
    path = resolve_template("/x/:id/:id_ext", {":id": "1", ":id_ext": "2"})
    assert path == "/x/1/2"


def test_values_are_percent_encoded() -> None:
    path = resolve_template("/projects/:id/hooks", {":id": "group/project"})
    assert path == "/projects/group%2Fproject/hooks"


def test_set_replaces_existing_key() -> None:
    url = merge_query("https://h.example/x?ref=old&keep=1", {"ref": "main"})
    params = httpx.URL(url).params
    assert params.get_list("ref") == ["main"]
    assert params.get_list("keep") == ["1"]


def test_set_does_not_duplicate_keys() -> None:
    url = "https://h.example/x"
    for page in ("1", "2", "3"):
        url = merge_query(url, {"page": page}, mode="set")
    assert httpx.URL(url).params.get_list("page") == ["3"]


def test_add_preserves_multiple_values() -> None:
    url = merge_query("https://h.example/x?scope[]=failed", {"scope[]": ["running", "manual"]}, mode="add")
    assert httpx.URL(url).params.get_list("scope[]") == ["failed", "running", "manual"]


def test_values_are_query_encoded() -> None:
    url = merge_query("https://h.example/groups", {"search": "a b&c"})
    assert httpx.URL(url).params["search"] == "a b&c"
    assert "a b&c" not in url


def test_empty_query_leaves_url_bare() -> None:
    assert merge_query("https://h.example/groups", {}) == "https://h.example/groups"


def test_unknown_mode_is_rejected() -> None:
    with pytest.raises(ValueError):
        merge_query("https://h.example/x", {"a": "b"}, mode="replace")  # type: ignore[arg-type]


def test_query_pairs_flattens_mappings_and_pairs() -> None:
    assert query_pairs(None) == []
    assert query_pairs({"a": "1", "b": ["2", "3"], "c": 4}) == [
        ("a", "1"),
        ("b", "2"),
        ("b", "3"),
        ("c", "4"),
    ]
    assert query_pairs([("x", 1)]) == [("x", "1")]
