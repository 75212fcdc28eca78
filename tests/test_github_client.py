"""
Unit Tests - GitHub Client
==========================
All HTTP goes through httpx.MockTransport; no network.
"""
import json

import httpx
import pytest

from app.core.constants import GITHUB_API_BASE_URL
from app.core.errors import GatewayError
from app.services.github_client import GitHubClient


def make_client(handler, base_url=GITHUB_API_BASE_URL):
    transport = httpx.MockTransport(handler)
    http = httpx.Client(base_url=base_url, transport=transport)
    return GitHubClient("tok", "octo", "widgets", http_client=http)


def test_headers_are_set():
    seen = {}

    def handler(request):
        seen.update(request.headers)
        return httpx.Response(200, json={"state": "pending"})

    make_client(handler).get_combined_status("abc")

    assert seen["authorization"] == "Bearer tok"
    assert seen["accept"] == "application/vnd.github+json"
    assert seen["x-github-api-version"] == "2022-11-28"


def test_create_pull_request():
    captured = {}

    def handler(request):
        captured["method"] = request.method
        captured["url"] = str(request.url)
        captured["body"] = json.loads(request.content)
        return httpx.Response(201, json={
            "number": 7,
            "title": "[Auto Merge] Merge from main",
            "html_url": "https://github.com/octo/widgets/pull/7",
            "_links": {"self": {"href": "https://api.github.com/repos/octo/widgets/pulls/7"}},
            "head": {"ref": "auto-merge-1", "sha": "abc"},
            "labels": [{"name": "automated"}],
            "unknown_future_field": True,
        })

    pr = make_client(handler).create_pull_request(
        "[Auto Merge] Merge from main", "auto-merge-1", "main", "Automated updates from main."
    )

    assert captured["method"] == "POST"
    assert captured["url"] == "https://api.github.com/repos/octo/widgets/pulls"
    assert captured["body"] == {
        "title": "[Auto Merge] Merge from main",
        "head": "auto-merge-1",
        "base": "main",
        "body": "Automated updates from main.",
    }
    assert pr.number == 7
    assert pr.head.ref == "auto-merge-1"
    assert pr.links.self_link.href.endswith("/pulls/7")
    assert pr.labels[0].name == "automated"


def test_get_combined_status():
    def handler(request):
        assert request.method == "GET"
        assert request.url.path == "/repos/octo/widgets/commits/abc/status"
        return httpx.Response(200, json={
            "state": "failure",
            "sha": "abc",
            "total_count": 2,
            "statuses": [
                {"state": "success", "context": "lint"},
                {"state": "failure", "context": "test", "created_at": "2024-01-01T00:00:00Z"},
            ],
        })

    status = make_client(handler).get_combined_status("abc")

    assert status.state == "failure"
    assert [s.context for s in status.statuses] == ["lint", "test"]
    assert status.statuses[1].created_at.year == 2024


def test_merge_pull_request_is_squash():
    captured = {}

    def handler(request):
        captured["method"] = request.method
        captured["path"] = request.url.path
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"sha": "def", "merged": True, "message": "Pull Request successfully merged"})

    resp = make_client(handler).merge_pull_request(7, "title", "message")

    assert captured["method"] == "PUT"
    assert captured["path"] == "/repos/octo/widgets/pulls/7/merge"
    assert captured["body"] == {"commit_title": "title", "commit_message": "message", "merge_method": "squash"}
    assert resp.merged is True
    assert resp.sha == "def"


def test_merge_false_is_returned_not_raised():
    client = make_client(lambda request: httpx.Response(200, json={"merged": False, "message": "nope"}))
    assert client.merge_pull_request(7, "t", "m").merged is False


@pytest.mark.parametrize("code", [401, 404, 422, 500])
def test_non_2xx_is_gateway_error(code):
    client = make_client(lambda request: httpx.Response(code, text="Bad things"))

    with pytest.raises(GatewayError) as exc:
        client.get_combined_status("abc")

    assert exc.value.status_code == code
    assert exc.value.body == "Bad things"
    assert str(exc.value) == f"GitHub API returned status {code}: Bad things"


def test_transport_error_is_gateway_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(GatewayError, match="failed to execute request") as exc:
        make_client(handler).get_combined_status("abc")
    assert exc.value.status_code is None


def test_undecodable_body_is_gateway_error():
    client = make_client(lambda request: httpx.Response(200, text="<html>"))
    with pytest.raises(GatewayError, match="failed to decode response"):
        client.get_combined_status("abc")


def test_pull_request_without_number_is_gateway_error():
    client = make_client(lambda request: httpx.Response(201, json={"title": "x"}))
    with pytest.raises(GatewayError, match="failed to decode response"):
        client.create_pull_request("x", "h", "b", "")


def test_context_manager_closes_owned_client():
    with GitHubClient("tok", "o", "r") as client:
        inner = client._client
    assert inner.is_closed


def test_injected_client_is_not_closed():
    http = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200, json={})))
    GitHubClient("tok", "o", "r", http_client=http).close()
    assert not http.is_closed


def test_paths_resolve_against_client_base_url():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        return httpx.Response(200, json={"state": "success"})

    client = make_client(handler, base_url="https://ghe.example.com/api/v3")
    client.get_combined_status("abc")

    assert seen["url"] == "https://ghe.example.com/api/v3/repos/octo/widgets/commits/abc/status"


def test_owned_client_uses_given_base_url():
    with GitHubClient("tok", "o", "r", base_url="https://ghe.example.com/api/v3") as client:
        assert str(client._client.base_url) == "https://ghe.example.com/api/v3/"
