import json
import logging
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
import requests
from fakes import SEARCH_PAGE, FakeResponse
from jira import JIRAError

from worklog_app.core.errors import DecodeError, RemoteError, TransportError
from worklog_app.core.jira_client import JiraAPI
from worklog_app.core.models import WorklogVisibility


def test_test_connection_success(api, session):
    assert api.test_connection() is True
    call = session.last("GET")
    assert call["url"] == "https://example.atlassian.net/rest/api/3/myself"
    assert call["headers"]["Accept"] == "application/json"


def test_test_connection_non_2xx_is_false(api, session):
    session.routes[("GET", "/myself")] = FakeResponse(401, {"errorMessages": ["Unauthorized"]})
    assert api.test_connection() is False


def test_redirect_status_is_not_success(api, session):
    session.routes[("GET", "/myself")] = FakeResponse(304, None, text="")
    assert api.test_connection() is False

    session.routes[("GET", "/search")] = FakeResponse(302, None, text="")
    with pytest.raises(RemoteError) as excinfo:
        api.get_assigned_issues()
    assert excinfo.value.status_code == 302


def test_test_connection_jira_error_is_false(api, session):
    session.routes[("GET", "/myself")] = JIRAError(status_code=403, text="Forbidden")
    assert api.test_connection() is False


def test_test_connection_transport_error_propagates(api, session):
    session.routes[("GET", "/myself")] = requests.ConnectionError("name resolution failed")
    with pytest.raises(TransportError) as excinfo:
        api.test_connection()
    assert isinstance(excinfo.value.__cause__, requests.ConnectionError)


def test_get_assigned_issues(api, session):
    issues = api.get_assigned_issues()
    assert [i.key for i in issues] == ["PROJ-1", "PROJ-2"]
    assert issues[0].summary == "Fix login bug"
    assert issues[0].status_name == "In Progress"
    assert issues[0].assignee.display_name == "Dev User"
    assert issues[0].assignee.email == "dev@example.com"
    assert issues[1].assignee is None

    call = session.last("GET")
    assert call["url"].endswith("/rest/api/3/search")
    assert call["params"] == {"jql": "assignee=currentUser()", "fields": "summary,status,assignee"}


def test_search_assigned_surfaces_pagination_without_paging(api, session):
    page = dict(SEARCH_PAGE, total=120, maxResults=2)
    session.routes[("GET", "/search")] = FakeResponse(200, page)
    result = api.search_assigned()
    assert result.total == 120
    assert result.max_results == 2
    assert result.start_at == 0
    assert result.has_more
    assert len([c for c in session.calls if c["url"].endswith("/search")]) == 1


def test_search_remote_error_carries_status(api, session):
    session.routes[("GET", "/search")] = FakeResponse(500, {"errorMessages": ["boom"]})
    with pytest.raises(RemoteError) as excinfo:
        api.get_assigned_issues()
    assert excinfo.value.status_code == 500
    assert str(excinfo.value) == "JIRA API error: 500"


def test_search_jira_error_maps_to_remote_error(api, session):
    session.routes[("GET", "/search")] = JIRAError(status_code=401, text="Unauthorized")
    with pytest.raises(RemoteError) as excinfo:
        api.get_assigned_issues()
    assert excinfo.value.status_code == 401


def test_search_decode_error_on_bad_json(api, session):
    session.routes[("GET", "/search")] = FakeResponse(200, None, text="<html>")
    with pytest.raises(DecodeError):
        api.get_assigned_issues()


def test_search_decode_error_on_wrong_shape(api, session):
    session.routes[("GET", "/search")] = FakeResponse(200, {"issues": [{"key": "PROJ-1"}]})
    with pytest.raises(DecodeError):
        api.get_assigned_issues()


def test_create_worklog_request_shape(api, session):
    visibility = WorklogVisibility(type="group", identifier="jira-developers")
    worklog = api.create_worklog("PROJ-1", "Fixed bug", "2024-01-01T09:00:00", 7200, visibility)

    assert worklog.id == "10001"
    assert worklog.issue_id == "20001"
    assert worklog.time_spent_seconds == 7200

    call = session.last("POST")
    assert call["url"] == "https://example.atlassian.net/rest/api/3/issue/PROJ-1/worklog"
    assert call["headers"] == {"Accept": "application/json", "Content-Type": "application/json"}
    body = json.loads(call["data"])
    assert body["timeSpentSeconds"] == 7200
    assert body["started"] == "2024-01-01T09:00:00"
    assert body["visibility"] == {"type": "group", "identifier": "jira-developers"}
    assert body["comment"] == {
        "type": "doc",
        "version": 1,
        "content": [{"type": "paragraph", "content": [{"type": "text", "text": "Fixed bug"}]}],
    }


def test_create_worklog_omits_visibility_when_none(api, session):
    api.create_worklog("PROJ-1", "Fixed bug", "2024-01-01T09:00:00", 60)
    body = json.loads(session.last("POST")["data"])
    assert "visibility" not in body


def test_create_worklog_remote_error(api, session):
    session.routes[("POST", "/worklog")] = FakeResponse(400, {"errorMessages": ["bad started"]})
    with pytest.raises(RemoteError) as excinfo:
        api.create_worklog("PROJ-1", "x", "bad", 60)
    assert excinfo.value.status_code == 400
    assert "bad started" in excinfo.value.text


def test_concurrent_searches_run_in_parallel(api, session):
    # Both requests must be in flight at once to get past the barrier
    barrier = threading.Barrier(2, timeout=5)

    def _search(**kwargs):
        barrier.wait()
        return FakeResponse(200, SEARCH_PAGE)

    session.routes[("GET", "/search")] = _search
    with ThreadPoolExecutor(max_workers=2) as pool:
        futures = [pool.submit(api.get_assigned_issues) for _ in range(2)]
        results = [f.result(timeout=10) for f in futures]
    assert all(len(r) == 2 for r in results)


def test_real_client_configures_transport(credentials, caplog):
    with caplog.at_level(logging.WARNING, logger="worklog_app.core.jira_client"):
        api = JiraAPI(credentials, verify_ssl=False, timeout=5.0)
    assert api.server == "https://example.atlassian.net"
    assert api._session.verify is False
    assert api._session.auth == ("dev@example.com", "secret-token")
    assert "Certificate verification disabled" in caplog.text
    assert "secret-token" not in caplog.text


def test_real_client_verifies_by_default(credentials):
    api = JiraAPI(credentials)
    assert api.verify_ssl is True
    assert api._session.verify is True
