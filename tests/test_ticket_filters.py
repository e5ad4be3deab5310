# tests/test_ticket_filters.py
import pytest

from conftest import JANE_ID, JOHN_ID, MJ_PROJECT_ID, WEB_PROJECT_ID
from minijira.core.config import get_settings
from minijira.core.errors import ValidationFailed
from minijira.core.ids import parse_id
from minijira.main import app
from minijira.ticket.filters import TicketFilter


def _ids(client, auth, **params) -> set[int]:
    r = client.get("/api/tickets", params=params, headers=auth)
    assert r.status_code == 200, r.text
    return {t["id"] for t in r.json()}


@pytest.fixture
def board(client, auth, make_ticket):
    """A small spread of tickets across every filter dimension."""
    open_high = make_ticket(title="Login crash", description="Stack trace on submit", priority="High", assigneeId=JANE_ID)
    open_low = make_ticket(title="Tweak footer", description="Spacing is off on login page", priority="Low")
    closed_high = make_ticket(title="Payment outage", description="Gateway 500s", priority="High", assigneeId=JOHN_ID)
    web_open = make_ticket(title="Hero image", description="Replace banner", projectId=WEB_PROJECT_ID, assigneeId=JANE_ID)
    client.patch(f"/api/tickets/{closed_high['id']}", json={"status": "Closed"}, headers=auth)
    return {
        "open_high": open_high["id"],
        "open_low": open_low["id"],
        "closed_high": closed_high["id"],
        "web_open": web_open["id"],
    }


def test_no_filters_returns_everything(client, auth, board):
    assert _ids(client, auth) == set(board.values())


def test_empty_values_mean_any(client, auth, board):
    assert _ids(client, auth, search="", status="", priority="", assigneeId="", projectId="") == set(board.values())


def test_status_and_priority_are_conjunctive(client, auth, board):
    assert _ids(client, auth, status="Open", priority="High") == {board["open_high"]}
    assert _ids(client, auth, status="Closed", priority="Low") == set()


def test_unassigned_sentinel_matches_only_null_assignee(client, auth, board):
    assert _ids(client, auth, assigneeId="unassigned") == {board["open_low"]}


def test_concrete_assignee_matches_exactly(client, auth, board):
    assert _ids(client, auth, assigneeId=str(JANE_ID)) == {board["open_high"], board["web_open"]}
    assert _ids(client, auth, assigneeId=str(JOHN_ID)) == {board["closed_high"]}


def test_project_filter(client, auth, board):
    assert _ids(client, auth, projectId=str(WEB_PROJECT_ID)) == {board["web_open"]}
    assert board["web_open"] not in _ids(client, auth, projectId=str(MJ_PROJECT_ID))


def test_search_covers_title_or_description(client, auth, board):
    # "login" is in one description; "Login" in one title
    assert _ids(client, auth, search="login") == {board["open_low"]}
    assert _ids(client, auth, search="Login") == {board["open_high"]}


def test_search_is_and_ed_with_other_filters(client, auth, board):
    assert _ids(client, auth, search="Login", assigneeId="unassigned") == set()
    assert _ids(client, auth, search="e", projectId=str(WEB_PROJECT_ID), assigneeId=str(JANE_ID)) == {board["web_open"]}


def test_search_treats_wildcards_literally(client, auth, make_ticket):
    pct = make_ticket(title="CPU at 100%", description="d")
    make_ticket(title="CPU at 1000", description="d")
    assert _ids(client, auth, search="100%") == {pct["id"]}
    assert _ids(client, auth, search="_") == set()


def test_case_insensitive_search_when_configured(client, auth, board):
    relaxed = get_settings().model_copy(update={"SEARCH_CASE_SENSITIVE": False})
    app.dependency_overrides[get_settings] = lambda: relaxed
    try:
        assert _ids(client, auth, search="LOGIN") == {board["open_high"], board["open_low"]}
    finally:
        del app.dependency_overrides[get_settings]


def test_unknown_enum_filter_matches_nothing(client, auth, board):
    assert _ids(client, auth, status="Done") == set()


def test_non_numeric_ids_are_rejected(client, auth):
    r = client.get("/api/tickets", params={"assigneeId": "jane"}, headers=auth)
    assert r.status_code == 400
    assert r.json()["message"] == "assigneeId is invalid"
    r = client.get("/api/tickets", params={"projectId": "web"}, headers=auth)
    assert r.status_code == 400
    assert r.json()["message"] == "projectId is invalid"


def test_from_query_parsing():
    f = TicketFilter.from_query(search="", status="Open", assignee_id="unassigned", project_id="2")
    assert f.search is None
    assert f.status == "Open"
    assert f.unassigned is True
    assert f.assignee_id is None
    assert f.project_id == 2

    f = TicketFilter.from_query(assignee_id=" 7 ")
    assert f.assignee_id == 7
    assert f.unassigned is False

    with pytest.raises(ValidationFailed):
        TicketFilter.from_query(project_id="x")


def test_conditions_only_for_supplied_dimensions():
    assert TicketFilter().conditions() == []
    assert len(TicketFilter(search="a", status="Open", priority="High", assignee_id=1, project_id=1).conditions()) == 5
    assert len(TicketFilter(unassigned=True, assignee_id=3).conditions()) == 1


def test_malformed_and_oversized_filter_ids_are_rejected(client, auth):
    for params in (
        {"assigneeId": "99999999999999999999"},
        {"projectId": "99999999999999999999"},
        {"projectId": "1_0"},
        {"assigneeId": "٢"},
        {"projectId": "1.0"},
    ):
        r = client.get("/api/tickets", params=params, headers=auth)
        assert r.status_code == 400, params
        assert r.json()["message"].endswith("is invalid")


def test_parse_id_bounds_and_forms():
    assert parse_id(" 42 ", "projectId") == 42
    assert parse_id(2**63 - 1, "projectId") == 2**63 - 1
    for bad in (True, 2**63, "1_0", "٣", "0x10", "", None, 1.5):
        with pytest.raises(ValidationFailed):
            parse_id(bad, "projectId")
