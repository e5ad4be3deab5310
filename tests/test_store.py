# tests/test_store.py
import httpx
import pytest

from conftest import JANE_ID, JOHN_ID, MJ_PROJECT_ID, WEB_PROJECT_ID
from minijira.client.api import ApiClient
from minijira.client.models import TicketFilters
from minijira.client.store import SAVE_FAILED, TicketStore, TicketStoreError


def ticket_json(ticket_id: int, **overrides) -> dict:
    data = {
        "id": ticket_id,
        "title": f"Ticket {ticket_id}",
        "description": "Body",
        "projectId": MJ_PROJECT_ID,
        "assigneeId": None,
        "priority": "Medium",
        "status": "Open",
        "createdAt": "2026-01-01T10:00:00",
        "updatedAt": "2026-01-01T10:00:00",
    }
    data.update(overrides)
    return data


def mock_api(handler) -> ApiClient:
    http = httpx.Client(transport=httpx.MockTransport(handler), base_url="http://minijira.test")
    return ApiClient(http, token="t0k3n")


@pytest.fixture
def store(client, token) -> TicketStore:
    store = TicketStore(ApiClient(client, token=token))
    store.start()
    return store


# Against the real app


def test_start_loads_lookups_and_tickets(store):
    assert {u.name for u in store.users} == {"Admin User", "Jane Dev", "John QA"}
    assert {p.key for p in store.projects} == {"MJ", "WEB"}
    assert store.tickets == []
    assert store.loading is False


def test_create_refetches_list(store):
    created = store.create_ticket("Broken build", "CI is red", project_id=MJ_PROJECT_ID, assignee_id=JANE_ID)

    assert created.priority == "Medium"
    assert created.status == "Open"
    assert [t.id for t in store.tickets] == [created.id]
    assert store.ticket_key(created) == f"MJ-{created.id}"
    assert store.user_name(created.assignee_id) == "Jane Dev"


def test_changing_filters_requeries(store, make_ticket):
    mj = make_ticket(title="On MJ")
    web = make_ticket(title="On WEB", projectId=WEB_PROJECT_ID)
    store.refresh_tickets()
    assert {t.id for t in store.tickets} == {mj["id"], web["id"]}

    store.set_filters(project_id=str(WEB_PROJECT_ID))
    assert [t.id for t in store.tickets] == [web["id"]]

    store.set_filters(TicketFilters())
    assert {t.id for t in store.tickets} == {mj["id"], web["id"]}


def test_unassigned_filter_through_store(store, make_ticket):
    free = make_ticket()
    make_ticket(assigneeId=JOHN_ID)
    store.set_filters(assignee_id="unassigned")
    assert [t.id for t in store.tickets] == [free["id"]]


def test_update_clears_selection_and_refetches(store):
    created = store.create_ticket("Flaky test", "Sometimes fails", project_id=MJ_PROJECT_ID, assignee_id=JANE_ID)
    store.select_ticket(created)

    updated = store.update_ticket(created.id, status="Resolved", assignee_id=None)

    assert updated.status == "Resolved"
    assert updated.assignee_id is None
    assert store.selected_ticket is None
    assert store.tickets[0].status == "Resolved"
    assert store.user_name(store.tickets[0].assignee_id) == "Unassigned"


def test_update_after_filter_hides_ticket(store):
    created = store.create_ticket("Open thing", "d", project_id=MJ_PROJECT_ID)
    store.set_filters(status="Open")
    assert [t.id for t in store.tickets] == [created.id]

    store.update_ticket(created.id, status="Closed")
    assert store.tickets == []


def test_server_validation_message_surfaces(store):
    created = store.create_ticket("Keep me selected", "d", project_id=MJ_PROJECT_ID)
    store.select_ticket(created)
    store.set_filters(priority="Medium")

    with pytest.raises(TicketStoreError) as excinfo:
        store.update_ticket(created.id, project_id=999)

    assert excinfo.value.message == "projectId is invalid"
    assert store.error == "projectId is invalid"
    # nothing rolled back
    assert store.selected_ticket == created
    assert store.filters.priority == "Medium"


def test_create_with_bad_project_surfaces_message(store):
    with pytest.raises(TicketStoreError, match="projectId is invalid"):
        store.create_ticket("T", "D", project_id=999)
    assert store.tickets == []


def test_update_rejects_unknown_fields(store):
    with pytest.raises(TypeError):
        store.update_ticket(1, colour="red")


def test_cancel_edit(store):
    created = store.create_ticket("T", "D", project_id=MJ_PROJECT_ID)
    store.select_ticket(created)
    store.cancel_edit()
    assert store.selected_ticket is None


# Against a scripted transport


def test_unchanged_filters_do_not_requery():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.path)
        return httpx.Response(200, json=[])

    store = TicketStore(mock_api(handler), TicketFilters(status="Open"))
    store.set_filters(status="Open")
    assert calls == []
    store.set_filters(status="Closed")
    assert calls == ["/api/tickets"]


def test_every_request_carries_bearer_token_and_filters():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.headers.get("Authorization"), dict(request.url.params)))
        return httpx.Response(200, json=[])

    store = TicketStore(mock_api(handler))
    store.set_filters(TicketFilters(search="crash", assignee_id="unassigned", project_id="2"))

    assert seen == [("Bearer t0k3n", {"search": "crash", "assigneeId": "unassigned", "projectId": "2"})]


def test_list_after_mutation_is_server_snapshot():
    # The server accepts the ticket but the re-query does not include it
    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "POST":
            return httpx.Response(201, json=ticket_json(42))
        return httpx.Response(200, json=[ticket_json(7)])

    store = TicketStore(mock_api(handler))
    created = store.create_ticket("T", "D", project_id=1)

    assert created.id == 42
    assert [t.id for t in store.tickets] == [7]


def test_generic_fallback_when_server_says_nothing():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, content=b"")

    store = TicketStore(mock_api(handler))
    with pytest.raises(TicketStoreError) as excinfo:
        store.create_ticket("T", "D", project_id=1)
    assert excinfo.value.message == SAVE_FAILED


def test_failed_refresh_keeps_previous_list_and_filters():
    responses = iter([
        httpx.Response(200, json=[ticket_json(1)]),
        httpx.Response(503, json={"message": "Database unavailable"}),
    ])

    store = TicketStore(mock_api(lambda request: next(responses)))
    store.refresh_tickets()
    with pytest.raises(TicketStoreError, match="Database unavailable"):
        store.set_filters(priority="High")

    assert [t.id for t in store.tickets] == [1]
    assert store.filters.priority == "High"
    assert store.loading is False


def test_stale_response_does_not_overwrite_newer_list():
    store = None
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.params.get("status"))
        if len(calls) == 1:
            # the filter changes again before the first query answers
            store.set_filters(status="Closed")
            return httpx.Response(200, json=[ticket_json(1, status="Open")])
        return httpx.Response(200, json=[ticket_json(2, status="Closed")])

    store = TicketStore(mock_api(handler))
    store.set_filters(status="Open")

    assert calls == ["Open", "Closed"]
    assert [t.id for t in store.tickets] == [2]
    assert store.filters.status == "Closed"


def test_filters_to_params_skips_empty_values():
    assert TicketFilters().to_params() == {}
    assert TicketFilters(status="In Progress", project_id="3").to_params() == {
        "status": "In Progress",
        "projectId": "3",
    }
