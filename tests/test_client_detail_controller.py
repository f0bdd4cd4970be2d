import asyncio

import pytest

from clientdesk.application.services.client_detail_controller import (
    ClientDetailController,
    editable_payload,
)
from clientdesk.domain.schemas.client import ClientUpdate
from clientdesk.domain.schemas.client_detail import ViewState


def _levels(controller):
    return [n.level for n in controller.notices]


def test_initial_state_is_loading(repo):
    controller = ClientDetailController(repo)
    assert controller.state == ViewState.LOADING
    assert controller.client is None


async def test_load_without_id_stays_loading(repo):
    controller = ClientDetailController(repo)
    assert await controller.load(None) == ViewState.LOADING
    assert controller.notices == []


async def test_missing_client_errors_and_redirects(repo):
    controller = ClientDetailController(repo)

    state = await controller.load("c1")

    assert state == ViewState.ERROR
    assert controller.error_message == "client not found"
    assert controller.redirect_to == "/clients"
    assert _levels(controller) == ["error"]
    assert controller.view().client is None


async def test_client_without_projects_shows_empty_state(repo):
    repo.add_client("c2", name="Beta")
    controller = ClientDetailController(repo)

    assert await controller.load("c2") == ViewState.LOADED

    view = controller.view()
    assert view.stats.count == 0
    assert view.stats.total_contract_value == 0
    assert view.has_projects is False
    assert view.recent_projects == []
    assert view.redirect_to is None


async def test_loaded_view_derives_stats_debts_and_statuses(repo):
    repo.add_client(
        "c1",
        name="Acme",
        profiles=[{"id": "pr1", "name": "Brief.pdf"}],
        profile_folders=[{"id": "f1", "name": "Contracts"}],
    )
    repo.add_project(
        "c1",
        "p1",
        status="in-progress",
        contract_value=1000,
        end_date="2024-06-30",
        payments=[{"amount": 400, "paid": True}, {"amount": 600, "paid": False}],
    )
    repo.add_project("c1", "p2", status="archived", contract_value=500, payments=[{"amount": 600, "paid": True}])
    controller = ClientDetailController(repo)

    await controller.load("c1")
    view = controller.view()

    assert view.state == ViewState.LOADED
    assert view.stats.count == 2
    assert view.stats.total_contract_value == 1500
    assert view.total_contract_value_display == "1.500 ₫"
    assert controller.debts == {"p1": 600, "p2": -100}
    assert view.profile_count == 1
    assert [f.name for f in view.client.folders] == ["Contracts"]

    first, second = view.projects
    assert first.status.label == "Running"
    assert first.status.tag == "active"
    assert first.end_date_display == "30/06/2024"
    assert first.start_date_display == "N/A"
    assert first.debt_display == "600 ₫"
    assert second.status.label == "archived"
    assert second.status.tag == "neutral"
    assert second.debt_display == "-100 ₫"
    assert second.progress.is_credit is True


async def test_recent_projects_are_capped(repo):
    repo.add_client("c1")
    for i in range(7):
        repo.add_project("c1", f"p{i}", contract_value=10)
    controller = ClientDetailController(repo)

    await controller.load("c1")
    view = controller.view()

    assert len(view.projects) == 7
    assert [p.id for p in view.recent_projects] == ["p0", "p1", "p2", "p3", "p4"]


async def test_project_fetch_failure_is_not_fatal(repo):
    repo.add_client("c1", name="Acme")
    repo.add_project("c1", "p1", contract_value=100)
    repo.fail_projects = True
    controller = ClientDetailController(repo)

    assert await controller.load("c1") == ViewState.LOADED
    assert controller.client.name == "Acme"
    assert controller.projects == []
    assert controller.redirect_to is None
    assert [(n.level, n.message) for n in controller.notices] == [
        ("warning", "failed to load client projects")
    ]


async def test_stats_follow_project_list(repo):
    repo.add_client("c1")
    repo.add_project("c1", "p1", contract_value=100)
    controller = ClientDetailController(repo)
    await controller.load("c1")
    assert controller.stats.total_contract_value == 100

    repo.add_project("c1", "p2", contract_value=50)
    await controller.refresh()
    assert controller.stats.count == 2
    assert controller.stats.total_contract_value == 150


async def test_failed_update_keeps_prior_state(repo):
    repo.add_client("c3", name="Gamma", email="old@gamma.vn")
    repo.add_project("c3", "p1", contract_value=100)
    repo.fail_update = True
    controller = ClientDetailController(repo)
    await controller.load("c3")
    before_client = controller.client
    before_projects = controller.projects

    ok = await controller.submit_edit(ClientUpdate(name="Gamma", email="new@gamma.vn"))

    assert ok is False
    assert controller.state == ViewState.LOADED
    assert controller.client is before_client
    assert controller.projects is before_projects
    assert controller.client.email == "old@gamma.vn"
    assert controller.redirect_to is None
    assert [(n.level, n.message) for n in controller.notices] == [("error", "failed to update client")]


async def test_successful_update_reloads_from_store(repo):
    repo.add_client("c3", name="Gamma", contract_value=100)
    controller = ClientDetailController(repo)
    await controller.load("c3")

    ok = await controller.submit_edit({"name": "Gamma Ltd", "contract_value": 250})

    assert ok is True
    assert controller.state == ViewState.LOADED
    assert controller.client.name == "Gamma Ltd"
    assert controller.client.contract_value == 250
    assert _levels(controller) == ["success"]


async def test_update_payload_never_carries_identity_or_relations(repo):
    repo.add_client("c3", name="Gamma", profile_folders=[{"id": "f1", "name": "Docs"}])
    controller = ClientDetailController(repo)
    await controller.load("c3")

    edited = controller.client.model_copy(update={"name": "Gamma Ltd"})
    await controller.submit_edit(edited)

    (client_id, payload), = repo.updates
    assert client_id == "c3"
    assert set(payload.model_dump()) == {
        "name",
        "contact_person",
        "email",
        "invoice_email",
        "contract_value",
        "classification",
        "source",
    }


async def test_submit_edit_before_load_is_rejected_with_notice(repo):
    controller = ClientDetailController(repo)
    assert await controller.submit_edit({"name": "x"}) is False
    assert repo.updates == []
    assert [(n.level, n.message) for n in controller.notices] == [("error", "client is not loaded yet")]


async def test_notices_do_not_leak_into_next_client(repo):
    repo.add_client("c2", name="Beta")
    controller = ClientDetailController(repo)

    await controller.load("c1")
    assert _levels(controller) == ["error"]

    assert await controller.load("c2") == ViewState.LOADED
    assert controller.view().notices == []
    assert controller.view().error_message is None


async def test_successful_refresh_drops_project_warning(repo):
    repo.add_client("c1")
    repo.add_project("c1", "p1", contract_value=100)
    repo.fail_projects = True
    controller = ClientDetailController(repo)
    await controller.load("c1")
    assert _levels(controller) == ["warning"]

    repo.fail_projects = False
    await controller.refresh()

    assert controller.notices == []
    assert [p.id for p in controller.projects] == ["p1"]


async def test_update_success_notice_survives_reload_once(repo):
    repo.add_client("c3", name="Gamma")
    repo.add_project("c3", "p1")
    repo.fail_projects = True
    controller = ClientDetailController(repo)
    await controller.load("c3")
    repo.fail_projects = False

    await controller.submit_edit({"name": "Gamma Ltd"})

    assert [(n.level, n.message) for n in controller.notices] == [("success", "client updated")]


async def test_stale_response_cannot_overwrite_newer_target(repo):
    repo.add_client("old", name="Old client")
    repo.add_client("new", name="New client")
    repo.gates["old"] = asyncio.Event()
    controller = ClientDetailController(repo)

    slow = asyncio.create_task(controller.load("old"))
    await asyncio.sleep(0)
    await controller.load("new")

    repo.gates["old"].set()
    await slow

    assert controller.client_id == "new"
    assert controller.client.name == "New client"
    assert controller.state == ViewState.LOADED


async def test_stale_not_found_does_not_error_newer_target(repo):
    repo.add_client("new", name="New client")
    repo.gates["gone"] = asyncio.Event()
    controller = ClientDetailController(repo)

    slow = asyncio.create_task(controller.load("gone"))
    await asyncio.sleep(0)
    await controller.load("new")
    repo.gates["gone"].set()
    await slow

    assert controller.state == ViewState.LOADED
    assert controller.redirect_to is None
    assert controller.notices == []


@pytest.mark.parametrize(
    "data",
    [
        {"id": "c9", "name": "Acme", "profiles": [], "folders": [], "email": "a@acme.vn"},
        ClientUpdate(name="Acme", email="a@acme.vn"),
    ],
)
def test_editable_payload_keeps_only_editable_fields(data):
    payload = editable_payload(data)
    assert payload.model_dump(exclude_unset=True) == {"name": "Acme", "email": "a@acme.vn"}
