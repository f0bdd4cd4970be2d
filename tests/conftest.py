import os
import pytest

# Tests never touch a real database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")

from clientdesk.core.exceptions import NotFoundError, FetchError, UpdateError
from clientdesk.domain.schemas.project import ProjectRead
from clientdesk.infrastructure.mappers.client_mapper import row_to_client_read


class FakeClientRepository:
    """In-memory store shaped like the joined rows the real store returns."""

    def __init__(self):
        self.clients = {}
        self.projects = {}
        self.updates = []
        self.fail_projects = False
        self.fail_update = False
        # client_id -> asyncio.Event; fetches for that id wait on it
        self.gates = {}

    def add_client(self, client_id, **fields):
        row = {
            "id": client_id,
            "name": fields.pop("name", f"Client {client_id}"),
            "contact_person": None,
            "email": None,
            "invoice_email": None,
            "contract_value": None,
            "classification": None,
            "source": None,
            "profiles": [],
            "profile_folders": [],
        }
        row.update(fields)
        self.clients[client_id] = row
        self.projects.setdefault(client_id, [])
        return row

    def add_project(self, client_id, project_id, **fields):
        data = {"id": project_id, "client_id": client_id, "name": f"Project {project_id}"}
        data.update(fields)
        self.projects.setdefault(client_id, []).append(data)
        return data

    async def _wait(self, client_id):
        gate = self.gates.get(client_id)
        if gate is not None:
            await gate.wait()

    async def fetch_client_with_relations(self, client_id):
        await self._wait(client_id)
        row = self.clients.get(client_id)
        if row is None:
            raise NotFoundError("Client not found", details={"client_id": client_id})
        return row_to_client_read(row)

    async def fetch_projects_for_client(self, client_id):
        if self.fail_projects:
            raise FetchError("store unavailable")
        return [ProjectRead.model_validate(p) for p in self.projects.get(client_id, [])]

    async def update_client(self, client_id, payload):
        if self.fail_update:
            raise UpdateError("store unavailable")
        self.updates.append((client_id, payload))
        self.clients[client_id].update(payload.model_dump(exclude_unset=True))


@pytest.fixture()
def repo():
    return FakeClientRepository()


@pytest.fixture()
def make_project():
    def factory(contract_value=None, payments=None, **fields):
        data = {
            "id": fields.pop("id", "p1"),
            "client_id": fields.pop("client_id", "c1"),
            "name": fields.pop("name", "Website"),
            "contract_value": contract_value,
            "payments": payments or [],
        }
        data.update(fields)
        return ProjectRead.model_validate(data)

    return factory

