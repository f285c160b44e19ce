"""Technician roster and component catalog use cases."""

from src.application.dto.requests import CreateComponentRequest, CreateTechnicianRequest
from src.application.dto.responses import ComponentListResponse, TechnicianListResponse
from src.application.use_cases.base import LedgerUseCase
from src.core.entities import (
    Component,
    ComponentUpdate,
    SparePart,
    Technician,
    TechnicianUpdate,
)
from src.core.entities.common import new_id
from src.core.entities.ledger_state import CollectionKey

TECHNICIANS = CollectionKey.TECHNICIANS
COMPONENTS = CollectionKey.COMPONENTS


class ListTechniciansUseCase(LedgerUseCase):
    async def execute(self, active_only: bool = False) -> list[Technician]:
        ledgers = await self._load([TECHNICIANS])
        return ledgers.roster.list_technicians(active_only)

    def to_response(self, technicians: list[Technician]) -> TechnicianListResponse:
        return TechnicianListResponse(items=technicians, total=len(technicians))


class AddTechnicianUseCase(LedgerUseCase):
    async def execute(self, request: CreateTechnicianRequest, actor: str) -> Technician:
        ledgers = await self._load()
        created = ledgers.roster.add_technician(Technician(**request.model_dump()), actor)
        await self._commit(ledgers, TECHNICIANS)
        return created

    def to_response(self, technician: Technician) -> Technician:
        return technician


class UpdateTechnicianUseCase(LedgerUseCase):
    """Rename, re-specialize or (de)activate a technician.

    Deactivated technicians keep their history but cannot take new work.
    """

    async def execute(
        self, technician_id: str, changes: TechnicianUpdate, actor: str
    ) -> Technician:
        ledgers = await self._load()
        technician = ledgers.roster.update_technician(technician_id, changes, actor)
        await self._commit(ledgers, TECHNICIANS)
        return technician

    def to_response(self, technician: Technician) -> Technician:
        return technician


class ListComponentsUseCase(LedgerUseCase):
    async def execute(self, client: str | None = None) -> list[Component]:
        ledgers = await self._load([COMPONENTS])
        return ledgers.roster.list_components(client)

    def to_response(self, components: list[Component]) -> ComponentListResponse:
        return ComponentListResponse(items=components, total=len(components))


class GetComponentUseCase(LedgerUseCase):
    async def execute(self, component_id: str) -> Component:
        ledgers = await self._load([COMPONENTS])
        return ledgers.roster.get_component(component_id)

    def to_response(self, component: Component) -> Component:
        return component


class AddComponentUseCase(LedgerUseCase):
    async def execute(self, request: CreateComponentRequest, actor: str) -> Component:
        component = Component(
            id=request.id or f"CMP-{new_id()}",
            name=request.name,
            client=request.client,
            model=request.model,
            spare_parts=[
                SparePart(**part.model_dump(exclude={"id"}), id=part.id or f"SP-{new_id()}")
                for part in request.spare_parts
            ],
        )
        ledgers = await self._load()
        created = ledgers.roster.add_component(component, actor)
        await self._commit(ledgers, COMPONENTS)
        return created

    def to_response(self, component: Component) -> Component:
        return component


class UpdateComponentUseCase(LedgerUseCase):
    async def execute(self, component_id: str, changes: ComponentUpdate, actor: str) -> Component:
        ledgers = await self._load()
        component = ledgers.roster.update_component(component_id, changes, actor)
        await self._commit(ledgers, COMPONENTS)
        return component

    def to_response(self, component: Component) -> Component:
        return component
