"""Technician roster and component catalog endpoints."""

from fastapi import APIRouter, Depends, status

from src.api.dependencies import (
    get_actor,
    get_add_component_use_case,
    get_add_technician_use_case,
    get_component_use_case,
    get_list_components_use_case,
    get_list_technicians_use_case,
    get_update_component_use_case,
    get_update_technician_use_case,
)
from src.application.dto.requests import CreateComponentRequest, CreateTechnicianRequest
from src.application.dto.responses import (
    ComponentListResponse,
    ErrorResponse,
    TechnicianListResponse,
)
from src.application.use_cases import (
    AddComponentUseCase,
    AddTechnicianUseCase,
    GetComponentUseCase,
    ListComponentsUseCase,
    ListTechniciansUseCase,
    UpdateComponentUseCase,
    UpdateTechnicianUseCase,
)
from src.core.entities import Component, ComponentUpdate, Technician, TechnicianUpdate

technicians_router = APIRouter(prefix="/api/technicians", tags=["technicians"])
components_router = APIRouter(prefix="/api/components", tags=["components"])

EDIT_ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


@technicians_router.get("", response_model=TechnicianListResponse)
async def list_technicians(
    active: bool = False,
    use_case: ListTechniciansUseCase = Depends(get_list_technicians_use_case),
) -> TechnicianListResponse:
    technicians = await use_case.execute(active_only=active)
    return use_case.to_response(technicians)


@technicians_router.post(
    "",
    response_model=Technician,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def add_technician(
    request: CreateTechnicianRequest,
    actor: str = Depends(get_actor),
    use_case: AddTechnicianUseCase = Depends(get_add_technician_use_case),
) -> Technician:
    technician = await use_case.execute(request, actor)
    return use_case.to_response(technician)


@technicians_router.patch("/{technician_id}", response_model=Technician, responses=EDIT_ERRORS)
async def update_technician(
    technician_id: str,
    changes: TechnicianUpdate,
    actor: str = Depends(get_actor),
    use_case: UpdateTechnicianUseCase = Depends(get_update_technician_use_case),
) -> Technician:
    technician = await use_case.execute(technician_id, changes, actor)
    return use_case.to_response(technician)


@components_router.get("", response_model=ComponentListResponse)
async def list_components(
    client: str | None = None,
    use_case: ListComponentsUseCase = Depends(get_list_components_use_case),
) -> ComponentListResponse:
    components = await use_case.execute(client)
    return use_case.to_response(components)


@components_router.post(
    "",
    response_model=Component,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def add_component(
    request: CreateComponentRequest,
    actor: str = Depends(get_actor),
    use_case: AddComponentUseCase = Depends(get_add_component_use_case),
) -> Component:
    component = await use_case.execute(request, actor)
    return use_case.to_response(component)


@components_router.get(
    "/{component_id}",
    response_model=Component,
    responses={404: {"model": ErrorResponse}},
)
async def get_component(
    component_id: str,
    use_case: GetComponentUseCase = Depends(get_component_use_case),
) -> Component:
    component = await use_case.execute(component_id)
    return use_case.to_response(component)


@components_router.patch("/{component_id}", response_model=Component, responses=EDIT_ERRORS)
async def update_component(
    component_id: str,
    changes: ComponentUpdate,
    actor: str = Depends(get_actor),
    use_case: UpdateComponentUseCase = Depends(get_update_component_use_case),
) -> Component:
    component = await use_case.execute(component_id, changes, actor)
    return use_case.to_response(component)
