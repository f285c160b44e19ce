"""
Technician roster and client component catalog.

The other ledgers ask the roster for the name to snapshot onto a loan,
labor entry or dispatch. Ids that are not on the roster are accepted as
free-form technicians and keep whatever name the caller gave.
"""

from __future__ import annotations

from src.config import get_logger
from src.core.entities.activity import ActivityAction, ActivityEntity
from src.core.entities.ledger_state import LedgerState
from src.core.entities.roster import (
    Component,
    ComponentUpdate,
    SparePart,
    Technician,
    TechnicianUpdate,
)
from src.core.exceptions import (
    ComponentNotFoundError,
    DuplicateEntityError,
    TechnicianInactiveError,
    TechnicianNotFoundError,
    ValidationError,
)
from src.core.services.activity_log import ActivityLog

logger = get_logger(__name__)


class ShopRoster:
    """Mutation surface for ``LedgerState.technicians`` and ``components``."""

    def __init__(self, state: LedgerState, activity: ActivityLog) -> None:
        self._state = state
        self._activity = activity

    # ------------------------------------------------------------------
    # Technicians
    # ------------------------------------------------------------------

    def list_technicians(self, active_only: bool = False) -> list[Technician]:
        return [t for t in self._state.technicians if t.active or not active_only]

    def get_technician(self, technician_id: str) -> Technician:
        technician = self._state.find_technician(technician_id)
        if technician is None:
            raise TechnicianNotFoundError(technician_id)
        return technician

    def assign(self, technician_id: str, given_name: str = "") -> str:
        """
        Name to snapshot for work handed to ``technician_id``.

        Rostered technicians always get their roster name and must be
        active. Unknown ids fall back to ``given_name``.
        """
        technician = self._state.find_technician(technician_id)
        if technician is None:
            return given_name
        if not technician.active:
            raise TechnicianInactiveError(technician.id)
        return technician.name

    def add_technician(self, technician: Technician, actor: str) -> Technician:
        technician_id = technician.id.strip()
        if not technician_id:
            raise ValidationError("id", "technician id is required")
        if self._state.find_technician(technician_id) is not None:
            raise DuplicateEntityError("Technician", "id", technician_id)
        name = technician.name.strip()
        if not name:
            raise ValidationError("name", "technician name is required")

        created = technician.model_copy(
            update={"id": technician_id, "name": name, "specialty": technician.specialty.strip()}
        )
        self._state.technicians.append(created)
        self._activity.append(
            ActivityAction.CREATE,
            ActivityEntity.USER,
            f"Technician added: {created.name}",
            actor,
        )
        logger.info("technician_added", technician_id=created.id)
        return created

    def update_technician(
        self, technician_id: str, changes: TechnicianUpdate, actor: str
    ) -> Technician:
        technician = self.get_technician(technician_id)
        fields = changes.model_dump(exclude_unset=True)

        if "name" in fields:
            name = (fields["name"] or "").strip()
            if not name:
                raise ValidationError("name", "technician name cannot be empty")
            fields["name"] = name
        if "active" in fields and fields["active"] is None:
            raise ValidationError("active", "cannot be cleared")
        if "specialty" in fields:
            fields["specialty"] = (fields["specialty"] or "").strip()

        if not fields:
            return technician
        for name, value in fields.items():
            setattr(technician, name, value)

        if fields.get("active") is False:
            details = f"Technician deactivated: {technician.name}"
        else:
            details = f"Technician updated: {technician.name}"
        self._activity.append(ActivityAction.UPDATE, ActivityEntity.USER, details, actor)
        logger.info("technician_updated", technician_id=technician.id, fields=sorted(fields))
        return technician

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    def list_components(self, client: str | None = None) -> list[Component]:
        if client is None:
            return list(self._state.components)
        key = client.strip().lower()
        return [c for c in self._state.components if c.client.lower() == key]

    def get_component(self, component_id: str) -> Component:
        component = self._state.find_component(component_id)
        if component is None:
            raise ComponentNotFoundError(component_id)
        return component

    def add_component(self, component: Component, actor: str) -> Component:
        component_id = component.id.strip()
        if not component_id:
            raise ValidationError("id", "component id is required")
        if self._state.find_component(component_id) is not None:
            raise DuplicateEntityError("Component", "id", component_id)
        name = component.name.strip()
        if not name:
            raise ValidationError("name", "component name is required")
        self._check_spare_parts(component.spare_parts)

        created = component.model_copy(deep=True, update={"id": component_id, "name": name})
        self._state.components.append(created)
        self._activity.append(
            ActivityAction.CREATE,
            ActivityEntity.COMPONENT,
            f"Component added: {created.name} ({created.client or 'no client'})",
            actor,
        )
        logger.info(
            "component_added",
            component_id=created.id,
            spare_parts=len(created.spare_parts),
        )
        return created

    def update_component(
        self, component_id: str, changes: ComponentUpdate, actor: str
    ) -> Component:
        component = self.get_component(component_id)
        fields = changes.model_dump(exclude_unset=True)

        if "name" in fields:
            name = (fields["name"] or "").strip()
            if not name:
                raise ValidationError("name", "component name cannot be empty")
            fields["name"] = name
        if "spare_parts" in fields:
            if changes.spare_parts is None:
                raise ValidationError("spare_parts", "cannot be cleared")
            self._check_spare_parts(changes.spare_parts)
            fields["spare_parts"] = [p.model_copy() for p in changes.spare_parts]
        for text_field in ("client", "model"):
            if text_field in fields:
                fields[text_field] = fields[text_field] or ""

        if not fields:
            return component
        for name, value in fields.items():
            setattr(component, name, value)
        self._activity.append(
            ActivityAction.UPDATE,
            ActivityEntity.COMPONENT,
            f"Component updated: {component.name}",
            actor,
        )
        logger.info("component_updated", component_id=component.id, fields=sorted(fields))
        return component

    @staticmethod
    def _check_spare_parts(parts: list[SparePart]) -> None:
        seen: set[str] = set()
        for part in parts:
            if not part.id.strip():
                raise ValidationError("spare_parts", "spare part id is required")
            if part.id in seen:
                raise DuplicateEntityError("Spare part", "id", part.id)
            seen.add(part.id)
            if not part.code.strip():
                raise ValidationError("spare_parts", "spare part code is required", part.id)
