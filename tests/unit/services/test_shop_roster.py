"""Tests for the technician roster and component catalog."""

import pytest

from src.core.entities import (
    ActivityAction,
    ActivityEntity,
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


class TestTechnicians:
    def test_list(self, ledgers):
        assert [t.id for t in ledgers.roster.list_technicians()] == ["U3", "T2"]

    def test_list_active_only(self, ledgers):
        ledgers.state.find_technician("T2").active = False
        assert [t.id for t in ledgers.roster.list_technicians(active_only=True)] == ["U3"]

    def test_get_unknown(self, ledgers):
        with pytest.raises(TechnicianNotFoundError):
            ledgers.roster.get_technician("U99")

    def test_add(self, ledgers):
        created = ledgers.roster.add_technician(
            Technician(id=" U7 ", name=" Rosa ", specialty="Welding"), "U1"
        )

        assert created.id == "U7"
        assert created.name == "Rosa"
        assert created.active is True
        assert ledgers.state.technicians[-1] is created

        entry = ledgers.state.activity_log[0]
        assert entry.action == ActivityAction.CREATE
        assert entry.entity == ActivityEntity.USER
        assert entry.details == "Technician added: Rosa"

    def test_add_duplicate(self, ledgers):
        with pytest.raises(DuplicateEntityError):
            ledgers.roster.add_technician(Technician(id="U3", name="Juan again"), "U1")
        assert len(ledgers.state.technicians) == 2

    @pytest.mark.parametrize("tech_id,name", [("", "Rosa"), ("U7", "  ")])
    def test_add_requires_id_and_name(self, ledgers, tech_id, name):
        with pytest.raises(ValidationError):
            ledgers.roster.add_technician(Technician(id=tech_id, name=name), "U1")
        assert ledgers.state.activity_log == []

    def test_deactivate(self, ledgers):
        technician = ledgers.roster.update_technician("T2", TechnicianUpdate(active=False), "U1")

        assert technician.active is False
        assert ledgers.state.activity_log[0].details == "Technician deactivated: Carlos (mechanic)"

    def test_rename(self, ledgers):
        ledgers.roster.update_technician("U3", TechnicianUpdate(name="Juan Perez"), "U1")
        assert ledgers.state.find_technician("U3").name == "Juan Perez"
        assert ledgers.state.activity_log[0].details == "Technician updated: Juan Perez"

    def test_blank_name_rejected(self, ledgers):
        with pytest.raises(ValidationError):
            ledgers.roster.update_technician("U3", TechnicianUpdate(name=""), "U1")
        assert ledgers.state.find_technician("U3").name == "Juan (technician)"

    def test_empty_edit_is_silent(self, ledgers):
        ledgers.roster.update_technician("U3", TechnicianUpdate(), "U1")
        assert ledgers.state.activity_log == []


class TestAssign:
    def test_rostered_technician_gets_roster_name(self, ledgers):
        assert ledgers.roster.assign("U3", "whatever the form said") == "Juan (technician)"

    def test_unknown_id_keeps_given_name(self, ledgers):
        assert ledgers.roster.assign("EXT-1", "Subcontractor") == "Subcontractor"
        assert ledgers.roster.assign("EXT-1") == ""

    def test_inactive_technician(self, ledgers):
        ledgers.state.find_technician("U3").active = False
        with pytest.raises(TechnicianInactiveError):
            ledgers.roster.assign("U3")


class TestComponents:
    def test_list_and_filter_by_client(self, ledgers):
        assert [c.id for c in ledgers.roster.list_components()] == ["CMP-001", "CMP-002"]
        assert [c.id for c in ledgers.roster.list_components(" mining corp")] == ["CMP-001"]

    def test_get(self, ledgers):
        pump = ledgers.roster.get_component("CMP-001")
        assert pump.model == "ZX-2000"
        assert [p.code for p in pump.spare_parts] == ["SV-20", "R-6204", "ORK-99"]

    def test_get_unknown(self, ledgers):
        with pytest.raises(ComponentNotFoundError):
            ledgers.roster.get_component("CMP-404")

    def test_add(self, ledgers):
        component = Component(
            id="CMP-003",
            name="Gearbox",
            client="HydraSystems",
            spare_parts=[SparePart(id="SP-10", name="Shaft seal", code="SS-40", quantity=2)],
        )
        created = ledgers.roster.add_component(component, "U1")

        assert ledgers.state.find_component("CMP-003") is created
        assert created is not component
        entry = ledgers.state.activity_log[0]
        assert entry.entity == ActivityEntity.COMPONENT
        assert entry.details == "Component added: Gearbox (HydraSystems)"

    def test_add_duplicate(self, ledgers):
        with pytest.raises(DuplicateEntityError):
            ledgers.roster.add_component(Component(id="CMP-001", name="Pump"), "U1")

    def test_duplicate_spare_part_ids(self, ledgers):
        parts = [
            SparePart(id="SP-1", name="Seal", code="A"),
            SparePart(id="SP-1", name="Bearing", code="B"),
        ]
        with pytest.raises(DuplicateEntityError):
            ledgers.roster.add_component(
                Component(id="CMP-9", name="Pump", spare_parts=parts), "U1"
            )
        assert ledgers.state.find_component("CMP-9") is None

    def test_spare_part_requires_code(self, ledgers):
        parts = [SparePart(id="SP-1", name="Seal", code=" ")]
        with pytest.raises(ValidationError):
            ledgers.roster.add_component(
                Component(id="CMP-9", name="Pump", spare_parts=parts), "U1"
            )

    def test_spare_part_quantity_must_be_positive(self):
        with pytest.raises(ValueError):
            SparePart(id="SP-1", name="Seal", code="A", quantity=0)

    def test_update_replaces_spare_parts(self, ledgers):
        parts = [SparePart(id="SP-20", name="Piston", code="PS-1")]
        component = ledgers.roster.update_component(
            "CMP-002", ComponentUpdate(model="CT-600", spare_parts=parts), "U1"
        )

        assert component.model == "CT-600"
        assert [p.id for p in component.spare_parts] == ["SP-20"]
        assert ledgers.state.activity_log[0].details == "Component updated: Telescopic cylinder"

    def test_update_cannot_clear_spare_parts(self, ledgers):
        with pytest.raises(ValidationError):
            ledgers.roster.update_component("CMP-001", ComponentUpdate(spare_parts=None), "U1")
        assert len(ledgers.roster.get_component("CMP-001").spare_parts) == 3
