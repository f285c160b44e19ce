"""Shop staff and the client equipment catalog."""

from pydantic import BaseModel, Field, field_validator


class Technician(BaseModel):
    """Member of the shop floor who can hold tools, book hours and draw stock."""

    id: str
    name: str
    specialty: str = ""
    active: bool = True


class TechnicianUpdate(BaseModel):
    """Partial technician edit. ``None`` leaves the field unchanged."""

    name: str | None = None
    specialty: str | None = None
    active: bool | None = None


class SparePart(BaseModel):
    """Part fitted to one unit of a component, with its count per unit."""

    id: str
    name: str
    code: str
    quantity: float = 1

    @field_validator("quantity")
    @classmethod
    def positive_quantity(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("quantity must be positive")
        return v


class Component(BaseModel):
    """Client equipment model the shop services, with its bill of spare parts."""

    id: str
    name: str
    client: str = ""
    model: str = ""
    spare_parts: list[SparePart] = Field(default_factory=list)


class ComponentUpdate(BaseModel):
    name: str | None = None
    client: str | None = None
    model: str | None = None
    spare_parts: list[SparePart] | None = None
