"""Audit trail and application settings entities."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

from src.core.entities.common import Timestamp, new_id


class ActivityAction(str, Enum):
    """What happened."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    STATUS_CHANGE = "STATUS_CHANGE"
    RECEIVE_STOCK = "RECEIVE_STOCK"
    DISPATCH_STOCK = "DISPATCH_STOCK"
    TOOL_LOAN = "TOOL_LOAN"
    TOOL_RETURN = "TOOL_RETURN"
    TOOL_MAINTENANCE = "TOOL_MAINTENANCE"


class ActivityEntity(str, Enum):
    """What it happened to."""

    WORK_ORDER = "OT"
    INVENTORY = "INVENTORY"
    SYSTEM = "SYSTEM"
    DOCUMENT = "DOCUMENT"
    CONSUMPTION = "CONSUMPTION"
    TOOL = "TOOL"
    USER = "USER"
    COMPONENT = "COMPONENT"


class ActivityLogEntry(BaseModel):
    """One audit trail line."""

    id: str = Field(default_factory=new_id)
    timestamp: Timestamp
    action: ActivityAction
    entity: ActivityEntity
    details: str
    user_id: str


class AppSettings(BaseModel):
    """User-editable application preferences."""

    company_name: str = "North Chrome Ltda."
    notifications_enabled: bool = True
    debug_mode_enabled: bool = False
    theme: Literal["light", "dark"] = "light"


class AppSettingsUpdate(BaseModel):
    company_name: str | None = None
    notifications_enabled: bool | None = None
    debug_mode_enabled: bool | None = None
    theme: Literal["light", "dark"] | None = None
