from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _as_text(value: object) -> object:
    """Stringify JSON scalars: ``42`` and ``42.0`` become ``"42"``, ``true`` becomes ``"true"``.

    ``false`` and zero count as absent, like an empty string.
    """

    if isinstance(value, bool):
        return "true" if value else None
    if isinstance(value, (int, float)) and not value:
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value.strip()
    return value


class AttachEstimatePayload(BaseModel):
    """JSON body of ``POST /api/quickbooks/attach-estimate-pdf``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    quick_book_estimate_id: str | None = Field(default=None, alias="quickBookEstimateId")
    work_order_id: str | None = Field(default=None, alias="workOrderId")
    entity_id: str | None = Field(default=None, alias="entityId")
    type: str | None = None
    realm_id: str | None = Field(default=None, alias="realmId")

    @field_validator("quick_book_estimate_id", "work_order_id", "entity_id", "type", "realm_id", mode="before")
    @classmethod
    def _coerce_text(cls, value: object) -> object:
        return _as_text(value)


class InspectionEmailPayload(BaseModel):
    """JSON body of ``POST /api/send-inspection-email``."""

    model_config = ConfigDict(extra="ignore")

    email: str | None = None
    name: str | None = None
