"""House API response schema."""

from pydantic import BaseModel, ConfigDict, Field


class HouseResponse(BaseModel):
    """Response for GET /v1/house."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True, from_attributes=True)

    id: str
    name: str
    motto: str | None = None
    gold: int = Field(..., ge=0, description="Treasury balance in gold pieces")
