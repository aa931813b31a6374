"""Budget Schemas: request body for the budget refresh endpoint.

Invariants:
    - city stays optional here; the route reports a missing city with its own message
    - fiscalYear must be an integer when present

Design Decisions:
    - camelCase aliases match the JSON clients already send; snake_case accepted too
"""

from pydantic import BaseModel, ConfigDict, Field


class BudgetRefreshRequest(BaseModel):
    """POST /api/budget body."""
    model_config = ConfigDict(populate_by_name=True)

    city: str | None = None
    fiscal_year: int | None = Field(None, alias="fiscalYear", ge=1900, le=2200)
