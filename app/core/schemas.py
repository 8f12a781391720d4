from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, PlainSerializer

# Amounts stay Decimal inside the service and go out as JSON numbers.
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    detail: str


class HealthResponse(BaseModel):
    status: str
