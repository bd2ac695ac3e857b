# This project was developed with assistance from AI tools.
"""Health check response schema."""

from typing import Literal

from pydantic import BaseModel


class HealthItem(BaseModel):
    """Status of one component."""

    name: str
    status: Literal["healthy", "unhealthy"]
    message: str
    version: str | None = None
