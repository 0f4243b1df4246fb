"""Pydantic models for Neo4j relationship types."""

from typing import Optional

from pydantic import BaseModel, Field


class OwnershipEdge(BaseModel):
    """PARTNER_OF relationship, always pointing Person -> Company."""

    person_id: str
    company_id: str
    role: Optional[str] = Field(None, description="Qualification, e.g. Administrator, Partner")
    percentage: Optional[float] = Field(None, description="Share of capital, 0-100 when known")
    person_name: Optional[str] = Field(
        None, description="Joined person name, only populated by bulk reads"
    )
