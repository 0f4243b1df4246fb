"""Pydantic models for discovery results and API responses."""

from typing import Generic, Literal, Optional, TypeVar

from pydantic import BaseModel, Field


T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """Generic paginated response model."""

    items: list[T]
    total: int
    page: int = Field(..., ge=1)
    page_size: int = Field(..., ge=1, le=100)
    pages: int


class DiscoveredLink(BaseModel):
    """Classified link between a person and a company. Never persisted."""

    person_id: str
    company_id: str
    company_name: str
    degree: Literal[1, 2, 3]
    kind: Literal["direct"] = "direct"


class SharedCompany(BaseModel):
    """Company both the seed and a candidate hold an edge to."""

    company_id: str
    company_name: str


class KinshipCandidate(BaseModel):
    """Person probably related to the seed, with merged heuristic evidence."""

    masked_tax_id: str
    name: str
    reasons: str
    confidence: int = Field(..., ge=0, le=95)
    shared_companies: list[SharedCompany] = []


class SeedPerson(BaseModel):
    """The person a kinship search started from."""

    id: str
    name: Optional[str] = None


class KinshipResult(BaseModel):
    """Kinship candidates for a seed, sorted by descending confidence."""

    seed: SeedPerson
    candidates: list[KinshipCandidate] = []


class PersonNetwork(BaseModel):
    """Direct links of one person in the bulk network report."""

    person_id: str
    person_name: str
    links: list[DiscoveredLink]


class NetworkResponse(BaseModel):
    """Response for the bulk network report."""

    networks: list[PersonNetwork]
    total_persons: int
    total_links: int
