"""Pydantic models for the partner network engine."""

from partner_network.models.nodes import Company, Person
from partner_network.models.relationships import OwnershipEdge
from partner_network.models.responses import (
    PaginatedResponse,
    DiscoveredLink,
    SharedCompany,
    KinshipCandidate,
    SeedPerson,
    KinshipResult,
    PersonNetwork,
    NetworkResponse,
)

__all__ = [
    # Nodes
    "Company",
    "Person",
    # Relationships
    "OwnershipEdge",
    # Responses
    "PaginatedResponse",
    "DiscoveredLink",
    "SharedCompany",
    "KinshipCandidate",
    "SeedPerson",
    "KinshipResult",
    "PersonNetwork",
    "NetworkResponse",
]
