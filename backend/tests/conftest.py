"""Shared fixtures: an in-memory ownership graph standing in for Neo4j."""

from typing import Iterable, Optional
from unittest.mock import patch

import pytest

from partner_network.errors import SeedNotFound
from partner_network.models import Company, OwnershipEdge, Person


class FakeOwnershipGraph:
    """Mirrors OwnershipGraph over plain lists and records every call."""

    def __init__(self):
        self.persons: dict[str, Person] = {}
        self.companies: dict[str, Company] = {}
        self.edges: list[OwnershipEdge] = []
        self.calls: list[tuple] = []

    def add_person(self, person_id: str, name: Optional[str] = None) -> Person:
        person = Person(id=person_id, name=name)
        self.persons[person_id] = person
        return person

    def add_company(
        self,
        company_id: str,
        legal_name: Optional[str] = None,
        trade_name: Optional[str] = None,
    ) -> Company:
        company = Company(id=company_id, legal_name=legal_name, trade_name=trade_name)
        self.companies[company_id] = company
        return company

    def add_edge(
        self,
        person_id: str,
        company_id: str,
        percentage: Optional[float] = None,
        role: str = "Sócio",
    ) -> OwnershipEdge:
        edge = OwnershipEdge(
            person_id=person_id,
            company_id=company_id,
            role=role,
            percentage=percentage,
        )
        self.edges.append(edge)
        return edge

    async def get_person(self, person_id: str) -> Person:
        self.calls.append(("get_person", person_id))
        if person_id not in self.persons:
            raise SeedNotFound(person_id)
        return self.persons[person_id]

    async def get_ownership_edges(self, person_id: str) -> list[OwnershipEdge]:
        self.calls.append(("get_ownership_edges", person_id))
        return [e for e in self.edges if e.person_id == person_id]

    async def get_ownership_edges_for_companies(self, company_ids: Iterable[str]) -> list[OwnershipEdge]:
        ids = list(company_ids)
        self.calls.append(("get_ownership_edges_for_companies", ids))
        return [e for e in self.edges if e.company_id in ids]

    async def get_companies_by_id(self, company_ids: Iterable[str]) -> dict[str, Company]:
        ids = list(company_ids)
        self.calls.append(("get_companies_by_id", ids))
        return {i: self.companies[i] for i in ids if i in self.companies}

    async def get_persons_by_id(self, person_ids: Iterable[str]) -> dict[str, Person]:
        ids = list(person_ids)
        self.calls.append(("get_persons_by_id", ids))
        return {i: self.persons[i] for i in ids if i in self.persons}

    async def get_all_ownership_edges(self, limit: int) -> list[OwnershipEdge]:
        self.calls.append(("get_all_ownership_edges", limit))
        rows = []
        for edge in self.edges[:limit]:
            person = self.persons.get(edge.person_id)
            rows.append(edge.model_copy(update={"person_name": person.name if person else None}))
        return rows

    def called(self, operation: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == operation]


@pytest.fixture
def graph():
    """Fake graph patched into every discovery service."""
    fake = FakeOwnershipGraph()
    with patch("partner_network.services.direct_link_service.OwnershipGraph", fake), \
            patch("partner_network.services.kinship_service.OwnershipGraph", fake), \
            patch("partner_network.services.network_service.OwnershipGraph", fake):
        yield fake
