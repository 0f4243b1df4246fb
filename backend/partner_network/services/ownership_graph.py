"""Read-only access to the ownership graph stored in Neo4j.

Graph shape: (:Person {id, name, birth_date})-[:PARTNER_OF {role, percentage}]->
(:Company {id, legal_name, trade_name, status}).
"""

import logging
from typing import Any, Iterable, Optional

from neo4j.exceptions import DriverError, Neo4jError

from partner_network.db.neo4j_client import Neo4jClient
from partner_network.errors import SeedNotFound, StorageUnavailable
from partner_network.models import Company, OwnershipEdge, Person

logger = logging.getLogger(__name__)

_EDGE_RETURN = """
    RETURN p.id as person_id,
           c.id as company_id,
           r.role as role,
           r.percentage as percentage
"""


def _distinct(ids: Iterable[Optional[str]]) -> list[str]:
    """Drop empty ids and duplicates, keeping first-seen order."""
    return list(dict.fromkeys(i for i in ids if i))


class OwnershipGraph:
    """Read operations needed by the discovery services."""

    @staticmethod
    async def _run(operation: str, query: str, parameters: dict[str, Any]) -> list[dict[str, Any]]:
        try:
            return await Neo4jClient.execute_query(query, parameters)
        except (Neo4jError, DriverError, ConnectionError, OSError) as e:
            logger.error(f"Ownership store read failed during {operation}: {e}")
            raise StorageUnavailable(operation, e) from e

    @staticmethod
    async def get_person(person_id: str) -> Person:
        """Get a person by ID.

        Raises:
            SeedNotFound: if no person has this ID.
        """
        records = await OwnershipGraph._run(
            "get_person",
            "MATCH (p:Person {id: $id}) RETURN p",
            {"id": person_id},
        )
        if not records:
            raise SeedNotFound(person_id)
        return Person(**records[0]["p"])

    @staticmethod
    async def get_ownership_edges(person_id: str) -> list[OwnershipEdge]:
        """All edges where this person is the source, in storage order."""
        query = f"""
            MATCH (p:Person {{id: $id}})-[r:PARTNER_OF]->(c:Company)
            {_EDGE_RETURN}
        """
        records = await OwnershipGraph._run("get_ownership_edges", query, {"id": person_id})
        return [OwnershipEdge(**record) for record in records]

    @staticmethod
    async def get_ownership_edges_for_companies(company_ids: Iterable[str]) -> list[OwnershipEdge]:
        """All edges pointing at any of the given companies, across all persons."""
        ids = _distinct(company_ids)
        if not ids:
            return []

        query = f"""
            MATCH (p:Person)-[r:PARTNER_OF]->(c:Company)
            WHERE c.id IN $ids
            {_EDGE_RETURN}
            ORDER BY c.id, p.id
        """
        records = await OwnershipGraph._run(
            "get_ownership_edges_for_companies", query, {"ids": ids}
        )
        return [OwnershipEdge(**record) for record in records]

    @staticmethod
    async def get_companies_by_id(company_ids: Iterable[str]) -> dict[str, Company]:
        """Companies keyed by ID. Unknown IDs are simply absent."""
        ids = _distinct(company_ids)
        if not ids:
            return {}

        records = await OwnershipGraph._run(
            "get_companies_by_id",
            "MATCH (c:Company) WHERE c.id IN $ids RETURN c",
            {"ids": ids},
        )
        companies = [Company(**record["c"]) for record in records]
        return {company.id: company for company in companies}

    @staticmethod
    async def get_persons_by_id(person_ids: Iterable[str]) -> dict[str, Person]:
        """Persons keyed by ID. Unknown IDs are simply absent."""
        ids = _distinct(person_ids)
        if not ids:
            return {}

        records = await OwnershipGraph._run(
            "get_persons_by_id",
            "MATCH (p:Person) WHERE p.id IN $ids RETURN p",
            {"ids": ids},
        )
        persons = [Person(**record["p"]) for record in records]
        return {person.id: person for person in persons}

    @staticmethod
    async def get_all_ownership_edges(limit: int) -> list[OwnershipEdge]:
        """Bulk edge read for network reports, with the person name joined in."""
        query = """
            MATCH (p:Person)-[r:PARTNER_OF]->(c:Company)
            RETURN p.id as person_id,
                   c.id as company_id,
                   r.role as role,
                   r.percentage as percentage,
                   p.name as person_name
            ORDER BY p.id, c.id
            LIMIT $limit
        """
        records = await OwnershipGraph._run("get_all_ownership_edges", query, {"limit": limit})
        return [OwnershipEdge(**record) for record in records]
