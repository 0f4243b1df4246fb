"""Liveness and ownership-store readiness endpoints."""

import logging

from fastapi import APIRouter, HTTPException
from neo4j.exceptions import DriverError, Neo4jError

from partner_network.config import settings
from partner_network.db.neo4j_client import Neo4jClient

logger = logging.getLogger(__name__)

router = APIRouter()

READINESS_QUERY = "MATCH (p:Person)-[:PARTNER_OF]->(:Company) RETURN count(p) > 0 AS has_edges LIMIT 1"


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Process is up; does not touch the store."""
    return {"status": "healthy", "version": settings.APP_VERSION}


@router.get("/health/db")
async def database_health() -> dict:
    """Run one read against the ownership graph.

    `has_edges` false means the store answers but holds no PARTNER_OF data,
    so every discovery endpoint will return empty results.
    """
    try:
        records = await Neo4jClient.execute_query(READINESS_QUERY)
    except (Neo4jError, DriverError, ConnectionError, OSError, RuntimeError) as e:
        logger.error(f"Ownership store readiness check failed: {e}")
        raise HTTPException(status_code=503, detail=f"Ownership store unavailable: {e}")

    has_edges = bool(records and records[0].get("has_edges"))
    return {"status": "healthy", "database": "connected", "has_edges": has_edges}
