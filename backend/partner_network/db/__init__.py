"""Database module for Neo4j connectivity."""

from partner_network.db.neo4j_client import Neo4jClient

__all__ = ["Neo4jClient"]
