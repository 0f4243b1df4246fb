"""Initialize Neo4j schema (constraints and indexes) for the ownership graph."""

import os
from neo4j import GraphDatabase
from dotenv import load_dotenv

load_dotenv()

NEO4J_URI = os.getenv("NEO4J_URI", "bolt://localhost:7687")
NEO4J_USER = os.getenv("NEO4J_USER", "neo4j")
NEO4J_PASSWORD = os.getenv("NEO4J_PASSWORD")

CONSTRAINTS = [
    "CREATE CONSTRAINT person_id_unique IF NOT EXISTS FOR (p:Person) REQUIRE p.id IS UNIQUE",
    "CREATE CONSTRAINT company_id_unique IF NOT EXISTS FOR (c:Company) REQUIRE c.id IS UNIQUE",
]

INDEXES = [
    "CREATE INDEX person_name_idx IF NOT EXISTS FOR (p:Person) ON (p.name)",
    "CREATE INDEX partner_of_percentage_idx IF NOT EXISTS FOR ()-[r:PARTNER_OF]-() ON (r.percentage)",
]


def run_statements(driver, statements: list[str]) -> None:
    """Run schema statements, reporting each one."""
    with driver.session() as session:
        for stmt in statements:
            try:
                session.run(stmt)
                print(f"✓ {stmt[:60]}...")
            except Exception as e:
                print(f"✗ {stmt[:60]}... - {e}")


def main():
    print(f"Connecting to Neo4j at {NEO4J_URI}...")

    driver = GraphDatabase.driver(NEO4J_URI, auth=(NEO4J_USER, NEO4J_PASSWORD))

    # Verify connectivity
    driver.verify_connectivity()
    print("✓ Connected to Neo4j\n")

    print("=== Creating Constraints ===")
    run_statements(driver, CONSTRAINTS)

    print("\n=== Creating Indexes ===")
    run_statements(driver, INDEXES)

    driver.close()
    print("\n✓ Schema initialization complete!")


if __name__ == "__main__":
    main()
