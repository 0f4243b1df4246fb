"""Bulk network report: direct links of many partners in one pass."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from partner_network.config import settings
from partner_network.models import (
    Company,
    DiscoveredLink,
    NetworkResponse,
    OwnershipEdge,
    PersonNetwork,
)
from partner_network.services.direct_link_service import build_link
from partner_network.services.identifiers import (
    PLACEHOLDER_PERSON_NAME,
    is_placeholder_name,
)
from partner_network.services.ownership_graph import OwnershipGraph

logger = logging.getLogger(__name__)


@dataclass
class _PersonBucket:
    person_id: str
    person_name: Optional[str] = None
    links: list[DiscoveredLink] = field(default_factory=list)


def group_links_by_person(
    edges: list[OwnershipEdge],
    companies: dict[str, Company],
) -> list[PersonNetwork]:
    """Group prefetched edges into per-person link buckets.

    Buckets keep first-appearance order. The label is the first real name
    seen across the person's edges. Persons without links are dropped.
    """
    buckets: dict[str, _PersonBucket] = {}

    for edge in edges:
        if not edge.person_id or not edge.company_id:
            continue

        bucket = buckets.setdefault(edge.person_id, _PersonBucket(person_id=edge.person_id))
        if bucket.person_name is None and not is_placeholder_name(edge.person_name):
            bucket.person_name = edge.person_name.strip()

        bucket.links.append(build_link(edge, companies))

    return [
        PersonNetwork(
            person_id=bucket.person_id,
            person_name=bucket.person_name or PLACEHOLDER_PERSON_NAME,
            links=bucket.links,
        )
        for bucket in buckets.values()
        if bucket.links
    ]


class NetworkService:
    """Service for network-wide link reporting."""

    @staticmethod
    async def build_network(limit: Optional[int] = None) -> NetworkResponse:
        """
        Build the direct-link network of every partner in one bulk read.

        At most `limit` edges (default NETWORK_EDGE_LIMIT) are fetched.
        """
        if limit is None:
            limit = settings.NETWORK_EDGE_LIMIT

        edges = await OwnershipGraph.get_all_ownership_edges(limit)
        companies = await OwnershipGraph.get_companies_by_id(e.company_id for e in edges)
        networks = group_links_by_person(edges, companies)

        total_links = sum(len(n.links) for n in networks)
        logger.info(
            f"Network report: {len(edges)} edge(s) -> {len(networks)} person(s), {total_links} link(s)"
        )

        return NetworkResponse(
            networks=networks,
            total_persons=len(networks),
            total_links=total_links,
        )
