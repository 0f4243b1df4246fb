"""Direct links between a partner and the companies they hold edges to.

Also home of `classify_degree`, the single definition of "ownership
strength" used by every service that reports links.
"""

import logging
from typing import Optional

from partner_network.config import settings
from partner_network.models import Company, DiscoveredLink, OwnershipEdge
from partner_network.services.identifiers import (
    normalize_identifier,
    normalize_optional_identifier,
)
from partner_network.services.ownership_graph import OwnershipGraph

logger = logging.getLogger(__name__)

# Degree thresholds (percentage of capital)
CONTROLLING_THRESHOLD = 50.0
SIGNIFICANT_THRESHOLD = 20.0

DEGREE_CONTROLLING = 1
DEGREE_SIGNIFICANT = 2
DEGREE_MINOR = 3

LINK_KIND_DIRECT = "direct"


def classify_degree(percentage: Optional[float]) -> int:
    """Classify an ownership percentage into an ordinal degree.

    Args:
        percentage: Share of capital (0-100), or None when the source omits it.

    Returns:
        1 for >= 50 (controlling), 2 for 20 <= p < 50 (significant),
        3 for < 20 or unknown.
    """
    if percentage is None:
        return DEGREE_MINOR
    if percentage >= CONTROLLING_THRESHOLD:
        return DEGREE_CONTROLLING
    if percentage >= SIGNIFICANT_THRESHOLD:
        return DEGREE_SIGNIFICANT
    return DEGREE_MINOR


def company_display_name(company_id: str, company: Optional[Company]) -> str:
    """Trade name, legal name, or the raw company ID as last resort."""
    if company is None:
        return company_id
    return company.display_name


def build_link(edge: OwnershipEdge, companies: dict[str, Company]) -> DiscoveredLink:
    """Turn one ownership edge into a classified direct link."""
    return DiscoveredLink(
        person_id=edge.person_id,
        company_id=edge.company_id,
        company_name=company_display_name(edge.company_id, companies.get(edge.company_id)),
        degree=classify_degree(edge.percentage),
        kind=LINK_KIND_DIRECT,
    )


class DirectLinkService:
    """Service for one-hop person -> company expansion."""

    @staticmethod
    async def resolve_direct_links(
        person_id: str,
        exclude_company_id: Optional[str] = None,
        max_companies: Optional[int] = None,
    ) -> list[DiscoveredLink]:
        """
        Resolve the companies a person is directly linked to.

        The edge pointing at `exclude_company_id` (the company the caller is
        already looking at) is left out. At most `max_companies` edges are
        resolved, in storage order.

        Raises:
            InvalidInput: empty identifiers.
            SeedNotFound: the person does not exist.
            StorageUnavailable: the store could not be read.
        """
        person_id = normalize_identifier(person_id, "person_id")
        exclude_company_id = normalize_optional_identifier(exclude_company_id, "exclude_company_id")
        if max_companies is None:
            max_companies = settings.DIRECT_LINK_MAX_COMPANIES

        await OwnershipGraph.get_person(person_id)
        edges = await OwnershipGraph.get_ownership_edges(person_id)

        edges = [
            edge for edge in edges
            if edge.company_id and edge.company_id != exclude_company_id
        ][:max_companies]

        if not edges:
            return []

        companies = await OwnershipGraph.get_companies_by_id(e.company_id for e in edges)
        links = [build_link(edge, companies) for edge in edges]

        logger.debug(f"Resolved {len(links)} direct link(s) for person {person_id}")
        return links
