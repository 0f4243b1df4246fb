"""Tests for direct_link_service module."""

import pytest

from partner_network.errors import InvalidInput, SeedNotFound
from partner_network.services.direct_link_service import (
    DirectLinkService,
    classify_degree,
)


# --- classify_degree ---

class TestClassifyDegree:
    def test_controlling(self):
        assert classify_degree(100) == 1
        assert classify_degree(60) == 1

    def test_exactly_fifty_is_controlling(self):
        assert classify_degree(50) == 1

    def test_just_below_fifty(self):
        assert classify_degree(49.99) == 2

    def test_exactly_twenty_is_significant(self):
        assert classify_degree(20) == 2

    def test_just_below_twenty(self):
        assert classify_degree(19.99) == 3

    def test_minor(self):
        assert classify_degree(15) == 3
        assert classify_degree(0) == 3

    def test_unknown_percentage_is_weakest(self):
        assert classify_degree(None) == 3


# --- resolve_direct_links ---

class TestResolveDirectLinks:
    @pytest.mark.asyncio
    async def test_degrees_follow_percentages(self, graph):
        """60% -> degree 1, 15% -> degree 3."""
        graph.add_person("12345678900", "Maria Silva")
        graph.add_company("C1", legal_name="Alfa Comercio Ltda", trade_name="Alfa")
        graph.add_company("C2", legal_name="Beta Servicos Ltda")
        graph.add_edge("12345678900", "C1", 60)
        graph.add_edge("12345678900", "C2", 15)

        links = await DirectLinkService.resolve_direct_links("12345678900")

        assert [(l.company_id, l.degree) for l in links] == [("C1", 1), ("C2", 3)]
        assert [l.company_name for l in links] == ["Alfa", "Beta Servicos Ltda"]
        assert all(l.kind == "direct" for l in links)
        assert all(l.person_id == "12345678900" for l in links)

    @pytest.mark.asyncio
    async def test_excludes_company_being_viewed(self, graph):
        graph.add_person("12345678900", "Maria Silva")
        graph.add_edge("12345678900", "11222333000144", 60)
        graph.add_edge("12345678900", "44555666000177", 30)

        links = await DirectLinkService.resolve_direct_links(
            "12345678900", exclude_company_id="11.222.333/0001-44"
        )

        assert [l.company_id for l in links] == ["44555666000177"]
        assert links[0].degree == 2

    @pytest.mark.asyncio
    async def test_unresolved_company_uses_raw_id(self, graph):
        graph.add_person("12345678900", "Maria Silva")
        graph.add_edge("12345678900", "C9")

        links = await DirectLinkService.resolve_direct_links("12345678900")

        assert links[0].company_name == "C9"
        assert links[0].degree == 3

    @pytest.mark.asyncio
    async def test_company_cap_applied_before_name_lookup(self, graph):
        graph.add_person("12345678900", "Maria Silva")
        for i in range(5):
            graph.add_edge("12345678900", f"C{i}")

        links = await DirectLinkService.resolve_direct_links("12345678900", max_companies=2)

        assert [l.company_id for l in links] == ["C0", "C1"]
        assert graph.called("get_companies_by_id") == [("get_companies_by_id", ["C0", "C1"])]

    @pytest.mark.asyncio
    async def test_no_edges_returns_empty(self, graph):
        graph.add_person("12345678900", "Maria Silva")

        links = await DirectLinkService.resolve_direct_links("12345678900")

        assert links == []
        assert graph.called("get_companies_by_id") == []

    @pytest.mark.asyncio
    async def test_unknown_seed(self, graph):
        with pytest.raises(SeedNotFound):
            await DirectLinkService.resolve_direct_links("00000000000")

    @pytest.mark.asyncio
    async def test_empty_seed_rejected_before_store(self, graph):
        with pytest.raises(InvalidInput):
            await DirectLinkService.resolve_direct_links("  ")
        assert graph.calls == []
