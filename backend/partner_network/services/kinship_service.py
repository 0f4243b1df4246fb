"""Service for estimating probable kinship between partners.

No authoritative kinship data exists, so relatives are inferred from weak
signals between the seed and every co-partner (a person holding an edge to
one of the seed's companies):

- same surname: +45
- same tax-ID prefix: +25
- each shared company: +10

Signals are folded per candidate into a running total capped at 95, which
marks the score as never externally verified.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from partner_network.config import settings
from partner_network.models import (
    Company,
    KinshipCandidate,
    KinshipResult,
    Person,
    SeedPerson,
    SharedCompany,
)
from partner_network.services.direct_link_service import company_display_name
from partner_network.services.identifiers import (
    PLACEHOLDER_PERSON_NAME,
    extract_surname,
    mask_tax_id,
    normalize_identifier,
    tax_id_prefix,
)
from partner_network.services.ownership_graph import OwnershipGraph

logger = logging.getLogger(__name__)

SURNAME_SCORE = 45
TAX_ID_PREFIX_SCORE = 25
SHARED_COMPANY_SCORE = 10
MAX_CONFIDENCE = 95

REASON_SEPARATOR = "; "


@dataclass(frozen=True)
class Signal:
    """One heuristic that fired for a (seed, candidate) pair."""

    score: int
    reason: str


@dataclass
class ScoreAccumulator:
    """Running evidence for one candidate."""

    total: int = 0
    reasons: list[str] = field(default_factory=list)

    def add(self, signal: Signal) -> None:
        self.total = min(self.total + signal.score, MAX_CONFIDENCE)
        self.reasons.append(signal.reason)

    @property
    def reason_text(self) -> str:
        return REASON_SEPARATOR.join(self.reasons)


def surname_signal(seed_name: Optional[str], candidate_name: Optional[str]) -> Optional[Signal]:
    seed_surname = extract_surname(seed_name)
    if seed_surname and seed_surname == extract_surname(candidate_name):
        return Signal(SURNAME_SCORE, f"Mesmo sobrenome ({seed_surname})")
    return None


def tax_id_prefix_signal(seed_id: str, candidate_id: str) -> Optional[Signal]:
    seed_prefix = tax_id_prefix(seed_id)
    if seed_prefix and seed_prefix == tax_id_prefix(candidate_id):
        return Signal(TAX_ID_PREFIX_SCORE, "CPF com prefixo igual")
    return None


def shared_company_signals(shared_company_ids: Iterable[str]) -> list[Signal]:
    """One award per shared company; there is no per-company cap."""
    return [
        Signal(SHARED_COMPANY_SCORE, f"Empresa compartilhada {company_id}")
        for company_id in shared_company_ids
    ]


def extract_signals(
    seed: Person,
    candidate_id: str,
    candidate_name: Optional[str],
    shared_company_ids: list[str],
) -> list[Signal]:
    """All signals for one (seed, candidate) pair, in discovery order."""
    signals = []

    surname = surname_signal(seed.name, candidate_name)
    if surname:
        signals.append(surname)

    prefix = tax_id_prefix_signal(seed.id, candidate_id)
    if prefix:
        signals.append(prefix)

    signals.extend(shared_company_signals(shared_company_ids))
    return signals


def aggregate_signals(
    signals: Iterable[tuple[str, Signal]],
) -> dict[str, ScoreAccumulator]:
    """Fold (candidate_id, signal) pairs into one accumulator per candidate."""
    accumulators: dict[str, ScoreAccumulator] = {}
    for candidate_id, signal in signals:
        accumulators.setdefault(candidate_id, ScoreAccumulator()).add(signal)
    return accumulators


def rank_candidates(candidates: list[KinshipCandidate]) -> list[KinshipCandidate]:
    """Descending by confidence; ties keep discovery order."""
    return sorted(candidates, key=lambda c: c.confidence, reverse=True)


def _cap_companies(company_ids: Iterable[str], limit: int) -> list[str]:
    return list(dict.fromkeys(c for c in company_ids if c))[:limit]


class KinshipService:
    """Service for kinship discovery around a seed partner."""

    @staticmethod
    async def find_relatives(
        person_id: str,
        max_companies: Optional[int] = None,
    ) -> KinshipResult:
        """
        Find persons probably related to the seed by kinship.

        Only companies within `max_companies` (default
        KINSHIP_MAX_COMPANIES) are expanded to co-partners.

        Raises:
            InvalidInput: empty seed identifier.
            SeedNotFound: the seed does not exist.
            StorageUnavailable: the store could not be read.
        """
        person_id = normalize_identifier(person_id, "person_id")
        if max_companies is None:
            max_companies = settings.KINSHIP_MAX_COMPANIES

        seed = await OwnershipGraph.get_person(person_id)
        result = KinshipResult(seed=SeedPerson(id=seed.id, name=seed.name))

        seed_edges = await OwnershipGraph.get_ownership_edges(person_id)
        company_ids = _cap_companies((e.company_id for e in seed_edges), max_companies)
        if not company_ids:
            return result

        co_partner_edges = await OwnershipGraph.get_ownership_edges_for_companies(company_ids)

        seed_companies = set(company_ids)
        shared_by_candidate: dict[str, list[str]] = {}
        for edge in co_partner_edges:
            if not edge.person_id or edge.person_id == seed.id:
                continue
            if edge.company_id not in seed_companies:
                continue
            shared = shared_by_candidate.setdefault(edge.person_id, [])
            if edge.company_id not in shared:
                shared.append(edge.company_id)

        if not shared_by_candidate:
            return result

        shared_company_ids = {c for shared in shared_by_candidate.values() for c in shared}
        persons, companies = await KinshipService._fetch_names(
            list(shared_by_candidate), shared_company_ids
        )

        accumulators = aggregate_signals(
            (candidate_id, signal)
            for candidate_id, shared in shared_by_candidate.items()
            for signal in extract_signals(
                seed,
                candidate_id,
                persons[candidate_id].name if candidate_id in persons else None,
                shared,
            )
        )

        candidates = [
            KinshipService._materialize(
                candidate_id,
                accumulator,
                persons.get(candidate_id),
                shared_by_candidate[candidate_id],
                companies,
            )
            for candidate_id, accumulator in accumulators.items()
            if accumulator.total > 0
        ]
        result.candidates = rank_candidates(candidates)

        logger.info(
            f"Kinship search for {mask_tax_id(seed.id)}: {len(company_ids)} company(ies), "
            f"{len(shared_by_candidate)} co-partner(s), {len(result.candidates)} candidate(s)"
        )
        return result

    @staticmethod
    async def _fetch_names(
        person_ids: list[str],
        company_ids: set[str],
    ) -> tuple[dict[str, Person], dict[str, Company]]:
        """Look up candidate persons and shared companies concurrently.

        If either lookup fails, the other is cancelled and awaited before the
        error propagates, so nothing outlives the request.
        """
        persons_task = asyncio.ensure_future(OwnershipGraph.get_persons_by_id(person_ids))
        companies_task = asyncio.ensure_future(OwnershipGraph.get_companies_by_id(company_ids))
        tasks = (persons_task, companies_task)
        try:
            persons, companies = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return persons, companies

    @staticmethod
    def _materialize(
        candidate_id: str,
        accumulator: ScoreAccumulator,
        person: Optional[Person],
        shared_company_ids: list[str],
        companies: dict[str, Company],
    ) -> KinshipCandidate:
        name = person.name if person and person.name else PLACEHOLDER_PERSON_NAME
        return KinshipCandidate(
            masked_tax_id=mask_tax_id(candidate_id),
            name=name,
            reasons=accumulator.reason_text,
            confidence=accumulator.total,
            shared_companies=[
                SharedCompany(
                    company_id=company_id,
                    company_name=company_display_name(company_id, companies.get(company_id)),
                )
                for company_id in shared_company_ids
            ],
        )
