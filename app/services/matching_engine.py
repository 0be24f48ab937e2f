"""
Resource-Requirement Matching Engine

Decides which Resources qualify for a Requirement (and which Requirements a
Resource qualifies for) and ranks them by skill overlap.

One engine serves both directions; MatchDirection selects the source kind
and entity adapters provide field access. Pipeline per source entity:
1. Constraint filter (status, experience, budget, availability), pushed to the store
2. Skill compatibility policy (in memory)
3. Overlap score and stable descending sort (details only)
4. Pagination over the fully ranked list (details only)

Known limitation: details ranks the whole qualifying pool in memory before
slicing a page. Fine for moderate pools; large pools need more of the
filtering pushed into the store.

The engine is stateless and read-only; nothing is persisted.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from math import ceil
from typing import Any, Dict, List, Optional, Sequence
import structlog

from app.config import settings
from app.middleware.correlation_id import get_correlation_id
from app.services.access import (
    AuthorizationCheck,
    Principal,
    owner_or_organization_member,
    require_access,
)
from app.services.entity_store import EntityStore
from app.services.matching import (
    AccessDeniedError,
    CandidateFilter,
    EntityNotFoundError,
    InvalidArgumentError,
    MatchDirection,
    MatchingCriteriaBuilder,
    SkillCompatibilityPolicy,
    build_candidate_filter,
    get_adapter,
    get_policy,
    score_skill_overlap,
)
from app.services.monitoring.error_tracking import add_breadcrumb, capture_exception

logger = structlog.get_logger(__name__)

BATCH_NOT_FOUND = "not found"
BATCH_ACCESS_DENIED = "access denied"
BATCH_INTERNAL_ERROR = "internal error"


@dataclass
class MatchedCandidate:
    """One ranked candidate in a details response."""
    candidate: Any
    match_percentage: int  # 0-100
    matching_skill_count: int
    total_required_skill_count: int
    summary: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Pagination:
    current_page: int
    page_size: int
    total_pages: int
    has_next: bool
    has_previous: bool

    @classmethod
    def build(cls, page: int, page_size: int, total_count: int) -> "Pagination":
        total_pages = ceil(total_count / page_size) if total_count else 0
        return cls(
            current_page=page,
            page_size=page_size,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_previous=page > 1,
        )


@dataclass
class MatchDetails:
    """Ranked, paginated match set for one source entity."""
    direction: MatchDirection
    source: Any
    source_summary: Dict[str, Any]
    results: List[MatchedCandidate]
    total_count: int
    pagination: Pagination
    matching_criteria: Dict[str, Any] = field(default_factory=dict)


@dataclass
class BatchCountResult:
    """
    Per-id outcome of a batch count: either a count or an error.

    A failed item carries count=0 and a human-readable error; it never
    fails the batch.
    """
    entity_id: str
    count: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class MatchingEngine:
    """
    Matching engine over an EntityStore.

    Usage:
        engine = MatchingEngine(SqlAlchemyEntityStore(SessionLocal))
        count = engine.count_matches("req-1", MatchDirection.requirement_to_resources)
        details = engine.get_match_details(
            "req-1",
            MatchDirection.requirement_to_resources,
            principal=Principal(user_id="user-1", organization_id="org-1"),
            page=1,
            page_size=10
        )
        for match in details.results:
            print(match.candidate.name, match.match_percentage)
    """

    def __init__(
        self,
        store: EntityStore,
        policy: Optional[SkillCompatibilityPolicy] = None,
        authorization_check: AuthorizationCheck = owner_or_organization_member,
        batch_max_size: Optional[int] = None,
        batch_max_workers: Optional[int] = None,
        max_page_size: Optional[int] = None,
        pool_warn_size: Optional[int] = None,
    ):
        """
        Initialize matching engine.

        Args:
            store: Entity store providing sources and candidate pools
            policy: Skill compatibility policy (default: from settings.match_skill_policy)
            authorization_check: Ownership check for details calls
            batch_max_size: Max ids per batch call (default: settings)
            batch_max_workers: Thread pool bound for batch calls (default: settings)
            max_page_size: Upper bound for page_size (default: settings)
            pool_warn_size: Log a warning when details ranks a larger pool (default: settings)
        """
        self.store = store
        self.policy = policy or get_policy(
            settings.match_skill_policy,
            threshold_max=settings.match_skill_threshold_max
        )
        self.authorization_check = authorization_check
        self.batch_max_size = batch_max_size or settings.match_batch_max_size
        self.batch_max_workers = batch_max_workers or settings.match_batch_max_workers
        self.max_page_size = max_page_size or settings.match_max_page_size
        self.pool_warn_size = pool_warn_size or settings.match_candidate_pool_warn_size

        logger.debug("matching_engine_initialized",
                    store=type(self.store).__name__,
                    policy=self.policy.name)

    # ------------------------------------------------------------------
    # Single-entity operations
    # ------------------------------------------------------------------

    def count_matches(self, entity_id: str, direction: MatchDirection) -> int:
        """
        Count qualifying candidates for one source entity.

        Only the cardinality is computed; no scores or detail payloads.

        Raises:
            EntityNotFoundError: entity_id does not exist
        """
        direction = MatchDirection(direction)
        source = self._load_source(entity_id, direction)
        count = len(self._qualifying_candidates(source, direction))

        logger.info("match_count_computed",
                   entity_id=entity_id,
                   direction=direction.value,
                   count=count)
        return count

    def get_match_details(
        self,
        entity_id: str,
        direction: MatchDirection,
        principal: Principal,
        page: int = 1,
        page_size: Optional[int] = None
    ) -> MatchDetails:
        """
        Ranked, paginated match set for one source entity.

        Access is checked before any matching work. Candidates are sorted by
        match_percentage descending; ties keep the store's fetch order.

        Raises:
            InvalidArgumentError: page < 1, page_size < 1 or above max_page_size
            EntityNotFoundError: entity_id does not exist
            AccessDeniedError: principal is not owner or organization member
        """
        direction = MatchDirection(direction)
        page_size = settings.match_default_page_size if page_size is None else page_size
        self._validate_page(page, page_size)

        log = logger.bind(entity_id=entity_id, direction=direction.value, user_id=principal.user_id)

        source = self._load_source(entity_id, direction)
        require_access(principal, source, direction.source_kind.value, self.authorization_check)

        source_adapter = get_adapter(direction.source_kind)
        candidate_adapter = get_adapter(direction.candidate_kind)
        source_skills = source_adapter.skill_ids(source)

        candidate_filter = build_candidate_filter(source, direction)
        pool = self.store.find_candidates(candidate_filter)
        if len(pool) > self.pool_warn_size:
            log.warning("large_candidate_pool_ranked_in_memory",
                       pool_size=len(pool),
                       warn_size=self.pool_warn_size)

        ranked: List[MatchedCandidate] = []
        for candidate in self._apply_policy(source, direction, candidate_filter, pool):
            resource_skills, requirement_skills = direction.as_pair(
                source_skills, candidate_adapter.skill_ids(candidate)
            )
            overlap = score_skill_overlap(resource_skills, requirement_skills)
            ranked.append(MatchedCandidate(
                candidate=candidate,
                match_percentage=overlap.match_percentage,
                matching_skill_count=overlap.matching_skill_count,
                total_required_skill_count=overlap.required_skill_count,
                summary=candidate_adapter.describe_candidate(candidate),
            ))

        # list.sort is stable, also with reverse=True
        ranked.sort(key=lambda match: match.match_percentage, reverse=True)

        total_count = len(ranked)
        offset = (page - 1) * page_size
        page_results = ranked[offset:offset + page_size]
        pagination = Pagination.build(page, page_size, total_count)

        log.info("match_details_computed",
                pool_size=len(pool),
                total_count=total_count,
                page=page,
                page_size=page_size,
                returned=len(page_results))
        add_breadcrumb(
            category="matching",
            message="match details computed",
            data={"entity_id": entity_id, "direction": direction.value, "total_count": total_count}
        )

        return MatchDetails(
            direction=direction,
            source=source,
            source_summary=source_adapter.summary(source),
            results=page_results,
            total_count=total_count,
            pagination=pagination,
            matching_criteria=MatchingCriteriaBuilder.build(
                candidate_filter=candidate_filter,
                policy=self.policy,
                source_skills=source_skills,
                candidate_pool_size=len(pool),
            ),
        )

    # ------------------------------------------------------------------
    # Batch operation
    # ------------------------------------------------------------------

    def get_match_counts_batch(
        self,
        entity_ids: Sequence[str],
        direction: MatchDirection,
        principal: Optional[Principal] = None
    ) -> List[BatchCountResult]:
        """
        Count matches for many source entities in one call.

        Each id is processed independently (bounded thread pool). A missing,
        forbidden or failing entity yields an error entry with count=0; the
        other ids are still processed. Results follow the input order.

        Args:
            entity_ids: Source entity ids (1..batch_max_size)
            direction: Query direction shared by all ids
            principal: When given, ids the principal may not access are
                reported as "access denied"

        Raises:
            InvalidArgumentError: Empty list or more than batch_max_size ids
        """
        direction = MatchDirection(direction)
        entity_ids = list(entity_ids or [])

        if not entity_ids:
            raise InvalidArgumentError("Entity IDs array is required")
        if len(entity_ids) > self.batch_max_size:
            raise InvalidArgumentError(
                f"Batch size cannot exceed {self.batch_max_size} entities"
            )

        workers = min(self.batch_max_workers, len(entity_ids))
        log = logger.bind(direction=direction.value, correlation_id=get_correlation_id())
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="match-batch") as pool:
            # map() yields in submission order regardless of completion order
            results = list(pool.map(
                lambda entity_id: self._count_batch_item(entity_id, direction, principal, log),
                entity_ids
            ))

        failed = sum(1 for result in results if not result.ok)
        log.info("match_counts_batch_computed",
                size=len(entity_ids),
                failed=failed,
                workers=workers)
        return results

    def _count_batch_item(
        self,
        entity_id: str,
        direction: MatchDirection,
        principal: Optional[Principal],
        log: Any
    ) -> BatchCountResult:
        try:
            source = self._load_source(entity_id, direction)
            if principal is not None:
                require_access(principal, source, direction.source_kind.value, self.authorization_check)
            count = len(self._qualifying_candidates(source, direction))
            return BatchCountResult(entity_id=entity_id, count=count)

        except EntityNotFoundError:
            log.info("batch_item_not_found", entity_id=entity_id)
            return BatchCountResult(entity_id=entity_id, error=BATCH_NOT_FOUND)

        except AccessDeniedError:
            log.info("batch_item_access_denied", entity_id=entity_id)
            return BatchCountResult(entity_id=entity_id, error=BATCH_ACCESS_DENIED)

        except Exception as e:
            log.error("batch_item_failed",
                     entity_id=entity_id,
                     error=str(e),
                     exc_info=True)
            capture_exception(e, context={"entity_id": entity_id, "direction": direction.value})
            return BatchCountResult(entity_id=entity_id, error=BATCH_INTERNAL_ERROR)

    # ------------------------------------------------------------------
    # Shared pipeline
    # ------------------------------------------------------------------

    def _load_source(self, entity_id: str, direction: MatchDirection) -> Any:
        kind = direction.source_kind
        source = self.store.find_by_id(kind, entity_id)
        if source is None:
            raise EntityNotFoundError(kind, entity_id)
        return source

    def _qualifying_candidates(self, source: Any, direction: MatchDirection) -> List[Any]:
        candidate_filter = build_candidate_filter(source, direction)
        pool = self.store.find_candidates(candidate_filter)
        return self._apply_policy(source, direction, candidate_filter, pool)

    def _apply_policy(
        self,
        source: Any,
        direction: MatchDirection,
        candidate_filter: CandidateFilter,
        pool: List[Any]
    ) -> List[Any]:
        """Re-check hard constraints in memory, then apply the skill policy."""
        source_skills = get_adapter(direction.source_kind).skill_ids(source)
        candidate_adapter = get_adapter(direction.candidate_kind)

        qualifying = []
        for candidate in pool:
            if not candidate_filter.matches(candidate):
                continue
            resource_skills, requirement_skills = direction.as_pair(
                source_skills, candidate_adapter.skill_ids(candidate)
            )
            if self.policy.is_compatible(resource_skills, requirement_skills):
                qualifying.append(candidate)
        return qualifying

    def _validate_page(self, page: int, page_size: int) -> None:
        if page < 1:
            raise InvalidArgumentError("page must be a positive integer")
        if page_size < 1:
            raise InvalidArgumentError("page_size must be a positive integer")
        if page_size > self.max_page_size:
            raise InvalidArgumentError(f"page_size cannot exceed {self.max_page_size}")


__all__ = [
    "MatchingEngine",
    "MatchedCandidate",
    "MatchDetails",
    "Pagination",
    "BatchCountResult",
]
