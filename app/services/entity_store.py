"""
Entity Store

Read-only access to Resources and Requirements for the matching engine.

EntityStore is the collaborator interface; SqlAlchemyEntityStore implements
it over the marketplace database. Constraint filtering is pushed into the
SQL query; skill policy and scoring stay in memory.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from sqlalchemy.orm import sessionmaker
import structlog

from app.models.enums import MATCHABLE_AVAILABILITY, RequirementStatus, ResourceStatus
from app.models.requirement import Requirement
from app.models.resource import Resource
from app.services.matching.adapters import EntityKind
from app.services.matching.constraints import CandidateFilter

logger = structlog.get_logger(__name__)

MODELS = {
    EntityKind.resource: Resource,
    EntityKind.requirement: Requirement,
}


class EntityStore(ABC):
    """Collaborator interface consumed by the matching engine."""

    @abstractmethod
    def find_by_id(self, kind: EntityKind, entity_id: str) -> Optional[Any]:
        """Return the entity with its skills populated, or None."""
        pass

    @abstractmethod
    def find_candidates(self, candidate_filter: CandidateFilter) -> List[Any]:
        """
        Return entities of candidate_filter.candidate_kind that pass the filter.

        May return a superset (coarser pre-filter); the engine re-checks every
        candidate in memory. Order is the fetch order used to break score ties.
        """
        pass


class SqlAlchemyEntityStore(EntityStore):
    """
    EntityStore over SQLAlchemy.

    Opens one session per call from session_factory, so concurrent batch
    workers never share a session. Skills are eager loaded (lazy="selectin")
    and stay readable after the session closes.
    """

    def __init__(self, session_factory: sessionmaker):
        """
        Args:
            session_factory: SQLAlchemy sessionmaker for creating sessions
        """
        self.session_factory = session_factory

    def find_by_id(self, kind: EntityKind, entity_id: str) -> Optional[Any]:
        model = MODELS[EntityKind(kind)]
        with self.session_factory() as session:
            return session.query(model).filter(model.id == entity_id).first()

    def find_candidates(self, candidate_filter: CandidateFilter) -> List[Any]:
        kind = candidate_filter.candidate_kind
        model = MODELS[kind]

        with self.session_factory() as session:
            query = session.query(model).filter(*self._status_conditions(kind))

            # Same comparators as the in-memory filter, applied to columns.
            # NULL candidate columns compare as NULL and are excluded.
            for constraint, bound in candidate_filter.active_constraints():
                column = getattr(model, constraint.field_for(kind))
                query = query.filter(candidate_filter.compare(constraint, bound, column))

            candidates = query.order_by(model.created_at.asc(), model.id.asc()).all()

        logger.debug("candidates_fetched",
                    candidate_kind=kind.value,
                    count=len(candidates),
                    bounds={k: str(v) for k, v in candidate_filter.describe().items()})

        return candidates

    @staticmethod
    def _status_conditions(kind: EntityKind) -> list:
        if kind is EntityKind.resource:
            return [
                Resource.status == ResourceStatus.active.value,
                Resource.availability_status.in_(MATCHABLE_AVAILABILITY),
            ]
        return [Requirement.status == RequirementStatus.open.value]
