"""Fixed dependency order between the entity collections."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Tier:
    """One entity collection and, when dependent, how it references its parent.

    ``reference_field`` is the human-readable parent name carried by seed
    payloads; ``foreign_key`` is the attribute that stores the parent id on
    the backend.
    """

    collection: str
    parent: str | None = None
    reference_field: str | None = None
    foreign_key: str | None = None

    @property
    def is_dependent(self) -> bool:
        return self.parent is not None


DEPENDENCY_ORDER: tuple[Tier, ...] = (
    Tier("courses"),
    Tier("lessons", parent="courses", reference_field="course_name", foreign_key="course_id"),
    Tier("problems", parent="lessons", reference_field="lesson_name", foreign_key="lesson_id"),
    Tier("ai_prompts"),
)

REQUIRED_COLLECTIONS: tuple[str, ...] = tuple(t.collection for t in DEPENDENCY_ORDER)


def parent_collections() -> set[str]:
    """Collections that some other tier resolves references against."""
    return {t.parent for t in DEPENDENCY_ORDER if t.parent is not None}


def teardown_order() -> list[str]:
    """Dependents before parents, then the independent collections."""
    linked = parent_collections()
    chain = [t.collection for t in DEPENDENCY_ORDER if t.is_dependent or t.collection in linked]
    independent = [t.collection for t in DEPENDENCY_ORDER if t.collection not in chain]
    return list(reversed(chain)) + independent


def dependent_tiers() -> list[Tier]:
    return [t for t in DEPENDENCY_ORDER if t.is_dependent]
