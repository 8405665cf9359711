"""Pluggable record enrichment.

Enrichers add engineering metadata (team, contributor, bug count, ...) to
a record and return a new record.  The random implementation fabricates
values for demos and tests; a real data source plugs in by implementing
the same ``enrich`` method.
"""

import random
from typing import Optional, Protocol

from ..records.models import ReleaseRecord

TEAMS = ["Frontend", "Backend", "Mobile", "Security", "Infrastructure", "Design", "API", "QA", "DevOps"]
CONTRIBUTORS = [
    "Sarah Chen", "Michael Johnson", "Amit Patel", "Jessica Kim",
    "Carlos Rodriguez", "Emma Thompson", "David Wilson", "Olga Petrov",
    "Marcus Lee", "Hannah Garcia", "James Moore", "Fatima Ali",
    "Ryan Taylor", "Sophia Martinez", "Noah Anderson", "Wei Zhang",
]
LEVELS = ["Low", "Medium", "High"]
DEPENDENCIES = ["API", "Authentication", "Database", "Frontend", "Notifications", "Payments"]

HIGH_IMPACT_KEYWORDS = ("major", "significant", "new", "revolutionary", "transform")
LOW_IMPACT_KEYWORDS = ("minor", "small", "fix", "tweak")


def impact_level(description: Optional[str]) -> str:
    """Classify a feature description as High, Low or Medium impact.

    High-impact keywords win over low-impact ones.
    """
    if not description:
        return "Medium"
    text = description.lower()
    if any(kw in text for kw in HIGH_IMPACT_KEYWORDS):
        return "High"
    if any(kw in text for kw in LOW_IMPACT_KEYWORDS):
        return "Low"
    return "Medium"


class Enricher(Protocol):
    """Adds metadata to a record; must not change its date or category."""

    def enrich(self, record: ReleaseRecord) -> ReleaseRecord: ...


class NullEnricher:
    """Leaves records untouched."""

    def enrich(self, record: ReleaseRecord) -> ReleaseRecord:
        return record


class RandomSampleEnricher:
    """Fabricates engineering metadata from a seeded RNG."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def enrich(self, record: ReleaseRecord) -> ReleaseRecord:
        rng = self._rng
        return record.with_fields(
            team=rng.choice(TEAMS),
            contributor=rng.choice(CONTRIBUTORS),
            bug_count=rng.randrange(5),
            complexity=rng.choice(LEVELS),
            time_to_release=rng.randint(10, 39),
            dependencies=tuple(rng.sample(DEPENDENCIES, rng.randrange(3))),
        )
