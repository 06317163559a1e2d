"""Forward-only schema migrations for the persisted snapshot.

A document's version is the slot it was found in; the document itself carries
no version field. Each upgrader takes the snapshot of one version and returns
the snapshot of the next. Upgraders copy every existing field unchanged and
only add the fields that the next version introduced, with fixed defaults.
"""
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Type

from app.schemas.data_point import DataPoint
from app.schemas.goal import DEFAULT_CATEGORY, Goal
from app.schemas.legacy import StateV1, StateV2, StateV3
from app.schemas.objective import Comparator, LegacyObjective, Objective, normalize_comparator
from app.schemas.state import AppState, Snapshot

logger = logging.getLogger(__name__)

SLOT_PREFIX = "sprout_iep_data_v"

# Fields a v1 goal carried that belong to the objective from v2 on
MEASURABLE_FIELDS = (
    "title",
    "description",
    "unit",
    "targetValue",
    "targetComparator",
    "baselineValue",
    "masteryCriteria",
    "startDate",
    "endDate",
)


def upgrade_v1_to_v2(old: StateV1) -> StateV2:
    """Split each measurable v1 goal into a parent goal and one objective.

    The objective reuses the goal's id (ids are unique per record type) so no
    new identity is minted and data points can be re-pointed without a lookup
    table. Data points keep their ``goalId`` and gain ``objectiveId``.
    """
    goals = []
    objectives = []
    for goal in old.goals:
        document = goal.to_document()
        goals.append(Goal.model_validate(document))
        measurable = {key: document[key] for key in MEASURABLE_FIELDS if key in document}
        objectives.append(LegacyObjective.model_validate({**measurable, "id": goal.id, "goalId": goal.id}))

    data_points = [
        DataPoint.model_validate({**point.to_document(), "objectiveId": point.goal_id})
        for point in old.data_points
    ]
    return StateV2(students=old.students, goals=goals, objectives=objectives, data_points=data_points)


def upgrade_v2_to_v3(old: StateV2) -> StateV3:
    goals = []
    for goal in old.goals:
        if goal.category:
            goals.append(goal)
        else:
            goals.append(Goal.model_validate({**goal.to_document(), "category": DEFAULT_CATEGORY}))

    objectives = []
    for objective in old.objectives:
        # Empty or unrecognized comparators count as absent; symbols are spelled out
        comparator = (normalize_comparator(objective.target_comparator) or Comparator.AT_LEAST).value
        if objective.target_comparator == comparator:
            objectives.append(objective)
        else:
            document = {**objective.to_document(), "targetComparator": comparator}
            objectives.append(LegacyObjective.model_validate(document))

    return StateV3(students=old.students, goals=goals, objectives=objectives, data_points=old.data_points)


def upgrade_v3_to_v4(old: StateV3) -> AppState:
    # secondaryMetricName stays absent until a metric is configured
    objectives = []
    for objective in old.objectives:
        document = objective.to_document()
        if document.get("hasSecondaryMetric") is None:
            document["hasSecondaryMetric"] = False
        objectives.append(Objective.model_validate(document))

    return AppState(students=old.students, goals=old.goals, objectives=objectives, data_points=old.data_points)


@dataclass(frozen=True)
class SchemaVersion:
    version: int
    model: Type[Snapshot]
    upgrade: Optional[Callable[[Snapshot], Snapshot]] = None

    @property
    def slot(self) -> str:
        return f"{SLOT_PREFIX}{self.version}"


# Oldest first. The last entry is the current schema and has no upgrader.
SCHEMA_VERSIONS: List[SchemaVersion] = [
    SchemaVersion(1, StateV1, upgrade_v1_to_v2),
    SchemaVersion(2, StateV2, upgrade_v2_to_v3),
    SchemaVersion(3, StateV3, upgrade_v3_to_v4),
    SchemaVersion(4, AppState),
]

CURRENT = SCHEMA_VERSIONS[-1]


def upgrade_to_current(snapshot: Snapshot, from_version: int) -> AppState:
    """Chain every upgrader from ``from_version`` up to the current schema."""
    versions = [schema.version for schema in SCHEMA_VERSIONS]
    if from_version not in versions:
        raise ValueError(f"Unknown schema version: {from_version}")

    for schema in SCHEMA_VERSIONS[versions.index(from_version):-1]:
        snapshot = schema.upgrade(snapshot)
        logger.info(f"Upgraded snapshot from v{schema.version} to v{schema.version + 1}")
    return snapshot
