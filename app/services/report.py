"""Plain-text (markdown) IEP progress reports built from the snapshot."""
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, List, Optional, Sequence

from dateutil.parser import isoparse

from app.schemas.data_point import DataPoint
from app.schemas.goal import DEFAULT_CATEGORY, Goal
from app.schemas.objective import Comparator, Objective
from app.schemas.state import AppState
from app.schemas.student import Student

_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)

TARGET_MET = "Target Met."
MAKING_PROGRESS = "Making progress toward goal."
MAINTAINED_BASELINE = "Maintained baseline."
NEEDS_ATTENTION = "Needs attention."
NO_DATA = "Data collection in progress."


def parse_date(value: Any) -> Optional[datetime]:
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = isoparse(value)
    except ValueError:
        return None
    # Date-only strings parse as naive; compare everything in UTC
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def as_number(value: Any) -> Optional[float]:
    """Stored values are unchecked; only real numbers take part in comparisons."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def date_sort_key(data_point: DataPoint) -> datetime:
    return parse_date(data_point.date) or _EARLIEST


def format_date(value: Any) -> str:
    parsed = parse_date(value)
    return f"{parsed.month}/{parsed.day}/{parsed.year}" if parsed else ""


@dataclass
class ObjectiveAnalysis:
    data_points: List[DataPoint]
    latest: Optional[DataPoint]
    current_status: str
    current_secondary: str
    date_str: str
    comparator_text: str
    criteria_text: str
    status_text: str


def analyze_objective(objective: Objective, data_points: Sequence[DataPoint]) -> ObjectiveAnalysis:
    points = sorted(
        (dp for dp in data_points if dp.objective_id == objective.id),
        key=date_sort_key,
    )
    latest = points[-1] if points else None
    aiming_high = objective.comparator == Comparator.AT_LEAST

    current_status = "No data"
    current_secondary = ""
    status_text = NO_DATA

    value = as_number(latest.value) if latest is not None else None
    if latest is not None and latest.value is not None:
        current_status = f"{latest.value} {objective.unit or ''}".strip()
        if latest.secondary_value is not None and objective.has_secondary_metric:
            current_secondary = f"{latest.secondary_value} {objective.secondary_metric_name or ''}".strip()

        target = as_number(objective.target_value)
        baseline = as_number(objective.baseline_value)
        if value is None:
            status_text = NO_DATA
        elif target is not None and (value >= target if aiming_high else value <= target):
            status_text = TARGET_MET
        elif baseline is not None and (value > baseline if aiming_high else value < baseline):
            status_text = MAKING_PROGRESS
        elif value == baseline:
            status_text = MAINTAINED_BASELINE
        else:
            status_text = NEEDS_ATTENTION

    return ObjectiveAnalysis(
        data_points=points,
        latest=latest,
        current_status=current_status,
        current_secondary=current_secondary,
        date_str=format_date(latest.date) if latest else "",
        comparator_text="At least" if aiming_high else "At most",
        criteria_text=f"Criteria: {objective.mastery_criteria}" if objective.mastery_criteria else "",
        status_text=status_text,
    )


def generate_report(
    student: Student,
    goals: Sequence[Goal],
    objectives: Sequence[Objective],
    data_points: Sequence[DataPoint],
    report_date: Optional[date] = None,
) -> str:
    report_date = report_date or date.today()

    report = "## IEP Progress Report\n"
    report += f"**Student:** {student.name}  \n"
    report += f"**Grade:** {student.grade}  \n"
    report += f"**Date:** {report_date.month}/{report_date.day}/{report_date.year}  \n\n"

    if student.report_summary:
        report += f"{student.report_summary}\n\n"

    if not goals:
        report += "*No goals recorded.*\n"
        return report

    for index, goal in enumerate(goals, start=1):
        report += f"### Goal {index} ({goal.category or DEFAULT_CATEGORY})\n"
        report += f"> **{goal.description}**\n\n"

        if goal.present_level:
            report += f"**Present Levels:** {goal.present_level}\n\n"

        goal_objectives = [o for o in objectives if o.goal_id == goal.id]
        if not goal_objectives:
            report += "*No specific objectives recorded for this goal.*\n\n"

        for objective in goal_objectives:
            analysis = analyze_objective(objective, data_points)
            status = analysis.current_status
            if analysis.current_secondary:
                status += f" (with {analysis.current_secondary})"
            criteria = f" | {analysis.criteria_text}" if analysis.criteria_text else ""

            report += f"*   **{objective.title}**\n"
            report += f"    *   *Measure:* {objective.description}\n"
            report += (
                f"    *   *Target:* {analysis.comparator_text} {objective.target_value} {objective.unit}{criteria}"
                f" | *Current:* {status} ({analysis.date_str})\n"
            )
            report += f"    *   *Status:* **{analysis.status_text}**\n"

        if goal.report_observation:
            report += f"\n**Observations:** {goal.report_observation}\n"
        report += "\n---\n"

    return report


def student_report(state: AppState, student: Student, report_date: Optional[date] = None) -> str:
    goals = [g for g in state.goals if g.student_id == student.id]
    goal_ids = {g.id for g in goals}
    objectives = [o for o in state.objectives if o.goal_id in goal_ids]
    objective_ids = {o.id for o in objectives}
    data_points = [dp for dp in state.data_points if dp.objective_id in objective_ids]
    return generate_report(student, goals, objectives, data_points, report_date)
