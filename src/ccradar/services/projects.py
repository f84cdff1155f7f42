"""Per-project usage aggregation."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable

from ccradar.models.plans import QuotaPlan
from ccradar.models.projects import ProjectUsage
from ccradar.models.usage import UsageRecord
from ccradar.services.windows import build_sessions


def project_usage(records: Iterable[UsageRecord]) -> list[ProjectUsage]:
    """Group records by project, heaviest project first.

    Records without a project are left out. ``session_count`` counts the
    5-hour windows the project's own records fall into, and ``percentage``
    is the project's share of all attributed tokens.
    """
    by_project: dict[str, list[UsageRecord]] = defaultdict(list)
    for record in records:
        if record.project:
            by_project[record.project].append(record)

    grand_total = sum(record.total_tokens for group in by_project.values() for record in group)

    projects: list[ProjectUsage] = []
    for project, group in by_project.items():
        total = sum(record.total_tokens for record in group)
        session_count = len(build_sessions(group, QuotaPlan.PRO))
        projects.append(
            ProjectUsage(
                project=project,
                total_tokens=total,
                cost=sum(record.cost for record in group),
                session_count=session_count,
                last_used=max(record.timestamp for record in group),
                average_tokens_per_session=total // session_count,
                percentage=100.0 * total / grand_total if grand_total > 0 else 0.0,
            )
        )

    projects.sort(key=lambda item: (item.total_tokens, item.last_used), reverse=True)
    return projects
