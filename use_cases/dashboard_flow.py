"""Aggregate views that need several API calls joined together."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Sequence, Tuple

from use_cases.domain_models import TASK_STATUSES, AdminUser, Project, Task, split_by_role

log = logging.getLogger(__name__)

MAX_PARALLEL_CALLS = 4


def run_all(calls: Sequence[Callable[[], Any]]) -> List[Any]:
    """Run independent calls concurrently and join them all-or-nothing.

    Results come back in the order of `calls`. If any call raises, the first
    failure in that order is re-raised and no partial results are returned.
    """
    if not calls:
        return []
    with ThreadPoolExecutor(max_workers=min(MAX_PARALLEL_CALLS, len(calls))) as pool:
        futures = [pool.submit(call) for call in calls]
        errors = [f.exception() for f in futures]
    for err in errors:
        if err is not None:
            raise err
    return [f.result() for f in futures]


@dataclass(frozen=True)
class DashboardStats:
    total_users: int = 0
    total_projects: int = 0
    total_engineers: int = 0
    total_supervisors: int = 0


def compute_dashboard_stats(users: List[AdminUser], projects: List[Project]) -> DashboardStats:
    engineers, supervisors = split_by_role(users)
    return DashboardStats(
        total_users=len(users),
        total_projects=len(projects),
        total_engineers=len(engineers),
        total_supervisors=len(supervisors),
    )


def fetch_dashboard_stats(api) -> DashboardStats:
    users, projects = run_all([api.get_users, api.get_projects])
    stats = compute_dashboard_stats(users, projects)
    log.debug(f"Dashboard stats: {stats}")
    return stats


def count_by_status(tasks: List[Task]) -> Dict[str, int]:
    counts = {status: 0 for status in TASK_STATUSES}
    for task in tasks:
        if task.status in counts:
            counts[task.status] += 1
    return counts


@dataclass(frozen=True)
class TaskOverview:
    daily: Tuple[Task, ...] = ()
    monthly: Tuple[Task, ...] = ()
    daily_counts: Dict[str, int] = field(default_factory=dict)
    monthly_counts: Dict[str, int] = field(default_factory=dict)


def fetch_task_overview(api) -> TaskOverview:
    daily, monthly = run_all([api.get_all_daily_tasks, api.get_all_monthly_tasks])
    return TaskOverview(
        daily=tuple(daily),
        monthly=tuple(monthly),
        daily_counts=count_by_status(daily),
        monthly_counts=count_by_status(monthly),
    )


@dataclass(frozen=True)
class ProjectEditorData:
    project: Project
    engineers: Tuple[AdminUser, ...] = ()
    supervisors: Tuple[AdminUser, ...] = ()


def fetch_project_editor(api, project_id: str) -> ProjectEditorData:
    project, users = run_all([lambda: api.get_project_by_id(project_id), api.get_users])
    engineers, supervisors = split_by_role(users)
    return ProjectEditorData(project=project, engineers=tuple(engineers), supervisors=tuple(supervisors))
