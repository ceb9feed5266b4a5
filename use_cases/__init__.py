"""Application layer contracts for orchestrating high-level flows.

`auth_flow` and `bootstrap` touch Streamlit and the API wiring, so they are
imported as submodules rather than re-exported here.
"""

from .dashboard_flow import DashboardStats, TaskOverview, compute_dashboard_stats, count_by_status, run_all
from .domain_models import AdminUser, Member, Project, ProjectPayload, Role, Task, TaskStatus, UserPayload
from .session_gate import SessionGate
from .session_models import GateState, SessionState, can_submit_login, is_authenticated
from .view_state import RequestPhase, ViewRequestState

__all__ = [
    "AdminUser",
    "DashboardStats",
    "GateState",
    "Member",
    "Project",
    "ProjectPayload",
    "RequestPhase",
    "Role",
    "SessionGate",
    "SessionState",
    "Task",
    "TaskOverview",
    "TaskStatus",
    "UserPayload",
    "ViewRequestState",
    "can_submit_login",
    "compute_dashboard_stats",
    "count_by_status",
    "is_authenticated",
    "run_all",
]
