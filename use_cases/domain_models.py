from dataclasses import dataclass, field, asdict
from typing import Literal, Dict, Any, List, Optional, Tuple

Role = Literal["engineer", "supervisor"]
TaskStatus = Literal["pending", "done", "failed"]

ROLES: Tuple[str, ...] = ("engineer", "supervisor")
TASK_STATUSES: Tuple[str, ...] = ("pending", "done", "failed")


def _entity_id(raw: Any) -> str:
    """Backend returns either a bare id or a populated document with `_id`."""
    if isinstance(raw, dict):
        return str(raw.get("_id") or raw.get("id") or "")
    return "" if raw is None else str(raw)


def _entity_name(raw: Any) -> str:
    if isinstance(raw, dict):
        return str(raw.get("name") or "")
    return ""


@dataclass(frozen=True)
class Member:
    """Engineer/supervisor reference embedded in a project or task."""
    id: str
    name: str = ""
    role: str = ""

    @classmethod
    def from_payload(cls, raw: Any) -> "Member":
        role = raw.get("role", "") if isinstance(raw, dict) else ""
        return cls(id=_entity_id(raw), name=_entity_name(raw), role=str(role or ""))


@dataclass(frozen=True)
class AdminUser:
    id: str
    name: str
    email: str
    role: Role

    @classmethod
    def from_payload(cls, raw: Dict[str, Any]) -> "AdminUser":
        return cls(
            id=_entity_id(raw),
            name=str(raw.get("name") or ""),
            email=str(raw.get("email") or ""),
            role=raw.get("role") or "engineer",
        )


@dataclass(frozen=True)
class Project:
    id: str
    name: str
    scope_of_work: str = ""
    engineers: Tuple[Member, ...] = ()
    supervisors: Tuple[Member, ...] = ()

    @property
    def engineer_ids(self) -> List[str]:
        return [m.id for m in self.engineers]

    @property
    def supervisor_ids(self) -> List[str]:
        return [m.id for m in self.supervisors]

    @classmethod
    def from_payload(cls, raw: Dict[str, Any]) -> "Project":
        return cls(
            id=_entity_id(raw),
            name=str(raw.get("name") or ""),
            scope_of_work=str(raw.get("scopeOfWork") or ""),
            engineers=tuple(Member.from_payload(m) for m in raw.get("engineers") or []),
            supervisors=tuple(Member.from_payload(m) for m in raw.get("supervisors") or []),
        )


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    status: TaskStatus
    note: str = ""
    supervisor_note: str = ""
    project_id: str = ""
    project_name: str = ""
    created_by: Optional[Member] = None
    reviewed_by: Optional[Member] = None
    created_at: Optional[str] = None
    date: Optional[str] = None

    @classmethod
    def from_payload(cls, raw: Dict[str, Any]) -> "Task":
        created_by = raw.get("createdBy")
        reviewed_by = raw.get("reviewedBy")
        return cls(
            id=_entity_id(raw),
            title=str(raw.get("title") or ""),
            status=raw.get("status") or "pending",
            note=str(raw.get("note") or ""),
            supervisor_note=str(raw.get("supervisorNote") or ""),
            project_id=_entity_id(raw.get("project")),
            project_name=_entity_name(raw.get("project")),
            created_by=Member.from_payload(created_by) if created_by else None,
            reviewed_by=Member.from_payload(reviewed_by) if reviewed_by else None,
            created_at=raw.get("createdAt"),
            date=raw.get("date"),
        )


@dataclass(frozen=True)
class UserPayload:
    """Body of the create-user call."""
    name: str
    email: str
    password: str
    role: Role = "engineer"

    def to_wire(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ProjectPayload:
    """Body of the create/update project calls."""
    name: str
    scope_of_work: str = ""
    engineers: List[str] = field(default_factory=list)
    supervisors: List[str] = field(default_factory=list)

    def to_wire(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "scopeOfWork": self.scope_of_work,
            "engineers": list(self.engineers),
            "supervisors": list(self.supervisors),
        }


def split_by_role(users: List[AdminUser]) -> Tuple[List[AdminUser], List[AdminUser]]:
    engineers = [u for u in users if u.role == "engineer"]
    supervisors = [u for u in users if u.role == "supervisor"]
    return engineers, supervisors
