"""Typed wrappers over ApiClient.send for the /admin endpoints."""

from typing import Any, List

from infrastructure.api.errors import ApiValidationError
from infrastructure.api.http_client import ApiClient
from use_cases.domain_models import AdminUser, Project, ProjectPayload, Task, UserPayload


def extract_token(payload: Any) -> str:
    """Pull the bearer token out of a login response body."""
    if isinstance(payload, dict):
        token = payload.get("token") or payload.get("accessToken")
        if not token and isinstance(payload.get("data"), dict):
            token = payload["data"].get("token")
        if isinstance(token, str) and token:
            return token
    raise ApiValidationError("Login response did not contain a token.")


def _as_list(payload: Any) -> List[dict]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("data"), list):
        return payload["data"]
    return []


def _as_object(payload: Any) -> dict:
    if isinstance(payload, dict) and isinstance(payload.get("data"), dict):
        return payload["data"]
    return payload if isinstance(payload, dict) else {}


class AdminAPI:
    def __init__(self, client: ApiClient):
        self.client = client

    def _json(self, method: str, path: str, **kwargs) -> Any:
        resp = self.client.send(method, path, **kwargs)
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError:
            return None

    # --- Auth ---
    def login(self, email: str, password: str) -> str:
        body = self._json(
            "POST", "/admin/login",
            json={"email": email, "password": password},
            authenticated=False,
        )
        return extract_token(body)

    def logout(self) -> None:
        self.client.send("POST", "/admin/logout")

    # --- Users ---
    def create_user(self, payload: UserPayload) -> Any:
        return self._json("POST", "/admin/users", json=payload.to_wire())

    def get_users(self) -> List[AdminUser]:
        return [AdminUser.from_payload(u) for u in _as_list(self._json("GET", "/admin/users"))]

    def delete_user(self, user_id: str) -> None:
        self.client.send("DELETE", f"/admin/users/{user_id}")

    # --- Projects ---
    def create_project(self, payload: ProjectPayload) -> Any:
        return self._json("POST", "/admin/projects", json=payload.to_wire())

    def get_projects(self) -> List[Project]:
        return [Project.from_payload(p) for p in _as_list(self._json("GET", "/admin/projects"))]

    def get_project_by_id(self, project_id: str) -> Project:
        return Project.from_payload(_as_object(self._json("GET", f"/admin/projects/{project_id}")))

    def update_project(self, project_id: str, payload: ProjectPayload) -> Any:
        return self._json("PUT", f"/admin/projects/{project_id}", json=payload.to_wire())

    def delete_project(self, project_id: str) -> None:
        self.client.send("DELETE", f"/admin/projects/{project_id}")

    # --- Tasks ---
    def get_all_daily_tasks(self) -> List[Task]:
        return [Task.from_payload(t) for t in _as_list(self._json("GET", "/admin/tasks/daily"))]

    def get_all_monthly_tasks(self) -> List[Task]:
        return [Task.from_payload(t) for t in _as_list(self._json("GET", "/admin/tasks/monthly"))]

    def get_project_tasks(self, project_id: str) -> List[Task]:
        return [Task.from_payload(t) for t in _as_list(self._json("GET", f"/admin/tasks/project/{project_id}"))]
