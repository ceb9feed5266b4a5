import pandas as pd
import plotly.express as px
import streamlit as st

import ui
from use_cases import dashboard_flow
from utils import session_manager

TASKS_VIEW = "tasks"
PROJECT_TASKS_VIEW = "project_tasks"
TASK_PROJECTS_VIEW = "task_projects"

STATUS_LABELS = {"pending": "Pending", "done": "Approved", "failed": "Rejected"}


def tasks_frame(tasks, date_field="created_at"):
    rows = []
    for t in tasks:
        rows.append({
            "Title": t.title,
            "Status": STATUS_LABELS.get(t.status, t.status),
            "Project": t.project_name,
            "Created by": t.created_by.name if t.created_by else "",
            "Reviewed by": t.reviewed_by.name if t.reviewed_by else "",
            "Note": t.note,
            "Supervisor note": t.supervisor_note,
            "Date": getattr(t, date_field) or "",
        })
    return pd.DataFrame(rows)


def _status_chart(overview):
    rows = []
    for bucket, counts in (("Daily", overview.daily_counts), ("Monthly", overview.monthly_counts)):
        for status, count in counts.items():
            rows.append({"Bucket": bucket, "Status": STATUS_LABELS[status], "Tasks": count})
    fig = px.bar(pd.DataFrame(rows), x="Bucket", y="Tasks", color="Status", barmode="group",
                 title="Tasks by status")
    st.plotly_chart(ui.update_chart_layout(fig), use_container_width=True)


def _render_bucket(tasks, counts, date_field):
    ui.render_stat_cards([
        ("Total", len(tasks)),
        ("Pending", counts.get("pending", 0)),
        ("Approved", counts.get("done", 0)),
        ("Rejected", counts.get("failed", 0)),
    ])
    if not tasks:
        st.info("No tasks found.")
        return
    st.dataframe(tasks_frame(tasks, date_field), use_container_width=True, hide_index=True)


def render_project_tasks(ctx):
    st.subheader("Tasks by project")
    projects = session_manager.run_view_request(
        TASK_PROJECTS_VIEW, ctx.api.get_projects, spinner_text="Loading projects..."
    )
    if projects is None:
        ui.render_request_message(ctx.view(TASK_PROJECTS_VIEW), TASK_PROJECTS_VIEW)
        return
    if not projects:
        st.info("No projects yet.")
        return

    by_id = {p.id: p.name for p in projects}
    project_id = st.selectbox("Project", list(by_id), format_func=by_id.get, key="task_project_choice")
    tasks = session_manager.run_view_request(
        PROJECT_TASKS_VIEW,
        lambda: ctx.api.get_project_tasks(project_id),
        spinner_text="Loading project tasks...",
    )
    if tasks is None:
        ui.render_request_message(ctx.view(PROJECT_TASKS_VIEW), PROJECT_TASKS_VIEW)
        return
    _render_bucket(tasks, dashboard_flow.count_by_status(tasks), "created_at")


def render_tasks(ctx):
    st.header("📋 Tasks")
    overview = session_manager.run_view_request(
        TASKS_VIEW,
        lambda: dashboard_flow.fetch_task_overview(ctx.api),
        spinner_text="Loading tasks...",
    )
    if overview is None:
        ui.render_request_message(ctx.view(TASKS_VIEW), TASKS_VIEW)
        return

    _status_chart(overview)
    tab_daily, tab_monthly, tab_project = st.tabs([
        f"Daily ({len(overview.daily)})",
        f"Monthly ({len(overview.monthly)})",
        "By project",
    ])
    with tab_daily:
        _render_bucket(overview.daily, overview.daily_counts, "created_at")
    with tab_monthly:
        _render_bucket(overview.monthly, overview.monthly_counts, "date")
    with tab_project:
        render_project_tasks(ctx)
