import streamlit as st

import ui
from use_cases import dashboard_flow
from use_cases.domain_models import ProjectPayload, split_by_role
from utils import session_manager

ADD_PROJECT_VIEW = "add_project"
PROJECTS_VIEW = "projects"
DELETE_PROJECT_VIEW = "delete_project"
EDIT_PROJECT_VIEW = "edit_project"
LOAD_PROJECT_VIEW = "load_project"
PROJECT_USERS_VIEW = "project_users"


def _member_picker(label, users, default_ids, key):
    options = {u.id: f"{u.name} ({u.email})" for u in users}
    default = [i for i in default_ids if i in options]
    return st.multiselect(label, list(options), default=default, format_func=options.get, key=key)


def _project_form(form_key, engineers, supervisors, project=None, submit_label="Save", disabled=False):
    with st.form(form_key, clear_on_submit=project is None):
        name = st.text_input("Project name *", value=project.name if project else "")
        scope = st.text_area("Scope of work", value=project.scope_of_work if project else "")
        engineer_ids = _member_picker(
            "Engineers", engineers, project.engineer_ids if project else [], key=f"{form_key}_engineers"
        )
        supervisor_ids = _member_picker(
            "Supervisors", supervisors, project.supervisor_ids if project else [], key=f"{form_key}_supervisors"
        )
        submitted = st.form_submit_button(submit_label, disabled=disabled)
    if not submitted:
        return None
    if not name.strip():
        st.error("Project name is required.")
        return None
    return ProjectPayload(
        name=name.strip(),
        scope_of_work=scope.strip(),
        engineers=engineer_ids,
        supervisors=supervisor_ids,
    )


def render_add_project(ctx):
    st.header("➕ Add project")
    state = ctx.view(ADD_PROJECT_VIEW)
    ui.render_request_message(state, ADD_PROJECT_VIEW)

    users = session_manager.run_view_request(PROJECT_USERS_VIEW, ctx.api.get_users, spinner_text="Loading users...")
    if users is None:
        ui.render_request_message(ctx.view(PROJECT_USERS_VIEW), PROJECT_USERS_VIEW)
        users = []
    engineers, supervisors = split_by_role(users)

    payload = _project_form(
        "add_project_form", engineers, supervisors, submit_label="Create project", disabled=state.is_pending
    )
    if payload is not None:
        session_manager.run_view_request(
            ADD_PROJECT_VIEW,
            lambda: ctx.api.create_project(payload),
            success_message="Project created successfully!",
            spinner_text="Creating project...",
        )
        st.rerun()


def render_projects_list(ctx):
    st.header("💼 Projects")
    delete_state = ctx.view(DELETE_PROJECT_VIEW)
    ui.render_request_message(delete_state, DELETE_PROJECT_VIEW)

    projects = session_manager.run_view_request(
        PROJECTS_VIEW, ctx.api.get_projects, spinner_text="Loading projects..."
    )
    if projects is None:
        ui.render_request_message(ctx.view(PROJECTS_VIEW), PROJECTS_VIEW)
        return
    if not projects:
        st.info("No projects yet. Create the first one from 'Add project'.")
        return

    for project in projects:
        with st.container(border=True):
            st.markdown(f"**{project.name}**")
            if project.scope_of_work:
                st.caption(project.scope_of_work)
            st.write(f"{len(project.engineers)} engineers · {len(project.supervisors)} supervisors")
            c1, c2 = st.columns(2)
            if c1.button("✏️ Edit", key=f"edit_{project.id}", use_container_width=True):
                st.session_state.editing_project_id = project.id
                st.rerun()
            if c2.button(
                "🗑 Delete",
                key=f"delete_{project.id}",
                use_container_width=True,
                disabled=delete_state.is_pending,
            ):
                session_manager.run_view_request(
                    DELETE_PROJECT_VIEW,
                    lambda: ctx.api.delete_project(project.id),
                    success_message=f"Project {project.name} deleted successfully",
                    spinner_text="Deleting project...",
                )
                st.rerun()


def render_update_project(ctx, project_id):
    st.header("✏️ Update project")
    if st.button("← Back to projects"):
        st.session_state.editing_project_id = None
        st.rerun()

    state = ctx.view(EDIT_PROJECT_VIEW)
    ui.render_request_message(state, EDIT_PROJECT_VIEW)

    data = session_manager.run_view_request(
        LOAD_PROJECT_VIEW,
        lambda: dashboard_flow.fetch_project_editor(ctx.api, project_id),
        spinner_text="Loading project...",
    )
    if data is None:
        ui.render_request_message(ctx.view(LOAD_PROJECT_VIEW), LOAD_PROJECT_VIEW)
        return
    if not data.project.id:
        st.warning("Project not found.")
        return

    payload = _project_form(
        f"update_project_form_{project_id}",
        data.engineers,
        data.supervisors,
        project=data.project,
        submit_label="Update project",
        disabled=state.is_pending,
    )
    if payload is not None:
        session_manager.run_view_request(
            EDIT_PROJECT_VIEW,
            lambda: ctx.api.update_project(project_id, payload),
            success_message="Project updated successfully!",
            spinner_text="Saving project...",
        )
        st.rerun()
