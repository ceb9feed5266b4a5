import streamlit as st

import ui
from use_cases import dashboard_flow
from utils import session_manager
from views import projects_view, tasks_view, users_view

PAGES = {
    "overview": "🏠 Overview",
    "add_user": "👤 Add user",
    "users": "👥 Users",
    "add_project": "➕ Add project",
    "projects": "💼 Projects",
    "tasks": "📋 Tasks",
}


def render_sidebar():
    with st.sidebar:
        st.markdown("### ⚙️ Admin Console")
        labels = list(PAGES.values())
        keys = list(PAGES.keys())
        current = st.session_state.nav_page if st.session_state.nav_page in PAGES else "overview"
        choice = st.radio("Navigation", labels, index=keys.index(current), label_visibility="collapsed")
        selected = keys[labels.index(choice)]
        if selected != st.session_state.nav_page:
            st.session_state.nav_page = selected
            st.session_state.editing_project_id = None

        st.divider()
        if st.button("Log out", key="logout_btn", type="secondary", use_container_width=True):
            session_manager.logout()


def render_overview(ctx):
    st.header("📊 Overview")
    stats = session_manager.run_view_request(
        "overview",
        lambda: dashboard_flow.fetch_dashboard_stats(ctx.api),
        spinner_text="Loading statistics...",
    )
    if stats is None:
        # Either call failed: show the error instead of partial numbers.
        ui.render_request_message(ctx.view("overview"), "overview")
        return
    ui.render_stat_cards([
        ("Users", stats.total_users),
        ("Projects", stats.total_projects),
        ("Engineers", stats.total_engineers),
        ("Supervisors", stats.total_supervisors),
    ])


def render_admin_area(ctx):
    render_sidebar()
    page = st.session_state.nav_page

    if page == "add_user":
        users_view.render_add_user(ctx)
    elif page == "users":
        users_view.render_users_list(ctx)
    elif page == "add_project":
        projects_view.render_add_project(ctx)
    elif page == "projects":
        if st.session_state.editing_project_id:
            projects_view.render_update_project(ctx, st.session_state.editing_project_id)
        else:
            projects_view.render_projects_list(ctx)
    elif page == "tasks":
        tasks_view.render_tasks(ctx)
    else:
        render_overview(ctx)
