import pandas as pd
import streamlit as st

import ui
from use_cases.domain_models import ROLES, UserPayload
from utils import session_manager

ADD_USER_VIEW = "add_user"
USERS_VIEW = "users"
DELETE_USER_VIEW = "delete_user"


def render_add_user(ctx):
    st.header("👤 Add user")
    state = ctx.view(ADD_USER_VIEW)
    ui.render_request_message(state, ADD_USER_VIEW)

    with st.form("add_user_form", clear_on_submit=True):
        name = st.text_input("Name *")
        email = st.text_input("Email *")
        password = st.text_input("Password *", type="password")
        role = st.selectbox("Role", ROLES, format_func=str.capitalize)
        submitted = st.form_submit_button("Create user", disabled=state.is_pending)

    if submitted:
        if not all([name.strip(), email.strip(), password]):
            st.error("Fill in all required fields.")
            return
        payload = UserPayload(name=name.strip(), email=email.strip(), password=password, role=role)
        session_manager.run_view_request(
            ADD_USER_VIEW,
            lambda: ctx.api.create_user(payload),
            success_message="User created successfully!",
            spinner_text="Creating user...",
        )
        st.rerun()


def render_users_list(ctx):
    st.header("👥 Users")
    delete_state = ctx.view(DELETE_USER_VIEW)
    ui.render_request_message(delete_state, DELETE_USER_VIEW)

    users = session_manager.run_view_request(USERS_VIEW, ctx.api.get_users, spinner_text="Loading users...")
    if users is None:
        ui.render_request_message(ctx.view(USERS_VIEW), USERS_VIEW)
        return
    if not users:
        st.info("No users yet. Create the first one from 'Add user'.")
        return

    users_df = pd.DataFrame(
        [{"Name": u.name, "Email": u.email, "Role": u.role.capitalize()} for u in users]
    )
    st.dataframe(users_df, use_container_width=True, hide_index=True)

    st.subheader("Delete user")
    by_label = {f"{u.name} ({u.email})": u for u in users}
    label = st.selectbox("User", list(by_label), key="delete_user_choice")
    confirm = st.checkbox("I understand this cannot be undone", key="delete_user_confirm")
    if st.button("🗑 Delete user", disabled=not confirm or delete_state.is_pending):
        user = by_label[label]
        session_manager.run_view_request(
            DELETE_USER_VIEW,
            lambda: ctx.api.delete_user(user.id),
            success_message=f"User {user.name} deleted successfully",
            spinner_text="Deleting user...",
        )
        st.rerun()
