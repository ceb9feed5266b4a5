import streamlit as st

from infrastructure.observability import setup_observability
setup_observability()

import ui
from use_cases import auth_flow, bootstrap
from utils import session_manager
from views import admin_view, login_view

# --- PAGE SETTINGS ---
st.set_page_config(page_title="Admin Console", layout="wide", initial_sidebar_state="expanded")

ui.setup_style()

# --- STARTUP ORCHESTRATION ---
# Builds the gate for this browser session and runs the one-time reachability probe.
startup_result = bootstrap.run_startup()
if startup_result.status == "STOP":
    st.stop()

# Token changes from the previous run (login, logout, eviction) reach the browser here.
session_manager.sync_browser_token()

# --- SESSION GATE ---
auth_result = auth_flow.ensure_authenticated_session()

if auth_result.status == "STOP":
    login_view.render_auth_screen()
    st.stop()

# === ADMIN AREA ===
ctx = session_manager.get_context()

try:
    import sentry_sdk
    if sentry_sdk.get_client().is_active():
        sentry_sdk.set_tag("app.page", st.session_state.get("nav_page", "overview"))
except (ImportError, AttributeError):
    pass

admin_view.render_admin_area(ctx)
