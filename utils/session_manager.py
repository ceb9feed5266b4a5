import json
import logging
from urllib.parse import unquote

import streamlit as st
import streamlit.components.v1 as components

from infrastructure.api.errors import ApiError, AuthorizationError
from infrastructure.storage.token_storage import BrowserTokenStorage

"""
SESSION STATE CONTRACT

This file owns the Streamlit session state of the admin console.

Keys of st.session_state:

admin_ctx: AdminContext | None
    gate, API client, per-view request states and the token slot of this
    browser session; the slot is seeded from and synced to the `adminToken`
    cookie + localStorage of the same browser
    default: None
    owner: use_cases/bootstrap

nav_page: str
    currently selected admin page
    default: "overview"
    owner: views/admin_view

editing_project_id: str | None
    project opened in the update form
    default: None
    owner: views/projects_view

eviction_notice: bool
    set when the API rejected the token; the login view shows it once
    default: False
    owner: session_manager
"""

log = logging.getLogger(__name__)


def init_session_state():
    if "admin_ctx" not in st.session_state:
        st.session_state.admin_ctx = None
    if "nav_page" not in st.session_state:
        st.session_state.nav_page = "overview"
    if "editing_project_id" not in st.session_state:
        st.session_state.editing_project_id = None
    if "eviction_notice" not in st.session_state:
        st.session_state.eviction_notice = False


def get_context():
    return st.session_state.get("admin_ctx")


def read_browser_token(key):
    try:
        raw = st.context.cookies.get(key)
    except Exception as e:
        # During some tests contexts might not be fully available
        log.debug(f"Browser cookies unavailable: {e}")
        raw = None
    return unquote(raw) if raw else None


def write_browser_token(key, token):
    # Cookie lets the server read the token on the next page load; localStorage survives cookie loss.
    components.html(
        f"""
        <script>
            var key = {json.dumps(key)};
            var token = {json.dumps(token)};
            var maxAge = 2592000; // 30 days
            var cookieStr = key + "=" + encodeURIComponent(token) + "; path=/; max-age=" + maxAge + "; SameSite=Lax";

            document.cookie = cookieStr;
            localStorage.setItem(key, token);
            sessionStorage.removeItem(key + "_restore_attempted");
            try {{
                window.parent.document.cookie = cookieStr;
            }} catch (e) {{
                console.log("Cross-origin frame block, normal behavior if different origin");
            }}
        </script>
        """,
        height=0,
    )


def clear_browser_token(key):
    components.html(
        f"""
        <script>
            var key = {json.dumps(key)};
            var cookieStr = key + "=; path=/; max-age=0; SameSite=Lax";
            document.cookie = cookieStr;
            try {{ window.parent.document.cookie = cookieStr; }} catch (e) {{}}
            localStorage.removeItem(key);
        </script>
        """,
        height=0,
    )


def sync_browser_token():
    """Push the last token change of this session to the browser (script thread only)."""
    ctx = get_context()
    if ctx is None or not isinstance(ctx.storage, BrowserTokenStorage):
        return
    pending = ctx.storage.take_pending_sync()
    if pending is None:
        return
    action, token = pending
    if action == "set":
        write_browser_token(ctx.storage.key, token)
    else:
        clear_browser_token(ctx.storage.key)


def _reset_navigation():
    st.session_state.nav_page = "overview"
    st.session_state.editing_project_id = None


def redirect_to_login():
    """Navigate to the login view after the gate has evicted the session."""
    st.session_state.eviction_notice = True
    _reset_navigation()
    st.rerun()


def logout():
    ctx = get_context()
    if ctx is not None:
        ctx.gate.logout()
    _reset_navigation()
    st.rerun()


def run_view_request(view_key, action, success_message="", spinner_text="Loading..."):
    """Run one API-backed action for a view and record its outcome.

    Returns the action result, or None when the request was refused (duplicate
    submission), failed, or finished after the session it belonged to closed.
    """
    ctx = get_context()
    state = ctx.view(view_key)
    generation = ctx.gate.generation
    if not state.begin(generation):
        return None

    try:
        with st.spinner(spinner_text):
            result = action()
    except AuthorizationError:
        state.abandon()
        redirect_to_login()
        return None
    except ApiError as e:
        log.info(f"{view_key}: {e.kind} error: {e.message}")
        if state.accepts(ctx.gate.generation):
            state.fail(e)
        else:
            state.abandon()
        return None
    except Exception:
        # Not an API outcome: release the view so the next attempt can run, then propagate.
        state.abandon()
        raise

    if not state.accepts(ctx.gate.generation):
        state.abandon()
        return None
    state.succeed(success_message)
    return result
