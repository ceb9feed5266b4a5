import json
import logging

import streamlit as st
import streamlit.components.v1 as components

import ui
from infrastructure.api.errors import ApiError, AuthorizationError
from use_cases import auth_flow
from use_cases.session_models import can_submit_login
from utils import session_manager

log = logging.getLogger(__name__)

LOGIN_VIEW = "login"


def _restore_cookie_from_local_storage(key):
    # Recover the cookie from localStorage if the browser lost it (after idle/restart).
    components.html(
        f"""
        <script>
        (function () {{
          try {{
              const key = {json.dumps(key)};
              const token = localStorage.getItem(key);
              const attempted = sessionStorage.getItem(key + "_restore_attempted");
              const hasCookie = document.cookie.split("; ").some((x) => x.trim().startsWith(key + "="));

              if (token && !hasCookie && !attempted) {{
                sessionStorage.setItem(key + "_restore_attempted", "1");
                const maxAge = 2592000; // 30 days
                const cookieStr = key + "=" + encodeURIComponent(token) + "; path=/; max-age=" + maxAge + "; SameSite=Lax";

                document.cookie = cookieStr;
                try {{ window.parent.document.cookie = cookieStr; }} catch(e) {{}}

                window.parent.location.reload();
              }}
          }} catch (e) {{
              console.error("Session restore error", e);
          }}
        }})();
        </script>
        """,
        height=0,
    )


def render_auth_screen():
    ctx = session_manager.get_context()
    st.title("🔐 Admin Console")

    if st.session_state.get("eviction_notice"):
        st.warning("Your session has expired. Please log in again.")
        st.session_state.eviction_notice = False

    if ctx is None:
        st.info("Loading...")
        return

    _restore_cookie_from_local_storage(ctx.settings.token_key)

    session = ctx.gate.session_state
    if not session.server_online:
        ui.render_offline_banner()

    state = ctx.view(LOGIN_VIEW)
    ui.render_request_message(state, LOGIN_VIEW)

    with st.form("login_form", clear_on_submit=False):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button(
            "Log in",
            disabled=not can_submit_login(session) or state.is_pending,
        )

    if not submitted:
        return
    if not email.strip() or not password:
        st.error("Enter email and password.")
        return
    if not state.begin(ctx.gate.generation):
        return

    try:
        with st.spinner("Signing in..."):
            auth_flow.submit_login(ctx, email, password)
    except AuthorizationError:
        state.fail(ApiError("Invalid email or password.", status_code=401))
        st.rerun()
    except ApiError as e:
        log.info(f"Login failed: {e.kind}: {e.message}")
        state.fail(e)
        st.rerun()
    except Exception:
        state.abandon()
        raise
    else:
        state.reset()
        st.rerun()
