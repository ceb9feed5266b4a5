from unittest.mock import MagicMock, patch

import pytest
import streamlit as st

from infrastructure.api.errors import ApiValidationError, AuthorizationError
from infrastructure.settings import ApiSettings
from infrastructure.storage.token_storage import BrowserTokenStorage, InMemoryTokenStorage
from use_cases.bootstrap import build_context
from use_cases.session_gate import SessionGate
from use_cases.view_state import ViewRequestState
from utils import session_manager


class FakeContext:
    def __init__(self, token="abc"):
        self.gate = SessionGate(InMemoryTokenStorage(token), probe=lambda: True)
        self.gate.initialize()
        self.view_states = {}

    def view(self, key):
        return self.view_states.setdefault(key, ViewRequestState())


@pytest.fixture
def ctx():
    st.session_state.clear()
    session_manager.init_session_state()
    ctx = FakeContext()
    st.session_state.admin_ctx = ctx
    with patch.object(session_manager.st, "spinner"):
        yield ctx


def test_init_session_state():
    st.session_state.clear()
    session_manager.init_session_state()
    assert st.session_state.admin_ctx is None
    assert st.session_state.nav_page == "overview"
    assert st.session_state.editing_project_id is None
    assert st.session_state.eviction_notice is False


def test_init_session_state_keeps_existing_values():
    st.session_state.clear()
    st.session_state.nav_page = "users"
    session_manager.init_session_state()
    assert st.session_state.nav_page == "users"


@patch("streamlit.rerun")
def test_logout(mock_rerun):
    st.session_state.clear()
    session_manager.init_session_state()
    ctx = MagicMock()
    st.session_state.admin_ctx = ctx
    st.session_state.nav_page = "projects"
    st.session_state.editing_project_id = "p1"

    session_manager.logout()

    ctx.gate.logout.assert_called_once()
    mock_rerun.assert_called_once()
    assert st.session_state.nav_page == "overview"
    assert st.session_state.editing_project_id is None


def test_run_view_request_success(ctx):
    result = session_manager.run_view_request("users", lambda: ["u1"], success_message="Loaded")

    assert result == ["u1"]
    assert ctx.view("users").visible() == ("success", "Loaded")


def test_run_view_request_error_is_recorded(ctx):
    def action():
        raise ApiValidationError("Email already exists", status_code=400)

    assert session_manager.run_view_request("add_user", action) is None
    assert ctx.view("add_user").visible() == ("error", "Email already exists")


def test_run_view_request_refuses_duplicate(ctx):
    ctx.view("users").begin(ctx.gate.generation)
    action = MagicMock()

    assert session_manager.run_view_request("users", action) is None
    action.assert_not_called()


@patch("streamlit.rerun")
def test_run_view_request_authorization_redirects_to_login(mock_rerun, ctx):
    def action():
        ctx.gate.evict("abc")
        raise AuthorizationError("expired", status_code=401)

    assert session_manager.run_view_request("projects", action) is None
    mock_rerun.assert_called_once()
    assert st.session_state.eviction_notice is True
    assert ctx.view("projects").visible() == ("idle", "")


def test_run_view_request_drops_result_of_closed_session(ctx):
    def action():
        ctx.gate.evict("abc")
        return ["stale"]

    assert session_manager.run_view_request("users", action) is None
    assert ctx.view("users").visible() == ("idle", "")


def test_run_view_request_unexpected_failure_releases_view(ctx):
    def boom():
        raise AttributeError("'str' object has no attribute 'get'")

    with pytest.raises(AttributeError):
        session_manager.run_view_request("users", boom)
    assert ctx.view("users").is_pending is False

    retry = MagicMock(return_value=["u1"])
    assert session_manager.run_view_request("users", retry) == ["u1"]
    retry.assert_called_once()


@patch("requests.get", return_value=MagicMock(status_code=200))
def test_browser_sessions_do_not_share_token(_mock_get):
    settings = ApiSettings()
    with patch("utils.session_manager.read_browser_token", return_value=None):
        browser_a = build_context(settings)
        browser_b = build_context(settings)

    browser_a.gate.initialize()
    browser_a.gate.login("secret-admin-token")
    browser_b.gate.initialize()

    assert browser_a.gate.state == "AUTHENTICATED"
    assert browser_b.gate.state == "UNAUTHENTICATED"
    assert browser_b.storage.get() is None

    # Closing one browser's session leaves the other untouched.
    with patch("requests.request", return_value=MagicMock(status_code=200, content=b"")):
        browser_b.gate.logout()
    assert browser_a.storage.get() == "secret-admin-token"


@patch("requests.get", return_value=MagicMock(status_code=200))
def test_browser_session_restores_its_own_cookie(_mock_get):
    with patch("utils.session_manager.read_browser_token", return_value="abc"):
        ctx = build_context(ApiSettings())

    ctx.gate.initialize()

    assert ctx.gate.is_authenticated
    assert ctx.storage.get() == "abc"


@patch("utils.session_manager.components.html")
def test_sync_browser_token_writes_and_clears(mock_html):
    st.session_state.clear()
    session_manager.init_session_state()
    storage = BrowserTokenStorage()
    st.session_state.admin_ctx = MagicMock(storage=storage)

    storage.set("T")
    session_manager.sync_browser_token()
    script = mock_html.call_args.args[0]
    assert '"adminToken"' in script
    assert '"T"' in script
    assert "localStorage.setItem" in script

    session_manager.sync_browser_token()
    assert mock_html.call_count == 1

    storage.clear()
    session_manager.sync_browser_token()
    assert "localStorage.removeItem" in mock_html.call_args.args[0]


def test_read_browser_token_unquotes_cookie():
    with patch.object(session_manager.st, "context", MagicMock(cookies={"adminToken": "a%2Bb"})):
        assert session_manager.read_browser_token("adminToken") == "a+b"
