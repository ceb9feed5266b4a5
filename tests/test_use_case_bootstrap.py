from unittest.mock import MagicMock, patch

from infrastructure.settings import ApiSettings
from infrastructure.storage.token_storage import InMemoryTokenStorage
from use_cases import bootstrap


def make_settings(**overrides):
    values = dict(
        base_url="https://api.example.com/api",
        health_url="https://api.example.com/health",
        timeout=15.0,
        health_timeout=3.0,
        flash_ttl=3.0,
    )
    values.update(overrides)
    return ApiSettings(**values)


def test_build_context_wires_eviction_hook_to_gate() -> None:
    ctx = bootstrap.build_context(make_settings(), storage=InMemoryTokenStorage("abc"))

    assert ctx.client.on_unauthorized == ctx.gate.evict
    assert ctx.client.timeout == 15.0
    assert ctx.client.health_timeout == 3.0
    assert ctx.view("users").ttl == 3.0


def test_view_states_are_dropped_when_session_closes() -> None:
    ctx = bootstrap.build_context(make_settings(), storage=InMemoryTokenStorage("abc"))
    with patch("requests.get", return_value=MagicMock(status_code=200)):
        ctx.gate.initialize()
    ctx.view("users").begin(ctx.gate.generation)

    ctx.gate.evict("abc")

    assert ctx.view_states == {}


@patch("use_cases.bootstrap.build_context")
def test_run_startup_builds_context_and_initializes_gate_once(mock_build) -> None:
    bootstrap.session_manager.st.session_state.clear()
    ctx = MagicMock()
    ctx.gate.initialized = False
    mock_build.return_value = ctx

    with patch.object(bootstrap.session_manager.st, "spinner"):
        result = bootstrap.run_startup()

    assert result.status == "CONTINUE"
    assert result.planned_steps == ("init_session_state", "build_context", "initialize_gate")
    ctx.gate.initialize.assert_called_once()
    assert bootstrap.session_manager.st.session_state.admin_ctx is ctx


@patch("use_cases.bootstrap.build_context")
def test_run_startup_reuses_context_on_rerun(mock_build) -> None:
    bootstrap.session_manager.st.session_state.clear()
    ctx = MagicMock()
    ctx.gate.initialized = True
    bootstrap.session_manager.st.session_state.admin_ctx = ctx

    result = bootstrap.run_startup()

    assert result.planned_steps == ("init_session_state",)
    mock_build.assert_not_called()
    ctx.gate.initialize.assert_not_called()
