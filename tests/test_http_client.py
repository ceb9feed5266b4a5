from unittest.mock import MagicMock, patch

import pytest
import requests

from infrastructure.api.errors import ApiUnavailableError, ApiValidationError, AuthorizationError
from infrastructure.api.http_client import ApiClient
from infrastructure.storage.token_storage import InMemoryTokenStorage


def make_response(status_code, body=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.content = b"{}" if body is not None else b""
    if body is None:
        resp.json.side_effect = ValueError("no body")
    else:
        resp.json.return_value = body
    return resp


@pytest.fixture
def storage():
    return InMemoryTokenStorage()


@pytest.fixture
def client(storage):
    return ApiClient(
        "https://api.example.com/api/",
        storage,
        health_url="https://api.example.com/health",
        on_unauthorized=MagicMock(),
    )


@patch("requests.request")
def test_send_attaches_bearer_header_when_token_present(mock_request, client, storage):
    storage.set("abc")
    mock_request.return_value = make_response(200, [])

    client.send("GET", "/admin/users")

    args, kwargs = mock_request.call_args
    assert args == ("GET", "https://api.example.com/api/admin/users")
    assert kwargs["headers"]["Authorization"] == "Bearer abc"
    assert kwargs["timeout"] == 15.0


@patch("requests.request")
def test_send_without_token_has_no_authorization(mock_request, client):
    mock_request.return_value = make_response(200, [])

    client.send("GET", "/admin/users")

    assert "Authorization" not in mock_request.call_args.kwargs["headers"]


@patch("requests.request")
def test_unauthenticated_call_skips_header_even_with_token(mock_request, client, storage):
    storage.set("abc")
    mock_request.return_value = make_response(200, {"token": "x"})

    client.send("POST", "/admin/login", json={"email": "a", "password": "b"}, authenticated=False)

    kwargs = mock_request.call_args.kwargs
    assert "Authorization" not in kwargs["headers"]
    assert kwargs["json"] == {"email": "a", "password": "b"}


@patch("requests.request")
def test_401_triggers_eviction_hook_with_used_token(mock_request, client, storage):
    storage.set("abc")
    mock_request.return_value = make_response(401, {"message": "jwt expired"})

    with pytest.raises(AuthorizationError) as excinfo:
        client.send("GET", "/admin/projects")

    client.on_unauthorized.assert_called_once_with("abc")
    assert excinfo.value.kind == "authorization"
    assert excinfo.value.status_code == 401


@patch("requests.request")
def test_401_on_login_does_not_evict(mock_request, client):
    mock_request.return_value = make_response(401, {"message": "Invalid credentials"})

    with pytest.raises(AuthorizationError):
        client.send("POST", "/admin/login", json={}, authenticated=False)

    client.on_unauthorized.assert_not_called()


@patch("requests.request")
def test_other_4xx_is_validation_error_with_server_message(mock_request, client):
    mock_request.return_value = make_response(400, {"message": "Email already exists"})

    with pytest.raises(ApiValidationError) as excinfo:
        client.send("POST", "/admin/users", json={})

    assert excinfo.value.message == "Email already exists"
    assert excinfo.value.status_code == 400
    client.on_unauthorized.assert_not_called()


@patch("requests.request")
def test_5xx_is_unavailable(mock_request, client):
    mock_request.return_value = make_response(503)

    with pytest.raises(ApiUnavailableError) as excinfo:
        client.send("GET", "/admin/users")

    assert excinfo.value.status_code == 503
    client.on_unauthorized.assert_not_called()


@patch("requests.request")
def test_timeout_is_unavailable(mock_request, client):
    mock_request.side_effect = requests.Timeout("slow")

    with pytest.raises(ApiUnavailableError):
        client.send("GET", "/admin/users")


@patch("requests.request")
def test_connection_error_is_unavailable(mock_request, client):
    mock_request.side_effect = requests.ConnectionError("refused")

    with pytest.raises(ApiUnavailableError):
        client.send("GET", "/admin/users")


@patch("requests.get")
def test_probe_online_on_200(mock_get, client):
    mock_get.return_value = make_response(200, {"status": "ok"})

    assert client.check_server_status() is True
    mock_get.assert_called_once_with("https://api.example.com/health", timeout=3.0)


@patch("requests.get")
def test_probe_offline_on_non_200(mock_get, client):
    mock_get.return_value = make_response(500)
    assert client.check_server_status() is False


@patch("requests.get")
def test_probe_offline_on_timeout(mock_get, client):
    mock_get.side_effect = requests.Timeout("3s")
    assert client.check_server_status() is False


@patch("requests.get")
def test_probe_sends_no_credentials(mock_get, client, storage):
    storage.set("abc")
    mock_get.return_value = make_response(200, {})

    client.check_server_status()

    assert "headers" not in mock_get.call_args.kwargs
