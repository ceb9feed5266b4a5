from unittest.mock import MagicMock, patch

import requests

import inspect_api


@patch("inspect_api.get_config", return_value={"API_BASE_URL": "https://api.example.com/api"})
@patch("requests.get", side_effect=requests.ConnectionError("refused"))
def test_check_backend_reports_unreachable_health(mock_get, _mock_config):
    assert inspect_api.check_backend() == 1
    assert mock_get.call_args.args[0] == "https://api.example.com/health"


@patch("inspect_api.get_config")
@patch("requests.get")
def test_check_backend_checks_given_token(mock_get, mock_config):
    mock_config.return_value = {"API_BASE_URL": "https://api.example.com/api", "ADMIN_TOKEN": "abc"}
    mock_get.side_effect = [MagicMock(status_code=200), MagicMock(status_code=401)]

    assert inspect_api.check_backend() == 0

    users_call = mock_get.call_args_list[1]
    assert users_call.args[0] == "https://api.example.com/api/admin/users"
    assert users_call.kwargs["headers"] == {"Authorization": "Bearer abc"}


@patch("inspect_api.get_config", return_value={"API_BASE_URL": "https://api.example.com/api"})
@patch("requests.get", return_value=MagicMock(status_code=200))
def test_check_backend_without_token_only_probes(mock_get, _mock_config, monkeypatch):
    monkeypatch.delenv("ADMIN_TOKEN", raising=False)
    assert inspect_api.check_backend() == 0
    mock_get.assert_called_once()
