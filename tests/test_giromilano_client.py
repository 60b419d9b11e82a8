from __future__ import annotations

from typing import Any
from unittest.mock import Mock, patch

import pytest
import requests

from tramfinder.data.giromilano_client import GiroMilanoClient, GiroMilanoClientError


@pytest.fixture()
def giromilano_client() -> GiroMilanoClient:
    return GiroMilanoClient("https://example.test/api", timeout_seconds=3)


def _mock_response(status_code: int, json_data: Any = None, text: str = "") -> Mock:
    response = Mock()
    response.status_code = status_code
    response.text = text
    if json_data is not None:
        response.json.return_value = json_data
    else:
        response.json.side_effect = ValueError("Invalid JSON")
    return response


def _summary(*entries: tuple[str, str]) -> dict[str, Any]:
    return {
        "Lines": [
            {"Line": {"LineCode": code}, "WaitMessage": message} for code, message in entries
        ]
    }


def test_get_line_summary_returns_lines(giromilano_client: GiroMilanoClient) -> None:
    response = _mock_response(200, _summary(("15", "5 min")))
    with patch("requests.get", return_value=response) as mock_get:
        lines = giromilano_client.get_line_summary("15371")

    assert lines == [{"Line": {"LineCode": "15"}, "WaitMessage": "5 min"}]
    mock_get.assert_called_once()
    args, kwargs = mock_get.call_args
    assert args[0] == "https://example.test/api/tpl/stops/15371/linesummary"
    assert kwargs["timeout"] == 3
    assert kwargs["headers"]["Accept"] == "application/json"


def test_get_wait_minutes_selects_requested_line(giromilano_client: GiroMilanoClient) -> None:
    response = _mock_response(200, _summary(("3", "12 min"), ("15", "4 min")))
    with patch("requests.get", return_value=response):
        assert giromilano_client.get_wait_minutes("15371", "15") == 4


def test_get_wait_minutes_arriving(giromilano_client: GiroMilanoClient) -> None:
    response = _mock_response(200, _summary(("15", "in arrivo")))
    with patch("requests.get", return_value=response):
        assert giromilano_client.get_wait_minutes("15371", "15") == 1


def test_get_wait_minutes_line_not_listed(giromilano_client: GiroMilanoClient) -> None:
    response = _mock_response(200, _summary(("3", "2 min")))
    with patch("requests.get", return_value=response):
        assert giromilano_client.get_wait_minutes("15371", "15") is None


def test_get_wait_minutes_missing_lines_key(giromilano_client: GiroMilanoClient) -> None:
    response = _mock_response(200, {"Something": "else"})
    with patch("requests.get", return_value=response):
        assert giromilano_client.get_wait_minutes("15371", "15") is None


def test_get_wait_minutes_malformed_payload(giromilano_client: GiroMilanoClient) -> None:
    response = _mock_response(200, ["not", "a", "mapping"])
    with patch("requests.get", return_value=response):
        assert giromilano_client.get_wait_minutes("15371", "15") is None


def test_get_wait_minutes_degrades_on_http_error(giromilano_client: GiroMilanoClient) -> None:
    response = _mock_response(503, None, text="Unavailable")
    with patch("requests.get", return_value=response):
        assert giromilano_client.get_wait_minutes("15371", "15") is None


def test_get_wait_minutes_degrades_on_timeout(giromilano_client: GiroMilanoClient) -> None:
    with patch("requests.get", side_effect=requests.exceptions.Timeout("slow")):
        assert giromilano_client.get_wait_minutes("15371", "15") is None


def test_non_200_raises_client_error(giromilano_client: GiroMilanoClient) -> None:
    response = _mock_response(404, {"error": "Not found"}, text="Not found")
    with patch("requests.get", return_value=response):
        with pytest.raises(GiroMilanoClientError) as exc_info:
            giromilano_client.get_line_summary("15371")

    assert "404" in str(exc_info.value)


def test_network_error_raises_client_error(giromilano_client: GiroMilanoClient) -> None:
    with patch("requests.get", side_effect=requests.exceptions.ConnectionError("boom")):
        with pytest.raises(GiroMilanoClientError):
            giromilano_client.get_line_summary("15371")


def test_invalid_json_raises_client_error(giromilano_client: GiroMilanoClient) -> None:
    response = _mock_response(200, None)
    with patch("requests.get", return_value=response):
        with pytest.raises(GiroMilanoClientError):
            giromilano_client.get_line_summary("15371")
