import json
import threading
from unittest.mock import MagicMock

import pytest
import requests

from api_types_gen.constants import USER_AGENT
from api_types_gen.errors import FetchError
from api_types_gen.fetch.client import ApiClient, sample_payload
from api_types_gen.spec.base import EndpointSpec


def _response(status_code=200, data=None, reason="OK"):
    response = MagicMock()
    response.status_code = status_code
    response.reason = reason
    response.json.return_value = data
    return response


def _client(response=None, side_effect=None, timeout=30):
    session = MagicMock()
    session.request.return_value = response
    session.request.side_effect = side_effect
    return ApiClient(timeout=timeout, session=session), session


class TestFetch:
    def test_returns_pretty_printed_json(self):
        client, session = _client(_response(data={"id": 1, "name": "Ada"}))
        spec = EndpointSpec(name="User", url="https://api.example.com/users/1")

        result = client.fetch(spec)

        assert result == json.dumps({"id": 1, "name": "Ada"}, indent=2)
        args, kwargs = session.request.call_args
        assert args == ("GET", "https://api.example.com/users/1")
        assert kwargs["timeout"] == 30

    def test_spec_timeout_overrides_default(self):
        client, session = _client(_response(data={}))
        client.fetch(EndpointSpec(name="User", url="https://api.example.com/u", timeout=5))
        assert session.request.call_args[1]["timeout"] == 5

    def test_headers_merge_over_default_user_agent(self):
        client, session = _client(_response(data={}))
        spec = EndpointSpec(
            name="User",
            url="https://api.example.com/u",
            headers={"User-Agent": "custom", "Authorization": "Bearer x"},
        )
        client.fetch(spec)
        headers = session.request.call_args[1]["headers"]
        assert headers == {"User-Agent": "custom", "Authorization": "Bearer x"}

    def test_default_user_agent(self):
        client, session = _client(_response(data={}))
        client.fetch(EndpointSpec(name="User", url="https://api.example.com/u"))
        assert session.request.call_args[1]["headers"] == {"User-Agent": USER_AGENT}

    def test_body_is_sent_as_json(self):
        client, session = _client(_response(data={"id": 2}))
        client.fetch(EndpointSpec(name="CreateUser", url="https://api.example.com/u", method="POST", body={"name": "Ada"}))
        args, kwargs = session.request.call_args
        assert args[0] == "POST"
        assert kwargs["json"] == {"name": "Ada"}

    def test_http_error_status(self):
        client, _ = _client(_response(status_code=404, reason="Not Found"))
        with pytest.raises(FetchError) as exc_info:
            client.fetch(EndpointSpec(name="User", url="https://api.example.com/u"))
        message = str(exc_info.value)
        assert message.startswith("User")
        assert "HTTP 404: Not Found" in message

    def test_status_below_400_is_success(self):
        client, _ = _client(_response(status_code=302, data={"ok": True}))
        assert json.loads(client.fetch(EndpointSpec(name="User", url="https://api.example.com/u"))) == {"ok": True}

    def test_transport_error_is_wrapped(self):
        client, _ = _client(side_effect=requests.ConnectionError("connection refused"))
        with pytest.raises(FetchError, match="^Users fetch failed: connection refused"):
            client.fetch(EndpointSpec(name="Users", url="https://api.example.com/u"))

    def test_timeout_is_wrapped(self):
        client, _ = _client(side_effect=requests.Timeout("read timed out"))
        with pytest.raises(FetchError, match="timed out"):
            client.fetch(EndpointSpec(name="Users", url="https://api.example.com/u"))

    def test_non_json_body(self):
        response = _response()
        response.json.side_effect = ValueError("Expecting value")
        client, _ = _client(response)
        with pytest.raises(FetchError, match="Expecting value"):
            client.fetch(EndpointSpec(name="Users", url="https://api.example.com/u"))

    def test_sample_only_truncates_long_arrays(self):
        client, _ = _client(_response(data=[{"id": i} for i in range(10)]))
        result = client.fetch(EndpointSpec(name="Users", url="https://api.example.com/u", sample_only=True))
        assert json.loads(result) == [{"id": 0}, {"id": 1}, {"id": 2}]


class TestSessions:
    def test_each_thread_gets_its_own_session(self):
        client = ApiClient()
        sessions = []
        worker = threading.Thread(target=lambda: sessions.append(client.session))
        worker.start()
        worker.join()

        assert client.session is client.session
        assert isinstance(sessions[0], requests.Session)
        assert sessions[0] is not client.session

    def test_injected_session_is_shared(self):
        session = MagicMock()
        client = ApiClient(session=session)
        seen = []
        worker = threading.Thread(target=lambda: seen.append(client.session))
        worker.start()
        worker.join()

        assert seen == [session]
        assert client.session is session


class TestSamplePayload:
    @pytest.mark.parametrize("size", [0, 1, 3])
    def test_short_arrays_are_unchanged(self, size):
        data = list(range(size))
        assert sample_payload(data, True) == sample_payload(data, False) == data

    @pytest.mark.parametrize("size", [4, 10, 100])
    def test_long_arrays_keep_three(self, size):
        assert len(sample_payload(list(range(size)), True)) == 3
        assert len(sample_payload(list(range(size)), False)) == size

    def test_objects_are_not_sampled(self):
        data = {"a": 1, "b": 2, "c": 3, "d": 4}
        assert sample_payload(data, True) == data
