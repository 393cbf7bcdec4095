"""HTTP client that fetches one JSON sample per endpoint."""

import json
import threading

import requests

from api_types_gen.constants import SAMPLE_SIZE, USER_AGENT
from api_types_gen.errors import FetchError
from api_types_gen.spec.base import EndpointSpec


def sample_payload(data, sample_only: bool):
    """Keep only the first few elements of a list payload when sampling."""
    if sample_only and isinstance(data, list) and len(data) > SAMPLE_SIZE:
        return data[:SAMPLE_SIZE]
    return data


class ApiClient:
    """Fetches sample data for endpoint specs over HTTP."""

    def __init__(self, timeout: float = 30, session: requests.Session | None = None):
        self.timeout = timeout
        self._shared_session = session
        self._local = threading.local()

    @property
    def session(self) -> requests.Session:
        """Session for the calling thread; an injected session is used as-is."""
        if self._shared_session is not None:
            return self._shared_session
        if not hasattr(self._local, "session"):
            self._local.session = requests.Session()
        return self._local.session

    def fetch(self, spec: EndpointSpec) -> str:
        """Fetch one endpoint and return its body as pretty-printed JSON.

        Any status >= 400 is a failure. Transport errors and bodies that are
        not JSON are raised as FetchError prefixed with the endpoint name.
        """
        headers = {"User-Agent": USER_AGENT, **spec.headers}
        kwargs = {}
        if spec.body is not None:
            if isinstance(spec.body, str):
                kwargs["data"] = spec.body
            else:
                kwargs["json"] = spec.body

        try:
            # requests never raises on status codes unless asked to
            response = self.session.request(
                spec.method,
                spec.url,
                headers=headers,
                timeout=spec.timeout or self.timeout,
                **kwargs,
            )
            if response.status_code >= 400:
                raise FetchError(f"HTTP {response.status_code}: {response.reason}")
            data = response.json()
        except (FetchError, requests.RequestException, ValueError) as e:
            raise FetchError(f"{spec.name} fetch failed: {e}") from e

        return json.dumps(sample_payload(data, spec.sample_only), indent=2, ensure_ascii=False)
