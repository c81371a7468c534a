import os

import pytest
import requests

MS_URL = os.getenv("MS_URL", "http://localhost:8000")
E2E_AUTH_TOKEN = os.getenv("E2E_AUTH_TOKEN")


class Client:
    def __init__(self, token=None):
        self.headers = {"Authorization": f"Bearer {token}"} if token else {}

    def _url(self, path):
        assert path[0] == "/", "URL must start with /"
        return f"{MS_URL}{path}"

    def get(self, url, **kwargs):
        return requests.get(self._url(url), headers=self.headers, timeout=15, **kwargs)

    def post(self, url, data):
        return requests.post(
            self._url(url), json=data, headers=self.headers, timeout=15
        )

    def options(self, url):
        return requests.options(self._url(url), timeout=15)


@pytest.fixture(scope="session")
def client():
    return Client()


@pytest.fixture(scope="session")
def authed_client():
    if not E2E_AUTH_TOKEN:
        pytest.skip("E2E_AUTH_TOKEN not set")
    return Client(E2E_AUTH_TOKEN)
