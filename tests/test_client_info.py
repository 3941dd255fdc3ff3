"""
Tests for resolving the caller's IP behind (and without) reverse proxies.
"""

import pytest
from starlette.requests import Request

from feedbackhub.core.config import settings
from feedbackhub.utils.client_info import get_client_info

RATE_LIMITED = {"rateLimit": {"maxSubmissions": 3, "windowMinutes": 60}}


def make_request(peer="127.0.0.1", **headers):
    raw = [(name.replace("_", "-").encode(), value.encode()) for name, value in headers.items()]
    return Request({"type": "http", "headers": raw, "client": (peer, 50000) if peer else None})


@pytest.fixture
def no_trusted_proxies(monkeypatch):
    monkeypatch.setattr(settings, "TRUSTED_PROXIES", [])


class TestClientIp:
    def test_forwarded_hop_from_trusted_proxy(self):
        request = make_request(x_forwarded_for="203.0.113.5")
        assert get_client_info(request).ip_address == "203.0.113.5"

    def test_client_supplied_hops_are_ignored(self):
        request = make_request(x_forwarded_for="10.0.0.7, 203.0.113.5")
        assert get_client_info(request).ip_address == "203.0.113.5"

    def test_chained_trusted_proxies_are_skipped(self, monkeypatch):
        monkeypatch.setattr(settings, "TRUSTED_PROXIES", ["127.0.0.1", "10.1.1.1"])
        request = make_request(x_forwarded_for="198.51.100.3, 203.0.113.5, 10.1.1.1")
        assert get_client_info(request).ip_address == "203.0.113.5"

    def test_real_ip_from_trusted_proxy(self):
        request = make_request(x_real_ip="203.0.113.9")
        assert get_client_info(request).ip_address == "203.0.113.9"

    def test_headers_ignored_from_untrusted_peer(self, no_trusted_proxies):
        request = make_request(peer="192.0.2.44", x_forwarded_for="203.0.113.5", x_real_ip="203.0.113.9")
        assert get_client_info(request).ip_address == "192.0.2.44"

    def test_no_peer_is_unknown(self):
        request = make_request(peer=None)
        info = get_client_info(request)
        assert info.ip_address == "unknown"
        assert info.user_agent == "unknown"


class TestSpoofedForwardedFor:
    async def test_rotating_first_hop_does_not_escape_rate_limit(self, submit, make_website):
        site, api_key = await make_website(settings=RATE_LIMITED)
        statuses = [
            (await submit(site.id, api_key, ip=f"10.0.0.{i}, 203.0.113.10")).status_code
            for i in range(6)
        ]
        assert statuses == [201, 201, 201, 429, 429, 429]

    async def test_untrusted_peer_cannot_pick_its_address(self, submit, make_website, no_trusted_proxies):
        site, api_key = await make_website(settings=RATE_LIMITED)
        statuses = [(await submit(site.id, api_key, ip=f"203.0.113.{i}")).status_code for i in range(5)]
        assert statuses == [201, 201, 201, 429, 429]
