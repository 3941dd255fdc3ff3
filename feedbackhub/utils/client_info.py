from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from feedbackhub.core.config import settings


@dataclass(frozen=True)
class ClientInfo:
    ip_address: str
    user_agent: str


def _client_ip(request: Request) -> Optional[str]:
    """Resolve the caller's IP, honouring proxy headers only from trusted proxies.

    X-Forwarded-For is read right to left: every hop appended by a trusted
    proxy is skipped and the first untrusted address is the client. Entries
    to its left are whatever the client chose to send and are ignored.
    """
    peer = request.client.host if request.client else None
    trusted = set(settings.TRUSTED_PROXIES)
    if peer is None or peer not in trusted:
        return peer

    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        hops = [hop.strip() for hop in forwarded.split(",") if hop.strip()]
        for hop in reversed(hops):
            if hop not in trusted:
                return hop
        if hops:
            return hops[0]

    return request.headers.get("x-real-ip") or peer


def get_client_info(request: Request) -> ClientInfo:
    return ClientInfo(
        ip_address=_client_ip(request) or "unknown",
        user_agent=request.headers.get("user-agent") or "unknown",
    )
