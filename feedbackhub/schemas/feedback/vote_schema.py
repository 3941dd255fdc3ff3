from typing import Literal, Optional, Union

from pydantic import BaseModel, EmailStr, TypeAdapter

from feedbackhub.models.feedback.vote_model import VoteType
from feedbackhub.schemas.common import CamelModel


class VoteCreate(CamelModel):
    vote_type: VoteType
    voter_email: Optional[EmailStr] = None


class VoteCounts(CamelModel):
    upvotes: int
    downvotes: int


class EmailVoter(BaseModel, frozen=True):
    kind: Literal["email"] = "email"
    email: str


class IpVoter(BaseModel, frozen=True):
    kind: Literal["ip"] = "ip"
    ip: str


VoterIdentity = Union[EmailVoter, IpVoter]


def resolve_voter(email: Optional[str], ip_address: str) -> VoterIdentity:
    """An explicit email wins; otherwise the caller is identified by IP."""
    if email:
        return EmailVoter(email=email)
    return IpVoter(ip=ip_address)


_email_adapter = TypeAdapter(EmailStr)


def parse_voter_email(value: Optional[str]) -> Optional[str]:
    """Normalize a header-supplied email the same way request bodies are."""
    if not value:
        return None
    return _email_adapter.validate_python(value)
