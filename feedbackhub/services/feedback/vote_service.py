from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from feedbackhub.core.database import utcnow
from feedbackhub.core.errors import NotFound
from feedbackhub.core.logger import logger
from feedbackhub.models.feedback.feedback_model import FeedbackItem
from feedbackhub.models.feedback.vote_model import Vote, VoteType
from feedbackhub.schemas.feedback.vote_schema import VoteCounts, VoterIdentity, EmailVoter
from feedbackhub.services.analytics import analytics_service
from feedbackhub.utils.client_info import ClientInfo


def _delta(vote_type: VoteType, amount: int) -> dict:
    if vote_type == VoteType.up:
        return {"up": amount}
    return {"down": amount}


class VoteStore:
    """Vote rows plus the denormalized counters on the feedback item.

    Every public method either commits both the ledger change and the counter
    change, or rolls both back. Counters move by relative deltas so concurrent
    votes on the same item cannot overwrite each other.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find(self, feedback_id: int, voter: VoterIdentity) -> Optional[Vote]:
        query = select(Vote).where(Vote.feedback_id == feedback_id)
        if isinstance(voter, EmailVoter):
            query = query.where(Vote.voter_email == voter.email)
        else:
            query = query.where(Vote.voter_ip == voter.ip)
        return await self.session.scalar(query)

    async def counts(self, feedback_id: int) -> VoteCounts:
        row = (await self.session.execute(
            select(FeedbackItem.upvotes, FeedbackItem.downvotes).where(FeedbackItem.id == feedback_id)
        )).one()
        return VoteCounts(upvotes=row.upvotes, downvotes=row.downvotes)

    async def _adjust_counters(self, feedback_id: int, up: int = 0, down: int = 0) -> None:
        values = {"updated_at": utcnow()}
        if up:
            values["upvotes"] = FeedbackItem.upvotes + up
        if down:
            values["downvotes"] = FeedbackItem.downvotes + down
        await self.session.execute(
            update(FeedbackItem)
            .where(FeedbackItem.id == feedback_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )

    async def _apply_once(self, feedback_id: int, voter: VoterIdentity, vote_type: VoteType) -> VoteCounts:
        existing = await self.find(feedback_id, voter)

        if existing is None:
            self.session.add(Vote(
                feedback_id=feedback_id,
                voter_email=voter.email if isinstance(voter, EmailVoter) else None,
                voter_ip=None if isinstance(voter, EmailVoter) else voter.ip,
                vote_type=vote_type,
            ))
            await self.session.flush()
            await self._adjust_counters(feedback_id, **_delta(vote_type, 1))
        elif existing.vote_type != vote_type:
            previous = existing.vote_type
            existing.vote_type = vote_type
            await self.session.flush()
            # one UPDATE moves both counters
            await self._adjust_counters(feedback_id, **_delta(vote_type, 1), **_delta(previous, -1))

        counts = await self.counts(feedback_id)
        await self.session.commit()
        return counts

    async def apply_vote(self, feedback_id: int, voter: VoterIdentity, vote_type: VoteType) -> VoteCounts:
        """Record ``vote_type`` for ``voter``: insert, flip, or leave unchanged."""
        try:
            return await self._apply_once(feedback_id, voter, vote_type)
        except IntegrityError:
            # a concurrent request inserted this voter's row first; retry against it
            await self.session.rollback()
            logger.info("Vote race on feedback %s, retrying against existing row", feedback_id)
        except Exception:
            await self.session.rollback()
            raise

        try:
            return await self._apply_once(feedback_id, voter, vote_type)
        except Exception:
            await self.session.rollback()
            raise

    async def retract_vote(self, feedback_id: int, voter: VoterIdentity) -> VoteCounts:
        existing = await self.find(feedback_id, voter)
        if existing is None:
            raise NotFound("Vote not found")

        try:
            vote_type = existing.vote_type
            await self.session.delete(existing)
            await self.session.flush()
            await self._adjust_counters(feedback_id, **_delta(vote_type, -1))
            counts = await self.counts(feedback_id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        return counts


async def cast_vote(
    session: AsyncSession,
    feedback: FeedbackItem,
    vote_type: VoteType,
    voter: VoterIdentity,
    client: Optional[ClientInfo] = None,
) -> VoteCounts:
    feedback_id, website_id = feedback.id, feedback.website_id
    counts = await VoteStore(session).apply_vote(feedback_id, voter, vote_type)

    if client is not None:
        await analytics_service.log_event(
            session,
            website_id,
            "vote_cast",
            {"feedbackId": feedback_id, "voteType": vote_type.value, "voter": voter.kind},
            client,
        )
    return counts


async def remove_vote(session: AsyncSession, feedback: FeedbackItem, voter: VoterIdentity) -> VoteCounts:
    return await VoteStore(session).retract_vote(feedback.id, voter)
