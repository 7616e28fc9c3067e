"""Identity reference collaborator: display data for participants."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from campus_board.models import UserProfile


@dataclass(frozen=True)
class DisplayInfo:
    """Public display attributes for a participant."""

    participant_id: str
    name: str | None
    avatar_url: str | None


class ProfileDirectory:
    """Resolve participant ids to display attributes.

    Backed by the ``user_profiles`` table. Participants without a profile row
    still resolve, with empty attributes, because profile setup is optional.
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def get_display_info(self, participant_id: str) -> DisplayInfo:
        profile = self._db.get(UserProfile, participant_id)
        return self._to_display_info(participant_id, profile)

    def get_many(self, participant_ids: Iterable[str]) -> dict[str, DisplayInfo]:
        """Resolve several participants with a single query."""
        wanted = set(participant_ids)
        if not wanted:
            return {}
        profiles = {
            profile.user_id: profile
            for profile in self._db.scalars(
                select(UserProfile).where(UserProfile.user_id.in_(wanted))
            )
        }
        return {pid: self._to_display_info(pid, profiles.get(pid)) for pid in wanted}

    @staticmethod
    def _to_display_info(participant_id: str, profile: UserProfile | None) -> DisplayInfo:
        if profile is None:
            return DisplayInfo(participant_id=participant_id, name=None, avatar_url=None)
        return DisplayInfo(
            participant_id=participant_id,
            name=profile.full_name,
            avatar_url=profile.avatar_url,
        )
