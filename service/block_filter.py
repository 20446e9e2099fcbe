from __future__ import annotations

from typing import Optional

from models.chat import UserRecord


def is_blocked_by(user: UserRecord, candidate_uid: Optional[str]) -> bool:
    """True if ``user`` has blocked ``candidate_uid`` and must not be notified about them."""
    if candidate_uid is None:
        return False
    return candidate_uid in user.blockedUsers
