"""
User lookup: the auth layer forwards a verified subject; the matching
users row is found or created on first sight.
"""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from journal.models.user import User

logger = logging.getLogger(__name__)


def get_or_create_user(db: Session, external_id: str) -> User:
    user = db.query(User).filter(User.external_id == external_id).first()
    if user is not None:
        return user

    user = User(external_id=external_id, streak_count=0, longest_streak=0)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Race condition: a concurrent request created the user first
        db.rollback()
        return db.query(User).filter(User.external_id == external_id).one()
    db.refresh(user)
    logger.info("Created user %s for subject %s", user.id, external_id)
    return user
