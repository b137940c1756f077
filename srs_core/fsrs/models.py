"""
SQLAlchemy ORM Models for the Card Store

Defines the persisted card scheduling state and the append-only review log.
"""

from sqlalchemy import Boolean, Column, DateTime, Float, Integer, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class CardRecord(Base):
    """
    Persistent scheduling state for a single card.

    `version` is bumped on every write and checked on update, so two
    review sessions racing on the same card cannot both commit.
    """
    __tablename__ = 'cards'

    id = Column(String(255), primary_key=True, nullable=False)
    user_id = Column(String(255), nullable=False, index=True)

    # Scheduling state
    due = Column(DateTime(timezone=True), nullable=False, index=True)
    stability = Column(Float, nullable=False)
    difficulty = Column(Float, nullable=False)
    repetitions = Column(Integer, nullable=False, default=0)
    lapses = Column(Integer, nullable=False, default=0)
    state = Column(String(20), nullable=False)  # CardPhase value
    last_review = Column(DateTime(timezone=True), nullable=True)

    # Set from the mastery classifier after each review
    is_mastered = Column(Boolean, nullable=False, default=False)

    version = Column(Integer, nullable=False, default=1)

    def __repr__(self):
        return f"<CardRecord({self.user_id}, {self.id}, state={self.state})>"


class ReviewLogEntry(Base):
    """
    Log entry for a single completed review.

    Feeds the analytics (streaks, activity heatmap).
    """
    __tablename__ = 'study_logs'

    id = Column(Integer, primary_key=True, autoincrement=True)

    user_id = Column(String(255), nullable=False, index=True)
    card_id = Column(String(255), nullable=False, index=True)

    grade = Column(String(20), nullable=False)  # Grade value
    reviewed_at = Column(DateTime(timezone=True), nullable=False)

    # Timing at review
    elapsed_days = Column(Float, nullable=False)
    retrievability_before = Column(Float, nullable=True)  # None on first review

    # State after review
    scheduled_days = Column(Float, nullable=False)
    stability_after = Column(Float, nullable=False)
    difficulty_after = Column(Float, nullable=False)
    state_after = Column(String(20), nullable=False)

    def __repr__(self):
        return f"<ReviewLogEntry(id={self.id}, card={self.card_id}, grade={self.grade})>"
