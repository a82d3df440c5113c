"""SQLAlchemy ORM models."""
import uuid

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from roomgen.infrastructure.database.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


class Profile(Base):
    __tablename__ = "profiles"
    __table_args__ = (CheckConstraint("credits >= 0", name="ck_profiles_credits_non_negative"),)

    id = Column(String(36), primary_key=True, default=generate_uuid)
    email = Column(String(255), unique=True)
    credits = Column(Integer, nullable=False, default=0)
    is_pro = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    generations = relationship("Generation", back_populates="profile")
    transactions = relationship("CreditTransaction", back_populates="profile")


class Generation(Base):
    __tablename__ = "generations"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    original_image_url = Column(Text, nullable=False)
    generated_image_url = Column(Text)
    prompt = Column(Text)
    style = Column(String(50))
    room_type = Column(String(50))
    status = Column(String(20), nullable=False, default="processing", index=True)
    error_message = Column(Text)
    # provider handle, kept so an unresolved prediction can be reconciled later
    prediction_id = Column(String(100), index=True)
    model_profile = Column(String(50))
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    profile = relationship("Profile", back_populates="generations")


class CreditTransaction(Base):
    __tablename__ = "credit_transactions"
    # one debit and at most one refund per generation job
    __table_args__ = (UniqueConstraint("job_id", "type", name="uq_credit_transactions_job_type"),)

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("profiles.id"), nullable=False, index=True)
    job_id = Column(String(36), ForeignKey("generations.id"), nullable=True, index=True)
    amount = Column(Integer, nullable=False)
    type = Column(String(20), nullable=False)  # debit, refund, grant
    description = Column(String(255))
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    profile = relationship("Profile", back_populates="transactions")
    job = relationship("Generation")
