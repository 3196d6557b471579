"""Database schema and seed data for dealer question-and-answer content."""

from __future__ import annotations

import enum
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import JSON, DateTime, ForeignKey, String, create_engine, select
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    Session,
    mapped_column,
    relationship,
    sessionmaker,
)

DEFAULT_DATABASE_URL = "sqlite:///dealercms.db"


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Declarative base for every table."""


class _ModelMixin:
    """Primary key, timestamps and soft-delete marker shared by all tables."""

    id: Mapped[int] = mapped_column(primary_key=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_now, onupdate=_now
    )
    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True
    )


class ProductName(str, enum.Enum):
    CHAT_AI = "Chat AI"
    CAR_BUYING_AI = "Car Buying AI"
    SALES_AI = "Sales AI"
    SERVICE_AI = "Service AI"


class GroupName(str, enum.Enum):
    CAR_BUYING = "Car Buying"
    SALES = "Sales"
    SERVICE = "Service"
    UPSELL = "Upsell"


class GroupType(str, enum.Enum):
    SEGMENT = "Segment"


class Locale(str, enum.Enum):
    EN = "EN"
    ES = "ES"
    FR = "FR"


class Dealer(_ModelMixin, Base):
    __tablename__ = "dealers"

    salesforce_id: Mapped[str] = mapped_column(String, default="")
    dealer_name: Mapped[str] = mapped_column(String, default="")
    dealer_metadata: Mapped[Optional[dict[str, Any]]] = mapped_column(
        "metadata", JSON, nullable=True
    )


class Product(_ModelMixin, Base):
    __tablename__ = "products"

    product_name: Mapped[str] = mapped_column(String, unique=True)


class Group(_ModelMixin, Base):
    """A segment of content; the only table meant to carry bilingual content."""

    __tablename__ = "groups"

    group_name: Mapped[str] = mapped_column(String, unique=True)
    group_type: Mapped[str] = mapped_column(String, default=GroupType.SEGMENT.value)


class Topic(_ModelMixin, Base):
    __tablename__ = "topics"

    topic_name: Mapped[str] = mapped_column(String, unique=True)
    custom: Mapped[bool] = mapped_column(default=False)


class Question(_ModelMixin, Base):
    __tablename__ = "questions"

    question: Mapped[str] = mapped_column(String, default="")
    custom: Mapped[bool] = mapped_column(default=False)


class Answer(_ModelMixin, Base):
    __tablename__ = "answers"

    answer: Mapped[str] = mapped_column(String, default="")
    custom: Mapped[bool] = mapped_column(default=False)


class Entry(_ModelMixin, Base):
    """One question-and-answer row of a dealer's content."""

    __tablename__ = "entries"

    locale: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    dealer_id: Mapped[int] = mapped_column(ForeignKey("dealers.id"))
    group_id: Mapped[int] = mapped_column(ForeignKey("groups.id"))
    product_id: Mapped[int] = mapped_column(ForeignKey("products.id"))
    topic_id: Mapped[int] = mapped_column(ForeignKey("topics.id"))
    question_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("questions.id"), nullable=True
    )
    answer_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("answers.id"), nullable=True
    )

    dealer: Mapped[Dealer] = relationship()
    group: Mapped[Group] = relationship()
    product: Mapped[Product] = relationship()
    topic: Mapped[Topic] = relationship()
    question: Mapped[Optional[Question]] = relationship()
    answer: Mapped[Optional[Answer]] = relationship()


DEFAULT_TOPICS = (
    "Financing",
    "Trade-In",
    "Discounts, promotions",
    "Taxes and Fees",
    "Price Negotiation",
    "Hold Car / Deposit",
    "Test drive at home",
    "Shipping",
    "Warranty",
    "General information about dealership",
    "Leasing, Custom",
    "Selling the car",
    "Info about AI assistant",
    "Dealership policies",
    "Insuranc",
    "Service",
)


def get_or_create(session: Session, model: type[Base], defaults=None, **kwargs):
    """Return the first live row matching ``kwargs``, creating it if absent.

    ``defaults`` supplies extra attributes used only when a row is created.
    """
    stmt = (
        select(model)
        .filter_by(**kwargs)
        .where(model.deleted_at.is_(None))
        .order_by(model.id)
        .limit(1)
    )
    instance = session.scalars(stmt).first()
    if instance is None:
        instance = model(**{**(defaults or {}), **kwargs})
        session.add(instance)
        session.flush()
    return instance


def seed_defaults(session: Session) -> None:
    """Ensure the standard products, groups and topics exist."""
    for product in ProductName:
        get_or_create(session, Product, None, product_name=product.value)
    for group in GroupName:
        get_or_create(
            session,
            Group,
            {"group_type": GroupType.SEGMENT.value},
            group_name=group.value,
        )
    for topic_name in DEFAULT_TOPICS:
        get_or_create(session, Topic, {"custom": False}, topic_name=topic_name)
    session.flush()


def initialize(url: str = DEFAULT_DATABASE_URL) -> sessionmaker:
    """Create the schema, seed default data and return a session factory."""
    engine = create_engine(url)
    Base.metadata.create_all(engine)
    factory = sessionmaker(engine, expire_on_commit=False)
    with factory() as session:
        seed_defaults(session)
        session.commit()
    return factory