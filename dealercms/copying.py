"""Copying a dealer's entries between groups and products."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from dealercms.entries import INVALID_BODY, RequestError, require_fields
from dealercms.models import Entry

SAME_TARGET = "trying to copy to same group"


def _read_ids(body: Any, names: tuple[str, ...]) -> tuple[int, ...]:
    """Return the named non-negative integer fields, all of which must be set."""
    if not isinstance(body, Mapping):
        raise RequestError(INVALID_BODY)
    for name in names:
        value = body.get(name)
        if value is None:
            continue
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            raise RequestError(INVALID_BODY)
    return require_fields(body, names)


def _live_entries(session: Session, **criteria: int) -> list[Entry]:
    stmt = (
        select(Entry)
        .filter_by(**criteria)
        .where(Entry.deleted_at.is_(None))
        .order_by(Entry.id)
    )
    return list(session.scalars(stmt))


def _copy(session: Session, records: list[Entry], **overrides: int) -> list[Entry]:
    copies = []
    for record in records:
        fields = {
            "dealer_id": record.dealer_id,
            "product_id": record.product_id,
            "group_id": record.group_id,
            "topic_id": record.topic_id,
            "question_id": record.question_id,
            "answer_id": record.answer_id,
        }
        fields.update(overrides)
        copies.append(Entry(**fields))
    session.add_all(copies)
    session.flush()
    return copies


def copy_topic_to_group(session: Session, body: Any) -> list[Entry]:
    """Copy every entry of a dealer's topic into another group; return the copies."""
    dealer_id, product_id, group_id, topic_id, new_group_id = _read_ids(
        body, ("DealerID", "ProductID", "GroupID", "TopicID", "NewGroupID")
    )
    if group_id == new_group_id:
        raise RequestError(SAME_TARGET)

    records = _live_entries(
        session,
        dealer_id=dealer_id,
        product_id=product_id,
        group_id=group_id,
        topic_id=topic_id,
    )
    return _copy(session, records, group_id=new_group_id)


def copy_group_to_product(session: Session, body: Any) -> list[Entry]:
    """Copy every entry of a dealer's group into another product; return the copies."""
    dealer_id, product_id, group_id, new_product_id = _read_ids(
        body, ("DealerID", "ProductID", "GroupID", "NewProductID")
    )
    if product_id == new_product_id:
        raise RequestError(SAME_TARGET)

    records = _live_entries(
        session,
        dealer_id=dealer_id,
        product_id=product_id,
        group_id=group_id,
    )
    return _copy(session, records, product_id=new_product_id)