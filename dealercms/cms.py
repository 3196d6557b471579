"""Reading a dealer's content as a product / group / topic tree."""

from __future__ import annotations

from typing import Any, Iterable, Union

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from dealercms.models import Entry


def _ident(record) -> int:
    return record.id if record is not None else 0


def _text(record, attribute: str) -> str:
    return getattr(record, attribute) if record is not None else ""


def normalize_rows(rows: Iterable[Entry]) -> list[dict[str, Any]]:
    """Nest entries by product, group and topic, keeping first-seen order."""
    grouped: list[dict[str, Any]] = []
    products: dict[int, dict[str, Any]] = {}
    groups: dict[tuple[int, int], dict[str, Any]] = {}
    topics: dict[tuple[int, int, int], dict[str, Any]] = {}

    for row in rows:
        product_id = _ident(row.product)
        group_id = _ident(row.group)
        topic_id = _ident(row.topic)

        product = products.get(product_id)
        if product is None:
            product = {
                "ProductID": product_id,
                "ProductName": _text(row.product, "product_name"),
                "Groups": [],
            }
            products[product_id] = product
            grouped.append(product)

        group_key = (product_id, group_id)
        group = groups.get(group_key)
        if group is None:
            group = {
                "GroupID": group_id,
                "GroupName": _text(row.group, "group_name"),
                "Topics": [],
            }
            groups[group_key] = group
            product["Groups"].append(group)

        topic_key = (product_id, group_id, topic_id)
        topic = topics.get(topic_key)
        if topic is None:
            topic = {
                "TopicID": topic_id,
                "TopicName": _text(row.topic, "topic_name"),
                "QAs": [],
            }
            topics[topic_key] = topic
            group["Topics"].append(topic)

        topic["QAs"].append(
            {
                "EntryID": row.id,
                "Question": _text(row.question, "question"),
                "Answer": _text(row.answer, "answer"),
            }
        )
    return grouped


def get_cms(session: Session, dealer_id: Union[int, str]) -> list[dict[str, Any]]:
    """Return the dealer's content tree, newest entries first."""
    try:
        ident = int(dealer_id)
    except (TypeError, ValueError):
        return []

    stmt = (
        select(Entry)
        .options(
            selectinload(Entry.dealer),
            selectinload(Entry.product),
            selectinload(Entry.group),
            selectinload(Entry.topic),
            selectinload(Entry.question),
            selectinload(Entry.answer),
        )
        .where(Entry.dealer_id == ident, Entry.deleted_at.is_(None))
        .order_by(Entry.id.desc())
    )
    return normalize_rows(session.scalars(stmt).all())