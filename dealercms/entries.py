"""Creating and updating the entries of a dealer's question-and-answer content."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Union

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from dealercms.default_qa import create_default_qas
from dealercms.models import Answer, Dealer, Entry, Question, Topic, get_or_create

INVALID_BODY = "Invalid JSON body"
MISSING_FIELDS = "Missing or invalid fields"

_ZERO: dict[type, Any] = {int: 0, str: "", bool: False, dict: None}


class RequestError(Exception):
    """A request that cannot be served; ``status`` is the HTTP status to answer with."""

    def __init__(self, message: str, status: int = 400) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


def _parse(body: Any, spec: Mapping[str, type]) -> dict[str, Any]:
    """Read typed fields from a JSON body, using zero values for absent ones."""
    if not isinstance(body, Mapping):
        raise RequestError(INVALID_BODY)
    values: dict[str, Any] = {}
    for name, kind in spec.items():
        value = body.get(name)
        if value is None:
            values[name] = _ZERO[kind]
            continue
        if kind is int:
            valid = isinstance(value, int) and not isinstance(value, bool) and value >= 0
        else:
            valid = isinstance(value, kind)
        if not valid:
            raise RequestError(INVALID_BODY)
        values[name] = value
    return values


def require_fields(body: Any, names) -> tuple:
    """Return the named fields of ``body``; raise if any is absent, zero or empty."""
    if not isinstance(body, Mapping):
        raise RequestError(INVALID_BODY)
    if any(not body.get(name) for name in names):
        raise RequestError(MISSING_FIELDS)
    return tuple(body[name] for name in names)


def _live_entry(session: Session, entry_id: int) -> Entry:
    entry = session.get(Entry, entry_id)
    if entry is None or entry.deleted_at is not None:
        raise RequestError(f"Entry {entry_id} not found", status=404)
    return entry


def post_answer(session: Session, body: Any) -> list[Entry]:
    """Give an entry a new answer, or with ``Update`` every entry of the dealer
    sharing its question. Returns the entries that were changed."""
    values = _parse(body, {"EntryID": int, "Answer": str, "Update": bool})
    entry_id, text = require_fields(values, ("EntryID", "Answer"))

    row = _live_entry(session, entry_id)
    answer = get_or_create(session, Answer, {"custom": True}, answer=text)

    if values["Update"]:
        stmt = select(Entry).where(
            Entry.dealer_id == row.dealer_id, Entry.deleted_at.is_(None)
        )
        if row.question_id is not None:
            stmt = stmt.where(Entry.question_id == row.question_id)
        targets = list(session.scalars(stmt.order_by(Entry.id)))
    else:
        targets = [row]

    for entry in targets:
        entry.answer = answer
    session.flush()
    return targets


def post_dealer(session: Session, body: Any, qa_path: Union[str, Path]) -> Dealer:
    """Create a dealer and fill its content from the default QA file."""
    values = _parse(
        body,
        {"DealerName": str, "SalesforceID": str, "Metadata": dict, "GroupID": int},
    )
    name, salesforce_id, group_id = require_fields(
        values, ("DealerName", "SalesforceID", "GroupID")
    )

    dealer = Dealer(dealer_name=name, salesforce_id=salesforce_id)
    session.add(dealer)
    session.flush()

    try:
        create_default_qas(session, dealer.id, group_id, qa_path)
    except LookupError as exc:
        raise RequestError(str(exc)) from exc
    return dealer


def post_question(session: Session, body: Any) -> Entry:
    """Add a question to a dealer's topic, reusing a matching question if any."""
    values = _parse(
        body,
        {
            "DealerID": int,
            "ProductID": int,
            "GroupID": int,
            "TopicID": int,
            "Question": str,
        },
    )
    dealer_id, product_id, group_id, topic_id, text = require_fields(
        values, ("DealerID", "ProductID", "GroupID", "TopicID", "Question")
    )

    question = get_or_create(session, Question, {"custom": True}, question=text)
    entry = Entry(
        dealer_id=dealer_id,
        group_id=group_id,
        product_id=product_id,
        topic_id=topic_id,
        question=question,
    )
    session.add(entry)
    try:
        session.flush()
    except IntegrityError as exc:
        session.rollback()
        raise RequestError(str(exc.orig), status=422) from exc
    return entry


def post_topic(session: Session, body: Any) -> Entry:
    """Add a topic to a dealer's group, reusing a matching topic if any."""
    values = _parse(
        body,
        {"DealerID": int, "ProductID": int, "GroupID": int, "TopicName": str},
    )
    dealer_id, product_id, group_id, topic_name = require_fields(
        values, ("DealerID", "ProductID", "GroupID", "TopicName")
    )

    topic = get_or_create(session, Topic, {"custom": True}, topic_name=topic_name)
    entry = Entry(
        dealer_id=dealer_id,
        group_id=group_id,
        product_id=product_id,
        topic=topic,
    )
    session.add(entry)
    session.flush()
    return entry