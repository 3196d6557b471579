"""Loading default question-and-answer content and attaching it to a dealer."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

from sqlalchemy.orm import Session

from dealercms.models import (
    Answer,
    Dealer,
    Entry,
    Group,
    Product,
    Question,
    Topic,
    get_or_create,
)


@dataclass(frozen=True)
class DefaultQuestion:
    answer: str = ""
    question: str = ""


@dataclass(frozen=True)
class DefaultTopic:
    label: str = ""
    questions: list[DefaultQuestion] = field(default_factory=list)


@dataclass(frozen=True)
class DefaultQAElement:
    product: str = ""
    topics: list[DefaultTopic] = field(default_factory=list)


def _string(obj: dict, key: str) -> str:
    value = obj.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string")
    return value


def _objects(value: Any, what: str) -> list[dict]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, dict) for v in value):
        raise ValueError(f"{what} must be a list of objects")
    return value


def parse_default_qa(data: Union[str, bytes]) -> list[DefaultQAElement]:
    """Parse default QA JSON text into its dataclasses."""
    payload = json.loads(data)
    return [
        DefaultQAElement(
            product=_string(element, "product"),
            topics=[
                DefaultTopic(
                    label=_string(topic, "label"),
                    questions=[
                        DefaultQuestion(
                            answer=_string(qa, "answer"),
                            question=_string(qa, "question"),
                        )
                        for qa in _objects(topic.get("questions"), "questions")
                    ],
                )
                for topic in _objects(element.get("topics"), "topics")
            ],
        )
        for element in _objects(payload, "default QA document")
    ]


def load_default_qa(path: Union[str, Path]) -> list[DefaultQAElement]:
    """Read and parse a default QA JSON file."""
    return parse_default_qa(Path(path).read_bytes())


def _live(session: Session, model, ident: int):
    record = session.get(model, ident)
    if record is None or record.deleted_at is not None:
        raise LookupError(f"{model.__name__} {ident} not found")
    return record


def create_default_qas(
    session: Session, dealer_id: int, group_id: int, path: Union[str, Path]
) -> list[Entry]:
    """Create an entry for every default question for the dealer in the group."""
    dealer = _live(session, Dealer, dealer_id)
    group = _live(session, Group, group_id)
    payload = load_default_qa(path)

    entries = []
    for element in payload:
        product = get_or_create(session, Product, None, product_name=element.product)
        for default_topic in element.topics:
            topic = get_or_create(session, Topic, None, topic_name=default_topic.label)
            for qa in default_topic.questions:
                question = get_or_create(session, Question, None, question=qa.question)
                answer = get_or_create(session, Answer, None, answer=qa.answer)
                entry = Entry(
                    dealer=dealer,
                    group=group,
                    product=product,
                    topic=topic,
                    question=question,
                    answer=answer,
                )
                session.add(entry)
                entries.append(entry)
    session.flush()
    return entries