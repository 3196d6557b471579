import pytest
from sqlalchemy import create_engine, select
from sqlalchemy.orm import Session

from dealercms.copying import SAME_TARGET, copy_group_to_product, copy_topic_to_group
from dealercms.entries import INVALID_BODY, MISSING_FIELDS, RequestError
from dealercms.models import (
    Answer,
    Base,
    Dealer,
    Entry,
    Group,
    Product,
    Question,
    Topic,
    get_or_create,
    seed_defaults,
)


@pytest.fixture
def session():
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    with Session(engine) as s:
        seed_defaults(s)
        yield s


def _first_ids(session, model, count):
    return [r.id for r in session.scalars(select(model).order_by(model.id)).all()[:count]]


@pytest.fixture
def world(session):
    dealer = Dealer(dealer_name="Acme Motors", salesforce_id="SF-0000")
    other = Dealer(dealer_name="Other Motors", salesforce_id="SF-0001")
    session.add_all([dealer, other])
    session.flush()
    products = _first_ids(session, Product, 2)
    groups = _first_ids(session, Group, 2)
    topics = _first_ids(session, Topic, 2)

    def entry(dealer_id, product_id, group_id, topic_id, text):
        q = get_or_create(session, Question, None, question=text)
        a = get_or_create(session, Answer, None, answer=text + " answer")
        e = Entry(
            dealer_id=dealer_id,
            product_id=product_id,
            group_id=group_id,
            topic_id=topic_id,
            question=q,
            answer=a,
        )
        session.add(e)
        session.flush()
        return e

    originals = [
        entry(dealer.id, products[0], groups[0], topics[0], "q1"),
        entry(dealer.id, products[0], groups[0], topics[0], "q2"),
        entry(dealer.id, products[0], groups[0], topics[1], "q3"),
        entry(other.id, products[0], groups[0], topics[0], "q4"),
    ]
    return {
        "dealer": dealer.id,
        "other": other.id,
        "products": products,
        "groups": groups,
        "topics": topics,
        "entries": originals,
    }


def test_copy_topic_to_group_copies_only_matching_entries(session, world):
    body = {
        "DealerID": world["dealer"],
        "ProductID": world["products"][0],
        "GroupID": world["groups"][0],
        "TopicID": world["topics"][0],
        "NewGroupID": world["groups"][1],
    }
    copies = copy_topic_to_group(session, body)
    originals = world["entries"][:2]
    assert len(copies) == 2
    assert [c.group_id for c in copies] == [world["groups"][1]] * 2
    assert [c.question_id for c in copies] == [o.question_id for o in originals]
    assert [c.answer_id for c in copies] == [o.answer_id for o in originals]
    assert all(c.dealer_id == world["dealer"] for c in copies)
    assert all(c.topic_id == world["topics"][0] for c in copies)
    assert session.query(Entry).count() == len(world["entries"]) + 2


def test_copy_topic_leaves_originals_untouched(session, world):
    body = {
        "DealerID": world["dealer"],
        "ProductID": world["products"][0],
        "GroupID": world["groups"][0],
        "TopicID": world["topics"][0],
        "NewGroupID": world["groups"][1],
    }
    copies = copy_topic_to_group(session, body)
    assert {c.id for c in copies}.isdisjoint({e.id for e in world["entries"]})
    assert all(e.group_id == world["groups"][0] for e in world["entries"])


def test_copy_topic_to_same_group_is_refused(session, world):
    body = {
        "DealerID": world["dealer"],
        "ProductID": world["products"][0],
        "GroupID": world["groups"][0],
        "TopicID": world["topics"][0],
        "NewGroupID": world["groups"][0],
    }
    with pytest.raises(RequestError) as info:
        copy_topic_to_group(session, body)
    assert info.value.message == SAME_TARGET
    assert info.value.status == 400


def test_copy_topic_missing_field(session, world):
    body = {"DealerID": world["dealer"], "ProductID": 1, "GroupID": 1, "TopicID": 1}
    with pytest.raises(RequestError) as info:
        copy_topic_to_group(session, body)
    assert info.value.message == MISSING_FIELDS


@pytest.mark.parametrize("body", [None, [], "text", {"DealerID": "one"}, {"DealerID": True}])
def test_copy_topic_invalid_body(session, body):
    with pytest.raises(RequestError) as info:
        copy_topic_to_group(session, body)
    assert info.value.message == INVALID_BODY


def test_copy_group_to_product_copies_all_topics(session, world):
    body = {
        "DealerID": world["dealer"],
        "ProductID": world["products"][0],
        "GroupID": world["groups"][0],
        "NewProductID": world["products"][1],
    }
    copies = copy_group_to_product(session, body)
    originals = world["entries"][:3]
    assert len(copies) == 3
    assert all(c.product_id == world["products"][1] for c in copies)
    assert [c.topic_id for c in copies] == [o.topic_id for o in originals]
    assert [c.group_id for c in copies] == [o.group_id for o in originals]
    assert all(c.dealer_id == world["dealer"] for c in copies)


def test_copy_group_to_same_product_is_refused(session, world):
    body = {
        "DealerID": world["dealer"],
        "ProductID": world["products"][0],
        "GroupID": world["groups"][0],
        "NewProductID": world["products"][0],
    }
    with pytest.raises(RequestError) as info:
        copy_group_to_product(session, body)
    assert info.value.message == SAME_TARGET


def test_copy_group_zero_id_is_missing(session, world):
    body = {"DealerID": 0, "ProductID": 1, "GroupID": 1, "NewProductID": 2}
    with pytest.raises(RequestError) as info:
        copy_group_to_product(session, body)
    assert info.value.message == MISSING_FIELDS


def test_copy_with_no_matching_entries_returns_empty(session, world):
    body = {
        "DealerID": world["dealer"],
        "ProductID": world["products"][1],
        "GroupID": world["groups"][1],
        "NewProductID": world["products"][0],
    }
    assert copy_group_to_product(session, body) == []
    assert session.query(Entry).count() == len(world["entries"])