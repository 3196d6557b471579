# dealercms

A small HTTP service for keeping each dealer's question-and-answer content.
Every entry ties a dealer to a product, a group, a topic, and optionally a
question and an answer. The service can seed a new dealer with default
content, add topics and questions, change answers, and copy content from one
group or product to another.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running the server

```
dealercms
```

Options (see `dealercms --help`):

| Option       | Default                          | Meaning                       |
|--------------|----------------------------------|-------------------------------|
| `--database` | `sqlite:///dealercms.db`         | SQLAlchemy database URL       |
| `--qa`       | `./migrations/default_qa.json`   | Default Q&A JSON file         |
| `--host`     | `0.0.0.0`                        | Address to listen on          |
| `--port`     | `3000`                           | Port to listen on             |

On start the schema is created if needed and the database is seeded with the
standard products (Chat AI, Car Buying AI, Sales AI, Service AI), groups
(Car Buying, Sales, Service, Upsell, all of type Segment) and default topics.
Seeding only adds what is missing, so it is safe to run repeatedly.

The server is Flask's built-in development server. Every response allows
cross-origin requests (`Access-Control-Allow-Origin: *`).

## Endpoints

| Method | Path                     | Purpose                                                  |
|--------|--------------------------|----------------------------------------------------------|
| GET    | `/cms/<dealerId>`        | The dealer's entries, newest first, nested as product → group → topic → QAs |
| POST   | `/dealer`                | Create a dealer and fill in its default Q&A for a group  |
| POST   | `/topic`                 | Add a topic entry for a dealer, product and group        |
| POST   | `/question`              | Add a question entry under a topic                       |
| POST   | `/answer`                | Set the answer of one entry, or with `"Update": true` of every entry of that dealer with the same question |
| POST   | `/copy-topic-to-group`   | Copy a topic's entries into another group                |
| POST   | `/copy-group-to-product` | Copy a group's entries into another product              |

Request bodies are JSON objects with these fields:

| Path                     | Required fields                                            | Optional          |
|--------------------------|------------------------------------------------------------|-------------------|
| `/dealer`                | `DealerName`, `SalesforceID`, `GroupID`                    | `Metadata`        |
| `/topic`                 | `DealerID`, `ProductID`, `GroupID`, `TopicName`            |                   |
| `/question`              | `DealerID`, `ProductID`, `GroupID`, `TopicID`, `Question`  |                   |
| `/answer`                | `EntryID`, `Answer`                                        | `Update`          |
| `/copy-topic-to-group`   | `DealerID`, `ProductID`, `GroupID`, `TopicID`, `NewGroupID`|                   |
| `/copy-group-to-product` | `DealerID`, `ProductID`, `GroupID`, `NewProductID`         |                   |

For example:

```json
{"DealerName": "Example Motors", "SalesforceID": "SF-0001", "GroupID": 1}
```

Topics, questions and answers are reused when one with the same text already
exists; ones created through the endpoints are marked as custom.

A successful request returns `{"status": "success"}`. Failures return
`{"status": "fail", "error": "..."}` with:

- 400 for a body that is not a JSON object or has wrongly typed fields
  (`Invalid JSON body`), for missing, zero or empty required fields
  (`Missing or invalid fields`), for copying onto the same group or product,
  and for `/dealer` with an unknown group;
- 404 for `/answer` with an unknown entry;
- 422 for `/question` when the database rejects the new entry.

`GET /cms/<dealerId>` returns an empty list for a dealer id that is not an
integer.

## Using it as a library

The operations are plain functions that take a SQLAlchemy session and a
request body, and raise `dealercms.entries.RequestError` (with `message` and
`status`) when the body is rejected:

```python
from dealercms.models import initialize
from dealercms.entries import post_topic
from dealercms.cms import get_cms

session_factory = initialize("sqlite:///cms.db")
with session_factory() as session:
    post_topic(session, {"DealerID": 1, "ProductID": 1, "GroupID": 1,
                         "TopicName": "Financing"})
    session.commit()
    tree = get_cms(session, 1)
```

Modules:

- `dealercms.models` – the tables (`Dealer`, `Product`, `Group`, `Topic`,
  `Question`, `Answer`, `Entry`), the enums `ProductName`, `GroupName`,
  `GroupType` and `Locale`, and `get_or_create`, `seed_defaults` and
  `initialize`.
- `dealercms.default_qa` – `parse_default_qa`, `load_default_qa` and
  `create_default_qas`.
- `dealercms.entries` – `post_dealer`, `post_topic`, `post_question`,
  `post_answer` and `require_fields`.
- `dealercms.cms` – `get_cms` and `normalize_rows`.
- `dealercms.copying` – `copy_topic_to_group` and `copy_group_to_product`.
- `dealercms.app` – `create_app(session_factory, qa_path)`, which builds the
  Flask application so it can run under any WSGI server, and `main`.

## Default Q&A file

`POST /dealer` reads its default content from the file given by `--qa`. It is
a JSON list of products, each with topics made up of question/answer pairs:

```json
[
  {"product": "Chat AI",
   "topics": [
     {"label": "Financing",
      "questions": [{"question": "Do you offer financing?", "answer": "Yes."}]}
   ]}
]
```

## What it does not do

- No default Q&A file is shipped with the package; you must provide one, or
  `POST /dealer` fails.
- The `Metadata` field of `/dealer` is checked to be an object but is not
  stored.
- There are no endpoints to list, rename or delete dealers, products, groups,
  topics or entries, and no authentication.