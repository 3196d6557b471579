"""HTTP service exposing the dealer content operations."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Callable, Union

from flask import Flask, jsonify, request

from dealercms.cms import get_cms
from dealercms.copying import copy_group_to_product, copy_topic_to_group
from dealercms.entries import (
    RequestError,
    post_answer,
    post_dealer,
    post_question,
    post_topic,
)
from dealercms.models import DEFAULT_DATABASE_URL, initialize

DEFAULT_QA_PATH = "./migrations/default_qa.json"
ALLOWED_METHODS = "GET,POST,HEAD,PUT,DELETE,PATCH"


def create_app(
    session_factory: Callable[[], Any],
    qa_path: Union[str, Path] = DEFAULT_QA_PATH,
) -> Flask:
    """Build the web application around a session factory."""
    app = Flask(__name__)
    app.json.sort_keys = False

    @app.after_request
    def _cors(response):
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Allow-Methods"] = ALLOWED_METHODS
        requested = request.headers.get("Access-Control-Request-Headers")
        if requested:
            response.headers["Access-Control-Allow-Headers"] = requested
        return response

    @app.get("/cms/<dealer_id>")
    def _cms(dealer_id: str):
        with session_factory() as session:
            return jsonify(get_cms(session, dealer_id))

    def _write_route(action: Callable[[Any, Any], Any]):
        def view():
            body = request.get_json(silent=True)
            with session_factory() as session:
                try:
                    action(session, body)
                    session.commit()
                except RequestError as exc:
                    session.rollback()
                    return jsonify(status="fail", error=exc.message), exc.status
            return jsonify(status="success")

        return view

    routes = {
        "/dealer": lambda session, body: post_dealer(session, body, qa_path),
        "/topic": post_topic,
        "/question": post_question,
        "/answer": post_answer,
        "/copy-topic-to-group": copy_topic_to_group,
        "/copy-group-to-product": copy_group_to_product,
    }
    for path, action in routes.items():
        app.add_url_rule(
            path, endpoint=path, view_func=_write_route(action), methods=["POST"]
        )
    return app


def main(argv=None) -> None:
    """Start the content service."""
    parser = argparse.ArgumentParser(description="Dealer content service.")
    parser.add_argument("--database", default=DEFAULT_DATABASE_URL, help="database URL")
    parser.add_argument("--qa", default=DEFAULT_QA_PATH, help="default QA JSON file")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=3000)
    args = parser.parse_args(argv)

    factory = initialize(args.database)
    app = create_app(factory, args.qa)
    app.run(host=args.host, port=args.port)


if __name__ == "__main__":
    main()