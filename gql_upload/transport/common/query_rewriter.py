"""Inline the variables of a query into the query text.

The rewrite is purely textual. It keeps the selection set found between
the first ``{`` and the last ``}`` of the query, replaces the first
``$name`` occurrence of each variable with a literal and wraps the result
in an anonymous ``query { ... }`` block. The variables are then sent as
null.

Known limitations, kept as is:

- variables are substituted in mapping order, so ``$id`` can match the
  beginning of ``$idExtra``
- string values are quoted with single quotes without any escaping, a
  value such as ``O'Brien`` or one containing query syntax changes the
  query that is sent
- the literal form depends on the Python type of the value, not on the
  declared type of the variable

The rewrite must be applied exactly once per request.
"""

import logging
import re
from numbers import Number
from typing import Any, Dict

log = logging.getLogger(__name__)


def _text(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def variable_literal(key: str, value: Any) -> str:
    """Literal form of a variable value inside the rewritten query."""
    if key.lower() == "id" or (
        isinstance(value, Number) and not isinstance(value, bool)
    ):
        return _text(value)

    return f"'{_text(value)}'"


def extract_selection_set(query: str) -> str:
    """Text between the first opening brace and the last closing brace."""
    _, _, after_first = query.partition("{")
    selection_set, _, _ = after_first.rpartition("}")
    return selection_set


def rewrite_query(body: Dict[str, Any]) -> Dict[str, Any]:
    """Rewrite a ``{query, variables}`` body into a literal query.

    The returned body is ``{operationName, query, variables: None}``, the
    operation name being taken from the ``operation`` key of the body.
    Bodies without a query are returned unchanged.
    """
    query = body.get("query")
    if not query:
        return body

    raw_query = extract_selection_set(query)
    variables = body.get("variables") or {}

    for key, value in variables.items():
        literal = variable_literal(key, value)
        pattern = re.compile(r"\$" + re.escape(key), re.IGNORECASE)
        raw_query = pattern.sub(lambda _match: literal, raw_query, count=1)

    raw_query = raw_query.replace("\n", "")

    rewritten = {
        "operationName": body.get("operation"),
        "query": f" query {{ {raw_query} }} ",
        "variables": None,
    }

    if log.isEnabledFor(logging.DEBUG):
        log.debug("Rewritten query: %s", rewritten["query"])

    return rewritten
