"""
Request Dispatcher.

The boundary between a transport (HTTP, terminal, UI) and the resolvers:
builds the request context once, opens the store, runs the resolver for
the requested action and turns any error into a localized HTML fragment.
"""

import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple

from kb.config import settings
from kb.errors import KnowledgeBaseError, UnknownAction
from kb.languages import parse_languages
from kb.messages import Localizer
from kb.models import RequestContext
from kb.resolvers import RESOLVERS, Action
from kb.store import KnowledgeStore

logger = logging.getLogger(__name__)

# (status, payload): 200 → JSON-serializable value, anything else → HTML text.
Response = Tuple[int, Any]


def build_context(params: Mapping[str, str], accept_language: Optional[str] = None) -> RequestContext:
    """
    Args:
        params: Request parameters, including 'action'.
        accept_language: Raw Accept-Language header, None if the client sent none.
    """
    header = accept_language if accept_language is not None else settings.DEFAULT_LANGUAGE
    arguments = {k: v for k, v in params.items() if k != "action" and v is not None}
    return RequestContext(
        action=params.get("action"),
        languages=tuple(parse_languages(header)),
        params=arguments,
    )


def resolve_action(name: Optional[str]) -> Action:
    try:
        return Action(name)
    except ValueError:
        raise UnknownAction(name)


def dispatch(context: RequestContext, db_path: Path = None) -> Response:
    """Answers one request. Never raises a KnowledgeBaseError."""
    localizer = Localizer(context.languages)

    try:
        with KnowledgeStore(db_path) as store:
            action = resolve_action(context.action)
            logger.info(f"Dispatching '{action.value}' for languages {list(context.languages)}")
            payload = RESOLVERS[action](store, context)
    except KnowledgeBaseError as e:
        logger.info(f"Request failed with {e.status}: {e}")
        return e.status, localizer.localize(e.message)

    return 200, payload


def handle(params: Mapping[str, str], accept_language: Optional[str] = None, db_path: Path = None) -> Response:
    """Convenience wrapper: build the context, then dispatch."""
    return dispatch(build_context(params, accept_language), db_path=db_path)
