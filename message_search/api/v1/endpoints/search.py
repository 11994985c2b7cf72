"""Search API: contacts, conversations and message content in one query.

Result lists are lazy: building an item may resolve recipients against the
store, so responses are built in the threadpool and cover only the first
`limit` items of each list.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.concurrency import run_in_threadpool

from message_search.api.v1.dependencies import get_search_aggregator
from message_search.application.dtos.search import MessageMatch, SearchResult
from message_search.application.use_cases.search import SearchAggregator
from message_search.core.config import get_settings
from message_search.domain.exceptions import ValidationException
from message_search.schemas.search import (
    ConversationResponse,
    MessageMatchResponse,
    RecipientResponse,
    SearchResponse,
    ThreadSearchResponse,
)
from message_search.shared.rows import LazyResultList

router = APIRouter()


def _window_limit(limit: int | None) -> int:
    settings = get_settings()
    if limit is None:
        return settings.api_default_window
    return min(limit, settings.api_max_window)


def _search_response(result: SearchResult, n: int) -> SearchResponse:
    return SearchResponse(
        query=result.query,
        contacts_total=len(result.contacts),
        conversations_total=len(result.conversations),
        messages_total=len(result.messages),
        contacts=[RecipientResponse.from_recipient(r) for r in result.contacts[:n]],
        conversations=[ConversationResponse.from_entry(c) for c in result.conversations[:n]],
        messages=[MessageMatchResponse.from_match(m) for m in result.messages[:n]],
    )


def _thread_response(
    thread_id: int, messages: LazyResultList[MessageMatch], n: int
) -> ThreadSearchResponse:
    return ThreadSearchResponse(
        thread_id=thread_id,
        total=len(messages),
        messages=[MessageMatchResponse.from_match(m) for m in messages[:n]],
    )


@router.get("/search", response_model=SearchResponse)
async def search(
    aggregator: Annotated[SearchAggregator, Depends(get_search_aggregator)],
    q: str = Query("", max_length=500),
    limit: int | None = Query(None, ge=1),
):
    """Search contacts, conversations and messages. Blank q gives an empty result."""
    n = _window_limit(limit)
    result = await aggregator.query(q)
    if result is SearchResult.EMPTY:
        return _search_response(result, n)
    try:
        return await run_in_threadpool(_search_response, result, n)
    finally:
        result.close()


@router.get("/threads/{thread_id}/search", response_model=ThreadSearchResponse)
async def search_thread(
    thread_id: int,
    aggregator: Annotated[SearchAggregator, Depends(get_search_aggregator)],
    q: str = Query("", max_length=500),
    limit: int | None = Query(None, ge=1),
):
    """Search message content inside one conversation."""
    if thread_id < 1:
        raise ValidationException("thread_id must be a positive integer", field="thread_id")
    n = _window_limit(limit)
    messages = await aggregator.query_thread(q, thread_id)
    with messages:
        return await run_in_threadpool(_thread_response, thread_id, messages, n)
