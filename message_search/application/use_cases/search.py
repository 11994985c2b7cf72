"""Search use case: fan a query out to contacts, conversations and messages.

Each query sanitizes the raw text once, then runs three independent branches
on a worker pool and joins them. A branch that fails becomes an empty list;
the other branches are still returned. There is no cancellation and no
timeout: a submitted query always runs to completion and always calls its
callback once, even if a newer query has made it irrelevant. Callers wanting
"latest query wins" must sequence queries themselves.

Contacts from the two contact stores are concatenated in store order with
no deduplication, so one person present in both appears twice.
"""

from __future__ import annotations

import asyncio
import contextvars
import functools
import logging
import time
from collections.abc import Awaitable, Callable
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import TYPE_CHECKING, Any, TypeVar

from message_search.application.dtos.search import (
    ConversationEntry,
    MessageMatch,
    Recipient,
    SearchResult,
)
from message_search.application.services.result_builders import (
    ContactEntryBuilder,
    MessageMatchBuilder,
)
from message_search.domain.exceptions import RowSourceError
from message_search.shared.rows import LazyResultList, MergedRowSource
from message_search.shared.telemetry import add_span_attributes, traced
from message_search.shared.utils import Stopwatch, is_blank_query, sanitize_query

if TYPE_CHECKING:
    from message_search.application.interfaces.sources import (
        IContactPermission,
        IContactSource,
        IMessageIndex,
        INumberResolver,
        IRecipientResolver,
        IThreadStore,
    )

logger = logging.getLogger(__name__)

R = TypeVar("R")


class SearchAggregator:
    """Answer free-text queries from three data sources concurrently."""

    def __init__(
        self,
        contacts: IContactSource,
        contact_permission: IContactPermission,
        number_resolver: INumberResolver,
        thread_store: IThreadStore,
        message_index: IMessageIndex,
        recipient_resolver: IRecipientResolver,
        executor: Executor | None = None,
        dispatch_executor: Executor | None = None,
        max_workers: int = 3,
        dispatch_workers: int = 4,
    ) -> None:
        """Wire collaborators and executors.

        Args:
            contacts: Contact stores (registered and address book).
            contact_permission: Gate for reading contacts.
            number_resolver: Name/number matching for conversation filtering.
            thread_store: Conversation storage; also builds its own rows.
            message_index: Full-text message index.
            recipient_resolver: Resolves ids and addresses to recipients.
            executor: Pool for branch work; created (and owned) when omitted.
            dispatch_executor: Pool running submit() jobs; created when omitted.
            max_workers: Size of the owned branch pool.
            dispatch_workers: Size of the owned dispatch pool.
        """
        self.contacts = contacts
        self.contact_permission = contact_permission
        self.number_resolver = number_resolver
        self.thread_store = thread_store
        self.message_index = message_index
        self.recipient_resolver = recipient_resolver

        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="search-branch"
        )
        self._owns_dispatch = dispatch_executor is None
        self._dispatch_executor = dispatch_executor or ThreadPoolExecutor(
            max_workers=dispatch_workers, thread_name_prefix="search-query"
        )

    # -------------------------
    # Public API
    # -------------------------
    @traced("search.query")
    async def query(self, raw: str) -> SearchResult:
        """Search contacts, conversations and messages for raw.

        Blank input returns SearchResult.EMPTY without touching any data
        source.
        """
        if is_blank_query(raw):
            return SearchResult.EMPTY

        timer = Stopwatch("FtsQuery")
        clean = sanitize_query(raw)
        timer.split("clean")

        contacts, conversations, messages = await asyncio.gather(
            self._run_branch("contacts", timer, self._query_contacts, clean),
            self._run_branch("conversations", timer, self._query_conversations, clean),
            self._run_branch("messages", timer, self._query_messages, clean),
        )
        timer.stop(logger)
        add_span_attributes(
            contacts=len(contacts),
            conversations=len(conversations),
            messages=len(messages),
        )
        return SearchResult(clean, contacts, conversations, messages)

    @traced("search.query_thread")
    async def query_thread(self, raw: str, thread_id: int) -> LazyResultList[MessageMatch]:
        """Search message content within one conversation.

        Blank input returns an empty list without querying the index.
        """
        if is_blank_query(raw):
            return LazyResultList.empty()

        start = time.perf_counter()
        messages = await self._run_branch(
            "messages", None, self._query_messages, sanitize_query(raw), thread_id
        )
        logger.debug(
            "[ConversationQuery] %d ms", (time.perf_counter() - start) * 1000
        )
        return messages

    def submit(
        self, raw: str, callback: Callable[[SearchResult], Any]
    ) -> Future[SearchResult]:
        """Run query(raw) in the background and pass the result to callback.

        The callback runs once, on a dispatch thread, never on the caller's
        thread (blank input included).
        """
        return self._dispatch(lambda: self.query(raw), callback)

    def submit_thread(
        self,
        raw: str,
        thread_id: int,
        callback: Callable[[LazyResultList[MessageMatch]], Any],
    ) -> Future[LazyResultList[MessageMatch]]:
        """Run query_thread(raw, thread_id) in the background; see submit()."""
        return self._dispatch(lambda: self.query_thread(raw, thread_id), callback)

    def shutdown(self, wait: bool = True) -> None:
        """Stop the executors this aggregator created."""
        if self._owns_dispatch:
            self._dispatch_executor.shutdown(wait=wait)
        if self._owns_executor:
            self._executor.shutdown(wait=wait)

    # -------------------------
    # Execution helpers
    # -------------------------
    def _dispatch(
        self,
        make_query: Callable[[], Awaitable[R]],
        callback: Callable[[R], Any],
    ) -> Future[R]:
        def job() -> R:
            result = asyncio.run(make_query())
            try:
                callback(result)
            except Exception:
                logger.exception("Search callback raised")
                raise
            return result

        return self._dispatch_executor.submit(job)

    async def _run_branch(
        self,
        branch: str,
        timer: Stopwatch | None,
        fn: Callable[..., LazyResultList[R]],
        *args: Any,
    ) -> LazyResultList[R]:
        """Run one data-source branch on the worker pool.

        Any failure is logged and replaced by an empty list for this branch
        only.
        """
        loop = asyncio.get_running_loop()
        ctx = contextvars.copy_context()
        try:
            result = await loop.run_in_executor(
                self._executor, functools.partial(ctx.run, fn, *args)
            )
        except RowSourceError as exc:
            logger.warning("Search branch '%s' returned no rows: %s", branch, exc.message)
            result = LazyResultList.empty()
        except Exception:
            logger.exception("Search branch '%s' failed", branch)
            result = LazyResultList.empty()
        if timer is not None:
            timer.split(branch)
        return result

    # -------------------------
    # Branches (run on worker threads)
    # -------------------------
    @traced("search.contacts")
    def _query_contacts(self, term: str) -> LazyResultList[Recipient]:
        if not self.contact_permission.has_read_access():
            return LazyResultList.empty()

        known = self.contacts.query_known(term)
        try:
            unknown = self.contacts.query_unknown(term)
        except Exception:
            known.close()
            raise
        return LazyResultList(
            MergedRowSource([known, unknown]),
            ContactEntryBuilder(self.recipient_resolver),
        )

    @traced("search.conversations")
    def _query_conversations(self, term: str) -> LazyResultList[ConversationEntry]:
        recipient_ids = set(self.number_resolver.candidate_recipients(term))
        rows = self.thread_store.filtered_conversations(recipient_ids)
        if rows is None:
            return LazyResultList.empty()
        return LazyResultList(rows, self.thread_store.row_to_conversation)

    @traced("search.messages")
    def _query_messages(
        self, term: str, thread_id: int | None = None
    ) -> LazyResultList[MessageMatch]:
        rows = self.message_index.search(term, thread_id=thread_id)
        if rows is None:
            return LazyResultList.empty()
        return LazyResultList(rows, MessageMatchBuilder(self.recipient_resolver))
