# This file is part of pyec2lib. See LICENSE file for license information.
"""Turn token based describe_* calls into lazy iterators."""

import logging
from collections import deque
from typing import (
    Any,
    Callable,
    Deque,
    Generic,
    Iterator,
    NamedTuple,
    Optional,
    Sequence,
    TypeVar,
)

log = logging.getLogger(__name__)

T = TypeVar("T")


class Page(NamedTuple):
    """One batch of items returned by a single fetch call."""

    items: Sequence[Any]
    next_token: Optional[str] = None


PageFetcher = Callable[[Optional[str]], Page]


class PaginatedLister(Generic[T]):
    """Iterate over every item of a paginated listing.

    `fetch` is called with None for the first page and with the previous
    page's continuation token for each following one. A page is only
    fetched once every item of the page before it has been consumed.

    A lister can be drained only once; build a new one to list again.
    Errors raised by `fetch` reach the consumer unchanged.
    """

    def __init__(self, fetch: PageFetcher):
        """Set up the lister.

        Args:
            fetch: callable returning the `Page` for a continuation token
        """
        self._fetch = fetch
        self._items: Deque[T] = deque()
        self._next_token: Optional[str] = None
        self._started = False
        self._pages = 0

    def __iter__(self) -> Iterator[T]:
        """Return the lister itself, it is its own iterator."""
        return self

    def __next__(self) -> T:
        """Return the next item, fetching pages as needed."""
        while not self._items:
            if self._started and self._next_token is None:
                raise StopIteration
            self._load_page(self._next_token)
        return self._items.popleft()

    @property
    def pages_fetched(self) -> int:
        """Return how many pages were fetched so far."""
        return self._pages

    def _load_page(self, token: Optional[str]):
        page = self._fetch(token)
        self._started = True
        self._pages += 1
        self._items = deque(page.items)
        self._next_token = page.next_token or None
        log.debug(
            "fetched page %d with %d item(s), more: %s",
            self._pages,
            len(self._items),
            self._next_token is not None,
        )


def boto3_page_fetcher(
    call: Callable[..., dict], items_key: str, **params
) -> PageFetcher:
    """Build a page fetcher out of a boto3 describe_* client method.

    Args:
        call: bound boto3 client method, e.g. `client.describe_tags`
        items_key: response key holding the items, e.g. "Tags"
        params: extra keyword arguments passed on every call

    Returns:
        a callable suitable for `PaginatedLister`
    """

    def fetch(token: Optional[str]) -> Page:
        kwargs = dict(params)
        if token is not None:
            kwargs["NextToken"] = token
        response = call(**kwargs)
        return Page(response.get(items_key, []), response.get("NextToken"))

    return fetch
