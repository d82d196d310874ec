"""
User list search and pagination.

query() filters a user collection by a free-text term and returns one
page of the matches. It is stateless: the caller keeps a QueryState and
passes it in on every change.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass, replace

from .models import User

DEFAULT_PAGE_SIZE = 5


@dataclass(frozen=True)
class UserPage:
    """One page of matching users plus the clamped paging position."""

    users: tuple[User, ...]
    total_pages: int
    page_number: int
    match_count: int

    @property
    def is_empty(self) -> bool:
        """True when nothing matched; callers show "No users found"."""
        return self.match_count == 0


def matches(user: User, search_term: str) -> bool:
    """Case-insensitive substring match on first name, last name or email."""
    term = search_term.casefold()
    return (
        term in user.first_name.casefold()
        or term in user.last_name.casefold()
        or term in user.email.casefold()
    )


def query(users: Sequence[User], search_term: str, page_number: int, page_size: int) -> UserPage:
    """
    Filter users by search_term and slice out one page.

    Input order is preserved. The requested page is clamped into
    [1, total_pages], and total_pages is at least 1 even when nothing
    matches.

    Args:
        users: Full collection, newest first
        search_term: Free text; empty matches everyone
        page_number: Requested 1-based page
        page_size: Users per page

    Returns:
        UserPage for the clamped page

    Raises:
        ValueError: If page_size is not positive
    """
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")

    filtered = [user for user in users if matches(user, search_term)]
    total_pages = max(1, math.ceil(len(filtered) / page_size))
    clamped = min(max(1, page_number), total_pages)

    start = (clamped - 1) * page_size
    return UserPage(
        users=tuple(filtered[start : start + page_size]),
        total_pages=total_pages,
        page_number=clamped,
        match_count=len(filtered),
    )


@dataclass(frozen=True)
class QueryState:
    """Caller-owned search term and page position."""

    search_term: str = ""
    page_number: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def with_search_term(self, search_term: str) -> "QueryState":
        """A new search always starts from the first page."""
        return replace(self, search_term=search_term, page_number=1)

    def next_page(self, total_pages: int) -> "QueryState":
        return replace(self, page_number=min(max(1, total_pages), self.page_number + 1))

    def previous_page(self) -> "QueryState":
        return replace(self, page_number=max(1, self.page_number - 1))

    def apply(self, users: Sequence[User]) -> UserPage:
        return query(users, self.search_term, self.page_number, self.page_size)
