"""Pagination collaborator contract."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Paginator(Protocol):
    """Anything that can jump back to the first page of a paged view.

    The filter only asks for a silent jump: the paginator must not refetch
    or re-emit the collection, because the filter resets it right after.
    """

    def go_to_first_page(self, silent: bool = False) -> None:
        ...
