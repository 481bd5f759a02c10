"""Error taxonomy shared by the repository, orchestrator and CLI."""

from __future__ import annotations


class InkwellError(Exception):
    """Base error for inkwell operations."""


class LoadError(InkwellError):
    """The canonical dataset could not be retrieved or parsed."""


class ProtectedContentError(InkwellError):
    """An edit or delete targeted an item from the canonical dataset."""

    def __init__(self, variant: str, item_id: int) -> None:
        self.variant = variant
        self.item_id = item_id
        super().__init__(
            f"{variant} {item_id} is original content and cannot be modified"
        )


class NotFoundError(InkwellError):
    """No item with the given id exists in the working set."""

    def __init__(self, variant: str, item_id: int) -> None:
        self.variant = variant
        self.item_id = item_id
        super().__init__(f"No {variant} with id {item_id}")
