from typing import Generic, List, Optional, Sequence, TypeVar

T = TypeVar("T")


class SelectableList(Generic[T]):
    """Ordered items with an optional, cyclically navigable selection.

    Navigation on an empty list is a no-op: the selection stays ``None``.
    """

    def __init__(self, items: Sequence[T]) -> None:
        self.items: List[T] = list(items)
        self.selected: Optional[int] = None

    def __len__(self) -> int:
        return len(self.items)

    def next(self) -> None:
        if not self.items:
            return
        if self.selected is None:
            self.selected = 0
        else:
            self.selected = (self.selected + 1) % len(self.items)

    def previous(self) -> None:
        if not self.items:
            return
        if self.selected is None:
            self.selected = 0
        elif self.selected == 0:
            self.selected = len(self.items) - 1
        else:
            self.selected -= 1

    def clear_selection(self) -> None:
        self.selected = None

    @property
    def selected_item(self) -> Optional[T]:
        if self.selected is None:
            return None
        return self.items[self.selected]
