"""Observable state shared by the dialogs."""

from typing import Callable, Optional

Listener = Callable[["DialogState"], None]


class DialogState:
    """Base for dialog state objects.

    Holds the visibility flag and a list of listeners that are called after
    every change so a front end can re-render.
    """

    def __init__(self, on_dismiss: Optional[Callable[[], None]] = None):
        self.visible = True
        self._on_dismiss = on_dismiss
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        """Register a listener called with this state after each change."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        """Remove a previously registered listener."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def dismiss(self) -> None:
        """Close the dialog and tell the caller. Repeated calls are no-ops."""
        if not self.visible:
            return
        self.visible = False
        self._notify()
        if self._on_dismiss:
            self._on_dismiss()
