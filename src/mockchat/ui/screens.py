"""Modal dialogs shown on top of the chat screen.

Only the delete confirmation lives here for now; its look and its
y/n/escape keys are private to this module.
"""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Static


class ConfirmDeleteScreen(ModalScreen[bool]):
    """Asks whether a conversation should be deleted.

    Dismisses with True on confirmation, False otherwise.
    """

    CSS = """
    ConfirmDeleteScreen {
        align: center middle;
        background: $background 70%;
    }

    #confirm-dialog {
        width: 56;
        height: auto;
        border: tall $error;
        background: $surface;
        padding: 1 2;
    }

    #confirm-title {
        width: 100%;
        text-align: center;
        text-style: bold;
        color: $error;
        padding: 0 0 1 0;
    }

    #confirm-prompt {
        width: 100%;
        text-align: center;
        padding: 0 1 1 1;
        color: $foreground;
    }

    #confirm-buttons {
        width: 100%;
        height: 3;
        align: center middle;
    }

    #confirm-buttons Button {
        margin: 0 1;
        min-width: 10;
    }
    """

    BINDINGS = [
        Binding("y", "confirm", "Yes", show=False),
        Binding("n", "cancel", "No", show=False),
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    def __init__(self, title: str) -> None:
        super().__init__()
        self._title = title

    def compose(self) -> ComposeResult:
        with Vertical(id="confirm-dialog"):
            yield Static("Delete conversation?", id="confirm-title")
            yield Static(self._title, markup=False, id="confirm-prompt")
            with Horizontal(id="confirm-buttons"):
                yield Button("Delete", id="btn-yes", variant="error")
                yield Button("Cancel", id="btn-no", variant="default")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "btn-yes")

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)
