"""Computed per-button output handed to the deck surface."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

BLANK_BACKGROUND = "#000000"


class ButtonVisual(BaseModel):
    """What a deck button should show.

    ``label`` lines are drawn on a ``background`` square; ``title`` is the
    deck's plain text overlay, used for placeholders such as ``Missing``.
    How these values become pixels is up to the deck backend.
    """

    model_config = ConfigDict(frozen=True)

    title: str = ""
    label: tuple[str, ...] = ()
    background: str = BLANK_BACKGROUND
    text_color: str = "#FFFFFF"
    border: str | None = None
    is_error: bool = Field(default=False, description="Textual error indicator")

    @property
    def is_blank(self) -> bool:
        return not self.title and not any(self.label) and not self.is_error


BLANK = ButtonVisual()
ERROR = ButtonVisual(title="Error", is_error=True)
