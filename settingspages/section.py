"""Searchable sections that make up the content of a settings page."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Pattern, Union

ViewFn = Callable[[Any, Any, "Section"], Any]
Rule = Union[str, Pattern[str]]


def _unimplemented(binder: Any, page: Any, section: "Section") -> list[list[str]]:
    """Default view: a column holding one block with the section's text."""
    return [[section.title, *section.descriptions]]


def _as_pattern(rule: Rule) -> Pattern[str]:
    return re.compile(rule) if isinstance(rule, str) else rule


@dataclass
class Section:
    """A searchable sub-component of a page.

    Searches can group multiple sections together.
    """

    title: str = ""
    descriptions: list[str] = field(default_factory=list)
    view_fn: ViewFn = field(default=_unimplemented, repr=False)
    search_ignore: bool = False

    def search_matches(self, rule: Rule) -> bool:
        """Whether the title or any description matches the rule."""
        if self.search_ignore:
            return False
        pattern = _as_pattern(rule)
        return any(
            pattern.search(text) is not None
            for text in (self.title, *self.descriptions)
        )

    def view(self, model_type: type, func: ViewFn) -> "Section":
        """Assign the view function, checking the page model's type on each call."""

        def view_fn(binder: Any, model: Any, section: "Section") -> Any:
            if not isinstance(model, model_type):
                raise TypeError(
                    f"page model type mismatch: expected {model_type.__qualname__}"
                )
            return func(binder, model, section)

        self.view_fn = view_fn
        return self