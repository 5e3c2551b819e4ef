"""Registration and lookup of settings pages, their sections and data."""

from __future__ import annotations

import copy
import itertools
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import (
    Any,
    Awaitable,
    Callable,
    ClassVar,
    Generic,
    Iterator,
    Optional,
    Pattern,
    TypeVar,
    Union,
)

from settingspages.section import Section

T = TypeVar("T")
P = TypeVar("P", bound="Page")


class _SlotMap(Generic[T]):
    """A map that hands out a fresh key for each inserted value."""

    def __init__(self) -> None:
        self._items: dict[int, T] = {}
        self._keys = itertools.count(1)

    def insert(self, value: T) -> int:
        key = next(self._keys)
        self._items[key] = value
        return key

    def get(self, key: int) -> Optional[T]:
        return self._items.get(key)

    def __getitem__(self, key: int) -> T:
        return self._items[key]

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __iter__(self) -> Iterator[int]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def items(self):
        return self._items.items()


@dataclass
class Info:
    """Information about a page: its title, icon, and description."""

    id: str
    icon_name: str
    title: str = ""
    description: str = ""
    parent: Optional[int] = None


class Page(ABC):
    """A settings page.

    Subclasses may declare ``SECTIONS`` (inserted as the page's content),
    ``SUB_PAGES`` (page types attached beneath it on registration) and
    ``LOADER`` (a callable ``(page, id) -> awaitable`` that refreshes it).
    """

    SECTIONS: ClassVar[tuple[Section, ...]] = ()
    SUB_PAGES: ClassVar[tuple[type["Page"], ...]] = ()
    LOADER: ClassVar[Optional[Callable[["Page", int], Awaitable[Any]]]] = None

    @abstractmethod
    def info(self) -> Info:
        """Information about the page."""

    def content(self, sections: _SlotMap[Section]) -> Optional[list[int]]:
        """Insert this page's sections and return their ids, if it has any."""
        if not self.SECTIONS:
            return None
        return [sections.insert(copy.copy(section)) for section in self.SECTIONS]

    def load(self, page: int) -> Optional[Awaitable[Any]]:
        """An awaitable that refreshes the page's data, if it has one."""
        loader = type(self).LOADER
        return None if loader is None else loader(self, page)

    @classmethod
    def sub_pages(cls, insert: "Insert") -> "Insert":
        """Attach sub-pages to the page."""
        for page_type in cls.SUB_PAGES:
            insert = insert.sub_page(page_type)
        return insert


@dataclass
class Insert:
    """An inserted page which may have additional properties assigned to it."""

    model: "Binder"
    id: int

    def content(self, content: list[int]) -> "Insert":
        self.model._content[self.id] = list(content)
        return self

    def sub_page(self, page_type: type[Page]) -> "Insert":
        """Add a page and associate it with this one as its parent."""
        if not self.model.contains_item(self.id):
            raise KeyError("parent page missing")
        sub_page = self.model.register(page_type).id
        self.model.info[sub_page].parent = self.id
        self.model._sub_pages.setdefault(self.id, []).append(sub_page)
        return self


class Binder:
    """All settings pages are registered and managed by the binder."""

    def __init__(self) -> None:
        self.info: _SlotMap[Info] = _SlotMap()
        self.sections: _SlotMap[Section] = _SlotMap()
        self._pages: dict[int, Page] = {}
        self._typed_page_ids: dict[type, int] = {}
        self._resources: dict[type, Any] = {}
        self._storage: dict[type, dict[int, Any]] = {}
        self._sub_pages: dict[int, list[int]] = {}
        self._content: dict[int, list[int]] = {}

    def contains_item(self, id: int) -> bool:
        """Check if a page exists."""
        return id in self.info

    def content(self, page: int) -> Optional[tuple[int, ...]]:
        """The section ids of a page, if it has any."""
        content = self._content.get(page)
        return None if content is None else tuple(content)

    def data(self, id: int, data_type: type[T]) -> Optional[T]:
        """Data of the given type associated with a page."""
        return self._storage.get(data_type, {}).get(id)

    def data_set(self, id: int, data: Any) -> None:
        """Associate data with a page; ignored for unknown pages."""
        if self.contains_item(id):
            self._storage.setdefault(type(data), {})[id] = data

    def data_remove(self, id: int, data_type: type) -> None:
        """Remove a specific data type from a page."""
        self._storage.get(data_type, {}).pop(id, None)

    def register(self, page_type: type[Page]) -> Insert:
        """Register a new page, built from its type, along with its sub-pages."""
        id = self.register_page(page_type())
        self._typed_page_ids[page_type] = id
        return page_type.sub_pages(Insert(self, id))

    def register_page(self, page: Page) -> int:
        id = self.info.insert(page.info())
        content = page.content(self.sections)
        if content is not None:
            self._content[id] = list(content)
        self._pages[id] = page
        return id

    def model(self, id: int) -> Optional[Page]:
        return self._pages.get(id)

    def page(self, page_type: type[P]) -> Optional[P]:
        """The page registered for a type."""
        id = self._typed_page_ids.get(page_type)
        if id is None:
            return None
        page = self._pages.get(id)
        return page if isinstance(page, page_type) else None

    def page_reload(self, id: int) -> Optional[Awaitable[Any]]:
        """The awaitable from a page's load function, if it has one."""
        page = self._pages.get(id)
        return None if page is None else page.load(id)

    def resource(self, resource_type: type[T]) -> Optional[T]:
        return self._resources.get(resource_type)

    def resource_register(self, resource_type: type) -> None:
        """Create a default resource of this type unless one exists."""
        if resource_type not in self._resources:
            self._resources[resource_type] = resource_type()

    def search(self, rule: Union[str, Pattern[str]]) -> Iterator[tuple[int, int]]:
        """Yield (page, section) pairs whose section matches the rule."""
        pattern = re.compile(rule) if isinstance(rule, str) else rule
        for page, sections in self._content.items():
            for id in sections:
                if self.sections[id].search_matches(pattern):
                    yield page, id

    def sub_pages(self, page: int) -> Optional[tuple[int, ...]]:
        """The sub-pages of a page, if it has any."""
        subs = self._sub_pages.get(page)
        return None if subs is None else tuple(subs)

    def update(self, page_type: type[Page], message: Any) -> None:
        """Pass a message to the page of the given type, if registered."""
        page = self.page(page_type)
        if page is not None:
            page.update(message)