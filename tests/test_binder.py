import asyncio
import re

import pytest

from settingspages.binder import Binder, Info, Insert, Page
from settingspages.section import Section


class Sound(Page):
    def __init__(self):
        self.messages = []

    def info(self):
        return Info("sound", "audio-icon", title="Sound")

    def content(self, sections):
        return [
            sections.insert(Section(title="Volume", descriptions=["Output level"])),
            sections.insert(Section(title="Hidden volume", search_ignore=True)),
        ]

    def update(self, message):
        self.messages.append(message)


class Network(Page):
    def info(self):
        return Info("network", "network-icon", title="Network")

    def content(self, sections):
        return [sections.insert(Section(title="Wired"))]

    def load(self, page):
        async def fetch():
            return ("loaded", page)

        return fetch()


class Wifi(Page):
    def info(self):
        return Info("wifi", "wifi-icon")


class Connectivity(Page):
    def info(self):
        return Info("connectivity", "conn-icon")

    @classmethod
    def sub_pages(cls, insert):
        return insert.sub_page(Network).sub_page(Wifi)


class Counter:
    def __init__(self):
        self.value = 0


def test_register_and_lookup():
    binder = Binder()
    id = binder.register(Sound).id
    assert binder.contains_item(id)
    assert binder.info[id].id == "sound"
    assert isinstance(binder.page(Sound), Sound)
    assert binder.model(id) is binder.page(Sound)


def test_unknown_page_lookups():
    binder = Binder()
    assert binder.page(Sound) is None
    assert binder.model(42) is None
    assert binder.contains_item(42) is False
    assert binder.content(42) is None
    assert binder.sub_pages(42) is None


def test_content_is_recorded():
    binder = Binder()
    id = binder.register(Sound).id
    content = binder.content(id)
    assert len(content) == 2
    assert binder.sections[content[0]].title == "Volume"


def test_page_without_content():
    binder = Binder()
    id = binder.register(Wifi).id
    assert binder.content(id) is None


def test_sub_pages_and_parent():
    binder = Binder()
    parent = binder.register(Connectivity).id
    subs = binder.sub_pages(parent)
    assert [binder.info[s].id for s in subs] == ["network", "wifi"]
    assert all(binder.info[s].parent == parent for s in subs)
    assert binder.info[parent].parent is None


def test_sub_page_on_missing_parent_raises():
    binder = Binder()
    with pytest.raises(KeyError):
        Insert(binder, 99).sub_page(Wifi)


def test_insert_content_replaces():
    binder = Binder()
    section_id = binder.sections.insert(Section(title="Custom"))
    id = binder.register(Wifi).content([section_id]).id
    assert binder.content(id) == (section_id,)


def test_search_finds_matching_sections():
    binder = Binder()
    sound = binder.register(Sound).id
    network = binder.register(Network).id
    results = list(binder.search(re.compile("(?i)volume|wired")))
    pages = [page for page, _ in results]
    assert pages.count(sound) == 1
    assert pages.count(network) == 1
    for page, section in results:
        assert section in binder.content(page)
        assert binder.sections[section].search_ignore is False


def test_search_by_description_string():
    binder = Binder()
    sound = binder.register(Sound).id
    results = list(binder.search("Output"))
    assert results == [(sound, binder.content(sound)[0])]


def test_data_set_get_remove():
    binder = Binder()
    id = binder.register(Wifi).id
    counter = Counter()
    binder.data_set(id, counter)
    assert binder.data(id, Counter) is counter
    binder.data(id, Counter).value = 5
    assert binder.data(id, Counter).value == 5
    binder.data_remove(id, Counter)
    assert binder.data(id, Counter) is None


def test_data_set_ignores_unknown_page():
    binder = Binder()
    binder.data_set(7, Counter())
    assert binder.data(7, Counter) is None


def test_data_is_keyed_by_type():
    binder = Binder()
    id = binder.register(Wifi).id
    binder.data_set(id, "text")
    assert binder.data(id, Counter) is None
    assert binder.data(id, str) == "text"


def test_resource_register_is_idempotent():
    binder = Binder()
    assert binder.resource(Counter) is None
    binder.resource_register(Counter)
    first = binder.resource(Counter)
    first.value = 3
    binder.resource_register(Counter)
    assert binder.resource(Counter) is first
    assert binder.resource(Counter).value == 3


def test_page_reload_runs_load():
    binder = Binder()
    id = binder.register(Network).id
    result = asyncio.run(binder.page_reload(id))
    assert result == ("loaded", id)


def test_page_reload_without_load():
    binder = Binder()
    id = binder.register(Wifi).id
    assert binder.page_reload(id) is None
    assert binder.page_reload(1234) is None


def test_update_delivers_message():
    binder = Binder()
    binder.register(Sound)
    binder.update(Sound, "mute")
    assert binder.page(Sound).messages == ["mute"]


def test_update_unregistered_page_is_ignored():
    binder = Binder()
    binder.register(Wifi)
    binder.update(Sound, "mute")
    assert binder.page(Sound) is None


def test_register_page_direct():
    binder = Binder()
    page = Wifi()
    id = binder.register_page(page)
    assert binder.model(id) is page
    assert binder.page(Wifi) is None


def test_info_defaults():
    info = Info("about", "about-icon")
    assert info.title == ""
    assert info.description == ""
    assert info.parent is None