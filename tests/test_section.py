import re

import pytest

from settingspages.section import Section


class _Model:
    pass


class _OtherModel:
    pass


def test_title_matches():
    section = Section(title="Bluetooth devices")
    assert section.search_matches(re.compile("Bluetooth")) is True


def test_description_matches():
    section = Section(title="Network", descriptions=["Wired", "Wireless access"])
    assert section.search_matches(re.compile("access")) is True


def test_no_match():
    section = Section(title="Network", descriptions=["Wired"])
    assert section.search_matches(re.compile("Sound")) is False


def test_ignored_section_never_matches():
    section = Section(title="Network", search_ignore=True)
    assert section.search_matches(re.compile("Network")) is False


def test_string_rule_is_accepted():
    section = Section(title="Display scaling")
    assert section.search_matches("scal") is True
    assert section.search_matches("^scal") is False


def test_case_insensitive_rule():
    section = Section(title="Dark Mode")
    assert section.search_matches(re.compile("dark", re.IGNORECASE)) is True


def test_default_fields():
    section = Section()
    assert section.title == ""
    assert section.descriptions == []
    assert section.search_ignore is False


def test_view_returns_self_and_calls_func():
    section = Section(title="Panel")
    returned = section.view(_Model, lambda binder, model, sec: (binder, model, sec.title))
    assert returned is section
    model = _Model()
    assert section.view_fn("binder", model, section) == ("binder", model, "Panel")


def test_view_type_mismatch_raises():
    section = Section().view(_Model, lambda binder, model, sec: model)
    with pytest.raises(TypeError, match="page model type mismatch"):
        section.view_fn(None, _OtherModel(), section)


def test_descriptions_are_independent_between_instances():
    first = Section()
    second = Section()
    first.descriptions.append("only here")
    assert second.descriptions == []