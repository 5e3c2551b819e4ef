# settingspages

Building blocks for a desktop settings panel.

- `settingspages.binder`: a `Binder` that registers pages, keeps each
  page's `Info`, its sections, sub-pages, per-page data and shared
  resources, and searches the pages' sections.
- `settingspages.section`: `Section`, a searchable part of a page with a
  title, descriptions, a view function and a `search_ignore` flag.
- `settingspages.wallpaper`: the default wallpaper colours
  (`DEFAULT_COLORS`), loading of wallpaper images under a directory into
  display and selection thumbnails with rounded corners, and a thumbnail
  cache.
- `settingspages.about`: system information such as hardware model,
  operating system, processor, memory, disk capacity and graphics.

## Installation

```
pip install .
```

With what the tests need:

```
pip install ".[test]"
```

## Pages

A page subclasses `Page` and implements `info()`. Its sections can be
given as the class attribute `SECTIONS` (copied into the binder on
registration), its sub-pages as `SUB_PAGES`, and a refresh callable as
`LOADER`, which `Binder.page_reload` calls to obtain an awaitable.

```python
import re
from settingspages.binder import Binder, Info, Page
from settingspages.section import Section


class Resolution(Page):
    def info(self):
        return Info("resolution", "video-display", title="Resolution")


class Display(Page):
    SECTIONS = (Section(title="Scale", descriptions=["Screen size"]),)
    SUB_PAGES = (Resolution,)

    def info(self):
        return Info("display", "preferences-desktop-display", title="Display")


binder = Binder()
display_id = binder.register(Display).id

print(binder.sub_pages(display_id))          # ids of Resolution
for page_id, section_id in binder.search(re.compile("screen", re.IGNORECASE)):
    print(binder.info[page_id].title, binder.sections[section_id].title)
```

`search` accepts a string or a compiled pattern and matches it anywhere
in a section's title or descriptions. Sections with `search_ignore` set
never match.

Other `Binder` methods:

- `page(PageType)` returns the registered page of that type;
  `model(id)` returns a page by id; `contains_item(id)` checks for one.
- `content(id)` and `sub_pages(id)` return tuples of ids, or `None`.
- `data_set(id, value)`, `data(id, Type)` and `data_remove(id, Type)`
  keep one value per type for each registered page.
- `resource_register(Type)` creates `Type()` once; `resource(Type)`
  returns it.
- `update(PageType, message)` calls the page's `update(message)` method
  if a page of that type is registered.

`Section.view(ModelType, func)` sets the view function; calling it with a
page of another type raises `TypeError`.

## System information

```python
from settingspages.about import Info

info = Info.load()
print(info.hardware_model, info.operating_system, info.memory)
```

`Info.load` reads `/sys/devices/virtual/dmi/id/`, `/etc/os-release`,
`/proc/cpuinfo` and `/proc/sys/kernel/arch`, uses `psutil` for memory and
disk totals, takes the windowing system and desktop from
`XDG_SESSION_TYPE` and `DESKTOP_SESSION`, and runs `lspci` for graphics
devices. Values that cannot be read are left empty. The helpers
`hardware_model`, `operating_system` and `processor_name` take the file
paths to read, and `format_size` formats a byte count with binary units,
e.g. `format_size(1536)` gives `"1.50 KiB"`.

## Wallpaper thumbnails

```python
from settingspages.wallpaper import load_each_from_path

for path, display, selection in load_each_from_path("/usr/share/backgrounds"):
    print(path, display.size, selection.size)
```

Every image below the directory is fitted within 300×169 for display and
resized to 158×105 with corners of radius 8 rounded off for selection.
Work runs in a thread pool, and results are yielded as they finish.
Generated thumbnails are saved as PNG files under the user cache
directory (`settingspages/wallpapers`, see `cache_dir()`), and later runs
use them. Files that cannot be decoded as images are skipped.
`round_corners(img, (tl, tr, br, bl))` rounds the corners of any RGBA
image in place.

## What this package does not do

It draws no user interface: view functions are stored and called, but
nothing renders them. It does not apply a wallpaper or write any
desktop configuration, and it does not list connected displays.

## Tests

```
pytest
```