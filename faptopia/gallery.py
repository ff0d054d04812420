""" This module renders gallery sections into a standalone HTML page. """

import re
from functools import cache
from html import escape
from importlib.resources import files
from pathlib import Path
from typing import assert_never

from faptopia.typing_custom import MediaItem, MediaKind, SaveStatus, Section
from faptopia.utils import guess_video_type

_PLACEHOLDER = re.compile(r"\{\{(\w+)\}\}")


@cache
def _template(name: str) -> str:
    return (files("faptopia") / "templates" / name).read_text(encoding="utf-8")


def _fill(template: str, values: dict[str, str]) -> str:
    # Single pass, so placeholder-like text inside injected values is left alone
    return _PLACEHOLDER.sub(lambda match: values[match.group(1)], template)


def _render_item(item: MediaItem, section_index: int, index: int) -> str:
    position = f"{section_index}-{index}"
    eager = index == 0
    url = escape(item.url)

    match item.kind:
        case MediaKind.VIDEO:
            return (
                f'<div class="gallery-item" data-index="{position}">\n'
                f'    <video controls{" autoplay muted" if eager else ""} playsinline'
                f' data-index="{position}" preload="{"auto" if eager else "none"}">\n'
                f'        <source src="{url}" type="{guess_video_type(item.url)}">\n'
                f'    </video>\n'
                f'</div>'
            )
        case MediaKind.EMBED:
            return (
                f'<div class="gallery-item" data-index="{position}">\n'
                f'    <iframe src="{url}" frameborder="0" allowfullscreen'
                f' sandbox="allow-same-origin allow-scripts" loading="{"eager" if eager else "lazy"}"></iframe>\n'
                f'</div>'
            )
        case _:
            assert_never(item.kind)


def _render_tab(section: Section, section_index: int) -> str:
    active = " active" if section_index == 0 else ""
    return (f'<button class="tab-button{active}" onclick="showSection({section_index})">'
            f'{escape(section.label)}</button>')


def _render_section(section: Section, section_index: int) -> str:
    state = "active" if section_index == 0 else "hidden"
    items = "\n".join(_render_item(item, section_index, index) for index, item in enumerate(section.items))
    return (
        f'<div class="gallery-section {state}" data-section="{section_index}">\n'
        f'<div class="gallery-container" id="gallery-{section_index}">\n'
        f'{items}\n'
        f'</div>\n'
        f'</div>'
    )


def generate_gallery(sections: list[Section]) -> str:
    """
    Renders the sections into one HTML document with a tab per section.

    The first section starts visible and the first item of every section is the only one that
    autoplays and preloads. The output only depends on the input, so equal input gives equal bytes.
    """
    script = _fill(_template("script.js"), {"TOTAL_SECTIONS": str(len(sections))})

    return _fill(_template("gallery.html"), {
        "STYLES": _template("styles.css"),
        "TABS": "\n".join(_render_tab(section, i) for i, section in enumerate(sections)),
        "SECTIONS": "\n".join(_render_section(section, i) for i, section in enumerate(sections)),
        "SCRIPT": script,
    })


def save_gallery(sections: list[Section], path: Path) -> SaveStatus:
    """ Writes the gallery of the sections to the path, unless there's nothing to show. """
    if sum(len(section.items) for section in sections) == 0:
        return SaveStatus.EMPTY

    with open(path, "w", encoding="utf-8") as f:
        f.write(generate_gallery(sections))
    return SaveStatus.SAVED
