# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================

"""
Name-keyed registry of the lucide icons used across the site.

The frontend looks icons up by their lucide-react component name
(e.g. "ArrowUpRight"). The registry is built once at import time and is
read-only afterwards.
"""

from dataclasses import dataclass
from html import escape
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Protocol
import re

LUCIDE_STATIC_BASE_URL = "https://unpkg.com/lucide-static@latest/icons"

# lucide-react component names referenced by the site pages and services.
SITE_ICON_NAMES = (
    "Activity",
    "ArrowUpRight",
    "Calendar",
    "CheckCircle",
    "ClipboardList",
    "Clock",
    "Globe",
    "Heart",
    "Mail",
    "Map",
    "MapPin",
    "Navigation",
    "Phone",
    "Star",
    "Stethoscope",
    "Target",
    "TestTube",
    "UserPlus",
    "Users",
)

_CATEGORY_ICONS = {
    "diagnostic": "Stethoscope",
    "consultation": "ClipboardList",
    "specialist": "UserPlus",
    "laboratory": "TestTube",
    "foreign_medical": "Globe",
}
DEFAULT_CATEGORY_ICON = "Activity"

_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


class RenderableIcon(Protocol):
    name: str

    def render(self, size: int = 24, **attrs: str) -> str:
        ...


def to_kebab_case(name: str) -> str:
    return _WORD_BOUNDARY.sub("-", name).lower()


@dataclass(frozen=True)
class Icon:
    """A lucide icon addressable by its component name."""

    name: str

    @property
    def slug(self) -> str:
        return to_kebab_case(self.name)

    @property
    def svg_url(self) -> str:
        return f"{LUCIDE_STATIC_BASE_URL}/{self.slug}.svg"

    def render(self, size: int = 24, **attrs: str) -> str:
        """Returns lucide placeholder markup, replaced client-side by the SVG."""
        extra = "".join(
            f' {key.replace("_", "-")}="{escape(str(value))}"'
            for key, value in sorted(attrs.items())
        )
        return (
            f'<i data-lucide="{self.slug}" width="{size}" height="{size}"{extra}></i>'
        )


def build_icon_registry(names: Iterable[str]) -> Mapping[str, RenderableIcon]:
    return MappingProxyType({name: Icon(name) for name in names})


ICON_REGISTRY: Mapping[str, RenderableIcon] = build_icon_registry(SITE_ICON_NAMES)


def get_icon(name: str) -> Optional[RenderableIcon]:
    return ICON_REGISTRY.get(name)


def category_icon(category: str) -> str:
    """Maps a service category onto the name of the icon shown for it."""
    return _CATEGORY_ICONS.get(category, DEFAULT_CATEGORY_ICON)
