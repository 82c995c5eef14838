# Copyright 2026 Cisco Systems, Inc.
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
#
# SPDX-License-Identifier: Apache-2.0

"""
Sanitization-diff check for documentation files.

Rather than looking for known-bad patterns, the check runs each document
through an HTML sanitizer configured for user-generated content and
reports any difference between the original and the sanitized text.
A difference means the sanitizer removed or rewrote something it does
not allow: scripts, event-handler attributes, dangerous URL schemes and
so on.
"""

from __future__ import annotations

import difflib
import html
import logging

import nh3

from ...config.constants import ChartScannerConstants
from ..models import ArchiveEntry, Policy, PolicyViolation
from .base import BaseAnalyzer

logger = logging.getLogger(__name__)


# Allow-list for rendered user content (READMEs and similar documentation).
UGC_TAGS = frozenset(
    {
        "a",
        "abbr",
        "acronym",
        "address",
        "area",
        "article",
        "aside",
        "b",
        "bdi",
        "bdo",
        "blockquote",
        "br",
        "caption",
        "cite",
        "code",
        "col",
        "colgroup",
        "dd",
        "del",
        "details",
        "dfn",
        "div",
        "dl",
        "dt",
        "em",
        "figcaption",
        "figure",
        "footer",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "header",
        "hgroup",
        "hr",
        "i",
        "img",
        "ins",
        "kbd",
        "li",
        "map",
        "mark",
        "nav",
        "ol",
        "p",
        "pre",
        "q",
        "rp",
        "rt",
        "ruby",
        "s",
        "samp",
        "section",
        "small",
        "span",
        "strike",
        "strong",
        "sub",
        "summary",
        "sup",
        "table",
        "tbody",
        "td",
        "tfoot",
        "th",
        "thead",
        "time",
        "tr",
        "tt",
        "u",
        "ul",
        "var",
        "wbr",
    }
)

UGC_ATTRIBUTES: dict[str, set[str]] = {
    "*": {"dir", "lang", "id", "title"},
    "a": {"href"},
    "abbr": {"title"},
    "area": {"alt", "coords", "href", "shape"},
    "blockquote": {"cite"},
    "col": {"span", "width"},
    "colgroup": {"span", "width"},
    "del": {"cite", "datetime"},
    "details": {"open"},
    "img": {"align", "alt", "height", "src", "width"},
    "ins": {"cite", "datetime"},
    "map": {"name"},
    "ol": {"reversed", "start", "type"},
    "q": {"cite"},
    "table": {"summary"},
    "td": {"abbr", "align", "colspan", "headers", "rowspan", "valign"},
    "th": {"abbr", "align", "colspan", "headers", "rowspan", "scope", "valign"},
    "time": {"datetime"},
    "ul": {"type"},
}

UGC_URL_SCHEMES = frozenset({"http", "https", "mailto"})

# Removed together with their content rather than just unwrapped.
UGC_CLEAN_CONTENT_TAGS = frozenset({"script", "style"})

UGC_LINK_REL = "nofollow"


class Sanitizer:
    """HTML sanitizer with a fixed user-generated-content policy."""

    def __init__(
        self,
        tags: frozenset[str] = UGC_TAGS,
        attributes: dict[str, set[str]] | None = None,
        url_schemes: frozenset[str] = UGC_URL_SCHEMES,
        link_rel: str | None = UGC_LINK_REL,
    ):
        self.tags = set(tags)
        self.attributes = {tag: set(attrs) for tag, attrs in (attributes or UGC_ATTRIBUTES).items()}
        self.url_schemes = set(url_schemes)
        self.link_rel = link_rel

    def sanitize(self, text: str) -> str:
        """Clean ``text`` according to the allow-list."""
        return nh3.clean(
            text,
            tags=self.tags,
            clean_content_tags=set(UGC_CLEAN_CONTENT_TAGS),
            attributes=self.attributes,
            url_schemes=self.url_schemes,
            link_rel=self.link_rel,
            strip_comments=True,
        )

    def normalize(self, text: str) -> str:
        """Sanitize, then unescape the entities the sanitizer introduced."""
        return html.unescape(self.sanitize(text))


def render_patch(original: str, modified: str, name: str = "") -> str:
    """
    Render a unified diff between two texts.

    Lines without a trailing newline get a ``\\ No newline at end of file``
    marker so that every diff line stays on its own line.
    """
    diff = difflib.unified_diff(
        original.splitlines(keepends=True),
        modified.splitlines(keepends=True),
        fromfile=f"a/{name}" if name else "original",
        tofile=f"b/{name}" if name else "sanitized",
    )
    lines = []
    for line in diff:
        if not line.endswith("\n"):
            line += "\n\\ No newline at end of file\n"
        lines.append(line)
    return "".join(lines)


class SanitizationAnalyzer(BaseAnalyzer):
    """Flags documentation whose text is changed by sanitization."""

    def __init__(self, sanitizer: Sanitizer | None = None):
        super().__init__("sanitization")
        self.sanitizer = sanitizer or Sanitizer()

    def check_text(self, name: str, text: str) -> PolicyViolation | None:
        """Compare ``text`` to its sanitized form and report any difference."""
        sanitized = self.sanitizer.normalize(text)
        if sanitized == text:
            return None

        logger.debug("Sanitization changed %s (%d -> %d chars)", name, len(text), len(sanitized))
        return PolicyViolation(
            policy=Policy.MALICIOUS_CONTENT,
            violation=ChartScannerConstants.MESSAGE_MALICIOUS_CONTENT + name,
            context=render_patch(text, sanitized, name),
        )

    def analyze(self, entry: ArchiveEntry) -> PolicyViolation | None:
        return self.check_text(entry.name, entry.read_text())
