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

"""Tests for the sanitization-diff check."""

import pytest

from chart_scanner.core.analyzers.sanitization import SanitizationAnalyzer, Sanitizer, render_patch
from chart_scanner.core.models import ArchiveEntry, Policy


@pytest.fixture
def sanitizer() -> Sanitizer:
    return Sanitizer()


@pytest.fixture
def analyzer() -> SanitizationAnalyzer:
    return SanitizationAnalyzer()


class TestSanitizer:
    """Test the user-generated-content sanitizer."""

    @pytest.mark.parametrize(
        "text",
        [
            "# Title\n\nPlain text with `code` and **bold**.\n",
            "Use helm install --set a=b\n",
            "Comparisons: a < b & c > d\n",
            "Quotes \"double\" and 'single'\n",
            "Some <b>bold</b> and <em>emphasis</em>.\n",
            "",
        ],
    )
    def test_safe_text_is_unchanged(self, sanitizer, text):
        """Plain text and allow-listed markup survive sanitization unchanged."""
        assert sanitizer.normalize(text) == text

    def test_script_is_removed_with_content(self, sanitizer):
        """Script tags are dropped along with their body."""
        assert sanitizer.normalize("before<script>alert(1)</script>after") == "beforeafter"

    def test_event_handler_attribute_is_removed(self, sanitizer):
        """Event-handler attributes are not on the allow-list."""
        cleaned = sanitizer.normalize('<img src="logo.png" onerror="alert(1)">')

        assert "onerror" not in cleaned
        assert 'src="logo.png"' in cleaned

    def test_javascript_url_is_removed(self, sanitizer):
        """Dangerous URL schemes are stripped from links."""
        cleaned = sanitizer.normalize('<a href="javascript:alert(1)">click</a>')

        assert "javascript:" not in cleaned

    def test_iframe_is_removed(self, sanitizer):
        """Tags outside the allow-list are removed."""
        assert "iframe" not in sanitizer.normalize('<iframe src="https://evil.example"></iframe>')


class TestRenderPatch:
    """Test the human-readable diff."""

    def test_unified_diff_headers_and_lines(self):
        """The patch names the file and marks removed and added lines."""
        patch = render_patch("line one\n<script>x</script>\n", "line one\n\n", "README.md")

        assert "--- a/README.md" in patch
        assert "+++ b/README.md" in patch
        assert "-<script>x</script>\n" in patch
        assert "+\n" in patch

    def test_missing_trailing_newline(self):
        """Lines without a final newline get a marker so lines stay separate."""
        patch = render_patch("a<script></script>", "a")

        assert "-a<script></script>\n\\ No newline at end of file\n" in patch
        assert "+a\n\\ No newline at end of file\n" in patch

    def test_identical_texts_give_empty_patch(self):
        """No difference means no patch."""
        assert render_patch("same\n", "same\n", "README.md") == ""


class TestSanitizationAnalyzer:
    """Test the per-entry check."""

    def test_clean_text_passes(self, analyzer):
        """Unchanged text produces no violation."""
        assert analyzer.check_text("README.md", "# Hello\n\nWorld\n") is None

    def test_script_injection_is_reported(self, analyzer):
        """A script tag in documentation is a malicious-content violation."""
        violation = analyzer.check_text("mychart/README.md", "# Hello\n<script>alert(1)</script>\n")

        assert violation is not None
        assert violation.policy == Policy.MALICIOUS_CONTENT
        assert violation.violation == "chart contains malicious content in file: mychart/README.md"
        assert "-<script>alert(1)</script>" in violation.context

    def test_analyze_reads_entry(self, analyzer):
        """The analyzer reads content through the entry."""
        entry = ArchiveEntry(name="README.md", size=9, _reader=lambda: b"<script>")

        violation = analyzer.analyze(entry)

        assert violation is not None
        assert "README.md" in violation.violation

    def test_invalid_utf8_does_not_raise(self, analyzer):
        """Undecodable bytes are replaced rather than failing the scan."""
        entry = ArchiveEntry(name="README.md", size=7, _reader=lambda: b"\xff\xfeplain")

        assert analyzer.analyze(entry) is None

    def test_analyzer_name(self, analyzer):
        assert analyzer.get_name() == "sanitization"
