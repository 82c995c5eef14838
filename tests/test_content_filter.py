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

"""Tests for the content policy filter."""

import pytest

from chart_scanner.core.content_filter import ContentPolicyFilter
from chart_scanner.core.scan_policy import ContentPolicy


class TestContentPolicyFilter:
    """Test extension-based eligibility."""

    @pytest.mark.parametrize(
        "name",
        ["README.md", "mychart/README.md", "mychart/docs/USAGE.MD", "notes.Md", "charts/sub/README.md"],
    )
    def test_markdown_is_eligible(self, name):
        """Markdown files are inspected regardless of case or depth."""
        assert ContentPolicyFilter([".md"]).is_eligible(name)

    @pytest.mark.parametrize(
        "name",
        ["Chart.yaml", "templates/NOTES.txt", "README.md.bak", "readmemd", "templates/_helpers.tpl"],
    )
    def test_other_files_are_skipped(self, name):
        """Only the configured suffixes are inspected."""
        assert not ContentPolicyFilter([".md"]).is_eligible(name)

    def test_extensions_are_normalized(self):
        """Extensions are lower-cased and given a leading dot."""
        content_filter = ContentPolicyFilter(["MD", " .TXT "])

        assert content_filter.extensions == (".md", ".txt")
        assert content_filter.is_eligible("templates/NOTES.txt")

    def test_empty_extension_set_inspects_nothing(self):
        """With no extensions configured nothing is eligible."""
        assert not ContentPolicyFilter([]).is_eligible("README.md")

    def test_default_is_markdown_only(self):
        """The baseline policy inspects ``.md`` only."""
        content_filter = ContentPolicyFilter()

        assert content_filter.extensions == (".md",)

    def test_from_policy(self):
        """A filter can be built from a content policy section."""
        policy = ContentPolicy(inspected_extensions=frozenset({".md", ".html"}))

        content_filter = ContentPolicyFilter.from_policy(policy)

        assert content_filter.is_eligible("docs/index.html")
        assert content_filter.is_eligible("README.md")
