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
Selection of archive entries that are subject to content inspection.
"""

from collections.abc import Iterable

from .scan_policy import ContentPolicy, normalize_extensions


class ContentPolicyFilter:
    """Decides by file-name suffix whether an entry is inspected."""

    def __init__(self, extensions: Iterable[str] | None = None):
        if extensions is None:
            extensions = ContentPolicy().inspected_extensions
        # str.endswith wants a tuple; sort for a stable repr
        self._suffixes = tuple(sorted(normalize_extensions(extensions)))

    @classmethod
    def from_policy(cls, policy: ContentPolicy) -> "ContentPolicyFilter":
        return cls(policy.inspected_extensions)

    @property
    def extensions(self) -> tuple[str, ...]:
        return self._suffixes

    def is_eligible(self, name: str) -> bool:
        """Case-insensitive suffix match of ``name`` against the configured extensions."""
        if not self._suffixes:
            return False
        return name.lower().endswith(self._suffixes)

    def __repr__(self) -> str:
        return f"ContentPolicyFilter({list(self._suffixes)!r})"
