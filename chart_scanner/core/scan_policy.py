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
Scan policy: size limits and the set of inspected file types.

A ``ScanPolicy`` captures how large a chart archive may be (compressed and
uncompressed) and which entries are checked for injected markup.

Usage
-----
    from chart_scanner.core.scan_policy import ScanPolicy

    # Load built-in defaults
    policy = ScanPolicy.default()

    # Load an org policy (merges on top of defaults)
    policy = ScanPolicy.from_yaml("my_policy.yaml")

    # Dump the current (including default) policy for editing
    policy.to_yaml("generated_policy.yaml")

A scanner receives the policy at construction time; limits and extensions
stay fixed for the lifetime of that scanner.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from ..config.constants import ChartScannerConstants
from ..data import DEFAULT_POLICY_PATH, PERMISSIVE_POLICY_PATH, STRICT_POLICY_PATH

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Where the built-in default policy lives (ships with the package)
# ---------------------------------------------------------------------------
_DEFAULT_POLICY_PATH = DEFAULT_POLICY_PATH

# Named preset policies
_PRESET_POLICIES: dict[str, Path] = {
    "strict": STRICT_POLICY_PATH,
    "balanced": _DEFAULT_POLICY_PATH,
    "permissive": PERMISSIVE_POLICY_PATH,
}


def normalize_extensions(extensions: Iterable[str]) -> frozenset[str]:
    """Lower-case extensions and make sure each starts with a dot."""
    normalized = set()
    for ext in extensions:
        ext = str(ext).strip().lower()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = "." + ext
        normalized.add(ext)
    return frozenset(normalized)


# ---------------------------------------------------------------------------
# Data classes for each policy section
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ArchiveLimits:
    """Upper bounds on archive size, before and after decompression."""

    max_compressed_size_bytes: int = ChartScannerConstants.DEFAULT_MAX_COMPRESSED_SIZE
    max_uncompressed_size_bytes: int = ChartScannerConstants.DEFAULT_MAX_UNCOMPRESSED_SIZE

    def __post_init__(self):
        for name in ("max_compressed_size_bytes", "max_uncompressed_size_bytes"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")


@dataclass(frozen=True)
class ContentPolicy:
    """Controls which archive entries are inspected for injected markup."""

    inspected_extensions: frozenset[str] = ChartScannerConstants.DEFAULT_INSPECTED_EXTENSIONS

    def __post_init__(self):
        object.__setattr__(self, "inspected_extensions", normalize_extensions(self.inspected_extensions))


# ---------------------------------------------------------------------------
# Top-level policy
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ScanPolicy:
    """Complete scan policy for chart archives."""

    policy_name: str = "default"
    policy_version: str = "1.0"
    limits: ArchiveLimits = field(default_factory=ArchiveLimits)
    content: ContentPolicy = field(default_factory=ContentPolicy)

    # -----------------------------------------------------------------------
    # Construction helpers
    # -----------------------------------------------------------------------

    @classmethod
    def default(cls) -> ScanPolicy:
        """Load the built-in default policy that ships with the package."""
        return cls.from_yaml(_DEFAULT_POLICY_PATH)

    @classmethod
    def from_preset(cls, name: str) -> ScanPolicy:
        """Load a named preset policy: ``strict``, ``balanced``, or ``permissive``."""
        name_lower = name.lower()
        if name_lower not in _PRESET_POLICIES:
            raise ValueError(f"Unknown preset '{name}'. Available: {', '.join(sorted(_PRESET_POLICIES))}")
        return cls.from_yaml(_PRESET_POLICIES[name_lower])

    @classmethod
    def preset_names(cls) -> list[str]:
        """Return available preset policy names."""
        return sorted(_PRESET_POLICIES.keys())

    @classmethod
    def resolve(cls, value: str | Path | None) -> ScanPolicy:
        """Resolve a preset name or a YAML path; ``None`` gives the default."""
        if value is None or not str(value).strip():
            return cls.default()
        value_str = str(value).strip()
        if value_str.lower() in _PRESET_POLICIES:
            return cls.from_preset(value_str)
        return cls.from_yaml(value_str)

    @classmethod
    def from_yaml(cls, path: str | Path) -> ScanPolicy:
        """
        Load a policy from a YAML file.

        The YAML is first merged on top of the built-in defaults so that
        users only need to specify the sections they want to override.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Policy file not found: {path}")

        with open(path) as fh:
            raw: dict[str, Any] = yaml.safe_load(fh) or {}

        if not isinstance(raw, dict):
            raise ValueError(f"Policy file {path} must contain a mapping, got {type(raw).__name__}")

        # If this IS the default file, just parse directly
        if path.resolve() == _DEFAULT_POLICY_PATH.resolve():
            policy = cls._from_dict(raw)
        else:
            merged = cls._deep_merge(cls._load_default_raw(), raw)
            policy = cls._from_dict(merged)

        logger.debug("Loaded scan policy %s from %s", policy.policy_name, path)
        return policy

    def to_yaml(self, path: str | Path) -> None:
        """Dump the full policy to a YAML file for editing."""
        data = self._to_dict()
        with open(path, "w") as fh:
            fh.write("# Chart Scanner – Scan Policy\n")
            fh.write("# Only include sections you want to override; omitted sections\n")
            fh.write("# will use the built-in defaults.\n\n")
            yaml.dump(data, fh, default_flow_style=False, sort_keys=False, width=120)

    def with_overrides(
        self,
        max_compressed_size_bytes: int | None = None,
        max_uncompressed_size_bytes: int | None = None,
        inspected_extensions: Iterable[str] | None = None,
    ) -> ScanPolicy:
        """Return a copy of this policy with the given values replaced."""
        limits = self.limits
        if max_compressed_size_bytes is not None:
            limits = replace(limits, max_compressed_size_bytes=max_compressed_size_bytes)
        if max_uncompressed_size_bytes is not None:
            limits = replace(limits, max_uncompressed_size_bytes=max_uncompressed_size_bytes)
        content = self.content
        if inspected_extensions is not None:
            content = ContentPolicy(inspected_extensions=frozenset(inspected_extensions))
        return replace(self, limits=limits, content=content)

    # -----------------------------------------------------------------------
    # Internal parsing
    # -----------------------------------------------------------------------

    @classmethod
    def _load_default_raw(cls) -> dict[str, Any]:
        if _DEFAULT_POLICY_PATH.exists():
            with open(_DEFAULT_POLICY_PATH) as fh:
                return yaml.safe_load(fh) or {}
        return {}

    @staticmethod
    def _deep_merge(base: dict, override: dict) -> dict:
        """Recursively merge *override* into *base*.

        Lists in the override **replace** the base list, so an org can
        narrow the inspected extensions without repeating every entry.
        """
        result = dict(base)
        for key, val in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(val, dict):
                result[key] = ScanPolicy._deep_merge(result[key], val)
            else:
                result[key] = val
        return result

    @classmethod
    def _from_dict(cls, d: dict[str, Any]) -> ScanPolicy:
        lm = d.get("limits", {}) or {}
        ct = d.get("content", {}) or {}

        limits = ArchiveLimits(
            max_compressed_size_bytes=lm.get(
                "max_compressed_size_bytes", ChartScannerConstants.DEFAULT_MAX_COMPRESSED_SIZE
            ),
            max_uncompressed_size_bytes=lm.get(
                "max_uncompressed_size_bytes", ChartScannerConstants.DEFAULT_MAX_UNCOMPRESSED_SIZE
            ),
        )
        extensions = ct.get("inspected_extensions", ChartScannerConstants.DEFAULT_INSPECTED_EXTENSIONS)
        if isinstance(extensions, str):
            extensions = extensions.split(",")
        content = ContentPolicy(inspected_extensions=frozenset(extensions))
        return cls(
            policy_name=str(d.get("policy_name", "default")),
            policy_version=str(d.get("policy_version", "1.0")),
            limits=limits,
            content=content,
        )

    def _to_dict(self) -> dict[str, Any]:
        return {
            "policy_name": self.policy_name,
            "policy_version": self.policy_version,
            "limits": {
                "max_compressed_size_bytes": self.limits.max_compressed_size_bytes,
                "max_uncompressed_size_bytes": self.limits.max_uncompressed_size_bytes,
            },
            "content": {
                "inspected_extensions": sorted(self.content.inspected_extensions),
            },
        }
