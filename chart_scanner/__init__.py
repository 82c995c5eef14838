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
Chart Scanner - Security scanner for Helm chart archives.
"""

try:
    from ._version import __version__
except ImportError:
    __version__ = "0.0.0+unknown"

__author__ = "Cisco Systems, Inc."


def __getattr__(name: str):
    """Lazy-load public API symbols on first access.

    Keeps ``import chart_scanner`` cheap for the CLI and the API server,
    which only need a subset of the package.
    """
    _lazy_map = {
        "Config": (".config.config", "Config"),
        "ChartScannerConstants": (".config.constants", "ChartScannerConstants"),
        "ChartScannerError": (".core.exceptions", "ChartScannerError"),
        "ChartArchiveError": (".core.exceptions", "ChartArchiveError"),
        "PolicyViolationError": (".core.exceptions", "PolicyViolationError"),
        "ArchiveEntry": (".core.models", "ArchiveEntry"),
        "Policy": (".core.models", "Policy"),
        "PolicyViolation": (".core.models", "PolicyViolation"),
        "ScanResult": (".core.models", "ScanResult"),
        "ScanPolicy": (".core.scan_policy", "ScanPolicy"),
        "ChartScanner": (".core.scanner", "ChartScanner"),
        "scan_chart": (".core.scanner", "scan_chart"),
        "scan_chart_file": (".core.scanner", "scan_chart_file"),
        "bounded_copy": (".core.bounded", "bounded_copy"),
    }
    if name in _lazy_map:
        module_path, attr = _lazy_map[name]
        import importlib

        mod = importlib.import_module(module_path, __package__)
        val = getattr(mod, attr)
        # Cache on the module so __getattr__ is only called once per symbol
        globals()[name] = val
        return val
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "ChartScanner",
    "scan_chart",
    "scan_chart_file",
    "bounded_copy",
    "ArchiveEntry",
    "Policy",
    "PolicyViolation",
    "ScanResult",
    "ScanPolicy",
    "ChartScannerError",
    "ChartArchiveError",
    "PolicyViolationError",
    "Config",
    "ChartScannerConstants",
]
