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

"""API router for Chart Scanner endpoints.

A composable ``APIRouter`` that can be mounted in other FastAPI
applications, for example a chart repository's upload handler.
"""

import logging
import uuid

from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from pydantic import BaseModel

from .. import __version__ as PACKAGE_VERSION
from ..core.exceptions import ChartArchiveError
from ..core.scan_policy import ScanPolicy
from ..core.scanner import ChartScanner

logger = logging.getLogger("chart_scanner.api")

router = APIRouter()

CHART_ARCHIVE_SUFFIXES = (".tgz", ".tar.gz")


# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class ScanResponse(BaseModel):
    """Response model for scan results."""

    scan_id: str
    archive_name: str
    is_safe: bool
    policy: str | None = None
    violation: str | None = None
    context: str | None = None
    entries_scanned: int
    entries_inspected: int
    scan_duration_seconds: float
    timestamp: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    policy_presets: list[str]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _resolve_policy(policy_str: str | None) -> ScanPolicy:
    """Resolve a preset name to a ScanPolicy object.

    Only presets are accepted over HTTP; arbitrary server-side paths are not.
    """
    if policy_str is None or not policy_str.strip():
        return ScanPolicy.default()
    try:
        return ScanPolicy.from_preset(policy_str.strip())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get("/", response_model=dict)
async def root():
    """Root endpoint."""
    return {"service": "Chart Scanner API", "version": PACKAGE_VERSION, "docs": "/docs", "health": "/health"}


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=PACKAGE_VERSION, policy_presets=ScanPolicy.preset_names())


@router.post("/scan-upload", response_model=ScanResponse)
def scan_uploaded_chart(
    file: UploadFile = File(..., description="Gzip-compressed chart archive"),
    policy: str | None = Form(None, description="Scan policy preset name"),
):
    """Scan an uploaded chart archive (.tgz).

    The upload is handed to the scanner as a stream; the scanner's own size
    limit bounds how much of it is read.
    """
    if not file.filename or not file.filename.lower().endswith(CHART_ARCHIVE_SUFFIXES):
        raise HTTPException(status_code=400, detail="File must be a gzip-compressed chart archive (.tgz)")

    scanner = ChartScanner(policy=_resolve_policy(policy))

    try:
        result = scanner.scan(file.file, archive_name=file.filename)
    except ChartArchiveError as e:
        logger.info("Rejected upload %s: %s", file.filename, e)
        raise HTTPException(status_code=400, detail=str(e)) from e
    finally:
        file.file.close()

    violation = result.violation
    return ScanResponse(
        scan_id=str(uuid.uuid4()),
        archive_name=result.archive_name,
        is_safe=result.is_safe,
        policy=violation.policy.value if violation else None,
        violation=violation.violation if violation else None,
        context=violation.context if violation else None,
        entries_scanned=result.entries_scanned,
        entries_inspected=result.entries_inspected,
        scan_duration_seconds=result.scan_duration_seconds,
        timestamp=result.timestamp.isoformat(),
    )
