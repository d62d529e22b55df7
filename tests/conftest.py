"""Pytest configuration and fixtures."""

from typing import Optional

import pytest

from attribution_document.models import (
    AnalysisResult,
    Identifier,
    LicenseFinding,
    PackageRecord,
    PathExclude,
    ProjectRecord,
)
from attribution_document.providers.base import LicenseTextProvider


class DictLicenseTextProvider(LicenseTextProvider):
    """In-memory provider for tests."""

    def __init__(self, texts: Optional[dict[str, str]] = None, priority: int = 100) -> None:
        self.texts = texts or {}
        self._priority = priority

    @property
    def name(self) -> str:
        return "dict"

    @property
    def priority(self) -> int:
        return self._priority

    def get_license_text(self, license_id: str) -> Optional[str]:
        return self.texts.get(license_id)


@pytest.fixture
def project_id() -> Identifier:
    return Identifier("Gradle", "com.example", "app", "1.0.0")


@pytest.fixture
def lib_id() -> Identifier:
    return Identifier("Maven", "org.example", "lib", "2.1")


@pytest.fixture
def util_id() -> Identifier:
    return Identifier("NPM", "", "util", "0.3.0")


@pytest.fixture
def analysis_result(project_id, lib_id, util_id) -> AnalysisResult:
    """A result with one project and two packages.

    - lib: declared MIT, detected MIT and Apache-2.0, no concluded license.
    - util: concluded BSD-3-Clause, overriding its declared GPL-2.0-only.
    """
    return AnalysisResult(
        projects=[
            ProjectRecord(id=project_id, declared_licenses=["Apache-2.0"]),
        ],
        packages=[
            PackageRecord(
                id=lib_id,
                binary_artifact_url="https://repo.example.org/lib/2.1/lib-2.1.jar",
                declared_licenses=["MIT"],
                detected_licenses=["MIT", "Apache-2.0"],
            ),
            PackageRecord(
                id=util_id,
                declared_licenses=["GPL-2.0-only"],
                concluded_licenses=["BSD-3-Clause"],
            ),
        ],
        license_findings={
            project_id: [
                (LicenseFinding("Apache-2.0", ("Copyright 2024 Example Corp",), "LICENSE"), []),
            ],
            lib_id: [
                (LicenseFinding("MIT", ("Copyright (c) 2019 Jane Doe",), "LICENSE"), []),
                (
                    LicenseFinding("Apache-2.0", ("Copyright 2020 Apache Fans",), "NOTICE"),
                    [],
                ),
                (
                    LicenseFinding("MIT", ("Copyright (c) Test Fixtures",), "test/fixture.js"),
                    [PathExclude("test/**", "TEST_OF")],
                ),
            ],
            util_id: [
                (LicenseFinding("GPL-2.0-only", ("Copyright (C) 1991 FSF",), "COPYING"), []),
                (LicenseFinding("BSD-3-Clause", ("Copyright (c) 2015 Util Authors",), "LICENSE"), []),
            ],
        },
    )


@pytest.fixture
def text_provider() -> DictLicenseTextProvider:
    return DictLicenseTextProvider(
        {
            "MIT": "Permission\tis granted",
            "Apache-2.0": "Apache License\nVersion 2.0",
        }
    )


@pytest.fixture
def make_text_provider():
    """Return a factory for in-memory license text providers."""
    return DictLicenseTextProvider
