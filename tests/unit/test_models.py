import pytest

from attribution_document.models import (
    AnalysisResult,
    Identifier,
    LicenseFinding,
    PackageRecord,
    PathExclude,
    ProjectRecord,
    binary_filename_from_url,
)


def test_identifier_from_coordinates():
    """Test parsing an identifier from its coordinates."""
    id = Identifier.from_coordinates("Maven:org.example:lib:2.1")
    assert id == Identifier("Maven", "org.example", "lib", "2.1")
    assert id.to_coordinates() == "Maven:org.example:lib:2.1"


def test_identifier_from_coordinates_with_empty_namespace():
    """Test that an empty namespace is kept."""
    id = Identifier.from_coordinates("NPM::util:0.3.0")
    assert id.namespace == ""
    assert id.name == "util"


def test_identifier_version_may_contain_colons():
    """Test that colons after the name belong to the version."""
    id = Identifier.from_coordinates("Debian::libc6:1:2.31")
    assert id == Identifier("Debian", "", "libc6", "1:2.31")
    assert id.to_coordinates() == "Debian::libc6:1:2.31"


def test_identifier_from_invalid_coordinates():
    """Test that malformed coordinates are rejected."""
    with pytest.raises(ValueError, match="Invalid identifier"):
        Identifier.from_coordinates("Maven:lib:2.1")


def test_identifier_purl():
    """Test package URL derivation."""
    assert Identifier("Maven", "org.example", "lib", "2.1").purl == "pkg:maven/org.example/lib@2.1"
    assert Identifier("NPM", "", "util", "0.3.0").purl == "pkg:npm/util@0.3.0"


def test_package_record_prefers_explicit_purl():
    """Test that an explicit purl wins over the derived one."""
    id = Identifier("Maven", "org.example", "lib", "2.1")
    assert PackageRecord(id=id).package_url == "pkg:maven/org.example/lib@2.1"
    assert PackageRecord(id=id, purl="pkg:generic/lib@2.1").package_url == "pkg:generic/lib@2.1"


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://repo.example.org/lib/2.1/lib-2.1.jar", "lib-2.1.jar"),
        ("https://repo.example.org/lib-2.1.jar?download=1", "lib-2.1.jar"),
        ("lib-2.1.jar", "lib-2.1.jar"),
        ("https://repo.example.org/", None),
        ("", None),
        (None, None),
    ],
)
def test_binary_filename_from_url(url, expected):
    """Test extracting the binary file name from an artifact URL."""
    assert binary_filename_from_url(url) == expected


def test_license_sources_of_unknown_identifier_are_empty():
    """Test that unknown identifiers have no licenses instead of failing."""
    result = AnalysisResult()
    id = Identifier("Maven", "x", "y", "1")
    assert result.get_concluded_licenses(id) == []
    assert result.get_declared_licenses(id) == []
    assert result.get_detected_licenses(id) == []


def test_collect_license_findings_omits_excluded(analysis_result, lib_id):
    """Test that findings matching a path exclude are dropped."""
    findings = analysis_result.collect_license_findings(omit_excluded=True)

    paths = [finding.path for finding in findings[lib_id]]
    assert paths == ["LICENSE", "NOTICE"]


def test_collect_license_findings_keeps_excluded_on_request(analysis_result, lib_id):
    """Test that excluded findings can be kept together with their excludes."""
    findings = analysis_result.collect_license_findings(omit_excluded=False)

    excluded = LicenseFinding("MIT", ("Copyright (c) Test Fixtures",), "test/fixture.js")
    assert findings[lib_id][excluded] == [PathExclude("test/**", "TEST_OF")]


def test_license_sources_of_packages_and_projects():
    """Test lookups of both packages and projects by identifier."""
    result = AnalysisResult(
        projects=[ProjectRecord(Identifier("Gradle", "", "app", "1.0"), declared_licenses=["MIT"])],
        packages=[
            PackageRecord(Identifier("NPM", "", f"pkg{i}", "1.0"), concluded_licenses=[f"L{i}"])
            for i in range(100)
        ],
    )

    assert result.get_concluded_licenses(Identifier("NPM", "", "pkg42", "1.0")) == ["L42"]
    assert result.get_declared_licenses(Identifier("Gradle", "", "app", "1.0")) == ["MIT"]


def test_license_sources_follow_replaced_records():
    """Test that lookups see records added or replaced after a first lookup."""
    app = Identifier("Gradle", "", "app", "1.0")
    lib = Identifier("Maven", "org.example", "lib", "2.1")
    result = AnalysisResult()
    assert result.get_declared_licenses(app) == []

    result.projects = [ProjectRecord(app, declared_licenses=["MIT"])]
    result.packages.append(PackageRecord(lib, detected_licenses=["Apache-2.0"]))

    assert result.get_declared_licenses(app) == ["MIT"]
    assert result.get_detected_licenses(lib) == ["Apache-2.0"]


def test_first_record_wins_for_duplicate_identifiers():
    id = Identifier("Maven", "org.example", "lib", "2.1")
    result = AnalysisResult(
        packages=[
            PackageRecord(id, declared_licenses=["MIT"]),
            PackageRecord(id, declared_licenses=["BSD-3-Clause"]),
        ]
    )

    assert result.get_declared_licenses(id) == ["MIT"]
