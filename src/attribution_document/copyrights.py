"""Copyright aggregation scoped to the selected licenses."""

from collections.abc import Collection

from attribution_document.models import FindingsByLicense, Identifier


def create_copyright_statement(
    id: Identifier,
    licenses: Collection[str],
    license_findings: dict[Identifier, FindingsByLicense],
) -> str:
    """Join the copyrights found for the given licenses of a package.

    Only findings whose license is one of ``licenses`` contribute. The
    statements keep the order of the findings and, within a finding, the
    order they were found in. Duplicates are kept.

    Args:
        id: Identifier of the package or project.
        licenses: The selected licenses of the package or project.
        license_findings: License findings of all identifiers.

    Returns:
        Newline separated copyright statements, empty if there are none.
    """
    findings = license_findings.get(id, {})
    statements = [
        statement
        for finding in findings
        if finding.license in licenses
        for statement in finding.copyrights
    ]
    return "\n".join(statements)
