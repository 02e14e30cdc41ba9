"""User-facing text rendering."""

from __future__ import annotations

from .catalog import CatalogSection
from .consistency import ConsistencyReport
from .constants import ERROR_PREFIX, VIOLATION_PREFIX


def render_error(message: str) -> str:
    return f"{ERROR_PREFIX} {message}"


def render_report_lines(report: ConsistencyReport) -> list[str]:
    if report.ok:
        return [f"{report.library}: guard metadata is consistent"]

    lines = [f"{report.library}: {len(report.violations)} violation(s)"]
    if report.coverage:
        lines.append(f"Untagged members ({len(report.coverage)}):")
        lines.extend(f"  {VIOLATION_PREFIX} {v.member}" for v in report.coverage)
    if report.shortcuts:
        lines.append(f"Shortcut collisions ({len(report.shortcuts)}):")
        for violation in report.shortcuts:
            lines.append(
                f"  {VIOLATION_PREFIX} {violation.shortcut}: {', '.join(violation.method_names)}"
            )
    return lines


def render_catalog_text(sections: list[CatalogSection]) -> str:
    if not sections:
        return "No guard functions found."

    lines: list[str] = []
    for section in sections:
        lines.append(f"{section.group}:")
        width = max(len(entry.shortcut or "") for entry in section.entries)
        for entry in section.entries:
            shortcut = (entry.shortcut or "").ljust(width)
            lines.append(f"  {shortcut}  {entry.member}".rstrip())
        lines.append("")
    return "\n".join(lines).rstrip()


def render_catalog_markdown(sections: list[CatalogSection]) -> str:
    if not sections:
        return "_No guard functions found._\n"

    lines: list[str] = []
    for section in sections:
        lines.append(f"## {section.group}")
        lines.append("")
        for entry in section.entries:
            suffix = f" (`{entry.shortcut}`)" if entry.shortcut else ""
            lines.append(f"- `{entry.member.qualified_name}{entry.member.signature}`{suffix}")
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"
