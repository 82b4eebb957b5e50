"""
Plain-text rendering of issue lists for reminder messages.
"""

from ..core.domain.entities import ExtendedIssue


EMPTY_LIST_TEXT = "Nothing to do!"


def format_issue_list(issues: list[ExtendedIssue]) -> str:
    if not issues:
        return EMPTY_LIST_TEXT

    lines = ["", ""]
    for extended in issues:
        created = extended.issue.create_at
        date = f"{created:%B} {created.day}, {created:%Y at %H:%M}"
        lines.append(f"* {extended.issue.message}")
        lines.append(f"  * ({date})")
    return "\n".join(lines) + "\n"
