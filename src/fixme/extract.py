"""Structured extraction of tag matches from a single line"""

from fixme.models import Match
from fixme.tags import DEFAULT_RULES, MatchRule


def apply_rule(rule: MatchRule, line: str) -> tuple[str, str] | None:
    """
    Run one tag's extraction pattern against a line.

    Args:
        rule: The tag rule to apply
        line: Decoded line text without its trailing newline

    Returns:
        (author, message) with the author exactly as written and the message
        trimmed, or None when the rule does not match or the message is empty
    """
    found = rule.pattern.search(line)
    if found is None:
        return None

    message = (found.group(2) or '').strip()
    if not message:
        # A bare tag with no text is not reported
        return None

    author = found.group(1) or ''
    return author, message


def extract_matches(line: str, line_number: int, rules: tuple[MatchRule, ...] = DEFAULT_RULES) -> list[Match]:
    """Return one Match per rule that matches the line, in rule table order."""
    matches = []
    for rule in rules:
        extracted = apply_rule(rule, line)
        if extracted is None:
            continue
        author, message = extracted
        matches.append(
            Match(
                line_number=line_number,
                tag=rule.tag.value,
                label=rule.label,
                author=author,
                message=message,
            )
        )
    return matches
