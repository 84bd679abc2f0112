"""Comment tag table: one extraction rule and one display style per tag"""

import re
from dataclasses import dataclass
from enum import Enum


class Tag(str, Enum):
    NOTE = 'NOTE'
    OPTIMIZE = 'OPTIMIZE'
    TODO = 'TODO'
    HACK = 'HACK'
    XXX = 'XXX'
    FIXME = 'FIXME'
    BUG = 'BUG'


# Generic comment openers: //, /*, # and %
COMMENT_PREFIX = r'(?:/[/*]|#|%)'


def build_tag_regex(keyword: str) -> re.Pattern:
    """
    Compile the extraction pattern for a single tag keyword.

    Group 1 is the optional author, written in parentheses right after the
    keyword. Group 2 is everything after the optional colon.
    """
    return re.compile(
        COMMENT_PREFIX + r'\s*' + re.escape(keyword) + r'\b\s*(?:\(([^:]*)\))*\s*:?\s*(.*)',
        re.IGNORECASE | re.ASCII,
    )


@dataclass(frozen=True)
class TagStyle:
    """click.style arguments for the label and the message of a tag"""

    label_fg: str
    message_fg: str
    label_bg: str | None = None
    badge: bool = False


@dataclass(frozen=True)
class MatchRule:
    tag: Tag
    label: str
    pattern: re.Pattern
    style: TagStyle

    @property
    def keyword(self) -> str:
        return self.tag.value


def _rule(tag: Tag, label: str, style: TagStyle) -> MatchRule:
    return MatchRule(tag=tag, label=label, pattern=build_tag_regex(tag.value), style=style)


# Order matters: a line holding several tags yields matches in this order.
DEFAULT_RULES: tuple[MatchRule, ...] = (
    _rule(Tag.NOTE, ' ✐ NOTE', TagStyle(label_fg='bright_green', message_fg='green')),
    _rule(Tag.OPTIMIZE, ' ↻ OPTIMIZE', TagStyle(label_fg='bright_blue', message_fg='blue')),
    _rule(Tag.TODO, ' ✓ TODO', TagStyle(label_fg='bright_magenta', message_fg='bright_magenta')),
    _rule(Tag.HACK, ' ✄ HACK', TagStyle(label_fg='bright_yellow', message_fg='yellow')),
    _rule(Tag.XXX, ' ✗ XXX', TagStyle(label_fg='bright_cyan', message_fg='cyan')),
    _rule(Tag.FIXME, ' ☠ FIXME', TagStyle(label_fg='bright_red', message_fg='red')),
    _rule(Tag.BUG, '☢ BUG', TagStyle(label_fg='white', message_fg='red', label_bg='red', badge=True)),
)

RULES_BY_TAG: dict[Tag, MatchRule] = {rule.tag: rule for rule in DEFAULT_RULES}


def keywords(rules: tuple[MatchRule, ...] = DEFAULT_RULES) -> list[str]:
    """Literal keywords for building a Prefilter"""
    return [rule.keyword for rule in rules]
