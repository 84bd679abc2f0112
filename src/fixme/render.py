"""Text and JSON output of scan results"""

import logging
import sys
import threading
from enum import Enum
from typing import TextIO

import click

from fixme.models import Match, ScanResult
from fixme.tags import RULES_BY_TAG, Tag, TagStyle


logger = logging.getLogger(__name__)

# Single owner of the output sink: one render call writes at a time
_output_lock = threading.Lock()


class OutputMode(str, Enum):
    TEXT = 'text'
    JSON = 'json'


def format_file_header(result: ScanResult, colorize: bool) -> str:
    count = len(result.matches)
    noun = 'message' if count == 1 else 'messages'
    if colorize:
        return (
            click.style(f'• {result.filename} ', fg='bright_white', bold=True)
            + click.style(f'[{count} {noun}]:', dim=True)
        )
    return f'• {result.filename} [{count} {noun}]:'


def format_label(match: Match) -> str:
    if match.author:
        return f'{match.label} from {match.author}:'
    return f'{match.label}:'


def _style_for(match: Match) -> TagStyle | None:
    try:
        return RULES_BY_TAG[Tag(match.tag)].style
    except ValueError:
        return None


def format_match_line(match: Match, colorize: bool) -> str:
    """
    Format one match as a text line.

    Badge-style tags (BUG) are indented, drawn on a background colour and
    followed by an empty line.
    """
    style = _style_for(match)
    badge = style is not None and style.badge
    location = f' [Line {match.line_number}]\t'
    label = format_label(match)

    if badge:
        prefix, label_part, message_part = '  ', label, f' {match.message}'
    else:
        prefix, label_part, message_part = '', f' {label}', f' {match.message}'

    if colorize and style is not None:
        line = (
            click.style(location, dim=True)
            + prefix
            + click.style(label_part, fg=style.label_fg, bg=style.label_bg, bold=True)
            + click.style(message_part, fg=style.message_fg)
        )
    else:
        line = location + prefix + label_part + message_part

    if badge:
        line += '\n'
    return line


def format_text_block(result: ScanResult, colorize: bool) -> str:
    lines = [format_file_header(result, colorize)]
    lines.extend(format_match_line(m, colorize) for m in result.matches)
    lines.append('')
    return '\n'.join(lines)


class Renderer:
    """Writes scan results to a sink in text or JSON mode"""

    def __init__(self, sink: TextIO | None = None, colorize: bool = False, json_indent: int = 2):
        self.sink = sink
        self.colorize = colorize
        self.json_indent = json_indent

    def _emit(self, text: str) -> None:
        click.echo(text, file=self.sink if self.sink is not None else sys.stdout, color=self.colorize)

    def render(self, results: list[ScanResult], mode: OutputMode = OutputMode.TEXT) -> int:
        """
        Write every result that has matches, in the order given.

        Args:
            results: Ordered scan results
            mode: TEXT for styled blocks, JSON for one document per file

        Returns:
            Number of files written
        """
        written = 0
        with _output_lock:
            for result in results:
                if not result.has_matches:
                    continue
                if mode == OutputMode.JSON:
                    self._emit(result.to_json(indent=self.json_indent))
                else:
                    self._emit(format_text_block(result, self.colorize))
                written += 1

        logger.info(f'[RENDER] Wrote {written} of {len(results)} file(s) as {mode.value}')
        return written
