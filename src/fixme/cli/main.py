"""Main CLI entry point"""

import logging
import os
import sys
from time import time

import click

from fixme.__version__ import __version__
from fixme.file_utils import DiscoveryError, discover_files
from fixme.models import ScanConfig
from fixme.render import OutputMode, Renderer
from fixme.scan import build_prefilter, run_scan
from fixme.tags import DEFAULT_RULES
from fixme.utils import get_int_env


logger = logging.getLogger(__name__)

LOG_LEVELS = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'error': logging.ERROR,
}
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level_name: str) -> None:
    """Configure root logging on stderr so it never mixes with JSON on stdout."""
    logging.basicConfig(
        level=LOG_LEVELS.get(level_name.lower(), logging.ERROR),
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )


@click.command(context_settings=dict(help_option_names=['-h', '--help']))
@click.argument('path', type=click.Path(), default='.', required=False, metavar='PATH')
@click.option('--json', '-j', 'output_json', is_flag=True, help="Output results as JSON")
@click.option(
    '--skip-hidden/--no-skip-hidden', default=True, show_default=True, help="Skip hidden files and directories"
)
@click.option('--include-vendor', is_flag=True, help="Scan vendor directories")
@click.option(
    '--ignore-dir',
    '-i',
    'ignore_dirs',
    multiple=True,
    default=('vendor',),
    show_default=True,
    help="Directory name prefix to ignore (can be specified multiple times)",
)
@click.option(
    '--ignore-exts',
    'ignore_exts',
    multiple=True,
    metavar='.txt',
    help="File name suffix to ignore (can be specified multiple times)",
)
@click.option(
    '--line-length-limit',
    type=click.IntRange(min=0),
    default=lambda: get_int_env('FIXME_LINE_LENGTH_LIMIT'),
    show_default='1000',
    help="Skip lines longer than this many bytes",
)
@click.option(
    '--log-level',
    '-l',
    type=click.Choice(list(LOG_LEVELS), case_sensitive=False),
    default=lambda: os.getenv('FIXME_LOG_LEVEL', 'error').lower(),
    show_default='error',
    help="Log level",
)
@click.option('--no-color', is_flag=True, help="Disable colored output")
@click.version_option(__version__, '--version', '-V', prog_name='fixme')
def cli(
    path, output_json, skip_hidden, include_vendor, ignore_dirs, ignore_exts, line_length_limit, log_level, no_color
):
    """
    Search a file or directory for comment tags.

    \b
    Recognized tags:
      NOTE, OPTIMIZE, TODO, HACK, XXX, FIXME, BUG

    \b
    Examples:
      fixme                           # Scan the current directory
      fixme src/ --json               # One JSON document per file
      fixme . -i build -i dist        # Ignore directories by prefix
      fixme . --ignore-exts .min.js   # Ignore files by suffix
    """
    configure_logging(log_level)

    config = ScanConfig.from_options(
        skip_hidden=skip_hidden,
        ignore_dirs=ignore_dirs,
        ignore_exts=ignore_exts,
        line_length_limit=line_length_limit,
        include_vendor=include_vendor,
    )
    logger.debug(f'[CLI] {config!r}')

    time_before = time()
    try:
        files = discover_files(path, config)
    except DiscoveryError as e:
        logger.error(f'[CLI] Failed getting file names: {e}')
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)

    results = run_scan(files, rules=DEFAULT_RULES, prefilter=build_prefilter(DEFAULT_RULES), config=config)
    logger.info(f'[CLI] Scanned {len(files)} file(s) in {time() - time_before:.3f}s')

    mode = OutputMode.JSON if output_json else OutputMode.TEXT
    colorize = not no_color and sys.stdout.isatty()
    Renderer(colorize=colorize).render(results, mode)


def main():
    """Entry point for the CLI"""
    cli()


if __name__ == '__main__':
    main()
