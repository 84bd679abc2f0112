"""Per-file scanning and the bounded worker pool that drives it"""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor

from fixme.extract import extract_matches
from fixme.models import ScanConfig, ScanResult
from fixme.prefilter import Prefilter
from fixme.tags import DEFAULT_RULES, MatchRule, keywords
from fixme.utils import get_int_env


logger = logging.getLogger(__name__)


def build_prefilter(rules: tuple[MatchRule, ...] = DEFAULT_RULES) -> Prefilter:
    return Prefilter(keywords(rules))


def scan_file(
    path: str,
    rules: tuple[MatchRule, ...],
    prefilter: Prefilter,
    config: ScanConfig,
) -> ScanResult:
    """
    Scan a single file for tags.

    Lines longer than config.line_length_limit bytes are skipped before the
    prefilter runs. Lines that pass the prefilter are decoded as UTF-8, with
    undecodable bytes replaced, and handed to the extraction rules.

    Args:
        path: File to scan
        rules: Tag rule table
        prefilter: Keyword gate built from the same rules
        config: Scan settings

    Returns:
        ScanResult with matches in line order

    Raises:
        OSError: The file could not be opened or read
    """
    result = ScanResult(filename=path)
    limit = config.line_length_limit

    logger.debug(f'[SCAN] Processing {path}')
    with open(path, 'rb') as f:
        for line_number, raw in enumerate(f, start=1):
            line = raw.rstrip(b'\n')
            if line.endswith(b'\r'):
                line = line[:-1]

            if len(line) > limit:
                continue
            if not prefilter.has_candidate(line):
                continue

            text = line.decode('utf-8', errors='replace')
            result.matches.extend(extract_matches(text, line_number, rules))

    return result


class ScanCoordinator:
    """
    Fans file scans out to a fixed-size thread pool.

    Results land in a slot array indexed by the file's position in the
    input list, so the output order never depends on which worker finishes
    first. Each task owns exactly one slot.
    """

    def __init__(
        self,
        rules: tuple[MatchRule, ...] = DEFAULT_RULES,
        prefilter: Prefilter | None = None,
        config: ScanConfig | None = None,
        max_workers: int | None = None,
    ):
        self.rules = rules
        self.prefilter = prefilter if prefilter is not None else build_prefilter(rules)
        self.config = config if config is not None else ScanConfig()
        self.max_workers = max_workers or get_int_env('FIXME_MAX_WORKERS')

    def _scan_into_slot(self, slots: list[ScanResult | None], index: int, path: str) -> None:
        thread_id = threading.current_thread().name
        try:
            slots[index] = scan_file(path, self.rules, self.prefilter, self.config)
        except OSError as e:
            logger.error(f'[WORKER {thread_id}] Error processing {path}: {e}')
            slots[index] = ScanResult(filename=path)

    def run(self, files: list[str]) -> list[ScanResult]:
        """Scan every file and return one result per file, in input order."""
        slots: list[ScanResult | None] = [None] * len(files)
        if not files:
            return []

        start_time = time.time()
        logger.info(f'[SCAN] Scanning {len(files)} file(s) with {self.max_workers} worker(s)')

        # Bounds in-flight tasks so submit() blocks while every worker is busy
        capacity = threading.BoundedSemaphore(self.max_workers)

        def release(_future):
            capacity.release()

        futures = []
        with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix='Worker') as executor:
            for index, path in enumerate(files):
                capacity.acquire()
                future = executor.submit(self._scan_into_slot, slots, index, path)
                future.add_done_callback(release)
                futures.append(future)

        # Anything other than a per-file OSError is a bug and must surface
        for future in futures:
            future.result()

        elapsed = time.time() - start_time
        total = sum(len(r.matches) for r in slots if r is not None)
        logger.info(f'[SCAN] Completed: {total} match(es) in {len(files)} file(s) in {elapsed:.3f}s')

        return slots


def run_scan(
    files: list[str],
    rules: tuple[MatchRule, ...] = DEFAULT_RULES,
    prefilter: Prefilter | None = None,
    config: ScanConfig | None = None,
    max_workers: int | None = None,
) -> list[ScanResult]:
    """Scan files concurrently and return their results in the given order."""
    coordinator = ScanCoordinator(rules=rules, prefilter=prefilter, config=config, max_workers=max_workers)
    return coordinator.run(files)
