"""
`check_zpool` monitoring plugin.

Prints a single status line on stdout and exits with the usual plugin codes
(0 OK, 1 WARNING, 2 CRITICAL, 3 UNKNOWN). Per-pool messages are joined with
`;`, critical ones first.
"""
import argparse
import asyncio
import sys
from typing import List, Optional, Sequence, Tuple

from . import __version__
from .config import reload_config
from .zfs_operations.core.entities.evaluation import EvaluationResult, Severity
from .zfs_operations.core.exceptions.validation_exceptions import ValidationException
from .zfs_operations.core.interfaces.command_executor import CommandResult
from .zfs_operations.factories.service_factory import ServiceFactoryBuilder

SHORTNAME = "ZPOOL"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="check_zpool",
        description="check zfs zpool status",
        epilog=(
            "Thresholds are given as <pool.category.threshold>, where pool may be '*' "
            "for all pools and category is one of capacity, frag, leaked, scrub, "
            "cksum_err, read_err, write_err. Thresholds accept plugin range syntax."
        ),
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="show failed command output; repeat for debug logging")
    parser.add_argument("-t", "--timeout", type=int, help="seconds before a zpool command is abandoned")
    parser.add_argument("-i", "--include", action="append", metavar="ZPOOL", help="zfs pool to check")
    parser.add_argument("-e", "--exclude", action="append", metavar="ZPOOL", help="zfs pool not to check")
    parser.add_argument("-w", "--warning", action="append", default=[], metavar="POOL.CATEGORY.THRESHOLD",
                        help="set warning threshold in format <pool.category.threshold>")
    parser.add_argument("-c", "--critical", action="append", default=[], metavar="POOL.CATEGORY.THRESHOLD",
                        help="set critical threshold in format <pool.category.threshold>")
    return parser


def check_messages(results: Sequence[EvaluationResult], join_all: str = ';') -> Tuple[Severity, str]:
    """Overall severity and the joined message text, critical first, then warning, then ok."""
    buckets = {Severity.CRITICAL: [], Severity.WARNING: [], Severity.OK: []}
    for result in results:
        buckets[result.severity].append(result.message)

    if buckets[Severity.CRITICAL]:
        code = Severity.CRITICAL
    elif buckets[Severity.WARNING]:
        code = Severity.WARNING
    else:
        code = Severity.OK

    ordered: List[str] = buckets[Severity.CRITICAL] + buckets[Severity.WARNING] + buckets[Severity.OK]
    return code, join_all.join(ordered)


def plugin_exit(code: Severity, message: str) -> int:
    print(f"{SHORTNAME} {code.name} - {message}")
    return int(code)


def plugin_die(message: str) -> int:
    return plugin_exit(Severity.UNKNOWN, message)


def _dump_failed_output(failed: Optional[CommandResult], what: str) -> None:
    if failed is None:
        return
    print(f"{what}, output:", file=sys.stderr)
    for line in (failed.stdout + "\n" + failed.stderr).strip().splitlines():
        print(f"\t{line}", file=sys.stderr)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = reload_config()

    try:
        registry = config.registry_builder() \
            .with_warnings(args.warning) \
            .with_criticals(args.critical) \
            .build()
    except ValidationException as e:
        return plugin_die(str(e))

    log_level = "DEBUG" if args.verbose > 1 else config.logging.level
    factory = ServiceFactoryBuilder() \
        .with_command_timeout(args.timeout or config.check.timeout) \
        .with_log_level(log_level) \
        .with_registry(registry) \
        .build()
    service = factory.create_pool_health_service()

    include = args.include or config.check.include or None
    exclude = args.exclude or config.check.exclude or None
    result = asyncio.run(service.check_pools(include=include, exclude=exclude))

    if result.is_failure:
        if args.verbose:
            _dump_failed_output(service.last_failed_output, str(result.error))
        return plugin_die(str(result.error))

    return plugin_exit(*check_messages(result.value))


if __name__ == "__main__":
    sys.exit(main())
