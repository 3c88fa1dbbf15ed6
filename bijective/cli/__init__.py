# ruff: noqa: T201
import argparse
import logging
import sys

import tabulate

import bijective._assertions as assertions
import bijective._check as check
import bijective._util as util
from bijective.__about__ import __version__

logger = logging.getLogger(__name__)

EXIT_FAILED = 1
EXIT_INVALID = 2


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Check one-to-one mappings between elements and predicates"
    )
    parser.add_argument(
        "-V", "--version", action="version", version=f"%(prog)s {__version__}"
    )
    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        metavar="command",
        help="for more info use: %(prog)s <command> -h",
    )

    def add_subcommand(name, *args, **kwargs):
        subparser = subparsers.add_parser(name, *args, **kwargs)
        subparser.set_defaults(func=globals()[f"_{name}_command"])
        return subparser

    def add_common_args(subparser):
        subparser.add_argument(
            "-v", "--verbose", action="store_true", help="Enable debug logs"
        )
        subparser.add_argument(
            "-n", "--no-header", action="store_true", help="Hide table header"
        )

    subparser = add_subcommand(
        "check", help="match elements and predicates of check descriptions"
    )
    add_common_args(subparser)
    subparser.add_argument(
        "names", nargs="+", help="name or full path of a check description"
    )

    subparser = add_subcommand(
        "graph", help="show which elements each predicate accepts"
    )
    add_common_args(subparser)
    subparser.add_argument("name", help="name or full path of a check description")

    args = parser.parse_args(argv)

    # Don't use escape sequences, if stdout is not a tty
    if not sys.stdout.isatty():
        for attr in dir(Format):
            if not attr.startswith("_"):
                setattr(Format, attr, "")

    level = logging.DEBUG if args.verbose else logging.WARNING
    util.configure_logging(level)

    try:
        sys.exit(args.func(args))
    except KeyboardInterrupt:
        pass


def _check_command(args):
    exit_code = 0

    for name in args.names:
        util.generate_log_check_id()
        try:
            check_desc = check.load_check(name)
            solution = check.run_check(check_desc)
        except (ValueError, TypeError, OSError, util.TOMLDecodeError) as e:
            logger.error('Invalid check description "%s": %s', name, e)
            exit_code = max(exit_code, EXIT_INVALID)
            continue

        rows = [
            [
                assertions.describe_predicate(predicate),
                assertions.format_element(element.value),
                element.index,
            ]
            for predicate, element in solution.pairs()
        ]
        if rows:
            headers = _headers(args, ["Predicate", "Element", "Index"])
            print(tabulate.tabulate(rows, headers=headers, tablefmt="plain"))

        if solution.is_perfect:
            status = f"{Format.GREEN}{Format.BOLD}Satisfied"
        else:
            status = f"{Format.RED}{Format.BOLD}Not satisfied"
        print(f"{status}: {check_desc.name}{Format.RESET}")

        if not solution.is_perfect:
            print(
                assertions.failure_message(
                    solution, check.CHECK_REASON, (check_desc.name,)
                )
            )
            exit_code = max(exit_code, EXIT_FAILED)

    return exit_code


def _graph_command(args):
    util.generate_log_check_id()
    try:
        check_desc = check.load_check(args.name)
        graph = util.build_graph(check_desc.predicates, check_desc.elements)
    except (ValueError, TypeError, OSError, util.TOMLDecodeError) as e:
        logger.error('Invalid check description "%s": %s', args.name, e)
        return EXIT_INVALID

    rows = [
        [
            assertions.describe_predicate(predicate),
            ", ".join(str(v) for v in accepted) or "-",
        ]
        for predicate, accepted in zip(check_desc.predicates, graph)
    ]

    headers = _headers(args, ["Predicate", "Elements"])
    print(tabulate.tabulate(rows, headers=headers, tablefmt="plain"))
    return 0


def _headers(args, headers):
    if args.no_header:
        return []

    headers = list(headers)
    headers[0] = f"{Format.BOLD}{headers[0]}"
    headers[-1] = f"{headers[-1]}{Format.RESET}"
    return headers


class Format:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    RED = "\033[31m"
    GREEN = "\033[32m"
