import argparse
import logging
import os
import sys
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from mvntree.__version__ import __version__
from mvntree.cli import print_search, print_stats, print_tree
from mvntree.core.search import search_dependencies
from mvntree.core.summary import calculate_stats
from mvntree.sources import detect_source
from mvntree.sources.report import STDIN_PATH

DEFAULT_LOG_FILE = "debug.log"


def configure_logging(log_file: Optional[str] = None) -> None:
    logging.basicConfig(
        filename=log_file or os.environ.get("MVNTREE_LOG", DEFAULT_LOG_FILE),
        level=logging.DEBUG,
        filemode="w",
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mvntree",
        description="Browse and search the output of `mvn dependency:tree`.",
    )
    parser.add_argument(
        "report",
        nargs="?",
        help="saved dependency:tree output ('-' for stdin). Runs Maven on ./pom.xml when omitted.",
    )
    parser.add_argument("--print", dest="print_tree", action="store_true", help="print the tree and exit")
    parser.add_argument("--search", metavar="QUERY", help="print dependencies matching QUERY and exit")
    parser.add_argument("--stats", action="store_true", help="print statistics and exit")
    parser.add_argument("--verbose-maven", action="store_true", help="pass -Dverbose to Maven (keeps omitted entries)")
    parser.add_argument("--log-file", help=f"debug log location (default: $MVNTREE_LOG or {DEFAULT_LOG_FILE})")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run_batch(args: argparse.Namespace, console: Console) -> int:
    source = detect_source(args.report, verbose=args.verbose_maven)
    if not source:
        console.print("[bold red]No pom.xml or report file found.[/]")
        return 1

    try:
        root = source.get_dependencies()
    except Exception as e:
        logging.exception("Failed to load dependencies:")
        console.print(f"[bold red]Error:[/] {escape(str(e))}")
        return 1

    if root is None:
        console.print("[bold red]No dependency:tree output found.[/]")
        return 1

    if args.print_tree:
        print_tree(console, root)

    if args.search is not None:
        query = args.search.strip()
        print_search(console, search_dependencies(root, query) if query else [])

    if args.stats:
        print_stats(console, calculate_stats(root))

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """ Entrypoint when is installed via pip """
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_file)

    batch = args.print_tree or args.search is not None or args.stats
    if not batch:
        if args.report == STDIN_PATH:
            parser.error("reading from stdin requires --print, --search or --stats")

        from mvntree.app import MvnTreeApp
        app = MvnTreeApp(report_path=args.report, verbose_maven=args.verbose_maven)
        app.run()
        return 0

    return run_batch(args, Console())


# Development mode
if __name__ == "__main__":
    sys.exit(main())
