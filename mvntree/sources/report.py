import sys
import logging
from typing import List

from mvntree.sources.base import ReportSource

STDIN_PATH = "-"


class ReportFileSource(ReportSource):
    """Output of `mvn dependency:tree` saved to a file, or piped on stdin."""

    def __init__(self, path: str) -> None:
        self.path = path

    @property
    def name(self) -> str:
        if self.path == STDIN_PATH:
            return "stdin"
        return f"Report ({self.path})"

    @property
    def lock_files(self) -> List[str]:
        """Never detected from a directory listing, only built from an explicit path."""
        return []

    def read_report(self) -> str:
        if self.path == STDIN_PATH:
            logging.debug("Reading report from stdin...")
            return sys.stdin.read()

        logging.debug(f"Reading report {self.path}...")
        try:
            with open(self.path, "r", encoding="utf-8", errors="replace") as f:
                content = f.read()
        except FileNotFoundError:
            raise Exception(f"Report file not found: {self.path}")
        except OSError as e:
            logging.error(f"Report read error: {e}")
            raise Exception(f"Fail to read report {self.path}: {e}")

        logging.debug(f"Report loaded. {len(content)} chars.")
        return content
