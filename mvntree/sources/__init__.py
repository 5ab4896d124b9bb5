import os
from typing import List, Optional

from .base import ReportSource
from .maven import MavenSource
from .report import ReportFileSource


def available_sources(verbose: bool = False) -> List[ReportSource]:
    return [
        MavenSource(verbose=verbose),
    ]


def detect_source(path: Optional[str] = None, verbose: bool = False) -> Optional[ReportSource]:
    """Returns a source for `path`, or checks files in the current directory."""
    if path:
        return ReportFileSource(path)

    files = os.listdir(".")

    for source in available_sources(verbose):
        if source.detect(files):
            return source

    return None
