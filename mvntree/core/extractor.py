import re
import logging
from typing import Iterable, List

# "[INFO] --- dependency:3.6.1:tree (default-cli) @ app ---"
# "[INFO] --- maven-dependency-plugin:2.8:tree (default-cli) @ app ---"
RE_SECTION_START = re.compile(r"--- (?:maven-)?dependency(?:-plugin)?:")
SECTION_END = "--------"

RE_LOG_PREFIX = re.compile(r"^\[INFO\]\s*")
# "[WARNING] ...", "[ERROR] ..." lines can carry "|" but never belong to the tree
RE_OTHER_LOG_LEVEL = re.compile(r"^\[(?!INFO\])[A-Z]+\]")
RE_COORDINATE_START = re.compile(r"^[\w.-]+:[\w.-]+:")

TREE_GLYPHS = ("+-", "\\-", "|")


def strip_log_prefix(line: str) -> str:
    return RE_LOG_PREFIX.sub("", line)


def has_tree_glyphs(text: str) -> bool:
    return any(glyph in text for glyph in TREE_GLYPHS)


def is_section_start(line: str) -> bool:
    return bool(RE_SECTION_START.search(line)) and "tree" in line


def extract_dependency_lines(lines: Iterable[str]) -> List[str]:
    """
    Keeps only the lines printed by the dependency:tree goal.
    Lines are returned untouched (log prefix included) in source order.
    Lines tagged with another log level ([WARNING], [ERROR], ...) are dropped,
    unprefixed lines (pasted snippets) are kept.
    """
    dependency_lines = []
    in_tree_section = False

    for line in lines:
        if not in_tree_section:
            if is_section_start(line):
                in_tree_section = True
            continue

        if SECTION_END in line:
            break

        if RE_OTHER_LOG_LEVEL.match(line):
            continue

        clean_line = strip_log_prefix(line)
        if RE_COORDINATE_START.match(clean_line) or has_tree_glyphs(clean_line):
            dependency_lines.append(line)

    if not in_tree_section:
        logging.debug("No dependency:tree section found in input.")
    else:
        logging.debug(f"Extracted {len(dependency_lines)} candidate lines.")

    return dependency_lines
