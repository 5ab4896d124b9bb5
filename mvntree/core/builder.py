import re
import logging
from typing import List, Optional, Sequence

from mvntree.core.extractor import (
    RE_COORDINATE_START,
    extract_dependency_lines,
    has_tree_glyphs,
    strip_log_prefix,
)
from mvntree.core.model import DEFAULT_SCOPE, DependencyNode

# Everything up to (and including) the last glyph run: "|  |  +- "
TREE_PREFIX = r"^[\s|+\\-]*[|+\\-]\s*"

# "|  +- org.slf4j:slf4j-api:jar:2.0.9:compile"
# "|  \- (org.x:y:jar:1.0:compile - version managed from 0.9; omitted for duplicate)"
RE_TREE_DEPENDENCY = re.compile(TREE_PREFIX + r"\(?([^\s()|+\\-][^\s()]*)")
# "|  +- (org.slf4j:slf4j-api:jar:1.7.36:compile - omitted for conflict with 2.0.9)"
RE_OMITTED_DEPENDENCY = re.compile(TREE_PREFIX + r"\((.+?)\s*-\s*omitted")
RE_OMITTED_REASON = re.compile(r"omitted for (.+?)\)")

MIN_FIELDS = 4
CLASSIFIER_FIELDS = 6


def calculate_level(line: str) -> int:
    """
    Counts the '|' columns in front of the branch glyph.

    '+- a'       -> 0
    '|  +- a'    -> 1
    '|  |  \\- a' -> 2
    """
    level = 0
    i = 0

    while i < len(line):
        if line[i] == " ":
            i += 1
        elif line.startswith("+-", i) or line.startswith("\\-", i):
            break
        elif line[i] == "|":
            level += 1
            i += 1
            while i < len(line) and line[i] == " ":
                i += 1
        else:
            break

    return level


def _split_coordinate(coordinate: str) -> Optional[dict]:
    parts = coordinate.split(":")
    if len(parts) < MIN_FIELDS:
        return None

    group_id, artifact_id, packaging = parts[0], parts[1], parts[2]
    if not group_id or not artifact_id:
        return None

    if len(parts) >= CLASSIFIER_FIELDS:
        # Extension for classified artifacts: group:artifact:type:classifier:version:scope.
        # Scope comes from the 6th field here, so node_id differs from a 5th-field read.
        return {
            "group_id": group_id,
            "artifact_id": artifact_id,
            "type": packaging,
            "classifier": parts[3],
            "version": parts[4],
            "scope": parts[5] or DEFAULT_SCOPE,
        }

    return {
        "group_id": group_id,
        "artifact_id": artifact_id,
        "type": packaging,
        "version": parts[3],
        "scope": parts[4] if len(parts) > 4 and parts[4] else DEFAULT_SCOPE,
    }


def parse_dependency_line(line: str) -> Optional[DependencyNode]:
    """Returns None for anything that does not look like a coordinate."""
    clean_line = strip_log_prefix(line)

    # Project root: the only line without tree glyphs
    if RE_COORDINATE_START.match(clean_line) and not has_tree_glyphs(clean_line):
        coordinate = clean_line.strip()
        fields = _split_coordinate(coordinate)
        if fields is None:
            return None
        return DependencyNode(full_name=coordinate, level=0, **fields)

    level = calculate_level(clean_line) + 1

    match = RE_TREE_DEPENDENCY.match(clean_line)
    if not match:
        match = RE_OMITTED_DEPENDENCY.match(clean_line)
        if not match:
            return None

    coordinate = match.group(1).strip()
    fields = _split_coordinate(coordinate)
    if fields is None:
        return None

    is_omitted = "omitted" in line
    omitted_reason = ""
    if is_omitted:
        reason_match = RE_OMITTED_REASON.search(line)
        omitted_reason = reason_match.group(1) if reason_match else "unknown"

    return DependencyNode(
        full_name=coordinate,
        level=level,
        is_omitted=is_omitted,
        omitted_reason=omitted_reason,
        **fields,
    )


def build_dependency_tree(dependency_lines: Sequence[str]) -> Optional[DependencyNode]:
    if not dependency_lines:
        return None

    root = DependencyNode.synthetic_root()
    stack: List[DependencyNode] = [root]
    skipped = 0

    for line in dependency_lines:
        dependency = parse_dependency_line(line)
        if dependency is None:
            skipped += 1
            logging.debug(f"Skipping unparsable line: {line!r}")
            continue

        # Keep exactly `level + 1` ancestors, the synthetic root included
        while len(stack) > dependency.level + 1:
            stack.pop()

        stack[-1].add_child(dependency)
        stack.append(dependency)

    if skipped:
        logging.info(f"Skipped {skipped} of {len(dependency_lines)} lines.")

    return root.children[0] if root.children else root


def parse(text: str) -> Optional[DependencyNode]:
    """
    Builds a fresh tree from raw `mvn dependency:tree` output.

    Returns None when the output holds no dependency tree at all.
    Raises TypeError only when `text` is not a string.
    """
    if not isinstance(text, str):
        raise TypeError(f"Expected Maven output as str, got {type(text).__name__}")

    dependency_lines = extract_dependency_lines(text.splitlines())
    return build_dependency_tree(dependency_lines)
