"""
Region Drift Projector - Map baseline regions onto the current document
"""

from __future__ import annotations

from models.diff import DiffBlock, EditOp
from models.region import Range, Region

from .text_document import TextDocument, region_to_range


def project_span(script: list[DiffBlock], start: int, end: int) -> tuple[int, int] | None:
    """Project the baseline span [start, end) through an edit script.

    Returns the current-side span, or None when every character of a non-empty
    span was deleted. Partially deleted spans keep everything from the first to
    the last surviving character. Empty spans always map to a position.
    """
    if end < start:
        start, end = end, start

    baseline_cursor = 0
    current_cursor = 0
    projected_start: int | None = None
    projected_end: int | None = None

    for block in script:
        length = block.length

        if block.op is EditOp.INSERT:
            current_cursor += length
            continue

        if block.op is EditOp.DELETE:
            if start == end and baseline_cursor <= start < baseline_cursor + length:
                # Position inside removed text lands where the removal happened
                return current_cursor, current_cursor
            baseline_cursor += length
            continue

        run_end = baseline_cursor + length
        delta = current_cursor - baseline_cursor

        if start == end:
            if baseline_cursor <= start <= run_end:
                return start + delta, start + delta
        else:
            low = max(start, baseline_cursor)
            high = min(end, run_end)
            if low < high:
                if projected_start is None:
                    projected_start = low + delta
                projected_end = high + delta

        baseline_cursor = run_end
        current_cursor += length
        if start != end and baseline_cursor >= end:
            break

    if start == end:
        return current_cursor, current_cursor
    if projected_start is None or projected_end is None:
        return None
    return projected_start, projected_end


def project_region(
    script: list[DiffBlock],
    current_doc: TextDocument,
    region: Region | None,
    baseline_doc: TextDocument | None = None,
) -> Range | None:
    """Range on current_doc for a region recorded against baseline_doc.

    Without a baseline document there is no drift information and the region
    is placed on the current document as-is.
    """
    if baseline_doc is None:
        return region_to_range(current_doc, region)

    baseline_range = region_to_range(baseline_doc, region)
    span = project_span(
        script,
        baseline_doc.offset_at(baseline_range.start),
        baseline_doc.offset_at(baseline_range.end),
    )
    if span is None:
        return None

    return Range(start=current_doc.position_at(span[0]), end=current_doc.position_at(span[1]))
