"""
Diff Engine - Character-level edit scripts between baseline and current text
"""

from __future__ import annotations

from diff_match_patch import diff_match_patch

from models.diff import DiffBlock, EditOp

_OPS = {
    diff_match_patch.DIFF_EQUAL: EditOp.EQUAL,
    diff_match_patch.DIFF_INSERT: EditOp.INSERT,
    diff_match_patch.DIFF_DELETE: EditOp.DELETE,
}


class DiffEngine:
    """Compute minimal character-level edit scripts"""

    def __init__(self):
        self._dmp = diff_match_patch()
        # No deadline: the bisection runs to completion and the script stays minimal
        self._dmp.Diff_Timeout = 0

    def diff_chars(self, baseline_text: str, current_text: str) -> list[DiffBlock]:
        """Generate the edit script turning baseline_text into current_text"""
        diffs = self._dmp.diff_main(baseline_text, current_text, False)
        # Slide lone edits onto word/line boundaries; both replayed texts are unchanged
        self._dmp.diff_cleanupSemanticLossless(diffs)

        return _merge([DiffBlock(op=_OPS[op], text=text) for op, text in diffs])


def baseline_text(script: list[DiffBlock]) -> str:
    """Replay the baseline side of an edit script"""
    return "".join(block.text for block in script if block.op is not EditOp.INSERT)


def current_text(script: list[DiffBlock]) -> str:
    """Replay the current side of an edit script"""
    return "".join(block.text for block in script if block.op is not EditOp.DELETE)


def _merge(blocks: list[DiffBlock]) -> list[DiffBlock]:
    """Drop empty runs and join neighbours of the same kind"""
    merged: list[DiffBlock] = []
    for block in blocks:
        if not block.text:
            continue
        if merged and merged[-1].op is block.op:
            merged[-1] = DiffBlock(op=block.op, text=merged[-1].text + block.text)
        else:
            merged.append(block)
    return merged
