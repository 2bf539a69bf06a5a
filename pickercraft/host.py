"""
Terminal host services: opening files in the user's editor and guessing a
file's syntax for preview highlighting.
"""

import logging
import os
import shlex
import subprocess
from typing import List, Optional

from pygments.lexers import get_lexer_for_filename
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)

DEFAULT_EDITOR = "vi"


def get_editor() -> List[str]:
    """Editor command from $VISUAL or $EDITOR, split into argv."""
    editor = os.environ.get("VISUAL") or os.environ.get("EDITOR") or DEFAULT_EDITOR
    return shlex.split(editor)


def build_editor_command(
    path: str, line: Optional[int] = None, column: Optional[int] = None
) -> List[str]:
    """Command line opening ``path`` at ``line``.

    vi-family editors take ``+LINE``; ``column`` is 0-based and only vim/nvim
    can jump to it, via ``+call cursor(LINE, COL)``.
    """
    cmd = get_editor()
    name = os.path.basename(cmd[0]) if cmd else ""
    if line is not None:
        if column is not None and name in ("vim", "nvim"):
            cmd.append(f"+call cursor({line}, {column + 1})")
        else:
            cmd.append(f"+{line}")
    cmd.append(path)
    return cmd


class EditorHost:
    """PickerHost that runs the user's editor in the foreground."""

    def open_file(
        self, path: str, line: Optional[int] = None, column: Optional[int] = None
    ) -> int:
        cmd = build_editor_command(path, line, column)
        logger.info(f"Launching editor: {cmd}")
        try:
            return subprocess.run(cmd).returncode
        except FileNotFoundError:
            logger.error(f"Editor not found: {cmd[0]}")
            raise

    def detect_filetype(self, path: str) -> Optional[str]:
        try:
            lexer = get_lexer_for_filename(path)
        except ClassNotFound:
            return None
        return lexer.aliases[0] if lexer.aliases else lexer.name.lower()
