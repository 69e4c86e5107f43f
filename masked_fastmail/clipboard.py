from __future__ import annotations

import logging
import shutil
import subprocess
import sys
from typing import List

from .errors import ClipboardError

logger = logging.getLogger(__name__)


def _candidate_commands() -> List[List[str]]:
    if sys.platform == "darwin":
        return [["pbcopy"]]
    if sys.platform.startswith("win"):
        return [["clip"]]
    return [
        ["wl-copy"],
        ["xclip", "-selection", "clipboard"],
        ["xsel", "--clipboard", "--input"],
    ]


def copy_to_clipboard(text: str, timeout: float = 5.0) -> str:
    """Copy ``text`` with the first clipboard tool that works; returns the tool used."""
    failures: list[str] = []
    for cmd in _candidate_commands():
        if shutil.which(cmd[0]) is None:
            continue
        try:
            proc = subprocess.run(
                cmd,
                input=text.encode("utf-8"),
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                timeout=timeout,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            failures.append(f"{cmd[0]}: {exc}")
            continue
        if proc.returncode == 0:
            return cmd[0]
        stderr = proc.stderr.decode("utf-8", errors="replace").strip()
        failures.append(f"{cmd[0]}: exit {proc.returncode} {stderr}".strip())
    if not failures:
        raise ClipboardError("no clipboard utility found")
    logger.debug("Clipboard attempts failed: %s", failures)
    raise ClipboardError("failed to copy to clipboard: " + "; ".join(failures))
