"""
External toolchain collaborators: the C preprocessor and the
assembler/linker, both driven through the system C compiler driver.
"""

from __future__ import annotations
import logging
import subprocess
from pathlib import Path
from typing import List

log = logging.getLogger(__name__)

DEFAULT_CC = "gcc"


class ToolchainError(Exception):
    pass


def _run(cmd: List[str]) -> str:
    log.debug("running: %s", " ".join(cmd))
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True)
    except FileNotFoundError as e:
        raise ToolchainError(f"{cmd[0]}: command not found") from e
    if proc.returncode != 0:
        raise ToolchainError(
            f"{' '.join(cmd)} failed with exit status {proc.returncode}\n{proc.stderr.rstrip()}")
    return proc.stdout


def preprocess(path: Path | str, cc: str = DEFAULT_CC) -> str:
    """Run the C preprocessor over ``path`` and return the resulting text."""
    return _run([cc, "-E", "-P", str(path)])


def assemble_and_link(asm_path: Path | str, output_path: Path | str, cc: str = DEFAULT_CC):
    """Assemble ``asm_path`` and link it into the executable ``output_path``."""
    _run([cc, str(asm_path), "-o", str(output_path)])
