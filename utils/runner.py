#!/usr/bin/env python3
from __future__ import annotations

import json
import logging
import os
import shlex
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Sequence

from utils.helper import now_iso

logger = logging.getLogger(__name__)

MAX_CAPTURE = 8192  # chars of output to keep in the audit log


@dataclass
class ShellResult:
    """Outcome of one external command.

    ``success`` only says the process could be launched and waited on; the
    exit code is kept in ``rc`` and callers that care check ``ok``.
    """
    success: bool
    output: str = ""
    error: str = ""
    rc: Optional[int] = None
    argv: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.success and self.rc == 0



def format_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(str(a)) for a in argv)


def _truncate(s: str | None, limit: int = MAX_CAPTURE) -> str:
    if not s:
        return ""
    if len(s) <= limit:
        return s
    return s[:limit] + f"\n… [truncated {len(s) - limit} chars]"


def _write_log(log_file: Path, entry: dict[str, Any]) -> None:
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        with log_file.open("a", encoding="utf-8") as f:
            f.write(json.dumps(entry, ensure_ascii=False) + "\n")
    except OSError as e:
        # Audit trail is best-effort; the command result still stands
        logger.debug(f"Could not write command log {log_file}: {e}")


def run_cmd(
    argv: Sequence[str],
    *,
    cwd: str | Path | None = None,
    timeout: float | None = None,
    log: Any = None,
    log_file: Path | None = None,
) -> ShellResult:
    """
    Run ``argv`` (no shell), wait for it, and capture stdout+stderr merged.

    The command line is written to ``log`` (a RunLog) before it starts. A
    process that cannot be launched, or that overruns ``timeout``, comes back
    as ``success=False`` with ``error`` set; nothing is raised.
    """
    argv = [str(a) for a in argv]
    cmd_str = format_argv(argv)
    if log is not None:
        log.log(f"🔧 Executing: {cmd_str}")
    else:
        logger.info(f"Executing: {cmd_str}")

    out, err, rc = "", "", None
    try:
        p = subprocess.Popen(
            argv,
            cwd=str(cwd) if cwd else None,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
        )
        try:
            out, _ = p.communicate(timeout=timeout)
        except subprocess.TimeoutExpired:
            p.kill()
            out, _ = p.communicate()
            err = f"Timed out after {timeout}s: {cmd_str}"
        else:
            rc = p.returncode
    except FileNotFoundError as e:
        err = f"Command not found: {e}"
    except OSError as e:
        err = str(e)

    if err and log is not None:
        log.log(f"❌ Shell command failed: {err}")

    result = ShellResult(success=not err, output=out or "", error=err, rc=rc, argv=argv)
    if log_file is not None:
        _write_log(log_file, {
            "ts": now_iso(),
            "cmd": argv,
            "cwd": str(cwd or os.getcwd()),
            "rc": rc,
            "success": result.success,
            "output": _truncate(result.output),
            "error": err,
        })
    return result
