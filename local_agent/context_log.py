import json
import logging
from pathlib import Path

from utils.helper import now_iso

logger = logging.getLogger(__name__)

SUMMARY_HEADING = "# Agent Operation Summary"



class RunLog:
    """Timestamped lines collected while one command runs."""

    def __init__(self):
        self._lines = []

    def log(self, message):
        entry = f"[{now_iso()}] {message}"
        self._lines.append(entry)
        logger.info(message)
        return entry

    @property
    def lines(self):
        return list(self._lines)

    def __len__(self):
        return len(self._lines)

    def __contains__(self, text):
        return any(text in ln for ln in self._lines)


def format_summary(operation, results, run_log, timestamp=None):
    timestamp = timestamp or now_iso()
    lines = run_log.lines if isinstance(run_log, RunLog) else list(run_log)
    return (
        f"{SUMMARY_HEADING}\n\n"
        f"**Operation:** {operation}\n"
        f"**Timestamp:** {timestamp}\n\n"
        f"**Results:**\n```json\n{json.dumps(results, indent=2, ensure_ascii=False)}\n```\n\n"
        f"**Log Messages:**\n```\n" + "\n".join(lines) + "\n```\n\n"
        f"---\n\n"
    )


def record_results(summary_path, operation, results, run_log):
    """Append one summary block; the file only ever grows."""
    summary_path = Path(summary_path)
    block = format_summary(operation, results, run_log)
    summary_path.parent.mkdir(parents=True, exist_ok=True)
    with open(summary_path, "a", encoding="utf-8") as f:
        f.write(block)
    run_log.log(f"📄 Operation summary saved to: {summary_path}")
    return summary_path
