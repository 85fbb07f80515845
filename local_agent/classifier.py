from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Optional

from utils.helper import expand_home

FIND_LARGEST_AND_ZIP = "find_largest_and_zip"
CONVERT_DOCX_TO_PDF = "convert_docx_to_pdf"
FETCH_HN_HEADLINES = "fetch_hn_headlines"
UNKNOWN = "unknown"

ACTIONS = (FIND_LARGEST_AND_ZIP, CONVERT_DOCX_TO_PDF, FETCH_HN_HEADLINES, UNKNOWN)

# "... in ~/Downloads and zip them" first, else a path-looking tail
FOLDER_AFTER_IN = re.compile(r"in\s+(\S+)", re.IGNORECASE)
FOLDER_AT_END = re.compile(r"([/\w\s~]+)$", re.ASCII)


@dataclass(frozen=True)
class ParsedCommand:
    action: str
    folder: Optional[str] = None


def extract_folder(text: str, home: Optional[str] = None) -> Optional[str]:
    m = FOLDER_AFTER_IN.search(text) or FOLDER_AT_END.search(text)
    if not m:
        return None
    folder = m.group(1).strip()
    if not folder:
        return None
    return expand_home(folder, home)


def parse_command(text: str, home: Optional[str] = None, log=None) -> ParsedCommand:
    """Map an instruction onto one of the fixed actions.

    Ordered substring rules, first match wins. Matching is done on the
    lower-cased text; the folder is cut from the original text.
    """
    def _note(msg: str) -> None:
        if log is not None:
            log.log(msg)

    _note(f"🤖 Agent: Analyzing command - \"{text}\"")
    low = text.lower()

    if "largest files" in low and "zip" in low:
        _note(f"🧠 Decision: Task identified as '{FIND_LARGEST_AND_ZIP}'")
        _note("🧠 Reasoning: Detected keywords 'largest files' and 'zip'")
        return ParsedCommand(FIND_LARGEST_AND_ZIP, extract_folder(text, home))

    if "convert" in low and "docx" in low and "pdf" in low:
        _note(f"🧠 Decision: Task identified as '{CONVERT_DOCX_TO_PDF}'")
        _note("🧠 Reasoning: Detected conversion request from docx to pdf format")
        return ParsedCommand(CONVERT_DOCX_TO_PDF, extract_folder(text, home))

    if "hacker news" in low and ("headlines" in low or "top" in low):
        _note(f"🧠 Decision: Task identified as '{FETCH_HN_HEADLINES}'")
        _note("🧠 Reasoning: Detected request for Hacker News content extraction")
        return ParsedCommand(FETCH_HN_HEADLINES)

    _note("❌ Decision: Unable to parse command - no matching patterns found")
    return ParsedCommand(UNKNOWN)
