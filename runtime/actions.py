from __future__ import annotations
import os, logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from config import Config
from cloud_agent import hn_client
from local_agent import system_state
from local_agent.classifier import (
    ParsedCommand, FIND_LARGEST_AND_ZIP, CONVERT_DOCX_TO_PDF, FETCH_HN_HEADLINES,
)
from local_agent.context_log import RunLog, record_results
from utils.helper import is_path_safe, now_iso
from utils.runner import run_cmd

logger = logging.getLogger(__name__)

TOP_FILES = 3
TOP_HEADLINES = 5
ARCHIVE_NAME = "largest_files.zip"

SUPPORTED_COMMANDS = (
    '"Find the 3 largest files in <folder> and zip them"',
    '"Convert all .docx to .pdf in <folder>"',
    '"Open Hacker News, grab the top 5 headlines, save to Markdown file"',
)


class ActionError(RuntimeError):
    """An action was refused or could not finish."""


class UnknownCommandError(ActionError):
    def __init__(self, command: str):
        lines = "\n".join(f"• {c}" for c in SUPPORTED_COMMANDS)
        super().__init__(f"Unknown command: {command}.\n\nSupported commands:\n{lines}")
        self.command = command


@dataclass
class ActionContext:
    config: Config
    ui: Any
    log: RunLog = field(default_factory=RunLog)

    def run(self, argv: List[str], cwd: Optional[Path] = None):
        return run_cmd(
            argv,
            cwd=cwd,
            timeout=self.config.tools.timeout_seconds,
            log=self.log,
            log_file=self.config.command_log_path(),
        )

    def confirm(self, message: str) -> bool:
        if self.config.ui.assume_yes:
            self.log.log(f"✔ Auto-confirmed: {message}")
            return True
        return bool(self.ui.confirm(message))


@dataclass
class FileEntry:
    path: str
    size: int

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "size": self.size}


# ---------- shared checks ----------
def _guard_folder(folder: Optional[str], ctx: ActionContext, what: str) -> Path:
    if not folder:
        raise ActionError(f"No folder specified for {what} operation")
    cfg = ctx.config
    if not is_path_safe(folder, cfg.allowed_paths(), canonicalize=cfg.security.canonicalize_paths):
        raise ActionError(f"Path not in whitelist: {folder}")
    p = Path(folder)
    if not p.is_dir():
        raise ActionError(f"Folder not found: {folder}")
    return p


# ---------- scans (read-only) ----------
def scan_largest_files(folder: Path, limit: int = TOP_FILES) -> List[FileEntry]:
    """Largest regular files under ``folder``, archives excluded."""
    entries: List[FileEntry] = []
    for root, _dirs, names in os.walk(folder):
        for name in names:
            if name.lower().endswith(".zip"):
                continue
            p = os.path.join(root, name)
            if os.path.islink(p) or not os.path.isfile(p):
                continue
            try:
                size = os.stat(p).st_size
            except OSError as e:
                logger.debug(f"Skipping {p}: {e}")
                continue
            entries.append(FileEntry(path=p, size=size))
    entries.sort(key=lambda e: (-e.size, e.path))
    return entries[:limit]


def find_docx_files(folder: Path) -> List[Path]:
    return sorted(
        p for p in folder.rglob("*.docx")
        if p.is_file() and not p.is_symlink()
    )


# ---------- action 1 ----------
def find_largest_and_zip(folder: Optional[str], ctx: ActionContext) -> Optional[Dict[str, Any]]:
    log = ctx.log
    folder_p = _guard_folder(folder, ctx, "largest files")
    log.log(f"📁 Starting largest files analysis for: {folder}")

    log.log(f"🔍 DRY RUN: Analyzing files in {folder}...")
    files = scan_largest_files(folder_p)
    if not files:
        log.log(f"ℹ️ No files found in {folder}")
        return None

    log.log("📊 Found largest files (excluding zip files):")
    for i, f in enumerate(files, 1):
        log.log(f"  {i}. {f.path} ({f.size} bytes)")

    needed = sum(f.size for f in files)
    enough, free = system_state.check_free_space(folder_p, needed)
    log.log(f"💾 Free space on target volume: {free} bytes (need up to {needed})")
    if not enough:
        raise ActionError(f"Not enough free space in {folder}: need {needed} bytes, have {free}")

    if not ctx.confirm(f"Ready to zip {len(files)} largest files. Proceed?"):
        log.log("❌ User cancelled operation")
        return None

    log.log("📦 Creating zip archive...")
    zip_path = folder_p / ARCHIVE_NAME
    if zip_path.exists():
        zip_path.unlink()
    # List each file explicitly so only these land in the archive
    # "./" keeps a name like "-m" from being read as an archiver option
    members = [os.path.join(".", os.path.relpath(f.path, folder_p)) for f in files]
    res = ctx.run([*ctx.config.tools.archiver, ARCHIVE_NAME, *members], cwd=folder_p)
    if not res.ok:
        raise ActionError(f"Zip operation failed: {res.error or res.output.strip() or f'exit code {res.rc}'}")

    log.log(f"✅ Successfully created: {zip_path}")
    results = {
        "folder": str(folder_p),
        "archive": str(zip_path),
        "files": [f.to_dict() for f in files],
    }
    record_results(ctx.config.summary_path(), "Largest Files Archive", results, log)
    return results


# ---------- action 2 ----------
def _write_mock_pdf(docx: Path, pdf: Path) -> None:
    pdf.write_text(
        f"Mock PDF conversion of {docx.name}\n"
        f"Generated by nl-agent\n"
        f"{now_iso()}\n",
        encoding="utf-8",
    )


def convert_docx_to_pdf(folder: Optional[str], ctx: ActionContext) -> Optional[Dict[str, Any]]:
    log = ctx.log
    folder_p = _guard_folder(folder, ctx, "conversion")
    log.log(f"📄 Starting DOCX to PDF conversion in: {folder}")

    docx_files = find_docx_files(folder_p)
    if not docx_files:
        log.log(f"ℹ️ No DOCX files found in {folder}")
        return None

    log.log(f"🔍 DRY RUN: Found {len(docx_files)} DOCX files to convert:")
    for i, p in enumerate(docx_files, 1):
        log.log(f"  {i}. {p}")

    if not ctx.confirm(f"Ready to convert {len(docx_files)} DOCX files to PDF. Proceed?"):
        log.log("❌ User cancelled operation")
        return None

    log.log("🔄 Converting DOCX files to PDF...")
    converted: List[str] = []
    for docx in docx_files:
        pdf = docx.with_suffix(".pdf")
        ctx.run([*ctx.config.tools.converter, "--outdir", str(docx.parent), str(docx)])
        if pdf.is_file():
            log.log(f"✅ Converted: {docx} → {pdf}")
        else:
            log.log(f"⚠️ Converter not available, creating mock PDF for: {docx}")
            _write_mock_pdf(docx, pdf)
        converted.append(str(pdf))

    results = {
        "folder": str(folder_p),
        "converted_files": converted,
        "total_files": len(docx_files),
    }
    record_results(ctx.config.summary_path(), "DOCX to PDF Conversion", results, log)
    return results


# ---------- action 3 ----------
def fetch_hn_headlines(ctx: ActionContext) -> Dict[str, Any]:
    log = ctx.log
    cfg = ctx.config
    log.log(f"📰 Fetching top {TOP_HEADLINES} Hacker News headlines...")

    try:
        ids = hn_client.fetch_top_story_ids(
            cfg.news.api_base, cfg.tools.http_client, TOP_HEADLINES, run=ctx.run)
    except hn_client.FeedError as e:
        raise ActionError(str(e)) from e
    log.log(f"📋 Retrieved {len(ids)} story IDs")

    headlines: List[hn_client.Headline] = []
    for i, story_id in enumerate(ids, 1):
        h = hn_client.fetch_story(story_id, cfg.news.api_base, cfg.tools.http_client, run=ctx.run, log=log)
        if h is None:
            continue
        headlines.append(h)
        log.log(f"  {i}. {h.title} ({h.score} points)")

    md_path = cfg.headlines_path()
    md_path.parent.mkdir(parents=True, exist_ok=True)
    md_path.write_text(hn_client.render_markdown(headlines, now_iso()), encoding="utf-8")
    log.log(f"✅ Headlines saved to: {md_path}")

    results = {
        "markdown_file": str(md_path),
        "headlines": [h.to_dict() for h in headlines],
    }
    record_results(cfg.summary_path(), "Hacker News Headlines", results, log)
    return results


def dispatch(parsed: ParsedCommand, ctx: ActionContext, command: str = "") -> Optional[Dict[str, Any]]:
    if parsed.action == FIND_LARGEST_AND_ZIP:
        return find_largest_and_zip(parsed.folder, ctx)
    if parsed.action == CONVERT_DOCX_TO_PDF:
        return convert_docx_to_pdf(parsed.folder, ctx)
    if parsed.action == FETCH_HN_HEADLINES:
        return fetch_hn_headlines(ctx)
    raise UnknownCommandError(command)
