#!/usr/bin/env python3
# Natural-language agent:
# - Reads a command (CLI args > stdin/prompt > dialog)
# - Classifies it with fixed substring rules
# - Runs the matching action (dry run, confirm, effect)
# - Appends a Markdown summary of each completed action

from __future__ import annotations
import argparse, logging, sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from config import Config, get_config_manager
from local_agent.classifier import parse_command
from local_agent.context_log import RunLog
from runtime.actions import ActionContext, ActionError, dispatch
from utils.prompts import TerminalUI

BASE_DIR = Path(__file__).resolve().parent

DEFAULT_COMMAND = "Find the 3 largest files in ~/Downloads and zip them"

logger = logging.getLogger(__name__)


def make_ui(mode: str):
    if mode == "dialog":
        from gui_shell import DialogUI  # PySide6 only needed here
        return DialogUI()
    return TerminalUI()


def make_context(cfg: Config, ui: Any = None) -> ActionContext:
    return ActionContext(config=cfg, ui=ui if ui is not None else make_ui(cfg.ui.mode), log=RunLog())


def execute(command: str, ctx: ActionContext) -> Optional[Dict[str, Any]]:
    """Classify and run one command. Failures are shown, then re-raised."""
    log = ctx.log
    log.log("🚀 Agent starting...")
    log.log("🎯 Agent: Processing natural language command")
    try:
        parsed = parse_command(command, home=str(ctx.config.home()), log=log)
        log.log(f"📋 Plan: Executing action '{parsed.action}'")
        result = dispatch(parsed, ctx, command)
        log.log("✅ Operation completed successfully!")
        return result
    except Exception as e:
        log.log(f"❌ Operation failed: {e}")
        ctx.ui.alert(str(e))
        raise


def read_command(words: List[str], ui: Any) -> Optional[str]:
    if words:
        return " ".join(words).strip() or None
    return ui.ask_command(DEFAULT_COMMAND)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="nl-agent",
        description="Turn a few fixed natural-language requests into file and web actions.",
    )
    ap.add_argument("command", nargs="*", help="instruction, e.g. 'Find the 3 largest files in ~/Downloads and zip them'")
    ap.add_argument("--gui", action="store_true", help="use modal dialogs for input, confirmation and errors")
    ap.add_argument("-y", "--yes", action="store_true", help="skip confirmation prompts")
    ap.add_argument("--config", type=Path, default=None, help="path to config.json")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return ap


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )
    cfg = get_config_manager(args.config).config
    if args.gui:
        cfg.ui.mode = "dialog"
    if args.yes:
        cfg.ui.assume_yes = True

    ui = make_ui(cfg.ui.mode)
    command = read_command(args.command, ui)
    if not command:
        print("No command provided. Exiting.")
        return

    ctx = make_context(cfg, ui)
    try:
        execute(command, ctx)
    except ActionError:
        raise SystemExit(1)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\nAborted.")
        raise SystemExit(1)
