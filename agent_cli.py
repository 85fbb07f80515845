#!/usr/bin/env python3
"""
Interactive command wrapper for the natural-language agent.

Anything that is not a slash command is handed to agent.execute() as a
natural-language instruction; a failed action is reported and the loop
carries on.

Supported commands:
- /help                      Show help
- /demo                      Walk through the three sample commands
- /summary [N]               Show the last N lines of the operation summary
- /headlines                 Show the saved Hacker News headlines
- /ui terminal|dialog        Switch prompt style (saved to config)
- /tools                     Check which external tools are installed
- /install-alias             Add `agent` alias to your shell rc
- /uninstall-alias           Remove it again
- /quit                      Exit
"""
from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Callable, List, Optional

from agent import BASE_DIR, execute, make_context, make_ui
from config import Config, get_config_manager
from runtime.actions import ActionError, SUPPORTED_COMMANDS
from utils.helper import which

DEMO_COMMANDS = [
    "Find the 3 largest files in ~/Downloads and zip them",
    "Convert all .docx to .pdf in ~/Documents",
    "Open Hacker News, grab the top 5 headlines, save to Markdown file",
]

logger = logging.getLogger(__name__)

ALIAS_MARKER = "# nl-agent"
TOOLS = ("zip", "soffice", "curl")


# ---------- shell alias ----------
def alias_line(python: str = sys.executable, script: Path = BASE_DIR / "agent.py") -> str:
    return f"alias agent='{python} \"{script}\"'  {ALIAS_MARKER}"


def shell_rc(shell: Optional[str] = None, home: Optional[Path] = None) -> Optional[Path]:
    shell = shell if shell is not None else os.environ.get("SHELL", "")
    home = home or Path.home()
    if "zsh" in shell:
        return home / ".zshrc"
    if "bash" in shell:
        return home / ".bash_profile"
    return None


def install_alias(rc: Path, line: Optional[str] = None) -> None:
    """Write the alias into ``rc``, replacing any earlier install."""
    line = line or alias_line()
    existing = rc.read_text(encoding="utf-8") if rc.exists() else ""
    kept = [ln for ln in existing.splitlines() if ALIAS_MARKER not in ln]
    rc.write_text("\n".join([*kept, line]) + "\n", encoding="utf-8")


def uninstall_alias(rc: Path) -> bool:
    if not rc.exists():
        return False
    lines = rc.read_text(encoding="utf-8").splitlines()
    kept = [ln for ln in lines if ALIAS_MARKER not in ln]
    if len(kept) == len(lines):
        return False
    rc.write_text("\n".join(kept) + ("\n" if kept else ""), encoding="utf-8")
    return True


# ---------- viewers ----------
def tail_text(path: Path, n: int = 40) -> str:
    if not path.exists():
        return ""
    lines = path.read_text(encoding="utf-8", errors="replace").splitlines()
    return "\n".join(lines[-n:])


# ---------- commands ----------
def run_line(line: str, cfg: Config, ui) -> bool:
    """Execute one natural-language line; True when it finished without error."""
    try:
        execute(line, make_context(cfg, ui))
        return True
    except ActionError as e:
        print(f"❌ {e}")
        return False
    except Exception as e:
        # Already logged and alerted by execute(); keep the shell alive
        logger.error(f"Command failed: {e}")
        print(f"❌ {type(e).__name__}: {e}")
        return False


def run_demo(cfg: Config, ui, pause: Callable[[str], str] = input) -> None:
    print("🎬 Natural Language Agent Demo")
    print("=" * 37)
    for i, cmd in enumerate(DEMO_COMMANDS, 1):
        print(f"\n{i}. Command: {cmd}")
        try:
            pause("Press Enter to continue...")
        except EOFError:
            print()
            return
        run_line(cmd, cfg, ui)
    print(f"\n✅ Demo completed! Check {cfg.summary_path()} for results")


def print_tools() -> None:
    print("External tools:")
    for t in TOOLS:
        print(f"    {t:8}: {'yes' if which(t) else 'no'}")


def print_help() -> None:
    print("Commands:")
    print("  /help                 Show this help")
    print("  /demo                 Run the three sample commands")
    print("  /summary [N]          Show last N lines of the operation summary")
    print("  /headlines            Show saved Hacker News headlines")
    print("  /ui terminal|dialog   Switch prompt style")
    print("  /tools                Check zip / soffice / curl")
    print("  /install-alias        Add `agent` alias to your shell rc")
    print("  /uninstall-alias      Remove the alias")
    print("  /quit                 Exit")
    print("\nOr type one of:")
    for c in SUPPORTED_COMMANDS:
        print(f"  • {c}")


def handle(line: str, cfg: Config, ui) -> bool:
    """Process one input line. Returns False when the loop should stop."""
    if line in ("/quit", "/exit"):
        return False
    if line == "/help":
        print_help()
    elif line == "/demo":
        run_demo(cfg, ui)
    elif line.startswith("/summary"):
        parts = line.split()
        try:
            n = int(parts[1]) if len(parts) > 1 else 40
        except ValueError:
            print("Usage: /summary [N]")
            return True
        print(tail_text(cfg.summary_path(), n) or "No operations recorded yet.")
    elif line == "/headlines":
        print(tail_text(cfg.headlines_path(), 200) or "No headlines saved yet.")
    elif line.startswith("/ui"):
        parts = line.split()
        if len(parts) != 2 or parts[1] not in ("terminal", "dialog"):
            print("Usage: /ui terminal|dialog")
        else:
            get_config_manager().update_config({"ui": {"mode": parts[1]}})
            cfg.ui.mode = parts[1]
            print(f"Prompt style set to {parts[1]} (takes effect on restart).")
    elif line == "/tools":
        print_tools()
    elif line == "/install-alias":
        rc = shell_rc()
        if rc is None:
            print("⚠️ Could not detect shell config file. Add this manually:")
            print(alias_line())
        else:
            try:
                install_alias(rc)
                print(f"✅ Alias added to {rc}! Restart terminal or run: source {rc}")
                print('Usage: agent "your command here"')
            except OSError as e:
                print(f"Install failed: {e}")
    elif line == "/uninstall-alias":
        rc = shell_rc()
        try:
            removed = rc is not None and uninstall_alias(rc)
        except OSError as e:
            print(f"Uninstall failed: {e}")
            return True
        print(f"Removed alias from {rc}." if removed else "No alias entry found.")
    elif line.startswith("/"):
        print("Unknown command. Type /help.")
    else:
        run_line(line, cfg, ui)
    return True


def main(argv: Optional[List[str]] = None) -> None:
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    cfg = get_config_manager().config
    ui = make_ui(cfg.ui.mode)
    print("Natural Language Agent — type /help for commands.\n")
    while True:
        try:
            line = input("> ").strip()
        except EOFError:
            print()
            break
        if not line:
            continue
        if not handle(line, cfg, ui):
            break


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\nAborted.")
