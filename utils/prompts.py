from __future__ import annotations

import sys
from typing import Optional


class TerminalUI:
    """Confirmation, alerts and command entry on the controlling terminal."""

    def ask_command(self, default: str = "") -> Optional[str]:
        print(">> What would you like me to do?")
        if default:
            print(f"   (Enter for: {default})")
        if not sys.stdin.isatty():
            text = sys.stdin.read().strip()
            return text or None
        try:
            text = input("> ").strip()
        except EOFError:
            return None
        return text or default or None

    def confirm(self, message: str) -> bool:
        if not sys.stdin.isatty():
            # Non-interactive: default deny for safety
            print(f"{message} [denied: no terminal]")
            return False
        try:
            ans = input(f"{message}\n[y/N]: ").strip().lower()
        except EOFError:
            ans = ""
        return ans in {"y", "yes", "p", "proceed"}

    def alert(self, message: str) -> None:
        print(f"❌ Agent Error: {message}", file=sys.stderr)
