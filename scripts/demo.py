#!/usr/bin/env python3
from __future__ import annotations

import logging
from pathlib import Path

# Allow running without package install
import sys
BASE_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(BASE_DIR))

from agent import make_ui
from agent_cli import run_demo
from config import get_config


def main() -> None:
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    cfg = get_config()
    run_demo(cfg, make_ui(cfg.ui.mode))


if __name__ == "__main__":
    main()
