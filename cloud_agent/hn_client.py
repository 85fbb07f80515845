#!/usr/bin/env python3
from __future__ import annotations
import json, logging
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, List, Optional

from utils.runner import ShellResult, run_cmd

logger = logging.getLogger(__name__)

Runner = Callable[[List[str]], ShellResult]


class FeedError(RuntimeError):
    """The story id list could not be fetched or understood."""


@dataclass
class Headline:
    title: str = "No title"
    url: str = ""
    score: int = 0

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> Headline:
        try:
            score = int(item.get("score") or 0)
        except (TypeError, ValueError):
            score = 0
        return cls(
            title=str(item.get("title") or "No title"),
            url=str(item.get("url") or ""),
            score=score,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _get(url: str, http_client: List[str], run: Optional[Runner]) -> ShellResult:
    argv = [*http_client, url]
    return run(argv) if run is not None else run_cmd(argv)


def fetch_top_story_ids(api_base: str, http_client: List[str], limit: int,
                        run: Optional[Runner] = None) -> List[Any]:
    res = _get(f"{api_base.rstrip('/')}/topstories.json", http_client, run)
    if not res.success:
        raise FeedError(f"Failed to fetch top stories: {res.error}")
    try:
        ids = json.loads(res.output)
    except json.JSONDecodeError as e:
        raise FeedError(f"Failed to parse top stories JSON: {e}") from e
    if not isinstance(ids, list):
        raise FeedError(f"Failed to parse top stories JSON: expected a list, got {type(ids).__name__}")
    return ids[:limit]


def fetch_story(story_id: Any, api_base: str, http_client: List[str],
                run: Optional[Runner] = None, log=None) -> Optional[Headline]:
    """One story, or None when it cannot be fetched or parsed."""
    res = _get(f"{api_base.rstrip('/')}/item/{story_id}.json", http_client, run)
    if not res.success:
        return None
    try:
        item = json.loads(res.output)
        if not isinstance(item, dict):
            raise ValueError(f"expected an object, got {type(item).__name__}")
    except ValueError as e:
        msg = f"⚠️ Failed to parse story {story_id}: {e}"
        if log is not None:
            log.log(msg)
        else:
            logger.warning(msg)
        return None
    return Headline.from_item(item)


def render_markdown(headlines: List[Headline], retrieved: str) -> str:
    out = f"# Hacker News Top 5 Headlines\n\n**Retrieved:** {retrieved}\n\n"
    for i, h in enumerate(headlines, 1):
        out += f"## {i}. {h.title}\n"
        if h.url:
            out += f"**Link:** {h.url}\n"
        out += f"**Score:** {h.score} points\n\n"
    return out
