"""
Song Queue CLI

    songqueue serve [--host HOST] [--port PORT] [--reload]
    songqueue watch [--interval SECONDS] [--once]
    songqueue verify CODE
"""

import argparse
import sys
import time
from typing import Any, Dict, List, Optional

from songqueue.client import QueueClient
from songqueue.config import API_BASE_URL, LOG_LEVEL, QUEUE_POLL_INTERVAL_SECONDS
from songqueue.core import (
    SongQueueError,
    configure_logging,
    log_error,
    log_info,
    log_section,
    log_success,
)


def format_entry(position: int, entry: Dict[str, Any]) -> str:
    artists = ", ".join(entry.get("artist_names") or []) or "Unknown artist"
    seconds = int(entry.get("duration_ms", 0)) // 1000
    return (
        f"{position:>2}. {entry.get('name')} - {artists} "
        f"({seconds // 60}:{seconds % 60:02d}) [{entry.get('team_name')}]"
    )


def render_queue(data: Dict[str, Any], now_playing: Optional[Dict[str, Any]] = None) -> List[str]:
    lines = []
    if now_playing:
        lines.append(f"Now playing: {now_playing.get('name')} [{now_playing.get('team_name')}]")
    queue = data.get("queue") or []
    if not queue:
        lines.append("Queue is empty.")
    for position, entry in enumerate(queue, start=1):
        lines.append(format_entry(position, entry))
    return lines


def run_watch(client: QueueClient, interval: float, once: bool = False) -> int:
    """Poll the queue and log it whenever its version changes."""
    last_version = None
    while True:
        try:
            data = client.get_queue()
        except SongQueueError as e:
            log_error(f"Could not read the queue: {e}")
            return 1

        if data.get("version") != last_version:
            last_version = data.get("version")
            log_section(f"Queue (version {last_version})")
            for line in render_queue(data, client.now_playing()):
                log_info(line)

        if once:
            return 0
        time.sleep(interval)


def run_verify(client: QueueClient, code: str) -> int:
    try:
        data = client.verify(code)
    except SongQueueError as e:
        log_error(f"Login failed: {e}")
        return 1

    who = (data.get("admin") or {}).get("name") or (data.get("team") or {}).get("team_name")
    log_success(f"Logged in as {who}; capabilities: {', '.join(data['capabilities'])}")
    print(data["session_token"])
    return 0


def run_serve(host: str, port: int, reload: bool) -> int:
    import uvicorn

    uvicorn.run("songqueue.api.fastapi_app:app", host=host, port=port, reload=reload)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="songqueue", description="Collaborative Spotify song queue")
    parser.add_argument("--api-url", default=API_BASE_URL, help="Song queue API base URL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8888)
    serve.add_argument("--reload", action="store_true")

    watch = subparsers.add_parser("watch", help="Poll the queue and print changes")
    watch.add_argument("--interval", type=float, default=QUEUE_POLL_INTERVAL_SECONDS)
    watch.add_argument("--once", action="store_true", help="Print the queue once and exit")

    verify = subparsers.add_parser("verify", help="Log in with a team or admin code")
    verify.add_argument("code")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    configure_logging(LOG_LEVEL)
    args = build_parser().parse_args(argv)

    if args.command == "serve":
        return run_serve(args.host, args.port, args.reload)

    client = QueueClient(args.api_url)
    if args.command == "watch":
        return run_watch(client, args.interval, once=args.once)
    return run_verify(client, args.code)


if __name__ == "__main__":
    sys.exit(main())
