"""Desktop launcher for the figure generator UI using PyWebView."""

from __future__ import annotations

import argparse
import json
import logging
import os
import subprocess
import sys
import time
import webbrowser
from pathlib import Path

from urllib import error, request

ROOT_DIR = Path(__file__).resolve().parents[2]

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Figure generator launcher")
    parser.add_argument("--server", default="http://127.0.0.1:8000")
    parser.add_argument("--start-server", action="store_true")
    return parser.parse_args(argv)


def fetch_committed_generation(server_url: str) -> int | None:
    try:
        with request.urlopen(f"{server_url}/api/state", timeout=0.5) as response:
            payload = json.load(response)
    except (error.URLError, TimeoutError, ValueError):
        return None
    return int(payload.get("state", {}).get("committedGeneration", 0))


def wait_for_server(server_url: str, timeout_s: float = 8.0) -> bool:
    """Poll until the server has committed its first batch of figures."""
    start = time.time()
    while time.time() - start < timeout_s:
        generation = fetch_committed_generation(server_url)
        if generation is not None and generation >= 1:
            return True
        time.sleep(0.2)
    return False


def build_server_command(server_url: str) -> list[str]:
    host_port = server_url.removeprefix("http://")
    host, port = host_port.split(":", maxsplit=1)
    return [
        sys.executable,
        "-m",
        "uvicorn",
        "figuregen.backend.api:app",
        "--host",
        host,
        "--port",
        port,
    ]


def maybe_start_server(server_url: str) -> subprocess.Popen[str] | None:
    env = os.environ.copy()
    process = subprocess.Popen(build_server_command(server_url), cwd=str(ROOT_DIR), env=env)
    if wait_for_server(server_url):
        return process
    process.terminate()
    return None


def open_ui(url: str, title: str) -> None:
    try:
        import webview
    except ImportError:
        logger.info("PyWebView not available, opening %s in the browser", url)
        webbrowser.open(url)
        return

    webview.create_window(title, url=url, width=1280, height=860)
    webview.start()


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO)
    args = parse_args(argv)

    server_process: subprocess.Popen[str] | None = None
    if args.start_server:
        server_process = maybe_start_server(args.server)
        if server_process is None:
            logger.error("Server could not be started.")
            return 1
    elif not wait_for_server(args.server):
        logger.error("Server unreachable. Start with --start-server or run uvicorn manually.")
        return 1

    try:
        open_ui(url=f"{args.server}/", title="Figure Generator")
    finally:
        if server_process is not None:
            server_process.terminate()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
