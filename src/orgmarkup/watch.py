"""Watch mode for orgmarkup - re-render an Org file whenever it changes."""

import json
import logging
import signal
import sys
import time
from pathlib import Path
from typing import Any, Callable

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .adapters.yaml_codec import buffer_to_dict
from .core.model import Buffer
from .runtime import Runtime

logger = logging.getLogger(__name__)


class DebounceHandler(FileSystemEventHandler):
    """Collects writes to one file and reports them after a quiet period."""

    def __init__(self, target: Path, on_change: Callable[[Path], None], debounce_ms: int = 150):
        super().__init__()
        self.target = target.resolve()
        self.on_change = on_change
        self.debounce_ms = debounce_ms

        self.pending = False
        self.last_event_time = 0.0

    def _is_target(self, event: FileSystemEvent) -> bool:
        if event.is_directory:
            return False
        paths = [event.src_path, getattr(event, "dest_path", "")]
        return any(p and Path(str(p)).resolve() == self.target for p in paths)

    def _touch(self, event: FileSystemEvent) -> None:
        if self._is_target(event):
            self.pending = True
            self.last_event_time = time.time()

    def on_created(self, event: FileSystemEvent) -> None:
        self._touch(event)

    def on_modified(self, event: FileSystemEvent) -> None:
        self._touch(event)

    def on_moved(self, event: FileSystemEvent) -> None:
        # Editors that save via rename
        self._touch(event)

    def check_and_flush(self) -> None:
        """Flush if the debounce period has elapsed."""
        if not self.pending:
            return

        elapsed = (time.time() - self.last_event_time) * 1000
        if elapsed >= self.debounce_ms:
            self.flush()

    def flush(self) -> None:
        if not self.pending:
            return
        self.pending = False
        if self.target.exists():
            self.on_change(self.target)


def watch_file(
    path: Path,
    runtime: Runtime,
    render: Callable[[Buffer], str],
    debounce_ms: int = 150,
    quiet: bool = False,
    json_output: bool = False,
    unfold: bool = False,
) -> int:
    """
    Watch an Org file and print its formatted form on every change.

    Args:
        path: File to watch
        runtime: Runtime used to format the file
        render: Turns a formatted buffer into printable text
        debounce_ms: Debounce window in milliseconds
        quiet: Suppress status messages
        json_output: Output JSON events instead of rendered text
        unfold: Show drawers unfolded (also on with [ui] unfold_drawers)

    Returns:
        Exit code
    """
    if not path.exists():
        print(f"Error: File not found: {path}", file=sys.stderr)
        return 1

    running = True

    def handle_change(changed: Path) -> None:
        start_time = time.time()
        try:
            buffer = runtime.format(changed.read_text(encoding="utf-8"), unfold=unfold)
            duration_ms = int((time.time() - start_time) * 1000)

            if json_output:
                event = {
                    "type": "render",
                    "path": str(changed),
                    "duration_ms": duration_ms,
                    "buffer": buffer_to_dict(buffer),
                }
                print(json.dumps(event, ensure_ascii=False), flush=True)
            else:
                print(render(buffer), flush=True)
                if not quiet:
                    print(f"-- rendered {changed.name} ({duration_ms}ms)", flush=True)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to render %s: %s", changed, e)
            if json_output:
                print(json.dumps({"type": "error", "message": str(e)}), flush=True)
            else:
                print(f"Error: {e}", file=sys.stderr, flush=True)

    def signal_handler(signum: int, frame: Any) -> None:
        nonlocal running
        running = False
        if not quiet and not json_output:
            print("\nShutting down...", flush=True)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    handler = DebounceHandler(path, handle_change, debounce_ms)
    observer = Observer()
    observer.schedule(handler, str(path.resolve().parent), recursive=False)

    # Initial render
    handle_change(path.resolve())

    if not quiet and not json_output:
        print(f"Watching {path} (debounce: {debounce_ms}ms)", flush=True)
        print("Press Ctrl+C to stop", flush=True)

    observer.start()

    try:
        while running:
            time.sleep(0.1)
            handler.check_and_flush()
    finally:
        handler.flush()
        observer.stop()
        observer.join()

    if not quiet and not json_output:
        print("Watch stopped", flush=True)

    return 0
