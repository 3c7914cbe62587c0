"""StoreRepl: interactive shell over a RecordStore.

Also provides the ``xmldb-repl`` CLI entry point via ``main()``.
"""

from __future__ import annotations

import io
import sys
from typing import IO

from .errors import Status
from .model import Leaf, Record
from .store import RecordStore


# ---------------------------------------------------------------------------
# StoreRepl class (programmatic use)
# ---------------------------------------------------------------------------

class StoreRepl:
    """Line-oriented front end that keeps one RecordStore across commands.

    Usage::

        repl = StoreRepl()
        repl.run(":load scene.xml")
        repl.run("add objectGeometryGroup b.obj")
        print(repl.run("ls objectGeometryGroup"))
        repl.run(":save scene.xml")
    """

    def __init__(self) -> None:
        self.messages: list[str] = []
        self.store = RecordStore(sink=self.messages.append)

    def run(self, line: str) -> str:
        """Process one command line and return what it printed."""
        buf = io.StringIO()
        _process_line(self, line, buf)
        return buf.getvalue()

    def reset(self) -> None:
        """Drop the loaded tree and any collected messages."""
        self.store.reset()
        self.messages.clear()


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def format_tree(record: Record, depth: int = 0) -> str:
    """Render a canonical tree one instance per line, for debugging."""
    pad = "  " * depth
    if not record.fields:
        return f"{pad}{{}}"
    lines: list[str] = []
    for name, instances in record.fields.items():
        if not isinstance(instances, list):
            lines.append(f"{pad}{name}: <corrupt {type(instances).__name__}>")
            continue
        if not instances:
            lines.append(f"{pad}{name}: []")
        for i, instance in enumerate(instances):
            if isinstance(instance, Leaf):
                lines.append(f'{pad}{name}[{i}]: "{instance}"')
            elif isinstance(instance, Record):
                lines.append(f"{pad}{name}[{i}]:")
                lines.append(format_tree(instance, depth + 1))
            else:
                lines.append(f"{pad}{name}[{i}]: <corrupt {type(instance).__name__}>")
    return "\n".join(lines)


def _flush_messages(repl: StoreRepl, dest: IO[str]) -> None:
    for message in repl.messages:
        print(f"  ! {message}", file=dest)
    repl.messages.clear()


def _print_status(repl: StoreRepl, status: Status, dest: IO[str]) -> None:
    _flush_messages(repl, dest)
    if status:
        print("  ok", file=dest)


# ---------------------------------------------------------------------------
# Command processing
# ---------------------------------------------------------------------------

def _show_entries(repl: StoreRepl, collection: str, dest: IO[str]) -> None:
    paths = repl.store.entries(collection)
    if not paths:
        print(f"  ({collection} is empty)", file=dest)
        return
    for i, path in enumerate(paths):
        print(f"  {i}: {path}", file=dest)


def _process_line(repl: StoreRepl, line: str, dest: IO[str]) -> bool:
    """Process one input line.  Returns False when the session should end."""
    line = line.strip()
    if not line or line.startswith("#"):
        return True

    # ── Exit ──────────────────────────────────────────────────────────────
    if line in (":q", ":quit"):
        return False

    # ── Control commands ──────────────────────────────────────────────────
    if line == ":show":
        print(format_tree(repl.store.tree), file=dest)
        return True

    if line == ":state":
        print(f"  {repl.store.state.name.lower()}", file=dest)
        return True

    if line == ":reset":
        repl.reset()
        return True

    if line.startswith(":load "):
        _print_status(repl, repl.store.load(line[6:].strip()), dest)
        return True

    if line.startswith(":save "):
        _print_status(repl, repl.store.save(line[6:].strip()), dest)
        return True

    # ── Entry commands ────────────────────────────────────────────────────
    parts = line.split(maxsplit=2)
    if parts[0] == "ls" and len(parts) == 2:
        _show_entries(repl, parts[1], dest)
        return True

    if parts[0] in ("add", "rm") and len(parts) == 3:
        collection, path = parts[1], parts[2]
        if parts[0] == "add":
            status = repl.store.add_entry(collection, path)
        else:
            status = repl.store.remove_entry(collection, path)
        _print_status(repl, status, dest)
        return True

    print(f"  unknown command: {line}", file=dest)
    return True


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def main() -> None:
    """Interactive shell (``xmldb-repl`` / ``python -m xmldb_core.repl``)."""
    repl = StoreRepl()
    dest: IO[str] = sys.stdout

    if len(sys.argv) > 1:
        _process_line(repl, f":load {sys.argv[1]}", dest)

    print("XMLDB REPL  (:q to quit  |  :load :save :show :state :reset  |  add / rm / ls)")

    while True:
        try:
            line = input("XMLDB> ").strip()
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print()
            continue

        # ── Batch execute: ?<< filepath ───────────────────────────────────
        if line.startswith("?<< "):
            filepath = line[4:].strip()
            try:
                with open(filepath, encoding="utf-8") as fh:
                    for file_line in fh:
                        if not _process_line(repl, file_line.rstrip("\n"), dest):
                            break
            except OSError as exc:
                print(f"Error reading '{filepath}': {exc}", file=sys.stderr)
            continue

        if not _process_line(repl, line, dest):
            break


if __name__ == "__main__":
    main()
