#!/usr/bin/env python3
"""
Bland Document Store - Main Entry Point.

Usage:
    python main.py <namespace> get <path>
    python main.py <namespace> set <path> <value>
    python main.py <namespace> delete <path>
    python main.py <namespace> has <path>
    python main.py <namespace> dump
    python main.py <namespace> clear
    python main.py <namespace> destroy
    python main.py <namespace> path

Store options (before the namespace):
    --root DIR  --suffix S  --name NAME  --ext EXT  --pretty  --compress  --key KEY
"""

import argparse
import json
import logging
import sys

from bland import BlandError, Store
from config.settings import (
    BLAND_COMPRESS,
    BLAND_ENCRYPTION_KEY,
    BLAND_PRETTY,
    DEFAULT_BASE_NAME,
    DEFAULT_EXTENSION,
    DEFAULT_SUFFIX,
    LOG_FORMAT,
    LOG_LEVEL,
)


def _open_store(args) -> Store:
    return Store(
        args.namespace,
        root=args.root,
        suffix=args.suffix,
        base_name=args.name,
        extension=args.ext,
        pretty=args.pretty,
        compress=args.compress,
        encryption_key=args.key or None,
    )


def _parse_value(raw: str):
    """Interpret a command-line value as JSON, falling back to a string."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def _print_json(value):
    print(json.dumps(value, indent=2, ensure_ascii=False))


# ============================================================
# Store Commands
# ============================================================

def cmd_get(args):
    """Print the value stored at a path."""
    store = _open_store(args)
    if not store.has(args.path):
        print(f"No value at '{args.path}'", file=sys.stderr)
        sys.exit(1)
    _print_json(store.get(args.path))


def cmd_set(args):
    """Store a value at a path."""
    store = _open_store(args)
    store.set(args.path, _parse_value(args.value))
    print(f"Set '{args.path}' in {store.store_path}")


def cmd_delete(args):
    """Delete the value stored at a path."""
    removed = _open_store(args).delete(args.path)
    if removed is None:
        print(f"No value at '{args.path}'")
        return
    print(f"Deleted '{args.path}':")
    _print_json(removed)


def cmd_has(args):
    """Exit 0 if a value is stored at the path, 1 otherwise."""
    present = _open_store(args).has(args.path)
    print("yes" if present else "no")
    if not present:
        sys.exit(1)


def cmd_dump(args):
    """Print the whole document."""
    _print_json(_open_store(args).all())


def cmd_clear(args):
    """Reset the document to an empty object."""
    store = _open_store(args)
    store.clear()
    print(f"Cleared {store.store_path}")


def cmd_destroy(args):
    """Remove the store directory."""
    store = _open_store(args)
    if not store.directory_exists():
        print(f"Nothing to remove at {store.store_dir_path}")
        return
    store.destroy()
    print(f"Removed {store.store_dir_path}")


def cmd_path(args):
    """Print the store file location."""
    print(_open_store(args).store_path)


def build_parser():
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="File-backed JSON configuration store"
    )
    parser.add_argument("--root", help="Root directory (default: platform config dir)")
    parser.add_argument("--suffix", default=DEFAULT_SUFFIX, help="Namespace suffix")
    parser.add_argument("--name", default=DEFAULT_BASE_NAME, help="Document file name")
    parser.add_argument("--ext", default=DEFAULT_EXTENSION, help="Document file extension")
    parser.add_argument(
        "--pretty", action="store_true", default=BLAND_PRETTY, help="Write indented JSON"
    )
    parser.add_argument(
        "--compress", action="store_true", default=BLAND_COMPRESS, help="Compress the file"
    )
    parser.add_argument(
        "--key", default=BLAND_ENCRYPTION_KEY, help="Encryption key (max 32 bytes)"
    )
    parser.add_argument("namespace", help="Application / project name")

    subparsers = parser.add_subparsers(dest="action", help="Action")

    get = subparsers.add_parser("get", help="Print the value at a path")
    get.add_argument("path", help="Dot path, e.g. a.b.c")
    get.set_defaults(func=cmd_get)

    set_ = subparsers.add_parser("set", help="Store a value at a path")
    set_.add_argument("path", help="Dot path, e.g. a.b.c")
    set_.add_argument("value", help="JSON value (plain text is stored as a string)")
    set_.set_defaults(func=cmd_set)

    delete = subparsers.add_parser("delete", help="Delete the value at a path")
    delete.add_argument("path", help="Dot path, e.g. a.b.c")
    delete.set_defaults(func=cmd_delete)

    has = subparsers.add_parser("has", help="Check whether a path holds a value")
    has.add_argument("path", help="Dot path, e.g. a.b.c")
    has.set_defaults(func=cmd_has)

    dump = subparsers.add_parser("dump", help="Print the whole document")
    dump.set_defaults(func=cmd_dump)

    clear = subparsers.add_parser("clear", help="Reset the document to {}")
    clear.set_defaults(func=cmd_clear)

    destroy = subparsers.add_parser("destroy", help="Remove the store directory")
    destroy.set_defaults(func=cmd_destroy)

    path = subparsers.add_parser("path", help="Print the store file location")
    path.set_defaults(func=cmd_path)

    return parser


def main(argv=None):
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    parser = build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    try:
        args.func(args)
    except BlandError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
