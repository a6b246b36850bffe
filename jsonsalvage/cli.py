"""
Command line interface for jsonsalvage.

    jsonsalvage repair response.txt
    cat response.txt | jsonsalvage repair
    jsonsalvage tree responses/ --delete-failed --workers 4
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from .batch.processor import sanitize_tree
from .core.engine import repair_to_text
from .security.exceptions import RepairError
from .utils.config import BatchConfig, RepairBackend, RepairConfig, RepairSettings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jsonsalvage",
        description="Recover JSON from corrupted or LLM-generated text.",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    parser.add_argument(
        "--heuristic",
        action="store_true",
        help="Use the built-in repair battery instead of json_repair",
    )
    parser.add_argument(
        "--legacy",
        action="store_true",
        help="Use the legacy bug-compatible behaviour",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    repair_cmd = subparsers.add_parser("repair", help="Repair one payload")
    repair_cmd.add_argument(
        "file", nargs="?", type=Path, help="File to read (default: stdin)"
    )

    tree_cmd = subparsers.add_parser("tree", help="Repair every file under a directory")
    tree_cmd.add_argument("root", type=Path, help="Directory to walk")
    tree_cmd.add_argument(
        "--delete-failed",
        action="store_true",
        help="Delete files that cannot be repaired",
    )
    tree_cmd.add_argument(
        "--workers", type=int, default=None, help="Process files on N threads"
    )
    tree_cmd.add_argument(
        "--sentinel",
        default=BatchConfig().sentinel_filename,
        help="File name that is never processed",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> RepairConfig:
    if args.legacy:
        return RepairConfig.legacy()
    if args.heuristic:
        return RepairConfig(repair=RepairSettings(backend=RepairBackend.HEURISTIC))
    return RepairConfig.default()


def _run_repair(args: argparse.Namespace, config: RepairConfig) -> int:
    if args.file is None:
        raw = sys.stdin.read()
    else:
        try:
            raw = args.file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error: cannot read {args.file}: {e}", file=sys.stderr)
            return 1

    try:
        print(repair_to_text(raw, config))
    except RepairError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def _run_tree(args: argparse.Namespace, config: RepairConfig) -> int:
    try:
        batch_config = BatchConfig(
            sentinel_filename=args.sentinel, max_workers=args.workers
        )
        summary = sanitize_tree(
            args.root,
            delete_on_failure=args.delete_failed,
            config=config,
            batch_config=batch_config,
        )
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(summary.as_dict()))
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    config = config_from_args(args)
    if args.command == "repair":
        return _run_repair(args, config)
    return _run_tree(args, config)


if __name__ == "__main__":
    sys.exit(main())
