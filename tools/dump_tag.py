"""
Print the ID3v2 tag of an MP3 file as JSON.

Usage:
    python tools/dump_tag.py episode.mp3
    python tools/dump_tag.py episode.mp3 --chapters
    python tools/dump_tag.py episode.mp3 --export-art ./artwork
"""

from __future__ import annotations

import argparse
import json
import sys

from config import AppConfig
from observability import logger
from serialization.tag_dict import chapters_to_list, tag_to_jsonable
from storage.image_export import export_pictures
from storage.loader import load_tag


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("path", help="MP3 file to read")
    parser.add_argument(
        "--chapters",
        action="store_true",
        help="print only the ordered chapter list",
    )
    parser.add_argument(
        "--export-art",
        nargs="?",
        const="",
        default=None,
        metavar="DIR",
        help="write attached pictures to DIR (default: IMAGE_EXPORT_DIR)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="suppress JSONL event output",
    )
    args = parser.parse_args(argv)

    config = AppConfig.load_from_env()
    logger.configure(enabled=config.enable_json_logs and not args.quiet)

    result = load_tag(args.path, max_depth=config.max_chapter_depth)
    if result.tag is None:
        for issue in result.issues:
            print(f"{args.path}: {issue.kind.value}: {issue.message}", file=sys.stderr)
        return 1

    if args.chapters:
        output = chapters_to_list(result.tag)
    else:
        output = tag_to_jsonable(result.tag)
    print(json.dumps(output, ensure_ascii=False, indent=2))

    if args.export_art is not None:
        export_pictures(result.tag, args.export_art or config.image_export_dir)

    return 0


if __name__ == "__main__":
    sys.exit(main())
