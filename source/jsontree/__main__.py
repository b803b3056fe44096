import argparse
import logging
import sys

from jsontree import constants as app_constants
from jsontree.domain_impl.infra import settings_service
from jsontree.domain_impl.json import json_path_service
from jsontree.exceptions import EXPECTED_ERRORS, PathLookupError
from jsontree.json_tree_view import JsonTreeView


def _collapsed_arg(text):
    token = str(text).strip().lower()
    if token in ("true", "yes", "on"):
        return True
    if token in ("false", "no", "off"):
        return False
    try:
        depth = int(token)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected true/false or a depth, got {text!r}") from exc
    if depth < 0:
        raise argparse.ArgumentTypeError("collapse depth must be >= 0")
    return depth


def build_parser():
    parser = argparse.ArgumentParser(
        prog=app_constants.APP_NAME,
        description="Print the visible outline of a JSON document as a collapsible tree would show it.",
    )
    parser.add_argument("input", help="Path to a .json or gzip .json.gz document.")
    parser.add_argument(
        "--settings",
        default=app_constants.SETTINGS_FILENAME,
        help="View settings JSON file; missing files fall back to defaults.",
    )
    parser.add_argument("--collapsed", type=_collapsed_arg, default=None)
    parser.add_argument("--size-threshold", type=int, default=None)
    parser.add_argument("--chunk-size", type=int, default=None)
    parser.add_argument("--ignore-large-sequences", action="store_true")
    parser.add_argument(
        "--copy",
        default=None,
        metavar="PATH",
        help="Print the copy text of the node at a dotted path (e.g. items[3].name) instead of the outline.",
    )
    parser.add_argument("--verbose", action="store_true")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    settings = settings_service.load_view_settings(args.settings)
    changes = {}
    if args.collapsed is not None:
        changes["collapsed"] = args.collapsed
    if args.size_threshold is not None:
        changes["size_threshold"] = args.size_threshold
    if args.chunk_size is not None:
        changes["chunk_size"] = args.chunk_size
    if args.ignore_large_sequences:
        changes["ignore_large_sequences"] = True
    settings = settings.updated(**changes)

    try:
        data = settings_service.load_document(args.input)
    except EXPECTED_ERRORS as exc:
        print(f"ERROR: failed to load input document: {exc}", file=sys.stderr)
        return 2

    view = JsonTreeView(data, settings=settings)
    if args.copy is not None:
        try:
            path = json_path_service.parse_display_path(args.copy)
            print(view.copy_text(path))
        except (PathLookupError, ValueError) as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            return 1
        return 0
    print(view.outline())
    return 0


if __name__ == "__main__":
    sys.exit(main())
