# /// script
# requires-python = ">=3.8"
# dependencies = [
#     "genutility[args,atomic,rich]",
#     "json5",
#     "rich",
# ]
# ///
import logging
import sys
from argparse import ArgumentParser, Namespace
from pathlib import Path
from typing import Optional

from genutility.args import future_file, is_file
from genutility.rich import MarkdownHighlighter
from rich.console import Console
from rich.logging import RichHandler

from objectsorter import sort_array_by_property, sort_object_keys, sort_object_keys_recursive
from terminal_schemes import load_jsonc, save_json

logger = logging.getLogger(__name__)


def sort_json(inpath: Path, outpath: Path, recursive: bool = False, array_property: Optional[str] = None) -> None:
    obj = load_jsonc(inpath)

    if array_property is not None:
        if not isinstance(obj, list):
            raise ValueError(f"<{inpath}> must contain an array to sort by `{array_property}`")
        sort_array_by_property(obj, array_property)
        logger.debug("Sorted %d items by `%s`", len(obj), array_property)

    if recursive:
        obj = sort_object_keys_recursive(obj)
    elif isinstance(obj, dict):
        obj = sort_object_keys(obj)

    save_json(obj, outpath)


def main(args: Namespace) -> int:
    handler = RichHandler(
        console=Console(stderr=True), log_time_format="%Y-%m-%d %H-%M-%S%Z", highlighter=MarkdownHighlighter()
    )
    FORMAT = "%(message)s"

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format=FORMAT, handlers=[handler])
    else:
        logging.basicConfig(level=logging.INFO, format=FORMAT, handlers=[handler])

    try:
        sort_json(Path(args.inpath), Path(args.outpath), args.recursive, args.array_property)
    except OSError as e:
        logger.error("Failed to sort <%s>: %s", args.inpath, e)
        return 2
    except (ValueError, TypeError) as e:
        logger.error("Failed to sort <%s>: %s", args.inpath, e)
        return 1

    return 0


def get_parser() -> ArgumentParser:
    parser = ArgumentParser(description="Sort the keys of a JSON file. Comments are not preserved.")
    parser.add_argument("inpath", type=is_file)
    parser.add_argument("outpath", type=future_file)
    parser.add_argument("-r", "--recursive", action="store_true", help="Sort the keys of nested objects as well")
    parser.add_argument(
        "--array-property", metavar="NAME", help="Sort a top level array of objects by the value of this property"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    return parser


def cli() -> None:
    args = get_parser().parse_args()
    sys.exit(main(args))


if __name__ == "__main__":
    cli()
