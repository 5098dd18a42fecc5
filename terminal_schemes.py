# /// script
# requires-python = ">=3.8"
# dependencies = [
#     "genutility[atomic,rich]",
#     "json5",
#     "rich",
# ]
# ///
import json
import logging
import sys
from argparse import ArgumentParser, Namespace
from copy import deepcopy
from os import fspath
from pathlib import Path
from typing import Any, Dict, Iterator, List, Set, Tuple, Union

import json5
from genutility.atomic import sopen
from genutility.rich import MarkdownHighlighter
from rich.console import Console
from rich.logging import RichHandler

import terminal_schemes_data
from objectsorter import sort_array_by_property, sort_object_keys

logger = logging.getLogger(__name__)

DEFAULT_SCHEMES_PATH = Path(terminal_schemes_data.__file__).resolve().parent / "terminal-schemes.json"

Schemes = Union[Dict[str, Dict[str, Any]], List[Dict[str, Any]]]


class SchemeShapeError(ValueError):
    pass


def load_jsonc(path: Path) -> Any:
    """Load a json file which may contain comments and trailing commas."""

    with open(path, encoding="utf-8-sig") as fr:
        return json5.loads(fr.read())


def save_json(obj: Any, path: Path) -> None:
    with sopen(fspath(path), "wt", encoding="utf-8") as fw:
        json.dump(obj, fw, ensure_ascii=False, indent=4)
        fw.write("\n")


def get_schemes(document: Any, label: str) -> Schemes:
    """Returns the `schemes` collection of a settings document.
    It can either be a mapping of scheme name to attributes or a list of attribute mappings with a `name` field
    (which is what Windows Terminal uses).
    """

    if not isinstance(document, dict):
        raise SchemeShapeError(f"{label}: expected an object at the top level, got {type(document).__name__}")

    try:
        schemes = document["schemes"]
    except KeyError:
        raise SchemeShapeError(f"{label}: missing `schemes`") from None

    if isinstance(schemes, dict):
        for name, attrs in schemes.items():
            if not isinstance(attrs, dict):
                raise SchemeShapeError(f"{label}: scheme `{name}` is not an object")
    elif isinstance(schemes, list):
        for i, entry in enumerate(schemes):
            if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
                raise SchemeShapeError(f"{label}: scheme #{i} is not an object with a `name`")
    else:
        raise SchemeShapeError(f"{label}: `schemes` must be an object or an array, got {type(schemes).__name__}")

    return schemes


def iter_schemes(schemes: Schemes) -> Iterator[Tuple[str, Dict[str, Any]]]:
    """Yields (name, attributes) pairs. Attributes never include the name."""

    if isinstance(schemes, dict):
        yield from schemes.items()
    else:
        for entry in schemes:
            attrs = {k: v for k, v in entry.items() if k != "name"}
            yield entry["name"], attrs


def combine_schemes(defaults: Schemes, target: Schemes, overwrite: bool = False) -> List[str]:
    """Adds all schemes from `defaults` to `target` which aren't in `target` yet.
    Existing schemes with the same name are kept, unless `overwrite` is True.
    `target` is modified in place. Returns the names of the added or replaced schemes.
    """

    changed: List[str] = []
    seen: Set[str] = set()

    if isinstance(target, dict):
        positions: Dict[str, int] = {}
    else:
        positions = {entry["name"]: i for i, entry in enumerate(target)}

    for name, attrs in iter_schemes(defaults):
        # the first default with a given name wins
        if name in seen:
            logger.warning("Ignoring duplicate default scheme `%s`", name)
            continue
        seen.add(name)

        exists = name in target if isinstance(target, dict) else name in positions
        if exists:
            if not overwrite:
                logger.debug("Keeping existing scheme `%s`", name)
                continue
            logger.info("Replacing scheme `%s`", name)
        else:
            logger.info("Adding scheme `%s`", name)

        if isinstance(target, dict):
            target[name] = deepcopy(attrs)
        else:
            entry = {"name": name}
            entry.update(deepcopy({k: v for k, v in attrs.items() if k != "name"}))
            if exists:
                target[positions[name]] = entry
            else:
                positions[name] = len(target)
                target.append(entry)
        changed.append(name)

    return changed


def sort_schemes(document: Dict[str, Any]) -> None:
    schemes = document["schemes"]
    if isinstance(schemes, dict):
        document["schemes"] = sort_object_keys(schemes)
    else:
        sort_array_by_property(schemes, "name")


def merge_schemes(
    defaults_path: Path, target_path: Path, overwrite: bool = False, sort: bool = False, dry_run: bool = False
) -> Dict[str, Any]:
    """Merges the color schemes from `defaults_path` into the settings file at `target_path`
    and writes the result back, unless `dry_run` is True.
    Both files are loaded and validated before anything is written.
    """

    defaults = load_jsonc(defaults_path)
    document = load_jsonc(target_path)

    default_schemes = get_schemes(defaults, f"<{defaults_path}>")
    target_schemes = get_schemes(document, f"<{target_path}>")

    changed = combine_schemes(default_schemes, target_schemes, overwrite)
    if sort:
        sort_schemes(document)

    if dry_run:
        logger.info("Dry run: %d scheme(s) would be changed in <%s>", len(changed), target_path)
    else:
        save_json(document, target_path)
        logger.info("Changed %d scheme(s) in <%s>", len(changed), target_path)

    return document


def main(args: Namespace) -> int:
    # stdout is reserved for --dry-run output
    handler = RichHandler(
        console=Console(stderr=True), log_time_format="%Y-%m-%d %H-%M-%S%Z", highlighter=MarkdownHighlighter()
    )
    FORMAT = "%(message)s"

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format=FORMAT, handlers=[handler])
    else:
        logging.basicConfig(level=logging.INFO, format=FORMAT, handlers=[handler])

    try:
        document = merge_schemes(args.defaults, args.path, args.overwrite, args.sort, args.dry_run)
    except OSError as e:
        logger.error("Failed to read or write settings: %s", e)
        return 2
    except ValueError as e:
        logger.error("Invalid settings: %s", e)
        return 1

    if args.dry_run:
        print(json.dumps(document, ensure_ascii=False, indent=4))

    return 0


def get_parser() -> ArgumentParser:
    parser = ArgumentParser(description="Add the bundled color schemes to a Windows Terminal settings file")
    parser.add_argument("path", type=Path, help="Windows Terminal settings.json to update")
    parser.add_argument(
        "--defaults", type=Path, default=DEFAULT_SCHEMES_PATH, help="Settings file with the schemes to add"
    )
    parser.add_argument("--overwrite", action="store_true", help="Replace existing schemes with the same name")
    parser.add_argument("--sort", action="store_true", help="Sort schemes by name")
    parser.add_argument("--dry-run", action="store_true", help="Print the merged settings instead of writing them")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    return parser


def cli() -> None:
    args = get_parser().parse_args()
    sys.exit(main(args))


if __name__ == "__main__":
    cli()
