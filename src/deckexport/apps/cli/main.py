from __future__ import annotations

import argparse
import logging
from pathlib import Path

import orjson

from deckexport.core.config import get_settings
from deckexport.core.errors import DeckExportError
from deckexport.core.export import export_deck_sync
from deckexport.core.utils.inspect_pptx import format_summary, summarize_pptx
from deckexport.core.utils.schema_validate import DECK_SCHEMA, load_json, validate_instance


def _load_deck(path: Path) -> object:
    return orjson.loads(path.read_bytes())


def _print_errors(errs: list[str]) -> None:
    for m in errs[:30]:
        print(f"  {m}")
    if len(errs) > 30:
        print(f"  ... ({len(errs)} errors)")


def cmd_paths(_: argparse.Namespace) -> int:
    print(f"package_root: {Path(__file__).resolve().parents[2]}")
    print(f"schema.deck: {DECK_SCHEMA}")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    in_path = Path(args.deck).resolve()
    if not in_path.exists():
        print(f"[NG] deck not found: {in_path}")
        return 2
    try:
        deck = _load_deck(in_path)
    except orjson.JSONDecodeError as e:
        print(f"[NG] invalid JSON: {in_path}")
        print(f"      detail: {e}")
        return 2

    errs = validate_instance(load_json(DECK_SCHEMA), deck)
    if errs:
        print(f"[NG] deck: {in_path.as_posix()}")
        _print_errors(errs)
        return 2
    print("[OK] deck")
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    in_path = Path(args.deck).resolve()
    out_path = Path(args.out).resolve() if args.out else in_path.with_suffix(".pptx")

    if not in_path.exists():
        print(f"[NG] deck not found: {in_path}")
        return 2
    try:
        deck = _load_deck(in_path)
    except orjson.JSONDecodeError as e:
        print(f"[NG] invalid JSON: {in_path}")
        print(f"      detail: {e}")
        return 2

    if args.validate:
        errs = validate_instance(load_json(DECK_SCHEMA), deck)
        if errs:
            print("[NG] validation failed; export aborted")
            _print_errors(errs)
            return 2
        print("[OK] deck")

    try:
        written = export_deck_sync(deck, out_path, settings=get_settings())
    except DeckExportError as e:
        print("[NG] export failed")
        print(f"      detail: {e}")
        return 2
    print(f"[OK] exported: {written}")
    return 0


def cmd_inspect(args: argparse.Namespace) -> int:
    path = Path(args.pptx).resolve()
    if not path.exists():
        print(f"[NG] file not found: {path}")
        return 2
    for line in format_summary(summarize_pptx(path)):
        print(line)
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(prog="deckexport")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_paths = sub.add_parser("paths", help="show bundled schema paths")
    p_paths.set_defaults(func=cmd_paths)

    p_val = sub.add_parser("validate", help="validate a deck json against deck.schema.json")
    p_val.add_argument("deck", help="path to deck .json")
    p_val.set_defaults(func=cmd_validate)

    p_exp = sub.add_parser("export", help="export a deck json to .pptx")
    p_exp.add_argument("deck", help="path to deck .json")
    p_exp.add_argument("--out", required=False, help="output .pptx path (default: <deck>.pptx)")
    p_exp.add_argument("--validate", action="store_true", help="check the schema before exporting")
    p_exp.set_defaults(func=cmd_export)

    p_ins = sub.add_parser("inspect", help="summarize shapes per slide of a .pptx")
    p_ins.add_argument("pptx", help="path to .pptx")
    p_ins.set_defaults(func=cmd_inspect)

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    raise SystemExit(args.func(args))


if __name__ == "__main__":
    main()
