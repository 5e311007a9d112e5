"""CLI interface for input-facade — handy for trying out masks from a shell.

Usage:
    # Mask values (one per stdin line, or as arguments) → JSON lines
    printf '1234\\n12\\n' | input-facade --pattern '##.##' mask
    input-facade --pattern '+1 ###' --prefill mask ''

    # Simulate one edit: raw value on stdin, cursor where the edit ended
    printf 'ABC1x23' | input-facade --pattern 'AAA-###-' edit --cursor 4

    # Show compiled tokens
    input-facade --pattern 'AAA-###' tokens

    # Use a named mask from a YAML file (see input_facade.config)
    input-facade --config masks.yaml --name phone mask 5551234567
"""

from __future__ import annotations
import argparse
import json
import logging
import sys

from .config import ConfigError, get_mask, load_from_yaml
from .masker import mask_value, process_edit
from .tokens import placeholder_count
from .types import CursorEdit, EditType, MaskConfig, Modifiers, Placeholder

logger = logging.getLogger(__name__)


def _configure_logging(level_name: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level_name.upper(), logging.WARNING),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stderr,
    )


def _build_config(args: argparse.Namespace) -> MaskConfig:
    if args.config:
        if not args.name:
            raise ConfigError("--name is required with --config")
        config = get_mask(load_from_yaml(args.config), args.name)
        if args.short or args.prefill:
            config.update(config.pattern, Modifiers(
                short=args.short or config.modifiers.short,
                prefill=args.prefill or config.modifiers.prefill,
            ))
        return config
    return MaskConfig.compile(args.pattern, Modifiers(short=args.short, prefill=args.prefill))


def _emit(data: dict) -> None:
    json.dump(data, sys.stdout, ensure_ascii=False)
    sys.stdout.write("\n")


def cmd_mask(args: argparse.Namespace, config: MaskConfig) -> None:
    """Mask values given as arguments, or one per stdin line."""
    values = args.values if args.values else sys.stdin.read().splitlines()
    for value in values:
        result = mask_value(config, value)
        _emit({"masked": result.masked, "unmasked": result.unmasked})


def cmd_edit(args: argparse.Namespace, config: MaskConfig) -> None:
    """Process one edit: raw field value on stdin."""
    raw = sys.stdin.read().rstrip("\n")
    edit = CursorEdit(
        previous_masked=args.previous,
        raw_input=raw,
        origin_offset=len(raw) if args.cursor is None else args.cursor,
        edit_type=EditType.from_input_type(args.input_type),
    )
    result = process_edit(config, edit)
    _emit({"masked": result.masked, "unmasked": result.unmasked, "cursor": result.cursor_offset})


def cmd_tokens(args: argparse.Namespace, config: MaskConfig) -> None:
    """Dump the compiled token sequence."""
    tokens = [
        {"kind": "placeholder", "class": t.char_class.name.lower(), "symbol": t.symbol}
        if isinstance(t, Placeholder)
        else {"kind": "literal", "char": t.char}
        for t in config.tokens
    ]
    data = {"pattern": config.pattern, "placeholders": placeholder_count(config.tokens), "tokens": tokens}
    json.dump(data, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="input-facade",
        description="Format text through input masks",
    )
    parser.add_argument("--pattern", default="", help="Mask pattern (# digit, A letter, * either)")
    parser.add_argument("--short", action="store_true", help="Trim trailing literals")
    parser.add_argument("--prefill", action="store_true", help="Show leading literals on empty input")
    parser.add_argument("--config", default="", help="YAML file with named masks")
    parser.add_argument("--name", default="", help="Mask name within --config")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")

    sub = parser.add_subparsers(dest="command", required=True)
    p_mask = sub.add_parser("mask", help="Mask values (args or stdin lines)")
    p_mask.add_argument("values", nargs="*")
    p_edit = sub.add_parser("edit", help="Mask one edit and compute the cursor")
    p_edit.add_argument("--cursor", type=int, default=None, help="Cursor offset after the edit")
    p_edit.add_argument("--previous", default="", help="Masked value before the edit")
    p_edit.add_argument("--input-type", default=None, help="Host hint, e.g. insertText")
    sub.add_parser("tokens", help="Show compiled tokens")

    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    try:
        config = _build_config(args)
    except (ConfigError, OSError) as e:
        sys.stderr.write(f"error: {e}\n")
        return 2

    logger.debug("Using mask %r (%s)", config.pattern, config.modifiers)

    cmds = {
        "mask": cmd_mask,
        "edit": cmd_edit,
        "tokens": cmd_tokens,
    }
    cmds[args.command](args, config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
