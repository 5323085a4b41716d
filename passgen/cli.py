"""CLI for passgen — generate passwords and manage saved settings (show/set/reset)."""

import argparse
import logging
import sys
from dataclasses import replace
from typing import Optional, Tuple

from rich import print
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .config import config_path, default_config, load_config, require_policy, save_config
from .errors import PasswordConfigError
from .generator import generate_password
from .rules import GenerationConfig, to_bound

logger = logging.getLogger(__name__)


def parse_limits(text: str) -> Tuple[int, Optional[int]]:
    """'MIN' or 'MIN,MAX'; MAX may be 'none' for no upper limit."""
    parts = [p.strip() for p in text.split(",")]
    if len(parts) > 2:
        raise argparse.ArgumentTypeError(f"expected MIN[,MAX], got {text!r}")
    try:
        lo = int(parts[0])
        hi = None
        if len(parts) == 2 and parts[1].lower() not in ("", "none", "null"):
            hi = int(parts[1])
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected integers in {text!r}")
    return lo, hi


def apply_overrides(config: GenerationConfig, args) -> GenerationConfig:
    changes = {}
    for key in ("length", "upper", "lower", "digits", "symbols"):
        value = getattr(args, key, None)
        if value is not None:
            changes[key] = value
    if getattr(args, "charset", None) is not None:
        changes["symbol_charset"] = args.charset
    return replace(config, **changes)


def rules_panel(config: GenerationConfig) -> Panel:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Category")
    table.add_column("Min", justify="right")
    table.add_column("Max", justify="right")
    for category, (lo, hi) in config.limits():
        table.add_row(category.value, str(lo), str(to_bound(hi)))
    return Panel(table, title=f"Length {config.length} — symbols {escape(config.symbol_charset)}")


def cmd_generate(args):
    config = require_policy(apply_overrides(load_config(), args))
    if args.show_rules:
        print(rules_panel(config))
    for i in range(args.copies):
        pw = generate_password(config)
        if args.plain:
            sys.stdout.write(pw + "\n")
        else:
            print(f"[bold green]Password #{i+1}:[/bold green] {escape(pw)}")


def cmd_config_show(args):
    print(f"[cyan]Settings file:[/cyan] {config_path()}")
    print(rules_panel(load_config()))


def cmd_config_set(args):
    config = require_policy(apply_overrides(load_config(), args))
    path = save_config(config)
    print(f"[green]Saved settings to:[/green] {path}")
    print(rules_panel(config))


def cmd_config_reset(args):
    path = save_config(default_config())
    print(f"[green]Restored default settings at:[/green] {path}")


def positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {text!r}")
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def add_rule_arguments(p):
    p.add_argument("--length", type=int, help="Password length (10-64)")
    p.add_argument("--upper", type=parse_limits, metavar="MIN[,MAX]", help="Uppercase count limits")
    p.add_argument("--lower", type=parse_limits, metavar="MIN[,MAX]", help="Lowercase count limits")
    p.add_argument("--digits", type=parse_limits, metavar="MIN[,MAX]", help="Digit count limits")
    p.add_argument("--symbols", type=parse_limits, metavar="MIN[,MAX]", help="Symbol count limits")
    p.add_argument("--charset", type=str, help="Symbols to draw from")


def build_parser():
    parser = argparse.ArgumentParser(prog="passgen")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    # also accepted after the subcommand; SUPPRESS keeps a flag given before it
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--verbose", "-v", action="store_true", default=argparse.SUPPRESS, help="Debug logging")
    sub = parser.add_subparsers(dest="cmd", required=True)

    gen = sub.add_parser("generate", parents=[common], help="Generate one or more passwords")
    add_rule_arguments(gen)
    gen.add_argument("--copies", type=positive_int, default=1, help="How many passwords to generate")
    gen.add_argument("--show-rules", action="store_true", help="Print the active rules first")
    gen.add_argument("--plain", action="store_true", help="Print bare passwords, one per line")
    gen.set_defaults(func=cmd_generate)

    c = sub.add_parser("config", parents=[common], help="Saved settings")
    csub = c.add_subparsers(dest="ccmd", required=True)

    c_show = csub.add_parser("show", parents=[common], help="Show saved settings")
    c_show.set_defaults(func=cmd_config_show)

    c_set = csub.add_parser("set", parents=[common], help="Change and save settings")
    add_rule_arguments(c_set)
    c_set.set_defaults(func=cmd_config_set)

    c_reset = csub.add_parser("reset", parents=[common], help="Restore default settings")
    c_reset.set_defaults(func=cmd_config_reset)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger().setLevel(logging.DEBUG if args.verbose else logging.WARNING)
    try:
        args.func(args)
    except PasswordConfigError as e:
        logger.debug("rejected configuration: %s", e.kind)
        print(f"[red]{e.kind}: {escape(e.message)}[/red]")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
