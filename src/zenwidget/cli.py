#!/usr/bin/env python3
"""
zenwidget CLI - render widgets and handle activations from the command line.
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from .config.loader import (
    CONFIG_FILENAME,
    EVENTS_FILENAME,
    THEME_FILENAME,
    USAGE_FILENAME,
    ConfigStore,
    EventStore,
    ThemeStore,
    default_home,
)
from .config.models import SortPolicy
from .device.renderer import WIDGET_FAMILIES
from .engine.scaling import ScalingStrategy
from .managers.interaction import InteractionBridge, activation_url
from .managers.usage import UsageStore
from .utils.errors import StorageError, ValidationError
from .widgets.launcher import LAYOUTS, LauncherWidget
from .widgets.registry import registry

logger = logging.getLogger(__name__)


class ZenWidgetCLI:
    """Main CLI handler for zenwidget commands."""

    def __init__(self, home: Optional[str] = None) -> None:
        self.home: Path = Path(home).expanduser() if home else default_home()
        self.config_store = ConfigStore(self.home / CONFIG_FILENAME)
        self.usage_store = UsageStore(self.home / USAGE_FILENAME)
        self.theme_store = ThemeStore(self.home / THEME_FILENAME)
        self.event_store = EventStore(self.home / EVENTS_FILENAME)

    def render(
        self,
        widget_type: str,
        output: Optional[str] = None,
        family: Optional[str] = None,
        layout: Optional[str] = None,
        scaling: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> int:
        """Render a widget to a PNG file."""
        options = {"home": str(self.home)}
        if family:
            options["family"] = family
        if layout:
            options["layout"] = layout
        if scaling:
            options["scaling"] = scaling

        try:
            widget = registry.create(widget_type, options)
        except ValueError as e:
            print(f"Cannot create widget: {e}")
            return 1

        image = widget.render(now)
        output_path = Path(output).expanduser() if output else self.home / f"{widget_type}.png"
        output_path.parent.mkdir(parents=True, exist_ok=True)
        image.save(output_path, format="PNG")
        print(f"Rendered {widget_type} widget to {output_path}")
        return 0

    def show(self, now: Optional[datetime] = None, layout: Optional[str] = None) -> int:
        """Print the launcher's placement plan as text."""
        options = {"home": str(self.home)}
        if layout:
            options["layout"] = layout
        widget = LauncherWidget(options)
        plan = widget.build_plan(now)

        if plan.is_empty:
            print(plan.placeholder)
            return 0

        for placement in plan.placements:
            print(
                f"row {placement.row} col {placement.column}  {placement.size:5.1f}  "
                f"{placement.text}  {activation_url(placement.key, placement.target)}"
            )
        return 0

    def activate(self, name: str, target: Optional[str] = None) -> int:
        """Record an activation and open the item's target."""
        bridge = InteractionBridge(self.usage_store, config_store=self.config_store)
        return 0 if bridge.on_activate(name, target) else 1

    def callback(self, url: str) -> int:
        """Handle an activation callback URL."""
        bridge = InteractionBridge(self.usage_store, config_store=self.config_store)
        try:
            return 0 if bridge.handle_callback(url) else 1
        except ValidationError as e:
            print(f"Invalid callback: {e}")
            return 1

    def validate(self) -> int:
        """Strictly validate the stored configuration and theme."""
        errors: List[str] = []

        try:
            config = self.config_store.load(strict=True)
            print(f"✓ {self.config_store.path}: {len(config.items)} items, sort '{config.sort_policy.value}'")
        except (ValidationError, StorageError) as e:
            errors.append(f"{self.config_store.path}: {e}")

        try:
            theme = self.theme_store.load(strict=True)
            print(f"✓ {self.theme_store.path}: font '{theme.font_family}' {theme.min_font_size}-{theme.max_font_size}")
        except (ValidationError, StorageError) as e:
            errors.append(f"{self.theme_store.path}: {e}")

        for error in errors:
            print(f"✗ {error}")
        return 1 if errors else 0

    def init(self, force: bool = False) -> int:
        """Write the example configuration."""
        if self.config_store.exists() and not force:
            print(f"Configuration already exists: {self.config_store.path}")
            return 1
        if force and self.config_store.exists():
            self.config_store.path.unlink()
        config = self.config_store.ensure_example()
        print(f"Wrote {len(config.items)} example items to {self.config_store.path}")
        return 0

    def set_sort(self, policy: str) -> int:
        """Change the stored sort policy, keeping the stored item order."""
        try:
            self.config_store.set_sort_policy(SortPolicy(policy))
        except (ValidationError, StorageError) as e:
            print(f"Cannot change sort policy: {e}")
            return 1
        print(f"Sort policy set to '{policy}'")
        return 0

    def reset_usage(self, name: Optional[str] = None) -> int:
        self.usage_store.reset(name)
        print(f"Reset usage for {name or 'all items'}")
        return 0


def _parse_instant(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid ISO-8601 instant: {value!r}")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="zenwidget",
        description="zenwidget - adaptive launcher and calendar widgets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  zenwidget init                          # Write the example configuration
  zenwidget render launcher               # Render ~/.zenwidget/launcher.png
  zenwidget render calendar --family medium
  zenwidget show                          # Print visible items and sizes
  zenwidget activate Maps                 # Count a use and open the target
  zenwidget sort usage                    # Order by usage
""",
    )
    parser.add_argument("--home", help="Directory holding zenwidget files (default: ~/.zenwidget)")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    render_parser = subparsers.add_parser("render", help="Render a widget to PNG")
    render_parser.add_argument("widget", choices=registry.list_widgets(), help="Widget type")
    render_parser.add_argument("-o", "--output", help="Output PNG path")
    render_parser.add_argument("--family", choices=sorted(WIDGET_FAMILIES), help="Widget size")
    render_parser.add_argument("--layout", choices=LAYOUTS, help="Launcher layout")
    render_parser.add_argument(
        "--scaling", choices=[s.value for s in ScalingStrategy], help="Launcher font scaling"
    )
    render_parser.add_argument("--at", type=_parse_instant, help="Render as of this instant")

    show_parser = subparsers.add_parser("show", help="Print the launcher placement plan")
    show_parser.add_argument("--layout", choices=LAYOUTS, help="Launcher layout")
    show_parser.add_argument("--at", type=_parse_instant, help="Evaluate as of this instant")

    activate_parser = subparsers.add_parser("activate", help="Activate an item")
    activate_parser.add_argument("name", help="Item name")
    activate_parser.add_argument("--target", help="Target to open (default: from configuration)")

    callback_parser = subparsers.add_parser("callback", help="Handle an activation callback URL")
    callback_parser.add_argument("url", help="zenwidget://activate?... URL")

    subparsers.add_parser("validate", help="Validate configuration and theme")

    init_parser = subparsers.add_parser("init", help="Write the example configuration")
    init_parser.add_argument("--force", action="store_true", help="Overwrite an existing configuration")

    sort_parser = subparsers.add_parser("sort", help="Set the sort policy")
    sort_parser.add_argument("policy", choices=[p.value for p in SortPolicy])

    reset_parser = subparsers.add_parser("reset", help="Reset usage counts")
    reset_parser.add_argument("name", nargs="?", help="Item name (default: all items)")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    cli = ZenWidgetCLI(args.home)

    try:
        if args.command == "render":
            return cli.render(args.widget, args.output, args.family, args.layout, args.scaling, args.at)

        elif args.command == "show":
            return cli.show(args.at, args.layout)

        elif args.command == "activate":
            return cli.activate(args.name, args.target)

        elif args.command == "callback":
            return cli.callback(args.url)

        elif args.command == "validate":
            return cli.validate()

        elif args.command == "init":
            return cli.init(args.force)

        elif args.command == "sort":
            return cli.set_sort(args.policy)

        elif args.command == "reset":
            return cli.reset_usage(args.name)

        else:
            parser.print_help()
            return 1
    except StorageError as e:
        logger.error(f"Command '{args.command}' failed: {e}")
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
