"""``gridline config`` — inspect resolved configuration."""

from __future__ import annotations

import argparse
import os


def register(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser("config", help="Configuration utilities")
    config_sub = p.add_subparsers(dest="config_command")

    show = config_sub.add_parser("show", help="Show resolved configuration values")
    show.set_defaults(handler=cmd_config_show)


def cmd_config_show(args: argparse.Namespace) -> int:
    """Show resolved configuration values."""
    from gridline import config

    print("gridline config")
    print(f"  config_path: {config.CONFIG_PATH}")
    print(f"  config_exists: {config.CONFIG_PATH.exists()}")
    print(f"  resolved_downsampler: {config.get_default_downsampler()}")
    print(f"  resolved_upsampler: {config.get_default_upsampler()}")
    print(f"  resolved_max_points: {config.get_max_points()}")
    for env_name in (config.ENV_DOWNSAMPLER, config.ENV_UPSAMPLER, config.ENV_MAX_POINTS):
        print(f"  env_{env_name}: {os.getenv(env_name) or '(unset)'}")

    from gridline.resample import PolicyRegistry

    print("Available policies")
    for kind, names in (
        ("downsampler", PolicyRegistry.list_downsamplers()),
        ("upsampler", PolicyRegistry.list_upsamplers()),
    ):
        for name in names:
            meta = PolicyRegistry.describe(kind, name)
            print(f"  {kind} {name}: {meta.description}")
    return 0
