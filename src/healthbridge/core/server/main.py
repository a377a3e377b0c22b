"""HealthBridge server entry point: ``python -m healthbridge.core.server.main``.

Command-line flags override the ``HB_*`` settings for one run, e.g.
``python -m healthbridge.core.server.main --platform android --port 9000``.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from ipaddress import ip_address

from healthbridge.core.config.settings import Settings, get_settings
from healthbridge.core.server.app import create_app
from healthbridge.domains.health.connectors.in_memory import InMemoryHealthAdapter
from healthbridge.domains.health.taxonomy.capabilities import all_capabilities, platform_profile
from healthbridge.domains.health.taxonomy.data_types import Platform

logger = logging.getLogger(__name__)


def _is_loopback_host(host: str) -> bool:
    if host in {"localhost"}:
        return True
    try:
        return ip_address(host).is_loopback
    except ValueError:
        return False


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="HealthBridge MCP server")
    parser.add_argument(
        "--platform",
        choices=[p.value for p in Platform],
        help="Platform served by the in-memory adapter (default: HB_PLATFORM)",
    )
    parser.add_argument("--host", help="Bind address (default: HB_HOST)")
    parser.add_argument("--port", type=int, help="Bind port (default: HB_PORT)")
    return parser


def resolve_settings(argv: Sequence[str] = ()) -> Settings:
    """Environment settings with any command-line overrides applied."""
    args = _build_parser().parse_args(list(argv))
    overrides = {
        field: value
        for field, value in (
            ("hb_platform", args.platform),
            ("hb_host", args.host),
            ("hb_port", args.port),
        )
        if value is not None
    }
    return get_settings().model_copy(update=overrides)


def capability_summary(platform: Platform) -> str:
    """One-line description of what ``platform`` can read and write."""
    capabilities = all_capabilities(platform)
    readable = sum(1 for c in capabilities if c.can_read)
    writable = sum(1 for c in capabilities if c.can_write)
    profile = platform_profile(platform)
    live = "live workout metrics" if profile.supports_live_workout_metrics else "no live workout metrics"
    return f"{profile.name}: {readable} readable, {writable} writable data types, {live}"


def run(argv: Sequence[str] = ()) -> None:
    """Start the HealthBridge MCP server with Streamable HTTP transport."""
    settings = resolve_settings(argv)
    logging.basicConfig(level=getattr(logging, settings.hb_log_level.upper(), logging.INFO))

    if not settings.hb_allow_insecure_bind and not _is_loopback_host(settings.hb_host):
        raise RuntimeError(
            "Refusing to bind HealthBridge to a non-loopback host without an auth layer. "
            "Set HB_ALLOW_INSECURE_BIND=true to override (unsafe)."
        )

    platform = Platform(settings.hb_platform)
    logger.info("Starting HealthBridge server on %s:%d", settings.hb_host, settings.hb_port)
    logger.info("Serving %s", capability_summary(platform))

    mcp = create_app(adapter_override=InMemoryHealthAdapter(platform))
    mcp.run(
        transport="streamable-http",
        host=settings.hb_host,
        port=settings.hb_port,
    )


if __name__ == "__main__":
    run(sys.argv[1:])
