"""Operator entry point.

Usage:
    stackctl provision
    stackctl upgrade [--detach]
    stackctl status
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from dataclasses import dataclass

from stackctl.clients.releases import HttpVersionResolver
from stackctl.clients.tencent_vod import TencentVodCatalogClient
from stackctl.clients.upgrade_executor import HttpUpgradeExecutor
from stackctl.core.config import AppSettings
from stackctl.core.exceptions import StackError
from stackctl.core.logging import bind_context, clear_context, configure_logging, get_logger
from stackctl.models.workflow import CredentialPair
from stackctl.orchestration.provisioning import ProvisioningOrchestrator
from stackctl.orchestration.upgrade import UpgradeOrchestrator
from stackctl.persistence import create_checkpoint_store, create_credential_source

logger = get_logger(__name__)


@dataclass
class Console:
    provisioning: ProvisioningOrchestrator
    upgrade: UpgradeOrchestrator


def build_console(settings: AppSettings) -> Console:
    """Wire orchestrators to the configured store and collaborators."""
    store = create_checkpoint_store(settings)
    vod = settings.provisioning
    up = settings.upgrade

    def catalog_factory(creds: CredentialPair) -> TencentVodCatalogClient:
        return TencentVodCatalogClient(creds, region=vod.region, endpoint=vod.endpoint)

    provisioning = ProvisioningOrchestrator(
        store=store,
        credentials=create_credential_source(store, settings),
        catalog_factory=catalog_factory,
        config=vod,
    )
    upgrade = UpgradeOrchestrator(
        store=store,
        resolver=HttpVersionResolver(
            up.releases_url, current_version=up.current_version, timeout=up.http_timeout,
        ),
        executor=HttpUpgradeExecutor(up.executor_url, timeout=up.http_timeout),
        config=up,
    )
    return Console(provisioning=provisioning, upgrade=upgrade)


async def _provision(console: Console) -> dict:
    report = await console.provisioning.run_provisioning()
    return report.model_dump(mode="json")


async def _upgrade(console: Console, detach: bool) -> dict:
    target = await console.upgrade.request_upgrade()
    if detach:
        console.upgrade.timers.shutdown()
    else:
        await console.upgrade.timers.join()
    return {"version": target}


async def _status(console: Console) -> dict:
    return {
        "provisioning": console.provisioning.status().model_dump(mode="json"),
        "upgrade": console.upgrade.status().model_dump(mode="json"),
    }


async def _dispatch(console: Console, args: argparse.Namespace) -> dict:
    bind_context(command=args.command)
    try:
        if args.command == "provision":
            return await _provision(console)
        if args.command == "upgrade":
            return await _upgrade(console, args.detach)
        return await _status(console)
    finally:
        clear_context()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="stackctl", description="Streaming platform operations console")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("provision", help="Provision the cloud VoD backend")
    upgrade = sub.add_parser("upgrade", help="Trigger a version upgrade")
    upgrade.add_argument(
        "--detach", action="store_true",
        help="Exit right after triggering instead of waiting for the flag reset",
    )
    sub.add_parser("status", help="Show provisioning and upgrade state")
    return parser


def main(argv: list[str] | None = None, console: Console | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = AppSettings()
    configure_logging(level=settings.log_level)
    if console is None:
        console = build_console(settings)

    try:
        result = asyncio.run(_dispatch(console, args))
    except StackError as exc:
        logger.error("command_failed", command=args.command, error=str(exc), error_type=type(exc).__name__)
        return 1

    json.dump(result, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
