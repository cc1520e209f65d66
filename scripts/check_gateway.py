"""CMMS gateway connectivity check.

Runs the gateway health check and, optionally, lists one namespace to verify
that the token and organization are accepted.

Usage:
    python scripts/check_gateway.py
    python scripts/check_gateway.py --list assets --token $CMMS_ACCESS_TOKEN --org $CMMS_ORGANIZATION_ID
"""

import argparse
import asyncio
import json
import os
import sys
from pathlib import Path

# Add repo root to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from core.observability.logging import configure_logging, get_logger, new_correlation_id, with_correlation
from gateway import CMMSGateway, GatewayConfig, RequestFailed, StaticSessionProvider

logger = get_logger("gateway.scripts.check_gateway")

# Namespace name -> coroutine factory listing its main collection
LISTABLE = {
    "assets": lambda cmms: cmms.assets.list(),
    "work-orders": lambda cmms: cmms.work_orders.list(),
    "inventory": lambda cmms: cmms.inventory.items.list(),
    "people": lambda cmms: cmms.people.people.list(),
    "incidents": lambda cmms: cmms.safety.incidents.list(),
    "job-plans": lambda cmms: cmms.job_plans.list(),
    "pm-schedules": lambda cmms: cmms.pm_schedules.list(),
    "meters": lambda cmms: cmms.meters.list(),
    "routes": lambda cmms: cmms.routes.list(),
    "workflow-templates": lambda cmms: cmms.workflow.templates.list(),
    "alarms": lambda cmms: cmms.condition_monitoring.get_alarms(),
}


async def check_gateway(config: GatewayConfig, token, organization_id, namespace=None):
    """Run the health check, then the optional listing.

    Returns:
        dict: {"health": ..., "<namespace>": ...}
    """
    provider = StaticSessionProvider(token, organization_id)
    results = {}

    with with_correlation(correlation_id=new_correlation_id()):
        async with CMMSGateway(config, provider) as cmms:
            results["health"] = await cmms.health_check()
            logger.info("✓ Gateway is healthy")

            if namespace:
                records = await LISTABLE[namespace](cmms)
                count = len(records) if isinstance(records, list) else 1
                logger.info(f"✓ Listed {count} {namespace}")
                results[namespace] = records

    return results


def main():
    """Entry point."""
    parser = argparse.ArgumentParser(description="Check CMMS gateway connectivity")
    parser.add_argument("--url", help="Gateway base URL (default: CMMS_GATEWAY_URL)")
    parser.add_argument("--token", help="Bearer token (default: CMMS_ACCESS_TOKEN)")
    parser.add_argument("--org", help="Active organization ID (default: CMMS_ORGANIZATION_ID)")
    parser.add_argument("--list", dest="namespace", choices=sorted(LISTABLE), help="Namespace to list")
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log lines")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every request")
    args = parser.parse_args()

    configure_logging(
        level="DEBUG" if args.verbose else "INFO", json_format=args.json_logs, force=True
    )

    try:
        if args.url:
            os.environ["CMMS_GATEWAY_URL"] = args.url
        config = GatewayConfig.from_env()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    try:
        token = args.token or os.getenv("CMMS_ACCESS_TOKEN")
        organization_id = args.org or os.getenv("CMMS_ORGANIZATION_ID")
        results = asyncio.run(check_gateway(config, token, organization_id, args.namespace))
    except RequestFailed as e:
        detail = f" (HTTP {e.status_code})" if e.status_code is not None else " (no response)"
        print(f"✗ {e.message}{detail}", file=sys.stderr)
        return 1

    print(json.dumps(results, indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
