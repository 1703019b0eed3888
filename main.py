"""
Availability calendar entry point.

Runs the console calendar against the offline mock gateway or against
the live API gateway, or prints one month of availability as JSON.

Usage:
    Console (mock):   python main.py console
    Console (live):   python main.py console --live --train-id 12
    Month as JSON:    python main.py month --train-id 12 --offset 1 [--live]
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Optional

from console_demo import ConsoleSession
from railcal.config import settings
from railcal.errors import GatewayError
from railcal.schemas.train_schema import TrainDetails
from railcal.selection.availability_calendar import NAV_NEXT, AvailabilityCalendar
from railcal.tools.gateway_client import GatewayClient, TrainGateway
from railcal.tools.mock_gateway import MockGateway
from railcal.tools.session import TokenSession

logger = logging.getLogger(__name__)


async def _train_details(gateway: TrainGateway, train_id: str) -> Optional[TrainDetails]:
    """Fetch train details; without them every date shows zero seats."""
    try:
        return await gateway.get_train_details(train_id)
    except GatewayError as e:
        logger.error("Could not load details for train %s: %s", train_id, e)
        return None


async def _run_console(gateway: TrainGateway, args: argparse.Namespace, session: TokenSession) -> None:
    details = await _train_details(gateway, args.train_id)
    console = ConsoleSession(gateway, args.train_id, details, session=session)
    if args.scenario:
        await console.run_scenario(args.scenario)
    else:
        await console.run()


async def _run_month(gateway: TrainGateway, args: argparse.Namespace, session: TokenSession) -> None:
    details = await _train_details(gateway, args.train_id)
    calendar = AvailabilityCalendar(
        train_id=args.train_id,
        train_details=details,
        gateway=gateway,
        session=session,
        on_date_select=lambda _: None,
        on_close=lambda: None,
    )
    await calendar.mount()
    for _ in range(args.offset):
        if not await calendar.navigate(NAV_NEXT):
            break

    month = calendar.visible_month()
    report = {
        "train_id": calendar.train_id,
        "month": month.label,
        "can_navigate_prev": calendar.can_navigate_prev(),
        "can_navigate_next": calendar.can_navigate_next(),
        "max_booking_date": calendar.window().max_booking_date.isoformat(),
        "dates": [
            entry.model_dump(mode="json")
            for _, entry in sorted(calendar.availability.items())
        ],
    }
    print(json.dumps(report, indent=2))


async def _main(args: argparse.Namespace) -> None:
    session = TokenSession.from_settings()
    runner = _run_console if args.command == "console" else _run_month

    if args.live:
        async with GatewayClient(token_provider=lambda: session.token) as gateway:
            await runner(gateway, args, session)
    else:
        await runner(MockGateway(), args, session)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=settings.app_name, description=__doc__.split("\n\n")[0])
    sub = parser.add_subparsers(dest="command", required=True)

    console = sub.add_parser("console", help="Interactive terminal calendar")
    console.add_argument("--scenario", choices=sorted(ConsoleSession.SCENARIOS))

    month = sub.add_parser("month", help="Print one month of availability as JSON")
    month.add_argument("--offset", type=int, default=0, help="Months after the current one")

    for p in (console, month):
        p.add_argument("--train-id", default="12")
        p.add_argument("--live", action="store_true", help=f"Use {settings.api.gateway_url}")
    return parser


if __name__ == "__main__":
    cli_args = _build_parser().parse_args()
    if cli_args.command == "month" and cli_args.offset < 0:
        print("--offset must be >= 0", file=sys.stderr)
        sys.exit(2)
    asyncio.run(_main(cli_args))
