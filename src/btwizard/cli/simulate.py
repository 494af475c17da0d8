from __future__ import annotations

import asyncio
import logging

import typer
from rich.console import Console

from btwizard.config import Settings
from btwizard.models import Device, ResultCode
from btwizard.simulator import SimulatedRadio, run_simulation, sample_peripherals
from btwizard.utils.redaction import Redactor

from .common import load_settings_or_exit, with_simulation_overrides
from .presenter import ConsolePresenter, FutureNavigator

logger = logging.getLogger(__name__)


async def _simulate(
    settings: Settings,
    presenter: ConsolePresenter,
    bonded: int,
    available: bool,
    enabled: bool,
    pair_with: str | None,
    timeout: float,
) -> tuple[ResultCode, list[Device]]:
    loop = asyncio.get_running_loop()
    simulation = settings.simulation
    radio = SimulatedRadio(
        loop,
        config=simulation,
        peripherals=sample_peripherals(simulation.device_count, bonded=bonded),
        available=available,
        enabled=enabled,
    )
    navigator = FutureNavigator(loop)
    return await run_simulation(
        radio,
        presenter,
        navigator,
        navigator.result,
        scanning=settings.scanning,
        pair_with=pair_with,
        timeout=timeout,
    )


def simulate(
    devices: int | None = typer.Option(
        None, "--devices", "-d", min=0, max=32, help="Number of simulated devices"
    ),
    start_failures: int | None = typer.Option(
        None, "--start-failures", min=0, help="Reject this many discovery starts"
    ),
    bonded: int = typer.Option(0, "--bonded", min=0, help="Devices already paired"),
    pair: str | None = typer.Option(
        None, "--pair", "-p", help="Address to pair with once it shows up"
    ),
    unavailable: bool = typer.Option(
        False, "--unavailable", help="Pretend there is no radio"
    ),
    disabled: bool = typer.Option(
        False, "--disabled", help="Start with the radio turned off"
    ),
    redact: bool = typer.Option(
        False,
        "--redact",
        help="Redact device addresses in output",
    ),
    timeout: float = typer.Option(
        10.0, "--timeout", "-t", min=0.1, help="Seconds to wait for a decision"
    ),
) -> None:
    """Run the pairing step against a simulated radio."""
    console = Console()

    settings = with_simulation_overrides(
        load_settings_or_exit(),
        device_count=devices,
        start_failures=start_failures,
    )

    logger.info(
        "Simulation settings: devices=%d, start_failures=%d, retry_delay=%.2fs",
        settings.simulation.device_count,
        settings.simulation.start_failures,
        settings.scanning.retry_delay,
    )

    presenter = ConsolePresenter(console, Redactor(enabled=redact))
    result, found = asyncio.run(
        _simulate(
            settings,
            presenter,
            bonded=bonded,
            available=not unavailable,
            enabled=not disabled,
            pair_with=pair,
            timeout=timeout,
        )
    )

    if found:
        console.print(presenter.render_table(found))
    else:
        console.print("No devices found.")
    console.print(f"\nResult: [bold]{result.value.upper()}[/bold]")


def register(app: typer.Typer) -> None:
    app.command()(simulate)
