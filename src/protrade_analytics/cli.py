"""CLI entry point for the journal analytics."""

from __future__ import annotations

import json
from typing import Any

import click

from .core.config import Settings, load_settings
from .core.errors import AnalyticsError, InsufficientDataError
from .core.models import Dataset


def _emit(payload: Any, indent: int | None) -> None:
    click.echo(json.dumps(payload, indent=indent))


def _load(dataset_path: str) -> Dataset:
    from .journal.dataset import load_dataset
    from .observability import get_logger

    try:
        data = load_dataset(dataset_path)
    except AnalyticsError as exc:
        raise click.ClickException(str(exc)) from exc

    get_logger(__name__).info(
        "dataset_loaded",
        path=dataset_path,
        trades=len(data.trades),
        sessions=len(data.sessions),
        strategies=len(data.strategies),
    )
    return data


@click.group()
@click.option("--config", default=None, help="TOML config file path")
@click.option("--log-level", default=None, help="Log level override (DEBUG, INFO, ...)")
@click.option("--log-format", type=click.Choice(["json", "console"]), default=None)
@click.option("--compact", is_flag=True, help="Print JSON on a single line")
@click.pass_context
def main(
    ctx: click.Context,
    config: str | None,
    log_level: str | None,
    log_format: str | None,
    compact: bool,
) -> None:
    """ProTrade journal analytics."""
    from .observability import new_run_id, setup_logging

    overrides: dict = {}
    if log_level:
        overrides.setdefault("observability", {})["log_level"] = log_level
    if log_format:
        overrides.setdefault("observability", {})["log_format"] = log_format

    try:
        settings = load_settings(config_path=config, overrides=overrides)
    except AnalyticsError as exc:
        raise click.ClickException(str(exc)) from exc

    setup_logging(settings.observability.log_level, settings.observability.log_format)
    new_run_id()

    ctx.obj = {"settings": settings, "indent": None if compact else 2}


@main.command()
@click.argument("dataset", type=click.Path(dir_okay=False))
@click.pass_context
def quant(ctx: click.Context, dataset: str) -> None:
    """Compute the quantitative metrics (DQI, EIS, SRC, SPS, composite)."""
    from .journal.quantitative import compute_quantitative_metrics

    data = _load(dataset)
    metrics = compute_quantitative_metrics(data.trades, data.sessions, data.strategies)
    _emit(metrics.model_dump(mode="json"), ctx.obj["indent"])


@main.command()
@click.argument("dataset", type=click.Path(dir_okay=False))
@click.option("--trader-id", default=None, help="Trader id to stamp on the profile")
@click.pass_context
def profile(ctx: click.Context, dataset: str, trader_id: str | None) -> None:
    """Generate the psychological profile and improvement plan."""
    from .journal.profiler import generate_profile, require_profile_sample

    settings: Settings = ctx.obj["settings"]
    data = _load(dataset)

    try:
        require_profile_sample(data.trades, settings.profile.min_trades)
    except InsufficientDataError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(2)

    result = generate_profile(data.trades, data.sessions, data.strategies, trader_id=trader_id)
    _emit(result.model_dump(mode="json"), ctx.obj["indent"])


@main.command()
@click.argument("dataset", type=click.Path(dir_okay=False))
@click.option("--starting-balance", default=None, type=float, help="Account balance override")
@click.pass_context
def dashboard(ctx: click.Context, dataset: str, starting_balance: float | None) -> None:
    """Compute the dashboard aggregations."""
    from .journal import dashboard as dash

    settings: Settings = ctx.obj["settings"]
    balance = (
        starting_balance if starting_balance is not None
        else settings.dashboard.starting_balance
    )
    data = _load(dataset)
    trades = data.trades

    def dump(models: list) -> list[dict]:
        return [m.model_dump(mode="json") for m in models]

    payload = {
        "headline": dash.headline_stats(trades).model_dump(mode="json"),
        "equity_curve": dump(dash.equity_curve(trades, balance)),
        "hourly": dump(dash.hourly_histogram(trades)),
        "weekday": dump(dash.weekday_histogram(trades)),
        "daily": dump(dash.daily_breakdown(trades)),
        "breakdowns": {
            key: {name: s.model_dump(mode="json") for name, s in dash.breakdown_by(trades, key).items()}
            for key in dash.BREAKDOWN_KEYS
        },
        "sessions": dump([dash.session_equity(s, trades, balance) for s in data.sessions]),
        "mindset": dash.mindset_snapshot(trades).model_dump(mode="json"),
        "decision_quality": dash.decision_quality_snapshot(trades).model_dump(mode="json"),
    }
    _emit(payload, ctx.obj["indent"])


if __name__ == "__main__":
    main()
