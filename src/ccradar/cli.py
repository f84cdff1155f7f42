"""Typer CLI for ccradar: status, sessions, projects and plans commands."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from pathlib import Path
from typing import Annotated

import typer
from result import Err, Result

from ccradar.config import Config
from ccradar.formatting import (
    PLACEHOLDER,
    format_age,
    format_clock,
    format_duration,
    format_percentage,
    format_rate,
    format_tokens,
)
from ccradar.models.analytics import UsageSnapshot
from ccradar.models.categories import category_info
from ccradar.models.plans import QuotaPlan
from ccradar.models.sessions import Session
from ccradar.services import metrics

app = typer.Typer(
    name="ccradar",
    help="Claude Code usage radar — 5-hour session windows, burn rate and quota status.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    claude_dir: Annotated[
        Path | None,
        typer.Option("--claude-dir", help="Path to Claude data directory"),
    ] = None,
    plan: Annotated[
        QuotaPlan,
        typer.Option("--plan", help="Quota plan to measure usage against"),
    ] = QuotaPlan.PRO,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
) -> None:
    """Show Claude Code usage for the current 5-hour session."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if claude_dir is not None:
        config = Config(claude_dirs=(claude_dir,), plan=plan)
    else:
        config = Config(plan=plan)
    ctx.obj = config
    if ctx.invoked_subcommand is None:
        _print_status(_load_snapshot(config), as_json=False)


@app.command()
def status(
    ctx: typer.Context,
    as_json: Annotated[bool, typer.Option("--json", help="Emit JSON")] = False,
) -> None:
    """Show the active session's usage, burn rate and status."""
    _print_status(_load_snapshot(ctx.obj), as_json=as_json)


@app.command()
def sessions(
    ctx: typer.Context,
    limit: Annotated[int, typer.Option("--limit", "-n", min=1, help="Sessions to list")] = 10,
    as_json: Annotated[bool, typer.Option("--json", help="Emit JSON")] = False,
) -> None:
    """List recent session windows, most recent first."""
    snapshot = _load_snapshot(ctx.obj)
    recent = snapshot.sessions[:limit]
    if as_json:
        typer.echo("[" + ",".join(session.model_dump_json() for session in recent) + "]")
        return
    if not recent:
        typer.echo("No sessions found.")
        return
    for session in recent:
        typer.echo(_session_line(session, snapshot.generated_at))


@app.command()
def projects(
    ctx: typer.Context,
    limit: Annotated[int, typer.Option("--limit", "-n", min=1, help="Projects to list")] = 10,
    as_json: Annotated[bool, typer.Option("--json", help="Emit JSON")] = False,
) -> None:
    """List token usage per project, heaviest first."""
    snapshot = _load_snapshot(ctx.obj)
    top = snapshot.projects[:limit]
    if as_json:
        typer.echo("[" + ",".join(project.model_dump_json() for project in top) + "]")
        return
    if not top:
        typer.echo("No projects found.")
        return
    for project in top:
        age = (snapshot.generated_at - project.last_used).total_seconds()
        typer.echo(
            f"{project.name:<24} {format_tokens(project.total_tokens):>10} tokens  "
            f"{project.percentage:5.1f}%  {project.session_count:>3} sessions  "
            f"avg {format_tokens(project.average_tokens_per_session)}  {format_age(age)}"
        )


@app.command()
def plans() -> None:
    """List the available quota plans."""
    for plan in QuotaPlan:
        typer.echo(f"{plan.value:<12} {plan.display_name:<16} {plan.description}")


async def _refresh(config: Config) -> Result[UsageSnapshot, str]:
    """Build the services and run a single refresh."""
    from ccradar.services.container import ServiceContainer

    container = ServiceContainer.create(config)
    return await container.usage_service.refresh()


def _load_snapshot(config: Config) -> UsageSnapshot:
    result = asyncio.run(_refresh(config))
    if isinstance(result, Err):
        typer.echo(result.err_value, err=True)
        raise typer.Exit(code=1)
    return result.ok_value


def _print_status(snapshot: UsageSnapshot, *, as_json: bool) -> None:
    if as_json:
        typer.echo(snapshot.model_dump_json(indent=2))
        return

    now = snapshot.generated_at
    plan = snapshot.plan
    session = snapshot.current_session
    typer.echo(f"Plan:           {plan.display_name}")
    if session is None:
        typer.echo("No active session")
        if snapshot.sessions:
            typer.echo(f"Last session:   {_session_line(snapshot.sessions[0], now)}")
        return

    session_status = metrics.status(session, now)
    breakdown = ", ".join(
        f"{category_info(item.category).short_name} {item.percentage:.1f}%"
        for item in metrics.category_breakdown(session)
    )
    typer.echo(
        f"Session:        {format_clock(session.start_time)} - {format_clock(session.end_time)}"
        f" (resets in {format_duration(metrics.time_until_session_end(session, now))})"
    )
    typer.echo(
        f"Tokens:         {format_tokens(session.token_count)} / "
        f"{format_tokens(session.token_limit)} ({format_percentage(metrics.progress(session))})"
    )
    typer.echo(f"Burn rate:      {format_rate(session.burn_rate)}")
    typer.echo(f"Time remaining: {format_duration(metrics.time_remaining(session, now))}")
    typer.echo(f"Predicted end:  {format_clock(metrics.predicted_end_time(session, now))}")
    typer.echo(f"Cost:           ${session.cost:.2f}")
    typer.echo(f"Models:         {breakdown or PLACEHOLDER}")
    typer.echo(f"Status:         {session_status.message}")
    for alert in snapshot.alerts:
        typer.echo(f"Alert:          {alert.title}: {alert.body}")


def _session_line(session: Session, now: datetime) -> str:
    start = session.start_time.astimezone().strftime("%Y-%m-%d %H:%M")
    primary = category_info(metrics.primary_category(session)).short_name
    state = "active" if session.is_active(now) else "ended"
    return (
        f"{start}  {format_tokens(session.token_count):>10} tokens  "
        f"{format_percentage(metrics.progress(session)):>6}  ${session.cost:.2f}  "
        f"{primary:<8} {state}"
    )
