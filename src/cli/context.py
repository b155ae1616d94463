"""CLI presentation surface for date contexts."""

from __future__ import annotations

import asyncio
import json
import os
from datetime import datetime, timezone
from typing import Any, Dict, List

import typer
from dotenv import load_dotenv

from data.cache import HolidayCache
from data.config import DateContextConfig
from data.models import HolidayStatus
from data.providers.national_holidays import HolidayResolver
from data.store import FileBlobStore
from dates import civil
from dates.metrics import weekend_badge
from infra.logging import configure_logging
from infra.metrics import PrometheusMetricSink, ensure_metrics_server
from ops.context import DateContext, DateContextService, HolidayUpdate

app = typer.Typer(help="Weekday, week position and holiday status for a date")

_PENDING_TEXT = "判定中…"
_HOLIDAY_TEXT = {
    HolidayStatus.HOLIDAY: "祝日",
    HolidayStatus.NOT_HOLIDAY: "祝日ではありません",
    HolidayStatus.ERROR: "取得失敗（通信/応答）",
}
_ERROR_NOTE = "ネットワーク状況を確認してください（曜日と土日判定は端末内で表示しています）。"


def _configure_environment() -> DateContextConfig:
    load_dotenv()
    config = DateContextConfig.from_env()
    run_id = os.environ.get("RUN_ID")
    if not run_id:
        run_id = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
        os.environ["RUN_ID"] = run_id
    configure_logging(
        run_id=run_id,
        timezone_name=config.timezone_name,
        level=config.log_level,
        console=False,
    )
    return config


def _build_service(config: DateContextConfig, *, use_cache: bool = True) -> DateContextService:
    cache = HolidayCache(
        FileBlobStore(config.cache_dir),
        storage_key=config.cache_key,
        ttl_seconds=config.cache_ttl_seconds,
        enabled=config.cache_enabled and use_cache,
    )
    resolver = HolidayResolver(
        cache,
        base_url=config.api_base,
        timeout_seconds=config.fetch_timeout_seconds,
        metric_sink=PrometheusMetricSink(),
    )
    return DateContextService(resolver, timezone_name=config.timezone_name)


def _week_text(index: int, total: int, remaining: int) -> str:
    return f"week {index}/{total} ({remaining} remaining)"


def render_context(context: DateContext) -> List[str]:
    return [
        f"Date:      {context.date_key}",
        f"Weekday:   {context.weekday_label} [{weekend_badge(context.weekday_index)}]",
        f"Distance:  {context.diff_label}",
        "Year:      "
        + _week_text(
            context.year_week.index, context.year_week.total, context.year_week.weeks_remaining
        ),
        f"Fiscal:    {context.fiscal_period.label} "
        + _week_text(
            context.fiscal_week.index,
            context.fiscal_week.total,
            context.fiscal_week.weeks_remaining,
        ),
    ]


def render_holiday(update: HolidayUpdate | None) -> List[str]:
    if update is None:
        return [f"Holiday:   {_PENDING_TEXT}"]
    result = update.result
    lines = [f"Holiday:   {_HOLIDAY_TEXT[result.status]}"]
    if result.status is HolidayStatus.HOLIDAY:
        lines.append(f"Name:      {result.name}")
        if result.type:
            lines.append(f"Note:      種別：{result.type}")
    elif result.status is HolidayStatus.ERROR:
        lines.append(f"Note:      {_ERROR_NOTE} ({result.message})")
    if update.is_business_day is not None:
        lines.append(f"Business:  {'yes' if update.is_business_day else 'no'}")
    return lines


def as_payload(context: DateContext, update: HolidayUpdate | None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "date": context.date_key,
        "weekday_index": context.weekday_index,
        "weekday_label": context.weekday_label,
        "is_weekend": context.is_weekend,
        "business_day_pending": context.business_day_pending,
        "diff_days": context.diff_days,
        "diff_label": context.diff_label,
        "year_week": {
            "index": context.year_week.index,
            "total": context.year_week.total,
            "weeks_remaining": context.year_week.weeks_remaining,
        },
        "fiscal_week": {
            "index": context.fiscal_week.index,
            "total": context.fiscal_week.total,
            "weeks_remaining": context.fiscal_week.weeks_remaining,
        },
        "fiscal_period": {
            "start": context.fiscal_period.start.isoformat(),
            "end": context.fiscal_period.end.isoformat(),
        },
        "holiday": None,
    }
    if update is not None:
        payload["holiday"] = {
            "status": update.result.status.value,
            "name": update.result.name,
            "type": update.result.type,
            "message": update.result.message,
            "is_business_day": update.is_business_day,
        }
    return payload


async def _resolve(
    service: DateContextService, date_key: str
) -> tuple[DateContext, HolidayUpdate | None]:
    context = service.compute_date_context(date_key)
    update = await service.resolve_holiday(context)
    return context, update


def _emit(service: DateContextService, date_key: str, as_json: bool) -> None:
    try:
        context, update = asyncio.run(_resolve(service, date_key))
    except civil.FormatError as exc:
        raise typer.BadParameter(str(exc), param_hint="DATE") from exc
    except civil.UnknownZoneError as exc:
        raise typer.BadParameter(str(exc)) from exc
    if as_json:
        typer.echo(json.dumps(as_payload(context, update), ensure_ascii=False, indent=2))
        return
    for line in render_context(context) + render_holiday(update):
        typer.echo(line)


@app.command()
def show(
    date_key: str = typer.Argument(..., metavar="DATE", help="Date as YYYY-MM-DD"),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of text"),
    no_cache: bool = typer.Option(False, "--no-cache", help="Skip the persisted holiday cache"),
    metrics_port: int = typer.Option(
        0, "--metrics-port", min=0, help="Serve Prometheus metrics on this port (0 disables)"
    ),
) -> None:
    """Show the date context for DATE."""

    config = _configure_environment()
    if metrics_port:
        ensure_metrics_server(metrics_port)
    _emit(_build_service(config, use_cache=not no_cache), date_key, as_json)


@app.command()
def today(
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of text"),
    no_cache: bool = typer.Option(False, "--no-cache", help="Skip the persisted holiday cache"),
    metrics_port: int = typer.Option(
        0, "--metrics-port", min=0, help="Serve Prometheus metrics on this port (0 disables)"
    ),
) -> None:
    """Show the date context for today in the configured zone."""

    config = _configure_environment()
    if metrics_port:
        ensure_metrics_server(metrics_port)
    try:
        current = civil.today(config.timezone_name)
    except civil.UnknownZoneError as exc:
        raise typer.BadParameter(str(exc)) from exc
    _emit(_build_service(config, use_cache=not no_cache), civil.key(current), as_json)


if __name__ == "__main__":
    app()
