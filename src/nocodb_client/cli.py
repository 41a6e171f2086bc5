"""CLI entry point for nocodb_client package."""
from __future__ import annotations

import functools
import json
import logging
import sys
from typing import Any, Callable, List, Optional, Tuple

import click

from .client import Client
from .config import ClientSettings
from .errors import NocoDBError

logger = logging.getLogger(__name__)


def make_client(settings: ClientSettings) -> Client:
    return Client.from_settings(settings)


def _handle_errors(fn: Callable) -> Callable:
    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return fn(*args, **kwargs)
        except NocoDBError as exc:
            raise click.ClickException(str(exc)) from exc

    return wrapper


def _client(ctx: click.Context) -> Client:
    settings: ClientSettings = ctx.obj["settings"]
    logger.debug("Connecting to %s", settings.base_url)
    try:
        client = make_client(settings)
    except NocoDBError as exc:
        raise click.ClickException(f"{exc} (set NOCODB_BASE_URL / NOCODB_API_TOKEN)") from exc
    ctx.call_on_close(client.close)
    return client


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, default=str))


def _record_id(value: str) -> Any:
    return int(value) if value.isdigit() else value


def _load_json(value: str) -> Any:
    raw = sys.stdin.read() if value == "-" else value
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise click.BadParameter(f"invalid JSON: {exc}") from exc


def _split_fields(fields: Optional[str]) -> List[str]:
    if not fields:
        return []
    return [f.strip() for f in fields.split(",") if f.strip()]


def _apply_sorts(builder: Any, sorts: Tuple[str, ...]) -> None:
    for column in sorts:
        if column.startswith("-"):
            builder.sort_desc_by(column[1:])
        else:
            builder.sort_asc_by(column)


@click.group()
@click.option("--base-url", help="NocoDB base URL [env: NOCODB_BASE_URL]")
@click.option("--token", help="API token [env: NOCODB_API_TOKEN]")
@click.option("--timeout", type=float, help="Request timeout in seconds [env: NOCODB_TIMEOUT]")
@click.option("--env-file", type=click.Path(dir_okay=False), help="Load settings from this .env file.")
@click.option("--verbose", "-v", is_flag=True, help="Log every HTTP request.")
@click.pass_context
def main(
    ctx: click.Context,
    base_url: Optional[str],
    token: Optional[str],
    timeout: Optional[float],
    env_file: Optional[str],
    verbose: bool,
) -> None:
    """NocoDB records command-line tool."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    try:
        settings = ClientSettings.from_env(env_file)
    except NocoDBError as exc:
        raise click.ClickException(str(exc)) from exc
    overrides = {"base_url": base_url, "api_token": token, "timeout": timeout}
    settings = settings.model_copy(update={k: v for k, v in overrides.items() if v is not None})
    if base_url:
        settings.base_url = base_url.rstrip("/")
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@main.command("list")
@click.argument("table_id", metavar="TABLE")
@click.option("--where", "-w", multiple=True, help="Filter expression, e.g. '(Age,gt,18)'.")
@click.option("--sort", "-s", multiple=True, help="Column to sort by; prefix with '-' for descending.")
@click.option("--limit", type=int, default=0, help="Maximum records to return.")
@click.option("--offset", type=int, default=0, help="Records to skip.")
@click.option("--page", type=int, default=0, help="1-based page number (uses --page-size).")
@click.option("--page-size", type=int, default=25, show_default=True)
@click.option("--fields", "-f", help="Comma separated columns to return.")
@click.option("--shuffle", is_flag=True, help="Return records in random order.")
@click.option("--view", "view_id", help="View id to read through.")
@click.pass_context
@_handle_errors
def list_cmd(
    ctx: click.Context,
    table_id: str,
    where: Tuple[str, ...],
    sort: Tuple[str, ...],
    limit: int,
    offset: int,
    page: int,
    page_size: int,
    fields: Optional[str],
    shuffle: bool,
    view_id: Optional[str],
) -> None:
    """List records of TABLE."""
    builder = _client(ctx).table(table_id).list_records()
    for expression in where:
        builder.where(expression)
    _apply_sorts(builder, sort)
    if page:
        builder.page(page, page_size)
    else:
        builder.limit(limit).offset(offset)
    builder.return_fields(*_split_fields(fields))
    if shuffle:
        builder.shuffle()
    if view_id:
        builder.with_view_id(view_id)
    _echo_json(builder.execute().model_dump(by_alias=True))


@main.command("count")
@click.argument("table_id", metavar="TABLE")
@click.option("--where", "-w", multiple=True, help="Filter expression.")
@click.option("--view", "view_id", help="View id to count through.")
@click.pass_context
@_handle_errors
def count_cmd(ctx: click.Context, table_id: str, where: Tuple[str, ...], view_id: Optional[str]) -> None:
    """Count records of TABLE."""
    builder = _client(ctx).table(table_id).count_records()
    for expression in where:
        builder.where(expression)
    if view_id:
        builder.with_view_id(view_id)
    click.echo(builder.execute())


@main.command("read")
@click.argument("table_id", metavar="TABLE")
@click.argument("record_id", metavar="ID")
@click.option("--fields", "-f", help="Comma separated columns to return.")
@click.pass_context
@_handle_errors
def read_cmd(ctx: click.Context, table_id: str, record_id: str, fields: Optional[str]) -> None:
    """Print record ID of TABLE."""
    response = (
        _client(ctx)
        .table(table_id)
        .read_record(_record_id(record_id))
        .return_fields(*_split_fields(fields))
        .execute()
    )
    _echo_json(response.data)


@main.command("create")
@click.argument("table_id", metavar="TABLE")
@click.argument("data", metavar="JSON")
@click.pass_context
@_handle_errors
def create_cmd(ctx: click.Context, table_id: str, data: str) -> None:
    """Create one record (JSON object) or many (JSON array). Use '-' for stdin."""
    payload = _load_json(data)
    table = _client(ctx).table(table_id)
    if isinstance(payload, list):
        _echo_json(table.create_records(payload).execute())
    else:
        _echo_json(table.create_record(payload).execute())


@main.command("update")
@click.argument("table_id", metavar="TABLE")
@click.argument("record_id", metavar="ID")
@click.argument("data", metavar="JSON")
@click.pass_context
@_handle_errors
def update_cmd(ctx: click.Context, table_id: str, record_id: str, data: str) -> None:
    """Update record ID of TABLE with the columns in JSON."""
    payload = _load_json(data)
    _client(ctx).table(table_id).update_record(_record_id(record_id), payload).execute()
    click.echo(f"Updated record {record_id}")


@main.command("delete")
@click.argument("table_id", metavar="TABLE")
@click.argument("record_ids", metavar="ID...", nargs=-1, required=True)
@click.pass_context
@_handle_errors
def delete_cmd(ctx: click.Context, table_id: str, record_ids: Tuple[str, ...]) -> None:
    """Delete one or more records of TABLE."""
    ids = [_record_id(r) for r in record_ids]
    _client(ctx).table(table_id).delete_records(ids).execute()
    click.echo(f"Deleted {len(ids)} record(s)")


@main.command("links")
@click.argument("table_id", metavar="TABLE")
@click.argument("link_field_id", metavar="FIELD")
@click.argument("record_id", metavar="ID")
@click.option("--where", "-w", multiple=True, help="Filter expression.")
@click.option("--sort", "-s", multiple=True, help="Column to sort by; prefix with '-' for descending.")
@click.option("--limit", type=int, default=0)
@click.option("--offset", type=int, default=0)
@click.option("--fields", "-f", help="Comma separated columns to return.")
@click.pass_context
@_handle_errors
def links_cmd(
    ctx: click.Context,
    table_id: str,
    link_field_id: str,
    record_id: str,
    where: Tuple[str, ...],
    sort: Tuple[str, ...],
    limit: int,
    offset: int,
    fields: Optional[str],
) -> None:
    """List records linked to record ID through link FIELD."""
    builder = _client(ctx).table(table_id).list_links(link_field_id, _record_id(record_id))
    for expression in where:
        builder.where(expression)
    _apply_sorts(builder, sort)
    builder.limit(limit).offset(offset).return_fields(*_split_fields(fields))
    _echo_json(builder.execute().model_dump(by_alias=True))


@main.command("link")
@click.argument("table_id", metavar="TABLE")
@click.argument("link_field_id", metavar="FIELD")
@click.argument("record_id", metavar="ID")
@click.argument("target_ids", metavar="TARGET...", nargs=-1, required=True)
@click.pass_context
@_handle_errors
def link_cmd(
    ctx: click.Context, table_id: str, link_field_id: str, record_id: str, target_ids: Tuple[str, ...]
) -> None:
    """Link TARGET records to record ID."""
    targets = [_record_id(t) for t in target_ids]
    _client(ctx).table(table_id).create_links(link_field_id, _record_id(record_id), targets).execute()
    click.echo(f"Linked {len(targets)} record(s)")


@main.command("unlink")
@click.argument("table_id", metavar="TABLE")
@click.argument("link_field_id", metavar="FIELD")
@click.argument("record_id", metavar="ID")
@click.argument("target_ids", metavar="TARGET...", nargs=-1, required=True)
@click.pass_context
@_handle_errors
def unlink_cmd(
    ctx: click.Context, table_id: str, link_field_id: str, record_id: str, target_ids: Tuple[str, ...]
) -> None:
    """Unlink TARGET records from record ID."""
    targets = [_record_id(t) for t in target_ids]
    _client(ctx).table(table_id).delete_links(link_field_id, _record_id(record_id), targets).execute()
    click.echo(f"Unlinked {len(targets)} record(s)")


if __name__ == "__main__":
    main()
