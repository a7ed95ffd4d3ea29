"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

import typer
from rich import print
from rich.table import Table

from contactsync.application.options import SyncOptions
from contactsync.domain.models.query import FilterKind, QuerySignature, SortField, SortOrder
from contactsync.errors import ContactSyncError, SettingsLoadError, SettingsValidationError
from contactsync.events.bus import EventBus
from contactsync.events.contact_events import BulkMutationCompletedEvent
from contactsync.gui.viewmodels.contact_list_viewmodel import ContactListViewModel
from contactsync.infrastructure.json_contact_source import JsonContactSource
from contactsync.settings.manager import SettingsManager
from contactsync.utils.console_logger import ensure_console_logger
from contactsync.utils.jsonio import read_json

app = typer.Typer(help="Page through contact lists and refresh them after bulk uploads")


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (SettingsLoadError, SettingsValidationError) as exc:
            typer.echo(f"Error: invalid settings: {exc}", err=True)
            raise typer.Exit(1) from exc
        except ContactSyncError as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


def _configure_logging(verbose: bool) -> None:
    if verbose:
        ensure_console_logger(logging.getLogger("contactsync"), "contactsync-cli", level=logging.DEBUG)


def _load_settings(settings_path: Optional[Path]) -> Optional[SettingsManager]:
    if settings_path is None:
        return None
    manager = SettingsManager(path=settings_path)
    manager.load(create=False)
    return manager


def _load_options(manager: Optional[SettingsManager], page_size: Optional[int] = None) -> SyncOptions:
    options = manager.sync_options() if manager is not None else SyncOptions()
    if page_size is not None:
        try:
            options = replace(options, initial_page_size=page_size)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--page-size") from exc
    return options


def _resolve_contacts(contacts: Optional[Path], manager: Optional[SettingsManager]) -> Path:
    if contacts is None and manager is not None:
        contacts = manager.contacts_path()
    if contacts is None:
        raise typer.BadParameter(
            "no contacts file given and none configured under source.contacts_path",
            param_hint="CONTACTS",
        )
    if not contacts.is_file():
        raise ContactSyncError(f"contacts file not found: {contacts}")
    return contacts


def _render(vm: ContactListViewModel, title: str) -> None:
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("Phone")
    table.add_column("Added")
    for row, record in enumerate(vm.records.value, start=1):
        table.add_row(
            str(row),
            record.id,
            record.display_name,
            str(record.get("phone_number") or ""),
            str(record.get("created_at") or ""),
        )
    print(table)
    footer = vm.footer.value
    if footer.message:
        print(f"[dim]{footer.message}")


@app.command()
@_handle_errors
def browse(
    contacts: Optional[Path] = typer.Argument(
        None, dir_okay=False, help="Contacts JSON file (default: source.contacts_path)"
    ),
    search: str = typer.Option("", "--search", "-s", help="Search name, phone or email"),
    sort: SortField = typer.Option(SortField.NAME, "--sort", help="Sort field"),
    desc: bool = typer.Option(False, "--desc", help="Sort descending"),
    filter_kind: FilterKind = typer.Option(FilterKind.ALL, "--filter", help="Contact filter"),
    page_size: Optional[int] = typer.Option(None, "--page-size", min=1, help="Override page size"),
    pages: int = typer.Option(1, "--pages", min=1, help="Pages to load, as if scrolled"),
    settings: Optional[Path] = typer.Option(None, "--settings", help="Settings JSON file"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Load contacts page by page and print what the list would show."""

    _configure_logging(verbose)
    manager = _load_settings(settings)
    options = _load_options(manager, page_size)
    source = JsonContactSource.from_file(_resolve_contacts(contacts, manager))
    vm = ContactListViewModel(source, EventBus(), options=options)

    signature = QuerySignature(
        search=search.strip(),
        sort_by=sort,
        order=SortOrder.DESC if desc else SortOrder.ASC,
        filter=filter_kind,
        incremental=options.enable_incremental_load,
    )
    vm.load(signature)
    for _ in range(pages - 1):
        if not vm.on_sentinel_visible(True):
            break
    if vm.last_error.value:
        raise ContactSyncError(vm.last_error.value)
    _render(vm, f"Contacts ({len(vm.records.value)} loaded)")


@app.command()
@_handle_errors
def upload(
    contacts: Path = typer.Argument(..., exists=True, dir_okay=False, help="Contacts JSON file"),
    batch: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON list of new contacts"),
    settings: Optional[Path] = typer.Option(None, "--settings", help="Settings JSON file"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Bulk-create contacts, then show the refreshed first page."""

    _configure_logging(verbose)
    manager = _load_settings(settings)
    options = _load_options(manager)
    source = JsonContactSource.from_file(contacts)
    rows = read_json(batch)
    if not isinstance(rows, list):
        raise ContactSyncError(f"{batch} must contain a JSON list of contacts")

    bus = EventBus()
    vm = ContactListViewModel(source, bus, options=options)
    vm.load()
    before = vm.generation.value

    outcome = source.upload(rows)
    bus.publish(
        BulkMutationCompletedEvent(
            source="upload",
            success_count=outcome.success_count,
            failure_count=outcome.failure_count,
            errors=outcome.errors,
        )
    )

    colour = "green" if outcome.success_count else "red"
    print(
        f"[{colour}]Uploaded {outcome.success_count} contacts, "
        f"{outcome.failure_count} failed"
    )
    for message in outcome.errors:
        print(f"[yellow]  {message}")
    if outcome.success_count:
        source.save()
    refreshed = vm.generation.value != before
    _render(vm, "Contacts (refreshed)" if refreshed else "Contacts (unchanged)")


@app.command("settings")
@_handle_errors
def show_settings(
    settings: Optional[Path] = typer.Option(None, "--settings", help="Settings JSON file"),
) -> None:
    """Print the effective settings."""

    manager = SettingsManager(path=settings)
    manager.load(create=False)
    typer.echo(json.dumps(manager.as_dict(), indent=2))


if __name__ == "__main__":  # pragma: no cover
    app()
