"""Quill CLI - per-owner journal entries."""

import getpass
import json
import logging
import sys

import click

from .config import load_config
from .core.accounts import Addressing, JournalEntry
from .core.address import identity_from_name
from .core.errors import JournalError
from .ports.ledger import LedgerError
from .workflows import get_program


def _fail(e: Exception) -> None:
    click.echo(f"Error: {e}", err=True)
    sys.exit(1)


def _entry_json(address: str, entry: JournalEntry) -> dict:
    return {
        "address": address,
        "id": entry.id,
        "owner": entry.owner,
        "title": entry.title,
        "message": entry.message,
    }


def _entry_label(entry: JournalEntry) -> str:
    if entry.id is not None:
        return f"#{entry.id}"
    return repr(entry.title)


@click.group()
@click.option("--owner", "owner_name", default=None, help="Owner name (defaults to config, then OS user)")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.version_option(package_name="quill-journal")
@click.pass_context
def main(ctx, owner_name: str | None, debug: bool):
    """Quill - journal entries with a bounded per-owner index."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )

    config = load_config()
    name = owner_name or config.default_owner or getpass.getuser()
    ctx.obj = {
        "config": config,
        "program": get_program(config),
        "owner_name": name,
        "owner": identity_from_name(name),
    }


@main.command()
@click.pass_obj
def whoami(obj):
    """Show the current owner identity."""
    click.echo(f"{obj['owner_name']} {obj['owner']}")


@main.command()
@click.argument("lamports", type=int, required=False)
@click.pass_obj
def airdrop(obj, lamports: int | None):
    """Fund the current owner so it can pay rent."""
    amount = lamports if lamports is not None else obj["config"].airdrop_lamports
    try:
        obj["program"].ledger.airdrop(obj["owner"], amount)
    except ValueError as e:
        _fail(e)
    click.echo(f"Airdropped {amount} lamports to {obj['owner_name']}")


@main.command()
@click.pass_obj
def balance(obj):
    """Show the current owner's lamport balance."""
    click.echo(obj["program"].ledger.balance(obj["owner"]))


@main.command()
@click.argument("title")
@click.argument("message")
@click.pass_obj
def create(obj, title: str, message: str):
    """Create a journal entry."""
    program = obj["program"]
    try:
        address = program.create_journal_entry(obj["owner"], title, message)
    except (JournalError, LedgerError) as e:
        _fail(e)

    entry = program.fetch_entry(address)
    click.echo(f"Created entry {_entry_label(entry)} at {address}")


@main.command()
@click.argument("key")
@click.argument("message")
@click.pass_obj
def update(obj, key: str, message: str):
    """Replace an entry's message. KEY is an id, title or address."""
    program = obj["program"]
    try:
        address = program.resolve(obj["owner"], key)
        program.update_journal_entry(obj["owner"], address, message)
    except (JournalError, LedgerError, ValueError) as e:
        _fail(e)
    click.echo(f"Updated {address}")


@main.command()
@click.argument("key")
@click.pass_obj
def delete(obj, key: str):
    """Delete an entry. KEY is an id, title or address."""
    program = obj["program"]
    try:
        address = program.resolve(obj["owner"], key)
        program.delete_journal_entry(obj["owner"], address)
    except (JournalError, LedgerError, ValueError) as e:
        _fail(e)
    click.echo(f"Deleted {address}")


@main.command()
@click.argument("key")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def show(obj, key: str, as_json: bool):
    """Show a single entry."""
    program = obj["program"]
    try:
        address = program.resolve(obj["owner"], key)
        entry = program.fetch_entry(address)
    except (JournalError, ValueError) as e:
        _fail(e)

    if entry is None:
        _fail(JournalError(f"No entry at {address}"))

    if as_json:
        click.echo(json.dumps(_entry_json(address, entry), indent=2))
    else:
        click.echo(f"{_entry_label(entry)} {entry.title}")
        click.echo(entry.message)


@main.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def list_cmd(obj, as_json: bool):
    """List the current owner's entries."""
    entries = obj["program"].list_entries(obj["owner"])

    if as_json:
        click.echo(json.dumps([_entry_json(a, e) for a, e in entries], indent=2))
        return

    if not entries:
        click.echo("No journal entries.")
        return

    for address, entry in entries:
        click.echo(f"{_entry_label(entry):>6}  {entry.title}  ({address[:12]}…)")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def index(obj, as_json: bool):
    """Show the raw index for the current owner."""
    journal_index = obj["program"].fetch_index(obj["owner"])

    if as_json:
        payload = None
        if journal_index is not None:
            payload = {"owner": journal_index.owner, "entries": journal_index.entries}
        click.echo(json.dumps(payload, indent=2))
        return

    if journal_index is None:
        click.echo("Index not initialized.")
        return

    click.echo(f"{len(journal_index.entries)} entries")
    for address in journal_index.entries:
        click.echo(f"  {address}")


@main.command()
@click.pass_obj
def counter(obj):
    """Show the next entry id for the current owner."""
    program = obj["program"]
    if program.addressing != Addressing.COUNTER:
        click.echo("Title-keyed journal has no id counter.")
        return

    id_counter = program.fetch_counter(obj["owner"])
    if id_counter is None:
        click.echo("No id counter yet.")
        return
    click.echo(f"next_id = {id_counter.next_id}")


if __name__ == "__main__":
    main()
