# minijira/client/cli.py
"""
Mini Jira terminal frontend.

Commands:
    login     - Exchange email/password for a bearer token
    tickets   - Filterable ticket table
    show      - One ticket with its project and assignee
    create    - Create a ticket
    update    - Edit some fields of a ticket
    delete    - Delete a ticket

The token comes from --token or MINIJIRA_TOKEN.
"""

import argparse
import sys
from typing import Sequence

import httpx
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from minijira.client.api import ApiClient, ApiError
from minijira.client.config import get_client_settings
from minijira.client.models import UNASSIGNED, TicketDetail, TicketFilters
from minijira.client.store import TicketStore, TicketStoreError

PRIORITIES = ["Low", "Medium", "High"]
STATUSES = ["Open", "In Progress", "Resolved", "Closed"]

STATUS_STYLES = {
    "Open": "cyan",
    "In Progress": "yellow",
    "Resolved": "green",
    "Closed": "dim",
}
PRIORITY_STYLES = {"High": "bold red", "Medium": "yellow", "Low": "green"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="minijira-cli", description="Mini Jira tickets")
    parser.add_argument("--token", help="Bearer token (default: MINIJIRA_TOKEN)")
    sub = parser.add_subparsers(dest="command", required=True)

    login = sub.add_parser("login", help="Obtain a bearer token")
    login.add_argument("--email", required=True)
    login.add_argument("--password", required=True)

    tickets = sub.add_parser("tickets", help="List tickets")
    tickets.add_argument("--search", default="")
    tickets.add_argument("--status", default="", choices=["", *STATUSES])
    tickets.add_argument("--priority", default="", choices=["", *PRIORITIES])
    tickets.add_argument("--assignee", default="", help=f"User id or '{UNASSIGNED}'")
    tickets.add_argument("--project", default="", help="Project id")

    show = sub.add_parser("show", help="Show one ticket")
    show.add_argument("ticket_id", type=int)

    create = sub.add_parser("create", help="Create a ticket")
    create.add_argument("--title", required=True)
    create.add_argument("--description", required=True)
    create.add_argument("--project", required=True, help="Project id")
    create.add_argument("--assignee", default=None, help="User id")
    create.add_argument("--priority", default=None, choices=PRIORITIES)

    update = sub.add_parser("update", help="Edit a ticket")
    update.add_argument("ticket_id", type=int)
    update.add_argument("--title")
    update.add_argument("--description")
    update.add_argument("--priority", choices=PRIORITIES)
    update.add_argument("--status", choices=STATUSES)
    update.add_argument("--project", help="Project id")
    assignee = update.add_mutually_exclusive_group()
    assignee.add_argument("--assignee", help="User id")
    assignee.add_argument("--unassign", action="store_true", help="Clear the assignee")

    delete = sub.add_parser("delete", help="Delete a ticket")
    delete.add_argument("ticket_id", type=int)

    return parser


def render_tickets(store: TicketStore, console: Console) -> None:
    table = Table(title=f"Tickets ({len(store.tickets)})", box=box.SIMPLE_HEAVY)
    table.add_column("Key", style="bold", no_wrap=True)
    table.add_column("Title")
    table.add_column("Status", no_wrap=True)
    table.add_column("Priority", no_wrap=True)
    table.add_column("Assignee")
    table.add_column("Updated", no_wrap=True)

    for ticket in store.tickets:
        table.add_row(
            store.ticket_key(ticket),
            escape(ticket.title),
            f"[{STATUS_STYLES.get(ticket.status, '')}]{ticket.status}[/]",
            f"[{PRIORITY_STYLES.get(ticket.priority, '')}]{ticket.priority}[/]",
            escape(store.user_name(ticket.assignee_id)),
            ticket.updated_at.strftime("%Y-%m-%d %H:%M"),
        )

    if not store.tickets:
        console.print("[dim]No tickets match the current filters.[/dim]")
        return
    console.print(table)


def render_detail(ticket: TicketDetail, console: Console) -> None:
    console.print(f"[bold]{ticket.project.key}-{ticket.id}[/bold] {escape(ticket.title)}")
    console.print(f"  Project:  {escape(ticket.project.name)}")
    console.print(f"  Status:   {ticket.status}")
    console.print(f"  Priority: {ticket.priority}")
    console.print(f"  Assignee: {escape(ticket.assignee.name) if ticket.assignee else 'Unassigned'}")
    console.print(f"  Created:  {ticket.created_at:%Y-%m-%d %H:%M}")
    console.print(f"  Updated:  {ticket.updated_at:%Y-%m-%d %H:%M}")
    console.print()
    console.print(escape(ticket.description))


def _update_changes(args: argparse.Namespace) -> dict:
    changes = {
        name: value
        for name, value in (
            ("title", args.title),
            ("description", args.description),
            ("priority", args.priority),
            ("status", args.status),
            ("project_id", args.project),
            ("assignee_id", args.assignee),
        )
        if value is not None
    }
    if args.unassign:
        changes["assignee_id"] = None
    return changes


def main(
    argv: Sequence[str] | None = None,
    http: httpx.Client | None = None,
    console: Console | None = None,
) -> int:
    args = build_parser().parse_args(argv)
    console = console or Console()
    settings = get_client_settings()

    if http is None:
        api = ApiClient.from_settings(settings)
    else:
        api = ApiClient(http, prefix=settings.API_PREFIX)
    api.token = args.token or settings.TOKEN

    try:
        if args.command == "login":
            user = api.login(args.email, args.password)
            console.print(f"Logged in as [bold]{user.name}[/bold]")
            console.print(f"export MINIJIRA_TOKEN={api.token}", soft_wrap=True)
            return 0

        if args.command == "show":
            render_detail(api.get_ticket(args.ticket_id), console)
            return 0

        filters = TicketFilters()
        if args.command == "tickets":
            filters = TicketFilters(
                search=args.search,
                status=args.status,
                priority=args.priority,
                assignee_id=args.assignee,
                project_id=args.project,
            )
        store = TicketStore(api, filters)
        store.load_lookups()

        if args.command == "create":
            created = store.create_ticket(
                title=args.title,
                description=args.description,
                project_id=args.project,
                assignee_id=args.assignee,
                priority=args.priority,
            )
            console.print(f"Created [bold]{store.ticket_key(created)}[/bold]")
        elif args.command == "update":
            changes = _update_changes(args)
            if not changes:
                console.print("[yellow]Nothing to update.[/yellow]")
                return 2
            updated = store.update_ticket(args.ticket_id, **changes)
            console.print(f"Updated [bold]{store.ticket_key(updated)}[/bold]")
        elif args.command == "delete":
            deleted = api.delete_ticket(args.ticket_id)
            console.print(f"Deleted [bold]{store.ticket_key(deleted)}[/bold]")
            store.refresh_tickets()
        else:
            store.refresh_tickets()

        render_tickets(store, console)
        return 0
    except (ApiError, TicketStoreError) as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        return 1
    finally:
        if http is None:
            api.close()


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
