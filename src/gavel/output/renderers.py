"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from gavel.output.console import create_console, get_output, style_for_state

if TYPE_CHECKING:
    from rich.console import Console

    from gavel.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    d = result.data
    if result.op == "signin":
        return str(d.get("token", ""))
    if result.op == "sweep_expired":
        return "\n".join(d.get("closed", []))

    items = d.get("items")
    if isinstance(items, list):
        return "\n".join(str(item.get("id", "")) for item in items if item.get("id"))

    record = _auction_of(result)
    if record is not None:
        return str(record.get("id", ""))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _auction_of(result: ServiceResult) -> dict[str, Any] | None:
    """The auction record in a create/view/bid payload, if any."""
    record = result.data.get("auction", result.data.get("item"))
    return record if isinstance(record, dict) else None


def _state_of(record: dict[str, Any]) -> str:
    return "closed" if record.get("isClosed") else "open"


def _money(value: Any) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return f"{value:,.2f}"
    return str(value)


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="gavel.ok")
    op = Text(f"  {result.op}", style="gavel.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="gavel.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="gavel.id")
    elif key == "token":
        v = Text(str(value), style="gavel.token")
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(Text(f"    {k}: {v}"))


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {name}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{ak}={av}" for ak, av in annotations.items()) + ")"

    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _auction_table(items: list[dict[str, Any]], *, verbose: bool = False) -> Table:
    """Build a Rich Table for a list of auction records."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="gavel.id", no_wrap=True)
    table.add_column("Item", style="gavel.name")
    table.add_column("Current Bid", style="gavel.money", justify="right")
    table.add_column("Leader")
    table.add_column("Closes")
    table.add_column("State")

    if verbose:
        table.add_column("Starting Bid", justify="right")
        table.add_column("Created", style="dim")

    for item in items:
        state = _state_of(item)
        row: list[str | Text] = [
            str(item.get("id", "")),
            escape(str(item.get("itemName", ""))),
            _money(item.get("currentBid", "")),
            escape(str(item.get("highestBidder") or "-")),
            str(item.get("closingTime", "")),
            Text(state, style=style_for_state(state)),
        ]
        if verbose:
            row.append(_money(item.get("startingBid", "")))
            row.append(str(item.get("createdAt", "")))
        table.add_row(*row)

    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="gavel.error")
    op = Text(f"  {result.op}", style="gavel.op")
    code = Text(f"  [{err.code}]" if err else "", style="dim")
    console.print(label, op, code, Text(": "), Text(msg), sep="")

    if err and err.detail:
        # Closed-auction and too-low rejections carry the standing bid.
        for key in ("winner", "currentBid"):
            if key in err.detail:
                _field(console, key, err.detail[key])
        if verbose:
            console.print(Text("  detail:", style="dim"))
            for k, v in err.detail.items():
                console.print(Text(f"    {k}: {v}"))


# ── Auction renderers ─────────────────────────────────────────────────


def _render_auction(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render create/view/bid results as a detail panel."""
    record = _auction_of(result) or {}
    _status_line(console, result)

    state = _state_of(record)
    lines = [
        f"description: {escape(str(record.get('description', '')))}",
        f"starting bid: {_money(record.get('startingBid', ''))}",
        f"current bid: {_money(record.get('currentBid', ''))}",
        f"highest bidder: {escape(str(record.get('highestBidder') or '-'))}",
        f"closes: {record.get('closingTime', '')}",
        f"state: [{style_for_state(state)}]{state}[/]",
    ]
    if verbose:
        lines.append(f"created: {record.get('createdAt', '')}")

    title = f"{record.get('id', '?')} · {escape(str(record.get('itemName', 'Untitled')))}"
    border = style_for_state(state) or "dim"
    console.print(Panel("\n".join(lines), title=title, border_style=border, expand=False))
    if verbose:
        _render_meta(console, result)


def _render_auction_table(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    """Render list_auctions as a table."""
    items = result.data.get("items", [])
    if items:
        console.print(_auction_table(items, verbose=verbose))
        console.print()
    count = result.data.get("count", len(items))
    console.print(f"{count} auction{'s' if count != 1 else ''}")
    if verbose:
        _render_meta(console, result)


def _render_sweep(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render sweep_expired results."""
    _status_line(console, result)
    _field(console, "closed", result.data.get("count", 0))
    for auction_id in result.data.get("closed", []):
        console.print(Text(f"    {auction_id}", style="gavel.id"))
    if verbose:
        _render_meta(console, result)


# ── Account renderers ─────────────────────────────────────────────────


def _render_signup(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    user = result.data.get("user", {})
    _status_line(console, result)
    _field(console, "user_id", user.get("id", ""))
    _field(console, "username", user.get("username", ""))
    if verbose:
        _render_meta(console, result)


def _render_signin(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render signin with the bearer token on its own line for copy/paste."""
    user = result.data.get("user", {})
    _status_line(console, result)
    _field(console, "username", user.get("username", ""))
    _field(console, "expires_in", f"{result.data.get('expires_in', '')}s")
    _field(console, "token", result.data.get("token", ""))
    if verbose:
        _render_meta(console, result)


# ── Generic renderer ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback: key-value pairs for any op without a dedicated layout."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Any] = {
    "create_auction": _render_auction,
    "view_auction": _render_auction,
    "place_bid": _render_auction,
    "list_auctions": _render_auction_table,
    "sweep_expired": _render_sweep,
    "signup": _render_signup,
    "signin": _render_signin,
}
