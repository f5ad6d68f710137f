"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- Lets several commands reuse the same tables.
"""

from __future__ import annotations

from rich.table import Table

from core.domain.resource_data import ResourceData
from core.domain.schema import Attribute, AttributeKind


def _format_value(value: object) -> str:
    if isinstance(value, list):
        return ", ".join(str(v) for v in value) if value else "-"
    if value in ("", 0, None):
        return "-"
    return str(value)


def build_site_table(d: ResourceData) -> Table:
    """Attributes of one site, inputs first then computed values."""

    table = Table(title=f"Site {d.get('domain')} (id: {d.id or 'none'})")
    table.add_column("Attribute", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    for name, value in d.to_state()["attributes"].items():
        table.add_row(name, _format_value(value))
    return table


def build_sites_summary_table(sites: dict[str, ResourceData]) -> Table:
    table = Table(title="Managed sites")
    table.add_column("Domain", style="cyan", no_wrap=True)
    table.add_column("Site ID", style="green")
    table.add_column("CNAME", style="magenta")
    table.add_column("A records", style="white")
    for domain, d in sorted(sites.items()):
        table.add_row(
            domain,
            d.id or "-",
            _format_value(d.get("dns_cname_record_value")),
            _format_value(d.get("dns_a_record_value")),
        )
    return table


def build_schema_table(schema: dict[str, Attribute]) -> Table:
    table = Table(title="incapsula_site schema")
    table.add_column("Attribute", style="cyan", no_wrap=True)
    table.add_column("Kind", style="green")
    table.add_column("Type", style="white")
    table.add_column("Description", style="dim")
    for attr in schema.values():
        kind = attr.kind.value
        if attr.force_new:
            kind += " (force new)"
        style = "bold" if attr.kind is AttributeKind.REQUIRED else ""
        table.add_row(attr.name, kind, attr.type.value, attr.description, style=style)
    return table
