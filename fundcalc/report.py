"""Text, CSV and HTML rendering of projection ledgers."""

from __future__ import annotations

import csv
from dataclasses import asdict, fields
from datetime import UTC, datetime
import hashlib
import html
import io
import json
from pathlib import Path

from .charts import build_chart_payload
from .engine import AnnualLedger, ProjectionResult
from .schema import Configuration
from .templates import render_html_document
from .validate import check_scenario_sanity, validate_scenario

# (header, ledger field, sign). Outflows are shown negated.
LEDGER_COLUMNS: list[tuple[str, str, int]] = [
    ("Opening", "opening_balance", 1),
    ("Contribution", "contribution", 1),
    ("Order Costs", "transaction_cost", -1),
    ("Growth", "market_growth", 1),
    ("Mgmt Fee", "management_fee", -1),
    ("Profit", "distributed_profit", -1),
    ("Lump Sum", "lump_sum_floor", 1),
    ("Tax On Hold", "accrual_tax", -1),
    ("Closing", "closing_balance", 1),
    ("Tax On Sell", "realization_tax", -1),
    ("After Sell", "after_sale_balance", 1),
    ("Contrib Total", "cumulative_contributions", 1),
    ("Profit Total", "cumulative_profit", 1),
    ("Net Gain", "net_gain_after_tax", 1),
]

CSV_FIELDS = [f.name for f in fields(AnnualLedger)]


def _money(value: float) -> str:
    return f"{value:,.2f} EUR"


def _display_value(row: AnnualLedger, key: str, sign: int) -> float:
    value = getattr(row, key) * sign
    # Avoid "-0.00" for zero outflows.
    return value + 0.0


def render_table(result: ProjectionResult) -> str:
    widths = [max(12, len(header)) for header, _, _ in LEDGER_COLUMNS]
    header = "year | " + " | ".join(h.rjust(w) for (h, _, _), w in zip(LEDGER_COLUMNS, widths))
    lines = [header, "-" * len(header)]
    for row in result.ledgers:
        cells = [
            f"{_display_value(row, key, sign):.2f}".rjust(w)
            for (_, key, sign), w in zip(LEDGER_COLUMNS, widths)
        ]
        lines.append(f"{row.year:4d} | " + " | ".join(cells))
    return "\n".join(lines) + "\n"


def render_csv(result: ProjectionResult) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=CSV_FIELDS, lineterminator="\n")
    writer.writeheader()
    for row in result.ledgers:
        writer.writerow({key: (f"{value:.2f}" if isinstance(value, float) else value) for key, value in asdict(row).items()})
    return buffer.getvalue()


def render_summary(result: ProjectionResult) -> str:
    final = result.final
    return "\n".join(
        [
            f"Years: {result.ledgers[0].year}-{final.year}",
            f"Total contributed: {_money(final.cumulative_contributions)}",
            f"Fund value: {_money(final.closing_balance)}",
            f"Value after sale: {_money(final.after_sale_balance)}",
            f"Distributed profit: {_money(final.cumulative_profit)}",
            f"Accrual tax paid: {_money(final.cumulative_accrual_tax)}",
            f"Net gain after tax: {_money(final.net_gain_after_tax)}",
        ]
    )


def _dashboard_cards(result: ProjectionResult) -> str:
    final = result.final
    total_costs = sum(row.transaction_cost + row.management_fee for row in result.ledgers)
    cards = [
        ("Years", f"{result.ledgers[0].year}-{final.year}"),
        ("Total Contributed", _money(final.cumulative_contributions)),
        ("Fund Value", _money(final.closing_balance)),
        ("Value After Sale", _money(final.after_sale_balance)),
        ("Accrual Tax Paid", _money(final.cumulative_accrual_tax)),
        ("Total Costs", _money(total_costs)),
        ("Net Gain After Tax", _money(final.net_gain_after_tax)),
    ]
    return "".join(f'<div class="card"><div class="k">{html.escape(k)}</div><div class="v">{html.escape(v)}</div></div>' for k, v in cards)


def _ledger_table(result: ProjectionResult) -> str:
    rows: list[str] = []
    for row in result.ledgers:
        cells = []
        for _, key, sign in LEDGER_COLUMNS:
            value = _display_value(row, key, sign)
            css = ' class="negative"' if value < 0 else ""
            cells.append(f"<td{css}>{value:,.2f}</td>")
        rows.append(f"<tr><td>{row.year}</td>{''.join(cells)}</tr>")

    header_cells = "".join(f"<th>{html.escape(header)}</th>" for header, _, _ in LEDGER_COLUMNS)
    table_html = (
        "<table><thead><tr><th>Year</th>"
        + header_cells
        + "</tr></thead><tbody>"
        + "".join(rows)
        + "</tbody></table>"
    )
    return f'<div class="table-wrap">{table_html}</div>'


def _scenario_table(config: Configuration) -> str:
    rows: list[str] = []

    def _flatten(prefix: str, value: object) -> None:
        if isinstance(value, dict):
            for key, item in value.items():
                _flatten(f"{prefix}.{key}" if prefix else key, item)
            return
        rows.append(f"<tr><td>{html.escape(prefix)}</td><td>{html.escape(str(value))}</td></tr>")

    _flatten("", config.to_dict())
    return (
        "<table><thead><tr><th>Parameter</th><th>Value</th></tr></thead><tbody>"
        + "".join(rows)
        + "</tbody></table>"
    )


def _validation_panel(config: Configuration) -> str:
    validation = validate_scenario(config)
    sanity = check_scenario_sanity(config)

    rows: list[str] = []
    for msg in validation.errors:
        rows.append(f"<tr><td>Error</td><td>{html.escape(msg)}</td></tr>")
    for msg in validation.warnings:
        rows.append(f"<tr><td>Validation warning</td><td>{html.escape(msg)}</td></tr>")
    for msg in sanity.warnings:
        rows.append(f"<tr><td>Sanity warning</td><td>{html.escape(msg)}</td></tr>")
    if not rows:
        rows.append("<tr><td>OK</td><td>No validation/sanity issues detected.</td></tr>")

    return (
        "<table><thead><tr><th>Type</th><th>Detail</th></tr></thead><tbody>"
        + "".join(rows)
        + "</tbody></table>"
    )


def _report_payload(config: Configuration, result: ProjectionResult) -> dict[str, object]:
    return {
        "scenario": config.to_dict(),
        "ledgers": [asdict(row) for row in result.ledgers],
        "charts": build_chart_payload(result),
    }


def scenario_hash(config: Configuration) -> str:
    """Short fingerprint of the configuration that was projected."""
    canonical = json.dumps(config.to_dict(), sort_keys=True).encode("utf-8")
    return hashlib.sha256(canonical).hexdigest()[:12]


def render_report(config: Configuration, result: ProjectionResult, scenario_path: str | None = None) -> str:
    payload = _report_payload(config, result)

    source = Path(scenario_path).name if scenario_path is not None else "built-in"
    distribution = "distributing" if config.is_distributing else "retaining"
    timestamp = datetime.now(UTC).isoformat(timespec="seconds")
    subtitle = (
        f"Scenario: {html.escape(source)} | Profit: {html.escape(distribution)} | Years: {config.duration_years} | "
        f"Generated: {timestamp} | Scenario hash: {scenario_hash(config)}"
    )

    return render_html_document(
        title="Fund Savings Plan Report",
        subtitle=subtitle,
        dashboard_cards=_dashboard_cards(result),
        ledger_table=_ledger_table(result),
        scenario_table=_scenario_table(config),
        validation_table=_validation_panel(config),
        payload_json=json.dumps(payload),
    )


def write_report(path: str | Path, content: str) -> None:
    Path(path).write_text(content, encoding="utf-8")
