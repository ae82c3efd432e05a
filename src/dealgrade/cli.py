from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from loguru import logger

from dealgrade.adapters.property_data import normalize_similar_homes
from dealgrade.analysis.formatting import format_currency, format_number, format_percent
from dealgrade.services.deal_analyzer import analyze_deal

app = typer.Typer(help="Score a rental / flip deal from its numbers.")


@app.callback()
def main() -> None:
    """
    dealgrade deal scoring tools.
    """


def _read_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"{path} is not valid JSON: {exc}") from exc


def _print_summary(result: dict) -> None:
    m = result["metrics"]
    rec = result["recommendation"]

    typer.echo(f"{rec['recommendation']}  (score {rec['score']}, confidence {rec['confidence']})")
    typer.echo("")
    typer.echo(f"  ARV                    {format_currency(m['arv'])}")
    typer.echo(f"  Max investment (70%)   {format_currency(m['max_total_investment'])}")
    typer.echo(f"  Total investment       {format_currency(m['total_investment'])}")
    typer.echo(f"  Monthly cash flow      {format_currency(m['monthly_cash_flow'])}")
    typer.echo(f"  Cash-on-cash return    {format_percent(m['cash_on_cash_return'])}")
    typer.echo(f"  Cap rate               {format_percent(m['cap_rate'])}")
    typer.echo(f"  DSCR                   {format_number(m['debt_service_coverage_ratio'])}")
    typer.echo(f"  LTV                    {format_percent(m['ltv_ratio'])}")
    typer.echo(f"  Total ROI              {format_percent(m['total_roi'])}")

    for reason in rec["reasons"]:
        typer.echo(f"  + {reason}")
    for warning in rec["warnings"]:
        typer.echo(f"  - {warning}")

    comps = result.get("comparables") or {}
    for insight in comps.get("market_insights") or []:
        typer.echo(f"  * {insight}")


@app.command("analyze")
def analyze_cmd(
    inputs_path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Deal form as JSON"),
    comparables: Optional[Path] = typer.Option(
        None,
        "--comparables",
        exists=True,
        dir_okay=False,
        help="Similar homes JSON (list or {'similarHomes': [...]})",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the full result as JSON"),
) -> None:
    """
    Compute metrics and a buy/avoid recommendation for one deal.
    """
    raw_inputs = _read_json(inputs_path)
    if not isinstance(raw_inputs, dict):
        raise typer.BadParameter("inputs file must contain a JSON object")

    homes = None
    if comparables is not None:
        homes = normalize_similar_homes(_read_json(comparables))
        logger.info("Loaded comparables", path=str(comparables), count=len(homes))

    result = analyze_deal(raw_inputs, comparables=homes)

    if as_json:
        typer.echo(json.dumps(result, indent=2))
    else:
        _print_summary(result)


if __name__ == "__main__":
    app()
