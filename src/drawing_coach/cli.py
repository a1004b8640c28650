from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from drawing_coach.assessment import PixelBuffer, color_difference, parse_path
from drawing_coach.config import load_settings
from drawing_coach.content import index_exercises, load_exercises, load_stroke_data
from drawing_coach.data_models import Rgb
from drawing_coach.errors import AssessmentError
from drawing_coach.system import DrawingCoach

app = typer.Typer(help="Score children's drawing attempts against exercise content.")
console = Console()

load_dotenv(override=False)


def _parse_rgb(value: str) -> Rgb:
    """Parse an `R,G,B` triple."""
    try:
        r, g, b = (int(part) for part in value.split(","))
        return Rgb(r=r, g=g, b=b)
    except ValueError as exc:
        raise typer.BadParameter(f"Expected R,G,B with 0-255 channels, got {value!r}") from exc


def _format_value(value: object) -> str:
    if isinstance(value, float):
        return "∞" if math.isinf(value) else f"{value:.1f}"
    if isinstance(value, list):
        return ", ".join(str(item) for item in value) or "-"
    return "-" if value is None else str(value)


@app.command()
def assess(
    exercises: Path = typer.Argument(..., exists=True, dir_okay=False, help="Exercise YAML/JSON."),
    strokes: Path = typer.Argument(..., exists=True, dir_okay=False, help="Stroke data JSON."),
    exercise_id: Optional[str] = typer.Option(None, help="Exercise to score when the file holds several."),
    snapshot: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="Canvas PNG for color exercises."),
    config: Optional[Path] = typer.Option(None, help="Path to configuration YAML."),
    as_json: bool = typer.Option(False, "--json", help="Print the assessment as JSON."),
):
    """
    Score one attempt and print its metrics.

    Loads the exercise catalogue via `load_exercises`, the captured strokes via
    `load_stroke_data` and, for color exercises, the canvas snapshot through
    Pillow, then runs `DrawingCoach.assess` and renders the result.
    """
    try:
        coach = DrawingCoach(load_settings(config))
        catalogue = index_exercises(load_exercises(exercises))
        if exercise_id is None:
            if len(catalogue) != 1:
                raise typer.BadParameter(
                    "--exercise-id is required; choose from: " + ", ".join(catalogue)
                )
            exercise = next(iter(catalogue.values()))
        elif exercise_id in catalogue:
            exercise = catalogue[exercise_id]
        else:
            raise typer.BadParameter(f"Unknown exercise id {exercise_id!r}")

        stroke_data = load_stroke_data(strokes)
        buffer = PixelBuffer.open(snapshot) if snapshot else None
        result = coach.assess(exercise, stroke_data, buffer)
    except AssessmentError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from exc

    if as_json:
        typer.echo(result.model_dump_json(by_alias=True, indent=2))
        return

    status = "[green]passed[/green]" if result.passed else "[yellow]not yet[/yellow]"
    console.print(f"[bold]{exercise.title or exercise.id}[/bold]: {result.score}/100 ({status})")

    table = Table(title="Metrics")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    for name, value in result.metrics.model_dump(exclude={"kind", "region_scores"}).items():
        table.add_row(name.replace("_", " "), _format_value(value))
    console.print(table)

    region_scores = getattr(result.metrics, "region_scores", [])
    if region_scores:
        regions = Table(title="Regions")
        for column in ("Region", "Score", "Coverage", "Delta-E"):
            regions.add_column(column)
        for region in region_scores:
            regions.add_row(
                region.region_id,
                str(region.score),
                f"{region.coverage}%",
                _format_value(region.delta_e),
            )
        console.print(regions)

    console.print(f"\n{result.feedback.encouragement}")
    for tip in result.feedback.improvement_tips:
        console.print(f"- {tip}")


@app.command("delta-e")
def delta_e(
    first: str = typer.Argument(..., help="First color as R,G,B."),
    second: str = typer.Argument(..., help="Second color as R,G,B."),
):
    """Print the CIEDE2000 difference between two sRGB colors."""
    console.print(f"{color_difference(_parse_rgb(first), _parse_rgb(second)):.4f}")


@app.command("parse-path")
def parse_path_command(
    path_data: str = typer.Argument(..., help="SVG path data, e.g. 'M 0 0 Q 5 10 10 0'."),
    segments: int = typer.Option(10, min=1, help="Line segments per Bezier curve."),
):
    """Print the points an SVG path is sampled into."""
    points = parse_path(path_data, segments)
    typer.echo(json.dumps([{"x": p.x, "y": p.y} for p in points]))


if __name__ == "__main__":
    app()
