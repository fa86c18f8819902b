"""HTML chart rendering."""

from functools import cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .models import ChartData

TEMPLATES_DIR = Path(__file__).parent / "templates"
CHART_TITLE = "Lambda Event Source Latency"


@cache
def _jinja_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html"]),
    )


def render_chart(chart: ChartData, title: str = CHART_TITLE) -> str:
    """Render a line chart page with one line per backend."""
    template = _jinja_env().get_template("chart.html")
    return template.render(
        title=title,
        min_value=int(chart.min_timestamp),
        max_value=int(chart.max_timestamp),
        series=[series.to_chart() for series in chart.series],
    )
