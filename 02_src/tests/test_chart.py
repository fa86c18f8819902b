"""Tests for chart rendering."""

import json
import re

from latency.chart import CHART_TITLE, render_chart
from latency.models import ChartData, Series


def _chart():
    return ChartData(
        min_timestamp=1_700_000_000_000,
        max_timestamp=1_700_000_050_000,
        series=[
            Series(label="s3 (120ms)", values=[1_700_000_000_000, None, 1_700_000_050_000], latency_ms=120.4),
            Series(label="sqs (30ms)", values=[1_700_000_000_010], latency_ms=30.0),
        ],
    )


class TestRenderChart:
    """Tests for render_chart()."""

    def test_renders_html_page(self):
        """Test that the page loads the chart library and has a title."""
        html = render_chart(_chart())

        assert html.startswith("<!DOCTYPE html>")
        assert "zingchart.min.js" in html
        assert json.dumps(CHART_TITLE) in html

    def test_embeds_axis_bounds(self):
        """Test that min/max become the y-scale bounds."""
        html = render_chart(_chart())

        assert '"min-value": 1700000000000' in html
        assert '"max-value": 1700000050000' in html

    def test_embeds_series_json(self):
        """Test that series are embedded as text/values JSON with null gaps."""
        html = render_chart(_chart())

        match = re.search(r"series: (\[.*\])\n", html)
        assert match is not None
        series = json.loads(match.group(1))
        assert series[0] == {
            "text": "s3 (120ms)",
            "values": [1_700_000_000_000, None, 1_700_000_050_000],
        }
        assert series[1]["text"] == "sqs (30ms)"

    def test_labels_are_escaped_for_script(self):
        """Test that label text cannot close the script tag."""
        chart = ChartData(
            min_timestamp=0,
            max_timestamp=1,
            series=[Series(label="</script>", values=[0], latency_ms=0)],
        )

        html = render_chart(chart)

        assert "</script>\"" not in html
