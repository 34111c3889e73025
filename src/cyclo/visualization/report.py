"""Generate the treemap HTML page.

The page expects a global ``jsondata`` (see
:func:`cyclo.visualization.treemap.render_treemap_script`) and draws it
with plotly.js. :func:`generate_report` inlines the data so the file can
be opened from any local path; the live server serves the same page with
the data loaded from ``/scripts/cyclo.js``.
"""

import html
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Optional

from ..config import ColorScheme
from .treemap import build_plotly_trace, render_treemap_script

if TYPE_CHECKING:
    from ..api import AnalysisResult

PLOTLY_CDN = "https://cdn.plot.ly/plotly-2.35.2.min.js"


def generate_report(
    result: "AnalysisResult",
    output_path: str = "cyclo-report.html",
    scheme: Optional[ColorScheme] = None,
) -> str:
    """Write a standalone HTML treemap for *result*.

    Returns
    -------
    str
        Absolute path to the generated HTML file.
    """
    trace = build_plotly_trace(result.tree, scheme)
    page = render_page(result.summary(), inline_script=render_treemap_script(trace))

    out = Path(output_path).resolve()
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(page, encoding="utf-8")
    return str(out)


def render_page(
    summary: Dict[str, Any],
    script_src: Optional[str] = None,
    inline_script: Optional[str] = None,
) -> str:
    """Build the page around either an external data script or inline data."""
    if script_src is not None:
        data_tag = f'<script src="{html.escape(script_src)}"></script>'
    else:
        body = (inline_script or "var jsondata = [];").replace("</", "<\\/")
        data_tag = f"<script>\n{body}\n</script>"

    stats = "".join(
        f'<div class="stat"><div class="stat-value">{html.escape(str(value))}</div>'
        f'<div class="stat-label">{html.escape(label)}</div></div>'
        for label, value in (
            ("files", summary.get("file_count", 0)),
            ("directories", summary.get("directory_count", 0)),
            ("nloc", summary.get("total_nloc", 0)),
            ("mean CC", f"{summary.get('mean_complexity', 0.0):.2f}"),
            ("skipped", summary.get("skipped", 0)),
        )
    )
    root = html.escape(str(summary.get("root", "")))

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>cyclo - {root}</title>
<style>
* {{ margin: 0; padding: 0; box-sizing: border-box; }}
body {{ font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif; background: #0d1117; color: #c9d1d9; }}
#header {{ padding: 24px 32px; border-bottom: 1px solid #21262d; }}
#header h1 {{ font-size: 24px; color: #58a6ff; margin-bottom: 8px; }}
#root {{ font-size: 13px; color: #8b949e; margin-bottom: 12px; }}
#summary {{ display: flex; gap: 24px; font-size: 14px; color: #8b949e; flex-wrap: wrap; }}
.stat {{ background: #161b22; padding: 8px 16px; border-radius: 6px; border: 1px solid #21262d; }}
.stat-value {{ font-size: 20px; font-weight: 600; color: #c9d1d9; }}
.stat-label {{ font-size: 12px; text-transform: uppercase; letter-spacing: 0.5px; }}
#treemap {{ margin: 24px 32px; height: 75vh; }}
#empty {{ margin: 48px 32px; color: #8b949e; }}
footer {{ padding: 24px 32px; text-align: center; color: #484f58; font-size: 12px; border-top: 1px solid #21262d; }}
</style>
<script src="{PLOTLY_CDN}"></script>
{data_tag}
</head>
<body>
<div id="header">
  <h1>Cyclomatic complexity</h1>
  <div id="root">{root}</div>
  <div id="summary">{stats}</div>
</div>
<div id="treemap"></div>
<footer>Box size: lines of code. Box color: mean cyclomatic complexity.</footer>
<script>
(function () {{
  var el = document.getElementById("treemap");
  if (typeof jsondata === "undefined" || !jsondata.length || !jsondata[0].ids.length) {{
    el.outerHTML = '<div id="empty">Nothing to analyze.</div>';
    return;
  }}
  Plotly.newPlot(el, jsondata, {{
    margin: {{t: 0, l: 0, r: 0, b: 0}},
    paper_bgcolor: "#0d1117",
    font: {{color: "#c9d1d9"}}
  }}, {{responsive: true}});
}})();
</script>
</body>
</html>"""
