"""Turn a MetricsTree into treemap-ready data.

Three shapes are produced:

* flat records ``{id, parent, label, value, color}``, one per node;
* a plotly ``treemap`` trace (parallel ``ids``/``labels``/``parents``/
  ``values`` arrays plus marker colors);
* a nested d3-style ``{name, children}`` dict.

Box size is NLOC, box color is mean cyclomatic complexity.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..config import ColorScheme
from ..hierarchy import ROOT_ID, MetricsTree, TreeNode


def tree_to_records(tree: MetricsTree) -> List[Dict[str, Any]]:
    """One record per node in pre-order. The root's ``parent`` is ``""``."""
    return [
        {
            "id": node.id,
            "parent": node.parent_id if node.parent_id is not None else "",
            "label": node.label,
            "value": node.value,
            "color": round(node.color, 4),
            "is_file": node.is_file,
        }
        for node in tree
    ]


def _plotly_id(tree: MetricsTree, node: TreeNode) -> str:
    # plotly reserves "" for "no parent", so ids hang off the root label
    root_label = tree.root.label
    return root_label if node.id == ROOT_ID else f"{root_label}/{node.id}"


def build_plotly_trace(tree: MetricsTree, scheme: Optional[ColorScheme] = None) -> Dict[str, Any]:
    """Build a plotly ``treemap`` trace.

    ``branchvalues`` is ``"total"`` because every directory's value is
    already the sum of its children.
    """
    scheme = scheme or ColorScheme()
    nodes = list(tree)

    marker: Dict[str, Any] = {
        "colors": [round(n.color, 2) for n in nodes],
        "colorscale": scheme.name,
        "reversescale": scheme.reverse,
        "showscale": True,
        "colorbar": {"title": {"text": "mean CC"}},
    }
    if scheme.midpoint == "mean":
        marker["cmid"] = round(tree.root.color, 2)

    return {
        "type": "treemap",
        "ids": [_plotly_id(tree, n) for n in nodes],
        "labels": [n.label for n in nodes],
        "parents": ["" if n.parent_id is None else _plotly_id(tree, tree.get(n.parent_id)) for n in nodes],
        "values": [n.value for n in nodes],
        "branchvalues": "total",
        "marker": marker,
        "hovertemplate": "<b>%{id}</b><br>nloc: %{value}<br>mean CC: %{color:.2f}<extra></extra>",
    }


def build_treemap_data(tree: MetricsTree) -> Dict[str, Any]:
    """Convert the tree into nested d3-treemap JSON.

    Structure::

        {
            "name": "project",
            "path": "",
            "value": 160,
            "color": 3.2,
            "children": [
                {"name": "src", "path": "src", "value": 160, "color": 3.2,
                 "children": [
                    {"name": "main.c", "path": "src/main.c", "value": 160, "color": 3.2}
                 ]}
            ]
        }

    Leaves have no ``children`` key.
    """

    def _convert(node: TreeNode) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "name": node.label,
            "path": node.id,
            "value": node.value,
            "color": round(node.color, 4),
        }
        if not node.is_file:
            out["children"] = [_convert(c) for c in tree.children(node.id)]
        return out

    return _convert(tree.root)


def write_treemap_script(
    tree: MetricsTree, output_path: str, scheme: Optional[ColorScheme] = None
) -> str:
    """Write ``var jsondata = [trace];`` for a page that loads plotly.

    Returns the absolute path written.
    """
    trace = build_plotly_trace(tree, scheme)
    out = Path(output_path).resolve()
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(render_treemap_script(trace), encoding="utf-8")
    return str(out)


def render_treemap_script(trace: Dict[str, Any]) -> str:
    return f"var jsondata = [{json.dumps(trace)}];\n"


def write_tree_json(tree: MetricsTree, output_path: str) -> str:
    """Write the flat node records as JSON. Returns the absolute path written."""
    out = Path(output_path).resolve()
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(tree_to_records(tree), indent=2), encoding="utf-8")
    return str(out)
