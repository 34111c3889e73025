"""Treemap web server for cyclo.

Needs the optional ``[serve]`` extra::

    pip install 'cyclo[serve]'
"""

from __future__ import annotations

from importlib.util import find_spec

# import name -> requirement, matching setup.py's "serve" extra
SERVE_REQUIREMENTS = {
    "starlette": "starlette>=0.27.0",
    "uvicorn": "uvicorn>=0.23.0",
}


def missing_serve_deps() -> list[str]:
    """Requirements from the ``[serve]`` extra that aren't importable."""
    return [req for name, req in SERVE_REQUIREMENTS.items() if find_spec(name) is None]


def check_serve_deps() -> None:
    """Raise ImportError naming whatever ``cyclo serve`` is missing."""
    missing = missing_serve_deps()
    if missing:
        raise ImportError(
            f"cyclo serve needs {', '.join(missing)}. Install with: pip install 'cyclo[serve]'"
        )
