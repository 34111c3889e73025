"""Shared test fixtures for cyclo."""

import logging
from pathlib import Path

import pytest

from cyclo.config import CycloConfig

SIMPLE_C = """\
#include <stdio.h>

/* entry point */
int main(int argc, char **argv) {
    if (argc > 1 && argv[1][0] == '-') {
        return 1;
    }
    for (int i = 0; i < argc; i++) {
        printf("%s\\n", argv[i]);   // echo
    }
    return 0;
}
"""

SWITCH_CPP = """\
int classify(int x) {
    switch (x) {
        case 1: return 10;
        case 2: return 20;
        default: break;
    }
    try {
        risky();
    } catch (const std::exception &e) {
        while (retry() || fallback()) {}
    }
    return 0;
}
"""


def write_tree(root: Path, files: dict) -> Path:
    """Create ``files`` (relative path -> text or bytes) under ``root``."""
    for rel, content in files.items():
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            target.write_bytes(content)
        else:
            target.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def config():
    """Default configuration with sequential scanning."""
    return CycloConfig(parallel_threshold=1000)


@pytest.fixture
def c_project(tmp_path):
    """Small C/C++ project with nested directories and non-source noise."""
    return write_tree(
        tmp_path / "project",
        {
            "main.c": SIMPLE_C,
            "lib/switch.cpp": SWITCH_CPP,
            "lib/empty.cc": "",
            "lib/util/math.cxx": "int add(int a, int b) { return a + b; }\n",
            "README.md": "if for while",
            "include/api.h": "int api(void);\n",
            ".git/hooks/hook.c": "if (x) {}\n",
        },
    )


@pytest.fixture
def make_tree(tmp_path):
    """Factory: ``make_tree({"a/b.c": "..."})`` writes files under a fresh root."""

    def _make(files: dict, name: str = "src") -> Path:
        return write_tree(tmp_path / name, files)

    return _make


@pytest.fixture
def simple_c():
    return SIMPLE_C


@pytest.fixture
def switch_cpp():
    return SWITCH_CPP


@pytest.fixture(autouse=True)
def reset_cyclo_logger():
    """Undo handlers that setup_logging() attached during a test."""
    logger = logging.getLogger("cyclo")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        if handler not in saved[0]:
            handler.close()
    for handler in saved[0]:
        logger.addHandler(handler)
    logger.setLevel(saved[1])
    logger.propagate = saved[2]
