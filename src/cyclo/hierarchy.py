"""Hierarchy aggregator: fold per-file metrics up into a directory tree.

Every node is keyed by its root-relative path id; the root's id is the
empty string. Directory nodes are computed in post-order (deepest first),
so by the time a directory is folded all of its children exist:

    value = sum(child.value)
    color = sum(child.value * child.color) / sum(child.value)

Children with ``value == 0`` carry no weight. A directory whose children
are all zero-sized gets ``color = 0.0``. Sums use :func:`math.fsum`, so
the result does not depend on the order files were scanned in.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Iterable, Iterator, Mapping, Optional

from .exceptions import EmptyInputError, MalformedPathError
from .logging_config import get_logger
from .scanning.metrics import FileMetrics

logger = get_logger(__name__)

ROOT_ID = ""


@dataclass(frozen=True)
class TreeNode:
    """One box in the treemap.

    Attributes:
        id: Root-relative posix path (``""`` for the root)
        parent_id: Id of the containing directory, None for the root
        label: Display name (last path component, or the root label)
        value: Size (NLOC); additive
        color: Heat (mean complexity); size-weighted for directories
        is_file: True for leaves built from a FileMetrics record
    """

    id: str
    parent_id: Optional[str]
    label: str
    value: int
    color: float
    is_file: bool = False

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    @property
    def depth(self) -> int:
        return _depth(self.id)


class MetricsTree:
    """Immutable result of :func:`build_tree`.

    Iterating yields nodes in pre-order (parents before children,
    siblings sorted by label), so every node's parent has already been
    seen when the node itself comes up.
    """

    def __init__(
        self,
        nodes: Mapping[str, TreeNode],
        children: Mapping[str, list[str]],
        anomalies: Optional[list[MalformedPathError]] = None,
    ) -> None:
        self._nodes = dict(nodes)
        self._children = {k: list(v) for k, v in children.items()}
        self.anomalies: list[MalformedPathError] = list(anomalies or [])
        self._order = list(self._walk(ROOT_ID))

    def _walk(self, node_id: str) -> Iterator[str]:
        stack = [node_id]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(self._children.get(current, [])))

    @property
    def root(self) -> TreeNode:
        return self._nodes[ROOT_ID]

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[TreeNode]:
        return (self._nodes[i] for i in self._order)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def get(self, node_id: str) -> TreeNode:
        """Node by id; raises KeyError if absent."""
        return self._nodes[node_id]

    def children(self, node_id: str) -> list[TreeNode]:
        return [self._nodes[c] for c in self._children.get(node_id, [])]

    def parent(self, node_id: str) -> Optional[TreeNode]:
        parent_id = self._nodes[node_id].parent_id
        return None if parent_id is None else self._nodes[parent_id]

    def files(self) -> list[TreeNode]:
        return [n for n in self if n.is_file]

    def directories(self) -> list[TreeNode]:
        return [n for n in self if not n.is_file]


def _depth(node_id: str) -> int:
    return 0 if node_id == ROOT_ID else node_id.count("/") + 1


def _parent_id(node_id: str) -> str:
    head, sep, _ = node_id.rpartition("/")
    return head if sep else ROOT_ID


def _label(node_id: str) -> str:
    return node_id.rpartition("/")[2]


def _normalize(key: str, root_label: str) -> str:
    """Turn a metrics key into a node id, or raise MalformedPathError."""
    if not key or not key.strip():
        raise MalformedPathError(key, root_label, "empty path")
    path = PurePosixPath(key.replace("\\", "/"))
    if path.is_absolute():
        raise MalformedPathError(key, root_label, "absolute path outside the scan root")
    parts = [p for p in path.parts if p != "."]
    if ".." in parts:
        raise MalformedPathError(key, root_label, "path escapes the scan root")
    if not parts:
        raise MalformedPathError(key, root_label, "path names the root itself")
    return "/".join(parts)


def weighted_color(children: Iterable[TreeNode]) -> float:
    """Size-weighted mean of the children's colors.

    Zero-sized children are ignored; with no weight at all the result is
    0.0. The mean is clamped to the range of the contributing colors so
    float rounding can't push it outside.
    """
    weighted = [(c.value, c.color) for c in children if c.value > 0]
    total = sum(v for v, _ in weighted)
    if total == 0:
        return 0.0
    mean = math.fsum(v * c for v, c in weighted) / total
    lo = min(c for _, c in weighted)
    hi = max(c for _, c in weighted)
    return min(max(mean, lo), hi)


def build_tree(
    metrics: Mapping[str, FileMetrics],
    root_label: str = ".",
    directories: Iterable[str] = (),
) -> MetricsTree:
    """Aggregate per-file metrics into a single tree rooted at the scan root.

    Args:
        metrics: FileMetrics keyed by root-relative posix path
        root_label: Display label for the root node
        directories: Extra root-relative directory paths to include even
            if they hold no files (they aggregate to value 0, color 0.0)

    Returns:
        The aggregated tree. Paths that couldn't be placed under the root
        are listed in ``tree.anomalies`` and left out.

    Raises:
        EmptyInputError: If no file could be placed in the tree
    """
    anomalies: list[MalformedPathError] = []

    def _report(error: MalformedPathError) -> None:
        anomalies.append(error)
        logger.warning(f"Excluding {error.filepath!r}: {error.reason}")

    placed: dict[str, FileMetrics] = {}
    for key in sorted(metrics):
        try:
            node_id = _normalize(key, root_label)
        except MalformedPathError as e:
            _report(e)
            continue
        if node_id in placed:
            _report(MalformedPathError(key, root_label, f"duplicate of {node_id!r}"))
            continue
        placed[node_id] = metrics[key]

    dir_ids = {ROOT_ID}
    for d in directories:
        try:
            dir_id = _normalize(d, root_label)
        except MalformedPathError as e:
            _report(e)
            continue
        while dir_id != ROOT_ID:
            dir_ids.add(dir_id)
            dir_id = _parent_id(dir_id)
    for file_id in placed:
        dir_id = _parent_id(file_id)
        while dir_id != ROOT_ID:
            dir_ids.add(dir_id)
            dir_id = _parent_id(dir_id)

    for file_id in [f for f in placed if f in dir_ids]:
        _report(MalformedPathError(file_id, root_label, "path is both a file and a directory"))
        del placed[file_id]

    if not placed:
        raise EmptyInputError(root_label, "no files could be placed under the scan root")

    children: dict[str, list[str]] = {d: [] for d in dir_ids}
    for node_id in list(dir_ids) + list(placed):
        if node_id != ROOT_ID:
            children[_parent_id(node_id)].append(node_id)
    for ids in children.values():
        ids.sort(key=lambda i: (_label(i), i))

    nodes: dict[str, TreeNode] = {}
    for file_id, fm in placed.items():
        nodes[file_id] = TreeNode(
            id=file_id,
            parent_id=_parent_id(file_id),
            label=_label(file_id),
            value=fm.nloc,
            color=fm.mean_complexity,
            is_file=True,
        )

    for dir_id in sorted(dir_ids, key=lambda d: (-_depth(d), d)):
        kids = [nodes[c] for c in children[dir_id]]
        nodes[dir_id] = TreeNode(
            id=dir_id,
            parent_id=None if dir_id == ROOT_ID else _parent_id(dir_id),
            label=root_label if dir_id == ROOT_ID else _label(dir_id),
            value=sum(k.value for k in kids),
            color=weighted_color(kids),
        )

    logger.debug(
        f"Built tree: {len(placed)} files, {len(dir_ids)} directories, "
        f"{len(anomalies)} anomalies"
    )
    return MetricsTree(nodes, children, anomalies)
