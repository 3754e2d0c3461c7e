"""
Scene context owning the node collection and its transforms.

The context replaces shared module-level state: it holds the node records,
the node count, each node's current Transform, and the precomputed target
LayoutSet. Layout generation and the transition orchestrator receive the
context explicitly.
"""

from __future__ import annotations

import random
from typing import Any, Dict, List, Optional, Sequence

from .compiler import NodeRecord
from .config import MorphConfig
from .enums import LayoutMode
from .layouts import LayoutSet, generate_layouts, scatter_transforms
from .transform import Transform


class SceneContext:
    """
    Node collection with current transforms and layout targets.

    Attributes:
        records: Per-node domain data, index-aligned with node identity
        current: Mutable current Transform of every node
        layouts: Frozen targets for every layout mode
        config: Layout and timing configuration
    """

    def __init__(
        self,
        records: Sequence[Any],
        current: List[Transform],
        layouts: LayoutSet,
        config: MorphConfig | None = None,
    ):
        assert len(current) == len(records), "Every node needs exactly one current transform"
        for mode, targets in layouts.items():
            assert len(targets) == len(records), f"{mode.name} layout has {len(targets)} targets for {len(records)} nodes"
        self.records = list(records)
        self.current = current
        self.layouts = layouts
        self.config = config or MorphConfig()

    @classmethod
    def build(
        cls,
        records: Sequence[Any],
        config: MorphConfig | None = None,
        rng: Optional[random.Random] = None,
    ) -> "SceneContext":
        """
        Generate every layout once and scatter the nodes randomly.

        Args:
            records: Node attribute records (see `morph_core.compiler`)
            config: Layout and timing configuration
            rng: Random source for the initial scatter

        Returns:
            SceneContext: Ready for a first transition
        """
        cfg = (config or MorphConfig()).validate()
        rng = rng or random.Random(cfg.seed)
        layouts = generate_layouts(records, cfg)
        current = scatter_transforms(len(records), rng, cfg)
        return cls(records, current, layouts, cfg)

    @property
    def node_count(self) -> int:
        return len(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def targets(self, mode: LayoutMode | str) -> List[Transform]:
        """Return the frozen targets of a layout mode."""
        return self.layouts[LayoutMode.parse(mode)]

    def current_transform(self, index: int) -> Transform:
        return self.current[index]

    def record(self, index: int) -> Any:
        return self.records[index]

    def snapshot(self) -> Dict[str, Any]:
        """
        Capture every node's current transform.

        Returns:
            dict: {'nodes': [{'index', 'symbol', 'position', 'orientation'}, ...]}
        """
        nodes = []
        for i, t in enumerate(self.current):
            rec = self.records[i]
            entry: Dict[str, Any] = {"index": i}
            if isinstance(rec, NodeRecord):
                entry["symbol"] = rec.symbol
            entry.update(t.as_dict())
            nodes.append(entry)
        return {"nodes": nodes}
