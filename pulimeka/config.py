from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import numpy as np
import yaml

from pulimeka.ai import Policy, SearchConfig, make_policy
from pulimeka.core import Difficulty, Role


@dataclass
class AIConfig:
    difficulty: Difficulty = Difficulty.HARD
    ai_role: Role = Role.TIGER
    search: SearchConfig = field(default_factory=SearchConfig)
    seed: Optional[int] = None

    def build_policy(self) -> Policy:
        return make_policy(
            self.difficulty,
            self.ai_role,
            rng=np.random.default_rng(self.seed),
            config=self.search,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AIConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown AI config keys: {sorted(unknown)}")

        search_cfg = dict(data.get("search") or {})
        search_known = {f.name for f in fields(SearchConfig)}
        unknown = set(search_cfg) - search_known
        if unknown:
            raise ValueError(f"Unknown search config keys: {sorted(unknown)}")

        role = data.get("ai_role", "tiger")
        if not isinstance(role, Role):
            try:
                role = Role[str(role).upper()]
            except KeyError:
                raise ValueError(f"Unknown AI role: {role!r}") from None
        return cls(
            difficulty=Difficulty(data.get("difficulty", Difficulty.HARD.value)),
            ai_role=role,
            search=SearchConfig(**search_cfg),
            seed=data.get("seed"),
        )


def load_ai_config(path: Union[str, Path]) -> AIConfig:
    cfg = yaml.safe_load(Path(path).read_text()) or {}
    return AIConfig.from_dict(cfg)
