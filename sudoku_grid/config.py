from __future__ import annotations
import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

DEFAULT_MAX_STEPS = 20_000_000  # upper bound on fill-step calls per solve

ENV_MAX_STEPS = "SUDOKU_MAX_STEPS"
ENV_SEED = "SUDOKU_SEED"


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class SolverConfig:
    max_steps: int = DEFAULT_MAX_STEPS
    seed: Optional[int] = None

    def __post_init__(self):
        if self.max_steps <= 0:
            raise ValueError(f"max_steps must be positive, got {self.max_steps}")

    @staticmethod
    def from_env(environ: Optional[Mapping[str, str]] = None) -> "SolverConfig":
        env = os.environ if environ is None else environ
        max_steps = DEFAULT_MAX_STEPS
        seed = None
        if env.get(ENV_MAX_STEPS, "").strip():
            max_steps = _parse_int(ENV_MAX_STEPS, env[ENV_MAX_STEPS].strip())
        if env.get(ENV_SEED, "").strip():
            seed = _parse_int(ENV_SEED, env[ENV_SEED].strip())
        return SolverConfig(max_steps=max_steps, seed=seed)

    def with_overrides(self, max_steps: Optional[int] = None, seed: Optional[int] = None) -> "SolverConfig":
        """Return a copy with any non-None argument replacing the current value."""
        changes = {}
        if max_steps is not None:
            changes["max_steps"] = max_steps
        if seed is not None:
            changes["seed"] = seed
        return replace(self, **changes) if changes else self
