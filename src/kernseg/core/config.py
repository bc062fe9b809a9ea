"""Segmentation configuration."""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Tuple
import math
import numbers

from kernseg.core.data import SegmentationValidationError


@dataclass(frozen=True)
class SegmentationConfig:
    """
    Configuration for kernel segmentation.

    Attributes:
        max_changepoints_per_chromosome: Upper bound K on changepoints per
            chromosome
        kernel_bandwidth: Gaussian kernel variance; 0 selects the linear kernel
        approximation_dimension: Feature dimension D for the kernel
            approximation
        window_sizes: Ascending window sizes for the scan statistics
        linear_penalty_factor: alpha, penalty per changepoint
        log_linear_penalty_factor: beta, scales the c * log(n / c) penalty
        seed: Seed for the random feature basis
        exhaustive_threshold: Chromosomes with at most this many points are
            optimized over every split position; longer ones over windowed
            candidates
        max_candidates: Candidate budget per chromosome for long chromosomes
        num_workers: Worker threads for per-chromosome work (0 = in-process)
    """
    max_changepoints_per_chromosome: int = 100
    kernel_bandwidth: float = 0.0
    approximation_dimension: int = 100
    window_sizes: Tuple[int, ...] = (8, 16, 32, 64, 128, 256)
    linear_penalty_factor: float = 1.0
    log_linear_penalty_factor: float = 1.0
    seed: int = 1
    exhaustive_threshold: int = 5000
    max_candidates: int = 2000
    num_workers: int = 0

    def __post_init__(self):
        """Validate configuration parameters."""
        object.__setattr__(self, "window_sizes", tuple(self.window_sizes))
        problems = _collect_problems(self)
        if problems:
            raise SegmentationValidationError(
                "Invalid segmentation configuration: " + "; ".join(problems)
            )

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict view, e.g. for logging or display."""
        return asdict(self)

    def replace(self, **changes) -> "SegmentationConfig":
        """Copy with some fields changed (re-validated)."""
        values = self.to_dict()
        values.update(changes)
        return SegmentationConfig(**values)


_INTEGER_FIELDS = (
    "max_changepoints_per_chromosome",
    "approximation_dimension",
    "seed",
    "exhaustive_threshold",
    "max_candidates",
    "num_workers",
)


def _is_integer(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _collect_problems(config: SegmentationConfig) -> list:
    problems = []
    non_integer = set()
    for name in _INTEGER_FIELDS:
        value = getattr(config, name)
        if not _is_integer(value):
            non_integer.add(name)
            problems.append(f"{name} ({value!r}) must be an integer")

    if (
        "max_changepoints_per_chromosome" not in non_integer
        and config.max_changepoints_per_chromosome < 0
    ):
        problems.append(
            f"max_changepoints_per_chromosome "
            f"({config.max_changepoints_per_chromosome}) must be >= 0"
        )
    if not math.isfinite(config.kernel_bandwidth) or config.kernel_bandwidth < 0:
        problems.append(
            f"kernel_bandwidth ({config.kernel_bandwidth}) must be finite and >= 0"
        )
    if "approximation_dimension" not in non_integer and config.approximation_dimension <= 0:
        problems.append(
            f"approximation_dimension ({config.approximation_dimension}) "
            f"must be positive"
        )
    if not config.window_sizes:
        problems.append("window_sizes must not be empty")
    elif not all(_is_integer(w) for w in config.window_sizes):
        problems.append(f"window_sizes {list(config.window_sizes)} must be integers")
    elif any(w <= 0 for w in config.window_sizes):
        problems.append(f"window_sizes {list(config.window_sizes)} must be positive")
    elif any(a >= b for a, b in zip(config.window_sizes, config.window_sizes[1:])):
        problems.append(
            f"window_sizes {list(config.window_sizes)} must be strictly ascending"
        )
    for name in ("linear_penalty_factor", "log_linear_penalty_factor"):
        value = getattr(config, name)
        if not math.isfinite(value) or value < 0:
            problems.append(f"{name} ({value}) must be finite and >= 0")
    if "exhaustive_threshold" not in non_integer and config.exhaustive_threshold <= 0:
        problems.append(
            f"exhaustive_threshold ({config.exhaustive_threshold}) must be positive"
        )
    if "max_candidates" not in non_integer and config.max_candidates <= 0:
        problems.append(f"max_candidates ({config.max_candidates}) must be positive")
    if "num_workers" not in non_integer and config.num_workers < 0:
        problems.append(f"num_workers ({config.num_workers}) must be >= 0")
    return problems
