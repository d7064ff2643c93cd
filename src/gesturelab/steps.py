"""Processing step registry for analyzers.

Analyzer methods decorated with ``@processing_step`` are discoverable
(``get_processing_steps``) and, while the analyzer has a
``_step_timings`` dict, report their wall time in milliseconds.
"""

from dataclasses import dataclass, field
from functools import wraps
from typing import Optional, List
import time


@dataclass
class ProcessingStep:
    """One internal step of an analyzer.

    Attributes:
        name: Short identifier (e.g. "hand_detection").
        description: What the step does.
        backend: Library doing the work, if any.
        depends_on: Names of steps that must run first.
        method_name: Name of the implementing method.
    """

    name: str
    description: str
    backend: Optional[str] = None
    depends_on: List[str] = field(default_factory=list)
    method_name: Optional[str] = None

    def __str__(self) -> str:
        backend_str = f" ({self.backend})" if self.backend else ""
        return f"{self.name}: {self.description}{backend_str}"


def processing_step(
    name: str,
    description: str = "",
    backend: Optional[str] = None,
    depends_on: Optional[List[str]] = None,
):
    """Register a method as a processing step and time it.

    Example:
        class GestureAnalyzer:
            @processing_step("hand_detection", backend="MediaPipe")
            def _detect_hands(self, image):
                return self._hand_backend.detect(image)
    """

    def decorator(func):
        step_info = ProcessingStep(
            name=name,
            description=description or (func.__doc__ or "").strip(),
            backend=backend,
            depends_on=list(depends_on or []),
            method_name=func.__name__,
        )

        @wraps(func)
        def wrapper(self, *args, **kwargs):
            timings = getattr(self, "_step_timings", None)
            if timings is None:
                return func(self, *args, **kwargs)
            start = time.perf_counter_ns()
            result = func(self, *args, **kwargs)
            timings[name] = (time.perf_counter_ns() - start) / 1_000_000
            return result

        wrapper._step_info = step_info
        return wrapper

    return decorator


def get_processing_steps(cls_or_instance) -> List[ProcessingStep]:
    """Registered steps of an analyzer class or instance, dependencies first.

    Raises:
        ValueError: If steps depend on each other in a cycle.
    """
    cls = cls_or_instance if isinstance(cls_or_instance, type) else type(cls_or_instance)
    steps = [
        attr._step_info
        for attr in vars(cls).values()
        if callable(attr) and hasattr(attr, "_step_info")
    ]

    by_name = {s.name: s for s in steps}
    ordered: List[ProcessingStep] = []
    done = set()
    visiting = set()

    def visit(step: ProcessingStep) -> None:
        if step.name in done:
            return
        if step.name in visiting:
            raise ValueError(f"Circular dependency detected involving {step.name}")
        visiting.add(step.name)
        for dep in step.depends_on:
            if dep in by_name:
                visit(by_name[dep])
        visiting.discard(step.name)
        done.add(step.name)
        ordered.append(step)

    for step in steps:
        visit(step)
    return ordered


__all__ = ["ProcessingStep", "processing_step", "get_processing_steps"]
