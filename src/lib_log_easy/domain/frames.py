"""Immutable description of a single captured stack frame."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class FrameDescriptor:
    """One frame of a captured call stack, newest frame first.

    Attributes
    ----------
    index:
        Position in the unfiltered capture (``0`` is the newest frame). Kept
        unchanged when frames are filtered out around it.
    text:
        Human-readable description used when rendering the frame.
    has_source_line:
        ``True`` when :attr:`lineno` resolves to a real source line.
    qualified_name:
        ``module.function`` used for exclusion-pattern matching.
    filename, lineno, function:
        Source location of the frame.
    """

    index: int
    text: str
    has_source_line: bool
    qualified_name: str = ""
    filename: str = ""
    lineno: int = 0
    function: str = ""

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError("index must not be negative")

    @classmethod
    def describe(cls, index: int, *, module: str, function: str, filename: str, lineno: int | None) -> "FrameDescriptor":
        """Build a descriptor rendered like a Python traceback line.

        Examples
        --------
        >>> frame = FrameDescriptor.describe(0, module="pkg.mod", function="run", filename="mod.py", lineno=3)
        >>> frame.text
        'File "mod.py", line 3, in run'
        >>> frame.qualified_name
        'pkg.mod.run'
        """

        line = lineno or 0
        return cls(
            index=index,
            text=f'File "{filename}", line {line}, in {function}',
            has_source_line=line > 0,
            qualified_name=f"{module}.{function}" if module else function,
            filename=filename,
            lineno=line,
            function=function,
        )


__all__ = ["FrameDescriptor"]
