"""Code point selectors passed to the conversion tools.

The tools accept a code point filter either as one inclusive range or as an
explicit list. A selector knows how to render itself; the tool decides the
separators, since the rasterizer and the packer disagree on them.
"""

from dataclasses import dataclass

from glyphpack.domain.charset import CodePointSet


class CodePointSelector:
    """Base for code point filters rendered into a single tool argument."""

    def render(self, *, list_separator: str, range_separator: str) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class RangeSelector(CodePointSelector):
    """Inclusive range of code points.

    Attributes:
        low: First code point
        high: Last code point
    """

    low: int
    high: int

    def __post_init__(self) -> None:
        if self.low < 0 or self.high < self.low:
            raise ValueError(f"Invalid code point range {self.low}-{self.high}")

    def render(self, *, list_separator: str, range_separator: str) -> str:  # noqa: ARG002
        return f"{self.low}{range_separator}{self.high}"


@dataclass(frozen=True)
class ExplicitSelector(CodePointSelector):
    """Explicit list of individual code points, in ascending order.

    Attributes:
        code_points: Resolved code point set
    """

    code_points: CodePointSet

    def render(self, *, list_separator: str, range_separator: str) -> str:  # noqa: ARG002
        return list_separator.join(str(value) for value in self.code_points)


def selector_for(
    code_points: CodePointSet | None,
    default_range: tuple[int, int],
) -> CodePointSelector:
    """Pick the selector for a stage.

    Args:
        code_points: Resolved selection, or None when the caller gave none
        default_range: Inclusive range used when there is no selection

    Returns:
        ExplicitSelector when a selection was resolved, RangeSelector otherwise
    """
    if code_points is not None:
        return ExplicitSelector(code_points)
    low, high = default_range
    return RangeSelector(low, high)
