"""
Result Display

Console rendering of result frames and records.
"""

from typing import Iterable, Optional, Sequence, Union

import pandas as pd

from .config import DisplayConfig
from .ranking import RankedVertex
from .triplets import Triplet

TRUNCATE_WIDTH = 20


def _truncate(value):
    if isinstance(value, str) and len(value) > TRUNCATE_WIDTH:
        return value[: TRUNCATE_WIDTH - 3] + "..."
    return value


def render(
    data: Union[pd.DataFrame, Iterable[Sequence]],
    columns: Optional[Sequence[str]] = None,
    config: Optional[DisplayConfig] = None,
) -> str:
    """Render a frame, or rows with ``columns``, as a text table.

    At most ``config.max_rows`` rows are shown; long strings are cut to
    20 characters when ``config.truncate`` is set.
    """
    config = config or DisplayConfig()
    frame = data if isinstance(data, pd.DataFrame) else pd.DataFrame(list(data), columns=columns)
    if isinstance(data, pd.DataFrame) and columns is not None:
        frame = frame[list(columns)]

    if frame.empty:
        return " ".join(map(str, frame.columns)) + "\n(no rows)"

    shown = frame.head(config.max_rows)
    if config.truncate:
        shown = shown.apply(lambda column: column.map(_truncate))

    text = shown.to_string(index=False)
    if len(frame) > config.max_rows:
        text += f"\nonly showing top {config.max_rows} row(s)"
    return text


def show(
    data: Union[pd.DataFrame, Iterable[Sequence]],
    columns: Optional[Sequence[str]] = None,
    config: Optional[DisplayConfig] = None,
) -> None:
    print(render(data, columns, config))


def describe_vertex(name, age) -> str:
    return f"{name} is {age} years old"


def describe_triplet(triplet: Triplet) -> str:
    return f"{triplet.src_name} sent {triplet.relationship} likes to {triplet.dst_name}"


def describe_rank(vertex: RankedVertex) -> str:
    return f"{vertex.name}: {vertex.pagerank:.6f}"
