"""
Qwinto - Column Groups

The printed sheet staggers its three rows, so cells line up into columns
that span one, two or three rows. A value may appear at most once per
column. The layout comes from the physical sheet and is hardcoded here:

            |  0|  1|  2|   |  3|  4|  5|  6|  7|  8|  Orange
        |  9| 10| 11| 12| 13|   | 14| 15| 16| 17|  Yellow
    | 18| 19| 20| 21|   | 22| 23| 24| 25| 26|  Purple

Cells are numbered row-major: Orange 0-8, Yellow 9-17, Purple 18-26.
"""

from types import MappingProxyType

from qwinto.engine.base import NUM_CELLS, NUM_FIELDS, ROW_DICE, Die


COLUMN_GROUPS: tuple[frozenset[int], ...] = (
    # Singletons
    frozenset({8}),
    frozenset({18}),
    # Pairs
    frozenset({13, 22}),
    frozenset({9, 19}),
    frozenset({2, 12}),
    frozenset({7, 17}),
    frozenset({3, 23}),
    # Triples
    frozenset({0, 10, 20}),
    frozenset({1, 11, 21}),
    frozenset({4, 14, 24}),
    frozenset({5, 15, 25}),
    frozenset({6, 16, 26}),
)

# Completed triple column -> cell whose value is scored as the bonus
BONUS_CELLS: MappingProxyType = MappingProxyType({
    frozenset({0, 10, 20}): 20,
    frozenset({1, 11, 21}): 1,
    frozenset({4, 14, 24}): 4,
    frozenset({5, 15, 25}): 15,
    frozenset({6, 16, 26}): 26,
})


def _build_cell_to_group() -> tuple[int, ...]:
    lookup = [-1] * NUM_CELLS
    for group_id, members in enumerate(COLUMN_GROUPS):
        for cell in members:
            if lookup[cell] != -1:
                raise RuntimeError(f"Cell {cell} belongs to more than one column")
            lookup[cell] = group_id
    missing = [cell for cell, group_id in enumerate(lookup) if group_id == -1]
    if missing:
        raise RuntimeError(f"Cells {missing} belong to no column")
    return tuple(lookup)


CELL_TO_GROUP: tuple[int, ...] = _build_cell_to_group()


def group_of(cell: int) -> frozenset[int]:
    """All cells sharing a column with cell, cell included."""
    return COLUMN_GROUPS[CELL_TO_GROUP[cell]]


def row_of(cell: int) -> int:
    """Row index (0 Orange, 1 Yellow, 2 Purple) of a cell."""
    return cell // NUM_FIELDS


def die_of(cell: int) -> Die:
    """Die color whose roll may be written into cell."""
    return ROW_DICE[row_of(cell)]
