"""Plain text renderings of a grid."""
from .grid import Grid


__all__ = [
    "as_string",
    "as_data",
]


def as_string(grid: Grid) -> str:
    """
    Pretty-prints the component planes of `grid`.

    One block per x, one line per component, one column per y.
    """
    rows, cols = grid.shape
    weights = grid.weights
    lines = ["    " + "".join(f"   {y:02d} " for y in range(cols))]
    lines.append("   " + "-" * (7 * cols))
    for x in range(rows):
        for z in range(grid.input_dim):
            values = "".join(f"{weights[x, y, z].item():6.2f} " for y in range(cols))
            lines.append(f"{x:02d} | {values}")
        lines.append("")
    return "\n".join(lines) + "\n"


def as_data(grid: Grid) -> str:
    """
    Dumps the raw vectors, one cell per line in enumeration order with
    tab-separated components. Suitable as gnuplot input.
    """
    return "".join(
        "".join(f"\t{value:f}" for value in vector) + "\n"
        for vector in grid.flat().tolist()
    )
