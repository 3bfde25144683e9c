import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Rectangle


def _column(rows, key):
    return np.array([int(r[key]) for r in rows], dtype=np.int64)


def show_presses_histogram(rows, ax=None, color="tab:blue"):
    """
    Histogram of the minimum press count per machine.

    Parameters
    ----------
    rows : iterable[dict]
        Report rows as produced by the runner (or read back from its CSV).
    """
    presses = _column(rows, "presses")
    if ax is None:
        _, ax = plt.subplots(figsize=(5.0, 3.5))
    top = int(presses.max()) if presses.size else 0
    bins = np.arange(-0.5, top + 1.5, 1.0)
    ax.hist(presses, bins=bins, color=color, edgecolor="black")
    ax.set_xlabel("min presses")
    ax.set_ylabel("machines")
    ax.set_title(f"Total presses: {int(presses.sum()):,}")
    return ax


def show_nullity_scatter(rows, ax=None, cmap="viridis"):
    """
    Nullity (free buttons) vs. min presses, colored by button count.
    Large nullities are where the exhaustive search gets expensive.
    """
    nullity = _column(rows, "nullity")
    presses = _column(rows, "presses")
    m = _column(rows, "m")
    if ax is None:
        _, ax = plt.subplots(figsize=(5.0, 3.5))
    sc = ax.scatter(nullity, presses, c=m, cmap=cmap, s=18, alpha=0.8)
    ax.set_xlabel("nullity k")
    ax.set_ylabel("min presses")
    plt.colorbar(sc, ax=ax, fraction=0.046, pad=0.04, label="buttons m")
    return ax


def show_machine_solution(
    machine, solution, ax=None, pressed_color="red", cmap="Greys"
):
    """
    Show the incidence matrix A (lights x buttons) of one machine with the
    pressed buttons outlined and the target pattern as the last column.
    """
    solution = np.asarray(solution).reshape(-1)
    A = machine.A
    grid = np.concatenate([A, machine.target.reshape(-1, 1)], axis=1)
    if ax is None:
        h, w = grid.shape
        _, ax = plt.subplots(figsize=(0.5 * w + 1.5, 0.5 * h + 1.5))
    ax.imshow(grid, cmap=cmap, vmin=0, vmax=1, aspect="auto")
    for j in np.flatnonzero(solution):
        ax.add_patch(
            Rectangle(
                (j - 0.5, -0.5),
                1,
                max(machine.n, 1),
                edgecolor=pressed_color,
                facecolor="none",
                linewidth=2,
            )
        )
    ax.axvline(machine.m - 0.5, color="black", linewidth=1)
    ax.set_xticks(range(grid.shape[1]))
    ax.set_xticklabels([str(j) for j in range(machine.m)] + ["t"])
    ax.set_yticks(range(machine.n))
    ax.set_xlabel("button")
    ax.set_ylabel("light")
    ax.set_title(f"{int(solution.sum())} presses")
    return ax
