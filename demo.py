"""
AVL Tree Demo — Rotation cases, deletion rebalancing, and height growth.

Generates:
- viz/*.png — Individual visualization files
- report.pdf — Comprehensive PDF report
"""

import logging
from collections import Counter
from pathlib import Path

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages

from avltree.avl_tree import AVLTree
from avltree.binary_search_tree import BinarySearchTree

SEED = 42
np.random.seed(SEED)

VIZ_DIR = Path(__file__).parent / "viz"
VIZ_DIR.mkdir(exist_ok=True)


class RotationCounter(logging.Handler):
    """Tallies the rotation records the balancer logs at DEBUG."""

    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.counts = Counter()

    def emit(self, record):
        message = record.getMessage()
        if " rotation at " in message:
            self.counts[message.split(" rotation at ")[0]] += 1


def count_rotations(keys):
    balancer_logger = logging.getLogger("avltree.balancing")
    counter = RotationCounter()
    previous_level = balancer_logger.level
    balancer_logger.addHandler(counter)
    balancer_logger.setLevel(logging.DEBUG)
    try:
        tree = AVLTree(keys)
    finally:
        balancer_logger.removeHandler(counter)
        balancer_logger.setLevel(previous_level)
    return tree, counter.counts


def draw_tree(ax, tree, title):
    """Plot nodes at (in-order index, -depth) with edges to their children."""
    ax.set_title(title)
    ax.axis("off")
    if tree.root is None:
        return
    x_of = {key: i for i, key in enumerate(tree.in_order())}
    stack = [(tree.root, 0)]
    while stack:
        node, depth = stack.pop()
        x, y = x_of[node.key], -depth
        for child in (node.left, node.right):
            if child is not None:
                ax.plot([x, x_of[child.key]], [y, y - 1], color="gray", linewidth=1, zorder=1)
                stack.append((child, depth + 1))
        ax.scatter([x], [y], s=600, color="steelblue", zorder=2)
        ax.annotate(str(node.key), (x, y), ha="center", va="center",
                    color="white", fontsize=9, zorder=3)
    ax.set_xlim(-1, len(x_of))
    ax.set_ylim(-tree.height(), 1)


def example_1_rotation_cases():
    """The four insertion cases, each fixed into the same shape."""
    print("=" * 60)
    print("Example 1: Insertion Rotation Cases")
    print("=" * 60)

    cases = {
        "RR (single left)": [10, 20, 30],
        "LL (single right)": [30, 20, 10],
        "LR (left-right)": [30, 10, 20],
        "RL (right-left)": [10, 30, 20],
    }

    fig, axes = plt.subplots(1, 4, figsize=(16, 4))
    for ax, (name, keys) in zip(axes, cases.items()):
        tree, counts = count_rotations(keys)
        print(f"\n{name}: insert {keys} -> rotations {dict(counts)}")
        print(tree.render())
        draw_tree(ax, tree, f"{name}\ninsert {keys}")

    fig.tight_layout()
    fig.savefig(VIZ_DIR / "01_rotation_cases.png", dpi=150)
    return fig


def example_2_deletion_walk():
    """Removal that needs rotations on two levels of the walk to the root."""
    print("\n" + "=" * 60)
    print("Example 2: Deletion Rebalancing Walk")
    print("=" * 60)

    keys = [8, 5, 11, 3, 6, 10, 12, 2, 4, 7, 9, 1]
    tree = AVLTree(keys)
    print(f"\nBefore removing 12 (height {tree.height()}):")
    print(tree.render())

    fig, axes = plt.subplots(1, 2, figsize=(14, 5))
    draw_tree(axes[0], tree, f"Before remove(12), height {tree.height()}")

    tree.remove(12)
    tree.validate()
    print(f"\nAfter removing 12 (height {tree.height()}):")
    print(tree.render())
    draw_tree(axes[1], tree, f"After remove(12), height {tree.height()}")

    fig.tight_layout()
    fig.savefig(VIZ_DIR / "02_deletion_walk.png", dpi=150)
    return fig


def example_3_height_growth():
    """AVL height against a plain BST and the AVL worst-case bound."""
    print("\n" + "=" * 60)
    print("Example 3: Height Growth")
    print("=" * 60)

    sizes = np.unique(np.logspace(1, 4, 12).astype(int))
    avl_sorted, avl_random, bst_random = [], [], []

    for n in sizes:
        permutation = np.random.permutation(n).tolist()
        avl_sorted.append(AVLTree(range(n)).height())
        avl_random.append(AVLTree(permutation).height())
        bst_random.append(BinarySearchTree(permutation).height())
        print(f"n={n:>6}  AVL sorted={avl_sorted[-1]:>3}  "
              f"AVL random={avl_random[-1]:>3}  BST random={bst_random[-1]:>3}")

    bound = 1.44 * np.log2(sizes + 2)
    optimal = np.ceil(np.log2(sizes + 1))

    fig, ax = plt.subplots(figsize=(9, 6))
    ax.plot(sizes, bst_random, "o-", color="gray", label="Plain BST, random order")
    ax.plot(sizes, avl_random, "s-", color="steelblue", label="AVL, random order")
    ax.plot(sizes, avl_sorted, "^-", color="darkorange", label="AVL, sorted order")
    ax.plot(sizes, bound, "r--", label="1.44 log2(n + 2)")
    ax.plot(sizes, optimal, "g:", label="ceil(log2(n + 1))")
    ax.set_xscale("log")
    ax.set_xlabel("Number of keys")
    ax.set_ylabel("Tree height")
    ax.set_title("Tree Height vs. Size")
    ax.legend()
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "03_height_growth.png", dpi=150)
    return fig


def example_4_rotation_mix():
    """Which rotation cases fire for sorted, reversed and random input."""
    print("\n" + "=" * 60)
    print("Example 4: Rotation Mix by Insertion Order")
    print("=" * 60)

    n = 2000
    orders = {
        "sorted": list(range(n)),
        "reversed": list(range(n, 0, -1)),
        "random": np.random.permutation(n).tolist(),
    }
    labels = ["left", "right", "left-right", "right-left"]

    fig, ax = plt.subplots(figsize=(9, 6))
    width = 0.25
    positions = np.arange(len(labels))
    for offset, (name, keys) in enumerate(orders.items()):
        _, counts = count_rotations(keys)
        values = [counts[label] for label in labels]
        print(f"{name:>8}: " + ", ".join(f"{l}={v}" for l, v in zip(labels, values)))
        ax.bar(positions + (offset - 1) * width, values, width, label=name)

    ax.set_xticks(positions)
    ax.set_xticklabels(labels)
    ax.set_ylabel("Rotations")
    ax.set_title(f"Rotation Cases During {n} Inserts")
    ax.legend()
    ax.grid(True, axis="y", alpha=0.3)
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "04_rotation_mix.png", dpi=150)
    return fig


def generate_pdf_report(figures):
    pdf_path = Path(__file__).parent / "report.pdf"
    with PdfPages(pdf_path) as pdf:
        for _, fig in figures:
            pdf.savefig(fig)
            plt.close(fig)
    print(f"PDF report saved to: {pdf_path}")
    return pdf_path


def main():
    print("\n" + "#" * 60)
    print("#" + " " * 23 + "AVL TREE DEMO" + " " * 22 + "#")
    print("#" * 60)
    print(f"\nRandom seed: {SEED}")
    print(f"Output directory: {VIZ_DIR}")

    figures = [
        ("Example 1: Rotation Cases", example_1_rotation_cases()),
        ("Example 2: Deletion Walk", example_2_deletion_walk()),
        ("Example 3: Height Growth", example_3_height_growth()),
        ("Example 4: Rotation Mix", example_4_rotation_mix()),
    ]

    generate_pdf_report(figures)

    print("\n" + "=" * 60)
    print("DEMO COMPLETE")
    print("=" * 60)
    print(f"\nGenerated files:")
    for f in sorted(VIZ_DIR.glob("*.png")):
        print(f"  - {f.relative_to(VIZ_DIR.parent)}")
    print(f"  - report.pdf")


if __name__ == "__main__":
    main()
