from typing import Any, List, Optional, Tuple

from avltree.node import Node


def render_lines(node: Optional[Node[Any]], prefix: str = "") -> List[str]:
    """One line per key, children indented under their parent.

    Left children are drawn with a tee and right children with an elbow,
    left before right.
    """
    lines: List[str] = []
    stack: List[Tuple[Optional[Node[Any]], str, bool]] = [(node, prefix, False)]
    while stack:
        current, pad, is_left = stack.pop()
        if current is None:
            continue
        lines.append(f"{pad}{'├── ' if is_left else '└── '}{current.key}")
        child_pad = pad + ("│   " if is_left else "    ")
        stack.append((current.right, child_pad, False))
        stack.append((current.left, child_pad, True))
    return lines


def render(node: Optional[Node[Any]], prefix: str = "") -> str:
    return "\n".join(render_lines(node, prefix))
