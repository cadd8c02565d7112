import logging
from typing import TYPE_CHECKING, Any, List, Optional

from avltree.node import Node

if TYPE_CHECKING:
    from avltree.binary_search_tree import BinarySearchTree

logger = logging.getLogger(__name__)


class Balancer:
    """Repairs a tree after a structural insert or delete.

    This base strategy only refreshes cached heights, leaving the shape as
    the plain search tree built it.
    """

    height_balanced = False

    def rebalance_after_insert(self, tree: 'BinarySearchTree[Any]',
                               path: List[Node[Any]], key: Any) -> None:
        for node in path:
            tree.update_height(node)

    def rebalance_after_delete(self, tree: 'BinarySearchTree[Any]',
                               start: Optional[Node[Any]]) -> None:
        node = start
        while node is not None:
            tree.update_height(node)
            node = node.parent


class AVLBalancer(Balancer):
    """Keeps every node's balance factor within {-1, 0, 1}.

    Insertion walks the ancestors of the new node bottom-up; the side of the
    heavy child the new key fell on picks single or double rotation.
    Deletion walks from the lowest changed node to the root; with no new key
    to go by, the heavy child's own balance factor picks the case.
    """

    height_balanced = True

    def rebalance_after_insert(self, tree: 'BinarySearchTree[Any]',
                               path: List[Node[Any]], key: Any) -> None:
        for node in path:
            tree.update_height(node)
            balance = tree.balance_factor(node)
            if balance > 1:
                assert node.left is not None
                self._fix_left_heavy(tree, node, double=key > node.left.key)
            elif balance < -1:
                assert node.right is not None
                self._fix_right_heavy(tree, node, double=key < node.right.key)

    def rebalance_after_delete(self, tree: 'BinarySearchTree[Any]',
                               start: Optional[Node[Any]]) -> None:
        node = start
        while node is not None:
            tree.update_height(node)
            balance = tree.balance_factor(node)
            if balance > 1:
                double = tree.balance_factor(node.left) < 0
                node = self._fix_left_heavy(tree, node, double=double)
            elif balance < -1:
                double = tree.balance_factor(node.right) > 0
                node = self._fix_right_heavy(tree, node, double=double)
            node = node.parent

    def _fix_left_heavy(self, tree: 'BinarySearchTree[Any]', node: Node[Any],
                        double: bool) -> Node[Any]:
        assert node.left is not None
        if double:
            logger.debug("left-right rotation at %r", node.key)
            tree.rotate_left(node.left)
        else:
            logger.debug("right rotation at %r", node.key)
        return tree.rotate_right(node)

    def _fix_right_heavy(self, tree: 'BinarySearchTree[Any]', node: Node[Any],
                         double: bool) -> Node[Any]:
        assert node.right is not None
        if double:
            logger.debug("right-left rotation at %r", node.key)
            tree.rotate_right(node.right)
        else:
            logger.debug("left rotation at %r", node.key)
        return tree.rotate_left(node)
