import math
import random
import unittest

from avltree.avl_tree import AVLTree
from avltree.binary_search_tree import InvariantError


def shape(tree):
    return tree.pre_order()


class TestAVLTreeConstruction(unittest.TestCase):
    def test_new_tree_is_empty(self):
        tree: AVLTree[int] = AVLTree()
        self.assertEqual(tree.size(), 0)
        self.assertTrue(tree.is_empty())
        self.assertEqual(tree.height(), 0)

    def test_empty_tree_search_and_extremes(self):
        tree: AVLTree[int] = AVLTree()
        for key in (-1, 0, 42):
            self.assertIsNone(tree.search(key))
        self.assertIsNone(tree.minimum())
        self.assertIsNone(tree.maximum())
        self.assertIsNone(tree.successor(0))

    def test_construct_from_keys(self):
        tree = AVLTree([30, 20, 10, 25])
        self.assertEqual(tree.in_order(), [10, 20, 25, 30])
        self.assertIsInstance(AVLTree.from_keys([1, 2]), AVLTree)
        tree.validate()

    def test_extend_inserts_in_sequence_order(self):
        tree: AVLTree[int] = AVLTree()
        tree.extend([10, 20, 30])
        self.assertEqual(shape(tree), [20, 10, 30])


class TestAVLTreeInsertRotations(unittest.TestCase):
    def assert_balanced_triple(self, tree):
        root = tree.root
        self.assertEqual(root.key, 20)
        self.assertEqual(root.left.key, 10)
        self.assertEqual(root.right.key, 30)
        self.assertEqual(root.height, 2)
        self.assertIs(root.left.parent, root)
        self.assertIs(root.right.parent, root)
        self.assertIsNone(root.parent)
        tree.validate()

    def test_rr_case_rotates_left(self):
        self.assert_balanced_triple(AVLTree([10, 20, 30]))

    def test_ll_case_rotates_right(self):
        self.assert_balanced_triple(AVLTree([30, 20, 10]))

    def test_lr_case_double_rotation(self):
        self.assert_balanced_triple(AVLTree([30, 10, 20]))

    def test_rl_case_double_rotation(self):
        self.assert_balanced_triple(AVLTree([10, 30, 20]))

    def test_lr_case_below_root(self):
        tree = AVLTree([50, 30, 70, 80, 20, 25])
        # 30 goes left-heavy with 25 on the inner side of 20
        node = tree.search(25)
        self.assertEqual(node.left.key, 20)
        self.assertEqual(node.right.key, 30)
        self.assertIs(node.parent, tree.root)
        tree.validate()

    def test_rl_case_below_root(self):
        tree = AVLTree([50, 30, 70, 20, 80, 75])
        node = tree.search(75)
        self.assertEqual(node.left.key, 70)
        self.assertEqual(node.right.key, 80)
        self.assertIs(node.parent, tree.root)
        tree.validate()

    def test_rotation_propagates_new_subtree_root_upwards(self):
        tree = AVLTree([1, 2, 3, 4, 5])
        self.assertEqual(shape(tree), [2, 1, 4, 3, 5])
        tree.insert(6)
        self.assertEqual(shape(tree), [4, 2, 1, 3, 5, 6])
        tree.validate()

    def test_duplicate_insert_keeps_shape(self):
        tree = AVLTree([50, 30, 70, 20, 40])
        before = shape(tree)
        heights = [tree.search(k).height for k in before]
        tree.insert(30)
        self.assertEqual(shape(tree), before)
        self.assertEqual([tree.search(k).height for k in before], heights)
        self.assertEqual(tree.size(), 5)


class TestAVLTreeRemoveRotations(unittest.TestCase):
    def test_remove_triggers_right_rotation(self):
        tree = AVLTree([20, 10, 30, 5])
        tree.remove(30)
        self.assertEqual(shape(tree), [10, 5, 20])
        tree.validate()

    def test_remove_triggers_left_right_rotation(self):
        tree = AVLTree([20, 10, 30, 15])
        tree.remove(30)
        self.assertEqual(shape(tree), [15, 10, 20])
        tree.validate()

    def test_remove_triggers_left_rotation(self):
        tree = AVLTree([20, 10, 30, 35])
        tree.remove(10)
        self.assertEqual(shape(tree), [30, 20, 35])
        tree.validate()

    def test_remove_triggers_right_left_rotation(self):
        tree = AVLTree([20, 10, 30, 25])
        tree.remove(10)
        self.assertEqual(shape(tree), [25, 20, 30])
        tree.validate()

    def test_remove_with_evenly_balanced_child_uses_single_rotation(self):
        tree = AVLTree([20, 10, 30, 5, 15])
        tree.remove(30)
        self.assertEqual(shape(tree), [10, 5, 20, 15])
        self.assertEqual(tree.height(), 3)
        tree.validate()

    def test_remove_two_children_promotes_successor(self):
        tree = AVLTree([20, 10, 30, 5, 15, 25, 35])
        tree.remove(20)
        self.assertEqual(tree.root.key, 25)
        self.assertIsNone(tree.search(20))
        self.assertEqual(tree.in_order(), [5, 10, 15, 25, 30, 35])
        tree.validate()

    def test_remove_two_children_direct_right_successor(self):
        tree = AVLTree([20, 10, 30, 5, 15, 35])
        tree.remove(20)
        self.assertEqual(shape(tree), [30, 10, 5, 15, 35])
        tree.validate()

    def test_remove_propagates_rebalancing_to_root(self):
        tree = AVLTree([8, 5, 11, 3, 6, 10, 12, 2, 4, 7, 9, 1])
        self.assertEqual(tree.root.key, 8)
        self.assertEqual(tree.height(), 5)
        tree.remove(12)
        # one rotation at 11, then a second at the root
        self.assertEqual(tree.root.key, 5)
        self.assertEqual(tree.root.right.key, 8)
        self.assertEqual(tree.search(8).left.key, 6)
        self.assertEqual(tree.search(8).right.key, 10)
        self.assertEqual(tree.search(10).right.key, 11)
        self.assertEqual(tree.height(), 4)
        tree.validate()

    def test_remove_root_of_single_node_tree(self):
        tree = AVLTree([42])
        tree.remove(42)
        self.assertIsNone(tree.root)
        self.assertTrue(tree.is_empty())

    def test_remove_missing_is_noop(self):
        tree = AVLTree([10, 5, 15])
        tree.remove(7)
        self.assertEqual(shape(tree), [10, 5, 15])
        self.assertEqual(tree.size(), 3)

    def test_remove_then_search_reports_missing(self):
        tree = AVLTree(range(20))
        tree.remove(13)
        self.assertIsNone(tree.search(13))
        self.assertFalse(13 in tree)


class TestAVLTreeQueries(unittest.TestCase):
    def setUp(self):
        self.tree = AVLTree([20, 10, 30, 5, 15, 25, 35])

    def test_search_returns_node(self):
        node = self.tree.search(15)
        self.assertEqual(node.key, 15)
        self.assertIs(node.parent, self.tree.search(10))

    def test_minimum_maximum(self):
        self.assertEqual(self.tree.minimum().key, 5)
        self.assertEqual(self.tree.maximum().key, 35)
        self.assertEqual(self.tree.min(), 5)
        self.assertEqual(self.tree.max(), 35)

    def test_successor(self):
        self.assertEqual(self.tree.successor(15).key, 20)
        self.assertEqual(self.tree.successor(20).key, 25)
        self.assertIs(self.tree.successor(35), self.tree.search(35))

    def test_height_and_balance_factor(self):
        self.assertEqual(self.tree.height(), 3)
        self.assertEqual(self.tree.height(self.tree.search(10)), 2)
        self.assertEqual(self.tree.height(None), 0)
        self.assertEqual(self.tree.balance_factor(self.tree.root), 0)
        self.assertEqual(self.tree.balance_factor(None), 0)
        self.tree.remove(5)
        self.tree.remove(15)
        self.assertEqual(self.tree.balance_factor(self.tree.root), -1)

    def test_str(self):
        self.assertEqual(str(self.tree), "AVLTree(size=7, height=3)")

    def test_copy_is_independent(self):
        clone = self.tree.copy()
        self.assertIsInstance(clone, AVLTree)
        self.tree.remove(20)
        self.assertIn(20, clone)
        self.assertEqual(clone.size(), 7)
        clone.validate()


class TestAVLTreeHeight(unittest.TestCase):
    def test_height_is_logarithmic_for_sorted_insert(self):
        n = 1000
        tree = AVLTree(range(n))
        self.assertLessEqual(tree.height(), 1.44 * math.log2(n + 2))
        tree.validate()

    def test_height_is_logarithmic_for_reverse_insert(self):
        n = 1000
        tree = AVLTree(range(n, 0, -1))
        self.assertLessEqual(tree.height(), 1.44 * math.log2(n + 2))
        self.assertEqual(tree.in_order(), list(range(1, n + 1)))

    def test_clear(self):
        tree = AVLTree([10, 5, 15])
        tree.clear()
        self.assertEqual(tree.height(), 0)
        self.assertTrue(tree.is_empty())


class TestAVLTreeValidate(unittest.TestCase):
    def test_unbalanced_node_is_reported(self):
        tree = AVLTree([10, 20, 30])
        # force a chain without letting the balancer see it
        tree.rotate_right(tree.root)
        with self.assertRaises(InvariantError):
            tree.validate()


class TestAVLTreeRandomized(unittest.TestCase):
    def test_random_operations_keep_invariants(self):
        rng = random.Random(1234)
        tree: AVLTree[int] = AVLTree()
        present = set()
        for _ in range(2000):
            key = rng.randrange(300)
            if rng.random() < 0.6:
                tree.insert(key)
                present.add(key)
                self.assertIsNotNone(tree.search(key))
            else:
                tree.remove(key)
                present.discard(key)
                self.assertIsNone(tree.search(key))
            tree.validate()
        self.assertEqual(tree.in_order(), sorted(present))
        self.assertEqual(len(tree), len(present))

    def test_insert_order_does_not_change_key_set(self):
        rng = random.Random(99)
        keys = list(range(200))
        rng.shuffle(keys)
        shuffled = AVLTree(keys)
        ordered = AVLTree(range(200))
        self.assertEqual(shuffled.in_order(), ordered.in_order())
        self.assertTrue(shuffled.is_balanced())
        self.assertTrue(ordered.is_balanced())

    def test_drain_in_random_order(self):
        rng = random.Random(7)
        keys = list(range(500))
        tree = AVLTree(keys)
        rng.shuffle(keys)
        for i, key in enumerate(keys):
            tree.remove(key)
            if i % 25 == 0:
                tree.validate()
        self.assertTrue(tree.is_empty())
        self.assertIsNone(tree.root)


if __name__ == '__main__':
    unittest.main()
