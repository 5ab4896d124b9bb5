import unittest

from mvntree.core.builder import parse
from mvntree.core.summary import calculate_stats, collapse_all, expand_all, reveal
from tests.fixtures import read_fixture


def preorder(node):
    yield node
    for child in node.children:
        yield from preorder(child)


class TestCalculateStats(unittest.TestCase):

    def test_fixture_stats(self):
        stats = calculate_stats(parse(read_fixture()))

        self.assertEqual(stats.total, 10)
        self.assertEqual(stats.direct, 4)
        self.assertEqual(stats.transitive, 5)
        self.assertEqual(stats.max_depth, 3)
        self.assertEqual(stats.omitted, 1)
        self.assertEqual(stats.scopes, {"compile": 9, "test": 1})
        self.assertEqual(stats.sorted_scopes(), [("compile", 9), ("test", 1)])

    def test_empty_tree(self):
        stats = calculate_stats(None)

        self.assertEqual(stats.total, 0)
        self.assertEqual(stats.scopes, {})

    def test_synthetic_root_not_counted(self):
        stats = calculate_stats(parse("--- dependency:3.6.1:tree\n+- broken:line\n"))

        self.assertEqual(stats.total, 0)


class TestExpansion(unittest.TestCase):

    def setUp(self):
        self.tree = parse(read_fixture())

    def test_collapse_and_expand_all(self):
        collapse_all(self.tree)
        self.assertTrue(all(not n.expanded for n in preorder(self.tree)))

        expand_all(self.tree)
        self.assertTrue(all(n.expanded for n in preorder(self.tree)))

    def test_reveal_opens_ancestors_only(self):
        collapse_all(self.tree)
        web = self.tree.children[0]
        starter = web.children[0]
        snakeyaml = starter.children[0]

        reveal([self.tree, web, starter, snakeyaml])

        self.assertTrue(self.tree.expanded)
        self.assertTrue(web.expanded)
        self.assertTrue(starter.expanded)
        self.assertFalse(snakeyaml.expanded)
        self.assertFalse(self.tree.children[1].expanded)


if __name__ == "__main__":
    unittest.main()
