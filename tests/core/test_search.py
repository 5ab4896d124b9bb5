import unittest

from mvntree.core.builder import parse
from mvntree.core.model import DependencyNode, node_id
from mvntree.core.search import format_path, search_dependencies
from tests.fixtures import read_fixture


def preorder(node):
    yield node
    for child in node.children:
        yield from preorder(child)


class TestSearchDependencies(unittest.TestCase):

    def setUp(self):
        self.tree = parse(read_fixture())

    def test_matches_in_preorder_with_paths(self):
        results = search_dependencies(self.tree, "jsr305")

        self.assertEqual(len(results), 2)

        omitted, direct = results
        self.assertTrue(omitted.node.is_omitted)
        self.assertEqual([n.artifact_id for n in omitted.path], ["demo", "guava", "jsr305"])
        self.assertFalse(direct.node.is_omitted)
        self.assertEqual([n.artifact_id for n in direct.path], ["demo", "jsr305"])
        self.assertIs(direct.path[-1], direct.node)

    def test_case_insensitive(self):
        results = search_dependencies(self.tree, "SPRING")

        self.assertEqual(
            [r.node.artifact_id for r in results],
            ["spring-boot-starter-web", "spring-boot-starter", "spring-webmvc"],
        )

    def test_is_a_pure_filter(self):
        for query in ["google", "org.", "jar", "x", ":"]:
            expected = [n for n in preorder(self.tree) if query.lower() in n.display_name.lower()]
            found = [r.node for r in search_dependencies(self.tree, query)]
            self.assertEqual([id(n) for n in found], [id(n) for n in expected])

    def test_no_match(self):
        self.assertEqual(search_dependencies(self.tree, "log4j"), [])

    def test_empty_tree(self):
        self.assertEqual(search_dependencies(None, "guava"), [])

    def test_synthetic_root_is_searchable(self):
        root = DependencyNode.synthetic_root()

        results = search_dependencies(root, "roo")
        self.assertEqual(len(results), 1)
        self.assertIs(results[0].node, root)


class TestFormatPath(unittest.TestCase):

    def test_skips_root_placeholder(self):
        root = DependencyNode.synthetic_root()
        project = DependencyNode("com.a", "app", "jar", "1.0")
        lib = DependencyNode("com.b", "lib", "jar", "2.0")

        self.assertEqual(format_path([root, project, lib]), "com.a:app → com.b:lib")

    def test_empty_path(self):
        self.assertEqual(format_path([]), "")


class TestNodeId(unittest.TestCase):

    def test_replaces_unsafe_characters(self):
        node = DependencyNode("com.example", "demo", "jar", "1.0-SNAPSHOT")
        self.assertEqual(node_id(node), "com_example:demo:1_0-SNAPSHOT:compile")

    def test_scope_is_part_of_identity(self):
        compile_dep = DependencyNode("org.x", "y", "jar", "1.0", scope="compile")
        test_dep = DependencyNode("org.x", "y", "jar", "1.0", scope="test")

        self.assertNotEqual(node_id(compile_dep), node_id(test_dep))
        self.assertEqual(node_id(compile_dep), node_id(DependencyNode("org.x", "y", "war", "1.0")))


if __name__ == "__main__":
    unittest.main()
