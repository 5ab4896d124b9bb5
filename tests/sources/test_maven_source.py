import subprocess
import unittest
from unittest.mock import patch

from mvntree.sources.maven import MavenSource
from tests.fixtures import read_fixture


class TestMavenSource(unittest.TestCase):

    def setUp(self):
        self.source = MavenSource()

    @patch("mvntree.sources.maven.os.path.exists", return_value=False)
    @patch("subprocess.check_output")
    def test_runs_dependency_tree(self, mock_subprocess, mock_exists):
        mock_subprocess.return_value = read_fixture()

        root = self.source.get_dependencies()

        cmd = mock_subprocess.call_args[0][0]
        self.assertEqual(cmd, ["mvn", "-B", "dependency:tree"])
        self.assertEqual(root.display_name, "com.example:demo")
        self.assertEqual(root.children[1].children[1].omitted_reason, "conflict with 3.0.2")

    @patch("mvntree.sources.maven.os.path.exists", return_value=True)
    def test_prefers_wrapper_and_verbose(self, mock_exists):
        cmd = MavenSource(verbose=True, extra_args=["-pl", "core"]).build_command()

        self.assertEqual(cmd[0], "./mvnw")
        self.assertIn("-Dverbose", cmd)
        self.assertEqual(cmd[-2:], ["-pl", "core"])

    @patch("mvntree.sources.maven.os.path.exists", return_value=False)
    @patch("subprocess.check_output")
    def test_build_failure(self, mock_subprocess, mock_exists):
        mock_subprocess.side_effect = subprocess.CalledProcessError(
            1, ["mvn"], output="[INFO] Scanning...\n[ERROR] Non-resolvable parent POM\n"
        )

        with self.assertRaises(Exception) as ctx:
            self.source.read_report()

        self.assertIn("exit 1", str(ctx.exception))
        self.assertIn("Non-resolvable parent POM", str(ctx.exception))

    @patch("mvntree.sources.maven.os.path.exists", return_value=False)
    @patch("subprocess.check_output")
    def test_maven_not_installed(self, mock_subprocess, mock_exists):
        mock_subprocess.side_effect = FileNotFoundError("mvn")

        with self.assertRaises(Exception) as ctx:
            self.source.read_report()

        self.assertIn("not found", str(ctx.exception))

    def test_detect(self):
        self.assertTrue(self.source.detect(["pom.xml", "src"]))
        self.assertFalse(self.source.detect(["package.json"]))


if __name__ == "__main__":
    unittest.main()
