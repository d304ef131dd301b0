from contextlib import redirect_stdout
import io
import json
import os
from pathlib import Path
import subprocess
import sys
import tempfile
from unittest.mock import patch
import unittest

from mindmap_builder.main import run_cli


PROJECT_ROOT = Path(__file__).resolve().parent.parent
SAMPLE = "# Intro\n## Scope\n- first item\n## Plan\nSome content.\n"


def _isolated_env(tmpdir: str) -> dict[str, str]:
    env = {key: value for key, value in os.environ.items() if not key.startswith("MINDMAP_")}
    env["MINDMAP_ENV_FILE"] = str(Path(tmpdir) / "missing.env")
    return env


def _run_cli(args: list[str], env: dict[str, str], stdin: str | None = None) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        [sys.executable, "-m", "mindmap_builder.main", *args],
        cwd=PROJECT_ROOT,
        capture_output=True,
        text=True,
        check=False,
        env=env,
        input=stdin,
    )


def _run_in_process(argv: list[str], tmpdir: str) -> tuple[int, str]:
    buffer = io.StringIO()
    with patch.dict(os.environ, _isolated_env(tmpdir), clear=True):
        with redirect_stdout(buffer):
            code = run_cli(argv)
    return code, buffer.getvalue()


class CliTests(unittest.TestCase):
    def test_markdown_input_writes_default_snapshot(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            markdown_path = Path(tmpdir) / "sample.md"
            markdown_path.write_text(SAMPLE, encoding="utf-8")

            result = _run_cli([str(markdown_path)], env=_isolated_env(tmpdir))

            self.assertEqual(result.returncode, 0, msg=result.stderr)
            snapshot_path = markdown_path.with_suffix(".mindmap.json")
            self.assertTrue(snapshot_path.exists())
            self.assertIn("Mind Map: Intro", result.stdout)
            self.assertIn("Build report: nodes=", result.stdout)

            data = json.loads(snapshot_path.read_text(encoding="utf-8"))
            self.assertEqual(data["title"], "Intro")
            self.assertTrue(all(row["position"] is not None for row in data["nodes"]))

    def test_output_and_outline_arguments(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            markdown_path = Path(tmpdir) / "sample.md"
            output_path = Path(tmpdir) / "out" / "custom.json"
            outline_path = Path(tmpdir) / "out" / "outline.txt"
            markdown_path.write_text(SAMPLE, encoding="utf-8")

            code, _ = _run_in_process(
                [str(markdown_path), "--output", str(output_path), "--outline", str(outline_path)],
                tmpdir,
            )

            self.assertEqual(code, 0)
            self.assertTrue(output_path.exists())
            self.assertTrue(outline_path.read_text(encoding="utf-8").startswith("Intro\n- Intro\n  - Scope"))

    def test_layout_flags_override_environment(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            markdown_path = Path(tmpdir) / "sample.md"
            output_path = Path(tmpdir) / "tree.mindmap.json"
            markdown_path.write_text("- a\n- b\n- c\n", encoding="utf-8")

            code, stdout = _run_in_process(
                [
                    str(markdown_path),
                    "--layout",
                    "tree",
                    "--node-spacing",
                    "10",
                    "--level-spacing",
                    "20",
                    "--output",
                    str(output_path),
                ],
                tmpdir,
            )

            self.assertEqual(code, 0)
            self.assertIn("layout=tree", stdout)
            data = json.loads(output_path.read_text(encoding="utf-8"))
            positions = [row["position"] for row in data["nodes"][1:]]
            self.assertEqual(positions, [[20.0, -10.0], [20.0, 0.0], [20.0, 10.0]])

    def test_search_and_keywords_are_reported(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            markdown_path = Path(tmpdir) / "sample.md"
            markdown_path.write_text(SAMPLE, encoding="utf-8")

            code, stdout = _run_in_process([str(markdown_path), "--search", "scope", "--keywords"], tmpdir)

            self.assertEqual(code, 0)
            self.assertIn("Search 'scope': 1 hit(s)", stdout)
            self.assertIn("  - Scope", stdout)
            self.assertIn("Keywords: ", stdout)

    def test_stdin_input(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            output_path = Path(tmpdir) / "stdin.json"

            result = _run_cli(["-", "--output", str(output_path)], env=_isolated_env(tmpdir), stdin=SAMPLE)

            self.assertEqual(result.returncode, 0, msg=result.stderr)
            self.assertTrue(output_path.exists())

    def test_snapshot_input_is_relaid_to_new_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            markdown_path = Path(tmpdir) / "sample.md"
            markdown_path.write_text(SAMPLE, encoding="utf-8")
            first_code, _ = _run_in_process([str(markdown_path)], tmpdir)
            snapshot_path = Path(tmpdir) / "sample.mindmap.json"
            original = json.loads(snapshot_path.read_text(encoding="utf-8"))

            code, _ = _run_in_process([str(snapshot_path), "--layout", "tree"], tmpdir)

            self.assertEqual(first_code, 0)
            self.assertEqual(code, 0)
            relaid = json.loads((Path(tmpdir) / "sample.relayout.mindmap.json").read_text(encoding="utf-8"))
            self.assertEqual([row["id"] for row in relaid["nodes"]], [row["id"] for row in original["nodes"]])
            self.assertEqual(json.loads(snapshot_path.read_text(encoding="utf-8")), original)

    def test_missing_input_returns_one(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            result = _run_cli([str(Path(tmpdir) / "absent.md")], env=_isolated_env(tmpdir))

            self.assertEqual(result.returncode, 1)
            self.assertIn("Failed to read input", result.stderr)

    def test_invalid_snapshot_returns_two(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            snapshot_path = Path(tmpdir) / "broken.mindmap.json"
            snapshot_path.write_text('{"nodes": []}', encoding="utf-8")

            result = _run_cli([str(snapshot_path)], env=_isolated_env(tmpdir))

            self.assertEqual(result.returncode, 2)
            self.assertIn("non-empty 'nodes'", result.stderr)

    def test_snapshot_with_null_children_returns_two(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            snapshot_path = Path(tmpdir) / "nulls.mindmap.json"
            snapshot_path.write_text(
                json.dumps({"root_id": "r", "nodes": [{"id": "r", "parent_id": None, "children": None}]}),
                encoding="utf-8",
            )

            code, _ = _run_in_process([str(snapshot_path)], tmpdir)

            self.assertEqual(code, 2)
            self.assertFalse((Path(tmpdir) / "nulls.relayout.mindmap.json").exists())


if __name__ == "__main__":
    unittest.main()
