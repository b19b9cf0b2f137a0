from __future__ import annotations

import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest import mock

import httpx

from unsourcemap.cli import main as unsourcemap_main

SOURCE_MAP = json.dumps(
    {
        "version": 3,
        "file": "bundle.js",
        "sources": ["src/index.ts", "src/dep.ts"],
        "sourcesContent": ["console.log('INDEX_MAGIC');\n", "export const dep = 'DEP_MAGIC';\n"],
        "names": ["console", "log"],
        "mappings": "AAAAA,QAAQC;ACAA",
    }
)


def _run(argv: list[str]) -> tuple[int, str, str]:
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        code = unsourcemap_main(argv)
    return code, out.getvalue(), err.getvalue()


class TestCli(unittest.TestCase):
    def test_prints_inline_source_map(self):
        code, out, _ = _run(["-s", SOURCE_MAP])
        self.assertEqual(code, 0)
        self.assertIn("[FILE] src/index.ts", out)
        self.assertIn("DEP_MAGIC", out)

    def test_saves_sources_from_file(self):
        with tempfile.TemporaryDirectory() as td:
            td_path = Path(td)
            map_path = td_path / "bundle.js.map"
            map_path.write_text(SOURCE_MAP, encoding="utf-8")
            out_dir = td_path / "out"

            code, out, _ = _run(["-f", str(map_path), "-S", str(out_dir)])

            self.assertEqual(code, 0)
            self.assertIn("Extracted 2 source files", out)
            self.assertIn("INDEX_MAGIC", (out_dir / "src" / "index.ts").read_text(encoding="utf-8"))
            self.assertIn("DEP_MAGIC", (out_dir / "src" / "dep.ts").read_text(encoding="utf-8"))

    def test_dry_run_writes_nothing(self):
        with tempfile.TemporaryDirectory() as td:
            out_dir = Path(td) / "out"
            code, out, _ = _run(["-s", SOURCE_MAP, "-n", "-S", str(out_dir)])
            self.assertEqual(code, 0)
            self.assertIn("Decoded 3 mappings", out)
            self.assertIn("src/dep.ts", out)
            self.assertFalse(out_dir.exists())

    def test_fetches_url(self):
        response = httpx.Response(200, content=SOURCE_MAP.encode("utf-8"))
        with mock.patch("unsourcemap.loader.httpx.get", return_value=response):
            code, out, _ = _run(["-u", "https://cdn.example.com/bundle.js.map"])
        self.assertEqual(code, 0)
        self.assertIn("INDEX_MAGIC", out)

    def test_missing_file(self):
        code, _, err = _run(["-f", "/nonexistent/bundle.js.map"])
        self.assertEqual(code, 1)
        self.assertIn("not found", err)

    def test_empty_inline_source_map(self):
        code, _, err = _run(["-s", ""])
        self.assertEqual(code, 1)
        self.assertIn("Invalid JSON", err)

    def test_empty_file_path(self):
        code, _, err = _run(["-f", ""])
        self.assertEqual(code, 1)
        self.assertIn("not found", err)

    def test_skip_ignored_when_printing(self):
        source_map = json.dumps({**json.loads(SOURCE_MAP), "ignoreList": [1]})
        code, out, _ = _run(["-s", source_map, "--skip-ignored"])
        self.assertEqual(code, 0)
        self.assertIn("INDEX_MAGIC", out)
        self.assertNotIn("DEP_MAGIC", out)

    def test_version_mismatch(self):
        code, _, err = _run(["-s", json.dumps({"version": 2, "mappings": ""})])
        self.assertEqual(code, 1)
        self.assertIn("Must be 3", err)

    def test_malformed_mappings(self):
        code, _, err = _run(["-s", json.dumps({"version": 3, "mappings": "AA!A"})])
        self.assertEqual(code, 1)
        self.assertIn("Invalid character", err)

    def test_requires_an_input(self):
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                unsourcemap_main([])


if __name__ == "__main__":
    unittest.main()
