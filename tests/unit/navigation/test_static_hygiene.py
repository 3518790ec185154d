"""
Static code hygiene checks for chatlite/navigation/.

Host matching must go through the dot-boundary rule in policy._matches_root.
A bare startswith()/endswith() on a host or URL string is the classic
substring bypass (evilchatgpt.com), so any such call in the navigation
package must carry a `# nosec suffix` annotation on the same line.
"""
from __future__ import annotations

import pathlib
import re
import unittest

_REPO_ROOT = pathlib.Path(__file__).resolve().parents[3]
_SCAN_DIRS = [_REPO_ROOT / "chatlite" / "navigation"]
_PATTERN = re.compile(r"\.(startswith|endswith)\(")


def _strip_strings(line: str) -> str:
    cleaned = re.sub(r'"[^"\\]*(?:\\.[^"\\]*)*"', '""', line)
    return re.sub(r"'[^'\\]*(?:\\.[^'\\]*)*'", "''", cleaned)


class TestNoBareAffixMatching(unittest.TestCase):

    def _get_violations(self) -> list[tuple[pathlib.Path, int, str]]:
        violations = []
        for scan_dir in _SCAN_DIRS:
            for py_file in sorted(scan_dir.rglob("*.py")):
                lines = py_file.read_text(encoding="utf-8").splitlines()
                for lineno, line in enumerate(lines, start=1):
                    if line.strip().startswith("#"):
                        continue
                    if "# nosec suffix" in line:
                        continue
                    if _PATTERN.search(_strip_strings(line)):
                        violations.append((py_file, lineno, line.rstrip()))
        return violations

    def test_scan_dir_exists(self):
        for scan_dir in _SCAN_DIRS:
            self.assertTrue(scan_dir.is_dir(), scan_dir)

    def test_no_unannotated_affix_calls(self):
        violations = self._get_violations()
        if violations:
            self.fail(
                "startswith(/endswith( found in navigation code without '# nosec suffix'.\n"
                "Match hosts with policy._matches_root (dot boundary).\n\n"
                + "\n".join(f"{p.relative_to(_REPO_ROOT)}:{n}: {l}" for p, n, l in violations)
            )


if __name__ == "__main__":
    unittest.main()
