from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional


@dataclass(frozen=True)
class FakeTree:
    """A small data folder with top-level and nested files used in tests."""

    root: Path

    def path(self, rel: str) -> str:
        return os.path.join(str(self.root), *rel.split("/"))


_DEFAULT_FILES: Dict[str, str] = {
    "a.txt": "2024/01/01 10:00:00 START\n",
    "b.log": "2024/01/01 10:05:00 IGNORED\n",
    "c.txt": "no timestamps here\n",
    "sub/d.txt": "2024/01/02 08:00:00 STOP\n2024/01/02 08:30:00 RESUME\n",
    "sub/deeper/e.txt": "2024/01/03 00:00:00 END\n",
    "sub/deeper/f.csv": "2024/01/03 00:00:01 NOPE\n",
}


def make_fake_tree(
    tmp_path: Path,
    *,
    label: str = "data",
    files: Optional[Dict[str, str]] = None,
    mtimes: Optional[Dict[str, int]] = None,
) -> FakeTree:
    """Create `files` (relative posix path -> text) under tmp_path/label.

    `mtimes` pins modification times (epoch seconds) for selected files.
    """
    root = tmp_path / label
    root.mkdir(parents=True, exist_ok=True)
    for rel, text in (files if files is not None else _DEFAULT_FILES).items():
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(text.encode("utf-8"))
    tree = FakeTree(root=root)
    for rel, ts in (mtimes or {}).items():
        os.utime(tree.path(rel), (ts, ts))
    return tree
