"""Output writing: write-once files under the output directory and static file copying"""

import logging
import shutil
from pathlib import Path


logger = logging.getLogger(__name__)


def output_path(url: str) -> str:
    """Output file for a site-relative URL: '/' → index.html, '/posts/x/' → posts/x/index.html."""
    rel = url.strip("/")
    return f"{rel}/index.html" if rel else "index.html"


class OutputWriter:
    """Writes build outputs; every output path may be written once per build."""

    def __init__(self, output_dir: Path):
        self.output_dir = output_dir
        self.written: list[str] = []
        self._seen: set[str] = set()

    def clean(self, keep: Path | None = None) -> None:
        """Remove everything left in the output directory by a previous build.

        Raises ValueError when keep (the content root) lies inside the output directory.
        """
        if not self.output_dir.exists():
            return
        out = self.output_dir.resolve()
        if keep is not None and keep.resolve().is_relative_to(out):
            raise ValueError(f"Output directory {self.output_dir} contains the content directory {keep}")
        shutil.rmtree(out)
        logger.debug("removed previous output in %s", self.output_dir)

    def _claim(self, rel: str) -> Path:
        rel = rel.lstrip("/")
        if rel in self._seen:
            raise RuntimeError(f"Output path written twice: {rel}")
        self._seen.add(rel)
        self.written.append(rel)
        dest = self.output_dir / rel
        dest.parent.mkdir(parents=True, exist_ok=True)
        return dest

    def write(self, rel: str, text: str) -> Path:
        dest = self._claim(rel)
        dest.write_text(text, encoding="utf-8")
        logger.debug("wrote %s", dest)
        return dest

    def copy_tree(self, src_dir: Path, prefix: str = "") -> int:
        """Copy every file under src_dir into prefix (default: the output root), preserving relative paths."""
        if not src_dir.is_dir():
            return 0
        files = sorted(p for p in src_dir.rglob("*") if p.is_file())
        return self._copy(src_dir, files, prefix)

    def copy_assets(self, src_dir: Path, prefix: str, skip: set[str]) -> int:
        """Copy the files directly inside src_dir (suffixes in skip excluded) into prefix."""
        files = sorted(p for p in src_dir.iterdir() if p.is_file() and p.suffix not in skip)
        return self._copy(src_dir, files, prefix)

    def _copy(self, src_dir: Path, files: list[Path], prefix: str) -> int:
        prefix = prefix.strip("/")
        for src in files:
            rel = src.relative_to(src_dir).as_posix()
            shutil.copy2(src, self._claim(f"{prefix}/{rel}" if prefix else rel))
        logger.debug("copied %d file(s) from %s", len(files), src_dir)
        return len(files)
