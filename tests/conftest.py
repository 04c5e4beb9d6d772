import logging
from pathlib import Path

import pytest

from siteassets.config import SiteConfig


def _write(path: Path, content: str = "x") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    root = tmp_path / "site"
    _write(root / "assets" / "css" / "bootstrap.min.css", "body { margin: 0; }")
    _write(root / "assets" / "img" / "glyphicons-halflings.png", "png-bytes")
    _write(root / "assets" / "js" / "bootstrap.min.js", "var x = 1;")
    _write(root / "assets" / "ignorablefolder" / ".siteignore", "")
    _write(root / "assets" / "ignorablefolder" / "test.txt", "never copied")
    _write(root / "media" / "favicon.ico", "ico")

    _write(root / "content" / "about.html", "<p>about</p>")
    _write(root / "content" / "blog" / "2012" / "first-post.html", "<p>first</p>")
    _write(root / "content" / "blog" / "2012" / "sample.json", '{"a": 1}')
    _write(root / "content" / "blog" / "2012" / "images" / "custom-image.png", "png")
    _write(root / "content" / "blog" / "2013" / "second-post.md", "# second")
    _write(root / "content" / "blog" / "2013" / "images" / "custom-image.jpg", "jpg")
    _write(root / "content" / "papers" / "paper.adoc", "= Paper")
    return root


@pytest.fixture
def config(site_root: Path, tmp_path: Path) -> SiteConfig:
    return SiteConfig.for_source(site_root, tmp_path / "output")


@pytest.fixture(autouse=True)
def _reset_siteassets_logger():
    yield
    logger = logging.getLogger("siteassets")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
