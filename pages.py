import os
from dataclasses import dataclass

PAGES_DIR = os.environ.get("WIKI_PAGES_DIR", "pages")
PAGE_EXT = ".page"
FILE_MODE = 0o600


def page_path(title, pages_dir=PAGES_DIR):
    """Path of the file holding the page called title"""
    return os.path.join(pages_dir, title + PAGE_EXT)


@dataclass
class Page:
    title: str
    body: bytes = b""

    @property
    def text(self):
        return self.body.decode("utf-8", errors="replace")

    def save(self, pages_dir=PAGES_DIR):
        """Write the body to <pages_dir>/<title>.page, replacing any old copy"""
        fd = os.open(page_path(self.title, pages_dir), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
        with open(fd, "wb") as f:
            f.write(self.body)


def load_page(title, pages_dir=PAGES_DIR):
    """Read a page from disk. Raises OSError if it can't be read."""
    with open(page_path(title, pages_dir), "rb") as f:
        body = f.read()
    return Page(title=title, body=body)
