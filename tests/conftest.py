import pytest

import wiki


@pytest.fixture
def pages_dir(tmp_path, monkeypatch):
    """Point the app at an empty pages directory for the test."""
    monkeypatch.setitem(wiki.app.config, "PAGES_DIR", str(tmp_path))
    return tmp_path


@pytest.fixture
def client(pages_dir, monkeypatch):
    monkeypatch.setitem(wiki.app.config, "TESTING", True)
    return wiki.app.test_client()
