import json

import pytest

from pagepress.core.cache import (
    build_publication,
    build_publication_async,
    load_fingerprint,
    needs_rebuild,
)
from pagepress.loaders.files import fingerprint
from pagepress.models.entry import Entry


def _post(directory, name, text="title: t\n---\nbody\n"):
	directory.mkdir(parents=True, exist_ok=True)
	(directory / name).write_text(text, encoding="utf-8")


def test_build_publication(tmp_path):
	_post(tmp_path / "posts", "b.md")
	_post(tmp_path / "posts", "a.md")
	pattern = str(tmp_path / "posts" / "*.md")
	pub = build_publication(pattern, Entry.build)
	assert pub.pattern == pattern
	assert pub.paths == sorted(pub.paths)
	assert [e.path for e in pub.entries] == pub.paths
	assert pub.fingerprint == fingerprint(pub.paths)


def test_not_stale_while_paths_unchanged(tmp_path):
	_post(tmp_path, "a.md")
	pub = build_publication(str(tmp_path / "*.md"), Entry.build)
	assert not pub.is_stale()
	# content edits do not change the set of sources
	_post(tmp_path, "a.md", "title: edited\n---\nnew body\n")
	assert not pub.is_stale()


def test_stale_when_file_added_or_removed(tmp_path):
	pub = build_publication(str(tmp_path / "**" / "*.md"), Entry.build)
	assert pub.entries == []
	assert not pub.is_stale()
	_post(tmp_path / "new", "example.md", "done!")
	assert pub.is_stale()


def test_stale_when_file_removed(tmp_path):
	_post(tmp_path, "a.md")
	_post(tmp_path, "b.md")
	pub = build_publication(str(tmp_path / "*.md"), Entry.build)
	(tmp_path / "b.md").unlink()
	assert pub.is_stale()


def test_fingerprint_roundtrip(tmp_path):
	_post(tmp_path / "posts", "a.md")
	pattern = str(tmp_path / "posts" / "*.md")
	pub = build_publication(pattern, Entry.build)
	store = tmp_path / "cache" / "fingerprint.json"
	pub.save_fingerprint(store)
	data = json.loads(store.read_text())
	assert data["pattern"] == pattern
	stored = load_fingerprint(store)
	assert stored == pub.fingerprint
	assert not needs_rebuild(pattern, stored)
	_post(tmp_path / "posts", "b.md")
	assert needs_rebuild(pattern, stored)


def test_load_fingerprint_missing_or_corrupt(tmp_path):
	assert load_fingerprint(tmp_path / "nope.json") is None
	bad = tmp_path / "bad.json"
	bad.write_text("{not json")
	assert load_fingerprint(bad) is None


def test_needs_rebuild_without_fingerprint(tmp_path):
	assert needs_rebuild(str(tmp_path / "*.md"), None)


@pytest.mark.asyncio
async def test_build_publication_async(tmp_path):
	_post(tmp_path, "a.md")
	pub = await build_publication_async(str(tmp_path / "*.md"), Entry.build)
	assert len(pub.entries) == 1
	assert pub.entries[0].attributes == {"title": "t"}
