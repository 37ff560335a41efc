import random
import threading
import time
from collections import OrderedDict

import pytest

from pagepress.core import pipeline
from pagepress.core.pipeline import build_file, publish, publish_async
from pagepress.errors import (
    ConversionFailure,
    InvalidAttributes,
    MissingSeparator,
    UnreadableSource,
)
from pagepress.models.config import PublisherConfig
from pagepress.models.entry import Entry


class Builder:

	def build(self, path, attrs, body):
		return {"path": path, "attrs": attrs, "body": body}


def _write(tmp_path, name, text):
	p = tmp_path / name
	p.parent.mkdir(parents=True, exist_ok=True)
	p.write_text(text, encoding="utf-8")
	return str(p)


@pytest.fixture
def site(tmp_path):
	"""A small content tree mirroring typical blog sources."""
	paths = {
	    "markdown":
	        _write(tmp_path, "markdown.md",
	               "hello: world\n---\nThis is a *markdown* document.\n"),
	    "crlf":
	        _write(tmp_path, "crlf.md",
	               "title: crlf\r\n---\r\nHello *crlf*\r\n"),
	    "nosyntax":
	        _write(tmp_path, "nosyntax.md",
	               "syntax: nohighlight\n---\n```\nIO.puts \"syntax\"\n```\n"),
	    "syntax":
	        _write(
	            tmp_path, "syntax.md",
	            "syntax: highlight\n---\n```python\nprint(\"syntax\")\n```\n"),
	    "text":
	        _write(tmp_path, "text.txt",
	               '{"hello": "world"}\n---\nThis is a normal text.\n'),
	}
	return paths


def test_builds_all_entries_in_path_order(site):
	entries = publish(list(site.values()), Builder())
	assert [e["path"] for e in entries] == sorted(site.values())


def test_converts_markdown(site):
	[entry] = publish([site["markdown"]], Builder())
	assert entry["attrs"] == {"hello": "world"}
	assert "<em>markdown</em>" in entry["body"]


def test_crlf_source(site):
	[entry] = publish([site["crlf"]], Builder())
	assert entry["attrs"] == {"title": "crlf"}
	assert "<em>crlf</em>" in entry["body"]


def test_crlf_text_body_is_byte_identical(tmp_path):
	p = tmp_path / "crlf.txt"
	p.write_bytes(b"a: b\r\n---\r\nline1\r\nline2\r\n")
	[entry] = publish([str(p)], Builder())
	assert entry["attrs"] == {"a": "b"}
	assert entry["body"] == "line1\r\nline2\r\n"


def test_undecodable_source_aborts_run(tmp_path, site):
	p = tmp_path / "latin.md"
	p.write_bytes(b"a: b\n---\n\xff\xfe body\n")
	with pytest.raises(UnreadableSource) as exc_info:
		publish([site["markdown"], str(p)], Builder())
	assert exc_info.value.path == str(p)
	assert str(p) in str(exc_info.value)


def test_custom_parser_attributes_passed_through(tmp_path):

	class AttrDict(OrderedDict):
		pass

	path = _write(tmp_path, "custom.parser", "body\n")
	[entry] = publish([path], Builder(),
	                  parser=lambda p, c: (AttrDict(k="v"), c))
	assert type(entry["attrs"]) is AttrDict
	assert entry["attrs"] == {"k": "v"}


def test_does_not_convert_other_extensions(site):
	[entry] = publish([site["text"]], Builder())
	assert entry["attrs"] == {"hello": "world"}
	assert entry["body"] == "This is a normal text.\n"


def test_code_block_without_language(site):
	config = PublisherConfig(highlighters=["elixir"])
	[entry] = publish([site["nosyntax"]], Builder(), config)
	assert entry["attrs"] == {"syntax": "nohighlight"}
	assert "<pre><code>IO.puts &quot;syntax&quot;\n</code></pre>" in entry[
	    "body"]


def test_highlights_code_blocks(site):
	config = PublisherConfig(highlighters=["python"])
	[entry] = publish([site["syntax"]], Builder(), config)
	assert entry["attrs"] == {"syntax": "highlight"}
	assert '<pre><code class="highlight python">' in entry["body"]
	assert '<span class="nb">print</span>' in entry["body"]


def test_highlighting_skipped_without_highlighters(site, monkeypatch):

	def fail(*args, **kwargs):
		raise AssertionError("highlighter should not be built")

	monkeypatch.setattr(pipeline, "Highlighter", fail)
	[entry] = publish([site["syntax"]], Builder())
	assert '<code class="language-python">' in entry["body"]


def test_text_files_are_not_highlighted(tmp_path):
	body = '<pre><code class="python">print(1)</code></pre>'
	path = _write(tmp_path, "raw.txt", f"a: b\n---\n{body}")
	config = PublisherConfig(highlighters=["python"])
	[entry] = publish([path], Builder(), config)
	assert entry["body"] == body


def test_duplicate_paths_processed_once(site):
	entries = publish([site["markdown"], site["markdown"]], Builder())
	assert len(entries) == 1


def test_builder_as_callable(site):
	entries = publish([site["markdown"]], Entry.build)
	assert isinstance(entries[0], Entry)
	assert entries[0].attributes == {"hello": "world"}

	entries = publish([site["markdown"]], lambda p, a, b: (p, a))
	assert entries == [(site["markdown"], {"hello": "world"})]


def test_custom_parser_single_pair(tmp_path):

	class Parser:

		def parse(self, path, contents):
			body = contents.split("\nxxx\n")[-1].upper()
			return {"path": path, "length": len(body)}, body

	path = _write(tmp_path, "custom.parser", "head\nxxx\nbody\n")
	[entry] = publish([path], Builder(), parser=Parser())
	assert entry["body"] == "BODY\n"
	assert entry["attrs"] == {"path": path, "length": 5}


def test_custom_parser_multiple_pairs(tmp_path):

	def multi(path, contents):
		units = []
		for content in contents.split("\n***\n"):
			body = content.split("\nxxx\n")[-1].upper()
			units.append(({"path": path, "length": len(body)}, body))
		return units

	path = _write(tmp_path, "custom.multi.parser",
	              "a\nxxx\nbody\n\n***\nb\nxxx\nsecond\n\n***\nthird")
	entries = publish([path], Builder(), parser=multi)
	assert len(entries) == 3
	assert [e["path"] for e in entries] == [path] * 3
	assert [e["body"] for e in entries] == ["BODY\n", "SECOND\n", "THIRD"]


def test_custom_converter(tmp_path):

	class Converter:

		def convert(self, path, body, attrs, options):
			return f"<p>custom converter for {path}</p>\n"

	path = _write(tmp_path, "markdown.md", "a: b\n---\n*body*\n")
	[entry] = publish([path], Builder(), converter=Converter())
	assert entry["body"] == f"<p>custom converter for {path}</p>\n"


def test_custom_converter_output_is_highlighted(tmp_path):

	def converter(path, body, attrs, options):
		return f'<pre><code class="python">{body}</code></pre>'

	path = _write(tmp_path, "snippet.py.txt", "a: b\n---\nprint(1)")
	config = PublisherConfig(highlighters=["python"])
	[entry] = publish([path], Builder(), config, converter=converter)
	assert entry["body"].startswith('<pre><code class="highlight python">')


def test_missing_separator_aborts_run(tmp_path, site):
	bad = _write(tmp_path, "invalid.noseparator", "no separator\n")
	with pytest.raises(MissingSeparator) as exc_info:
		publish([site["markdown"], bad], Builder())
	assert exc_info.value.path == bad


def test_not_a_map_aborts_run(tmp_path):
	bad = _write(tmp_path, "invalid.nomap", '{"a", "b"}\n---\nbody\n')
	with pytest.raises(InvalidAttributes,
	                   match="expected attributes for .* to return a map"):
		publish([bad], Builder())


def test_conversion_failure_aborts_run(site):
	config = PublisherConfig(markdown_extensions=["no_such_extension_xyz"])
	with pytest.raises(ConversionFailure):
		publish([site["markdown"]], Builder(), config)


def test_build_file_direct(site):
	records = build_file(site["markdown"], Builder(), PublisherConfig())
	assert records[0]["attrs"] == {"hello": "world"}


def test_concurrent_matches_sequential(tmp_path):
	paths = [
	    _write(tmp_path, f"post-{i:02d}.md", f"n: {i}\n---\nPost *{i}*\n")
	    for i in range(20)
	]
	random.shuffle(paths)

	def slow_builder(path, attrs, body):
		# later paths finish first
		time.sleep(0.001 * (20 - int(attrs["n"])))
		return (path, attrs["n"], body)

	sequential = publish(paths, slow_builder,
	                     PublisherConfig(max_workers=1))
	concurrent = publish(paths, slow_builder,
	                     PublisherConfig(max_workers=8))
	assert concurrent == sequential
	assert [r[0] for r in concurrent] == sorted(paths)


@pytest.mark.asyncio
async def test_publish_async(site):
	entries = await publish_async([site["markdown"], site["text"]],
	                              Builder())
	assert [e["path"] for e in entries] == sorted(
	    [site["markdown"], site["text"]])


@pytest.mark.asyncio
async def test_publish_async_bounded_workers(tmp_path, monkeypatch):
	paths = [
	    _write(tmp_path, f"{i}.md", "a: b\n---\nbody\n") for i in range(6)
	]
	active = 0
	peak = 0
	lock = threading.Lock()
	real_build_file = pipeline.build_file

	def tracking_build_file(*args, **kwargs):
		nonlocal active, peak
		with lock:
			active += 1
			peak = max(peak, active)
		try:
			time.sleep(0.01)
			return real_build_file(*args, **kwargs)
		finally:
			with lock:
				active -= 1

	monkeypatch.setattr(pipeline, "build_file", tracking_build_file)
	await publish_async(paths, Builder(), PublisherConfig(max_workers=2))
	assert 1 <= peak <= 2

