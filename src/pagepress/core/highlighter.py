"""
Code block highlighting for generated HTML.

Finds code blocks in rendered HTML with a regular expression and
replaces their contents with Pygments token markup. The default pattern
matches the ``<pre><code class="LANG">...</code></pre>`` shape produced
by Python-Markdown's ``fenced_code`` extension (with or without the
``language-`` class prefix). Matching is deliberately regex-based: the
HTML is assumed to come from a known renderer, not arbitrary sources.

Failure policy: a block whose tokenizing fails is left unhighlighted
and the failure is logged; the rest of the document is still processed.
"""

from __future__ import annotations

import html
import re
from typing import Iterable, Pattern

from pygments import highlight as pygments_highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from pagepress.errors import HighlightFailure
from pagepress.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CODE_BLOCK_RE = re.compile(
    r'<pre><code(?:\s+class="(?:language-)?([^"\s]*)")?>([^<]*)</code></pre>')


class HighlighterRegistry:
	"""
	Lexers for the languages enabled for highlighting.

	Each enabled name is resolved through Pygments, and every alias of
	the resolved lexer is registered, so enabling ``python`` also
	highlights blocks tagged ``py``.
	"""

	def __init__(self, languages: Iterable[str] = ()):
		self._lexers: dict[str, type[Lexer]] = {}
		for name in languages:
			self.register(name)

	def register(self, name: str) -> None:
		"""
		Enable highlighting for a language.

		Raises:
			ValueError: If Pygments has no lexer for the name.
		"""
		try:
			lexer = get_lexer_by_name(name)
		except ClassNotFound as e:
			raise ValueError(f"no highlighter available for {name!r}") from e
		lexer_cls = type(lexer)
		self._lexers[name.lower()] = lexer_cls
		for alias in lexer_cls.aliases:
			self._lexers.setdefault(alias.lower(), lexer_cls)

	def resolve(self, language: str | None) -> type[Lexer] | None:
		"""Return the lexer class for a language tag, or None."""
		if not language:
			return None
		return self._lexers.get(language.lower())

	def __bool__(self) -> bool:
		return bool(self._lexers)

	def __contains__(self, language: str) -> bool:
		return self.resolve(language) is not None


def render_tokens(lexer_cls: type[Lexer], source: str) -> str:
	"""
	Tokenize source text and render the tokens as HTML spans.

	A fresh lexer and formatter are created per call. Leading and
	trailing newlines are preserved as written.

	Parameters:
		lexer_cls: Pygments lexer class for the language.
		source: Unescaped source text.

	Returns:
		Inner HTML: one ``<span class="...">`` per token run.
	"""
	if not source:
		return ""
	lexer = lexer_cls(stripnl=False, ensurenl=False)
	formatter = HtmlFormatter(nowrap=True)
	return pygments_highlight(source, lexer, formatter)


class Highlighter:
	"""
	Rewrites code blocks in HTML with highlighted markup.

	Parameters:
		registry: Enabled languages.
		regex: Pattern with a language group and an escaped-code group.
	"""

	def __init__(self, registry: HighlighterRegistry,
	             regex: str | Pattern[str] | None = None):
		self.registry = registry
		if regex is None:
			self.regex = DEFAULT_CODE_BLOCK_RE
		elif isinstance(regex, str):
			self.regex = re.compile(regex)
		else:
			self.regex = regex

	def highlight(self, content: str, path: str = "") -> str:
		"""Return content with every matching code block highlighted."""
		return self.regex.sub(lambda m: self._replace(m, path), content)

	def _replace(self, match: re.Match, path: str) -> str:
		language = match.group(1)
		code = match.group(2) or ""
		lexer_cls = self.registry.resolve(language)
		if lexer_cls is None:
			if language:
				logger.debug("no highlighter for %r, leaving block as is",
				             language)
			return match.group(0)
		source = html.unescape(code)
		try:
			highlighted = render_tokens(lexer_cls, source)
		except Exception as e:
			failure = HighlightFailure(
			    language,
			    f"could not highlight {language!r} block: {e}",
			    path=path,
			)
			logger.warning("%s%s", f"{path}: " if path else "", failure)
			return match.group(0)
		return f'<pre><code class="highlight {language}">{highlighted}</code></pre>'


def highlight(content: str,
              highlighters: Iterable[str] | HighlighterRegistry,
              regex: str | Pattern[str] | None = None,
              path: str = "") -> str:
	"""
	Highlight code blocks in HTML.

	Parameters:
		content: HTML to process.
		highlighters: Enabled languages or a prepared registry.
		regex: Optional pattern overriding the default code block shape.
		path: Source path, used in log messages.

	Returns:
		HTML with each code block in an enabled language replaced by
		``<pre><code class="highlight LANG">`` token markup. Blocks with
		no language, an unknown language or a tokenizing failure are
		left unchanged.
	"""
	registry = highlighters if isinstance(
	    highlighters, HighlighterRegistry) else HighlighterRegistry(highlighters)
	if not registry:
		return content
	return Highlighter(registry, regex).highlight(content, path=path)


def render_style_css(style: str = "default",
                     selector: str = ".highlight") -> str:
	"""Return Pygments CSS for the token classes, scoped to a selector."""
	return HtmlFormatter(style=style).get_style_defs(selector)


__all__ = [
    "DEFAULT_CODE_BLOCK_RE",
    "HighlighterRegistry",
    "Highlighter",
    "highlight",
    "render_tokens",
    "render_style_css",
]
