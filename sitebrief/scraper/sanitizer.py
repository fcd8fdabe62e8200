"""Regex-based stripping of executable and non-visible markup."""

from __future__ import annotations

import re

_SCRIPT_RE = re.compile(r"<script[\s\S]*?</script>", re.IGNORECASE)
_STYLE_RE = re.compile(r"<style[\s\S]*?</style>", re.IGNORECASE)
_COMMENT_RE = re.compile(r"<!--[\s\S]*?-->")

DEFAULT_MAX_CHARS = 800_000


def sanitize_html(html: str, max_chars: int = DEFAULT_MAX_CHARS) -> str:
    """Remove ``<script>``, ``<style>`` and comment blocks, then truncate.

    Removal is best-effort: an opening tag without a matching close is left
    in place as literal text. The cap applies after stripping.
    """
    html = _SCRIPT_RE.sub("", html)
    html = _STYLE_RE.sub("", html)
    html = _COMMENT_RE.sub("", html)
    return html[:max_chars]
