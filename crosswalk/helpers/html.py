"""HTML cleanup for free-text metadata (abstracts, notes, descriptions)."""

import html
import re


HTML_TAG_RE = re.compile(r'<[^>]*>')
HTML_COMMENT_RE = re.compile(r'<!--[\s\S]*?-->')
BR_TAG_RE = re.compile(r'<br\s*/?>', re.IGNORECASE)
BLOCK_END_RE = re.compile(r'</(?:p|div|li|h[1-6]|blockquote|tr)>', re.IGNORECASE)
LINK_RE = re.compile(r'<a[^>]*href=["\']([^"\']+)["\'][^>]*>([^<]*)</a>', re.IGNORECASE)
MULTI_SPACE_RE = re.compile(r'\s+')


def strip_html(text: str) -> str:
    """Remove tags and comments, decode entities, and collapse whitespace."""
    if not text:
        return ""
    text = HTML_COMMENT_RE.sub("", text)
    text = BLOCK_END_RE.sub("\n", text)
    text = BR_TAG_RE.sub("\n", text)
    text = HTML_TAG_RE.sub("", text)
    text = html.unescape(text)
    return MULTI_SPACE_RE.sub(" ", text).strip()


def strip_html_preserve_links(text: str) -> str:
    """Like strip_html, but keeps anchors as "label (url)"."""
    if not text:
        return ""
    return strip_html(LINK_RE.sub(r"\2 (\1)", text))


def clean_text_preserve_newlines(text: str) -> str:
    """Strip markup while keeping paragraph breaks as blank lines."""
    if not text:
        return ""
    text = HTML_COMMENT_RE.sub("", text)
    text = BLOCK_END_RE.sub("\n\n", text)
    text = BR_TAG_RE.sub("\n", text)
    text = HTML_TAG_RE.sub("", text)
    text = html.unescape(text)

    lines = [MULTI_SPACE_RE.sub(" ", line).strip() for line in text.split("\n")]
    text = "\n".join(lines)
    text = re.sub(r'\n{3,}', "\n\n", text)
    return text.strip()


def is_html(text: str) -> bool:
    return bool(HTML_TAG_RE.search(text or ""))


def normalize_whitespace(text: str) -> str:
    """Collapse all whitespace (newlines included) to single spaces."""
    return MULTI_SPACE_RE.sub(" ", text or "").strip()


def truncate_text(text: str, max_len: int) -> str:
    """Truncate to max_len characters, preferring a word boundary, with '...'."""
    if len(text) <= max_len:
        return text
    if max_len <= 3:
        return text[:max_len]

    truncated = text[:max_len - 3]
    last_space = truncated.rfind(" ")
    if last_space > max_len // 2:
        truncated = truncated[:last_space]
    return truncated + "..."
