# src/sanitizer/services/prettify_service.py
from __future__ import annotations

import logging
import re
import threading
from pathlib import Path
from typing import Any, Optional, Union

import lxml.html
from lxml import etree

logger = logging.getLogger(__name__)

STYLESHEET_PATH = Path(__file__).resolve().parent.parent / "files" / "pretty_print.xsl"

# Characters libxml2 refuses in a document, even when they decode fine.
_XML_INCOMPATIBLE = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")

_XML_DECLARATION = re.compile(r"\A<\?xml[^\n]*\n")
_HTML_OPEN = re.compile(r"\A<html(?:\s[^>]*)?>\n")
_HTML_CLOSE = re.compile(r"</html>\n?\Z")
_BLANK_LINE = re.compile(r"^[ \t\r]*\n", re.MULTILINE)
_TRAILING_CR = re.compile(r"\r+$", re.MULTILINE)
_TRAILING_CR_ENTITY = re.compile(r"(?:&#13;)+$", re.MULTILINE)


def repair_encoding(text: Union[str, bytes]) -> str:
    """
    Returns valid UTF-8 text, silently dropping whatever cannot be encoded
    (undecodable bytes, lone surrogates).
    """
    if isinstance(text, bytes):
        return text.decode("utf-8", errors="ignore")
    return text.encode("utf-8", errors="ignore").decode("utf-8")


class PrettifyService:
    """
    Serializes a tree into the canonical, diff-friendly string form.
    The XSLT stylesheet is compiled once per process and shared read-only.
    """

    _stylesheet: Optional[etree.XSLT] = None
    _lock = threading.Lock()

    @classmethod
    def stylesheet(cls) -> etree.XSLT:
        """Compiles the pretty-print stylesheet on first use."""
        if cls._stylesheet is None:
            with cls._lock:
                if cls._stylesheet is None:
                    cls._stylesheet = etree.XSLT(etree.parse(str(STYLESHEET_PATH)))
                    logger.debug("Pretty-print stylesheet loaded from %s", STYLESHEET_PATH)
        return cls._stylesheet

    @staticmethod
    def to_document(obj: Any) -> Optional[etree._ElementTree]:
        """
        Forces a tree, fragment or string into a full lxml document so the
        stylesheet can be applied. Fragments get an <html><body> shell.
        Returns None when there is nothing to serialize.
        """
        markup = obj if isinstance(obj, (str, bytes)) else str(obj)
        markup = _XML_INCOMPATIBLE.sub("", repair_encoding(markup))
        if not markup.strip():
            return None

        parser = lxml.html.HTMLParser(encoding="utf-8")
        try:
            root = lxml.html.document_fromstring(markup.encode("utf-8"), parser=parser)
        except etree.ParserError as e:
            logger.debug("Nothing left to serialize: %s", e)
            return None
        return root.getroottree()

    @classmethod
    def prettify(cls, obj: Any) -> str:
        """
        Pretty-prints HTML and removes the cruft the stylesheet leaves behind:
        the XML declaration, the <html> wrapper, the top-level indentation,
        blank lines and DOS line endings.
        """
        doc = cls.to_document(obj)
        if doc is None:
            return ""

        text = repair_encoding(str(cls.stylesheet()(doc)))

        # Remove xml declaration and <html> tags
        text = _XML_DECLARATION.sub("", text, count=1)
        text = _HTML_OPEN.sub("", text, count=1)
        text = _HTML_CLOSE.sub("", text, count=1)

        # Remove top-level indentation
        indent = len(re.match(r"[ \t]*", text).group(0))
        if indent:
            text = re.sub(rf"^[ \t]{{0,{indent}}}", "", text, flags=re.MULTILINE)

        text = _BLANK_LINE.sub("", text)

        # Remove DOS newlines
        text = _TRAILING_CR.sub("", text)
        text = _TRAILING_CR_ENTITY.sub("", text)

        return text


def prettify(obj: Any) -> str:
    return PrettifyService.prettify(obj)
