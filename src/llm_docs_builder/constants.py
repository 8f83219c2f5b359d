#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for llm-docs-builder.

This module centralizes the hardcoded values shared across the library.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. HTML to Markdown Conversion - tag sets and escaping rules
3. Document Pipeline Defaults - config file names and option defaults
4. llms.txt Generation and Validation - priorities and limits
5. Network - user agents, timeouts and redirect limits
"""

from __future__ import annotations

import re
from typing import Literal

# =============================================================================
# Type Definitions - Literal Types and Type Aliases
# =============================================================================

PresetName = Literal["conservative", "moderate", "aggressive", "documentation", "tutorial", "api_reference"]
ParseOutputFormat = Literal["summary", "json", "xml"]

# =============================================================================
# HTML to Markdown Conversion
# =============================================================================

HEADING_LEVELS: dict[str, int] = {"h1": 1, "h2": 2, "h3": 3, "h4": 4, "h5": 5, "h6": 6}

BLOCK_CONTAINER_TAGS = frozenset(
    ["div", "aside", "figure", "article", "section", "main", "header", "footer", "nav", "body", "html"]
)
BLOCK_LEVEL_TAGS = frozenset(["p", "pre", "ul", "ol", "dl", "table", "blockquote", "hr", "figcaption"])
INLINE_STRONG_TAGS = frozenset(["strong", "b"])
INLINE_EM_TAGS = frozenset(["em", "i"])
LIST_TAGS = frozenset(["ul", "ol"])
IGNORED_TAGS = frozenset(["script", "style", "head", "noscript", "iframe", "svg", "canvas"])
TABLE_CELL_TAGS = frozenset(["th", "td"])

SAFE_URI_SCHEMES = frozenset(["http", "https", "mailto", "ftp", "tel"])
SAFE_RELATIVE_LINK_PREFIXES = ("#", "/", "./", "../")
UNSAFE_URI_SCHEME_PATTERN = re.compile(r"^(?:javascript|vbscript|data)\s*:", re.IGNORECASE)
URI_SCHEME_PATTERN = re.compile(r"^([a-z][a-z0-9+\-.]*):", re.IGNORECASE)
MARKDOWN_LABEL_ESCAPE_PATTERN = re.compile(r"[\\\[\]()*_`!]")
STRICT_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")

# Class tokens that describe highlighter chrome rather than a language
GENERIC_CODE_CLASSES = frozenset(
    ["highlight", "code", "main", "gutter", "numbers", "line-numbers", "line-number", "line", "wrap", "table"]
)

MIN_CODE_FENCE_LENGTH = 3
MAX_BLANK_LINES = 2
DETECTION_SNIPPET_LENGTH = 500

# =============================================================================
# Document Pipeline Defaults
# =============================================================================

CONFIG_FILENAMES = ["llm-docs-builder.yml", "llm-docs-builder.yaml", ".llm-docs-builder.yml"]

DEFAULT_DOCS_PATH = "."
DEFAULT_OUTPUT_PATH = "llms.txt"
DEFAULT_BULK_SUFFIX = ".llm"
DEFAULT_HEADING_SEPARATOR = " / "
DEFAULT_CHARS_PER_TOKEN = 4.0
DEFAULT_SIMILARITY_THRESHOLD = 0.8

STOPWORDS = frozenset(
    """
    a an the this that these those
    is am are was were be being been
    have has had do does did
    will would shall should may might must can could
    i me my mine we us our ours
    you your yours
    he him his she her hers it its
    they them their theirs
    what which who whom whose where when why how
    all both each few more most other some such
    and or but if then else
    at by for from in into of on to with
    as so than
    very really quite
    there here
    about above across after against along among around because before behind below
    beneath beside besides between beyond during except inside near off since through
    throughout under until up upon within without
    """.split()
)

# =============================================================================
# llms.txt Generation and Validation
# =============================================================================

MAX_DESCRIPTION_LENGTH = 200
MAX_TITLE_LENGTH = 80
MAX_LINE_LENGTH = 120
MAX_LLMS_TXT_SIZE = 50_000
DEFAULT_PRIORITY = 7

# Checked in order against the lowercased file name
PRIORITY_KEYWORDS: list[tuple[str, int]] = [
    ("getting", 2),
    ("guide", 3),
    ("tutorial", 4),
    ("api", 5),
    ("reference", 6),
]

EXPECTED_SECTION_ORDER = ["Documentation", "Examples", "Optional"]

# =============================================================================
# Network
# =============================================================================

DEFAULT_USER_AGENT = "llm-docs-builder/1.0 (+https://github.com/mensfeld/llm-docs-builder)"
HUMAN_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) Chrome/120.0.0.0"
AI_USER_AGENT = "Claude-Web/1.0 (Anthropic AI Assistant)"
MAX_REDIRECTS = 10
DEFAULT_CONNECT_TIMEOUT = 10.0
DEFAULT_READ_TIMEOUT = 30.0
ALLOWED_URL_SCHEMES = frozenset(["http", "https"])

# Reduction percentage under which a page is assumed to serve no AI-specific version
NO_AI_VERSION_THRESHOLD = 5
