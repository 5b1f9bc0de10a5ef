"""
Custom Pygments lexer for outline syntax highlighting

Colours the visible text of rendered frames.

Token types:
- Generic.Heading: Heading stars and titles
- Comment: # comments (including # pause)
- Name.Tag / Literal.String: #+KEY: directives and their values
- Keyword.Namespace / String: #+begin_X ... #+end_X blocks
- Name.Attribute: Property drawer lines
- Punctuation: List bullets
- Name.Builtin: [[links]]
- Generic.Strong / String.Backtick: *bold*, =verbatim=, ~code~
"""

import re

from pygments.lexer import RegexLexer, bygroups
from pygments.token import (
    Text,
    Punctuation,
    Name,
    String,
    Keyword,
    Literal,
    Comment,
    Generic,
)


class OutlineLexer(RegexLexer):
    """
    Lexer for org-style outline text

    Example:
        * Agenda
        - first
        # pause
        - second

    Tokens:
        * Agenda → Generic.Heading
        -        → Punctuation
        # pause  → Comment
    """

    name = 'Outline'
    aliases = ['outline', 'org']
    filenames = ['*.org']
    flags = re.MULTILINE

    tokens = {
        'root': [
            # Headings
            (r'^\*+[ \t].*$', Generic.Heading),
            (r'^\*+$', Generic.Heading),

            # Blocks are opaque until their #+end_ line
            (r'^[ \t]*#\+(?i:begin)_\w+.*\n', Keyword.Namespace, 'block'),

            # Directives
            (r'^([ \t]*)(#\+[A-Za-z][\w-]*:)(.*)$',
             bygroups(Text, Name.Tag, Literal.String)),

            # Comments
            (r'^[ \t]*#(?:[ \t].*)?$', Comment),

            # Property drawer lines
            (r'^[ \t]*:[\w-]+:.*$', Name.Attribute),

            # List bullets
            (r'^([ \t]*)([-+]|\d+[.)])(?=[ \t]|$)', bygroups(Text, Punctuation)),
            (r'^([ \t]+)(\*)(?=[ \t])', bygroups(Text, Punctuation)),

            # Links and images
            (r'\[\[[^\]\n]+\](?:\[[^\]\n]*\])?\]', Name.Builtin),

            # Emphasis
            (r'\*[^*\s][^*\n]*\*', Generic.Strong),
            (r'[=~][^=~\s][^=~\n]*[=~]', String.Backtick),

            # Everything else is text
            (r'[^\n*\[=~]+', Text),
            (r'\n', Text),
            (r'.', Text),
        ],

        'block': [
            (r'^[ \t]*#\+(?i:end)_\w+.*$', Keyword.Namespace, '#pop'),
            (r'.*\n', String),
            (r'.+', String),
        ],
    }


def get_lexer() -> OutlineLexer:
    """
    Get the OutlineLexer instance

    Returns:
        OutlineLexer instance ready for use with Pygments
    """
    return OutlineLexer()
