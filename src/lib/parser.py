"""
Parser for org-style outline documents

Transforms outline text into a forest of block-level Nodes.

The parser is line oriented and makes a single pass:
1. Headings open a subtree that runs until the next heading of the same or
   higher level (property drawers directly below a heading are read into
   the heading's properties)
2. List items nest by indentation and run until the next non-blank line
   indented at or left of their bullet
3. Comments (# text) and directives (#+KEY: value) become leaf nodes
4. #+begin_X ... #+end_X blocks are opaque and never produce nodes

Only the constructs the reveal pipeline cares about become nodes; every
other line is plain text between nodes.

Example:
    >>> parser = Parser("* Slide\\n- one\\n# pause\\n- two\\n")
    >>> nodes = parser.parse()
    >>> nodes[0].kind
    <NodeKind.HEADING: 'heading'>
    >>> [child.kind.value for child in nodes[0].children]
    ['item', 'comment', 'item']
"""

import re
from typing import Dict, List, Optional, Tuple

from ..models.nodes import Node, NodeKind, ImageLink


HEADING_RE = re.compile(r'^(\*+)(?:[ \t]+(.*?))?[ \t]*$')
ITEM_RE = re.compile(r'^([ \t]*)([-+]|\d+[.)]|(?<=[ \t])\*)(?:[ \t]+(.*))?$')
COMMENT_RE = re.compile(r'^([ \t]*)#(?:[ \t](.*))?$')
DIRECTIVE_RE = re.compile(r'^([ \t]*)#\+([A-Za-z][\w-]*):[ \t]*(.*?)[ \t]*$')
BLOCK_BEGIN_RE = re.compile(r'^[ \t]*#\+begin_(\w+)', re.IGNORECASE)
DRAWER_PROPERTY_RE = re.compile(r'^[ \t]*:([\w-]+):[ \t]*(.*?)[ \t]*$')
IMAGE_RE = re.compile(
    r'\[\[(?:file:)?([^\[\]]+?\.(?:png|jpe?g|gif|svg|webp))\](?:\[[^\]]*\])?\]',
    re.IGNORECASE,
)


class Parser:
    """
    Parser for org-style outline text

    Handles:
    - Nested headings with property drawers
    - Nested list items (-, +, indented *, 1., 1))
    - Multi-line comments and #+KEY: directives
    - Opaque #+begin_/#+end_ blocks
    - Inline image links
    """

    def __init__(self, source: str, debug: bool = False, strict: Optional[bool] = None):
        """
        Initialize parser with source text

        Args:
            source: Raw outline text
            debug: Enable debug output for parser operations
            strict: Raise SyntaxError on unterminated blocks and drawers
                    (defaults to appsettings.strict_mode)

        Attributes:
            source: Source text being parsed (never modified, offsets index it)
            position: Offset of the line being parsed (for error reporting)
            line_number: Current line number (for error reporting)
            nodes: Accumulated top-level nodes
            images: Inline image links found in the source
        """
        if strict is None:
            from ..config import appsettings
            strict = appsettings.strict_mode

        self.source = source
        self.debug = debug
        self.strict = strict
        self.position = 0
        self.line_number = 1
        self.nodes: List[Node] = []
        self.images: List[ImageLink] = []

        # Open containers while scanning: headings by level, items by indent.
        # Each item entry carries the end of its last content line.
        self.heading_stack: List[Node] = []
        self.item_stack: List[Tuple[Node, int]] = []

    def lines_split(self) -> List[Tuple[int, str]]:
        """
        Split source into (offset, line) pairs, keeping line terminators

        Only '\\n' ends a line so offsets stay aligned with the source.
        """
        return [(m.start(), m.group(0)) for m in re.finditer(r'[^\n]*\n|[^\n]+', self.source)]

    def parse(self) -> List[Node]:
        """
        Parse source text into a node forest

        Returns:
            List of top-level Nodes. Returns empty list for empty or
            whitespace-only source.

        Raises:
            SyntaxError: In strict mode, for an unterminated block or drawer
        """
        self.nodes = []
        self.heading_stack = []
        self.item_stack = []
        self.images = self.images_find()

        lines = self.lines_split()
        i = 0
        while i < len(lines):
            start, raw = lines[i]
            line = raw.rstrip('\r\n')
            end = start + len(raw)
            self.position = start
            self.line_number = i + 1

            if not line.strip():
                i += 1
                continue

            heading = HEADING_RE.match(line)
            if heading:
                node = self.heading_open(start, len(heading.group(1)), heading.group(2) or "")
                i = self.drawer_consume(lines, i + 1, node)
                continue

            indent = len(line) - len(line.lstrip(' \t'))
            self.items_close(indent)

            block = BLOCK_BEGIN_RE.match(line)
            if block:
                last = self.block_skip(lines, i, block.group(1))
                last_start, last_raw = lines[last]
                self.items_extend(last_start + len(last_raw))
                i = last + 1
                continue

            directive = DIRECTIVE_RE.match(line)
            if directive:
                self.node_attach(Node(
                    kind=NodeKind.DIRECTIVE,
                    begin=start,
                    end=end,
                    key=directive.group(2).upper(),
                    value=directive.group(3),
                    line_number=self.line_number,
                ))
                self.items_extend(end)
                i += 1
                continue

            comment = COMMENT_RE.match(line)
            if comment:
                i = self.comment_consume(lines, i, indent)
                continue

            item = ITEM_RE.match(line)
            if item:
                node = Node(
                    kind=NodeKind.LIST_ITEM,
                    begin=start,
                    end=end,
                    indent=len(item.group(1)),
                    value=item.group(3) or "",
                    line_number=self.line_number,
                )
                self.node_attach(node)
                self.item_stack.append((node, end))
                self.items_extend(end)
                i += 1
                continue

            # Plain text: continuation of any enclosing item
            self.items_extend(end)
            i += 1

        self.items_close(-1)
        while self.heading_stack:
            self.heading_stack.pop().end = len(self.source)

        if self.debug:
            print(f"[parser] {len(self.nodes)} top-level nodes, {len(self.images)} images")

        return self.nodes

    def node_attach(self, node: Node) -> None:
        """Attach node to the innermost open item, heading, or the top level"""
        if self.item_stack:
            self.item_stack[-1][0].children.append(node)
        elif self.heading_stack:
            self.heading_stack[-1].children.append(node)
        else:
            self.nodes.append(node)

    def heading_open(self, start: int, level: int, title: str) -> Node:
        """
        Close items and same-or-deeper headings, then open a new heading

        Closed headings end where the new heading begins.
        """
        self.items_close(-1)
        while self.heading_stack and (self.heading_stack[-1].level or 0) >= level:
            self.heading_stack.pop().end = start

        node = Node(
            kind=NodeKind.HEADING,
            begin=start,
            end=len(self.source),
            level=level,
            value=title,
            line_number=self.line_number,
        )
        self.node_attach(node)
        self.heading_stack.append(node)
        return node

    def items_close(self, indent: int) -> None:
        """Close every open item whose bullet sits at or right of indent"""
        while self.item_stack and (self.item_stack[-1][0].indent or 0) >= indent:
            node, last_end = self.item_stack.pop()
            node.end = last_end

    def items_extend(self, end: int) -> None:
        """Record end as the last content line of every open item"""
        self.item_stack = [(node, end) for node, _ in self.item_stack]

    def comment_consume(self, lines: List[Tuple[int, str]], first: int, indent: int) -> int:
        """
        Merge consecutive comment lines at the same indentation into one node

        Returns:
            Index of the first line after the comment
        """
        texts: List[str] = []
        begin = lines[first][0]
        end = begin
        i = first
        while i < len(lines):
            start, raw = lines[i]
            line = raw.rstrip('\r\n')
            match = COMMENT_RE.match(line)
            if not match or len(match.group(1)) != indent:
                break
            texts.append(match.group(2) or "")
            end = start + len(raw)
            i += 1

        self.node_attach(Node(
            kind=NodeKind.COMMENT,
            begin=begin,
            end=end,
            value="\n".join(texts),
            line_number=first + 1,
        ))
        self.items_extend(end)
        return i

    def drawer_consume(self, lines: List[Tuple[int, str]], index: int, heading: Node) -> int:
        """
        Read a :PROPERTIES: drawer directly below a heading into its properties

        Returns:
            Index of the first line after the drawer (index if there is none)
        """
        if index >= len(lines) or lines[index][1].strip().upper() != ':PROPERTIES:':
            return index

        properties: Dict[str, str] = {}
        i = index + 1
        while i < len(lines):
            line = lines[i][1].strip()
            if line.upper() == ':END:':
                heading.properties = properties
                return i + 1
            match = DRAWER_PROPERTY_RE.match(line)
            if match:
                properties[match.group(1).upper()] = match.group(2)
            i += 1

        if self.strict:
            self.position = lines[index][0]
            self.line_number = index + 1
            self.error("Unterminated :PROPERTIES: drawer")
        heading.properties = properties
        return i

    def block_skip(self, lines: List[Tuple[int, str]], first: int, name: str) -> int:
        """
        Find the #+end_NAME line closing the block opened at first

        Returns:
            Index of the closing line, or of the last line when the block is
            unterminated (non-strict mode)
        """
        end_re = re.compile(rf'^[ \t]*#\+end_{re.escape(name)}\b', re.IGNORECASE)
        for i in range(first + 1, len(lines)):
            if end_re.match(lines[i][1]):
                return i

        if self.strict:
            self.error(f"Unterminated #+begin_{name} block")
        return len(lines) - 1

    def images_find(self) -> List[ImageLink]:
        """
        Locate inline image links

        Example:
            "See [[file:arch.png]]" -> [ImageLink(begin=4, end=20, path="arch.png")]
        """
        return [
            ImageLink(begin=m.start(), end=m.end(), path=m.group(1))
            for m in IMAGE_RE.finditer(self.source)
        ]

    def error(self, message: str) -> None:
        """
        Report parser error with source context

        Raises:
            SyntaxError: Always (this is an error reporting function)

        Example output:
            SyntaxError:
            Unterminated #+begin_src block
            Line 3, position 42
            Context: ...#+begin_src python...
                        ^
        """
        context_start = max(0, self.position - 40)
        context_end = min(len(self.source), self.position + 40)
        context = self.source[context_start:context_end]

        raise SyntaxError(
            f"\n{message}\n"
            f"Line {self.line_number}, position {self.position}\n"
            f"Context: ...{context}...\n"
            f"         {' ' * (self.position - context_start)}^"
        )
