"""
Markup tree - tolerant tokenizer, allow-list tree filter and serializer.

Parses HTML-like and SVG-like fragments into a small node tree, filters the
tree against a FilterPolicy and serializes it back to a string.

Key behaviors:
- Malformed fragments never raise: unclosed tags are closed at the end,
  stray end tags are ignored, comments and declarations are dropped,
  CDATA sections are kept as text
- Forbidden tags are removed together with their whole subtree
- Tags that are merely not allowed are unwrapped (children kept)
- Attributes survive only if allowed, not forbidden and not an event handler
- Text is re-escaped on output, so entities never reintroduce markup
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass, field
from html.parser import HTMLParser

# Elements that never have children or an end tag in HTML serialization
VOID_TAGS: frozenset[str] = frozenset(
    [
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    ]
)

UNSAFE_VALUE_PATTERN = re.compile(r"^\s*(javascript|vbscript|data):", re.IGNORECASE)


# --- Policy ---


@dataclass(frozen=True)
class FilterPolicy:
    """
    Allow/deny lists for one markup grammar.

    Tag and attribute names are compared lowercased, which is how the
    tokenizer reports them.
    """

    allowed_tags: frozenset[str]
    allowed_attrs: frozenset[str] = frozenset()
    forbidden_tags: frozenset[str] = frozenset()
    forbidden_attrs: frozenset[str] = frozenset()
    void_tags: frozenset[str] = VOID_TAGS

    def allows_attr(self, name: str, value: str | None) -> bool:
        """Check whether an attribute may be kept on an allowed tag."""
        if name.startswith("on"):
            return False
        if name in self.forbidden_attrs or name not in self.allowed_attrs:
            return False
        return value is None or not UNSAFE_VALUE_PATTERN.match(value)


# --- Node Tree ---


@dataclass
class MarkupNode:
    """
    A node in a parsed markup fragment.

    Text nodes have tag None and carry text; the fragment root has tag None
    and no text.
    """

    tag: str | None = None
    attrs: list[tuple[str, str | None]] = field(default_factory=list)
    children: list[MarkupNode] = field(default_factory=list)
    text: str | None = None

    @property
    def is_text(self) -> bool:
        return self.tag is None and self.text is not None

    def iter_tags(self) -> list[str]:
        """All tag names in this subtree, depth first."""
        tags: list[str] = [self.tag] if self.tag else []
        for child in self.children:
            tags.extend(child.iter_tags())
        return tags


class _TreeBuilder(HTMLParser):
    def __init__(self, void_tags: frozenset[str]) -> None:
        super().__init__(convert_charrefs=True)
        self.root = MarkupNode()
        self._stack: list[MarkupNode] = [self.root]
        self._void_tags = void_tags

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        node = MarkupNode(tag=tag, attrs=attrs)
        self._stack[-1].children.append(node)
        if tag not in self._void_tags:
            self._stack.append(node)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._stack[-1].children.append(MarkupNode(tag=tag, attrs=attrs))

    def handle_endtag(self, tag: str) -> None:
        # Close up to the nearest matching open tag; ignore stray end tags
        for depth in range(len(self._stack) - 1, 0, -1):
            if self._stack[depth].tag == tag:
                del self._stack[depth:]
                return

    def unknown_decl(self, data: str) -> None:
        # CDATA sections carry literal text (SVG <text>); other declarations are dropped
        if data.startswith("CDATA["):
            self.handle_data(data[len("CDATA[") :])

    def handle_data(self, data: str) -> None:
        if not data:
            return
        siblings = self._stack[-1].children
        if siblings and siblings[-1].is_text:
            siblings[-1].text = (siblings[-1].text or "") + data
        else:
            siblings.append(MarkupNode(text=data))


def parse_markup(fragment: str, void_tags: frozenset[str] = VOID_TAGS) -> MarkupNode:
    """Parse a fragment into a tree rooted at an anonymous node."""
    builder = _TreeBuilder(void_tags)
    builder.feed(fragment)
    builder.close()
    return builder.root


# --- Filtering ---


def filter_node(node: MarkupNode, policy: FilterPolicy) -> list[MarkupNode]:
    """
    Filter one node against the policy.

    Returns the nodes that replace it: nothing for a forbidden subtree,
    the filtered children for an unwrapped tag, or a single cleaned node.
    """
    if node.is_text:
        return [MarkupNode(text=node.text)]

    children: list[MarkupNode] = []
    for child in node.children:
        children.extend(filter_node(child, policy))

    if node.tag is None:
        return [MarkupNode(children=children)]
    if node.tag in policy.forbidden_tags:
        return []
    if node.tag not in policy.allowed_tags:
        return children

    attrs = [(name, value) for name, value in node.attrs if policy.allows_attr(name, value)]
    return [MarkupNode(tag=node.tag, attrs=attrs, children=children)]


def filter_tree(root: MarkupNode, policy: FilterPolicy) -> MarkupNode:
    """Filter a parsed fragment, returning a new tree."""
    filtered = filter_node(root, policy)
    return filtered[0] if filtered else MarkupNode()


# --- Serialization ---


def serialize_markup(node: MarkupNode, void_tags: frozenset[str] = VOID_TAGS) -> str:
    """Serialize a tree back to markup, escaping text and attribute values."""
    if node.is_text:
        return html.escape(node.text or "", quote=False)

    inner = "".join(serialize_markup(child, void_tags) for child in node.children)
    if node.tag is None:
        return inner

    attr_parts = [
        name if value is None else f'{name}="{html.escape(value, quote=True)}"'
        for name, value in node.attrs
    ]
    open_tag = f"<{' '.join([node.tag, *attr_parts])}>"
    if node.tag in void_tags:
        return open_tag
    return f"{open_tag}{inner}</{node.tag}>"


def trim_markup(node: MarkupNode, excess: int, void_tags: frozenset[str] = VOID_TAGS) -> int:
    """
    Drop trailing content from a tree in place until its serialized form
    is `excess` characters shorter.

    Text is trimmed character by character from the end, counting each
    character at its escaped width; elements left empty are removed whole.
    Returns the excess that could not be removed (0 unless the tree is
    emptied).
    """
    while excess > 0 and node.children:
        last = node.children[-1]
        if last.is_text:
            text = last.text or ""
            while excess > 0 and text:
                excess -= len(html.escape(text[-1], quote=False))
                text = text[:-1]
            if text:
                last.text = text
                break
            node.children.pop()
        else:
            excess = trim_markup(last, excess, void_tags)
            if excess > 0:
                excess -= len(serialize_markup(last, void_tags))
                node.children.pop()
    return max(excess, 0)


def clean_markup(fragment: str, policy: FilterPolicy, max_length: int | None = None) -> str:
    """
    Parse, filter and serialize a fragment in one step.

    With max_length, trailing content is trimmed so the serialized output
    never exceeds it, even where escaping makes the text grow.
    """
    tree = filter_tree(parse_markup(fragment, policy.void_tags), policy)
    output = serialize_markup(tree, policy.void_tags)
    if max_length is None or len(output) <= max_length:
        return output

    trim_markup(tree, len(output) - max_length, policy.void_tags)
    return serialize_markup(tree, policy.void_tags)
