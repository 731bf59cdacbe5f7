# onyxtree

onyxtree builds XML and HTML documents as trees of nodes. You can query
those trees, copy and compare them, and write them out either compactly or
indented. It also lets you describe fixed fragments of markup up front.
Templates can contain named placeholders, and you fill these in with live
nodes later.

## Installation

```
pip install onyxtree
```

## Building a tree

```python
from onyxtree.node import Attribute, Node

page = Node(
    "html", False,
    Attribute("lang", "en"),
    Node("head", False),
    Node("body", False, Node("div", False, Attribute("id", "main"))),
)

page.serialize()
# '<html lang="en"><head></head><body><div id="main"></div></body></html>'

print(page.serialize_pretty("\t", True))   # indent with tabs, sort attributes
```

After the tag name and the void flag, the `Node` constructor takes any mix of
the following:

- `Attribute` objects
- nodes
- `onyxtree.handle.NodeHandle` objects
- lists or tuples of any of these

The constructor raises errors in these cases:

- Two attributes with the same name raise `ValueError("Adding duplicate Attribute")`.
- A non-owning handle raises `ValueError`.
- A void node such as `Node("img", True)` takes no children. Adding one raises `RuntimeError`.
- Adding a node that already has a parent raises `RuntimeError`.
- Adding a node beneath itself raises `ValueError`.

If you call `serialize_pretty()` without arguments, it uses the class-wide
settings. You change these with `Node.set_indentation_sequence()` (default
`"\t"`) and `Node.set_sort_attributes()` (default `False`).

## Querying and editing

```python
page.get_children_by_id("main")         # all descendants, depth-first, document order
page.get_children_by_tag_name("div")
page.get_children_by_attribute("class", "item")
page.get_children_by_attribute_name("class")
page.get_children_by_class_name("item")
page.get_children_by_name("contact-form")

page["theme"] = "dark"                  # set or append an attribute
page["theme"]                           # "dark"; a missing name is created empty
page.get_attribute_value("lang")        # KeyError when missing
page.remove_attribute("theme")

body = page.get_children_by_tag_name("body")[0]
body += Node("p", False)                # same as body.add_child(...)
handle = page.remove_child(body.children()[0])
handle.get()                            # the detached node
page.replace_child(body, Node("body", False))
```

`remove_child()` and `replace_child()` accept any descendant, not only direct
children. Both return a `NodeHandle` that owns the detached node. If the node
passed to `remove_child()` is not below the tree, it returns an empty handle.
In the same situation, `replace_child()` raises `ValueError`.

### Shape, copying and comparison

- `size()` counts every node in the tree.
- `depth()` counts the levels below a node. A node without children has depth 0.
- `leaf_count()` counts the nodes that have no children.
- `deep_copy()` makes an independent copy. `shallow_copy()` copies one node and its attributes, without children.
- `deep_equals()` and `shallow_equals()` compare tag names, void flags, attributes and child counts. The order of attributes does not matter.

## Handles

`NodeHandle(node, owning)` pairs a node with an ownership flag. The methods are:

- `get()` returns the node.
- `owning()` reports the flag.
- `release()` returns the node and empties the handle.
- `reset()` empties the handle.
- `take()` moves the node into a new handle.
- `to_unique()` gives up ownership and returns the node. It raises `OwnershipError` if the handle does not own its node.

## Escaping

`onyxtree.serialize.escape(text, escape_multibyte)` replaces `& < > " '` with
character entities. If `escape_multibyte` is true, it also writes non-ASCII
characters as hexadecimal references such as `&#x1f60a;`.

When a tree is serialized, each attribute value is escaped according to that
attribute's `should_escape` and `escape_multibyte` fields.

## Static fragments and templates

`onyxtree.fragments` holds immutable, fixed pieces of markup. Each is written
verbatim by `serialize()`, and each reports its length in UTF-8 bytes with
`size()`. The fragments are:

- `StaticAttribute`
- `StaticText`
- `StaticComment`
- `StaticCData`
- `StaticDoctype`
- `StaticProcessingInstruction`
- `StaticXmlDeclaration`

`onyxtree.templates` combines fragments into larger structures:

- `StaticElement(name, is_void, *children)` describes a fixed element.
    - Attributes must come before all other children.
    - A void element accepts only attributes.
    - Void elements serialize as `<img src="a.jpg" />`.
    - `dynamic_tree()` turns the element into a mutable `Node` tree. In that tree, text is escaped, and `--` in comments, `]]>` in CDATA and `?>` in processing instructions are written as character references.
- `Placeholder(name)` marks a slot.
- `PlaceholderDocument(*children)` holds top-level items.
    - `serialize()` writes all the items.
    - `dynamic_tree()` builds a mutable tree.
    - `serialize_with_placeholders(bindings)` and `dynamic_tree_with_placeholders(bindings)` fill the placeholders. `bindings` is a mapping or an iterable of `(name, node)` pairs.
    - An unknown placeholder name raises `ValueError`.
    - The dynamic variant inserts the given nodes themselves into the tree, so those nodes must not already have a parent.

```python
from onyxtree.node import Node
from onyxtree.templates import Placeholder, PlaceholderDocument, StaticElement

doc = PlaceholderDocument(
    StaticElement("html", False,
                  StaticElement("head", False),
                  StaticElement("body", False, Placeholder("list"))),
)
doc.serialize_with_placeholders({"list": Node("ul", False, Node("li", False))})
# '<html><head></head><body><ul><li></li></ul></body></html>'
```

## What it does not do

- onyxtree only builds and writes documents. It has no parser, so it cannot read existing XML or HTML into a tree.
- The mutable `Node` API has no public classes for text, comments, CDATA, doctypes or declarations. These reach a mutable tree only through the `dynamic_tree()` methods in `onyxtree.templates`.
- There are no search indices. Every query walks the tree.

## Running the tests

```
pip install -e .[test]
pytest
```