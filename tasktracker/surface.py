"""Rendering surface collaborator.

The engine only produces data for rendering: a small element tree with
text, inline style and classes. Elements that carry an ``id`` are indexed by
their surface so later refreshes can find them again by id, the way a page
is queried with ``getElementById``, instead of holding references across a
host re-render.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass(eq=False)
class Element:
    tag: str = 'div'
    id: str | None = None
    text: str = ''
    style: dict[str, str] = field(default_factory=dict)
    classes: list[str] = field(default_factory=list)
    children: list[Element] = field(default_factory=list)
    parent: Element | None = field(default=None, repr=False)
    surface: MemorySurface | None = field(default=None, repr=False)

    def create_child(self, tag: str = 'div', *, id: str | None = None, cls: str | None = None,
                     text: str | None = None) -> Element:
        child = Element(tag=tag, id=id, text=text or '', classes=[cls] if cls else [],
                        parent=self, surface=self.surface)
        self.children.append(child)
        if self.surface is not None and id:
            self.surface._index(child)
        return child

    def set_text(self, text: str) -> None:
        self.text = text

    def iter_tree(self):
        yield self
        for child in self.children:
            yield from child.iter_tree()

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {'tag': self.tag}
        if self.id:
            out['id'] = self.id
        if self.text:
            out['text'] = self.text
        if self.style:
            out['style'] = dict(self.style)
        if self.classes:
            out['classes'] = list(self.classes)
        if self.children:
            out['children'] = [c.to_dict() for c in self.children]
        return out


@runtime_checkable
class Surface(Protocol):
    def create_root(self, tag: str = 'div') -> Element: ...

    def get_element_by_id(self, element_id: str) -> Element | None: ...

    def remove(self, element_id: str) -> bool: ...


class MemorySurface:
    """In-process surface keeping an explicit id -> element registry."""

    def __init__(self) -> None:
        self._by_id: dict[str, Element] = {}
        self._roots: list[Element] = []

    def _index(self, element: Element) -> None:
        # Latest element wins when two renders reuse an id.
        if element.id:
            self._by_id[element.id] = element

    def create_root(self, tag: str = 'div') -> Element:
        root = Element(tag=tag, surface=self)
        self._roots.append(root)
        return root

    def get_element_by_id(self, element_id: str) -> Element | None:
        return self._by_id.get(element_id)

    def remove(self, element_id: str) -> bool:
        """Detach an element and drop it and its descendants from the index."""
        element = self._by_id.get(element_id)
        if element is None:
            return False
        if element.parent is not None:
            element.parent.children.remove(element)
        for node in element.iter_tree():
            if node.id and self._by_id.get(node.id) is node:
                del self._by_id[node.id]
        return True

    def clear(self) -> None:
        """Drop every rendered element (host discarded the whole view)."""
        self._by_id.clear()
        self._roots.clear()

    @property
    def roots(self) -> list[Element]:
        return list(self._roots)


__all__ = ["Element", "Surface", "MemorySurface"]
