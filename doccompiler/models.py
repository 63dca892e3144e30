"""Core descriptor models shared across compiler passes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from .fqsen import ROOT, SEPARATOR, local_name, segments, split_path

NAMESPACE_INDEX_PREFIX = "~"


class ElementKind(str, Enum):
    """Discriminator for structural elements."""

    CLASS = "class"
    INTERFACE = "interface"
    TRAIT = "trait"
    ENUM = "enum"
    FUNCTION = "function"
    CONSTANT = "constant"
    FILE = "file"
    METHOD = "method"
    PROPERTY = "property"
    CASE = "case"


@dataclass
class Tag:
    """A single descriptive metadata tag such as ``@package Core``."""

    name: str
    description: str = ""


@dataclass(eq=False)
class Element:
    """A documentable construct produced by the upstream assembler."""

    kind: ElementKind
    fqsen: str
    name: str = ""
    namespace: Union[str, "NamespaceNode"] = ""
    package: Union[str, "PackageNode", None] = None
    tags: Dict[str, List[Tag]] = field(default_factory=dict)
    members: Dict[ElementKind, List["Element"]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.name:
            self.name = local_name(self.fqsen)

    @property
    def namespace_path(self) -> str:
        """Textual namespace, also when already bound to a node."""
        if isinstance(self.namespace, NamespaceNode):
            return self.namespace.fqsen
        return self.namespace

    def add_tag(self, tag: Tag) -> None:
        self.tags.setdefault(tag.name, []).append(tag)

    def first_tag(self, name: str) -> Optional[Tag]:
        tags = self.tags.get(name)
        return tags[0] if tags else None

    def add_member(self, member: "Element") -> "Element":
        self.members.setdefault(member.kind, []).append(member)
        return member

    def members_of(self, kind: ElementKind) -> List["Element"]:
        return list(self.members.get(kind, []))

    @property
    def methods(self) -> List["Element"]:
        return self.members_of(ElementKind.METHOD)

    @property
    def properties(self) -> List["Element"]:
        return self.members_of(ElementKind.PROPERTY)

    @property
    def constants(self) -> List["Element"]:
        return self.members_of(ElementKind.CONSTANT)

    @property
    def cases(self) -> List["Element"]:
        return self.members_of(ElementKind.CASE)


@dataclass(eq=False)
class FileElement(Element):
    """A source file and the top-level elements declared in it."""

    kind: ElementKind = ElementKind.FILE
    fqsen: str = ""
    path: str = ""
    hash: str = ""
    source: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.fqsen:
            self.fqsen = self.path
        if not self.name:
            self.name = self.path.rsplit("/", 1)[-1]

    @property
    def functions(self) -> List[Element]:
        return self.members_of(ElementKind.FUNCTION)

    @property
    def classes(self) -> List[Element]:
        return self.members_of(ElementKind.CLASS)

    @property
    def interfaces(self) -> List[Element]:
        return self.members_of(ElementKind.INTERFACE)

    @property
    def traits(self) -> List[Element]:
        return self.members_of(ElementKind.TRAIT)

    @property
    def enums(self) -> List[Element]:
        return self.members_of(ElementKind.ENUM)


NAMESPACE_MEMBER_KINDS: Tuple[ElementKind, ...] = (
    ElementKind.CONSTANT,
    ElementKind.FUNCTION,
    ElementKind.CLASS,
    ElementKind.INTERFACE,
    ElementKind.TRAIT,
    ElementKind.ENUM,
)

PACKAGE_MEMBER_KINDS: Tuple[ElementKind, ...] = (
    ElementKind.FILE,
    ElementKind.CONSTANT,
    ElementKind.FUNCTION,
    ElementKind.CLASS,
    ElementKind.INTERFACE,
    ElementKind.TRAIT,
)


class _TreeNode:
    """Shared shape of namespace and package nodes."""

    member_kinds: Tuple[ElementKind, ...] = ()

    def __init__(self, name: str, fqsen: str) -> None:
        self.name = name
        self.fqsen = fqsen
        self.parent: Optional["_TreeNode"] = None
        self.children: Dict[str, Any] = {}
        self.members: Dict[ElementKind, List[Element]] = {kind: [] for kind in self.member_kinds}

    def collection_for(self, kind: ElementKind) -> List[Element]:
        """Return the member collection that holds elements of ``kind``."""
        try:
            return self.members[kind]
        except KeyError:
            raise ValueError(
                f"{type(self).__name__} does not hold '{kind.value}' elements"
            ) from None

    def add_child(self, key: str, child: Any) -> None:
        child.parent = self
        self.children[key] = child

    @property
    def depth(self) -> int:
        return len(segments(self.fqsen))

    def ancestors(self) -> Iterator["_TreeNode"]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.fqsen!r})"


class NamespaceNode(_TreeNode):
    """One segment of the lexical namespace hierarchy."""

    member_kinds = NAMESPACE_MEMBER_KINDS

    def __init__(self, name: str, fqsen: str, parent_path: str = "") -> None:
        super().__init__(name, fqsen)
        self.parent_path = parent_path

    @classmethod
    def root(cls) -> "NamespaceNode":
        return cls(name="", fqsen=ROOT)

    @classmethod
    def from_path(cls, path: str) -> "NamespaceNode":
        parent_path, name = split_path(path)
        return cls(name=name, fqsen=path, parent_path=parent_path)

    @property
    def is_root(self) -> bool:
        return self.fqsen == ROOT

    @property
    def constants(self) -> List[Element]:
        return self.members[ElementKind.CONSTANT]

    @property
    def functions(self) -> List[Element]:
        return self.members[ElementKind.FUNCTION]

    @property
    def classes(self) -> List[Element]:
        return self.members[ElementKind.CLASS]

    @property
    def interfaces(self) -> List[Element]:
        return self.members[ElementKind.INTERFACE]

    @property
    def traits(self) -> List[Element]:
        return self.members[ElementKind.TRAIT]

    @property
    def enums(self) -> List[Element]:
        return self.members[ElementKind.ENUM]


class PackageNode(_TreeNode):
    """One segment of the tag-derived package hierarchy."""

    member_kinds = PACKAGE_MEMBER_KINDS

    @classmethod
    def root(cls) -> "PackageNode":
        return cls(name=SEPARATOR, fqsen=ROOT)

    @property
    def files(self) -> List[Element]:
        return self.members[ElementKind.FILE]

    @property
    def constants(self) -> List[Element]:
        return self.members[ElementKind.CONSTANT]

    @property
    def functions(self) -> List[Element]:
        return self.members[ElementKind.FUNCTION]

    @property
    def classes(self) -> List[Element]:
        return self.members[ElementKind.CLASS]

    @property
    def interfaces(self) -> List[Element]:
        return self.members[ElementKind.INTERFACE]

    @property
    def traits(self) -> List[Element]:
        return self.members[ElementKind.TRAIT]


class IndexStore:
    """Named, string-keyed collections shared by all passes of one build."""

    def __init__(self) -> None:
        self._indexes: Dict[str, Dict[str, Any]] = {}

    def get(self, name: str) -> Optional[Dict[str, Any]]:
        return self._indexes.get(name)

    def set(self, name: str, collection: Dict[str, Any]) -> Dict[str, Any]:
        self._indexes[name] = collection
        return collection

    def fetch(self, name: str, default: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Return the named index, installing ``default`` (or ``{}``) when absent."""
        if name not in self._indexes:
            self._indexes[name] = default if default is not None else {}
        return self._indexes[name]

    def __contains__(self, name: object) -> bool:
        return name in self._indexes


@dataclass(eq=False)
class DocumentationSet:
    """Aggregate of settings and indexes processed together by the compiler."""

    name: str = ""
    settings: Dict[str, Any] = field(default_factory=dict)
    indexes: IndexStore = field(default_factory=IndexStore)


@dataclass(eq=False)
class ApiSet(DocumentationSet):
    """Documentation set describing source code, keyed by file path."""

    files: Dict[str, FileElement] = field(default_factory=dict)
    namespace: NamespaceNode = field(default_factory=NamespaceNode.root)
    package: PackageNode = field(default_factory=PackageNode.root)

    def add_file(self, file: FileElement) -> FileElement:
        self.files[file.path] = file
        return file


__all__ = [
    "ApiSet",
    "DocumentationSet",
    "Element",
    "ElementKind",
    "FileElement",
    "IndexStore",
    "NAMESPACE_INDEX_PREFIX",
    "NAMESPACE_MEMBER_KINDS",
    "NamespaceNode",
    "PACKAGE_MEMBER_KINDS",
    "PackageNode",
    "Tag",
]
