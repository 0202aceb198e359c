"""OR-combination of type tokens deciding which entries survive."""

from __future__ import annotations

from collections.abc import Iterable

from ..file_tree_model.types import EntryMeta
from .classify import TypeClassifier
from .tokens import TypeToken


class PredicateSet:
    """Keep entries matching any token; an empty set keeps everything.

    Directories are exempt unless a token targets directory attributes
    (``dir``, ``hidden``, ``empty``, ``all``); a directory also survives when it
    has at least one surviving descendant.
    """

    def __init__(self, tokens: Iterable[TypeToken] = (), classifier: TypeClassifier | None = None) -> None:
        self.tokens: tuple[TypeToken, ...] = tuple(tokens)
        self.classifier = classifier if classifier is not None else TypeClassifier()

    @property
    def pass_through(self) -> bool:
        return not self.tokens

    @property
    def targets_directories(self) -> bool:
        return any(token.targets_directories for token in self.tokens)

    def keep(self, entry: EntryMeta) -> bool:
        if not self.tokens:
            return True
        return any(self.classifier.matches(entry, token) for token in self.tokens)

    def keep_directory(self, entry: EntryMeta, has_children: bool) -> bool:
        """Decide directory survival after its children were filtered."""
        if self.pass_through or has_children:
            return True
        return self.targets_directories and self.keep(entry)

    def with_token(self, token: TypeToken) -> "PredicateSet":
        return PredicateSet((*self.tokens, token), self.classifier)

    def __repr__(self) -> str:
        return f"PredicateSet({[str(token) for token in self.tokens]!r})"


__all__ = ["PredicateSet"]
