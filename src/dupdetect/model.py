# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Domain models for duplicate method detection."""

from dataclasses import dataclass, field
from typing import Literal

DuplicationType = Literal["EXACT", "SIGNATURE", "STRUCTURAL", "GENERIC"]

RecordIdentity = tuple[str, str, str, str, int, int, str]


@dataclass(frozen=True)
class MethodRecord:
    """Represent one extracted source method.

    Equality and hashing use the location identity only; ``body`` does not take
    part, so identical code found at two locations yields two distinct records.

    Attributes:
        class_name: Owning class name.
        method_name: Method name.
        signature: Normalized declaration text (modifiers, return type, name and
            parameter list).
        body: Full source body text.
        file_path: Originating source file path.
        start_line: Start line in source (1-based).
        end_line: End line in source (1-based).
        package_name: Owning package name; empty for the default package.
    """

    class_name: str
    method_name: str
    signature: str
    body: str = field(compare=False, repr=False)
    file_path: str
    start_line: int
    end_line: int
    package_name: str = ""

    @property
    def identity(self) -> RecordIdentity:
        """Return the identity tuple used for equality, hashing and cache keys."""
        return (
            self.class_name,
            self.method_name,
            self.signature,
            self.file_path,
            self.start_line,
            self.end_line,
            self.package_name,
        )

    @property
    def full_method_name(self) -> str:
        if self.package_name:
            return f"{self.package_name}.{self.class_name}.{self.method_name}"
        return f"{self.class_name}.{self.method_name}"

    @property
    def method_length(self) -> int:
        return len(self.body)


@dataclass(frozen=True)
class SimilarityScore:
    """Represent one pairwise similarity with the sub-scores that produced it.

    Attributes:
        structural: Normalized-body edit similarity in [0.0, 1.0].
        content: Token-set Jaccard similarity in [0.0, 1.0].
        signature: Return clause and parameter type similarity in [0.0, 1.0].
        total: Weighted combination in [0.0, 1.0].
    """

    structural: float
    content: float
    signature: float
    total: float


@dataclass(frozen=True)
class DuplicateGroup:
    """Represent one group of similar methods.

    Attributes:
        members: Grouped records; the founding record comes first.
        similarity_score: Aggregate pairwise similarity in [0.0, 1.0].
        duplication_type: Classification label; ``None`` until classified.

    Raises:
        ValueError: If fewer than two members are provided.
    """

    members: tuple[MethodRecord, ...]
    similarity_score: float
    duplication_type: DuplicationType | None = None

    def __post_init__(self) -> None:
        if len(self.members) < 2:
            raise ValueError("DuplicateGroup requires at least two members.")

    @property
    def group_size(self) -> int:
        return len(self.members)

    @property
    def class_names(self) -> list[str]:
        """Return distinct owning class names in member order."""
        return list(dict.fromkeys(member.class_name for member in self.members))

    @property
    def is_cross_class(self) -> bool:
        return len(self.class_names) > 1
