"""ReconcileConfig, KeyWhitespace and DuplicateKeyPolicy.

ReconcileConfig is a frozen (immutable) dataclass holding the knobs of a
reconciliation run.  The two StrEnums select how identity keys treat
whitespace and how colliding keys in the reference document are resolved.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto


class KeyWhitespace(StrEnum):
    """How whitespace inside a composite identity key is rewritten.

    - LEGACY: only the first space becomes "_" (matches keys produced by the
              original diagram tool byte for byte).
    - ALL:    every whitespace character becomes "_".
    """

    LEGACY = auto()
    ALL = auto()


class DuplicateKeyPolicy(StrEnum):
    """Which reference position a repeated identity key keeps.

    - LAST_WINS:  the later occurrence overwrites the earlier one.
    - FIRST_WINS: the first occurrence is kept, later ones are ignored.
    """

    LAST_WINS = auto()
    FIRST_WINS = auto()


@dataclass(frozen=True, slots=True)
class ReconcileConfig:
    """Immutable configuration for document reconciliation.

    Attributes:
        key_separator: Joins the property values of a composite key.
        whitespace: Whitespace rewriting applied to built keys.
        duplicate_policy: Resolution of colliding keys in the reference.
        drop_emptied_containers: When True, the pruner also removes a mapping
            or sequence that became empty because all of its children were
            pruned.  Containers that were empty to begin with are kept.
            Default False.
        marker: Document-start token guaranteed by ``normalize_marker``.
    """

    key_separator: str = "."
    whitespace: KeyWhitespace = KeyWhitespace.ALL
    duplicate_policy: DuplicateKeyPolicy = DuplicateKeyPolicy.LAST_WINS
    drop_emptied_containers: bool = False
    marker: str = "---"

    def __post_init__(self) -> None:
        if not self.key_separator:
            msg = "key_separator must be a non-empty string"
            raise ValueError(msg)
        if not self.marker:
            msg = "marker must be a non-empty string"
            raise ValueError(msg)
        if not isinstance(self.whitespace, KeyWhitespace):
            msg = f"whitespace must be a KeyWhitespace, got {self.whitespace!r}"
            raise ValueError(msg)
        if not isinstance(self.duplicate_policy, DuplicateKeyPolicy):
            msg = (
                "duplicate_policy must be a DuplicateKeyPolicy, "
                f"got {self.duplicate_policy!r}"
            )
            raise ValueError(msg)
