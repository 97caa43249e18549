"""Configuration classes for cspf computations."""

from dataclasses import dataclass

#: Clear a vertex's predecessor edges on strict improvement; append on exact tie.
PREDECESSOR_REPLACE = "replace"
#: Append on every improvement or tie, never clearing older entries.
PREDECESSOR_APPEND = "append"

_PREDECESSOR_POLICIES = (PREDECESSOR_REPLACE, PREDECESSOR_APPEND)


@dataclass
class SpfConfig:
    """Configuration for shortest path computations."""

    # How predecessor edges are kept when a vertex's distance changes.
    # "append" keeps edges of superseded, longer paths in the result.
    predecessor_policy: str = PREDECESSOR_REPLACE

    # Missing attribute keys evaluate to null instead of raising.
    missing_attribute_is_null: bool = True

    def __post_init__(self) -> None:
        if self.predecessor_policy not in _PREDECESSOR_POLICIES:
            raise ValueError(
                f"Unknown predecessor_policy '{self.predecessor_policy}', "
                f"expected one of {_PREDECESSOR_POLICIES}"
            )


# Global configuration instance
SPF_CONFIG = SpfConfig()
