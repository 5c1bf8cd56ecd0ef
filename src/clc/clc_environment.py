"""The environment an expression is evaluated in: previous results and built-in names."""

from dataclasses import dataclass, field

from clc.clc_history import CLCHistory
from clc.clc_registry import CLCConstant, CLCFunction, CLCRegistry
from clc.clc_unit import CLCUnit
from clc.clc_value import CLCValue


@dataclass(frozen=True)
class CLCEnvironment:
    """
    Lookups available to the evaluator.

    The evaluator only reads from the environment; appending a new result to
    the history is the caller's job once evaluation has succeeded.
    """
    history: CLCHistory = field(default_factory=CLCHistory)
    registry: CLCRegistry = field(default_factory=CLCRegistry.default)

    def lookup_history(self, index: int) -> CLCValue | None:
        """Return the result `index` steps back, or None."""
        return self.history.get(index)

    def lookup_constant(self, name: str) -> CLCConstant | None:
        """Return a constant by exact name, or None."""
        return self.registry.lookup_constant(name)

    def lookup_function(self, name: str) -> CLCFunction | None:
        """Return a function by exact name, or None."""
        return self.registry.lookup_function(name)

    def lookup_unit(self, name_or_suffix: str) -> CLCUnit | None:
        """Return a unit by suffix or name, or None."""
        return self.registry.lookup_unit(name_or_suffix)
