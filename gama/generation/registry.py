"""
Strategy registry: resolves generation strategies by name.

Names are matched case-insensitively, so "PerlinNoise", "perlinnoise" and
"PERLINNOISE" all resolve to the same algorithm. Adding an algorithm means
registering one more name; Terrain never changes.
"""

import logging
from typing import Dict, Iterable, Optional, Tuple, Type

from gama.errors import UnknownStrategyError
from gama.generation.base import GenerationStrategy
from gama.generation.strategies import BUILTIN_STRATEGIES

logger = logging.getLogger(__name__)


def _key(name: str) -> str:
    return name.strip().lower()


class StrategyRegistry:
    """
    Table mapping strategy names to GenerationStrategy classes.

    Example:
        >>> registry = StrategyRegistry.with_builtins()
        >>> strategy = registry.resolve("DiamondSquare", seed=7)
    """

    def __init__(self, strategies: Optional[Iterable[Type[GenerationStrategy]]] = None):
        self._table: Dict[str, Type[GenerationStrategy]] = {}
        for cls in strategies or ():
            self.register(cls.name, cls)

    @classmethod
    def with_builtins(cls) -> "StrategyRegistry":
        """Registry holding all built-in strategies."""
        return cls(BUILTIN_STRATEGIES)

    def register(
        self,
        name: str,
        strategy_cls: Type[GenerationStrategy],
        replace: bool = False,
    ) -> None:
        """
        Register ``strategy_cls`` under ``name``.

        Raises:
            ValueError: If the name is empty, or already taken and
                ``replace`` is False.
            TypeError: If ``strategy_cls`` is not a GenerationStrategy subclass.
        """
        key = _key(name)
        if not key:
            raise ValueError("Strategy name must not be empty")
        if not (isinstance(strategy_cls, type) and issubclass(strategy_cls, GenerationStrategy)):
            raise TypeError(f"{strategy_cls!r} is not a GenerationStrategy subclass")
        if key in self._table and not replace:
            raise ValueError(f"Strategy already registered: {key}")
        self._table[key] = strategy_cls

    def resolve(self, name: str, **options) -> GenerationStrategy:
        """
        Build the strategy registered under ``name``.

        Args:
            name: Strategy name, any letter casing.
            **options: Forwarded to the strategy constructor (e.g. seed).

        Raises:
            UnknownStrategyError: If no strategy matches ``name``.
        """
        key = _key(name) if isinstance(name, str) else None
        if key not in self._table:
            raise UnknownStrategyError(name, self.names())
        strategy = self._table[key](**options)
        logger.debug("Resolved generation method %r to %r", name, strategy)
        return strategy

    def names(self) -> Tuple[str, ...]:
        """Registered names, sorted."""
        return tuple(sorted(self._table))

    def __contains__(self, name) -> bool:
        return isinstance(name, str) and _key(name) in self._table

    def __len__(self) -> int:
        return len(self._table)


default_registry = StrategyRegistry.with_builtins()


def resolve_strategy(name: str, **options) -> GenerationStrategy:
    """Resolve ``name`` against the default registry."""
    return default_registry.resolve(name, **options)


def register_strategy(
    name: str,
    strategy_cls: Type[GenerationStrategy],
    replace: bool = False,
) -> None:
    """Add a strategy to the default registry."""
    default_registry.register(name, strategy_cls, replace=replace)


def available_strategies() -> Tuple[str, ...]:
    """Names known to the default registry."""
    return default_registry.names()
