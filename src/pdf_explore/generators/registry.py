"""Registry for PDF generator implementations.

Uses a decorator pattern for registration, enabling both built-in and
third-party generators to register themselves at import time.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from collections.abc import Callable

    from pdf_explore.generators.base import PdfGenerator


class GeneratorRegistry:
    """Registry mapping string names to PdfGenerator classes.

    Built-in generators register via the ``@GeneratorRegistry.register()``
    decorator. The ``build()`` class method instantiates the generator named
    by the config's ``generator`` field.
    """

    _registry: ClassVar[dict[str, type[PdfGenerator]]] = {}

    @classmethod
    def register(cls, name: str) -> Callable[[type[PdfGenerator]], type[PdfGenerator]]:
        """Decorator that registers a PdfGenerator class under *name*.

        Args:
            name: Identifier used in config ``generator``.

        Returns:
            Decorator that registers the class and returns it unchanged.

        Raises:
            ValueError: If *name* is already registered.
        """

        def decorator(klass: type[PdfGenerator]) -> type[PdfGenerator]:
            if name in cls._registry:
                raise ValueError(f"Generator '{name}' is already registered")
            cls._registry[name] = klass
            return klass

        return decorator

    @classmethod
    def get(cls, name: str) -> type[PdfGenerator]:
        """Return the generator class registered under *name*.

        Raises:
            KeyError: If *name* is not registered.
        """
        if name not in cls._registry:
            available = ", ".join(sorted(cls._registry)) or "(none)"
            raise KeyError(f"Unknown generator '{name}'. Available: {available}")
        return cls._registry[name]

    @classmethod
    def build(cls, config: Any) -> PdfGenerator:
        """Instantiate the generator specified by *config.generator*.

        Args:
            config: An ExplorationConfig (or compatible object) with a
                ``generator`` attribute.

        Returns:
            A new PdfGenerator instance.
        """
        return cls.get(config.generator)()

    @classmethod
    def list_registered(cls) -> list[str]:
        """Return sorted list of registered generator names."""
        return sorted(cls._registry)
