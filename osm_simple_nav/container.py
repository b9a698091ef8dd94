"""Dependency injection container.

This module provides a simple DI container without external frameworks.
It allows registering and resolving dependencies for the application.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, get_config


@dataclass
class Container:
    """Dependency injection container.

    Usage:
        # Production
        container = Container.create_default()
        service = container.resolve(NavigationService)

        # Testing
        container = Container()
        container.register(ProcessLogPort, lambda: RecordingProcessLog())
        process_log = container.resolve(ProcessLogPort)

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[type[Any], Callable[[], Any]] = field(
        default_factory=dict, repr=False
    )
    _singletons: Dict[type[Any], Any] = field(default_factory=dict, repr=False)
    _singleton_types: set[type[Any]] = field(default_factory=set, repr=False)

    def register(
        self,
        port_type: type[Any],
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Register a factory for a port type.

        Args:
            port_type: The type (usually a Protocol) to register.
            factory: A callable that creates instances of the type.
            singleton: If True, only one instance is created.
        """
        self._factories[port_type] = factory
        self._singletons.pop(port_type, None)
        if singleton:
            self._singleton_types.add(port_type)
        else:
            self._singleton_types.discard(port_type)

    def resolve(self, port_type: type[Any]) -> Any:
        """Resolve an instance of a port type.

        Raises:
            KeyError: If the type is not registered.
        """
        if port_type not in self._factories:
            raise KeyError(f"Type not registered: {port_type}")

        if port_type in self._singleton_types:
            if port_type not in self._singletons:
                self._singletons[port_type] = self._factories[port_type]()
            return self._singletons[port_type]

        return self._factories[port_type]()

    def clear_all(self) -> None:
        """Clear all registrations and singletons."""
        self._factories.clear()
        self._singletons.clear()
        self._singleton_types.clear()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with default production bindings.

        Args:
            config: Optional configuration override.

        Returns:
            A configured Container instance.
        """
        from .adapters.distance import GeodesicDistanceCalculator
        from .adapters.process_log import LoggingProcessLog
        from .adapters.rendering import FoliumMapExporter, GraphvizExporter
        from .adapters.rendering.graphviz_exporter import FORMATS
        from .ports.distance import DistanceCalculatorPort
        from .ports.process_log import ProcessLogPort
        from .services import NavigationService

        config = config or get_config()
        container = cls(config=config)

        container.register(DistanceCalculatorPort, GeodesicDistanceCalculator)
        container.register(ProcessLogPort, LoggingProcessLog)
        container.register(
            GraphvizExporter, lambda: GraphvizExporter(config=config.export)
        )
        container.register(
            FoliumMapExporter, lambda: FoliumMapExporter(config=config.export)
        )

        def create_navigation_service() -> NavigationService:
            graphviz = container.resolve(GraphvizExporter)
            folium = container.resolve(FoliumMapExporter)
            exporters = {suffix: graphviz for suffix in FORMATS}
            exporters.update({"html": folium, "htm": folium})
            return NavigationService(
                distance_calculator=container.resolve(DistanceCalculatorPort),
                process_log=container.resolve(ProcessLogPort),
                exporters=exporters,
                config=config.loader,
            )

        container.register(NavigationService, create_navigation_service)

        return container


# Global default container (lazy initialized)
_default_container: Optional[Container] = None


def get_container() -> Container:
    """Get the default application container (creates one if needed)."""
    global _default_container
    if _default_container is None:
        _default_container = Container.create_default()
    return _default_container


def reset_container() -> None:
    """Reset the default container.

    Call this in tests to ensure a fresh container.
    """
    global _default_container
    if _default_container is not None:
        _default_container.clear_all()
    _default_container = None
