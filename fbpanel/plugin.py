"""Plugin classes, their registry and plugin instances."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

__all__ = [
    "PluginError",
    "PluginClass",
    "PluginInstance",
    "PluginRegistry",
    "default_edit_config_message",
]

log = logging.getLogger(__name__)


class PluginError(Exception):
    """Raised on plugin registration or loading failures."""


@dataclass(eq=False)
class PluginClass:
    """Description of a plugin type and its behaviour.

    A missing constructor always succeeds; a missing destructor does nothing.
    """

    type: str
    name: str = ""
    version: str = ""
    description: str = ""
    constructor: Optional[Callable[["PluginInstance"], Any]] = None
    destructor: Optional[Callable[["PluginInstance"], None]] = None
    save_config: Optional[Callable[["PluginInstance", Any], None]] = None
    edit_config: Optional[Callable[["PluginInstance"], Any]] = None
    instance_type: Optional[type] = None
    invisible: bool = False
    count: int = 0
    dynamic: bool = False


@dataclass(eq=False)
class PluginInstance:
    """One plugin placed on a panel."""

    plugin_class: PluginClass
    panel: Any = None
    xc: Any = None
    expand: bool = False
    padding: int = 0
    border: int = 0
    running: bool = field(default=False, init=False)

    def start(self) -> bool:
        """Run the class constructor; return whether it succeeded."""
        log.debug("starting %s", self.plugin_class.type)
        constructor = self.plugin_class.constructor
        self.running = True if constructor is None else bool(constructor(self))
        return self.running

    def stop(self) -> None:
        """Run the class destructor."""
        log.debug("stopping %s", self.plugin_class.type)
        destructor = self.plugin_class.destructor
        if destructor is not None:
            destructor(self)
        self.running = False


class PluginRegistry:
    """Keeps plugin classes by type name and counts their users.

    *loader*, if given, is called with a type name that is not yet
    registered and is expected to register it; classes registered that
    way are dynamic and get unregistered when their last user goes away.
    """

    def __init__(self, loader: Optional[Callable[[str], None]] = None):
        self.classes: dict[str, PluginClass] = {}
        self.loader = loader
        self._loading = False

    def __contains__(self, name: str) -> bool:
        return name in self.classes

    def register(self, plugin_class: PluginClass) -> None:
        if plugin_class.type in self.classes:
            raise PluginError(
                f"Can't register plugin {plugin_class.type}. Such name already exists."
            )
        plugin_class.dynamic = self._loading
        self.classes[plugin_class.type] = plugin_class
        log.debug("registered %s", plugin_class.type)

    def unregister(self, type_name: str) -> None:
        if self.classes.pop(type_name, None) is None:
            raise PluginError(f"Can't unregister plugin {type_name}. No such name")
        log.debug("unregistered %s", type_name)

    def get(self, name: str) -> PluginClass:
        """Return the class called *name*, loading it if needed, and count a user."""
        found = self.classes.get(name)
        if found is None and self.loader is not None:
            self._loading = True
            try:
                self.loader(name)
            except Exception as exc:
                raise PluginError(f"can't load plugin {name}: {exc}") from exc
            finally:
                self._loading = False
            found = self.classes.get(name)
        if found is None:
            raise PluginError(f"can't load plugin {name}")
        found.count += 1
        return found

    def put(self, name: str) -> None:
        """Drop one user of class *name*; unload it if dynamic and unused."""
        found = self.classes.get(name)
        if found is None:
            return
        found.count -= 1
        if found.count or not found.dynamic:
            return
        self.unregister(name)

    def load(self, type_name: str) -> PluginInstance:
        """Create a new instance of the class called *type_name*."""
        plugin_class = self.get(type_name)
        factory = plugin_class.instance_type or PluginInstance
        return factory(plugin_class)

    def release(self, instance: PluginInstance) -> None:
        self.put(instance.plugin_class.type)


def default_edit_config_message(plugin_class: PluginClass, prefix: str) -> str:
    """Text shown for plugins without a graphical configuration editor."""
    return (
        f"Graphical '{plugin_class.name}' plugin configuration\n is not "
        "implemented yet.\n"
        "Please edit manually\n\t~/.config/fbpanel/default\n\n"
        f"You can use as example files in \n\t{prefix}/share/fbpanel/\n"
    )