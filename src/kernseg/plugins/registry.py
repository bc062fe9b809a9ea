"""Plugin discovery and loading."""

from typing import Dict, List
import importlib.metadata
import logging

from kernseg.plugins.base import PluginBase

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "kernseg.plugins"


class PluginRegistry:
    """
    Registry for discovering and loading KERNSEG domain plugins.

    The built-in copy-ratio and allele-fraction plugins are always
    available; others are discovered via entry points in the
    'kernseg.plugins' group.
    """

    def __init__(self):
        self._plugins: Dict[str, PluginBase] = {}
        self._discovered = False

    def register(self, plugin: PluginBase) -> None:
        """Register a plugin instance under its name."""
        self._plugins[plugin.name] = plugin

    def discover(self) -> None:
        """Register built-ins and discover plugins via entry points."""
        if self._discovered:
            return

        from kernseg.plugins.allelefraction.plugin import AlleleFractionPlugin
        from kernseg.plugins.copyratio.plugin import CopyRatioPlugin

        for builtin in (CopyRatioPlugin(), AlleleFractionPlugin()):
            self._plugins.setdefault(builtin.name, builtin)

        for ep in importlib.metadata.entry_points(group=ENTRY_POINT_GROUP):
            if ep.name in self._plugins:
                continue
            try:
                plugin_class = ep.load()
                plugin = plugin_class()
            except Exception as e:
                logger.warning(f"Failed to load plugin {ep.name}: {e}")
                continue
            self._plugins[plugin.name] = plugin

        self._discovered = True

    def list(self) -> List[str]:
        """
        List available plugin names.

        Returns:
            List of plugin names
        """
        self.discover()
        return list(self._plugins.keys())

    def load(self, name: str) -> PluginBase:
        """
        Load a plugin by name.

        Args:
            name: Plugin name

        Returns:
            Plugin instance

        Raises:
            KeyError: If plugin not found
        """
        self.discover()

        if name not in self._plugins:
            available = ", ".join(self.list())
            raise KeyError(
                f"Plugin '{name}' not found. Available plugins: {available}"
            )

        return self._plugins[name]

    def __repr__(self) -> str:
        self.discover()
        return f"PluginRegistry(plugins={list(self._plugins.keys())})"


# Global plugin registry
plugins = PluginRegistry()
