"""Tool Registry Service"""

import importlib
import logging
from typing import Iterable, Sequence

from ..models.tool import ToolDefinition, ToolDescriptor
from .error_handler import DuplicateToolError

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Holds every tool definition keyed by name, in registration order"""

    def __init__(self) -> None:
        self._tools: dict[str, ToolDefinition] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def register(self, definition: ToolDefinition, category: str = "") -> None:
        """Register one tool; a name already taken raises DuplicateToolError."""
        name = definition.name
        if name in self._tools:
            raise DuplicateToolError(name, self._tools[name].category, category)
        if category and not definition.category:
            definition = definition.model_copy(update={"category": category})
        self._tools[name] = definition

    def register_category(self, category: str, definitions: Iterable[object]) -> int:
        """Register every well-formed definition of a category, returning the count added."""
        added = 0
        for definition in definitions:
            if not isinstance(definition, ToolDefinition) or not callable(definition.handler):
                logger.warning(f"Skipping malformed tool entry in category '{category}': {definition!r}")
                continue
            self.register(definition, category)
            added += 1
        return added

    def get(self, name: str) -> ToolDefinition | None:
        return self._tools.get(name)

    def descriptors(self) -> list[ToolDescriptor]:
        return [definition.descriptor for definition in self._tools.values()]

    def names(self) -> list[str]:
        return list(self._tools.keys())


def category_module_name(package: str, category: str) -> str:
    """Module path for a category, e.g. response-tokens -> <package>.response_tokens"""
    return f"{package}.{category.replace('-', '_')}"


def load_registry(package: str, categories: Sequence[str]) -> ToolRegistry:
    """Build a registry from the ``TOOLS`` list of each category module.

    A category whose module is missing or fails to enumerate is logged and
    skipped. Duplicate tool names are not skipped: they abort loading.
    """
    registry = ToolRegistry()

    for category in categories:
        module_name = category_module_name(package, category)
        try:
            module = importlib.import_module(module_name)
            definitions = list(getattr(module, "TOOLS"))
        except ModuleNotFoundError as e:
            if e.name != module_name:
                logger.error(f"Error loading tools from {category}: {e}")
            else:
                logger.info(f"No tools available for category {category}")
            continue
        except Exception as e:
            logger.error(f"Error loading tools from {category}: {e}")
            continue

        added = registry.register_category(category, definitions)
        logger.debug(f"Loaded {added} tools from {category}")

    logger.info(f"Loaded {len(registry)} tools")
    return registry
