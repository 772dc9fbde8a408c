"""
Tool catalogue loader.

Imports every module of the `cloud_agent.plugins` package, checks its TOOL_SCHEMA
with jsonschema and wraps its TOOL_IMPLEMENTATION so call arguments are validated
against the declared `parameters` before the tool runs.

Plugin contract:
- TOOL_SCHEMA: {"type": "function", "function": {"name", "description", "parameters"}}
- TOOL_IMPLEMENTATION: callable returning a ToolOutput

Validation errors are raised as ValueError; the MCP host and the CLI render
them as "Error: ..." text.
"""
from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
from dataclasses import dataclass
from types import ModuleType
from typing import Any, Callable, Dict, List, Optional, Tuple

from jsonschema import Draft202012Validator, ValidationError
from jsonschema import validate as jsonschema_validate

from .domain.models.call import ToolOutput

PLUGIN_PACKAGE = f"{__package__}.plugins"

# Structure every tool definition must have
_TOOL_DEFINITION_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["type", "function"],
    "properties": {
        "type": {"const": "function"},
        "function": {
            "type": "object",
            "required": ["name", "description", "parameters"],
            "properties": {
                "name": {"type": "string", "minLength": 1},
                "description": {"type": "string", "minLength": 1},
                "parameters": {"type": "object"},
            },
        },
    },
}

ToolFunction = Callable[..., ToolOutput]


@dataclass(frozen=True)
class ToolPlugin:
    name: str
    schema: Dict[str, Any]
    implementation: ToolFunction

    @property
    def description(self) -> str:
        return self.schema["function"]["description"]

    @property
    def parameters(self) -> Dict[str, Any]:
        return self.schema["function"]["parameters"]


class PluginLoadError(Exception):
    pass


def validate_tool_schema(schema: Any) -> None:
    if not isinstance(schema, dict):
        raise PluginLoadError("Missing or invalid TOOL_SCHEMA (must be a dict)")
    try:
        jsonschema_validate(instance=schema, schema=_TOOL_DEFINITION_SCHEMA)
        Draft202012Validator.check_schema(schema["function"]["parameters"])
    except Exception as e:
        raise PluginLoadError(f"Tool definition failed validation: {e}")


def wrap_with_arg_validation(name: str, schema: Dict[str, Any], func: ToolFunction, logger: logging.Logger) -> ToolFunction:
    validator = Draft202012Validator(schema["function"]["parameters"])
    param_names = {
        n for n, p in inspect.signature(func).parameters.items()
        if p.kind in (inspect.Parameter.POSITIONAL_OR_KEYWORD, inspect.Parameter.KEYWORD_ONLY)
    }

    def wrapper(**kwargs: Any) -> ToolOutput:
        dropped = [k for k in kwargs if k not in param_names]
        if dropped:
            logger.debug(f"Tool '{name}': dropping unexpected arguments: {dropped}")
        # None means "not given"; the schemas never declare null
        cleaned = {k: v for k, v in kwargs.items() if k in param_names and v is not None}
        try:
            validator.validate(cleaned)
        except ValidationError as e:
            raise ValueError(f"Arguments for {name} failed schema validation: {e.message}")
        return func(**cleaned)

    wrapper.__name__ = f"plugin_{name}"
    return wrapper


def load_plugin(module: ModuleType, logger: logging.Logger) -> ToolPlugin:
    schema = getattr(module, "TOOL_SCHEMA", None)
    validate_tool_schema(schema)
    name = schema["function"]["name"]
    impl = getattr(module, "TOOL_IMPLEMENTATION", None)
    if not callable(impl):
        raise PluginLoadError("TOOL_IMPLEMENTATION must be callable")
    return ToolPlugin(name=name, schema=schema, implementation=wrap_with_arg_validation(name, schema, impl, logger))


class PluginManager:
    def __init__(self, package: str = PLUGIN_PACKAGE, logger: Optional[logging.Logger] = None) -> None:
        self._package = package
        self._logger = logger or logging.getLogger(__name__)
        self._plugins: List[ToolPlugin] = []

    def _module_names(self) -> List[str]:
        pkg = importlib.import_module(self._package)
        return sorted(
            f"{self._package}.{info.name}"
            for info in pkgutil.iter_modules(pkg.__path__)
            if not info.name.startswith("_")
        )

    def load(self) -> Tuple[List[Dict[str, Any]], Dict[str, ToolFunction]]:
        plugins: List[ToolPlugin] = []
        for module_name in self._module_names():
            try:
                plugin = load_plugin(importlib.import_module(module_name), self._logger)
            except (ImportError, PluginLoadError) as e:
                self._logger.error(f"Failed to load plugin {module_name}: {e}")
                continue
            if any(p.name == plugin.name for p in plugins):
                self._logger.warning(f"Duplicate tool name '{plugin.name}' from {module_name}; skipping")
                continue
            plugins.append(plugin)
            self._logger.debug(f"Loaded plugin '{plugin.name}' from {module_name}")
        self._plugins = plugins
        return self.tool_schemas, self.tool_functions

    @property
    def plugins(self) -> List[ToolPlugin]:
        return list(self._plugins)

    @property
    def tool_schemas(self) -> List[Dict[str, Any]]:
        return [p.schema for p in self._plugins]

    @property
    def tool_functions(self) -> Dict[str, ToolFunction]:
        return {p.name: p.implementation for p in self._plugins}


_default_manager = PluginManager()
TOOL_SCHEMAS, TOOL_FUNCTIONS = _default_manager.load()


def get_manager() -> PluginManager:
    return _default_manager


def reload_plugins() -> Tuple[List[Dict[str, Any]], Dict[str, ToolFunction]]:
    """Reload the catalogue into the default manager and refresh the module-level aggregates."""
    global TOOL_SCHEMAS, TOOL_FUNCTIONS
    TOOL_SCHEMAS, TOOL_FUNCTIONS = _default_manager.load()
    return TOOL_SCHEMAS, TOOL_FUNCTIONS
