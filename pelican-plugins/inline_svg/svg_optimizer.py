"""SVG optimisation for inlined images, backed by scour.

The optimizer is configured with a flat mapping of scour option names. Site
settings may override any key through ``INLINE_SVG_OPTIMIZER``::

    INLINE_SVG_OPTIMIZER = {
        'digits': 3,
        'remove_descriptive_elements': True,
    }

Before the optimizer is called the merged mapping is reshaped into an ordered
list of single-key "plugins" (``[{'strip_comments': True}, ...]``), one per
option, in the merged mapping's order.
"""
from __future__ import annotations

import asyncio
import inspect
import logging
from types import SimpleNamespace
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Union

from scour import scour

from .exceptions import OptimizeError

logger = logging.getLogger(__name__)

Plugins = List[Dict[str, Any]]
Optimizer = Callable[[str, Plugins], Union[str, Awaitable[str]]]

# IDs are kept as-is: several icons end up in one page and shortened IDs
# from different files would collide.
DEFAULT_OPTIMIZER_CONFIG: Dict[str, Any] = {
    'strip_xml_prolog': True,
    'strip_comments': True,
    'remove_metadata': True,
    'remove_descriptive_elements': False,
    'keep_editor_data': False,
    'enable_viewboxing': True,
    'strip_ids': False,
    'shorten_ids': False,
    'group_collapse': True,
    'simple_colors': True,
    'style_to_xml': True,
    'digits': 5,
    'indent_type': 'none',
    'newlines': False,
}


def merge_config(default: Mapping[str, Any], override: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Shallow merge; override wins, default key order is kept, new keys go last."""
    merged = dict(default)
    if override:
        merged.update(override)
    return merged


def build_plugins(config: Mapping[str, Any]) -> Plugins:
    return [{key: value} for key, value in config.items()]


def _scour(svg: str, plugins: Plugins) -> str:
    options = SimpleNamespace()
    for plugin in plugins:
        for key, value in plugin.items():
            setattr(options, key, value)
    # scour drops option names it does not know about
    return scour.scourString(svg, options).strip()


async def scour_optimizer(svg: str, plugins: Plugins) -> str:
    return await asyncio.to_thread(_scour, svg, plugins)


async def optimize_svg(
    svg: str,
    override: Optional[Mapping[str, Any]] = None,
    optimizer: Optimizer = scour_optimizer,
    path: str = '<svg>',
) -> str:
    """Run *svg* through *optimizer* with the merged configuration.

    *optimizer* may be a plain function or a coroutine function. Anything it
    raises is re-raised as :class:`OptimizeError` naming *path*.
    """
    plugins = build_plugins(merge_config(DEFAULT_OPTIMIZER_CONFIG, override))
    try:
        result = optimizer(svg, plugins)
        if inspect.isawaitable(result):
            result = await result
        if not isinstance(result, str):
            raise TypeError(f"optimizer returned {type(result).__name__}, expected str")
    except Exception as exc:
        raise OptimizeError(path) from exc
    logger.debug("Optimized %s (%d -> %d chars)", path, len(svg), len(result))
    return result
