import asyncio

import pytest

from inline_svg.exceptions import OptimizeError
from inline_svg.svg_optimizer import (
    DEFAULT_OPTIMIZER_CONFIG,
    build_plugins,
    merge_config,
    optimize_svg,
    scour_optimizer,
)

ICON = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<!-- exported from an editor -->\n'
    '<svg xmlns="http://www.w3.org/2000/svg" width="16" height="16">\n'
    '  <metadata>junk</metadata>\n'
    '  <rect id="box" x="0" y="0" width="16" height="16" fill="#ff0000"/>\n'
    '</svg>\n'
)


def test_override_wins_and_order_is_kept():
    merged = merge_config({'a': 1, 'b': 2}, {'b': 3, 'c': 4})
    assert build_plugins(merged) == [{'a': 1}, {'b': 3}, {'c': 4}]


def test_merge_is_shallow_and_leaves_inputs_alone():
    default = {'a': {'x': 1}}
    override = {'a': {'y': 2}}
    assert merge_config(default, override) == {'a': {'y': 2}}
    assert default == {'a': {'x': 1}}


def test_merge_without_override():
    assert merge_config({'a': 1}, None) == {'a': 1}


def test_optimizer_receives_default_then_override_plugins():
    seen = []

    def optimizer(svg, plugins):
        seen.append(plugins)
        return svg

    asyncio.run(optimize_svg('<svg/>', {'digits': 2, 'custom': 'x'}, optimizer))

    keys = [next(iter(plugin)) for plugin in seen[0]]
    assert keys == list(DEFAULT_OPTIMIZER_CONFIG) + ['custom']
    assert {'digits': 2} in seen[0]


def test_async_optimizer_is_awaited():
    async def optimizer(svg, plugins):
        return svg.upper()

    assert asyncio.run(optimize_svg('<svg/>', None, optimizer)) == '<SVG/>'


def test_optimizer_failure_becomes_optimize_error():
    def optimizer(svg, plugins):
        raise ValueError('bad svg')

    with pytest.raises(OptimizeError) as info:
        asyncio.run(optimize_svg('<svg/>', None, optimizer, path='icon.svg'))
    assert info.value.path == 'icon.svg'
    assert isinstance(info.value.__cause__, ValueError)


def test_scour_strips_prolog_comments_and_metadata():
    plugins = build_plugins(DEFAULT_OPTIMIZER_CONFIG)
    result = asyncio.run(scour_optimizer(ICON, plugins))
    assert result.startswith('<svg')
    assert result.endswith('</svg>')
    assert '<?xml' not in result
    assert '<!--' not in result
    assert 'metadata' not in result


def test_scour_rejects_broken_markup():
    with pytest.raises(OptimizeError):
        asyncio.run(optimize_svg('<svg><rect></svg>', None, scour_optimizer))


def test_non_string_result_becomes_optimize_error():
    with pytest.raises(OptimizeError) as info:
        asyncio.run(optimize_svg('<svg/>', None, lambda svg, plugins: None, path='icon.svg'))
    assert isinstance(info.value.__cause__, TypeError)
