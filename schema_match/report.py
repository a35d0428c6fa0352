from rich.markup import escape
from rich.tree import Tree

from .results import DirectoryScanResult

PASS_MARK = '[green]✔[/]'
FAIL_MARK = '[red]✘[/]'


def render_report(result: DirectoryScanResult, root_name: str) -> Tree:
    """
    Draw `result` as a tree with one node per scanned directory and
    one leaf per diagnostic.

    :param result: The report to draw
    :type result: `DirectoryScanResult`
    :param root_name: Label for the top-level directory
    :type root_name: `str`
    :return: A tree that can be printed by a `rich.console.Console`
    :rtype: `rich.tree.Tree`
    """
    mark = PASS_MARK if result.success else FAIL_MARK
    tree = Tree(f'{mark} [bold]{escape(root_name)}[/]')

    for diagnostic in result.diagnostics:
        tree.add(f'[orange1]{escape(diagnostic.render())}[/]', highlight=False)

    for name, nested_result in result.nested_results.items():
        tree.add(render_report(nested_result, name))

    return tree
