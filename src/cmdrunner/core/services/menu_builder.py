"""Menu builder - turns a normalized configuration into a menu tree

Menu nodes are plain data records. Nothing here is executable: a leaf
carries the command string and the tray resolves a click back to it.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from ...utils import app_logger, LogCategory
from .config import Configuration

# Reserved bucket for entries without a group
ROOT_BUCKET: Optional[str] = None


@dataclass(frozen=True)
class MenuLeaf:
    label: str
    command: str


@dataclass
class SubMenu:
    label: str
    children: List[MenuLeaf] = field(default_factory=list)


@dataclass(frozen=True)
class MenuAction:
    """Fixed tray action (Settings / About / Quit)"""

    label: str
    action: str


MenuNode = Union[MenuLeaf, SubMenu]
MenuTree = List[MenuNode]


class MenuBuilder:
    """Group commands into an ordered menu tree

    Buckets are emitted in first-encounter order. The root bucket is
    seeded before the scan, so ungrouped entries always lead, followed by
    one submenu per group name in the order the names first appear.
    """

    def build(self, config: Configuration) -> MenuTree:
        buckets: Dict[Optional[str], List[MenuLeaf]] = {ROOT_BUCKET: []}

        for entry in config.commands:
            buckets.setdefault(entry.group, []).append(
                MenuLeaf(label=entry.label, command=entry.command)
            )

        tree: MenuTree = []
        for group, leaves in buckets.items():
            if group is ROOT_BUCKET:
                tree.extend(leaves)
            else:
                tree.append(SubMenu(label=group, children=leaves))

        app_logger.debug(
            "Menu tree built",
            LogCategory.MENU,
            {
                "commands": len(config.commands),
                "groups": len(buckets) - 1,
                "top_level_items": len(tree),
            },
            component="menu_builder",
        )
        return tree


def iter_leaves(tree: MenuTree) -> List[MenuLeaf]:
    """Leaves in display order (depth-first)"""
    leaves: List[MenuLeaf] = []
    for node in tree:
        if isinstance(node, SubMenu):
            leaves.extend(node.children)
        else:
            leaves.append(node)
    return leaves
