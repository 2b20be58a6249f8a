"""
树结构处理工具模块
"""

from typing import List
import logging

from ..models import EntryNode, RendererTree, TraceEvent

logger = logging.getLogger(__name__)


def find_all_descendants_of_node(tree: RendererTree, root: EntryNode) -> List[TraceEvent]:
    """
    收集节点的所有后代（不包含节点本身）对应的事件

    Args:
        tree: 渲染树
        root: 起始节点

    Returns:
        List[TraceEvent]: 后代事件列表，顺序无意义
    """
    descendants = []
    # 深度优先遍历
    stack = list(root.children_ids)
    while stack:
        node_id = stack.pop()
        child = tree.nodes.get(node_id)
        if child is None:
            continue
        descendants.append(child.entry)
        stack.extend(child.children_ids)
    return descendants


def count_nodes(tree: RendererTree) -> int:
    """计算树中的节点数"""
    return len(tree.nodes)


def get_tree_depth(tree: RendererTree) -> int:
    """获取树的深度，根节点深度为 0，空树返回 0"""
    if not tree.nodes:
        return 0
    return max(node.depth for node in tree.nodes.values())
