"""
Graph utilities
Print and analyze the computation graph behind a root Scalar.
"""

import numpy as np
from typing import Dict
from collections import Counter

from .graph import topo_refs
from .scalar import Scalar


def get_graph_stats(root: Scalar) -> Dict:
    """
    Statistics of the graph reachable from `root` (does not print)

    Returns:
        dict with node/edge counts, fan-in/fan-out and per-op counts
    """
    tape = root.tape
    order = topo_refs(tape, root.ref)
    nodes = [tape.node(r) for r in order]

    n_nodes = len(nodes)
    n_edges = sum(len(n.operands) for n in nodes)

    # Fan-in: operands per node
    fan_ins = [len(n.operands) for n in nodes]

    # Fan-out: consumers per node inside this graph
    fan_outs = Counter(r for n in nodes for r in n.operands)
    fan_out_list = [fan_outs.get(r, 0) for r in order]

    op_counter = Counter(n.op.value if n.op is not None else "leaf" for n in nodes)
    role_counter = Counter(n.role.value for n in nodes)

    return {
        'nodes': n_nodes,
        'edges': n_edges,
        'leaves': sum(1 for n in nodes if n.is_leaf),
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_out_list),
        'avg_fan_out': float(np.mean(fan_out_list)),
        'operations': dict(op_counter),
        'roles': dict(role_counter),
    }


def format_graph(root: Scalar, max_nodes: int = 20) -> str:
    """
    One line per node in topological order:
        Node   3: mul          (  6.000000) <- [Node 0, Node 1]
    """
    tape = root.tape
    order = topo_refs(tape, root.ref)
    position = {r: i for i, r in enumerate(order)}

    lines = []
    for i, ref in enumerate(order[:max_nodes]):
        node = tape.node(ref)
        if node.is_leaf:
            lines.append(f"Node {i:4d}: {node.role.value:12s} ({node.value:10.6f}) [leaf]")
        else:
            parents = ", ".join(f"Node {position[r]}" for r in node.operands)
            lines.append(f"Node {i:4d}: {node.op.value:12s} ({node.value:10.6f}) <- [{parents}]")
    if len(order) > max_nodes:
        lines.append(f"... ({len(order) - max_nodes} more nodes)")
    return "\n".join(lines)


def analyze_graph_complexity(root: Scalar) -> str:
    """
    Text report of graph size and most frequent operations
    """
    stats = get_graph_stats(root)

    report = []
    report.append("Graph Complexity Analysis:")
    report.append(f"  Total nodes: {stats['nodes']:,}")
    report.append(f"  Total connections: {stats['edges']:,}")
    report.append(f"  Average branching: {stats['avg_fan_out']:.2f}")

    if stats['nodes'] < 1000:
        complexity = "Low"
    elif stats['nodes'] < 10000:
        complexity = "Medium"
    else:
        complexity = "High"
    report.append(f"  Complexity level: {complexity}")

    ops = {k: v for k, v in stats['operations'].items() if k != "leaf"}
    if ops:
        top_ops = sorted(ops.items(), key=lambda x: x[1], reverse=True)[:3]
        report.append("  Top operations:")
        for op, count in top_ops:
            pct = 100.0 * count / stats['nodes']
            report.append(f"    - {op}: {pct:.1f}%")

    return "\n".join(report)
