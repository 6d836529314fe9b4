"""
Graph inspection helpers.

Print and analyse the structure of a calculation graph. Everything here only
reads node kinds, cached values and the edge list; nothing mutates the graph.
"""

from collections import Counter
from typing import Dict

import numpy as np


def get_graph_stats(graph) -> Dict:
    """
    Collect graph statistics without printing.

    Returns:
        dict with node/edge counts, fan-in/fan-out maxima and means, and a
        count per node tag
    """
    n_nodes = len(graph)
    if n_nodes == 0:
        return {
            'nodes': 0,
            'edges': 0,
            'max_fan_in': 0,
            'avg_fan_in': 0.0,
            'max_fan_out': 0,
            'avg_fan_out': 0.0,
            'operations': {}
        }

    edges = graph.edges()
    fan_ins = [0] * n_nodes
    fan_outs = [0] * n_nodes
    for src, dst in edges:
        fan_outs[src] += 1
        fan_ins[dst] += 1

    op_counter = Counter(graph[i].tag for i in graph.node_indices())

    return {
        'nodes': n_nodes,
        'edges': len(edges),
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_outs),
        'avg_fan_out': float(np.mean(fan_outs)),
        'operations': dict(op_counter)
    }


def print_graph_summary(graph, detailed: bool = False) -> Dict:
    """
    Print a summary of the graph.

    Args:
        graph: Graph object
        detailed: also list every node (only for graphs up to 100 nodes)

    Returns:
        the statistics dict of get_graph_stats
    """
    if len(graph) == 0:
        print("Empty computation graph")
        return {}

    stats = get_graph_stats(graph)

    print("\n" + "="*70)
    print("COMPUTATION GRAPH SUMMARY")
    print("="*70)
    print(f"Total nodes:        {stats['nodes']:,}")
    print(f"Total edges:        {stats['edges']:,}")
    print(f"Max fan-in:         {stats['max_fan_in']}")
    print(f"Avg fan-in:         {stats['avg_fan_in']:.2f}")
    print(f"Max fan-out:        {stats['max_fan_out']}")
    print(f"Avg fan-out:        {stats['avg_fan_out']:.2f}")
    print()
    print("Operation breakdown:")
    for op_type, count in Counter(stats['operations']).most_common(10):
        pct = 100.0 * count / stats['nodes']
        print(f"  {op_type:12s}: {count:6,} ({pct:5.1f}%)")

    if detailed and stats['nodes'] <= 100:
        print()
        print("="*70)
        print("DETAILED NODE LIST")
        print("="*70)
        for i in graph.node_indices():
            parent_info = ", ".join(f"Node{p}" for p in graph.operands(i))
            print(f"Node {i:3d}: {graph[i].tag:12s} <- [{parent_info}]")

    print("="*70 + "\n")
    return stats


def _format_value(value) -> str:
    if value is None:
        return "N/A"
    if np.ndim(value) == 0:
        v = np.asarray(value).item()
        if isinstance(v, complex):
            return f"{v:.4g}"
        return f"{v:10.6f}"
    return f"tensor{np.shape(value)}"


def print_computation_graph(graph, max_nodes: int = 20) -> None:
    """
    Print the graph node by node, with cached values and operands.

    Args:
        graph: Graph object
        max_nodes: print at most this many nodes
    """
    print("\n" + "="*70)
    print("COMPUTATION GRAPH STRUCTURE")
    print("="*70)

    if len(graph) == 0:
        print("Empty graph")
        return

    names = {idx: name for name, idx in graph.namespace.items()}
    n_show = min(len(graph), max_nodes)

    for i in range(n_show):
        node = graph[i]
        label = f"{node.tag}:{names[i]}" if i in names else node.tag
        val = _format_value(node.value)
        args = graph.operands(i)
        if args:
            parent_info = ", ".join(f"Node{p}" for p in args)
            print(f"Node {i:4d}: {label:12s} ({val}) <- [{parent_info}]")
        else:
            print(f"Node {i:4d}: {label:12s} ({val}) [leaf/input]")

    if len(graph) > max_nodes:
        print(f"... ({len(graph) - max_nodes} more nodes)")

    print("="*70 + "\n")


def analyze_graph_complexity(graph) -> str:
    """
    Analyse graph complexity and return a text report.

    Returns:
        the report as a multi-line string
    """
    stats = get_graph_stats(graph)

    if stats['nodes'] == 0:
        return "Empty computation graph"

    report = []
    report.append("Graph Complexity Analysis:")
    report.append(f"  Total operations: {stats['nodes']:,}")
    report.append(f"  Total connections: {stats['edges']:,}")
    report.append(f"  Average branching: {stats['avg_fan_out']:.2f}")

    if stats['nodes'] < 1000:
        complexity = "Low"
    elif stats['nodes'] < 10000:
        complexity = "Medium"
    else:
        complexity = "High"

    report.append(f"  Complexity level: {complexity}")

    top_ops = sorted(stats['operations'].items(), key=lambda x: x[1], reverse=True)[:3]
    report.append("  Top operations:")
    for op, count in top_ops:
        pct = 100.0 * count / stats['nodes']
        report.append(f"    - {op}: {pct:.1f}%")

    return "\n".join(report)
