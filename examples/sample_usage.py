#!/usr/bin/env python3
"""
Sample usage examples for Lineage Map.
"""

from pathlib import Path

from lineage_map import LineageMap
from lineage_map.core.loader import load_graph
from lineage_map.formatters import JSONFormatter, ConsoleFormatter


SAMPLE_GRAPH = Path(__file__).parent / "sample_graph.json"


def main():
    """Demonstrate various usage patterns."""
    print("Lineage Map - Sample Usage")
    print("=" * 50)
    
    graph = load_graph(SAMPLE_GRAPH)
    lineage_map = LineageMap({"tableWidth": 180})
    console = ConsoleFormatter()
    
    # Example 1: First render, every table expanded
    print("\n1. Full layout:")
    result = lineage_map.render_base(graph)
    console.format(result)
    
    # Example 2: Collapse the staging table
    print("\n2. Staging table collapsed:")
    result = lineage_map.toggle_table_expansion("orders_eur")
    console.format_compact(result)
    print(f"   orders_eur is now {result.positions['orders_eur'].y:g}px from the top")
    
    # Example 3: Hover a mart field to highlight its lineage
    print("\n3. Upstream of revenue:revenue_eur:")
    highlighted = lineage_map.handle_field_hover("revenue:revenue_eur")
    for field_id in sorted(highlighted):
        print(f"   {field_id}")
    
    # Example 4: Click a field with a broken transformation
    print("\n4. Pop-up for orders_eur:amount_eur:")
    lineage_map.toggle_table_expansion("orders_eur")
    details = lineage_map.handle_field_click("orders_eur:amount_eur")
    if details:
        for line in details.lines():
            print(f"   {line}")
    
    # Example 5: Table note with embedded SQL
    print("\n5. Table info for orders_eur:")
    for line in lineage_map.describe_table("orders_eur").lines():
        print(f"   {line}")
    
    # Example 6: JSON output
    print("\n6. JSON levels:")
    print(JSONFormatter().format_levels_only(lineage_map.last_result))
    
    lineage_map.destroy()


if __name__ == "__main__":
    main()
