#!/usr/bin/env python3
"""
Command-line viewer for the class hierarchy of an OWL ontology.

HOW TO RUN:
The virtual environment .venv should be activated before running the script.

From the src directory, run:
    python ontology_viewer_cli.py [source] [options]

Examples:
    python ontology_viewer_cli.py                                  # default document
    python ontology_viewer_cli.py ../data/ontology/domain_ontology.owl --language cs
    python ontology_viewer_cli.py vehicles.ttl --branch Car --direction horizontal
    python ontology_viewer_cli.py vehicles.owl --axioms Car --search truck --stats

The script loads the ontology, lays out its class hierarchy (or the branch
around one class) and prints it as an indented outline with the computed
coordinates. Classes with more than one superclass are marked with '*'.
"""

import argparse
import logging
import os
import sys

# Add src to the path so we can import modules
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from hierarchy.domain import LayoutDirection, PositionedTree
from ontology.domain import OntologyLoadError
from viewer.service import OntologyService


def print_tree(tree: PositionedTree) -> None:
    """Print a positioned tree as an indented outline."""
    hierarchy = tree.hierarchy
    for node_id, depth in hierarchy.walk():
        node = tree.nodes[node_id]
        x, y = tree.point(node_id)
        marker = " *" if hierarchy.is_multi_parent(node_id) else ""
        print(f"{'  ' * depth}{node.name} [{node_id}]{marker}  ({x:.1f}, {y:.1f})")

    if hierarchy.secondary_edges:
        print(f"\nSecondary edges ({len(hierarchy.secondary_edges)}):")
        for edge in hierarchy.secondary_edges:
            print(f"  {edge.source} -> {edge.target}")


def print_axioms(service: OntologyService, class_id: str) -> None:
    """Print the axioms of a class."""
    if class_id not in service.get_full_graph():
        print(f"Class not found: {class_id}")
        return

    axioms = service.get_axioms(class_id)
    print(f"Axioms of {service.resolve_label(class_id)} [{class_id}]")

    print("  Subclasses:")
    for subclass in axioms.subclasses:
        print(f"    {service.resolve_label(subclass)}")

    print("  Equivalent classes:")
    for expression in axioms.equivalent_expressions:
        print(f"    {service.render_expression(expression)}")

    print("  Property restrictions:")
    for property_id, expressions in axioms.property_restrictions.items():
        for expression in expressions:
            print(f"    {property_id}: {service.render_expression(expression)}")


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Print the class hierarchy of an OWL ontology",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Whole hierarchy of the default document
  python ontology_viewer_cli.py

  # Branch around a class, Czech labels, horizontal coordinates
  python ontology_viewer_cli.py vehicles.owl --branch Car --language cs --direction horizontal

  # Class axioms and statistics
  python ontology_viewer_cli.py vehicles.owl --axioms Car --stats
        """
    )

    parser.add_argument(
        "source",
        nargs="?",
        help="Ontology file path or URL (defaults to the configured default document)"
    )

    parser.add_argument(
        "--language", "-l",
        help="Label language (e.g. en, cs)"
    )

    parser.add_argument(
        "--branch", "-b",
        help="Show only the branch (ancestors and descendants) of this class"
    )

    parser.add_argument(
        "--direction", "-d",
        choices=[direction.value for direction in LayoutDirection],
        default=LayoutDirection.VERTICAL.value,
        help="Layout direction of the printed coordinates"
    )

    parser.add_argument(
        "--axioms", "-a",
        help="Print the axioms of this class"
    )

    parser.add_argument(
        "--search", "-s",
        help="Print classes whose id or labels contain this text"
    )

    parser.add_argument(
        "--property", "-p",
        help="Print the comment of this object property"
    )

    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print ontology statistics"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s: %(message)s'
    )

    service = OntologyService()
    if args.language:
        service.set_language(args.language)

    try:
        if args.source:
            service.load(args.source)
        else:
            service.load_default()
    except OntologyLoadError as e:
        print(f"✗ Error loading ontology: {e}")
        return 1

    print(f"Loaded ontology from {service.session.source}")
    print("=" * 60)

    if args.branch:
        if args.branch not in service.get_full_graph():
            print(f"Class not found: {args.branch}")
            return 1
        tree = service.branch_view(args.branch, args.direction)
    else:
        tree = service.full_view(args.direction)
    print_tree(tree)

    if args.axioms:
        print("=" * 60)
        print_axioms(service, args.axioms)

    if args.search:
        print("=" * 60)
        matches = service.search_classes(args.search)
        print(f"Search results for '{args.search}' ({len(matches)}):")
        for node in matches:
            print(f"  {node.name} [{node.id}]")

    if args.property:
        print("=" * 60)
        comment = service.get_property_comment(args.property)
        print(f"{args.property}: {comment if comment is not None else 'No comment available'}")

    if args.stats:
        print("=" * 60)
        stats = service.get_stats()
        print("Ontology statistics:")
        print(f"  Classes: {stats.total_classes}")
        print(f"  Subclass edges: {stats.total_edges}")
        print(f"  Object properties: {stats.total_object_properties}")
        print(f"  Root candidates: {stats.root_candidates}")
        print(f"  Classes with multiple superclasses: {stats.multi_parent_classes}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
