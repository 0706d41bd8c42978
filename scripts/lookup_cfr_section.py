#!/usr/bin/env python3
"""
CFR Citation Lookup Utility

Looks up a section or paragraph in a part tree written by
convert_cfr_xml_to_json.py or cfr2json.

Usage:
    python lookup_cfr_section.py --file FILE --citation CITATION

Example:
    python lookup_cfr_section.py --file output.json/regulation/433/2019-annual-433 --citation "433.12(a)(2)"
"""

import argparse
import json
import sys

from regtree.services.lookup import find_node, parse_citation


def load_tree(path):
    """Load an emitted part tree."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except FileNotFoundError:
        print(f"Error: Tree file not found at {path}")
        sys.exit(1)
    except json.JSONDecodeError:
        print(f"Error: Invalid JSON in tree file {path}")
        sys.exit(1)


def format_node(node):
    """Format a node for display."""
    if not node:
        return "No data found."

    output = [f"Label: {'-'.join(node['label'])}", f"Type: {node['node_type']}"]
    if node.get("subject"):
        output.append(f"Subject: {node['subject']}")
    if node.get("text"):
        output.append("\nContent:")
        output.append(node["text"])
    for child in node.get("children") or []:
        if child.get("node_type") == "reg_text":
            output.append(child["text"])
    return "\n".join(output)


def main():
    parser = argparse.ArgumentParser(description="Look up a CFR citation in a converted part tree")
    parser.add_argument("--file", required=True, help="JSON tree of a single part")
    parser.add_argument("--citation", required=True, help="Citation, e.g. 433.12(a)(2)")
    args = parser.parse_args()

    label = parse_citation(args.citation)
    if label is None:
        print(f"Error: {args.citation!r} is not a citation")
        sys.exit(1)

    print(format_node(find_node(load_tree(args.file), label)))


if __name__ == "__main__":
    main()
