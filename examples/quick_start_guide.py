#!/usr/bin/env python3
"""
Quick Start Guide for bare-xml.

Opens an XML file, parses it, stamps the first element with a timestamp
attribute and prints the re-serialized document. Without an argument a small
built-in document is used instead.
"""

import sys
import threading
import time
from datetime import datetime
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from bare_xml import (
    BareXMLError,
    DocumentRoot,
    Node,
    parse,
    parse_file,
    set_line_terminator,
)

SAMPLE_DOCUMENT = """<?xml version="1.0"?>
<!-- a tiny catalog -->
<catalog>
    <book id="123" genre="fiction">
        <title>My Book</title>
        <author>John Doe</author>
        <price currency="USD">19.99</price>
    </book>
    Tom &amp; Jerry
</catalog>
"""


def timestamp_example(path=None):
    """Parse a document, add a timestamp and print it back out."""

    print("🚀 QUICK START - bare-xml")
    print("=" * 45)

    print("\n📄 Step 1: Parsing")
    print("-" * 30)

    start_time = time.perf_counter()
    document = parse_file(path) if path else parse(SAMPLE_DOCUMENT)
    elapsed_ms = (time.perf_counter() - start_time) * 1000
    print(f"✅ Parsed XML in {elapsed_ms:.2f}ms")

    print("\n🕒 Step 2: Adding a timestamp")
    print("-" * 30)

    elements = document.element_children()
    if elements:
        elements[0].set_attribute("timestamp", datetime.now().isoformat(timespec="seconds"))
        print(f"✅ Stamped <{elements[0].name}>")
    else:
        print("⚠️  Document has no elements to stamp")

    print("\n📋 Step 3: Serialized document")
    print("-" * 30)
    set_line_terminator("\n")
    print(document.to_xml())

    return document


def navigation_example(document: DocumentRoot):
    """Example showing searching and reading a tree."""

    print("\n\n🧭 NAVIGATION EXAMPLE")
    print("=" * 35)

    book = document.find("book")
    if book is None:
        print("  No <book> element in this document")
        return

    title = book.find("title")
    price = book.find("price")
    print(f"📖 Book {book.get_attribute('id')}: '{title.all_text() if title else '?'}'")
    if price is not None:
        print(f"💰 Price: {price.get_attribute('currency', '')} {price.all_text()}")

    elements = list(document.iter_elements())
    print(f"\n📊 Document Statistics:")
    print(f"  Elements: {len(elements)}")
    print(f"  Attributes: {sum(len(e.attribute_names()) for e in elements)}")
    print(f"  Text: {document.all_text()!r}")


def building_example():
    """Example showing a tree built by several threads at once."""

    print("\n\n🧵 CONCURRENT BUILD EXAMPLE")
    print("=" * 35)

    log = Node("log")

    def writer(index):
        for i in range(3):
            entry = log.add_child(Node("entry"))
            entry.set_attribute("thread", str(index))
            entry.add_text(f"message {i} & more")

    threads = [threading.Thread(target=writer, args=(i,)) for i in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    print(f"✅ {log.count_children()} entries written")
    snapshot = log.clone()
    snapshot.clear_children()
    print(f"📋 Clone after clearing: {snapshot.to_xml()}")
    print(f"📋 Original still has {log.count_children()} entries")


def main():
    """Main function."""
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    try:
        document = timestamp_example(path)
        navigation_example(document)
        building_example()

        print(f"\n✅ All examples completed successfully!")
        return 0

    except BareXMLError as e:
        print(f"\n❌ Example failed: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
