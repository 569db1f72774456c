"""
spanjson demonstration script.
"""

import spanjson


def main():
    print("spanjson - Span-Tracking JSON Reader Demo")
    print("=" * 40)

    source = '{"name": "spanjson", "tags": ["json", "parser"], "stable": false}'
    print(f"\nInput:  {source}")

    print("\n1. Tokens")
    for token in spanjson.tokenize(source):
        print(f"   {token!r}")

    print("\n2. Value tree")
    value = spanjson.parse(source)
    for key in value:
        print(f"   {key}: {value[key]}")

    print("\n3. Plain Python")
    print(f"   {spanjson.loads(source)}")

    examples = [
        ('{"a": 1, "a": 2}', "Duplicate keys (last value wins)"),
        ('[1, 2,]', "Trailing comma"),
        ('{"a": }', "Missing value"),
        ('{"a": 1} // note', "Unrecognized input"),
    ]

    for i, (json_str, description) in enumerate(examples, 4):
        print(f"\n{i}. {description}")
        print(f"Input:  {json_str}")
        try:
            print(f"Output: {spanjson.loads(json_str)}")
        except spanjson.ParseError as e:
            print(f"Error:  {e}")


if __name__ == "__main__":
    main()
