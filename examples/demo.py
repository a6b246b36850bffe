"""
jsonsalvage demonstration script.
"""

import jsonsalvage


def main():
    print("jsonsalvage - JSON Recovery Demo")
    print("=" * 40)

    examples = [
        # LLM chatter around the payload
        ('Sure! Here it is: {"status": "ok"} Anything else?', "Surrounding prose"),
        # Markdown fences
        ('```json\n{"items": [1, 2, 3]}\n```', "Markdown code fence"),
        # Raw newline inside a value
        ('{"summary": "line one\nline two"}', "Line break inside a string"),
        # Trailing commas and single quotes
        ("{'items': [1, 2, 3,], 'active': true,}", "Single quotes and trailing commas"),
        # JavaScript constants
        ('{"score": NaN, "owner": undefined}', "NaN and undefined"),
        # Nothing to recover
        ("I'm sorry, I can't help with that.", "No JSON at all"),
    ]

    for i, (raw, description) in enumerate(examples, 1):
        print(f"\n{i}. {description}")
        print(f"Input:  {raw!r}")

        result = jsonsalvage.try_repair(raw)
        if result.success:
            print(f"Output: {result.repaired_text}  (stage: {result.stage})")
        else:
            print(f"Error:  {result.diagnostic}")

    # The built-in battery instead of json_repair
    heuristic = jsonsalvage.RepairConfig.from_features(
        {"strip_markdown_fences", "string_aware_boundaries", "heuristic_repair"}
    )
    raw = "{name: John, tags: ['x', 'y'],}"
    print(f"\n{len(examples) + 1}. Heuristic backend")
    print(f"Input:  {raw!r}")
    try:
        print(f"Output: {jsonsalvage.repair_to_object(raw, heuristic)}")
    except jsonsalvage.RepairError as e:
        print(f"Error:  {e}")


if __name__ == "__main__":
    main()
