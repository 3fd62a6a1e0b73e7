import sys, os
import logging

# Adjust python path to include src
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from covcollection import CoverageColor, Position, coverage, fragment, format_diagnostic, validate


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    # Line coverage from one test run
    run1 = coverage(
        fragment(0, 39, CoverageColor.GREEN, "test_parse", start=Position(1, 0), end=Position(2, 19)),
        fragment(40, 79, CoverageColor.RED, start=Position(3, 0), end=Position(4, 19)),
    )
    # A second run covers a different part of the same file
    run2 = coverage(
        fragment(30, 59, CoverageColor.GREEN, "test_render", start=Position(2, 10), end=Position(3, 19)),
        fragment(60, 64, CoverageColor.YELLOW, "branch not taken", start=Position(4, 0), end=Position(4, 4)),
    )

    merged = coverage().merge(run1).merge(run2)
    print("--- Before normalize ---")
    for d in validate(merged):
        print(format_diagnostic(d))

    merged.normalize()

    print("\n--- After normalize ---")
    for f in merged.dump():
        print(f.to_dict())
    print(merged.stat)

    merged.freeze()
    print("max column:", merged.max_column)
    merged.unfreeze()


if __name__ == "__main__":
    main()
