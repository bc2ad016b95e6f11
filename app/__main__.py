import logging
import sys

from .pipeline import run_pipeline
from .rules import INPUT_PATH, OUTPUT_PATH


def main() -> int:
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    summary = run_pipeline(INPUT_PATH, OUTPUT_PATH)
    return 0 if summary.ok else 1


if __name__ == "__main__":
    sys.exit(main())
