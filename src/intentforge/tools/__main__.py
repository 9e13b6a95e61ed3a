"""CLI entry point for intentforge.tools.

Usage:
    python -m intentforge.tools \\
        --definitions intents.json \\
        --output build/training.json
"""

from intentforge.tools.compile_intents import main

if __name__ == "__main__":
    main()
