"""CLI utility functions for user interaction."""
import sys


def read_question(prompt: str = "🤖 Ask a question: ") -> str:
    """Read a question from stdin. EOF or an exit word raises KeyboardInterrupt."""
    print(prompt, end="", flush=True)
    line = sys.stdin.readline()
    if not line:  # EOF
        raise KeyboardInterrupt

    question = line.strip()
    if question.lower() in {"bye", "quit", "exit", "q"}:
        raise KeyboardInterrupt
    return question


def print_result(prediction) -> None:
    """Print the answer fields and how the run ended."""
    for name, value in prediction.items():
        print(f"✅ **{name.capitalize()}:** {value}")

    meta = prediction.metadata
    print(
        f"\n📋 confidence {meta.get('confidence', 0.0):.2f} · "
        f"{meta.get('backtracks', 0)} backtrack(s) · "
        f"stopped: {meta.get('termination', 'unknown')}"
    )
