from pathlib import Path


def parse_words(text: str) -> list[str]:
    return [w.strip() for w in text.splitlines() if w.strip()]


def load_words(path: Path) -> list[str]:
    """Keywords for the trends game, one per line. Blank lines are skipped."""
    return parse_words(Path(path).read_text(encoding="utf-8"))
