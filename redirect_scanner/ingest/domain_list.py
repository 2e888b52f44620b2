"""
Domain list loader.

One domain or URL fragment per line; surrounding whitespace is trimmed and
blank lines are skipped. Order and duplicates are preserved, each line is
probed once.
"""

from pathlib import Path

from redirect_scanner.errors import InputReadError


def parse_domains(lines) -> list[str]:
    """Trim lines and drop the blank ones."""
    domains = []
    for line in lines:
        text = line.strip()
        if text:
            domains.append(text)
    return domains


def read_domains(path: str | Path) -> list[str]:
    """
    Read the domain list at path.

    Raises:
        InputReadError: If the file cannot be opened or decoded
    """
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as f:
            return parse_domains(f)
    except (OSError, UnicodeDecodeError) as e:
        raise InputReadError(f"cannot read {path}: {e}") from e
