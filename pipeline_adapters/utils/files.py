"""
File helpers used when editing build files in place.
"""

from pathlib import Path

from pipeline_adapters.constants import Messages


def is_null_or_whitespace(value: str | None) -> bool:
    return value is None or not value.strip()


def append_text_to_file(file_path: str | Path, text: str) -> None:
    """
    Append text to an existing file.

    Raises:
        FileNotFoundError: If the file does not exist (it is never created)
        OSError: If the file cannot be written
    """
    path = Path(file_path)
    if not path.is_file():
        raise FileNotFoundError(Messages.FILE_NOT_FOUND.format(path))
    with open(path, "a", encoding="utf-8") as f:
        f.write(text)
