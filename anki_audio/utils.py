"""Utility functions for file I/O, CSV helpers, and HTTP sessions."""

import csv
import zipfile
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Iterable, List, Optional, Sequence

import aiohttp
import structlog
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from .exceptions import InputError
from .models import OutputRow, WordEntry

log = structlog.get_logger()

# Anki's names for the separators it understands in a "#separator:" header
DELIMITERS = {
    "comma": (",", "Comma"),
    "semicolon": (";", "Semicolon"),
    "tab": ("\t", "Tab"),
}

HEADER_COLUMNS = ["Word", "Example", "Sound", "Translation"]


@asynccontextmanager
async def session_scope(session: Optional[aiohttp.ClientSession]) -> AsyncIterator[aiohttp.ClientSession]:
    """Yield ``session`` if given, otherwise a short-lived one."""
    if session is not None:
        yield session
        return
    async with aiohttp.ClientSession() as own_session:
        yield own_session


def _entry_from_cells(cells: Sequence[object]) -> Optional[WordEntry]:
    values = ["" if cell is None else str(cell).strip() for cell in cells[:2]]
    if len(values) < 2 or not values[0] or not values[1]:
        return None
    return WordEntry(word=values[0], gloss=values[1])


def _read_xlsx_rows(file_path: Path) -> Iterable[Sequence[object]]:
    workbook = load_workbook(file_path, read_only=True, data_only=True)
    try:
        if not workbook.worksheets:
            raise InputError(f"No sheets found in {file_path}")
        # Only the first sheet is used
        for row in workbook.worksheets[0].iter_rows(values_only=True):
            yield row
    finally:
        workbook.close()


def _read_delimited_rows(file_path: Path, delimiter: str) -> Iterable[Sequence[object]]:
    with open(file_path, "r", encoding="utf-8", newline="") as f:
        for row in csv.reader(f, delimiter=delimiter):
            if row and row[0].startswith("#"):
                continue
            yield row


def load_entries(file_path: Path, skip_rows: int = 0) -> List[WordEntry]:
    """Load (word, gloss) entries from a spreadsheet or delimited text file.

    ``.xlsx`` files are read from the first sheet; ``.csv`` is comma
    separated; ``.tsv`` and ``.txt`` are tab separated. Rows without two
    non-empty leading cells are ignored.
    """
    if not file_path.exists():
        raise InputError(f"Input file not found: {file_path}")

    suffix = file_path.suffix.lower()
    if suffix == ".xlsx":
        rows = _read_xlsx_rows(file_path)
    elif suffix == ".csv":
        rows = _read_delimited_rows(file_path, ",")
    elif suffix in (".tsv", ".txt"):
        rows = _read_delimited_rows(file_path, "\t")
    else:
        raise InputError(f"Unsupported input format: {file_path.suffix or file_path.name}")

    entries = []
    ignored = 0
    try:
        for index, row in enumerate(rows):
            if index < skip_rows:
                continue
            entry = _entry_from_cells(row)
            if entry is None:
                ignored += 1
                continue
            entries.append(entry)
    except (OSError, ValueError, InvalidFileException, zipfile.BadZipFile) as e:
        raise InputError(f"Failed to read {file_path}: {e}") from e

    log.info("Loaded entries from file", count=len(entries), ignored=ignored, file=str(file_path))
    return entries


class AnkiCsvWriter:
    """Appends output rows to an Anki-importable CSV file, one at a time."""

    def __init__(self, path: Path, delimiter: str = "comma"):
        if delimiter not in DELIMITERS:
            raise ValueError(f"Unknown delimiter {delimiter!r}")
        self.path = Path(path)
        self.delimiter = delimiter
        self.rows_written = 0
        self._file = None
        self._writer = None

    def __enter__(self) -> "AnkiCsvWriter":
        char, anki_name = DELIMITERS[self.delimiter]
        self._file = open(self.path, "w", newline="", encoding="utf-8")
        self._writer = csv.writer(self._file, delimiter=char)

        # Anki CSV header
        self._file.write(f"#separator:{anki_name}\n")
        self._file.write("#html:false\n")
        self._file.write(f"#columns:{char.join(HEADER_COLUMNS)}\n")
        return self

    def write_row(self, row: OutputRow):
        self._writer.writerow(row.as_list())
        self.rows_written += 1

    def __exit__(self, exc_type, exc, tb):
        self._file.close()
        log.info("Anki CSV written", file=str(self.path), row_count=self.rows_written)


def generate_copy_script(audio_dir: Path, script_path: Path):
    """Generate the script to copy audio clips to Anki collection media folder."""
    script_content = f'''#!/usr/bin/env bash
# Copy generated audio to Anki collection media folder
DEST="${{ANKI_COLLECTION_FILE_PATH:-$HOME/Anki/User 1/collection.media/}}"
rsync -av --include='*.mp3' --exclude='*' "{audio_dir}/" "$DEST"
echo "Audio copied to Anki collection media folder: $DEST"
'''

    with open(script_path, 'w') as f:
        f.write(script_content)

    # Make script executable
    script_path.chmod(0o755)
    log.info("Copy script generated", script=str(script_path))
