# -*- coding: utf-8 -*-
"""jotnote.storage
Persistence for the notes collection.

License: MIT

The backing file is a single JSON document:

    {
      "notes": [
        {
          "id": 1,
          "content": "buy milk"
        }
      ]
    }

The whole document is rewritten on every save. Writes are not atomic, the
last write wins.
"""
import json
import os

DEFAULT_DATA = {"notes": []}


class CorruptDataError(ValueError):
    """The backing file exists but can't be parsed as a notes document."""

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"{path} is corrupt ({reason})")


class JSONBackend():
    """Reads and writes the notes collection from a JSON file.

    Attributes:
        path (str): the backing file.

    """
    def __init__(self, path):
        """Initializes a JSONBackend() object."""
        self.path = path
        self.data_dir = os.path.dirname(os.path.abspath(self.path))

    @staticmethod
    def _dump(data):
        """Serialize a document the same way on every write.

        Args:
            data (dict): the document to serialize.

        Returns:
            text (str): the serialized document.

        """
        return json.dumps(data, indent=2, ensure_ascii=False)

    def _ensure_file(self):
        """Create the data directory and an empty backing file if they
        do not already exist.
        """
        os.makedirs(self.data_dir, exist_ok=True)
        if not os.path.exists(self.path):
            self._write(self._dump(DEFAULT_DATA))

    def _write(self, text):
        """Replace the backing file with a serialized document. The text
        is encoded before the file is opened, so a document that can't be
        encoded leaves the existing file untouched.

        Args:
            text (str): the serialized document.

        """
        data = text.encode("utf-8")
        with open(self.path, "wb") as out_file:
            out_file.write(data)

    def _validate(self, data):
        """Check the shape of a parsed document.

        Args:
            data (obj): the parsed JSON document.

        Returns:
            notes (list): the notes collection.

        """
        if not isinstance(data, dict):
            raise CorruptDataError(self.path, "top level is not an object")
        notes = data.get("notes")
        if not isinstance(notes, list):
            raise CorruptDataError(self.path, "missing 'notes' list")
        for index, note in enumerate(notes):
            if not isinstance(note, dict):
                raise CorruptDataError(
                    self.path, f"entry {index} is not an object")
            note_id = note.get("id")
            # bool is an int subclass
            if not isinstance(note_id, int) or isinstance(note_id, bool):
                raise CorruptDataError(
                    self.path, f"entry {index} has no integer id")
            if not isinstance(note.get("content"), str):
                raise CorruptDataError(
                    self.path, f"entry {index} has no text content")
        return notes

    def exists(self):
        """Whether the backing file is present."""
        return os.path.isfile(self.path)

    def load(self):
        """Read the notes collection from disk, creating an empty backing
        file first when none exists.

        Returns:
            notes (list): the notes (dicts) in id order.

        """
        self._ensure_file()
        with open(self.path, "r", encoding="utf-8") as source:
            try:
                data = json.load(source)
            except json.JSONDecodeError as err:
                raise CorruptDataError(self.path, err.msg) from err
        return self._validate(data)

    def save(self, notes):
        """Overwrite the backing file with the full collection.

        Args:
            notes (list): the notes (dicts) to write.

        """
        os.makedirs(self.data_dir, exist_ok=True)
        self._write(self._dump({"notes": notes}))
