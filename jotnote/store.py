# -*- coding: utf-8 -*-
"""jotnote.store
CRUD operations over the notes collection.

License: MIT

Note ids are positional: they always run 1..N in collection order, and
deleting a note renumbers every note after it.
"""


class ValidationError(ValueError):
    """Raised when note content is rejected."""


class NoteStore():
    """Performs note operations against a persistence backend. Every
    operation reloads the collection from the backend first, so changes
    made to the backing file outside the program are always seen.

    Attributes:
        backend (obj): an object providing load() and save(notes).

    """
    def __init__(self, backend):
        """Initializes a NoteStore() object."""
        self.backend = backend

    @staticmethod
    def _check_content(content):
        """Reject content that is not text, is empty or whitespace-only,
        or can't be written to the backing file as UTF-8.

        Args:
            content (str): the proposed note content.

        """
        if not isinstance(content, str) or not content.strip():
            raise ValidationError("Note content cannot be empty")
        try:
            content.encode("utf-8")
        except UnicodeEncodeError:
            raise ValidationError(
                "Note content contains characters that can't be "
                "saved as UTF-8") from None

    @staticmethod
    def _index_of(notes, note_id):
        """Find the position of a note in the collection.

        Args:
            notes (list):   the notes collection.
            note_id (int):  the id to look for.

        Returns:
            index (int or None): the list index of the note.

        """
        for index, note in enumerate(notes):
            if note['id'] == note_id:
                return index
        return None

    def count(self):
        """Return the number of notes."""
        return len(self.backend.load())

    def create(self, content):
        """Add a note to the end of the collection.

        Args:
            content (str):  the note content.

        Returns:
            note (dict):    the new note.

        """
        self._check_content(content)
        notes = self.backend.load()
        note = {"id": len(notes) + 1, "content": content}
        notes.append(note)
        self.backend.save(notes)
        return note

    def delete_by_id(self, note_id):
        """Delete a note and renumber the remaining notes so their ids
        match their 1-based position.

        Args:
            note_id (int):  the id of the note to delete.

        Returns:
            deleted (bool): False if no note has that id.

        """
        notes = self.backend.load()
        index = self._index_of(notes, note_id)
        if index is None:
            return False
        del notes[index]
        for position, note in enumerate(notes, start=1):
            note['id'] = position
        self.backend.save(notes)
        return True

    def get_by_id(self, note_id):
        """Look up a single note.

        Args:
            note_id (int):  the id of the note.

        Returns:
            note (dict or None): the matching note.

        """
        notes = self.backend.load()
        index = self._index_of(notes, note_id)
        if index is None:
            return None
        return notes[index]

    def list_all(self):
        """Return every note in id order."""
        return self.backend.load()

    def search(self, term):
        """Find notes whose content contains a term (case-sensitive).

        Args:
            term (str):     the substring to search for.

        Returns:
            notes (list):   the matching notes in id order.

        """
        return [note for note in self.backend.load()
                if term in note['content']]

    def update(self, note_id, content):
        """Replace the content of a note.

        Args:
            note_id (int):  the id of the note to update.
            content (str):  the new content.

        Returns:
            updated (bool): False if no note has that id.

        """
        self._check_content(content)
        notes = self.backend.load()
        index = self._index_of(notes, note_id)
        if index is None:
            return False
        notes[index]['content'] = content
        self.backend.save(notes)
        return True
