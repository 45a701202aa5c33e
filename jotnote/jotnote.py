#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""jotnote
License: MIT
About:
A terminal-based personal notes tool with local JSON storage.

usage: jotnote [-h] [-c <file>] for more help: jotnote <command> -h ...

Personal notes in the terminal.

commands:
  (for more help: jotnote <command> -h)
    config              edit configuration file
    delete (rm)         delete a note
    export              export all notes (pdf, json or yaml)
    list (ls)           list notes
    mode                set how note content is entered
    new (create)        create a new note
    search              search notes
    shell               interactive shell
    theme               set the theme color
    update (edit)       update a note
    version             show version info
    view                show a note

optional arguments:
  -h, --help            show this help message and exit
  -c <file>, --config <file>
                        config file

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.

"""
import argparse
import configparser
import json
import os
import shutil
import subprocess
import sys
import tempfile
from cmd import Cmd

from rich import box
from rich.console import Console
from rich.padding import Padding
from rich.style import Style
from rich.table import Table
from rich.text import Text
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from jotnote import APP_COPYRIGHT, APP_LICENSE, APP_NAME, APP_VERS
from jotnote.export import (
    DEFAULT_WATERMARK,
    ExportError,
    get_exporter)
from jotnote.storage import CorruptDataError, JSONBackend
from jotnote.store import NoteStore, ValidationError
from jotnote.theme import (
    DEFAULT_THEME,
    THEME_COLORS,
    ThemeError,
    theme_color,
    theme_style)

DEFAULT_CONFIG_FILE = f"$HOME/.config/{APP_NAME}/config"
DEFAULT_DATA_DIR = "data"
DEFAULT_DATA_FILE = "db.json"
DEFAULT_EXPORT_DIR = "."
EXPORT_FILES = {
    "pdf": "all_notes.pdf",
    "json": "notes_export.json",
    "yaml": "notes_export.yaml",
}
MODES = ["cli", "editor"]
DEFAULT_CONFIG = (
    "[main]\n"
    "# data directory, relative paths are resolved against the\n"
    "# current working directory\n"
    f"data_dir = {DEFAULT_DATA_DIR}\n"
    f"data_file = {DEFAULT_DATA_FILE}\n"
    f"export_dir = {DEFAULT_EXPORT_DIR}\n"
    "# how note content is entered: 'cli' or 'editor'.\n"
    "# when unset you will be asked each time.\n"
    "#mode =\n"
    "# standard editor options to use when editing notes\n"
    "#editor_options =\n"
    "\n"
    "[colors]\n"
    "# one of: red, green, yellow, blue, magenta, cyan, white\n"
    "#theme = cyan\n"
    "disable_colors = false\n"
    "disable_bold = false\n"
    "# set to 'true' if your terminal pager supports color\n"
    "# output and you would like color output when using\n"
    "# the '--page' ('-p') option\n"
    "color_pager = false\n"
    "\n"
    "[export]\n"
    f"watermark = {DEFAULT_WATERMARK}\n"
    "# letter or a4\n"
    "page_size = letter\n"
)


class Notes():
    """Performs note operations for the command line and the shell.

    Attributes:
        config_file (str):  application config file.
        dflt_config (str):  the default config if none is present.
        store (obj):        the NoteStore() holding the notes.

    """
    def __init__(
            self,
            config_file,
            dflt_config):
        """Initializes a Notes() object."""
        self.config_file = config_file
        self.config_dir = os.path.dirname(self.config_file)
        self.dflt_config = dflt_config
        self.interactive = False

        # default colors
        self.theme = None
        self.color_bold = True
        self.color_pager = False
        self.disable_colors = False

        # editor (required for editor mode)
        self.editor = os.environ.get("EDITOR")

        # defaults
        self.data_dir = os.path.abspath(DEFAULT_DATA_DIR)
        self.data_file = DEFAULT_DATA_FILE
        self.export_dir = DEFAULT_EXPORT_DIR
        self.mode = None
        self.editor_options = None
        self.watermark = DEFAULT_WATERMARK
        self.page_size = "letter"

        # initial style definitions, these are updated after the config
        # file is parsed for custom colors
        self.style_theme = None
        self.style_title = None
        self.style_id = None

        self._default_config()
        self._parse_config()
        self.data_path = os.path.join(self.data_dir, self.data_file)
        self.store = NoteStore(JSONBackend(self.data_path))
        self._verify_data_file()

    def _apply_colors(self):
        """Build styles for the current theme."""
        if self.disable_colors:
            self.style_theme = Style()
            self.style_title = Style(bold=self.color_bold)
            self.style_id = Style()
        else:
            theme = self.theme or DEFAULT_THEME
            self.style_theme = theme_style(theme)
            self.style_title = theme_style(theme, bold=self.color_bold)
            self.style_id = Style(color="bright_black")

    def _default_config(self):
        """Create a default configuration directory and file if they
        do not already exist.
        """
        if not os.path.exists(self.config_file):
            try:
                if self.config_dir:
                    os.makedirs(self.config_dir, exist_ok=True)
                with open(self.config_file, "w",
                          encoding="utf-8") as config_file:
                    config_file.write(self.dflt_config)
            except IOError:
                self._error_exit(
                    "Config file doesn't exist "
                    "and can't be created.")

    def _edit_with_editor(self, initial_content=""):
        """Open a temporary file in the editor and return what was
        written.

        Args:
            initial_content (str):  text to start the file with.

        Returns:
            content (str or None):  the stripped file content.

        """
        editor = self._get_editor()
        if not editor:
            self._handle_error(
                "No suitable editor found! Please install vim or nano, "
                "or set $EDITOR")
            return None
        handle, tmpfile = tempfile.mkstemp(
            prefix=f"{APP_NAME}-", suffix=".txt")
        try:
            with os.fdopen(handle, "w", encoding="utf-8") as out_file:
                out_file.write(initial_content)
            if self.editor_options:
                editor_cmd = f"{editor} {self.editor_options} {tmpfile}"
            else:
                editor_cmd = f"{editor} {tmpfile}"
            try:
                subprocess.run(
                    editor_cmd,
                    check=True,
                    shell=True)
            except subprocess.SubprocessError:
                self._handle_error(f"failure running editor ({editor})")
                return None
            with open(tmpfile, "r", encoding="utf-8") as source:
                return source.read().strip()
        finally:
            os.remove(tmpfile)

    @staticmethod
    def _error_exit(errormsg):
        """Print an error message and exit with a status of 1

        Args:
            errormsg (str): the error message to display.

        """
        print(f'ERROR: {errormsg}.')
        sys.exit(1)

    @staticmethod
    def _error_pass(errormsg):
        """Print an error message but don't exit.

        Args:
            errormsg (str): the error message to display.

        """
        print(f'ERROR: {errormsg}.')

    def _format_note(self, note):
        """Format a single note for list output.

        Args:
            note (dict):    the note to format.

        Returns:
            output (Text):  the formatted output.

        """
        idtxt = Text(f"({note['id']})")
        idtxt.stylize(self.style_id)
        contenttxt = Text(note['content'])
        contenttxt.stylize(self.style_theme)
        return Text.assemble("- ", idtxt, " ", contenttxt)

    def _get_editor(self):
        """Find an editor: $EDITOR first, then vim or nano.

        Returns:
            editor (str or None): the editor command.

        """
        if self.editor:
            return self.editor
        for candidate in ["vim", "nano"]:
            if shutil.which(candidate):
                return candidate
        if os.name == "nt":
            return "notepad"
        return None

    def _get_mode(self):
        """Return the configured interaction mode, asking the user when
        none is set.

        Returns:
            mode (str): 'cli' or 'editor'.

        """
        if self.mode in MODES:
            return self.mode
        print("How would you like to interact?")
        print("  [1] cli (type the note at the prompt)")
        print("  [2] editor (vim, nano, etc.)")
        choice = input("Choice [1]: ").strip()
        mode = "editor" if choice in ["2", "editor"] else "cli"
        save = input("Save this choice for future use? [N/y]: ").lower()
        if save in ['yes', 'y']:
            self.set_mode(mode)
        return mode

    def _handle_error(self, msg):
        """Reports an error message and conditionally handles error exit
        or notification.

        Args:
            msg (str):  the error message.

        """
        if self.interactive:
            self._error_pass(msg)
        else:
            self._error_exit(msg)

    def _message(self, msg):
        """Print a message in the theme color."""
        console = Console()
        console.print(Text(msg, style=self.style_theme))

    def _note_not_found(self, note_id):
        """Report an id that doesn't match any note."""
        self._handle_error(f"Note {note_id} not found")

    def _parse_config(self):
        """Read and parse the configuration file."""
        config = configparser.ConfigParser()
        if os.path.isfile(self.config_file):
            try:
                config.read(self.config_file, encoding="utf-8")
            except configparser.Error:
                self._handle_error("Error reading config file")
                return

            if "main" in config:
                if config["main"].get("data_dir"):
                    self.data_dir = os.path.abspath(os.path.expandvars(
                        os.path.expanduser(
                            config["main"].get("data_dir"))))
                self.data_file = config["main"].get(
                    "data_file", DEFAULT_DATA_FILE) or DEFAULT_DATA_FILE
                if config["main"].get("export_dir"):
                    self.export_dir = os.path.expandvars(
                        os.path.expanduser(
                            config["main"].get("export_dir")))
                mode = config["main"].get("mode")
                if mode:
                    mode = mode.lower()
                    if mode in MODES:
                        self.mode = mode
                    else:
                        self._error_pass(
                            f"invalid mode '{mode}' in config, ignoring")
                self.editor_options = config["main"].get("editor_options")

            if "colors" in config:
                theme = config["colors"].get("theme")
                if theme:
                    try:
                        theme_color(theme)
                    except ThemeError as err:
                        self._error_pass(f"{err}, using '{DEFAULT_THEME}'")
                    else:
                        self.theme = theme.lower()
                self.color_pager = config["colors"].getboolean(
                    "color_pager", False)
                self.disable_colors = config["colors"].getboolean(
                    "disable_colors", False)
                if config["colors"].getboolean("disable_bold", False):
                    self.color_bold = False

            if "export" in config:
                self.watermark = config["export"].get(
                    "watermark", DEFAULT_WATERMARK)
                self.page_size = config["export"].get(
                    "page_size", "letter").lower()

            self._apply_colors()
        else:
            self._handle_error("Config file not found")

    def _parse_id(self, value):
        """Convert a user-supplied id to a positive int.

        Args:
            value (str):    the id as typed.

        Returns:
            note_id (int or None): the id, None if it isn't valid.

        """
        try:
            note_id = int(value)
        except (TypeError, ValueError):
            note_id = None
        if note_id is None or note_id < 1:
            self._handle_error(f"'{value}' is not a valid note ID")
            return None
        return note_id

    def _print_note_list(self, notes, view, pager=False):
        """Print a formatted list of notes in id order.

        Args:
            notes (list):   the list of notes (dicts) to be printed.
            view (str):     the view name to display.
            pager (bool):   paginate the output.

        """
        notes_table = Table(
            title=f"Notes - {view}",
            title_style=self.style_title,
            title_justify="left",
            box=box.SIMPLE,
            show_header=False,
            show_lines=False,
            pad_edge=False,
            collapse_padding=False,
            min_width=40,
            padding=(0, 0, 0, 0))
        # single column
        notes_table.add_column("column1")
        for note in notes:
            notes_table.add_row(Padding(self._format_note(note), (0, 0, 0, 1)))
        if len(notes) == 0:
            notes_table.add_row(Text("None"))

        layout = Table.grid()
        layout.add_column("single")
        layout.add_row("")
        layout.add_row(notes_table)
        self._render(layout, pager)

    def _read_content(self, initial_content=""):
        """Get note content from the user, at the prompt or in the
        editor depending on the interaction mode.

        Args:
            initial_content (str):  existing content (editor mode).

        Returns:
            content (str or None):  the content entered.

        """
        if self._get_mode() == "editor":
            return self._edit_with_editor(initial_content)
        while True:
            content = input("Note content: ")
            if content.strip():
                return content
            self._error_pass("Note content cannot be empty!")

    def _render(self, renderable, pager=False):
        """Print a renderable, through the pager if requested."""
        console = Console()
        if pager:
            with console.pager(styles=self.color_pager):
                console.print(renderable)
        else:
            console.print(renderable)

    def _verify_data_file(self):
        """Create the backing file if needed and make sure it can be
        read.

        Returns:
            usable (bool): whether the backing file could be read.

        """
        try:
            self.store.count()
        except CorruptDataError as err:
            self._handle_error(
                f"{err}. Repair or delete the file to start over")
            return False
        except OSError as err:
            self._handle_error(
                f"{self.data_path} can't be read or created ({err})")
            return False
        return True

    def _write_config(self, section, key, value):
        """Store a single setting in the config file.

        Args:
            section (str):  config section.
            key (str):      setting name.
            value (str):    setting value.

        """
        config = configparser.ConfigParser()
        try:
            config.read(self.config_file, encoding="utf-8")
            if section not in config:
                config[section] = {}
            config[section][key] = value
            with open(self.config_file, "w",
                      encoding="utf-8") as config_file:
                config.write(config_file)
        except (configparser.Error, OSError):
            self._handle_error("failure writing config file")

    def delete(self, note_id, force=False):
        """Delete a note. Notes after it are renumbered.

        Args:
            note_id (str):  the id of the note to be deleted.
            force (bool):   don't ask for confirmation before deleting.

        """
        note_id = self._parse_id(note_id)
        if note_id is None:
            return
        if not self.store.get_by_id(note_id):
            self._note_not_found(note_id)
            return
        if force:
            confirm = "yes"
        else:
            confirm = input(f"Delete note {note_id}? [yes/no]: ").lower()
        if confirm in ['yes', 'y']:
            if self.store.delete_by_id(note_id):
                self._message(f"Deleted note: {note_id}")
            else:
                self._note_not_found(note_id)
        else:
            print("Cancelled.")

    def edit_config(self):
        """Edit the config file (using $EDITOR) and then reload config."""
        editor = self._get_editor()
        if editor:
            try:
                subprocess.run(
                    [editor, self.config_file], check=True)
            except (OSError, subprocess.SubprocessError):
                self._handle_error("failure editing config file")
            else:
                self.refresh()
        else:
            self._handle_error("$EDITOR is required and not set")

    def export(self, fmt="pdf", destination=None):
        """Export every note to a file.

        Args:
            fmt (str):          'pdf', 'json' or 'yaml'.
            destination (str):  output path (defaults to a file in
        export_dir).

        """
        fmt = (fmt or "pdf").lower()
        try:
            exporter = get_exporter(fmt)
        except ExportError as err:
            self._handle_error(str(err))
            return
        destination = os.path.abspath(
            destination or os.path.join(self.export_dir, EXPORT_FILES[fmt]))
        notes = self.store.list_all()
        if not notes:
            self._error_pass("No notes available to export")
        kwargs = {}
        if fmt == "pdf":
            kwargs = {"watermark": self.watermark,
                      "page_size": self.page_size}
        try:
            path = exporter(notes, destination, **kwargs)
        except (OSError, ExportError) as err:
            self._handle_error(f"failure exporting notes ({err})")
        else:
            self._message(
                f"Exported {len(notes)} note(s) to {fmt.upper()}: {path}")

    def list(self, pager=False):
        """Print every note.

        Args:
            pager (bool): paginate the output.

        """
        self._print_note_list(self.store.list_all(), 'all', pager=pager)

    def new(self, content=None):
        """Create a new note.

        Args:
            content (str):  the note content, asked for when not given.

        """
        if content is None:
            content = self._read_content()
            if content is None:
                return
        try:
            note = self.store.create(content)
        except ValidationError as err:
            self._handle_error(str(err))
        else:
            self._message(f"Added note: {note['id']}")

    def refresh(self):
        """Public method to reload the configuration. A data file that
        can't be used is reported and the current one is kept.
        """
        previous = (self.data_dir, self.data_file, self.data_path, self.store)
        self._parse_config()
        data_path = os.path.join(self.data_dir, self.data_file)
        if data_path != self.data_path:
            self.data_path = data_path
            self.store = NoteStore(JSONBackend(self.data_path))
            if not self._verify_data_file():
                (self.data_dir, self.data_file,
                 self.data_path, self.store) = previous

    def search(self, term, pager=False):
        """Print the notes containing a term.

        Args:
            term (str):     the case-sensitive text to search for.
            pager (bool):   whether to page output.

        """
        if not term or not term.strip():
            self._handle_error("Search term cannot be empty")
            return
        results = self.store.search(term)
        self._print_note_list(results, f"search '{term}'", pager=pager)

    def set_mode(self, mode=None):
        """Set and save the interaction mode.

        Args:
            mode (str): 'cli' or 'editor'.

        """
        if mode is None:
            mode = input(f"Mode ({'/'.join(MODES)}) [cli]: ") or "cli"
        mode = mode.lower()
        if mode not in MODES:
            self._handle_error(
                f"invalid mode '{mode}' (choose from: {', '.join(MODES)})")
            return
        self.mode = mode
        self._write_config("main", "mode", mode)
        self._message(f"Interaction mode set to: {mode}")

    def set_theme(self, color=None):
        """Set and save the theme color.

        Args:
            color (str): a theme key, chosen from a list when not given.

        """
        if color is None:
            colors = list(THEME_COLORS)
            print("Theme colors:")
            for index, name in enumerate(colors):
                print(f"  [{index+1}] {name}")
            choice = input("Choice [1]: ")
            try:
                choice = int(choice)
            except ValueError:
                choice = 1
            if 1 <= choice <= len(colors):
                color = colors[choice-1]
            else:
                color = colors[0]
        try:
            theme_color(color)
        except ThemeError as err:
            self._handle_error(str(err))
            return
        self.theme = color.lower()
        self._write_config("colors", "theme", self.theme)
        self._apply_colors()
        self._message(f"You selected the {self.theme} theme!")

    def update(self, note_id, content=None):
        """Replace the content of a note.

        Args:
            note_id (str):  the id of the note to update.
            content (str):  the new content, asked for when not given.

        """
        note_id = self._parse_id(note_id)
        if note_id is None:
            return
        note = self.store.get_by_id(note_id)
        if not note:
            self._note_not_found(note_id)
            return
        if content is None:
            content = self._read_content(note['content'])
            if content is None:
                return
        try:
            updated = self.store.update(note_id, content)
        except ValidationError as err:
            self._handle_error(str(err))
        else:
            if updated:
                self._message(f"Updated note: {note_id}")
            else:
                self._note_not_found(note_id)

    def view(self, note_id):
        """Print a single note as JSON.

        Args:
            note_id (str):  the id of the note to view.

        """
        note_id = self._parse_id(note_id)
        if note_id is None:
            return
        note = self.store.get_by_id(note_id)
        if not note:
            self._note_not_found(note_id)
        else:
            console = Console()
            console.print_json(json.dumps(note, ensure_ascii=False))


class FSHandler(FileSystemEventHandler):
    """Handler to watch for data file changes and refresh the shell.
    Attributes:
        shell (obj):    the calling shell object.
    """
    def __init__(self, shell):
        """Initializes an FSHandler() object."""
        self.shell = shell

    def on_any_event(self, event):
        """Refresh the shell prompt on data file changes.
        Args:
            event (obj):    file system event.
        """
        if event.event_type in [
                'created', 'modified', 'deleted', 'moved']:
            self.shell.do_refresh("silent")


class NotesShell(Cmd):
    """Provides methods for interactive shell use.

    Attributes:
        notes (obj):     an instance of Notes().

    """
    def __init__(
            self,
            notes,
            completekey='tab',
            stdin=None,
            stdout=None,
            watch=True):
        """Initializes a NotesShell() object."""
        super().__init__()
        self.notes = notes

        # start watchdog for data_dir changes
        # and refresh the prompt on changes
        self.observer = None
        self.watched_dir = None
        if watch:
            self.observer = Observer()
            self._watch()
            self.observer.daemon = True
            self.observer.start()

        # class overrides for Cmd
        if stdin is not None:
            self.stdin = stdin
        else:
            self.stdin = sys.stdin
        if stdout is not None:
            self.stdout = stdout
        else:
            self.stdout = sys.stdout
        self.cmdqueue = []
        self.completekey = completekey
        self.doc_header = (
            "Commands (for more info type: help):"
        )
        self.ruler = "―"

        self._set_prompt()

        self.nohelp = (
            "\nNo help for %s\n"
        )

    # class method overrides
    def default(self, args):
        """Handle command aliases and unknown commands.

        Args:
            args (str): the command arguments.

        """
        command, _, rest = args.partition(" ")
        if command == "quit":
            self.do_exit("")
        elif command == "ls":
            self.do_list(rest)
        elif command == "rm":
            self.do_delete(rest)
        elif command == "create":
            self.do_new(rest)
        elif command == "edit":
            self.do_update(rest)
        else:
            print("\nNo such command. See 'help'.\n")

    def emptyline(self):
        """Ignore empty line entry."""

    def onecmd(self, line):
        """Run a command, reporting storage failures instead of leaving
        the shell.

        Args:
            line (str): the command line.

        """
        try:
            return super().onecmd(line)
        except CorruptDataError as err:
            self.notes._error_pass(
                f"{err}. Repair or delete the file to start over")
        except OSError as err:
            self.notes._error_pass(f"storage failure ({err})")
        except KeyboardInterrupt:
            print("\nCancelled.")
        return False

    def postcmd(self, stop, line):
        """Update the prompt after every command."""
        self._set_prompt()
        return stop

    def _set_prompt(self):
        """Set the prompt string, including the note count."""
        count = "?"
        if self.notes.store.backend.exists():
            try:
                count = self.notes.store.count()
            except (OSError, CorruptDataError):
                pass
        if self.notes.color_bold:
            self.prompt = f"\033[1mnotes({count})\033[0m> "
        else:
            self.prompt = f"notes({count})> "

    def _watch(self):
        """Point the observer at the current data directory."""
        if self.observer is None or self.watched_dir == self.notes.data_dir:
            return
        self.observer.unschedule_all()
        self.observer.schedule(
                FSHandler(self),
                self.notes.data_dir,
                recursive=False)
        self.watched_dir = self.notes.data_dir

    @staticmethod
    def _pager_arg(args):
        """Split a trailing '|' (page output) from the arguments."""
        args = str(args).strip()
        if args.endswith('|'):
            return args[:-1].strip(), True
        return args, False

    @staticmethod
    def do_clear(args):
        """Clear the terminal.

        Args:
            args (str): the command arguments, ignored.

        """
        os.system("cls" if os.name == "nt" else "clear")

    def do_config(self, args):
        """Edit the config file and reload the configuration.

        Args:
            args (str): the command arguments, ignored.

        """
        self.notes.edit_config()
        self._watch()

    def do_delete(self, args):
        """Delete a note.

        Args:
            args (str):     the command arguments.

        """
        if len(args) > 0:
            commands = args.split()
            self.notes.delete(commands[0])
        else:
            self.help_delete()

    def do_exit(self, args):
        """Exit the notes shell.

        Args:
            args (str): the command arguments, ignored.

        """
        if self.observer:
            self.observer.stop()
        sys.exit(0)

    def do_export(self, args):
        """Export all notes.

        Args:
            args (str): the command arguments.

        """
        commands = args.split(maxsplit=1)
        fmt = commands[0] if commands else "pdf"
        destination = commands[1] if len(commands) > 1 else None
        self.notes.export(fmt, destination)

    def do_list(self, args):
        """Output a list of notes.

        Args:
            args (str): the command arguments.

        """
        _, page = self._pager_arg(args)
        self.notes.list(page)

    def do_mode(self, args):
        """Set the interaction mode.

        Args:
            args (str): the command arguments.

        """
        self.notes.set_mode(args.strip() or None)

    def do_new(self, args):
        """Create a note from the arguments or interactively.

        Args:
            args (str): the note content (optional).

        """
        try:
            self.notes.new(args if args.strip() else None)
        except KeyboardInterrupt:
            print("\nCancelled.")

    def do_refresh(self, args):
        """Reload the configuration and the note count.

        Args:
            args (str): the command arguments.

        """
        if args != 'silent':
            self.notes.refresh()
            self._watch()
            print("Data refreshed.")
        self._set_prompt()

    def do_search(self, args):
        """Search for notes containing a term.

        Args:
            args (str): the command arguments.

        """
        if len(args) > 0:
            term, page = self._pager_arg(args)
            self.notes.search(term, page)
        else:
            self.help_search()

    def do_theme(self, args):
        """Set the theme color.

        Args:
            args (str): the command arguments.

        """
        self.notes.set_theme(args.strip() or None)

    def do_update(self, args):
        """Update the content of a note.

        Args:
            args (str): the note id, optionally followed by new content.

        """
        if len(args) > 0:
            commands = args.split(maxsplit=1)
            content = commands[1] if len(commands) > 1 else None
            try:
                self.notes.update(commands[0], content)
            except KeyboardInterrupt:
                print("\nCancelled.")
        else:
            self.help_update()

    def do_view(self, args):
        """Show a single note.

        Args:
            args (str): the command arguments.

        """
        if len(args) > 0:
            self.notes.view(args.split()[0])
        else:
            self.help_view()

    @staticmethod
    def help_clear():
        """Output help for 'clear' command."""
        print(
            '\nclear:\n'
            '    Clear the terminal window.\n'
        )

    @staticmethod
    def help_config():
        """Output help for 'config' command."""
        print(
            '\nconfig:\n'
            '    Edit the config file with $EDITOR and then reload '
            'the configuration.\n'
        )

    @staticmethod
    def help_delete():
        """Output help for 'delete' command."""
        print(
            '\ndelete (rm) <id>:\n'
            '    Delete a note. Notes after it are renumbered.\n'
        )

    @staticmethod
    def help_exit():
        """Output help for 'exit' command."""
        print(
            '\nexit (quit):\n'
            '    Exit the notes shell.\n'
        )

    @staticmethod
    def help_export():
        """Output help for 'export' command."""
        print(
            '\nexport [pdf|json|yaml] [path]:\n'
            '    Export all notes. The default format is pdf.\n'
        )

    @staticmethod
    def help_list():
        """Output help for 'list' command."""
        print(
            '\nlist (ls) [|]:\n'
            '    List all notes. Add \'|\' as an argument to page the '
            'output.\n'
        )

    @staticmethod
    def help_mode():
        """Output help for 'mode' command."""
        print(
            '\nmode [cli|editor]:\n'
            '    Set how note content is entered and save the choice.\n'
        )

    @staticmethod
    def help_new():
        """Output help for 'new' command."""
        print(
            '\nnew (create) [content]:\n'
            '    Create a new note. Without content you are asked for '
            'it at the prompt or in the editor.\n'
        )

    @staticmethod
    def help_refresh():
        """Output help for 'refresh' command."""
        print(
            '\nrefresh:\n'
            '    Reload the configuration and watch the data directory '
            'it names. The data file is read again by every command.\n'
        )

    @staticmethod
    def help_search():
        """Output help for 'search' command."""
        print(
            '\nsearch <term> [|]:\n'
            '    Search for notes containing a term (case-sensitive). '
            'Add \'|\' as a second argument to page the output.\n'
        )

    @staticmethod
    def help_theme():
        """Output help for 'theme' command."""
        print(
            '\ntheme [color]:\n'
            f'    Set the theme color ({", ".join(THEME_COLORS)}).\n'
        )

    @staticmethod
    def help_update():
        """Output help for 'update' command."""
        print(
            '\nupdate (edit) <id> [content]:\n'
            '    Replace the content of a note.\n'
        )

    @staticmethod
    def help_view():
        """Output help for 'view' command."""
        print(
            '\nview <id>:\n'
            '    Show a note.\n'
        )


def parse_args(argv=None):
    """Parse command line arguments.

    Args:
        argv (list):    arguments to parse (defaults to sys.argv).

    Returns:
        args (dict):    the command line arguments provided.

    """
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description='Personal notes in the terminal.')
    parser._positionals.title = 'commands'
    parser.set_defaults(command=None)
    subparsers = parser.add_subparsers(
        metavar=f'(for more help: {APP_NAME} <command> -h)')
    pager = argparse.ArgumentParser(add_help=False)
    pager.add_argument(
        '-p',
        '--page',
        dest='page',
        action='store_true',
        help="page output")
    config = subparsers.add_parser(
        'config',
        help='edit configuration file')
    config.set_defaults(command='config')
    delete = subparsers.add_parser(
        'delete',
        aliases=['rm'],
        help='delete a note')
    delete.add_argument(
        'id',
        help='note id')
    delete.add_argument(
        '-f',
        '--force',
        dest='force',
        action='store_true',
        help="delete without confirmation")
    delete.set_defaults(command='delete')
    export = subparsers.add_parser(
        'export',
        help='export all notes (pdf, json or yaml)')
    export.add_argument(
        'format',
        nargs='?',
        default='pdf',
        choices=list(EXPORT_FILES),
        help='export format (default: pdf)')
    export.add_argument(
        '-o',
        '--output',
        metavar='<file>',
        dest='output',
        help='output file')
    export.set_defaults(command='export')
    listcmd = subparsers.add_parser(
        'list',
        parents=[pager],
        aliases=['ls'],
        help='list notes')
    listcmd.set_defaults(command='list')
    mode = subparsers.add_parser(
        'mode',
        help='set how note content is entered')
    mode.add_argument(
        'mode',
        nargs='?',
        choices=MODES,
        help='interaction mode')
    mode.set_defaults(command='mode')
    new = subparsers.add_parser(
        'new',
        aliases=['create'],
        help='create a new note')
    new.add_argument(
        'content',
        nargs='?',
        help='note content (asked for when omitted)')
    new.set_defaults(command='new')
    search = subparsers.add_parser(
        'search',
        parents=[pager],
        help='search notes')
    search.add_argument(
        'term',
        help='search term')
    search.set_defaults(command='search')
    shell = subparsers.add_parser(
        'shell',
        help='interactive shell')
    shell.set_defaults(command='shell')
    theme = subparsers.add_parser(
        'theme',
        help='set the theme color')
    theme.add_argument(
        'color',
        nargs='?',
        help=f"one of: {', '.join(THEME_COLORS)}")
    theme.set_defaults(command='theme')
    update = subparsers.add_parser(
        'update',
        aliases=['edit'],
        help='update a note')
    update.add_argument(
        'id',
        help='note id')
    update.add_argument(
        'content',
        nargs='?',
        help='new content (asked for when omitted)')
    update.set_defaults(command='update')
    version = subparsers.add_parser(
        'version',
        help='show version info')
    version.set_defaults(command='version')
    view = subparsers.add_parser(
        'view',
        help='show a note')
    view.add_argument(
        'id',
        help='note id')
    view.set_defaults(command='view')
    parser.add_argument(
        '-c',
        '--config',
        dest='config',
        metavar='<file>',
        help='config file')
    args = parser.parse_args(argv)
    return parser, args


def main(argv=None):
    """Entry point. Parses arguments, creates Notes() object, calls
    requested method and parameters.
    """
    if os.environ.get("XDG_CONFIG_HOME"):
        config_file = os.path.join(
            os.path.expandvars(os.path.expanduser(
                os.environ["XDG_CONFIG_HOME"])), APP_NAME, "config")
    else:
        config_file = os.path.expandvars(
            os.path.expanduser(DEFAULT_CONFIG_FILE))

    parser, args = parse_args(argv)

    if args.config:
        config_file = os.path.expandvars(
            os.path.expanduser(args.config))

    if not args.command:
        parser.print_help(sys.stderr)
        sys.exit(1)
    elif args.command == "version":
        print(f"{APP_NAME} {APP_VERS}")
        print(APP_COPYRIGHT)
        print(APP_LICENSE)
        return

    notes = Notes(
        config_file,
        DEFAULT_CONFIG)

    try:
        if args.command == "config":
            notes.edit_config()
        elif args.command == "delete":
            notes.delete(args.id, args.force)
        elif args.command == "export":
            notes.export(args.format, args.output)
        elif args.command == "list":
            notes.list(pager=args.page)
        elif args.command == "mode":
            notes.set_mode(args.mode)
        elif args.command == "new":
            notes.new(args.content)
        elif args.command == "search":
            notes.search(args.term, args.page)
        elif args.command == "shell":
            notes.interactive = True
            if not notes.theme:
                notes.set_theme()
            shell = NotesShell(notes)
            print(
                f"{APP_NAME} {APP_VERS}\n\n"
                f"Enter command (or 'help')\n"
            )
            shell.cmdloop()
        elif args.command == "theme":
            notes.set_theme(args.color)
        elif args.command == "update":
            notes.update(args.id, args.content)
        elif args.command == "view":
            notes.view(args.id)
        else:
            sys.exit(1)
    except CorruptDataError as err:
        notes._error_exit(f"{err}. Repair or delete the file to start over")
    except OSError as err:
        notes._error_exit(f"storage failure ({err})")


def run():
    """Console script entry point."""
    try:
        main()
    except KeyboardInterrupt:
        print("\nInterrupted.")
        sys.exit(1)


# entry point
if __name__ == "__main__":
    run()
